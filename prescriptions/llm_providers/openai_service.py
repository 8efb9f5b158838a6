"""
OpenAI GPT implementation
"""
import os

from django.conf import settings
from openai import OpenAI

from .base import BaseLLMService


class OpenAIService(BaseLLMService):
    """OpenAI API (gpt-4o-mini etc.)"""

    provider_id = "openai"

    def __init__(self, *, api_key: str | None = None, model: str | None = None):
        if api_key is None:
            api_key = os.getenv("OPENAI_API_KEY") or getattr(settings, "OPENAI_API_KEY", "")
        self._api_key = api_key
        self._model = model or getattr(settings, "OPENAI_MODEL", "gpt-4o-mini")

    def generate(
        self,
        system_message: str,
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        if not self._api_key:
            raise ValueError("OPENAI_API_KEY not found in environment or settings")

        client = OpenAI(api_key=self._api_key)
        messages = [{"role": "user", "content": user_message}]
        if system_message:
            messages.insert(0, {"role": "system", "content": system_message})
        response = client.chat.completions.create(
            model=self._model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""
