"""
Google Gemini implementation (default provider)
"""
import os

import google.generativeai as genai
from django.conf import settings

from .base import BaseLLMService


class GeminiService(BaseLLMService):
    """Google Gemini API (gemini-1.5-flash etc.)"""

    provider_id = "gemini"

    def __init__(self, *, api_key: str | None = None, model: str | None = None):
        if api_key is None:
            api_key = os.getenv("GEMINI_API_KEY") or getattr(settings, "GEMINI_API_KEY", "")
        self._api_key = api_key
        self._model = model or getattr(settings, "GEMINI_MODEL", "gemini-1.5-flash")

    def generate(
        self,
        system_message: str,
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        if not self._api_key:
            raise ValueError("GEMINI_API_KEY not found in environment or settings")

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(
            model_name=self._model,
            system_instruction=system_message or None,
        )
        response = model.generate_content(
            user_message,
            generation_config={"temperature": temperature, "max_output_tokens": max_tokens},
        )
        # blocked prompts come back without text
        if response.prompt_feedback and response.prompt_feedback.block_reason:
            raise ValueError(f"Gemini blocked the prompt: {response.prompt_feedback.block_reason}")
        return response.text or ""
