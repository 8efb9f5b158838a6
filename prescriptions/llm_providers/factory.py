"""
Factory: pick the LLM service from settings
"""
from typing import Dict, Type

from django.conf import settings

from .base import BaseLLMService
from .gemini_service import GeminiService
from .openai_service import OpenAIService
from .claude_service import ClaudeService
from .mock_service import MockLLMService

# provider id -> service class
_SERVICE_REGISTRY: Dict[str, Type[BaseLLMService]] = {
    "gemini": GeminiService,
    "openai": OpenAIService,
    "claude": ClaudeService,
    "mock": MockLLMService,
}


def get_llm_service(provider: str | None = None) -> BaseLLMService:
    """
    Return the service for `provider`, or for settings.LLM_PROVIDER (default "gemini")
    """
    if provider is None:
        provider = getattr(settings, "LLM_PROVIDER", "gemini")
    provider = str(provider).lower()

    # USE_MOCK_LLM=1 forces the mock whatever the provider
    if getattr(settings, "USE_MOCK_LLM", True):
        return MockLLMService()

    service_cls = _SERVICE_REGISTRY.get(provider)
    if service_cls is None:
        raise ValueError(f"Unknown LLM provider: {provider}. Known: {list(_SERVICE_REGISTRY.keys())}")
    return service_cls()


def register_llm_service(provider: str, service_cls: Type[BaseLLMService]) -> None:
    """Register another service at runtime"""
    _SERVICE_REGISTRY[provider.lower()] = service_cls
