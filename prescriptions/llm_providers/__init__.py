"""
LLM service layer: business code never depends on a concrete model vendor.
Gemini, OpenAI and Claude are interchangeable through settings.
"""
from .base import BaseLLMService
from .gemini_service import GeminiService
from .openai_service import OpenAIService
from .claude_service import ClaudeService
from .mock_service import MockLLMService
from .factory import get_llm_service

__all__ = [
    "BaseLLMService",
    "GeminiService",
    "OpenAIService",
    "ClaudeService",
    "MockLLMService",
    "get_llm_service",
]
