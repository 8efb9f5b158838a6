"""
Abstract LLM service.
Callers depend on this interface only.
"""
from abc import ABC, abstractmethod


class BaseLLMService(ABC):
    """
    Parent of every LLM service.
    A new vendor only needs a subclass implementing generate.
    """

    provider_id: str = "unknown"  # overridden: "gemini", "openai", "claude"

    @abstractmethod
    def generate(
        self,
        system_message: str,
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """
        Call the model and return its text.
        :param system_message: role instructions
        :param user_message: the actual prompt
        :param temperature: randomness 0-1
        :param max_tokens: output token cap
        :return: generated text
        """
        pass
