"""
Single entry point for asking the model for suggestions.
One attempt only: a failure is reported, never retried.
"""
import time

from loguru import logger

from .llm_providers import get_llm_service
from .statsd_metrics import (
    llm_api_error,
    llm_api_latency_seconds,
    llm_provider_usage,
)

SYSTEM_PROMPT = (
    "You are a clinical assistant helping a physician draft a prescription. "
    "Follow the requested output format exactly."
)


def generate_suggestions(prompt: str, *, llm_provider: str | None = None) -> str:
    """
    Send the prompt to the configured model and return its raw text
    llm_provider: optional override of settings.LLM_PROVIDER
    """
    service = get_llm_service(provider=llm_provider)
    provider_id = getattr(service, "provider_id", "unknown")
    start = time.perf_counter()
    try:
        result = service.generate(
            system_message=SYSTEM_PROMPT,
            user_message=prompt,
            temperature=0.7,
            max_tokens=2000,
        )
    except Exception:
        llm_api_error()
        raise
    elapsed = time.perf_counter() - start
    llm_api_latency_seconds(elapsed)
    llm_provider_usage(provider_id)
    logger.info("{} answered in {:.2f}s ({} chars)", provider_id, elapsed, len(result))
    return result
