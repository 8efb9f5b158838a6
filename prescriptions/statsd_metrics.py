"""
LLM call metrics sent over StatsD UDP (aggregated by statsd_exporter),
so every web worker process reports into the same series
"""
import os

import statsd

_STATSD_HOST = os.getenv("STATSD_HOST", "localhost")
_STATSD_PORT = int(os.getenv("STATSD_PORT", "8125"))
_PREFIX = "prescriptions"

_client = None


def _get_client():
    global _client
    if _client is None:
        _client = statsd.StatsClient(_STATSD_HOST, _STATSD_PORT, prefix=_PREFIX)
    return _client


def llm_provider_usage(provider: str):
    # provider travels in the metric name; statsd_exporter maps it to a label
    _get_client().incr(f"llm_provider_usage.{provider}")


def llm_api_latency_seconds(seconds: float):
    _get_client().timing("llm_api_latency", int(seconds * 1000))


def llm_api_error():
    _get_client().incr("llm_api_error")
