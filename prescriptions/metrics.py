"""
Prometheus metrics of the web process
"""
from prometheus_client import Counter, Histogram

# business
SUGGESTIONS_REQUESTED = Counter(
    "ai_suggestions_requested_total",
    "Suggestion requests sent to the LLM",
    ["endpoint"],
)
SUGGESTIONS_FAILED = Counter(
    "ai_suggestions_failed_total",
    "Suggestion requests the LLM failed to answer",
)
SUGGESTIONS_PARSED = Counter(
    "ai_suggestions_parsed_total",
    "Suggestions parsed from LLM answers",
    ["category"],
)
PRESCRIPTION_SUBMITTED = Counter(
    "prescription_submitted_total",
    "Prescriptions submitted",
)

# latency (Histogram exposes _count, _sum, _bucket)
API_SUGGESTIONS_DURATION = Histogram(
    "api_ai_suggestions_duration_seconds",
    "POST /api/get-ai-suggestions and /api/suggestions/ response time",
    buckets=(0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0),
)
API_PRESCRIPTION_DURATION = Histogram(
    "api_prescription_duration_seconds",
    "POST /api/prescription/ response time",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# errors
HTTP_5XX = Counter("http_5xx_total", "5xx responses")
HTTP_4XX = Counter("http_4xx_total", "4xx responses", ["code"])
VALIDATION_ERROR = Counter("validation_error_total", "Rejected request payloads")
BLOCK_ERROR = Counter("block_error_total", "Blocked requests", ["code"])
UPSTREAM_ERROR = Counter("upstream_error_total", "LLM failures surfaced to the client")
