"""
Prometheus middleware: request latency and status classes
"""
import time

from rx_assist.exceptions import BaseAppException

from .metrics import (
    API_PRESCRIPTION_DURATION,
    API_SUGGESTIONS_DURATION,
    HTTP_4XX,
    HTTP_5XX,
)

SUGGESTION_PATHS = ("/api/get-ai-suggestions", "/api/suggestions/")


class MetricsMiddleware:
    """Record HTTP request metrics"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as exc:
            self._record(request, self._status_from_exception(exc), time.perf_counter() - start)
            raise
        self._record(request, response.status_code, time.perf_counter() - start)
        return response

    def _status_from_exception(self, exc):
        if isinstance(exc, BaseAppException):
            return exc.http_status
        return 500

    def _record(self, request, status, duration):
        path = getattr(request, "path", "") or ""
        if status >= 500:
            HTTP_5XX.inc()
        elif status >= 400:
            HTTP_4XX.labels(code=str(status)).inc()

        if request.method != "POST":
            return
        if path in SUGGESTION_PATHS:
            API_SUGGESTIONS_DURATION.observe(duration)
        elif path == "/api/prescription/":
            API_PRESCRIPTION_DURATION.observe(duration)
