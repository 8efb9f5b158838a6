"""
Unified exception handling: BaseAppException -> JSON response
"""
from django.http import JsonResponse
from loguru import logger

from .exceptions import BaseAppException


def app_exception_handler(request, exception):
    """
    Turn BaseAppException and subclasses into the unified JSON body.
    Anything else is left to Django (returns None).
    """
    if not isinstance(exception, BaseAppException):
        return None

    _record_exception_metric(exception)
    logger.warning(
        "{} {} -> {} {}: {}",
        request.method,
        request.path,
        exception.http_status,
        exception.code,
        exception.message,
    )
    return JsonResponse(
        exception.to_dict(),
        status=exception.http_status,
        json_dumps_params={"ensure_ascii": False},
    )


def _record_exception_metric(exception):
    """Count the error by type (imported lazily to avoid a cycle with the app)"""
    from prescriptions.metrics import BLOCK_ERROR, UPSTREAM_ERROR, VALIDATION_ERROR
    from .exceptions import BlockError, UpstreamError, ValidationError

    if isinstance(exception, ValidationError):
        VALIDATION_ERROR.inc()
    elif isinstance(exception, BlockError):
        BLOCK_ERROR.labels(code=exception.code).inc()
    elif isinstance(exception, UpstreamError):
        UPSTREAM_ERROR.inc()
