"""
Unified errors: BaseAppException and subclasses.
Every error carries type, code, message, detail, http_status.
"""


class BaseAppException(Exception):
    """Base class: one error shape for every API response"""
    type = "error"
    code = "UNKNOWN"
    message = "Unknown error"
    http_status = 400

    def __init__(self, message=None, code=None, detail=None, http_status=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.code = code or self.code
        self.detail = detail if detail is not None else {}
        if http_status is not None:
            self.http_status = http_status

    def to_dict(self):
        # "error" is what the browser form reads
        return {
            "success": False,
            "type": self.type,
            "code": self.code,
            "message": self.message,
            "error": self.message,
            "detail": self.detail,
        }


class ValidationError(BaseAppException):
    """Input is malformed or a required field is missing"""
    type = "validation"
    code = "VALIDATION_ERROR"
    message = "Validation failed"
    http_status = 400


class BlockError(BaseAppException):
    """Request refused: unknown resource, wrong method, etc."""
    type = "block"
    code = "BLOCK"
    message = "Operation blocked"
    http_status = 409


class UpstreamError(BaseAppException):
    """The generative-language API failed to answer"""
    type = "upstream"
    code = "AI_SUGGESTIONS_FAILED"
    message = "Failed to get AI suggestions."
    http_status = 500
