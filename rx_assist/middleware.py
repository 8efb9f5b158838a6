"""
Middleware: catch BaseAppException raised in views and hand it to exception_handler
"""
from .exception_handler import app_exception_handler


class AppExceptionMiddleware:
    """
    Convert BaseAppException into the unified JSON response
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        return app_exception_handler(request, exception)
