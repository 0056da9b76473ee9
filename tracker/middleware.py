import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """Log one line per request with its status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        code = response.status_code
        if code >= 500:
            level = logging.ERROR
        elif code >= 400:
            level = logging.WARNING
        else:
            level = logging.DEBUG
        logger.log(level, '%s %s -> %s (%.1f ms)', request.method, request.get_full_path(), code, elapsed_ms)
        return response
