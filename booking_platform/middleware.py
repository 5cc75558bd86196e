import json
import logging
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

requests_logger = logging.getLogger("requests")
fallback_logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# token endpoints carry credentials, only a short line is written for them
SENSITIVE_PATHS = (
    "/api/token/",
    "/api/token/refresh/",
)

SKIPPED_PREFIXES = ("/static/", "/admin/", "/api/schema/", "/api/docs/", "/api/redoc/")


def _level_for(status):
    if isinstance(status, int) and status >= 500:
        return logging.ERROR
    if isinstance(status, int) and status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogMiddleware(MiddlewareMixin):
    """
    One log line per API call on the "requests" logger.

    The line carries method, path, status, user, duration, query string and a
    request id. The id is taken from an incoming X-Request-ID header or
    generated, and echoed back on the response. Bodies are never logged.
    """

    def process_request(self, request):
        request._start_time = time.monotonic()
        request.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    def process_response(self, request, response):
        request_id = getattr(request, "request_id", None)
        if request_id:
            response[REQUEST_ID_HEADER] = request_id
        try:
            path = request.path
            if path.startswith(SKIPPED_PREFIXES):
                return response

            start = getattr(request, "_start_time", None)
            duration_ms = int((time.monotonic() - start) * 1000) if start else None
            user_id = getattr(getattr(request, "user", None), "id", None)
            status = getattr(response, "status_code", "-")
            level = _level_for(status)

            if path.startswith(SENSITIVE_PATHS):
                requests_logger.log(
                    level,
                    "HTTP %s %s -> %s [%s] %sms",
                    request.method,
                    path,
                    status,
                    f"user_id={user_id}" if user_id else "anon",
                    duration_ms if duration_ms is not None else "-",
                )
                return response

            requests_logger.log(level, json.dumps({
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status": status,
                "user_id": user_id,
                "duration_ms": duration_ms,
                "query": request.META.get("QUERY_STRING", ""),
            }, ensure_ascii=False))
        except Exception as e:
            fallback_logger.warning("Failed to log request/response: %s", e)
        return response
