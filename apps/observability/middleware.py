from __future__ import annotations

import logging
from time import monotonic
from uuid import uuid4

logger = logging.getLogger("clothing.request")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestLogMiddleware:
    """Tag every request with an id and log method, path, status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip()[:64] or uuid4().hex
        request.request_id = request_id
        started = monotonic()

        response = self.get_response(request)

        duration_ms = round((monotonic() - started) * 1000, 2)
        response[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s %s -> %s (%.2fms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            extra={"request_id": request_id, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response
