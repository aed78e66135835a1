from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse

logger = logging.getLogger("clothing.request")


def _envelope(message: str, *, status: int) -> JsonResponse:
    return JsonResponse({"success": False, "message": message, "error": None}, status=status)


def handle_403(request: HttpRequest, exception=None) -> JsonResponse:
    return _envelope("Forbidden.", status=403)


def handle_404(request: HttpRequest, exception=None) -> JsonResponse:
    return _envelope("Not found.", status=404)


def handle_500(request: HttpRequest) -> JsonResponse:
    logger.error(
        "server_error",
        extra={"status_code": 500, "error_code": "server_error", "path": request.path},
    )
    return _envelope("Internal server error.", status=500)
