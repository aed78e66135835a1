"""
JSON error envelope shared by every API endpoint.

Every failure leaves the API as ``{"success": false, "message": ..., "error": ...}``
so clients can read ``message`` without caring which layer produced it.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("clothing.request")


def error_response(
    *,
    message: str,
    error: Any = None,
    field: str | None = None,
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> Response:
    payload: dict[str, Any] = {"success": False, "message": message, "error": error}
    if field:
        payload["field"] = field
    return Response(payload, status=http_status)


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            inner = _first_message(value)
            return inner if key == "non_field_errors" else f"{key}: {inner}"
        return "Invalid input."
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else "Invalid input."
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        message = _first_message(exc.detail)
        error: Any = exc.detail
    elif isinstance(exc, APIException):
        message = str(exc.detail)
        error = exc.get_codes()
    else:
        message = str(exc)
        error = None

    response.data = {"success": False, "message": message, "error": error}
    if response.status_code >= 500:
        logger.error("api_error", extra={"status_code": response.status_code, "error_code": "api_error"})
    return response
