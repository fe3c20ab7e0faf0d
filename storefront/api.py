"""
storefront.api

Shared HTTP plumbing for the storefront apps:
- VERSION + /api/health check
- exception_handler: the REST_FRAMEWORK["EXCEPTION_HANDLER"] that renders every
  failure as {"error": <message>} with the status from storefront.errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.http import Http404, HttpRequest, JsonResponse
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import set_rollback

from storefront.errors import StorefrontError

VERSION = "flavorfeast.api.v1"

logger = logging.getLogger(__name__)


def health(request: HttpRequest) -> JsonResponse:
    """Liveness check."""
    return JsonResponse({"ok": True, "version": VERSION})


def _first_message(detail: Any) -> str:
    """Pull the first human-readable message out of a DRF error detail tree."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            msg = _first_message(value)
            if msg:
                return msg if key == "non_field_errors" else f"{key}: {msg}"
        return ""
    if isinstance(detail, (list, tuple)):
        # list serializers report {} for valid entries
        for entry in detail:
            msg = _first_message(entry)
            if msg:
                return msg
        return ""
    return str(detail)


def _error_response(message: str, status: int, fields: Optional[Dict[str, Any]] = None) -> Response:
    payload: Dict[str, Any] = {"error": message}
    if fields:
        payload["fields"] = fields
    return Response(payload, status=status)


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "?"

    if isinstance(exc, StorefrontError):
        set_rollback()
        if exc.http_status >= 500:
            logger.error("[api][%s] %s: %s", view_name, type(exc).__name__, exc.__cause__ or exc.message)
        else:
            logger.info("[api][%s] rejected kind=%s status=%s", view_name, type(exc).__name__, exc.http_status)
        return _error_response(exc.message, exc.http_status, exc.fields)

    if isinstance(exc, Http404):
        return _error_response("Not found", 404)

    if isinstance(exc, drf_exceptions.ValidationError):
        detail = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        return _error_response(_first_message(detail) or "Invalid input", 400, detail)

    if isinstance(exc, drf_exceptions.APIException):
        set_rollback()
        response = _error_response(_first_message(exc.detail), exc.status_code)
        if getattr(exc, "wait", None):
            response["Retry-After"] = str(int(exc.wait))
        return response

    set_rollback()
    logger.exception("[api][%s] unhandled error", view_name)
    return _error_response("Server error", 500)
