from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .responses import JSONValue, error_payload, error_response

if TYPE_CHECKING:
    from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.exceptions import Throttled
    from rest_framework.views import exception_handler as drf_exception_handler

    from climate.exceptions import ClimateValidationError

    if isinstance(exc, ClimateValidationError):
        return error_response(
            exc.message, details=_to_json_value(exc.details)
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "api.unhandled view=%s err=%s",
            view.__class__.__name__ if view is not None else None,
            exc,
            exc_info=exc,
        )
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)

    if isinstance(exc, Throttled):
        errors: dict[str, JSONValue]
        if isinstance(detail, dict):
            errors = {**detail}
        else:
            errors = {"detail": detail}

        wait = getattr(exc, "wait", None)
        if wait is not None:
            errors["wait"] = wait

        response.data = error_payload("Too Many Requests", errors)
        return response

    message = "Request failed"
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            message = maybe

    response.data = error_payload(message, detail)
    return response
