from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias

from rest_framework import status
from rest_framework.response import Response

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


def success_response(
    payload: Mapping[str, JSONValue] | None = None,
    *,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    body: dict[str, JSONValue] = {"success": True}
    body.update(payload or {})
    return Response(body, status=status_code)


def error_payload(
    message: str, details: JSONValue | None = None
) -> dict[str, JSONValue]:
    return {"success": False, "error": message, "details": details}


def error_response(
    message: str,
    *,
    details: JSONValue | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    return Response(error_payload(message, details), status=status_code)
