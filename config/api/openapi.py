"""drf-spectacular helpers for documenting the project's response envelopes.

The runtime response helpers in `config.api.responses` and the global DRF
exception handler wrap every API response in a `success` flag. These
utilities generate matching serializers for OpenAPI documentation without
changing runtime behavior.
"""

from __future__ import annotations

from collections.abc import Mapping

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers
from rest_framework.serializers import Serializer


def success_envelope_serializer(
    name: str,
    *,
    fields: Mapping[str, serializers.Field],
) -> Serializer:
    """Build an OpenAPI schema matching `success_response`."""

    return inline_serializer(
        name=name,
        fields={"success": serializers.BooleanField(), **fields},
    )


def error_envelope_serializer(name: str) -> Serializer:
    """Build an OpenAPI schema matching `custom_exception_handler`."""

    return inline_serializer(
        name=name,
        fields={
            "success": serializers.BooleanField(),
            "error": serializers.CharField(),
            "details": serializers.JSONField(allow_null=True),
        },
    )
