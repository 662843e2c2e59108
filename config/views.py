"""Project-level non-DRF views.

The root landing endpoint links to the interactive API documentation; the
health endpoint is an unauthenticated liveness check.
"""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.utils import timezone


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "climate-apis",
            "docs": "/api/docs/",
            "redoc": "/api/redoc/",
        }
    )


def health(request: HttpRequest) -> JsonResponse:
    return JsonResponse(
        {"status": "ok", "timestamp": timezone.now().isoformat()}
    )
