"""Domain errors raised by the regional climate pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ClimateError(Exception):
    """Base class for pipeline errors."""


class ClimateValidationError(ClimateError):
    """Raised when a query is rejected before any upstream call.

    `details` carries whatever the caller needs to correct the request,
    e.g. the list of required fields or the computed box ranges.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details: dict[str, Any] = dict(details or {})


class UpstreamFetchError(ClimateError):
    """Raised when the upstream call for one parameter fails."""

    def __init__(self, parameter: str, message: str) -> None:
        super().__init__(message)
        self.parameter = parameter
        self.message = message
