"""Request validation for the regional climate pipeline.

Everything here runs before any outbound call. Raw query strings go
through the DRF params serializers; failures raise
`ClimateValidationError` with enough detail for the caller to fix the
request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from django.utils import timezone

from .catalog import ParameterCatalog
from .engines.types import BoundingBox, ClimateQuery, DateRange
from .exceptions import ClimateValidationError
from .metrics import climate_validation_rejections_total
from .serializers import (
    COORDINATE_FIELDS,
    DATE_FIELDS,
    BoundingBoxParamsSerializer,
    ClimateQueryParamsSerializer,
)
from .timeutils import year_bounds

logger = logging.getLogger(__name__)

_MISSING_CODES = frozenset({"required", "null"})


def _present(params: Mapping[str, object]) -> dict[str, object]:
    # Blank values count as absent, the same as a missing key.
    return {
        key: value
        for key, value in params.items()
        if value is not None
        and not (isinstance(value, str) and not value.strip())
    }


def _error_codes(errors: Mapping[str, Any], name: str) -> set[str]:
    return {
        str(getattr(detail, "code", "invalid"))
        for detail in errors.get(name, ())
    }


def _from_field_errors(errors: Mapping[str, Any]) -> ClimateValidationError:
    missing = [
        name
        for name in COORDINATE_FIELDS
        if _error_codes(errors, name) & _MISSING_CODES
    ]
    if missing:
        return ClimateValidationError(
            "missing required coordinates",
            code="missing",
            details={"required": list(COORDINATE_FIELDS), "missing": missing},
        )
    for name in COORDINATE_FIELDS:
        if name in errors:
            return ClimateValidationError(
                "non-numeric coordinate",
                code="non_numeric",
                details={"field": name},
            )
    for name in DATE_FIELDS:
        if name in errors:
            return ClimateValidationError(
                "invalid date",
                code="invalid_date",
                details={"field": name, "expected": "YYYYMMDD"},
            )
    return ClimateValidationError(
        "invalid query", code="invalid", details=dict(errors)
    )


def _validated(
    serializer_class: type[BoundingBoxParamsSerializer],
    params: Mapping[str, object],
) -> dict[str, Any]:
    serializer = serializer_class(data=_present(params))
    try:
        if serializer.is_valid():
            return dict(serializer.validated_data)
        error = _from_field_errors(serializer.errors)
    except ClimateValidationError as exc:
        error = exc
    climate_validation_rejections_total.labels(reason=error.code).inc()
    logger.info("climate.validation.rejected code=%s", error.code)
    raise error


def _bbox_from(attrs: Mapping[str, Any]) -> BoundingBox:
    return BoundingBox(
        lon_min=attrs["longitudeMin"],
        lon_max=attrs["longitudeMax"],
        lat_min=attrs["latitudeMin"],
        lat_max=attrs["latitudeMax"],
    )


def validate_bounding_box(
    lon_min: object,
    lon_max: object,
    lat_min: object,
    lat_max: object,
) -> BoundingBox:
    """Parse four raw coordinates into a BoundingBox of at least 2x2 deg."""

    attrs = _validated(
        BoundingBoxParamsSerializer,
        dict(zip(COORDINATE_FIELDS, (lon_min, lon_max, lat_min, lat_max))),
    )
    return _bbox_from(attrs)


def resolve_date_range(
    start: str | None, end: str | None, *, today: date | None = None
) -> DateRange:
    """Default missing bounds to the current year."""

    default_start, default_end = year_bounds(today or timezone.localdate())
    return DateRange(start=start or default_start, end=end or default_end)


def parse_parameter_list(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [part for part in raw.split(",") if part.strip()]


def validate_query(
    params: Mapping[str, object],
    catalog: ParameterCatalog,
    *,
    today: date | None = None,
) -> ClimateQuery:
    """Validate raw query parameters (camelCase names) into a ClimateQuery."""

    attrs = _validated(ClimateQueryParamsSerializer, params)
    return ClimateQuery(
        bbox=_bbox_from(attrs),
        date_range=resolve_date_range(
            attrs.get("startDate"), attrs.get("endDate"), today=today
        ),
        parameters=catalog.select(
            parse_parameter_list(attrs.get("parameters"))
        ),
    )
