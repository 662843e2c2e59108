from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, ClassVar

from django.conf import settings
from rest_framework import serializers

from config.api.responses import JSONValue

from .catalog import ParameterCatalog
from .engines.types import AggregateResponse, ParameterFailure
from .exceptions import ClimateValidationError

MIN_BOX_DEGREES = float(getattr(settings, "CLIMATE_MIN_BOX_DEGREES", 2.0))

COORDINATE_FIELDS: tuple[str, ...] = (
    "longitudeMin",
    "longitudeMax",
    "latitudeMin",
    "latitudeMax",
)
DATE_FIELDS: tuple[str, ...] = ("startDate", "endDate")


class BoundingBoxParamsSerializer(serializers.Serializer):
    longitudeMin: ClassVar[serializers.FloatField] = serializers.FloatField()
    longitudeMax: ClassVar[serializers.FloatField] = serializers.FloatField()
    latitudeMin: ClassVar[serializers.FloatField] = serializers.FloatField()
    latitudeMax: ClassVar[serializers.FloatField] = serializers.FloatField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs = super().validate(attrs)
        for name in COORDINATE_FIELDS:
            if not math.isfinite(attrs[name]):
                raise ClimateValidationError(
                    "non-numeric coordinate",
                    code="non_numeric",
                    details={"field": name},
                )
        lon_range = attrs["longitudeMax"] - attrs["longitudeMin"]
        lat_range = attrs["latitudeMax"] - attrs["latitudeMin"]
        # Also rejects inverted boxes: their ranges are negative.
        if lon_range < MIN_BOX_DEGREES or lat_range < MIN_BOX_DEGREES:
            raise ClimateValidationError(
                "bounding box too small",
                code="box_too_small",
                details={
                    "current": {"longitude": lon_range, "latitude": lat_range},
                    "minimum": MIN_BOX_DEGREES,
                    "hint": (
                        "The regional endpoint requires at least a "
                        f"{MIN_BOX_DEGREES:g}-degree range on both axes."
                    ),
                },
            )
        return attrs


class ClimateQueryParamsSerializer(BoundingBoxParamsSerializer):
    startDate: ClassVar[serializers.RegexField] = serializers.RegexField(
        r"^[0-9]{8}$", required=False
    )
    endDate: ClassVar[serializers.RegexField] = serializers.RegexField(
        r"^[0-9]{8}$", required=False
    )
    parameters: ClassVar[serializers.CharField] = serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False
    )


class BoundingBoxSerializer(serializers.Serializer):
    lonMin: ClassVar[serializers.FloatField] = serializers.FloatField(
        source="lon_min"
    )
    lonMax: ClassVar[serializers.FloatField] = serializers.FloatField(
        source="lon_max"
    )
    latMin: ClassVar[serializers.FloatField] = serializers.FloatField(
        source="lat_min"
    )
    latMax: ClassVar[serializers.FloatField] = serializers.FloatField(
        source="lat_max"
    )


class DateRangeSerializer(serializers.Serializer):
    start: ClassVar[serializers.CharField] = serializers.CharField()
    end: ClassVar[serializers.CharField] = serializers.CharField()


class MonthlyStatSerializer(serializers.Serializer):
    min: ClassVar[serializers.FloatField] = serializers.FloatField(
        allow_null=True
    )
    max: ClassVar[serializers.FloatField] = serializers.FloatField(
        allow_null=True
    )
    mean: ClassVar[serializers.FloatField] = serializers.FloatField(
        allow_null=True
    )


class ParameterSummarySerializer(serializers.Serializer):
    description: ClassVar[serializers.CharField] = serializers.CharField()
    unit: ClassVar[serializers.CharField] = serializers.CharField()
    gridPointCount: ClassVar[serializers.IntegerField] = (
        serializers.IntegerField(source="grid_point_count")
    )
    monthly: ClassVar[serializers.DictField] = serializers.DictField(
        child=MonthlyStatSerializer()
    )


class ParameterFailureSerializer(serializers.Serializer):
    error: ClassVar[serializers.CharField] = serializers.CharField()


class ParameterDescriptorSerializer(serializers.Serializer):
    description: ClassVar[serializers.CharField] = serializers.CharField()
    unit: ClassVar[serializers.CharField] = serializers.CharField()


def serialize_aggregate(response: AggregateResponse) -> dict[str, JSONValue]:
    """Render an AggregateResponse with the camelCase wire names."""

    data: dict[str, JSONValue] = {}
    for name, result in response.data.items():
        if isinstance(result, ParameterFailure):
            data[name] = dict(ParameterFailureSerializer(result).data)
        else:
            data[name] = dict(ParameterSummarySerializer(result).data)
    return {
        "boundingBox": dict(BoundingBoxSerializer(response.bbox).data),
        "dateRange": dict(DateRangeSerializer(response.date_range).data),
        "data": data,
    }


def serialize_catalog(
    catalog: ParameterCatalog,
) -> Mapping[str, dict[str, JSONValue]]:
    return {
        name: dict(ParameterDescriptorSerializer(descriptor).data)
        for name, descriptor in catalog.items()
    }
