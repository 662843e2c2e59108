"""Regional climate API endpoints.

Authentication: default JWT from REST_FRAMEWORK settings; tokens are issued
by the account service in front of this one.
Responses: `config.api.responses.success_response` envelope
(`{"success": true, ...}`); errors come from the project exception handler.
"""

from __future__ import annotations

from typing import cast

from asgiref.sync import async_to_sync
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.api.openapi import (
    error_envelope_serializer,
    success_envelope_serializer,
)
from config.api.responses import JSONValue, success_response

from .serializers import (
    BoundingBoxSerializer,
    DateRangeSerializer,
    ParameterDescriptorSerializer,
    ParameterSummarySerializer,
    serialize_aggregate,
    serialize_catalog,
)
from .services import PIPELINE, get_monthly_climate

climate_error_schema = error_envelope_serializer("ClimateErrorResponse")

monthly_success_schema = success_envelope_serializer(
    "ClimateMonthlySuccess",
    fields={
        "boundingBox": BoundingBoxSerializer(),
        "dateRange": DateRangeSerializer(),
        "data": serializers.DictField(
            child=ParameterSummarySerializer(),
            help_text=(
                "Keyed by parameter name. A failed parameter is "
                '`{"error": "<message>"}` instead.'
            ),
        ),
    },
)

parameters_success_schema = success_envelope_serializer(
    "ClimateParametersSuccess",
    fields={
        "parameters": serializers.DictField(
            child=ParameterDescriptorSerializer()
        ),
    },
)


def _coordinate_param(name: str) -> OpenApiParameter:
    return OpenApiParameter(
        name=name,
        type=OpenApiTypes.FLOAT,
        location=OpenApiParameter.QUERY,
        required=True,
    )


class ClimateMonthlyView(APIView):
    """Monthly min/max/mean per parameter over a bounding box.

    Auth: IsAuthenticated.
    Response: success envelope with the echoed `boundingBox`, `dateRange`
    and a `data` map of per-parameter results.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            _coordinate_param("longitudeMin"),
            _coordinate_param("longitudeMax"),
            _coordinate_param("latitudeMin"),
            _coordinate_param("latitudeMax"),
            OpenApiParameter(
                name="startDate",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="YYYYMMDD (default: Jan 1 of the current year)",
            ),
            OpenApiParameter(
                name="endDate",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="YYYYMMDD (default: Dec 31 of the current year)",
            ),
            OpenApiParameter(
                name="parameters",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description=(
                    "Comma-separated parameter names; unknown names are "
                    "ignored (default: all)"
                ),
            ),
        ],
        responses={
            200: monthly_success_schema,
            400: climate_error_schema,
            401: climate_error_schema,
            403: climate_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        """Return the aggregate for the requested box and date range.

        Both axes of the box must span at least 2 degrees. The envelope is
        successful even when every parameter entry is an error.

        DRF dispatches this view synchronously; `async_to_sync` runs the
        pipeline to completion, so a client that disconnects does not
        cancel the outstanding upstream fetches. Callers that need
        cancellation await `ClimatePipeline.run` directly.
        """

        result = async_to_sync(get_monthly_climate)(
            request.query_params.dict()
        )
        return success_response(serialize_aggregate(result))


class ClimateParametersView(APIView):
    """List the supported parameters with description and unit."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={
            200: parameters_success_schema,
            401: climate_error_schema,
            403: climate_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        catalog = serialize_catalog(PIPELINE.catalog)
        return success_response({"parameters": cast(JSONValue, catalog)})
