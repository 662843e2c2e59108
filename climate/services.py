"""Regional climate aggregation pipeline.

Validate -> fan out one fetch/extract/aggregate task per parameter ->
merge. Each parameter's upstream failure stays in its own result slot;
any other exception aborts the request and cancels the sibling tasks.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from datetime import date

from django.conf import settings

from .aggregation import aggregate_monthly
from .catalog import DEFAULT_CATALOG, ParameterCatalog
from .engines.base import RegionalGridProvider
from .engines.nasa_power import NasaPowerRegionalProvider
from .engines.types import (
    AggregateResponse,
    ClimateQuery,
    ParameterFailure,
    ParameterResult,
    ParameterSummary,
)
from .exceptions import UpstreamFetchError
from .extraction import extract_daily_series, features_of, grid_point_count
from .metrics import (
    climate_parameters_empty_total,
    climate_upstream_errors_total,
    climate_upstream_latency_seconds,
    climate_upstream_requests_total,
)
from .validators import validate_query

logger = logging.getLogger(__name__)

MAX_CONCURRENCY = int(getattr(settings, "CLIMATE_MAX_CONCURRENCY", 4))


class ClimatePipeline:
    """Drives one request end to end; holds no per-request state."""

    def __init__(
        self,
        *,
        provider: RegionalGridProvider,
        catalog: ParameterCatalog = DEFAULT_CATALOG,
        max_concurrency: int = MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.provider = provider
        self.catalog = catalog
        self.max_concurrency = max_concurrency

    def validate(
        self, params: Mapping[str, object], *, today: date | None = None
    ) -> ClimateQuery:
        return validate_query(params, self.catalog, today=today)

    async def run(
        self, params: Mapping[str, object], *, today: date | None = None
    ) -> AggregateResponse:
        """Validate raw query params and aggregate every selected parameter.

        Raises `ClimateValidationError` before any upstream call when the
        query is rejected.
        """

        query = self.validate(params, today=today)
        return await self.aggregate(query)

    async def aggregate(self, query: ClimateQuery) -> AggregateResponse:
        limit = asyncio.Semaphore(self.max_concurrency)
        async with asyncio.TaskGroup() as group:
            tasks = {
                name: group.create_task(self._guarded(limit, name, query))
                for name in query.parameters
            }

        data: dict[str, ParameterResult] = {}
        for name, task in tasks.items():
            result = task.result()
            if result is not None:
                data[name] = result
        logger.info(
            "climate.aggregate.done requested=%d returned=%d errors=%d",
            len(query.parameters),
            len(data),
            sum(isinstance(r, ParameterFailure) for r in data.values()),
        )
        return AggregateResponse(
            bbox=query.bbox, date_range=query.date_range, data=data
        )

    async def _guarded(
        self, limit: asyncio.Semaphore, parameter: str, query: ClimateQuery
    ) -> ParameterResult | None:
        async with limit:
            return await self.process_parameter(parameter, query)

    async def process_parameter(
        self, parameter: str, query: ClimateQuery
    ) -> ParameterResult | None:
        """Fetch, extract and aggregate one parameter.

        Returns None when the upstream answered but no dated samples could
        be extracted; the parameter is then left out of the response.
        """

        provider_name = self.provider.name
        climate_upstream_requests_total.labels(
            provider=provider_name, parameter=parameter
        ).inc()
        start_time = time.perf_counter()
        try:
            payload = await self.provider.fetch(
                parameter, query.bbox, query.date_range
            )
        except UpstreamFetchError as exc:
            climate_upstream_errors_total.labels(
                provider=provider_name,
                parameter=parameter,
                error_type=(exc.__cause__ or exc).__class__.__name__,
            ).inc()
            logger.warning(
                "climate.fetch.failed parameter=%s err=%s",
                parameter,
                exc.message,
            )
            return ParameterFailure(error=exc.message)
        finally:
            climate_upstream_latency_seconds.labels(
                provider=provider_name, parameter=parameter
            ).observe(time.perf_counter() - start_time)

        series = extract_daily_series(payload, parameter)
        if not series:
            # TODO: expose `reason` to callers once the response schema
            # grows a per-parameter status field.
            reason = (
                "no_features" if features_of(payload) is None else "no_dates"
            )
            climate_parameters_empty_total.labels(
                parameter=parameter, reason=reason
            ).inc()
            logger.warning(
                "climate.extract.empty parameter=%s reason=%s",
                parameter,
                reason,
            )
            return None

        descriptor = self.catalog[parameter]
        return ParameterSummary(
            description=descriptor.description,
            unit=descriptor.unit,
            grid_point_count=grid_point_count(payload),
            monthly=aggregate_monthly(series),
        )


def build_pipeline(
    provider: RegionalGridProvider | None = None,
    catalog: ParameterCatalog = DEFAULT_CATALOG,
) -> ClimatePipeline:
    return ClimatePipeline(
        provider=provider or NasaPowerRegionalProvider(),
        catalog=catalog,
    )


PIPELINE = build_pipeline()


async def get_monthly_climate(
    params: Mapping[str, object], *, today: date | None = None
) -> AggregateResponse:
    return await PIPELINE.run(params, today=today)
