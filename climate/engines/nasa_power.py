from __future__ import annotations

import logging
from typing import Any, cast

import httpx
from django.conf import settings

from ..exceptions import UpstreamFetchError
from .base import RegionalGridProvider
from .types import BoundingBox, DateRange, RawPayload

logger = logging.getLogger(__name__)


class NasaPowerRegionalProvider(RegionalGridProvider):
    """NASA POWER daily regional provider.

    One GET per parameter against `/api/temporal/daily/regional`. The
    endpoint answers with a GeoJSON FeatureCollection, one feature per
    grid point inside the box.
    """

    name = "nasa_power_regional"

    def __init__(
        self,
        *,
        base_url: str | None = None,
        community: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url: str = base_url or cast(
            str,
            getattr(
                settings,
                "NASA_POWER_REGIONAL_URL",
                "https://power.larc.nasa.gov/api/temporal/daily/regional",
            ),
        )
        self.community: str = community or cast(
            str, getattr(settings, "CLIMATE_COMMUNITY", "RE")
        )
        self.timeout = (
            timeout
            if timeout is not None
            else float(getattr(settings, "CLIMATE_FETCH_TIMEOUT_S", 30.0))
        )

    def build_params(
        self, parameter: str, bbox: BoundingBox, date_range: DateRange
    ) -> dict[str, Any]:
        return {
            "parameters": parameter,
            "community": self.community,
            "longitude-min": bbox.lon_min,
            "longitude-max": bbox.lon_max,
            "latitude-min": bbox.lat_min,
            "latitude-max": bbox.lat_max,
            "start": date_range.start,
            "end": date_range.end,
            "format": "JSON",
        }

    async def fetch(
        self, parameter: str, bbox: BoundingBox, date_range: DateRange
    ) -> RawPayload:
        params = self.build_params(parameter, bbox, date_range)
        logger.debug(
            "climate.fetch.request provider=%s parameter=%s",
            self.name,
            parameter,
        )
        try:
            return await self._request(params)
        except httpx.TimeoutException as exc:
            raise UpstreamFetchError(
                parameter, f"Upstream request timed out after {self.timeout}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamFetchError(
                parameter,
                f"Upstream returned HTTP {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(
                parameter, f"Upstream request failed: {exc}"
            ) from exc
        except ValueError as exc:
            raise UpstreamFetchError(
                parameter, f"Failed to parse JSON: {exc}"
            ) from exc

    async def _request(self, params: dict[str, Any]) -> RawPayload:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.base_url, params=params)
        response.raise_for_status()
        return response.json()
