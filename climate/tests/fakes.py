from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from datetime import date, timedelta
from typing import Any

from climate.engines.base import RegionalGridProvider
from climate.engines.types import BoundingBox, DateRange, RawPayload
from climate.exceptions import UpstreamFetchError


def days_between(start: date, end: date) -> list[date]:
    return [
        start + timedelta(days=offset)
        for offset in range((end - start).days + 1)
    ]


def grid_payload(
    parameter: str,
    days: list[date],
    value: Callable[[int, date], object],
    *,
    grid_points: int = 4,
) -> dict[str, Any]:
    """Build a FeatureCollection shaped like the regional daily endpoint."""

    features = []
    for idx in range(grid_points):
        block: dict[str, object] = {
            day.strftime("%Y%m%d"): value(idx, day) for day in days
        }
        block["units"] = "C"
        block["longname"] = parameter
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [72.0 + idx * 0.5, 20.0 + idx * 0.5],
                },
                "properties": {"parameter": {parameter: block}},
            }
        )
    return {
        "type": "FeatureCollection",
        "header": {"fill_value": -999.0},
        "features": features,
    }


class FakeGridProvider(RegionalGridProvider):
    """Serves canned payloads per parameter and records every call."""

    name = "fake"

    def __init__(
        self,
        payloads: Mapping[str, RawPayload] | None = None,
        *,
        errors: Mapping[str, str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.payloads = dict(payloads or {})
        self.errors = dict(errors or {})
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(
        self, parameter: str, bbox: BoundingBox, date_range: DateRange
    ) -> RawPayload:
        self.calls.append(parameter)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if parameter in self.errors:
                raise UpstreamFetchError(parameter, self.errors[parameter])
            return self.payloads.get(parameter, {"features": []})
        finally:
            self.in_flight -= 1


class HangingGridProvider(RegionalGridProvider):
    """Never answers; records cancellations."""

    name = "hanging"

    def __init__(self) -> None:
        self.started = 0
        self.cancelled = 0

    async def fetch(
        self, parameter: str, bbox: BoundingBox, date_range: DateRange
    ) -> RawPayload:
        self.started += 1
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        return {}
