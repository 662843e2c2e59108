from __future__ import annotations

from abc import ABC, abstractmethod

from .types import BoundingBox, DateRange, RawPayload


class RegionalGridProvider(ABC):
    """Abstract base for per-parameter regional daily-grid sources."""

    name: str

    @abstractmethod
    async def fetch(
        self, parameter: str, bbox: BoundingBox, date_range: DateRange
    ) -> RawPayload:
        """Return the parsed payload for one parameter.

        Transport failures, non-2xx statuses and unparseable bodies must be
        raised as `UpstreamFetchError` scoped to `parameter`.
        """
