from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

MONTHS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# date key (YYYYMMDD) -> one sample per reporting grid point
DailySeries: TypeAlias = dict[str, list[float]]
# decoded JSON body, whatever its shape
RawPayload: TypeAlias = Any


@dataclass(frozen=True)
class BoundingBox:
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @property
    def lon_range(self) -> float:
        return self.lon_max - self.lon_min

    @property
    def lat_range(self) -> float:
        return self.lat_max - self.lat_min


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    description: str
    unit: str


@dataclass(frozen=True)
class MonthlyStat:
    min: float | None
    max: float | None
    mean: float | None


EMPTY_STAT = MonthlyStat(min=None, max=None, mean=None)


@dataclass(frozen=True)
class ParameterSummary:
    description: str
    unit: str
    grid_point_count: int
    monthly: Mapping[str, MonthlyStat]


@dataclass(frozen=True)
class ParameterFailure:
    error: str


ParameterResult: TypeAlias = ParameterSummary | ParameterFailure


@dataclass(frozen=True)
class ClimateQuery:
    """A validated request: the only input the fan-out stage accepts."""

    bbox: BoundingBox
    date_range: DateRange
    parameters: tuple[str, ...]


@dataclass(frozen=True)
class AggregateResponse:
    bbox: BoundingBox
    date_range: DateRange
    data: Mapping[str, ParameterResult]
