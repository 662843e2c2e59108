"""Reduce a daily series to twelve calendar-month statistics.

Months are pooled across years: June 2023 and June 2024 samples share the
single `Jun` bucket.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .engines.types import EMPTY_STAT, MONTHS, DailySeries, MonthlyStat
from .timeutils import is_yyyymmdd, month_of

_CENTS = Decimal("0.01")
# Enough digits to quantize any finite double (at most 309 integer digits).
_PRECISION = 400


def round2(value: float) -> float:
    """Round half away from zero to two places, on the exact double value.

    `round()` rounds half to even, so 0.125 would become 0.12; here it is
    0.13. 2.675 is stored as 2.67499999... and stays 2.67.
    """

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def mean_of(values: list[float]) -> float:
    count = len(values)
    try:
        return math.fsum(values) / count
    except OverflowError:
        # The exact sum left the float range; divide each sample first.
        return math.fsum(value / count for value in values)


def bucket_by_month(series: DailySeries) -> dict[str, list[float]]:
    buckets: dict[str, list[float]] = {name: [] for name in MONTHS}
    for key, samples in series.items():
        if not is_yyyymmdd(key):
            continue
        month = month_of(key)
        if not 1 <= month <= 12:
            continue
        buckets[MONTHS[month - 1]].extend(samples)
    return buckets


def summarize(samples: Iterable[float]) -> MonthlyStat:
    valid = [
        float(v)
        for v in samples
        if isinstance(v, int | float) and math.isfinite(v)
    ]
    if not valid:
        return EMPTY_STAT
    return MonthlyStat(
        min=round2(min(valid)),
        max=round2(max(valid)),
        mean=round2(mean_of(valid)),
    )


def aggregate_monthly(series: DailySeries) -> dict[str, MonthlyStat]:
    """Return Jan..Dec -> MonthlyStat; months without samples are all None."""

    buckets = bucket_by_month(series)
    return {month: summarize(buckets[month]) for month in MONTHS}
