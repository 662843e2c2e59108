"""Flatten a regional-grid payload into a per-date list of samples."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from .engines.types import DailySeries, RawPayload
from .timeutils import is_yyyymmdd

logger = logging.getLogger(__name__)


def features_of(payload: RawPayload) -> Sequence[Any] | None:
    """Return the payload's feature list, or None when it has none."""

    if not isinstance(payload, Mapping):
        return None
    features = payload.get("features")
    if not isinstance(features, list | tuple):
        return None
    return features


def grid_point_count(payload: RawPayload) -> int:
    features = features_of(payload)
    return len(features) if features is not None else 0


def fill_value_of(payload: RawPayload) -> float | None:
    """Return the upstream's declared missing-data marker, if any."""

    if not isinstance(payload, Mapping):
        return None
    for section in ("header", "properties"):
        block = payload.get(section)
        if isinstance(block, Mapping):
            marker = _as_sample(block.get("fill_value"))
            if marker is not None:
                return marker
    return None


def _as_sample(raw: Any) -> float | None:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return None
    value = float(raw)
    if not math.isfinite(value):
        return None
    return value


def _parameter_block(feature: Any, parameter: str) -> Mapping[str, Any]:
    if not isinstance(feature, Mapping):
        return {}
    properties = feature.get("properties")
    if not isinstance(properties, Mapping):
        return {}
    parameters = properties.get("parameter")
    if not isinstance(parameters, Mapping):
        return {}
    block = parameters.get(parameter)
    return block if isinstance(block, Mapping) else {}


def extract_daily_series(payload: RawPayload, parameter: str) -> DailySeries:
    """Collect every finite numeric sample per YYYYMMDD key.

    Metadata keys (units, longname, ...) and non-numeric values are skipped,
    as are values equal to the payload's declared fill value. A payload
    without a feature list yields an empty series.
    """

    features = features_of(payload)
    if features is None:
        logger.debug("climate.extract.no_features parameter=%s", parameter)
        return {}

    fill_value = fill_value_of(payload)
    series: DailySeries = {}
    for feature in features:
        for key, raw in _parameter_block(feature, parameter).items():
            if not is_yyyymmdd(key):
                continue
            value = _as_sample(raw)
            if value is None or value == fill_value:
                continue
            series.setdefault(key, []).append(value)
    return series
