from __future__ import annotations

# ruff: noqa: S101
import math

from climate.extraction import (
    extract_daily_series,
    fill_value_of,
    grid_point_count,
)


def _feature(block: dict[str, object], parameter: str = "T2M") -> object:
    return {"properties": {"parameter": {parameter: block}}}


def test_missing_or_malformed_feature_collection_yields_empty_series() -> None:
    assert extract_daily_series({}, "T2M") == {}
    assert extract_daily_series({"features": "nope"}, "T2M") == {}
    assert extract_daily_series([], "T2M") == {}
    assert extract_daily_series(42, "T2M") == {}
    assert grid_point_count(["T2M"]) == 0
    assert extract_daily_series({"features": None}, "T2M") == {}
    assert grid_point_count({"messages": ["bad request"]}) == 0


def test_samples_from_every_grid_point_are_collected_per_date() -> None:
    payload = {
        "features": [
            _feature({"20230101": 1.5, "20230102": 2.0}),
            _feature({"20230101": 3.5}),
            _feature({"20230102": 4.0, "20230103": 5}),
        ]
    }
    series = extract_daily_series(payload, "T2M")
    assert sorted(series) == ["20230101", "20230102", "20230103"]
    assert sorted(series["20230101"]) == [1.5, 3.5]
    assert sorted(series["20230102"]) == [2.0, 4.0]
    assert series["20230103"] == [5.0]
    assert grid_point_count(payload) == 3


def test_metadata_keys_and_non_numeric_values_are_dropped() -> None:
    payload = {
        "features": [
            _feature(
                {
                    "units": "C",
                    "longname": "Temperature at 2 Meters",
                    "2023010": 1.0,
                    "202301011": 1.0,
                    "2023-01-01": 1.0,
                    "20230101": "12.5",
                    "20230102": None,
                    "20230103": True,
                    "20230104": math.nan,
                    "20230105": math.inf,
                    "20230106": 7.25,
                }
            )
        ]
    }
    assert extract_daily_series(payload, "T2M") == {"20230106": [7.25]}


def test_other_parameters_and_broken_features_are_ignored() -> None:
    payload = {
        "features": [
            _feature({"20230101": 1.0}, parameter="WS2M"),
            {"properties": {"parameter": {"T2M": ["not", "a", "map"]}}},
            {"properties": None},
            "garbage",
            _feature({"20230101": 2.0}),
        ]
    }
    assert extract_daily_series(payload, "T2M") == {"20230101": [2.0]}
    assert grid_point_count(payload) == 5


def test_declared_fill_value_is_treated_as_missing() -> None:
    payload = {
        "header": {"fill_value": -999},
        "features": [
            _feature({"20230101": -999.0, "20230102": -998.5}),
            _feature({"20230101": 10.0}),
        ],
    }
    assert fill_value_of(payload) == -999.0
    assert extract_daily_series(payload, "T2M") == {
        "20230101": [10.0],
        "20230102": [-998.5],
    }


def test_fill_value_in_properties_and_absent() -> None:
    assert fill_value_of({"properties": {"fill_value": -99}}) == -99.0
    assert fill_value_of({"header": {"fill_value": "n/a"}}) is None
    assert fill_value_of({"features": []}) is None


def test_all_values_missing_gives_empty_series() -> None:
    payload = {"features": [_feature({"units": "C", "20230101": "x"})]}
    assert extract_daily_series(payload, "T2M") == {}
