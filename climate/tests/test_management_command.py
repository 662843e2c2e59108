from __future__ import annotations

# ruff: noqa: S101
import json
from datetime import date
from io import StringIO
from pathlib import Path

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from climate.engines.nasa_power import NasaPowerRegionalProvider
from climate.engines.types import BoundingBox, DateRange, RawPayload
from climate.exceptions import UpstreamFetchError
from climate.tests.fakes import days_between, grid_payload

ARGS = [
    "--lon-min",
    "72",
    "--lon-max",
    "74",
    "--lat-min",
    "20",
    "--lat-max",
    "22",
    "--start",
    "20230101",
    "--end",
    "20230228",
]


def _install_fake_fetch(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []
    days = days_between(date(2023, 1, 1), date(2023, 2, 28))

    async def fake_fetch(
        self: NasaPowerRegionalProvider,
        parameter: str,
        bbox: BoundingBox,
        date_range: DateRange,
    ) -> RawPayload:
        calls.append(parameter)
        if parameter == "WS2M":
            raise UpstreamFetchError(parameter, "Upstream returned HTTP 503")
        return grid_payload(
            parameter, days, lambda idx, day: 10.0 + idx, grid_points=2
        )

    monkeypatch.setattr(NasaPowerRegionalProvider, "fetch", fake_fetch)
    return calls


def test_command_prints_summary_and_writes_json(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls = _install_fake_fetch(monkeypatch)
    output = tmp_path / "monthly.json"
    out = StringIO()
    err = StringIO()

    call_command(
        "climate_summary",
        *ARGS,
        "--parameters",
        "T2M,WS2M",
        "--output",
        str(output),
        stdout=out,
        stderr=err,
    )

    assert sorted(calls) == ["T2M", "WS2M"]
    text = out.getvalue()
    assert "T2M (Temperature Mean, C) grid_points=2" in text
    assert "Jan: min=10.0 max=11.0 mean=10.5" in text
    assert "Mar:" not in text
    assert "Processed 1 of 2 parameters." in text
    assert "WS2M: error: Upstream returned HTTP 503" in err.getvalue()

    saved = json.loads(output.read_text())
    assert saved["dateRange"] == {"start": "20230101", "end": "20230228"}
    assert saved["data"]["WS2M"] == {"error": "Upstream returned HTTP 503"}
    assert saved["data"]["T2M"]["monthly"]["Feb"]["mean"] == 10.5


def test_command_validation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_fetch(monkeypatch)
    with pytest.raises(CommandError, match="bounding box too small"):
        call_command(
            "climate_summary",
            "--lon-min",
            "72",
            "--lon-max",
            "73",
            "--lat-min",
            "20",
            "--lat-max",
            "22",
            stdout=StringIO(),
        )
    assert calls == []
