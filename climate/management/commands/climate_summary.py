from __future__ import annotations

import asyncio
import json
from argparse import ArgumentParser
from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from climate.engines.types import MONTHS, ParameterFailure
from climate.exceptions import ClimateValidationError
from climate.serializers import serialize_aggregate
from climate.services import build_pipeline


class Command(BaseCommand):
    help = (
        "Fetch regional daily data for a bounding box and print monthly "
        "min/max/mean per parameter."
    )

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("--lon-min", required=True)
        parser.add_argument("--lon-max", required=True)
        parser.add_argument("--lat-min", required=True)
        parser.add_argument("--lat-max", required=True)
        parser.add_argument("--start", help="YYYYMMDD")
        parser.add_argument("--end", help="YYYYMMDD")
        parser.add_argument(
            "--parameters",
            help="Comma-separated parameter names (default: all)",
        )
        parser.add_argument(
            "--output",
            type=Path,
            help="Write the full JSON result to this file",
        )

    def handle(self, *args: object, **options: Any) -> None:
        params = {
            "longitudeMin": options["lon_min"],
            "longitudeMax": options["lon_max"],
            "latitudeMin": options["lat_min"],
            "latitudeMax": options["lat_max"],
            "startDate": options.get("start"),
            "endDate": options.get("end"),
            "parameters": options.get("parameters"),
        }
        pipeline = build_pipeline()
        try:
            query = pipeline.validate(params)
        except ClimateValidationError as exc:
            raise CommandError(
                f"{exc.message}: {json.dumps(exc.details)}"
            ) from exc
        result = asyncio.run(pipeline.aggregate(query))

        self.stdout.write(
            f"Date range {result.date_range.start}-{result.date_range.end}"
        )
        for name, entry in result.data.items():
            if isinstance(entry, ParameterFailure):
                self.stderr.write(f"{name}: error: {entry.error}")
                continue
            self.stdout.write(
                f"{name} ({entry.description}, {entry.unit}) "
                f"grid_points={entry.grid_point_count}"
            )
            for month in MONTHS:
                stat = entry.monthly[month]
                if stat.mean is None:
                    continue
                self.stdout.write(
                    f"  {month}: min={stat.min} max={stat.max} "
                    f"mean={stat.mean}"
                )

        summaries = sum(
            not isinstance(entry, ParameterFailure)
            for entry in result.data.values()
        )
        self.stdout.write(
            f"Processed {summaries} of {len(query.parameters)} parameters."
        )

        output = options.get("output")
        if output is not None:
            output.write_text(
                json.dumps(serialize_aggregate(result), indent=2)
            )
            self.stdout.write(f"Saved results to {output}")
