"""Supported climate parameters.

The catalog is a value object: build one, hand it to the pipeline, never
mutate it. `DEFAULT_CATALOG` mirrors the parameters exposed by the
regional daily endpoint that the service knows how to describe.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .engines.types import ParameterDescriptor


class ParameterCatalog(Mapping[str, ParameterDescriptor]):
    def __init__(self, descriptors: Iterable[ParameterDescriptor]) -> None:
        entries: dict[str, ParameterDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in entries:
                raise ValueError(
                    f"Duplicate catalog parameter: {descriptor.name}"
                )
            entries[descriptor.name] = descriptor
        self._entries = MappingProxyType(entries)

    def __getitem__(self, name: str) -> ParameterDescriptor:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ParameterCatalog({list(self._entries)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def select(self, requested: Iterable[str] | None) -> tuple[str, ...]:
        """Keep known names in request order, dropping unknowns and repeats.

        No names at all (None, or only blanks) means the whole catalog. A
        list made only of unknown names selects nothing.
        """

        names = [raw.strip() for raw in requested or () if raw.strip()]
        if not names:
            return self.names
        selected: list[str] = []
        for name in names:
            if name in self._entries and name not in selected:
                selected.append(name)
        return tuple(selected)


DEFAULT_CATALOG = ParameterCatalog(
    (
        ParameterDescriptor("T2M", "Temperature Mean", "C"),
        ParameterDescriptor("T2M_MAX", "Temperature Max", "C"),
        ParameterDescriptor("T2M_MIN", "Temperature Min", "C"),
        ParameterDescriptor("PRECTOTCORR", "Precipitation", "mm/day"),
        ParameterDescriptor("WS2M", "Wind Speed", "m/s"),
        ParameterDescriptor("CLOUD_AMT", "Cloud Cover", "%"),
    )
)
