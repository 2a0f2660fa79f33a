"""Explicit per-note location overrides."""

from __future__ import annotations

from collections.abc import Mapping

from studio_sampler.l1_entities.instrument import Instrument, parse_instrument
from studio_sampler.l1_entities.note import parse_note


class ExplicitOverrideTable:
    """Instrument -> (note -> location) table, consulted first when generating candidates.

    Created empty at startup and handed to the candidate generator by reference;
    only the ``set_*``/``clear`` calls mutate it.
    """

    def __init__(self) -> None:
        self._table: dict[Instrument, dict[str, str]] = {}

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, str]]) -> ExplicitOverrideTable:
        """Build a table from ``{'piano': {'C2': 'https://...'}}`` style config data."""
        table = cls()
        for inst_name, urls in raw.items():
            table.set_overrides(parse_instrument(inst_name), urls)
        return table

    def set_overrides(self, instrument: Instrument, urls: Mapping[str, str]) -> None:
        """Replace every override for *instrument* with *urls*."""
        self._table[instrument] = {parse_note(note): url for note, url in urls.items() if url}

    def set_override(self, instrument: Instrument, note: str, url: str) -> None:
        self._table.setdefault(instrument, {})[parse_note(note)] = url

    def get(self, instrument: Instrument, note: str) -> str | None:
        return self._table.get(instrument, {}).get(note)

    def clear(self, instrument: Instrument | None = None) -> None:
        if instrument is None:
            self._table.clear()
        else:
            self._table.pop(instrument, None)

    def notes_for(self, instrument: Instrument) -> list[str]:
        return list(self._table.get(instrument, {}))

    def __len__(self) -> int:
        return sum(len(urls) for urls in self._table.values())
