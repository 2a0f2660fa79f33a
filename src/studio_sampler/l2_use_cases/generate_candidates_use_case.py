"""Use case: derive the ordered candidate locations for a note."""

from __future__ import annotations

from urllib.parse import quote

from studio_sampler.l1_entities.config import SourcesConfig
from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.override_table import ExplicitOverrideTable
from studio_sampler.l1_entities.resolution import LocationCandidate, Tier


def flat_location(base: str, instrument: Instrument, note: str) -> str:
    return f'{base}{instrument.value}/{quote(note, safe="")}.wav'


def nested_location(base: str, instrument: Instrument, note: str) -> str:
    return f'{base}{instrument.value}/{instrument.folder_name}/{quote(note, safe="")}.wav'


class CandidateGenerator:
    """Maps (instrument, note) to ranked locations. Pure: no I/O, same input -> same output.

    Order: explicit override, then for each configured base its flat path
    followed by its nested ``<FolderName>/`` path.
    """

    def __init__(self, sources: SourcesConfig, overrides: ExplicitOverrideTable) -> None:
        self._sources = sources
        self._overrides = overrides

    def generate(self, instrument: Instrument, note: str) -> list[LocationCandidate]:
        entries: list[tuple[str, Tier]] = []

        explicit = self._overrides.get(instrument, note)
        if explicit:
            entries.append((explicit, Tier.EXPLICIT))

        for i, base in enumerate(self._sources.bases_for(instrument)):
            entries.append((flat_location(base, instrument, note), Tier.PRIMARY if i == 0 else Tier.MIRROR))
            entries.append((nested_location(base, instrument, note), Tier.RESTRUCTURED))

        return [LocationCandidate(rank=rank, location=loc, tier=tier) for rank, (loc, tier) in enumerate(entries)]
