"""L1 entity: the fixed set of auditionable instruments."""

from __future__ import annotations

import enum

from studio_sampler.l1_entities.errors import UnknownInstrumentError


class Instrument(enum.Enum):
    PIANO = 'piano'
    GUITAR = 'guitar'
    KALIMBA = 'kalimba'
    SYNTH_BASS = 'synth_bass'
    VIOLIN = 'violin'
    FLUTE = 'flute'
    SAXOPHONE = 'saxophone'
    TRUMPET = 'trumpet'
    ORGAN = 'organ'
    MARIMBA = 'marimba'

    @property
    def display_name(self) -> str:
        """Human label: ``synth_bass`` -> ``Synth Bass``."""
        return ' '.join(word[:1].upper() + word[1:] for word in self.value.split('_'))

    @property
    def folder_name(self) -> str:
        """Nested-layout folder: ``synth_bass`` -> ``SynthBass``."""
        return self.display_name.replace(' ', '')


def parse_instrument(name: str) -> Instrument:
    """Look up an instrument by identifier, case-insensitively."""
    try:
        return Instrument(name.strip().lower())
    except ValueError as exc:
        known = ', '.join(i.value for i in Instrument)
        raise UnknownInstrumentError(f'Unknown instrument: {name!r} (expected one of: {known})') from exc
