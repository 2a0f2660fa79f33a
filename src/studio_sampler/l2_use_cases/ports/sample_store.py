"""Port: storage for generated placeholder samples."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from studio_sampler.l1_entities.instrument import Instrument


class SampleStore(Protocol):
    """Abstract sink for packaged samples."""

    def save_note(self, instrument: Instrument, note: str, wav_bytes: bytes) -> Path:
        """Write one note as ``<instrument>/<note>.wav``."""
        ...

    def save_zip(self, instrument: Instrument, files: dict[str, bytes]) -> Path:
        """Write every note into one zip archive."""
        ...
