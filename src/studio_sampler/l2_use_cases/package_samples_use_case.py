"""Use case: synthesize placeholder notes for an instrument and package them for upload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.note import NOTES_24
from studio_sampler.l2_use_cases.ports.sample_store import SampleStore
from studio_sampler.l2_use_cases.ports.synthesizer import Synthesizer
from studio_sampler.l2_use_cases.utils.wav_codec import encode_wav

log = logging.getLogger('ssm.package')


@dataclass
class PackageResult:
    instrument: Instrument
    files: dict[str, bytes] = field(default_factory=dict)  # note -> wav bytes
    written: list[Path] = field(default_factory=list)
    archive: Path | None = None


class PackageSamplesUseCase:
    """Renders every note in the range and writes loose files and/or a zip archive."""

    def __init__(self, synthesizer: Synthesizer, store: SampleStore) -> None:
        self._synth = synthesizer
        self._store = store

    def render(self, notes: tuple[str, ...] = NOTES_24) -> dict[str, bytes]:
        return {note: encode_wav(self._synth.render(note), self._synth.sample_rate) for note in notes}

    def execute(self, instrument: Instrument, *, loose: bool = True, archive: bool = False) -> PackageResult:
        result = PackageResult(instrument=instrument, files=self.render())
        if loose:
            for note, data in result.files.items():
                result.written.append(self._store.save_note(instrument, note, data))
        if archive:
            result.archive = self._store.save_zip(instrument, result.files)
        log.info(
            'Packaged %d placeholder notes for %s (loose=%s, archive=%s)',
            len(result.files),
            instrument.value,
            loose,
            result.archive,
        )
        return result
