"""Gateway: file-based sample store — implements SampleStore port."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from studio_sampler.l1_entities.instrument import Instrument

log = logging.getLogger('ssm.package')


class FileSampleStore:
    """Writes generated samples and archives under one output directory."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir
        self._output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save_note(self, instrument: Instrument, note: str, wav_bytes: bytes) -> Path:
        inst_dir = self._output_dir / instrument.value
        inst_dir.mkdir(parents=True, exist_ok=True)
        path = inst_dir / f'{note}.wav'
        path.write_bytes(wav_bytes)
        return path

    def save_zip(self, instrument: Instrument, files: dict[str, bytes]) -> Path:
        path = self._output_dir / f'{instrument.value}-{len(files)}-wavs.zip'
        with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            for note, data in files.items():
                zf.writestr(f'{instrument.value}/{note}.wav', data)
        log.debug('Wrote %d entries to %s', len(files), path.name)
        return path
