"""Use case: upload sample files for an instrument and invalidate their cached resolutions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from studio_sampler.l1_entities.errors import UnknownNoteError
from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.note import parse_note
from studio_sampler.l2_use_cases.ports.sample_uploader import SampleUploader, UploadOutcome
from studio_sampler.l2_use_cases.resolution_cache import ResolutionCache

log = logging.getLogger('ssm.upload')


def format_upload_line(outcome: UploadOutcome) -> str:
    if outcome.ok:
        return f'OK: {outcome.filename} → {outcome.path}'
    prefix = f'ERR {outcome.status}' if outcome.status else 'ERR'
    return f'{prefix}: {outcome.filename} → {outcome.detail}'


@dataclass
class UploadReport:
    outcomes: list[UploadOutcome] = field(default_factory=list)

    @property
    def ok_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def error_count(self) -> int:
        return len(self.outcomes) - self.ok_count

    @property
    def header(self) -> str:
        return f'Upload complete: {self.ok_count} OK, {self.error_count} ERR'

    def render(self) -> str:
        return '\n'.join([self.header, *(format_upload_line(o) for o in self.outcomes)])


class UploadSamplesUseCase:
    """Uploads files as ``<instrument>/<filename>`` one at a time.

    Filenames are kept as-is (including ``#``). Notes whose upload succeeded are
    invalidated in the resolution cache so the next play re-probes them.
    """

    def __init__(self, uploader: SampleUploader, cache: ResolutionCache | None = None) -> None:
        self._uploader = uploader
        self._cache = cache

    async def execute(self, instrument: Instrument, files: list[Path]) -> UploadReport:
        report = UploadReport()
        for file in files:
            repo_path = f'{instrument.value}/{file.name}'
            try:
                content = file.read_bytes()
            except OSError as exc:
                report.outcomes.append(
                    UploadOutcome(filename=file.name, path=repo_path, ok=False, status=0, detail=str(exc))
                )
                continue

            outcome = await self._uploader.upload(repo_path, content, message=f'Add sample {repo_path}')
            report.outcomes.append(outcome)
            if outcome.ok:
                self._invalidate(instrument, file)
            else:
                log.warning('Upload failed for %s: %s %s', repo_path, outcome.status, outcome.detail[:200])

        log.info('%s (%s)', report.header, instrument.value)
        return report

    def _invalidate(self, instrument: Instrument, file: Path) -> None:
        if self._cache is None:
            return
        try:
            note = parse_note(file.stem)
        except UnknownNoteError:
            return
        self._cache.invalidate(instrument, note)
