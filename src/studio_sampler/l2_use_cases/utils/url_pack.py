"""Builders for the upload manifest (URL pack) and the upload checklist."""

from __future__ import annotations

import json

from studio_sampler.l1_entities.config import SourcesConfig
from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.note import NOTES_24


def build_url_pack(sources: SourcesConfig) -> dict:
    """Describe where every instrument/note file is expected, relative to the bases."""
    bases = sources.bases or [sources.default_base]
    return {
        'primaryBase': bases[0],
        'fallbackBase': bases[1] if len(bases) > 1 else None,
        'notes': list(NOTES_24),
        'instruments': {
            inst.value: {'urls': {note: f'{inst.value}/{note}.wav' for note in NOTES_24}} for inst in Instrument
        },
    }


def url_pack_json(sources: SourcesConfig) -> str:
    return json.dumps(build_url_pack(sources), indent=2, ensure_ascii=False)


def build_upload_checklist(sources: SourcesConfig, repo_label: str | None = None) -> list[str]:
    bases = sources.bases or [sources.default_base]
    folders = ', '.join(i.value for i in Instrument)
    primary = repo_label or bases[0]
    steps = [
        f'Choose your primary source: {primary}',
    ]
    if len(bases) > 1:
        steps.append(f'(Optional) Prepare the fallback source: {bases[1]}')
    steps += [
        f'Create folders: {folders}',
        f'Upload {len(NOTES_24)} WAVs per instrument: {NOTES_24[0]}..{NOTES_24[-1]}. '
        'Keep the # in filenames, e.g. C#2.wav',
        'After pushing, open a few URLs directly (C2, F#2) and confirm 200 OK',
        'Run `studio-sampler validate <instrument>`',
        'Expect Primary OK or Mirror OK. If NOT OK, check filename casing, folder names, branch and CDN cache',
    ]
    return [f'{i}) {step}' for i, step in enumerate(steps, start=1)]
