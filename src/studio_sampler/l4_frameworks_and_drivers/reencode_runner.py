"""Reencode runner — headless walk over a sample tree, normalizing every WAV in place."""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import time
from collections.abc import Iterator
from pathlib import Path

from studio_sampler.l1_entities.errors import ReencodeError
from studio_sampler.l3_interface_adapters.gateways.ffmpeg_reencoder import reencode_wav

EXCLUDE_DIRS = frozenset({'node_modules', '.git', 'dist', 'build'})


def _err(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def iter_wavs(root: Path) -> Iterator[Path]:
    """Yield ``*.wav`` files under *root* (any case), skipping excluded directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDE_DIRS)
        for name in sorted(filenames):
            if name.lower().endswith('.wav'):
                yield Path(dirpath) / name


def run_reencode(root: Path) -> tuple[int, int, int]:
    """Re-encode every WAV under *root* in place. Returns (total, ok, failed)."""
    _err(f'Re-encoding WAVs under: {root}')
    total = ok = failed = 0
    tmp_dir = Path(tempfile.gettempdir())

    for wav in iter_wavs(root):
        total += 1
        tmp = tmp_dir / f'reenc-{time.time_ns()}-{wav.name}'
        try:
            _err(f'Re-encoding -> 44.1kHz mono s16: {wav}')
            reencode_wav(wav, tmp)
            shutil.copyfile(tmp, wav)
            ok += 1
        except (ReencodeError, OSError) as exc:
            _err(f'Failed: {wav}: {exc}')
            failed += 1
        finally:
            tmp.unlink(missing_ok=True)

    _err(f'Done. Total: {total}, OK: {ok}, Failed: {failed}')
    return total, ok, failed
