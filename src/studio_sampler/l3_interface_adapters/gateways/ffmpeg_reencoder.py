"""Gateway: ffmpeg re-encoder — normalizes WAV files to 44.1 kHz mono 16-bit PCM."""

from __future__ import annotations

import logging
import shutil
import subprocess  # noqa: S404 -- intentional: shells out to ffmpeg with a fixed arg list, not shell=True
from pathlib import Path

from studio_sampler.l1_entities.errors import ReencodeError

log = logging.getLogger('ssm.reencode')

_FFMPEG_TIMEOUT = 120  # seconds
TARGET_SAMPLE_RATE = 44100


def reencode_wav(src: Path, dst: Path) -> None:
    """Re-encode *src* into *dst* as 44.1 kHz mono s16le WAV.

    Raises:
        ReencodeError: ffmpeg is missing, failed, or timed out.
    """
    if shutil.which('ffmpeg') is None:
        raise ReencodeError(
            'ffmpeg is required but not found on PATH.\n  macOS:  brew install ffmpeg\n  Debian: apt install ffmpeg'
        )

    cmd = [
        'ffmpeg',
        '-y',
        '-i',
        str(src),
        '-ac',
        '1',
        '-ar',
        str(TARGET_SAMPLE_RATE),
        '-c:a',
        'pcm_s16le',
        '-v',
        'error',
        str(dst),
    ]
    log.debug('[ffmpeg] %s', ' '.join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, timeout=_FFMPEG_TIMEOUT)  # noqa: S603
    except subprocess.TimeoutExpired as exc:
        raise ReencodeError(f'ffmpeg timed out after {_FFMPEG_TIMEOUT}s processing: {src}') from exc
    except OSError as exc:
        raise ReencodeError(f'Failed to launch ffmpeg: {exc}') from exc

    if result.returncode != 0:
        stderr = result.stderr.decode('utf-8', errors='replace').strip()
        raise ReencodeError(f'ffmpeg exited with code {result.returncode} for: {src}\n{stderr}')
