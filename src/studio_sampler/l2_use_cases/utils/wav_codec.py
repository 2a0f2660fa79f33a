"""16-bit PCM mono WAV encode/decode."""

from __future__ import annotations

import io
import wave

import numpy as np


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """Serialize float samples in [-1, 1] as a mono 16-bit PCM WAV file."""
    pcm = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    buf = io.BytesIO()
    with wave.open(buf, 'wb') as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)  # int16
        wf.setframerate(sample_rate)
        wf.writeframes((pcm * 32767).astype('<i2').tobytes())
    return buf.getvalue()


def decode_wav(data: bytes) -> tuple[np.ndarray, int]:
    """Decode a 16-bit PCM WAV into float32 frames shaped (n,) or (n, channels)."""
    with wave.open(io.BytesIO(data), 'rb') as wf:
        if wf.getsampwidth() != 2:
            raise ValueError(f'Unsupported sample width: {wf.getsampwidth() * 8} bit')
        channels = wf.getnchannels()
        sample_rate = wf.getframerate()
        raw = wf.readframes(wf.getnframes())
    audio = np.frombuffer(raw, dtype='<i2').astype(np.float32) / 32768.0
    if channels > 1:
        audio = audio.reshape(-1, channels)
    return audio, sample_rate
