"""Gateway: numpy sine synthesizer — implements Synthesizer port."""

from __future__ import annotations

import math

import numpy as np

from studio_sampler.l1_entities.config import EnvelopeConfig
from studio_sampler.l1_entities.note import note_frequency


def adsr_envelope(gate_samples: int, total_samples: int, sample_rate: int, env: EnvelopeConfig) -> np.ndarray:
    """Linear ADSR: attack/decay/sustain while the gate is open, release after it closes.

    Segments are shortened proportionally when attack + decay exceed the gate.
    """
    gate_samples = min(gate_samples, total_samples)
    a = max(1, round(env.attack * sample_rate))
    d = max(1, round(env.decay * sample_rate))
    if a + d > gate_samples:
        scale = gate_samples / float(a + d)
        a = max(1, int(a * scale))
        d = max(0, gate_samples - a)
    s_len = max(0, gate_samples - a - d)
    r = min(max(1, round(env.release * sample_rate)), total_samples - gate_samples)

    out = np.zeros(total_samples, dtype=np.float64)
    out[:a] = np.linspace(0.0, 1.0, a, endpoint=False)
    out[a : a + d] = np.linspace(1.0, env.sustain, d, endpoint=False)
    out[a + d : a + d + s_len] = env.sustain
    if r > 0:
        out[gate_samples : gate_samples + r] = np.linspace(env.sustain, 0.0, r, endpoint=False)
    return out


class ToneSynthesizer:
    """Renders a sine at the note's pitch shaped by an ADSR envelope."""

    def __init__(
        self,
        envelope: EnvelopeConfig,
        sample_rate: int = 44100,
        duration: float = 1.0,
        note_length: float = 0.8,
        gain: float = 0.8,
    ) -> None:
        self._envelope = envelope
        self._sample_rate = sample_rate
        self._duration = duration
        self._note_length = min(note_length, duration)
        self._gain = gain

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def render(self, note: str) -> np.ndarray:
        freq = note_frequency(note)
        total = int(self._duration * self._sample_rate)
        gate = int(self._note_length * self._sample_rate)
        t = np.arange(total, dtype=np.float64) / self._sample_rate
        tone = np.sin(2.0 * math.pi * freq * t)
        env = adsr_envelope(gate, total, self._sample_rate, self._envelope)
        return (tone * env * self._gain).astype(np.float32)
