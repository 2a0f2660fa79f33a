"""Port: placeholder tone synthesis."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class Synthesizer(Protocol):
    """Renders a note to mono float32 PCM in [-1, 1]."""

    @property
    def sample_rate(self) -> int: ...

    def render(self, note: str) -> np.ndarray:
        """Render *note* at the synthesizer's configured length and envelope."""
        ...
