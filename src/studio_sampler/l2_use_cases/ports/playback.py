"""Port: playback engine that renders resolved samples or a substitute tone."""

from __future__ import annotations

from typing import Protocol

from studio_sampler.l1_entities.instrument import Instrument


class Playback(Protocol):
    """Abstract playback collaborator."""

    async def play_sample(self, instrument: Instrument, note: str, location: str) -> None:
        """Attach the sample at *location* and start it."""
        ...

    def play_substitute(self, note: str) -> None:
        """Play a short synthesized tone in place of a missing sample."""
        ...

    def stop_all(self) -> None:
        ...
