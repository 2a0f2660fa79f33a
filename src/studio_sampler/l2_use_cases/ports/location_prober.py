"""Port: remote location existence check."""

from __future__ import annotations

from typing import Protocol

from studio_sampler.l1_entities.resolution import ProbeOutcome


class LocationProber(Protocol):
    """Abstract prober — one non-destructive check per call."""

    async def probe(self, location: str) -> ProbeOutcome:
        """Check *location*. Never raises: transport failures come back as status 0."""
        ...
