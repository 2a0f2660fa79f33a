"""Resolution entities — candidates, probe outcomes, and resolved results."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from studio_sampler.l1_entities.instrument import Instrument


class Tier(enum.Enum):
    """Priority class a candidate location belongs to."""

    EXPLICIT = 'explicit'
    PRIMARY = 'primary'
    MIRROR = 'mirror'
    RESTRUCTURED = 'restructured'

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Availability(enum.Enum):
    """What the playback layer knows about a note right now."""

    UNKNOWN = 'unknown'
    RESOLVING = 'resolving'
    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'


@dataclass(frozen=True)
class LocationCandidate:
    rank: int
    location: str
    tier: Tier


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing one location. status is 0 for transport failures."""

    location: str
    reachable: bool
    status: int
    rank: int = -1  # stamped by the resolver


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolution attempt for an (instrument, note) pair."""

    instrument: Instrument
    note: str
    location: str | None = None
    matched_rank: int = -1
    matched_tier: Tier | None = None
    outcomes: tuple[ProbeOutcome, ...] = ()

    @property
    def ok(self) -> bool:
        return self.location is not None

    @property
    def availability(self) -> Availability:
        return Availability.AVAILABLE if self.ok else Availability.UNAVAILABLE

    @property
    def statuses(self) -> list[int]:
        return [o.status for o in self.outcomes]
