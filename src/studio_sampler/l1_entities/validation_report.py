"""Batch validation report entity."""

from __future__ import annotations

from dataclasses import dataclass

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.resolution import ResolutionResult


def format_note_line(result: ResolutionResult) -> str:
    """One report line: which tier matched, or the first two probe statuses on total failure."""
    if result.ok:
        status = result.outcomes[-1].status if result.outcomes else 200
        tier = result.matched_tier.label if result.matched_tier else 'Unknown'
        return f'{result.note}: {status} {tier} OK'
    statuses = result.statuses
    primary = statuses[0] if len(statuses) > 0 else 0
    fallback = statuses[1] if len(statuses) > 1 else 0
    return f'{result.note}: Primary {primary} · Fallback {fallback} · NOT OK'


@dataclass(frozen=True)
class ValidationReport:
    instrument: Instrument
    results: tuple[ResolutionResult, ...]

    @property
    def reachable_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def missing_count(self) -> int:
        return len(self.results) - self.reachable_count

    @property
    def lines(self) -> list[str]:
        return [format_note_line(r) for r in self.results]

    @property
    def summary(self) -> str:
        return f'Report for {self.instrument.value}: {self.reachable_count} OK, {self.missing_count} missing'

    def render(self) -> str:
        return '\n'.join([*self.lines, self.summary])
