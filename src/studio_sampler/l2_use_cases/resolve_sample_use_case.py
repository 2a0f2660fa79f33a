"""Use case: resolve a note to its first reachable candidate location."""

from __future__ import annotations

import dataclasses
import logging

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.resolution import ProbeOutcome, ResolutionResult
from studio_sampler.l2_use_cases.generate_candidates_use_case import CandidateGenerator
from studio_sampler.l2_use_cases.ports.location_prober import LocationProber

log = logging.getLogger('ssm.resolve')


class FallbackResolver:
    """Probes candidates strictly in rank order and stops at the first reachable one."""

    def __init__(self, generator: CandidateGenerator, prober: LocationProber) -> None:
        self._generator = generator
        self._prober = prober

    async def resolve(self, instrument: Instrument, note: str) -> ResolutionResult:
        """Resolve (instrument, note). Total failure is data (matched_rank -1), never an exception."""
        candidates = self._generator.generate(instrument, note)
        outcomes: list[ProbeOutcome] = []

        for candidate in candidates:
            outcome = await self._prober.probe(candidate.location)
            outcomes.append(dataclasses.replace(outcome, rank=candidate.rank))
            if outcome.reachable:
                log.info(
                    'Resolved %s %s at rank %d (%s): %s',
                    instrument.value,
                    note,
                    candidate.rank,
                    candidate.tier.value,
                    candidate.location,
                )
                return ResolutionResult(
                    instrument=instrument,
                    note=note,
                    location=candidate.location,
                    matched_rank=candidate.rank,
                    matched_tier=candidate.tier,
                    outcomes=tuple(outcomes),
                )

        log.info(
            'No reachable sample for %s %s after %d candidates (statuses=%s)',
            instrument.value,
            note,
            len(outcomes),
            [o.status for o in outcomes],
        )
        return ResolutionResult(instrument=instrument, note=note, outcomes=tuple(outcomes))
