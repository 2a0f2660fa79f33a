"""AuditionController — owns the resolution engine and routes notes to playback."""

from __future__ import annotations

import logging

from studio_sampler.l1_entities.config import SourcesConfig
from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.override_table import ExplicitOverrideTable
from studio_sampler.l1_entities.resolution import Availability, ResolutionResult
from studio_sampler.l1_entities.validation_report import ValidationReport
from studio_sampler.l2_use_cases.generate_candidates_use_case import CandidateGenerator
from studio_sampler.l2_use_cases.ports.location_prober import LocationProber
from studio_sampler.l2_use_cases.ports.playback import Playback
from studio_sampler.l2_use_cases.resolution_cache import ResolutionCache
from studio_sampler.l2_use_cases.resolve_sample_use_case import FallbackResolver
from studio_sampler.l2_use_cases.validate_instrument_use_case import InstrumentValidator

log = logging.getLogger('ssm.controller')


def describe_result(result: ResolutionResult) -> str:
    """Status line for a resolved (or missing) note."""
    name = f'{result.instrument.value} {result.note}'
    if result.ok:
        tier = result.matched_tier.label if result.matched_tier else 'Unknown'
        return f'Resolved {name}: {tier} OK'
    statuses = result.statuses
    primary = statuses[0] if len(statuses) > 0 else 0
    fallback = statuses[1] if len(statuses) > 1 else 0
    return f'Sample missing {name}: Primary {primary} · Fallback {fallback}'


class AuditionController:
    """Central orchestrator between the UI and the resolution engine.

    Owns the override table, resolver, cache and validator for the session. The UI
    only asks for notes; the controller decides between sample and substitute tone.
    """

    def __init__(
        self,
        sources: SourcesConfig,
        prober: LocationProber,
        playback: Playback,
        overrides: ExplicitOverrideTable | None = None,
    ) -> None:
        self.overrides = overrides if overrides is not None else ExplicitOverrideTable.from_mapping(sources.overrides)
        self.generator = CandidateGenerator(sources, self.overrides)
        self.resolver = FallbackResolver(self.generator, prober)
        self.cache = ResolutionCache(self.resolver)
        self.validator = InstrumentValidator(self.resolver, self.cache)
        self._playback = playback

    async def play(self, instrument: Instrument, note: str) -> ResolutionResult:
        """Resolve (cached) and play. Falls back to the substitute tone when the sample is
        missing or cannot be loaded."""
        result = await self.cache.resolve_cached(instrument, note)
        if result.location is None:
            self._playback.play_substitute(note)
            return result

        try:
            await self._playback.play_sample(instrument, note, result.location)
        except Exception as e:
            log.warning('Sample playback failed for %s: %s: %s', result.location, type(e).__name__, e)
            self._playback.play_substitute(note)
        return result

    def availability(self, instrument: Instrument, note: str) -> Availability:
        return self.cache.availability(instrument, note)

    async def validate(self, instrument: Instrument, *, refresh_cache: bool = True) -> ValidationReport:
        return await self.validator.validate(instrument, refresh_cache=refresh_cache)

    def set_override(self, instrument: Instrument, note: str, url: str) -> None:
        """Pin a location for one note; the cached result for that note is dropped."""
        self.overrides.set_override(instrument, note, url)
        self.cache.invalidate(instrument, note)

    def invalidate(self, instrument: Instrument, note: str | None = None) -> int:
        return self.cache.invalidate(instrument, note)

    def stop_all(self) -> None:
        self._playback.stop_all()
