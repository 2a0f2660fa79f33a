"""Use case: validate every note of an instrument and build a report."""

from __future__ import annotations

import logging

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.note import NOTES_24
from studio_sampler.l1_entities.validation_report import ValidationReport
from studio_sampler.l2_use_cases.resolution_cache import ResolutionCache
from studio_sampler.l2_use_cases.resolve_sample_use_case import FallbackResolver

log = logging.getLogger('ssm.resolve')


class InstrumentValidator:
    """Runs the resolver across the full note set, bypassing the cache for fresh results."""

    def __init__(self, resolver: FallbackResolver, cache: ResolutionCache | None = None) -> None:
        self._resolver = resolver
        self._cache = cache

    async def validate(self, instrument: Instrument, *, refresh_cache: bool = False) -> ValidationReport:
        """Probe all notes. With *refresh_cache*, fresh results are also published to the cache."""
        results = []
        for note in NOTES_24:
            result = await self._resolver.resolve(instrument, note)
            if refresh_cache and self._cache is not None:
                self._cache.store(result)
            results.append(result)

        report = ValidationReport(instrument=instrument, results=tuple(results))
        log.info(report.summary)
        return report
