"""Session-lifetime memoization of resolution results with per-key single-flight."""

from __future__ import annotations

import asyncio
import logging

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.resolution import Availability, ResolutionResult
from studio_sampler.l2_use_cases.resolve_sample_use_case import FallbackResolver

log = logging.getLogger('ssm.cache')

_Key = tuple[Instrument, str]


class ResolutionCache:
    """Caches one ResolutionResult per (instrument, note) for the running session.

    While a resolution is pending the key holds an in-flight future; concurrent
    callers for that key await it instead of probing again. Entries never expire;
    only ``invalidate``/``refresh``/``clear`` remove them.
    """

    def __init__(self, resolver: FallbackResolver) -> None:
        self._resolver = resolver
        self._entries: dict[_Key, ResolutionResult | asyncio.Future[ResolutionResult]] = {}
        self.resolve_count = 0

    async def resolve_cached(self, instrument: Instrument, note: str) -> ResolutionResult:
        key = (instrument, note)
        entry = self._entries.get(key)
        if isinstance(entry, ResolutionResult):
            return entry
        if entry is not None:
            log.debug('Awaiting in-flight resolution for %s %s', instrument.value, note)
            return await asyncio.shield(entry)

        pending: asyncio.Future[ResolutionResult] = asyncio.get_running_loop().create_future()
        self._entries[key] = pending
        self.resolve_count += 1
        log.debug('Cache miss for %s %s (resolution #%d this session)', instrument.value, note, self.resolve_count)
        try:
            result = await self._resolver.resolve(instrument, note)
        except asyncio.CancelledError:
            self._entries.pop(key, None)
            pending.cancel()
            raise
        except Exception as exc:
            self._entries.pop(key, None)
            pending.set_exception(exc)
            pending.exception()  # retrieved here so a lone caller doesn't log "never retrieved"
            raise

        self._entries[key] = result
        pending.set_result(result)
        return result

    def peek(self, instrument: Instrument, note: str) -> ResolutionResult | None:
        """Completed result for the key, or None if unknown or still resolving."""
        entry = self._entries.get((instrument, note))
        return entry if isinstance(entry, ResolutionResult) else None

    def availability(self, instrument: Instrument, note: str) -> Availability:
        entry = self._entries.get((instrument, note))
        if entry is None:
            return Availability.UNKNOWN
        if isinstance(entry, ResolutionResult):
            return entry.availability
        return Availability.RESOLVING

    def store(self, result: ResolutionResult) -> None:
        """Publish a freshly resolved result, replacing any completed entry for its key."""
        key = (result.instrument, result.note)
        if not isinstance(self._entries.get(key), asyncio.Future):
            self._entries[key] = result

    def invalidate(self, instrument: Instrument, note: str | None = None) -> int:
        """Drop completed entries for *instrument* (one note or all). In-flight entries are kept."""
        keys = [
            k
            for k, v in self._entries.items()
            if k[0] is instrument and (note is None or k[1] == note) and isinstance(v, ResolutionResult)
        ]
        for k in keys:
            del self._entries[k]
        if keys:
            log.info('Invalidated %d cached resolution(s) for %s', len(keys), instrument.value)
        return len(keys)

    async def refresh(self, instrument: Instrument, note: str) -> ResolutionResult:
        """Re-probe a note, e.g. after new content was uploaded."""
        self.invalidate(instrument, note)
        return await self.resolve_cached(instrument, note)

    def clear(self) -> None:
        self._entries = {k: v for k, v in self._entries.items() if isinstance(v, asyncio.Future)}

    def __len__(self) -> int:
        return sum(1 for v in self._entries.values() if isinstance(v, ResolutionResult))
