"""Gateway: httpx location prober — implements LocationProber port."""

from __future__ import annotations

import logging

import httpx

from studio_sampler.l1_entities.resolution import ProbeOutcome

log = logging.getLogger('ssm.probe')

# A ranged GET instead of HEAD: some CDNs reject HEAD cross-origin but serve GET.
_PROBE_HEADERS = {'Range': 'bytes=0-0'}


class HttpxLocationProber:
    """Checks one location with a single bounded ranged GET. The body is never read."""

    def __init__(self, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport

    async def probe(self, location: str) -> ProbeOutcome:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                async with client.stream('GET', location, headers=_PROBE_HEADERS) as response:
                    status = response.status_code
                    reachable = response.is_success
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.debug('Probe transport failure for %s: %s: %s', location, type(e).__name__, e)
            return ProbeOutcome(location=location, reachable=False, status=0)

        log.debug('Probe %s -> %d', location, status)
        return ProbeOutcome(location=location, reachable=reachable, status=status)
