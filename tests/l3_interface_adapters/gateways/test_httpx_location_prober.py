"""Tests for HttpxLocationProber — httpx.MockTransport, no network."""

from __future__ import annotations

import httpx
import pytest

from studio_sampler.l3_interface_adapters.gateways.httpx_location_prober import HttpxLocationProber

URL = 'https://cdn.example/gh/me/samples@main/piano/C%232.wav'


def _prober(handler) -> HttpxLocationProber:
    return HttpxLocationProber(timeout=1.0, transport=httpx.MockTransport(handler))


class TestHttpxLocationProber:
    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', [200, 206])
    async def test_success_statuses_are_reachable(self, status):
        outcome = await _prober(lambda request: httpx.Response(status, content=b'R')).probe(URL)
        assert outcome.reachable
        assert outcome.status == status
        assert outcome.location == URL

    @pytest.mark.asyncio
    async def test_not_found(self):
        outcome = await _prober(lambda request: httpx.Response(404)).probe(URL)
        assert not outcome.reachable
        assert outcome.status == 404

    @pytest.mark.asyncio
    async def test_sends_single_byte_range(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(206)

        await _prober(handler).probe(URL)
        assert len(seen) == 1
        assert seen[0].method == 'GET'
        assert seen[0].headers['Range'] == 'bytes=0-0'
        assert seen[0].url.raw_path.endswith(b'/piano/C%232.wav')

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.startswith('/old/'):
                return httpx.Response(302, headers={'Location': 'https://cdn.example/new/C2.wav'})
            return httpx.Response(200)

        outcome = await _prober(handler).probe('https://cdn.example/old/C2.wav')
        assert outcome.reachable
        assert outcome.status == 200

    @pytest.mark.asyncio
    async def test_connect_error_is_status_zero(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        outcome = await _prober(handler).probe(URL)
        assert not outcome.reachable
        assert outcome.status == 0

    @pytest.mark.asyncio
    async def test_timeout_is_status_zero(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout('timed out', request=request)

        outcome = await _prober(handler).probe(URL)
        assert outcome.status == 0
