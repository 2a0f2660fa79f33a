"""Gateway: sounddevice playback — implements Playback port."""

from __future__ import annotations

import logging

import httpx
import numpy as np

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l2_use_cases.ports.synthesizer import Synthesizer
from studio_sampler.l2_use_cases.utils.wav_codec import decode_wav

log = logging.getLogger('ssm.playback')


class SounddevicePlayback:
    """Streams resolved WAV samples and plays them with sounddevice.

    Downloaded buffers are kept per location so repeated notes don't refetch.
    Missing notes play the substitute synthesizer's tone instead.
    """

    def __init__(
        self,
        substitute: Synthesizer,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._substitute = substitute
        self._timeout = timeout
        self._transport = transport
        self._buffers: dict[str, tuple[np.ndarray, int]] = {}

    async def load(self, location: str) -> tuple[np.ndarray, int]:
        buffer = self._buffers.get(location)
        if buffer is None:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = await client.get(location)
                resp.raise_for_status()
            buffer = decode_wav(resp.content)
            self._buffers[location] = buffer
            log.debug('Loaded %s (%d frames @ %d Hz)', location, len(buffer[0]), buffer[1])
        return buffer

    async def play_sample(self, instrument: Instrument, note: str, location: str) -> None:
        audio, sample_rate = await self.load(location)
        self._play(audio, sample_rate)

    def play_substitute(self, note: str) -> None:
        self._play(self._substitute.render(note), self._substitute.sample_rate)

    def stop_all(self) -> None:
        import sounddevice as sd  # noqa: PLC0415 -- deferred: PortAudio not loaded until audio is played

        sd.stop()

    @staticmethod
    def _play(audio: np.ndarray, sample_rate: int) -> None:  # pragma: no cover -- requires audio hardware
        import sounddevice as sd  # noqa: PLC0415 -- deferred: PortAudio not loaded until audio is played

        sd.play(audio, samplerate=sample_rate)
