"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from studio_sampler.l1_entities.config import AppConfig, SourcesConfig
from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.override_table import ExplicitOverrideTable
from studio_sampler.l1_entities.resolution import ProbeOutcome
from studio_sampler.l2_use_cases.generate_candidates_use_case import CandidateGenerator
from studio_sampler.l2_use_cases.ports.sample_uploader import UploadOutcome
from studio_sampler.l2_use_cases.resolve_sample_use_case import FallbackResolver
from studio_sampler.l4_frameworks_and_drivers.infra_config import build_app_config

BASE_A = 'https://a.example/samples/'
BASE_B = 'https://b.example/mirror/'

# --- Protocol-conforming Fakes ---


class FakeProber:
    """Fake LocationProber — status per location, 404 for anything unlisted."""

    def __init__(self, statuses: dict[str, int] | None = None, default_status: int = 404):
        self._statuses = dict(statuses or {})
        self._default = default_status
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def probe(self, location: str) -> ProbeOutcome:
        self.calls.append(location)
        if self.gate is not None:
            await self.gate.wait()
        status = self._statuses.get(location, self._default)
        return ProbeOutcome(location=location, reachable=200 <= status < 300, status=status)

    def set_status(self, location: str, status: int) -> None:
        self._statuses[location] = status


class FakePlayback:
    """Fake Playback — records what would have been played."""

    def __init__(self) -> None:
        self.sample_calls: list[tuple[Instrument, str, str]] = []
        self.substitute_calls: list[str] = []
        self.stop_calls = 0
        self.fail_with: Exception | None = None

    async def play_sample(self, instrument: Instrument, note: str, location: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sample_calls.append((instrument, note, location))

    def play_substitute(self, note: str) -> None:
        self.substitute_calls.append(note)

    def stop_all(self) -> None:
        self.stop_calls += 1


class FakeUploader:
    """Fake SampleUploader — succeeds unless a status is registered for the path."""

    def __init__(self, failures: dict[str, int] | None = None) -> None:
        self._failures = dict(failures or {})
        self.calls: list[tuple[str, bytes, str]] = []

    async def upload(self, path: str, content: bytes, *, message: str) -> UploadOutcome:
        self.calls.append((path, content, message))
        filename = path.rsplit('/', 1)[-1]
        status = self._failures.get(path)
        if status is not None:
            return UploadOutcome(filename=filename, path=path, ok=False, status=status, detail='Bad credentials')
        return UploadOutcome(filename=filename, path=path, ok=True, status=201)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def two_base_sources() -> SourcesConfig:
    return SourcesConfig(bases=[BASE_A, BASE_B], default_base=BASE_A)


@pytest.fixture
def overrides() -> ExplicitOverrideTable:
    return ExplicitOverrideTable()


@pytest.fixture
def generator(two_base_sources: SourcesConfig, overrides: ExplicitOverrideTable) -> CandidateGenerator:
    return CandidateGenerator(two_base_sources, overrides)


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()


@pytest.fixture
def resolver(generator: CandidateGenerator, fake_prober: FakeProber) -> FallbackResolver:
    return FallbackResolver(generator, fake_prober)


@pytest.fixture
def fake_playback() -> FakePlayback:
    return FakePlayback()


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = f"""\
sources:
  bases:
    - "{BASE_A}"
    - "{BASE_B}"
  default_base: "{BASE_A}"
  overrides:
    piano:
      C2: "https://pinned.example/piano-c2.wav"
probe:
  timeout: 2.5
output:
  directory: "{tmp_path / 'out'}"
github:
  owner: "someone"
  repo: "samples"
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
