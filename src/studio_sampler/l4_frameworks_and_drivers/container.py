"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from studio_sampler.l1_entities.config import AppConfig
from studio_sampler.l2_use_cases.package_samples_use_case import PackageSamplesUseCase
from studio_sampler.l2_use_cases.ports.location_prober import LocationProber
from studio_sampler.l2_use_cases.ports.playback import Playback
from studio_sampler.l2_use_cases.ports.sample_uploader import SampleUploader
from studio_sampler.l2_use_cases.upload_samples_use_case import UploadSamplesUseCase
from studio_sampler.l3_interface_adapters.controllers.audition_controller import AuditionController
from studio_sampler.l3_interface_adapters.gateways.file_sample_store import FileSampleStore
from studio_sampler.l3_interface_adapters.gateways.github_uploader import GitHubSampleUploader
from studio_sampler.l3_interface_adapters.gateways.httpx_location_prober import HttpxLocationProber
from studio_sampler.l3_interface_adapters.gateways.sounddevice_playback import SounddevicePlayback
from studio_sampler.l3_interface_adapters.gateways.tone_synthesizer import ToneSynthesizer
from studio_sampler.l4_frameworks_and_drivers.infra_config import InfraConfig


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        infra: InfraConfig | None = None,
        prober: LocationProber | None = None,
        playback: Playback | None = None,
    ) -> None:
        self.config = config
        self.infra = infra or InfraConfig()

        self.placeholder_synth = ToneSynthesizer(
            config.synth.envelope,
            sample_rate=config.synth.sample_rate,
            duration=config.synth.duration,
            note_length=config.synth.note_length,
            gain=config.synth.gain,
        )
        self.substitute_synth = ToneSynthesizer(
            config.substitute.envelope,
            sample_rate=config.synth.sample_rate,
            duration=config.substitute.length + config.substitute.envelope.release,
            note_length=config.substitute.length,
            gain=config.substitute.gain,
        )
        self.prober: LocationProber = prober or HttpxLocationProber(timeout=config.probe.timeout)
        self.playback: Playback = playback or SounddevicePlayback(self.substitute_synth)

        self.controller = AuditionController(
            sources=config.sources,
            prober=self.prober,
            playback=self.playback,
        )

    def packager(self, output_dir: Path | None = None) -> PackageSamplesUseCase:
        store = FileSampleStore(output_dir or Path(self.config.output.directory))
        return PackageSamplesUseCase(self.placeholder_synth, store)

    def uploader(self, token: str, uploader: SampleUploader | None = None) -> UploadSamplesUseCase:
        gh = self.infra.github
        uploader = uploader or GitHubSampleUploader(
            owner=gh.owner,
            repo=gh.repo,
            token=token,
            branch=gh.branch,
            api_url=gh.api_url,
        )
        return UploadSamplesUseCase(uploader, self.controller.cache)
