"""Infrastructure provider configs and app defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from pydantic import BaseModel, Field

from studio_sampler.l1_entities.config import AppConfig
from studio_sampler.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

PRIMARY_BASE = 'https://cdn.jsdelivr.net/gh/shankarelavarasan/studio-samples@main/'
SECONDARY_BASE = 'https://cdn.jsdelivr.net/gh/elavarasan-shankar/studio-samples@main/'

APP_CONFIG_DEFAULTS: dict = {
    'sources': {
        'bases': [PRIMARY_BASE, SECONDARY_BASE],
        'default_base': PRIMARY_BASE,
        'instruments': {},
        'overrides': {},
    },
    'probe': {
        'timeout': 5.0,
    },
    'synth': {
        'sample_rate': 44100,
        'duration': 1.0,
        'note_length': 0.8,
        'gain': 0.8,
        'envelope': {'attack': 0.01, 'decay': 0.1, 'sustain': 0.4, 'release': 0.2},
    },
    'substitute': {
        'length': 0.25,
        'gain': 0.6,
        'envelope': {'attack': 0.01, 'decay': 0.1, 'sustain': 0.3, 'release': 0.2},
    },
    'output': {
        'directory': './samples',
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


class GitHubProviderConfig(BaseModel):
    api_url: str = 'https://api.github.com'
    owner: str = 'shankarelavarasan'
    repo: str = 'studio-samples'
    branch: str = 'main'

    @property
    def label(self) -> str:
        return f'{self.owner}/{self.repo}@{self.branch}'


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    github: GitHubProviderConfig = Field(default_factory=GitHubProviderConfig)
