"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from studio_sampler.l1_entities.instrument import Instrument


def _with_trailing_slash(base: str) -> str:
    return base if base.endswith('/') else base + '/'


class SourcesConfig(BaseModel):
    bases: list[str]
    default_base: str
    instruments: dict[str, list[str]] = Field(default_factory=dict)  # per-instrument base lists
    overrides: dict[str, dict[str, str]] = Field(default_factory=dict)

    @field_validator('bases')
    @classmethod
    def _normalize_bases(cls, value: list[str]) -> list[str]:
        return [_with_trailing_slash(b) for b in value]

    @field_validator('default_base')
    @classmethod
    def _normalize_default(cls, value: str) -> str:
        return _with_trailing_slash(value)

    @field_validator('instruments')
    @classmethod
    def _normalize_instrument_bases(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        return {name: [_with_trailing_slash(b) for b in bases] for name, bases in value.items()}

    def bases_for(self, instrument: Instrument) -> list[str]:
        """Ordered base locations for *instrument*. Falls back to the single default base."""
        bases = self.instruments.get(instrument.value, self.bases)
        return list(bases) if bases else [self.default_base]


class ProbeConfig(BaseModel):
    timeout: float


class EnvelopeConfig(BaseModel):
    attack: float
    decay: float
    sustain: float
    release: float


class SynthConfig(BaseModel):
    """Placeholder sample rendering."""

    sample_rate: int
    duration: float  # total rendered length
    note_length: float  # gate time inside the render
    gain: float
    envelope: EnvelopeConfig


class SubstituteToneConfig(BaseModel):
    """Tone played when no sample is available for a note."""

    length: float
    gain: float
    envelope: EnvelopeConfig


class OutputConfig(BaseModel):
    directory: str


class AppConfig(BaseModel):
    sources: SourcesConfig
    probe: ProbeConfig
    synth: SynthConfig
    substitute: SubstituteToneConfig
    output: OutputConfig
