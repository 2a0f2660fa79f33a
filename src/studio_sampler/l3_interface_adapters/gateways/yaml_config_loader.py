"""Gateway: YAML settings reader for sample sources, synthesis and upload targets."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from studio_sampler.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('ssm.config')


class YamlConfigLoader:
    """Reads one YAML settings file into a plain dict. Defaults are merged by ``build_app_config``.

    An explicit path must exist. Without one, the first existing file in
    *search_paths* is used, and no file at all means empty settings.
    """

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        self._search_paths = list(DEFAULT_CONFIG_PATHS if search_paths is None else search_paths)

    def load_raw(self, config_path: str | None = None, overrides: dict | None = None) -> dict:
        path = self._locate(config_path)
        data = _read_mapping(path) if path is not None else {}
        if overrides:
            deep_merge(data, overrides)
        log.debug('Settings loaded from %s', path or '<defaults>')
        return data

    def _locate(self, config_path: str | None) -> Path | None:
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in self._search_paths if p.is_file()), None)


def _read_mapping(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding='utf-8'))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f'{path}: top level must be a mapping, got {type(data).__name__}')
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base). Lists are replaced, not extended."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
