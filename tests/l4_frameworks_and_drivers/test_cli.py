"""Tests for CLI entry point — patches deferred imports at source module level."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from studio_sampler import __version__
from studio_sampler.l4_frameworks_and_drivers.cli import cli
from tests.conftest import BASE_A, FakeProber, FakeUploader

# Patch targets at SOURCE module level (not cli module) because cli() uses
# deferred `from X import Y` which creates local bindings that bypass
# module-level attribute patches.
_PROBER = 'studio_sampler.l4_frameworks_and_drivers.container.HttpxLocationProber'
_UPLOADER = 'studio_sampler.l4_frameworks_and_drivers.container.GitHubSampleUploader'
_REENCODE = 'studio_sampler.l4_frameworks_and_drivers.reencode_runner.run_reencode'
_APP = 'studio_sampler.l4_frameworks_and_drivers.app.AuditionApp'

PINNED = 'https://pinned.example/piano-c2.wav'


@pytest.fixture(autouse=True)
def _restore_ssm_logger():
    logger = logging.getLogger('ssm')
    handlers, level = list(logger.handlers), logger.level
    yield
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers = handlers
    logger.setLevel(level)


def _invoke(config: Path, *args: str, **kwargs):
    return CliRunner().invoke(cli, ['-c', str(config), *args], **kwargs)


class TestGroup:
    def test_version(self):
        result = CliRunner().invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_config_file(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ['-c', str(tmp_path / 'nope.yaml'), 'checklist'])
        assert result.exit_code != 0

    def test_invalid_setting_value(self, tmp_path: Path):
        cfg = tmp_path / 'bad.yaml'
        cfg.write_text('probe:\n  timeout: soon\n', encoding='utf-8')
        result = _invoke(cfg, 'checklist')
        assert result.exit_code == 1
        assert 'Error:' in result.output

    def test_malformed_yaml(self, tmp_path: Path):
        cfg = tmp_path / 'broken.yaml'
        cfg.write_text('sources: [unclosed\n', encoding='utf-8')
        result = _invoke(cfg, 'checklist')
        assert result.exit_code == 1
        assert 'Error:' in result.output
        assert 'Traceback' not in result.output

    def test_invalid_override_in_config(self, tmp_path: Path):
        cfg = tmp_path / 'bad.yaml'
        cfg.write_text('sources:\n  overrides:\n    cello:\n      C2: "https://x/c2.wav"\n', encoding='utf-8')
        result = _invoke(cfg, 'resolve', 'piano', 'C2')
        assert result.exit_code == 1
        assert 'invalid override' in result.output


class TestResolve:
    def test_pinned_override_resolves(self, sample_config_yaml: Path):
        with patch(_PROBER, return_value=FakeProber({PINNED: 200})):
            result = _invoke(sample_config_yaml, 'resolve', 'piano', 'c2')
        assert result.exit_code == 0
        assert 'Resolved piano C2: Explicit OK' in result.output
        assert f'OK #0 200 {PINNED}' in result.output

    def test_missing_note_exits_1_with_trail(self, sample_config_yaml: Path):
        with patch(_PROBER, return_value=FakeProber(default_status=0)):
            result = _invoke(sample_config_yaml, 'resolve', 'violin', 'F#2')
        assert result.exit_code == 1
        assert 'Sample missing violin F#2: Primary 0 · Fallback 0' in result.output
        assert result.output.count('-- #') == 4

    def test_bad_instrument(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'resolve', 'cello', 'C2')
        assert result.exit_code == 2
        assert 'Unknown instrument' in result.output

    def test_bad_note(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'resolve', 'piano', 'C4')
        assert result.exit_code == 2
        assert 'Unknown note' in result.output


class TestValidate:
    def test_requires_instrument_or_all(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'validate')
        assert result.exit_code == 2

    def test_instrument_and_all_rejected(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'validate', 'piano', '--all')
        assert result.exit_code == 2
        assert 'not both' in result.output

    def test_report(self, sample_config_yaml: Path):
        with patch(_PROBER, return_value=FakeProber({PINNED: 200, f'{BASE_A}piano/D2.wav': 200})):
            result = _invoke(sample_config_yaml, 'validate', 'piano')
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 25
        assert lines[0] == 'C2: 200 Explicit OK'
        assert lines[2] == 'D2: 200 Primary OK'
        assert lines[-1] == 'Report for piano: 2 OK, 22 missing'

    def test_all_instruments(self, sample_config_yaml: Path):
        with patch(_PROBER, return_value=FakeProber()):
            result = _invoke(sample_config_yaml, 'validate', '--all')
        assert result.exit_code == 0
        assert result.output.count('Report for ') == 10


class TestGenerate:
    def test_writes_loose_files_and_zip(self, sample_config_yaml: Path, tmp_path: Path):
        out = tmp_path / 'gen'
        result = _invoke(sample_config_yaml, 'generate', 'organ', '-o', str(out), '--zip')
        assert result.exit_code == 0
        assert 'Generated 24 placeholder WAVs for organ.' in result.output
        assert (out / 'organ' / 'F#3.wav').exists()
        assert (out / 'organ-24-wavs.zip').exists()

    def test_defaults_to_configured_output_dir(self, sample_config_yaml: Path, tmp_path: Path):
        result = _invoke(sample_config_yaml, 'generate', 'flute', '--no-loose', '--zip')
        assert result.exit_code == 0
        assert (tmp_path / 'out' / 'flute-24-wavs.zip').exists()
        assert not (tmp_path / 'out' / 'flute').exists()


class TestManifestAndChecklist:
    def test_manifest_stdout(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'manifest')
        assert result.exit_code == 0
        assert json.loads(result.output)['primaryBase'] == BASE_A

    def test_manifest_file(self, sample_config_yaml: Path, tmp_path: Path):
        target = tmp_path / 'urls.json'
        result = _invoke(sample_config_yaml, 'manifest', '-o', str(target))
        assert result.exit_code == 0
        assert json.loads(target.read_text(encoding='utf-8'))['notes'][0] == 'C2'

    def test_checklist_uses_repo_label(self, sample_config_yaml: Path):
        result = _invoke(sample_config_yaml, 'checklist')
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == '1) Choose your primary source: someone/samples@main'


class TestUpload:
    def test_uploads_with_env_token(self, sample_config_yaml: Path, tmp_path: Path):
        wav = tmp_path / 'C#2.wav'
        wav.write_bytes(b'RIFF')
        fake = FakeUploader()
        with patch(_UPLOADER, return_value=fake) as cls:
            result = _invoke(sample_config_yaml, 'upload', 'piano', str(wav), env={'GITHUB_TOKEN': 'abc'})
        assert result.exit_code == 0
        assert 'Upload complete: 1 OK, 0 ERR' in result.output
        assert fake.calls[0][0] == 'piano/C#2.wav'
        assert cls.call_args.kwargs['token'] == 'abc'
        assert cls.call_args.kwargs['owner'] == 'someone'

    def test_cli_options_override_config(self, sample_config_yaml: Path, tmp_path: Path):
        wav = tmp_path / 'C2.wav'
        wav.write_bytes(b'RIFF')
        with patch(_UPLOADER, return_value=FakeUploader()) as cls:
            _invoke(
                sample_config_yaml, 'upload', 'piano', str(wav), '--token', 't', '--repo', 'other', '--branch', 'dev'
            )
        assert cls.call_args.kwargs['repo'] == 'other'
        assert cls.call_args.kwargs['branch'] == 'dev'
        assert cls.call_args.kwargs['owner'] == 'someone'

    def test_errors_exit_1(self, sample_config_yaml: Path, tmp_path: Path):
        wav = tmp_path / 'C2.wav'
        wav.write_bytes(b'RIFF')
        with patch(_UPLOADER, return_value=FakeUploader(failures={'piano/C2.wav': 401})):
            result = _invoke(sample_config_yaml, 'upload', 'piano', str(wav), '--token', 't')
        assert result.exit_code == 1
        assert 'ERR 401: C2.wav → Bad credentials' in result.output

    def test_token_required(self, sample_config_yaml: Path, tmp_path: Path):
        wav = tmp_path / 'C2.wav'
        wav.write_bytes(b'RIFF')
        result = _invoke(sample_config_yaml, 'upload', 'piano', str(wav), env={'GITHUB_TOKEN': None})
        assert result.exit_code == 2


class TestReencode:
    def test_failures_exit_1(self, sample_config_yaml: Path, tmp_path: Path):
        with patch(_REENCODE, return_value=(3, 2, 1)) as run:
            result = _invoke(sample_config_yaml, 'reencode', str(tmp_path))
        assert result.exit_code == 1
        assert run.call_args.args[0] == tmp_path

    def test_success(self, sample_config_yaml: Path, tmp_path: Path):
        with patch(_REENCODE, return_value=(2, 2, 0)):
            result = _invoke(sample_config_yaml, 'reencode', str(tmp_path))
        assert result.exit_code == 0


class TestAudition:
    def test_launches_app_with_instrument(self, sample_config_yaml: Path, tmp_path: Path):
        with patch(_APP) as app_cls:
            result = _invoke(sample_config_yaml, 'audition', '-i', 'kalimba')
        assert result.exit_code == 0
        assert app_cls.call_args.kwargs['instrument'].value == 'kalimba'
        app_cls.return_value.run.assert_called_once()
        assert (tmp_path / 'out' / 'ssm_debug.log').exists()
