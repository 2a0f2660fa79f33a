"""CLI entry point for studio-sampler."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from studio_sampler import __version__
from studio_sampler.l1_entities.errors import UnknownInstrumentError, UnknownNoteError
from studio_sampler.l1_entities.instrument import Instrument, parse_instrument
from studio_sampler.l1_entities.note import parse_note


def _instrument_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_instrument(value)
    except UnknownInstrumentError as e:
        raise click.BadParameter(str(e)) from e


def _note_option(ctx, param, value):
    try:
        return parse_note(value)
    except UnknownNoteError as e:
        raise click.BadParameter(str(e)) from e


def _load_settings(config_path: str | None):
    from studio_sampler.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from studio_sampler.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        InfraConfig,
        build_app_config,
    )

    raw = YamlConfigLoader().load_raw(config_path)
    return build_app_config(raw), InfraConfig.model_validate(raw)


def _container(ctx: click.Context):
    from studio_sampler.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: httpx/numpy not loaded on --help
        DependencyContainer,
    )

    config, infra = ctx.obj['settings']
    try:
        return DependencyContainer(config, infra)
    except (UnknownInstrumentError, UnknownNoteError) as e:
        click.echo(f'Error: invalid override in config: {e}', err=True)
        sys.exit(1)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option('-v', '--verbose', is_flag=True, help='Log probe and resolution details to stderr.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path, verbose):
    """studio-sampler -- audition remote instrument samples with fallback resolution."""
    import yaml  # noqa: PLC0415 -- deferred: not needed for --help

    from studio_sampler.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_console_logging,
    )

    try:
        settings = _load_settings(config_path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    ctx.obj = {'settings': settings}
    if ctx.invoked_subcommand != 'audition':
        setup_console_logging(verbose)


@cli.command()
@click.argument('instrument', callback=_instrument_option)
@click.argument('note', callback=_note_option)
@click.pass_context
def resolve(ctx, instrument: Instrument, note: str):
    """Resolve one note and print the probe trail."""
    container = _container(ctx)
    result = asyncio.run(container.controller.resolver.resolve(instrument, note))

    from studio_sampler.l3_interface_adapters.controllers.audition_controller import (  # noqa: PLC0415 -- deferred: loaded with the container
        describe_result,
    )

    click.echo(describe_result(result))
    for outcome in result.outcomes:
        mark = 'OK ' if outcome.reachable else '-- '
        click.echo(f'  {mark}#{outcome.rank} {outcome.status:>3} {outcome.location}')
    if not result.ok:
        sys.exit(1)


@cli.command()
@click.argument('instrument', required=False, callback=_instrument_option)
@click.option('--all', 'all_instruments', is_flag=True, help='Validate every instrument.')
@click.pass_context
def validate(ctx, instrument: Instrument | None, all_instruments: bool):
    """Probe all 24 notes of an instrument and print a per-note report."""
    if instrument is None and not all_instruments:
        raise click.UsageError('Give an INSTRUMENT or --all.')
    if instrument is not None and all_instruments:
        raise click.UsageError('Give an INSTRUMENT or --all, not both.')
    targets = list(Instrument) if all_instruments else [instrument]
    container = _container(ctx)

    async def _run():
        return [await container.controller.validate(inst, refresh_cache=False) for inst in targets]

    reports = asyncio.run(_run())
    for i, report in enumerate(reports):
        if i:
            click.echo('')
        click.echo(report.render())


@cli.command()
@click.argument('instrument', callback=_instrument_option)
@click.option(
    '-o',
    '--output-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Where to write samples (defaults to output.directory from config).',
)
@click.option('--zip', 'archive', is_flag=True, help='Also write <instrument>-24-wavs.zip.')
@click.option('--no-loose', is_flag=True, help='Skip writing individual <note>.wav files.')
@click.pass_context
def generate(ctx, instrument: Instrument, output_dir: str | None, archive: bool, no_loose: bool):
    """Synthesize placeholder sine WAVs for every note of an instrument."""
    container = _container(ctx)
    result = container.packager(Path(output_dir) if output_dir else None).execute(
        instrument,
        loose=not no_loose,
        archive=archive,
    )
    click.echo(f'Generated {len(result.files)} placeholder WAVs for {instrument.value}.')
    if result.written:
        click.echo(f'  Files:   {result.written[0].parent}')
    if result.archive is not None:
        click.echo(f'  Archive: {result.archive}')


@cli.command()
@click.option('-o', '--output', default=None, type=click.Path(dir_okay=False), help='Write JSON to a file.')
@click.pass_context
def manifest(ctx, output: str | None):
    """Print the instrument URL pack (expected file layout) as JSON."""
    from studio_sampler.l2_use_cases.utils.url_pack import url_pack_json  # noqa: PLC0415 -- deferred: not needed for --help

    config, _infra = ctx.obj['settings']
    text = url_pack_json(config.sources)
    if output:
        Path(output).write_text(text + '\n', encoding='utf-8')
        click.echo(f'Wrote {output}')
    else:
        click.echo(text)


@cli.command()
@click.pass_context
def checklist(ctx):
    """Show the steps for publishing samples."""
    from studio_sampler.l2_use_cases.utils.url_pack import build_upload_checklist  # noqa: PLC0415 -- deferred: not needed for --help

    config, infra = ctx.obj['settings']
    for line in build_upload_checklist(config.sources, infra.github.label):
        click.echo(line)


@cli.command()
@click.argument('instrument', callback=_instrument_option)
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--token', envvar='GITHUB_TOKEN', required=True, help='GitHub token (or $GITHUB_TOKEN).')
@click.option('--owner', default=None, help='Repository owner (overrides config).')
@click.option('--repo', default=None, help='Repository name (overrides config).')
@click.option('--branch', default=None, help='Target branch (overrides config).')
@click.pass_context
def upload(ctx, instrument: Instrument, files: tuple[Path, ...], token, owner, repo, branch):
    """Upload WAV files to <instrument>/ in the samples repository."""
    _config, infra = ctx.obj['settings']
    infra.github = infra.github.model_copy(
        update={k: v for k, v in {'owner': owner, 'repo': repo, 'branch': branch}.items() if v}
    )
    container = _container(ctx)
    click.echo(f'Uploading {len(files)} file(s) to {infra.github.label}/{instrument.value}/…', err=True)
    report = asyncio.run(container.uploader(token).execute(instrument, list(files)))
    click.echo(report.render())
    if report.error_count:
        sys.exit(1)


@cli.command()
@click.argument('root', type=click.Path(exists=True, file_okay=False, path_type=Path))
def reencode(root: Path):
    """Re-encode every WAV under ROOT to 44.1 kHz mono 16-bit PCM (requires ffmpeg)."""
    from studio_sampler.l4_frameworks_and_drivers.reencode_runner import run_reencode  # noqa: PLC0415 -- deferred: reencode only

    _total, _ok, failed = run_reencode(root)
    if failed:
        sys.exit(1)


@cli.command()
@click.option(
    '-i',
    '--instrument',
    default='piano',
    callback=_instrument_option,
    help='Instrument selected on start.',
)
@click.pass_context
def audition(ctx, instrument: Instrument):
    """Open the note-grid TUI."""
    from studio_sampler.l4_frameworks_and_drivers.app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for other commands
        AuditionApp,
    )
    from studio_sampler.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: TUI only
        setup_file_logging,
    )

    config, _infra = ctx.obj['settings']
    setup_file_logging(Path(config.output.directory))
    container = _container(ctx)
    AuditionApp(controller=container.controller, instrument=instrument).run()
