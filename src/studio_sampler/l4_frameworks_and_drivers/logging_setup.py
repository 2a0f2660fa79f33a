"""Debug logging setup — file-based for the TUI, stderr for one-shot commands."""

from __future__ import annotations

import logging
from pathlib import Path

_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_file_logging(output_dir: Path) -> Path:
    """Configure file-based debug logging into the output directory."""
    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / 'ssm_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger('ssm')
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.getLogger('ssm.app').info('Debug logging started → %s', log_path)
    return log_path


def setup_console_logging(verbose: bool) -> None:
    """Send ``ssm.*`` records to stderr: WARNING by default, DEBUG with *verbose*."""
    root = logging.getLogger('ssm')
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(getattr(h, '_ssm_console', False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    handler._ssm_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
