"""AuditionApp — Textual TUI for playing notes and validating an instrument."""

from __future__ import annotations

import logging

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Button, Select, Static

from studio_sampler.l1_entities.instrument import Instrument
from studio_sampler.l1_entities.note import NOTES_24
from studio_sampler.l1_entities.resolution import Availability
from studio_sampler.l3_interface_adapters.controllers.audition_controller import (
    AuditionController,
    describe_result,
)
from studio_sampler.l4_frameworks_and_drivers.widgets.note_grid import NoteGrid, note_for_button

log = logging.getLogger('ssm.app')

_HINTS = r'\[v] validate all  \[i] re-probe instrument  \[s] stop all  \[q] quit'


class AuditionApp(TextualApp):
    """Note grid for one instrument at a time. All resolution goes through the controller."""

    CSS = """
    #header {
        height: 1;
        background: $primary;
        color: $text;
    }
    #instrument {
        width: 40;
        margin: 1 1 0 1;
    }
    #status {
        height: auto;
        padding: 0 1;
    }
    #report-scroll {
        height: 1fr;
        border: round $surface-lighten-2;
    }
    #hints {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    BINDINGS = [
        Binding('v', 'validate', 'Validate', priority=True),
        Binding('i', 'invalidate', 'Re-probe', priority=True),
        Binding('s', 'stop_all', 'Stop', priority=True),
        Binding('q', 'quit_app', 'Quit', priority=True),
    ]

    def __init__(self, controller: AuditionController, instrument: Instrument = Instrument.PIANO, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self.instrument = instrument
        self.status_text = ''
        self.report_text = ''
        self._validating = False

    def compose(self) -> ComposeResult:
        yield Static('  studio-sampler | Audition', id='header')
        yield Select(
            [(inst.display_name, inst) for inst in Instrument],
            value=self.instrument,
            allow_blank=False,
            id='instrument',
        )
        yield NoteGrid(id='note-grid')
        yield Static(id='status')
        with VerticalScroll(id='report-scroll'):
            yield Static(id='report')
        yield Static(_HINTS, id='hints')

    def on_mount(self) -> None:
        self._set_status('Pick an instrument and play a note. Missing samples play a substitute tone.')

    # --- Helpers ---

    def _set_status(self, text: str) -> None:
        self.status_text = text
        self.query_one('#status', Static).update(text)

    def _set_report(self, text: str) -> None:
        self.report_text = text
        self.query_one('#report', Static).update(text)

    def _refresh_grid(self) -> None:
        grid = self.query_one('#note-grid', NoteGrid)
        for note in NOTES_24:
            grid.set_availability(note, self._controller.availability(self.instrument, note))

    # --- Message Handlers ---

    def on_select_changed(self, event: Select.Changed) -> None:
        if isinstance(event.value, Instrument) and event.value is not self.instrument:
            self.instrument = event.value
            self._refresh_grid()
            self._set_status(f'Instrument: {self.instrument.display_name}')

    def on_button_pressed(self, event: Button.Pressed) -> None:
        note = note_for_button(event.button.id or '')
        if note is not None:
            self.run_worker(self._play(self.instrument, note), group='play')

    async def _play(self, instrument: Instrument, note: str) -> None:
        log.debug('Play requested: %s %s', instrument.value, note)
        grid = self.query_one('#note-grid', NoteGrid)
        if self._controller.availability(instrument, note) is Availability.UNKNOWN:
            grid.set_availability(note, Availability.RESOLVING)
            self._set_status(f'Resolving {instrument.value} {note}…')
        try:
            result = await self._controller.play(instrument, note)
        except Exception as e:
            log.error('Play failed for %s %s: %s', instrument.value, note, e, exc_info=True)
            if instrument is self.instrument:
                grid.set_availability(note, self._controller.availability(instrument, note))
            self._set_status(f'Error: {e}')
            return
        if instrument is self.instrument:
            grid.set_availability(note, result.availability)
        self._set_status(describe_result(result))

    # --- Actions ---

    def action_validate(self) -> None:
        if self._validating:
            self.notify('Validation already running', severity='warning', timeout=3)
            return
        self.run_worker(self._validate(self.instrument), exclusive=True, group='validate')

    async def _validate(self, instrument: Instrument) -> None:
        self._validating = True
        self._set_report(f'Validating {instrument.value}…')
        try:
            report = await self._controller.validate(instrument)
        except Exception as e:
            log.error('Validation failed for %s: %s', instrument.value, e, exc_info=True)
            self._set_report(f'Error: {e}')
            self._set_status(f'Error: {e}')
            return
        finally:
            self._validating = False
        self._set_report(f'{report.summary}\n' + '\n'.join(report.lines))
        self._set_status(report.summary)
        if instrument is self.instrument:
            self._refresh_grid()

    def action_invalidate(self) -> None:
        count = self._controller.invalidate(self.instrument)
        log.info('Re-probe requested for %s (%d cached)', self.instrument.value, count)
        self._refresh_grid()
        self.notify(f'Cleared {count} cached note(s) for {self.instrument.display_name}', timeout=3)

    def action_stop_all(self) -> None:
        self._controller.stop_all()

    def action_quit_app(self) -> None:
        self.exit()
