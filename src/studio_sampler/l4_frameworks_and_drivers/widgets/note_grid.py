"""Note grid — one button per note, colored by resolution availability."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Grid
from textual.widgets import Button

from studio_sampler.l1_entities.note import NOTES_24
from studio_sampler.l1_entities.resolution import Availability

_AVAILABILITY_CLASSES = {a: f'-{a.value}' for a in Availability}


def button_id(note: str) -> str:
    # '#' is not allowed in widget ids
    return f'note-{NOTES_24.index(note)}'


def note_for_button(button_id: str) -> str | None:
    prefix, _, index = button_id.partition('-')
    if prefix != 'note' or not index.isdigit() or int(index) >= len(NOTES_24):
        return None
    return NOTES_24[int(index)]


class NoteGrid(Grid):
    """12 columns × 2 octaves of note buttons."""

    DEFAULT_CSS = """
    NoteGrid {
        grid-size: 12;
        grid-gutter: 1;
        height: auto;
        padding: 1;
    }
    NoteGrid Button {
        width: 100%;
        min-width: 6;
    }
    NoteGrid Button.-available {
        background: $success;
    }
    NoteGrid Button.-unavailable {
        background: $warning;
    }
    NoteGrid Button.-resolving {
        background: $accent;
    }
    """

    def compose(self) -> ComposeResult:
        for note in NOTES_24:
            yield Button(note, id=button_id(note), classes='note-btn -unknown')

    def set_availability(self, note: str, availability: Availability) -> None:
        button = self.query_one(f'#{button_id(note)}', Button)
        for cls in _AVAILABILITY_CLASSES.values():
            button.remove_class(cls)
        button.add_class(_AVAILABILITY_CLASSES[availability])

    def availability_of(self, note: str) -> Availability:
        button = self.query_one(f'#{button_id(note)}', Button)
        for availability, cls in _AVAILABILITY_CLASSES.items():
            if button.has_class(cls):
                return availability
        return Availability.UNKNOWN
