"""L1 entity: the two-octave note range (C2 -> B3)."""

from __future__ import annotations

from studio_sampler.l1_entities.errors import UnknownNoteError

_PITCH_CLASSES = ('C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B')

NOTES_24: tuple[str, ...] = tuple(f'{pc}{octave}' for octave in (2, 3) for pc in _PITCH_CLASSES)

_A4_INDEX = 9 + 12 * 4


def parse_note(name: str) -> str:
    """Validate *name* against the supported range. Returns the canonical spelling."""
    candidate = name.strip()
    candidate = candidate[:1].upper() + candidate[1:]
    if candidate not in NOTES_24:
        raise UnknownNoteError(f'Unknown note: {name!r} (expected {NOTES_24[0]}..{NOTES_24[-1]})')
    return candidate


def note_frequency(name: str) -> float:
    """Equal-tempered frequency in Hz, A4 = 440."""
    note = parse_note(name)
    pitch, octave = note[:-1], int(note[-1])
    index = _PITCH_CLASSES.index(pitch) + 12 * octave
    return 440.0 * (2.0 ** ((index - _A4_INDEX) / 12.0))
