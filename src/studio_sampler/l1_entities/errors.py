"""Domain error types."""


class UnknownInstrumentError(ValueError):
    """Raised when an identifier is not one of the supported instruments."""


class UnknownNoteError(ValueError):
    """Raised when a note name is outside the supported 24-note range."""


class ReencodeError(RuntimeError):
    """Raised when ffmpeg cannot re-encode a sample file."""
