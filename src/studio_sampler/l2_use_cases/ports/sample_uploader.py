"""Port: remote sample upload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class UploadOutcome:
    """Result of uploading one file."""

    filename: str
    path: str
    ok: bool
    status: int
    detail: str = ''


class SampleUploader(Protocol):
    """Abstract uploader — one authenticated write per file."""

    async def upload(self, path: str, content: bytes, *, message: str) -> UploadOutcome:
        """Upload *content* to repository *path*. Transport failures come back with status 0."""
        ...
