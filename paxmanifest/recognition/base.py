"""
Recognition service interface.

A recognizer turns one document image into extracted passenger fields, or
raises an exception whose message can be shown to the user.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from paxmanifest.core.schema import ExtractedFields

DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class DocumentFile:
    """A document blob handed to the recognition service."""

    name: str
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @classmethod
    def from_path(cls, path: str | Path) -> DocumentFile:
        """
        Read a document from disk.

        The MIME type is guessed from the file name, falling back to JPEG.
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            data=path.read_bytes(),
            mime_type=mime_type or DEFAULT_MIME_TYPE,
        )


@runtime_checkable
class Recognizer(Protocol):
    """Extracts passenger fields from a document."""

    async def extract(self, document: DocumentFile) -> ExtractedFields:
        """
        Extract fields from one document.

        Raises:
            Exception: Any failure; its message is recorded on the record.
        """
        ...
