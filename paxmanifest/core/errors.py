"""
Exception hierarchy for paxmanifest.

Failures inside the manifest engine are scoped to a single record and are
recorded on that record instead of raised. The exceptions here cover the
collaborator boundaries and configuration.
"""

from __future__ import annotations

from typing import Any


class PaxManifestError(Exception):
    """Base exception for all paxmanifest errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class RecognitionError(PaxManifestError):
    """The recognition service could not read a document."""

    pass


class ConfigError(PaxManifestError):
    """Invalid or incomplete configuration."""

    pass


class ExportError(PaxManifestError):
    """The export writer could not produce the requested artifact."""

    pass
