# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception taxonomy shared by the lint action pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class DroidLintError(RuntimeError):
    """Base class for failures raised by the lint action itself."""


class ConfigurationError(DroidLintError):
    """Raised when the action configuration is malformed or inconsistent."""


class ArchiveExtractionError(DroidLintError):
    """Raised when an archive dependency could not be unpacked."""

    def __init__(self, message: str, *, archive: Path | None = None) -> None:
        """Initialise the error with the archive that failed.

        Args:
            message: Human-readable description of the failure.
            archive: Archive whose extraction failed, when known.
        """

        super().__init__(message)
        self.archive = archive


class ArchiveExtractionTimeout(ArchiveExtractionError):
    """Raised when extractions are still pending after the bounded wait."""

    def __init__(self, pending: Sequence[Path], timeout: float) -> None:
        """Initialise the timeout with the archives that did not finish.

        Args:
            pending: Archives whose extraction had not completed.
            timeout: Wait budget in seconds that elapsed.
        """

        names = ", ".join(path.name for path in pending)
        super().__init__(
            f"Timed out after {timeout:.1f}s waiting for archive extraction: {names}",
            archive=pending[0] if pending else None,
        )
        self.pending = tuple(pending)
        self.timeout = timeout


class EngineLaunchError(DroidLintError):
    """Raised when the lint engine artifact cannot be launched."""


__all__ = [
    "ArchiveExtractionError",
    "ArchiveExtractionTimeout",
    "ConfigurationError",
    "DroidLintError",
    "EngineLaunchError",
]
