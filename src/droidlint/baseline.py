# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stage the lint suppression baseline inside the working area."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

BASELINE_SUFFIX = "_lint_baseline"


@dataclass(frozen=True, slots=True)
class BaselineStager:
    """Copy an existing baseline into ``working_directory`` or leave it absent."""

    working_directory: Path

    def destination_for(self, label: str) -> Path:
        """Return the staged baseline location for ``label``."""

        return self.working_directory / f"{label}{BASELINE_SUFFIX}"

    def stage(self, label: str, source: Path | None, *, regenerate: bool) -> Path:
        """Prepare the baseline the engine will read and possibly rewrite.

        When ``regenerate`` is requested or no ``source`` exists the destination
        is left absent, which the engine treats as "create a new baseline".
        The caller's baseline is copied, never moved, and never written back.

        Args:
            label: Target label used to name the staged file.
            source: Caller-supplied baseline, if any.
            regenerate: ``True`` to ignore ``source`` and start from scratch.

        Returns:
            Path: Location of the staged baseline under the working area.

        Raises:
            OSError: If ``source`` cannot be read or the copy fails.
        """

        destination = self.destination_for(label)
        if regenerate or source is None:
            return destination
        shutil.copyfile(source, destination)
        return destination


__all__ = ["BASELINE_SUFFIX", "BaselineStager"]
