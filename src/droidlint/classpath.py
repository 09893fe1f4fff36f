# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split dependency lists into archive packages and plain libraries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

ARCHIVE_SUFFIX: Final[str] = ".aar"
LIBRARY_SUFFIX: Final[str] = ".jar"


@dataclass(frozen=True, slots=True)
class PartitionedClasspath:
    """Dependencies grouped by how the engine consumes them."""

    archives: tuple[Path, ...]
    libraries: tuple[Path, ...]


@dataclass(frozen=True, slots=True)
class ClasspathPartitioner:
    """Classify dependencies by file suffix."""

    archive_suffix: str = ARCHIVE_SUFFIX
    library_suffix: str = LIBRARY_SUFFIX

    def partition(self, classpath: Sequence[Path]) -> PartitionedClasspath:
        """Return ``classpath`` split into archives and libraries.

        Args:
            classpath: Mixed dependency list supplied by the caller.

        Returns:
            PartitionedClasspath: Archive packages and libraries.

        Raises:
            ConfigurationError: If any entry matches neither suffix.
        """

        archives = tuple(path for path in classpath if path.suffix == self.archive_suffix)
        libraries = tuple(path for path in classpath if path.suffix == self.library_suffix)
        if len(archives) + len(libraries) != len(classpath):
            known = {self.archive_suffix, self.library_suffix}
            unsupported = ", ".join(str(path) for path in classpath if path.suffix not in known)
            raise ConfigurationError(
                f"Classpath size mismatch: unsupported dependency type(s): {unsupported}",
            )
        return PartitionedClasspath(archives=archives, libraries=libraries)


__all__ = ["ARCHIVE_SUFFIX", "LIBRARY_SUFFIX", "ClasspathPartitioner", "PartitionedClasspath"]
