# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strip machine-specific path prefixes from lint result files."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from re import Pattern
from typing import Final

_PATH_CHAR: Final[str] = r"[^\s\"'<>/]"
_QUOTED_PATH_CHAR: Final[str] = r"[^\"'<>/\r\n]"
QUOTED_EXEC_ROOT_PATTERN: Final[Pattern[str]] = re.compile(
    rf"(?<=[\"'])(?:/{_QUOTED_PATH_CHAR}+)*?/execroot/{_QUOTED_PATH_CHAR}+/"
)
EXEC_ROOT_PATTERN: Final[Pattern[str]] = re.compile(rf"(?<!{_PATH_CHAR})(?:/{_PATH_CHAR}+)*?/execroot/{_PATH_CHAR}+/")
OUTPUT_CONFIG_PATTERN: Final[Pattern[str]] = re.compile(rf"\bbazel-out/{_PATH_CHAR}+/bin/")
OUTPUT_CONFIG_REPLACEMENT: Final[str] = "bazel-out/bin/"


@dataclass(frozen=True, slots=True)
class OutputSanitizer:
    """Rewrite absolute, sandbox-specific paths into build-tree relative ones.

    Substitutions run in order: literal ``prefixes`` (such as the invocation
    working area), then any ``.../execroot/<workspace>/`` root, then
    configuration-specific ``bazel-out/<config>/bin/`` segments. Quoted values
    may contain spaces; unquoted paths end at whitespace. Text outside the
    matched spans is left untouched, byte for byte.
    """

    prefixes: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def for_roots(cls, roots: Iterable[Path]) -> OutputSanitizer:
        """Return a sanitizer that also strips each of ``roots``.

        Both the literal and the symlink-resolved spelling of every root are
        removed, longest first.
        """

        spellings: set[str] = set()
        for root in roots:
            spellings.add(str(root).rstrip("/"))
            spellings.add(str(root.resolve()).rstrip("/"))
        return cls(prefixes=tuple(sorted((item for item in spellings if item), key=len, reverse=True)))

    def sanitize(self, content: str) -> str:
        """Return ``content`` with every known path prefix removed."""

        for prefix in self.prefixes:
            content = re.sub(rf"{re.escape(prefix)}/", "", content)
        content = QUOTED_EXEC_ROOT_PATTERN.sub("", content)
        content = EXEC_ROOT_PATTERN.sub("", content)
        return OUTPUT_CONFIG_PATTERN.sub(OUTPUT_CONFIG_REPLACEMENT, content)

    def sanitize_file(self, path: Path) -> None:
        """Rewrite ``path`` in place.

        Line endings and bytes that are not valid UTF-8 are written back
        unchanged.

        Raises:
            OSError: If the file cannot be read or written.
        """

        with path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as handle:
            content = handle.read()
        sanitized = self.sanitize(content)
        if sanitized != content:
            with path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
                handle.write(sanitized)


__all__ = ["EXEC_ROOT_PATTERN", "OUTPUT_CONFIG_PATTERN", "QUOTED_EXEC_ROOT_PATTERN", "OutputSanitizer"]
