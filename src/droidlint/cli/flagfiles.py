# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expansion of ``@file`` parameter files into argument lists."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Final

FLAGFILE_PREFIX: Final[str] = "@"


def expand_flagfiles(args: Iterable[str]) -> list[str]:
    """Replace every ``@path`` argument with the lines of ``path``.

    Parameter files hold one argument per line; blank lines are ignored.
    ``@@value`` escapes a literal argument starting with ``@``.

    Args:
        args: Raw command-line arguments.

    Returns:
        list[str]: Arguments with parameter files inlined.

    Raises:
        OSError: If a parameter file cannot be read.
    """

    expanded: list[str] = []
    for arg in args:
        if arg.startswith(FLAGFILE_PREFIX * 2):
            expanded.append(arg[1:])
        elif arg.startswith(FLAGFILE_PREFIX) and len(arg) > 1:
            content = Path(arg[1:]).read_text(encoding="utf-8")
            expanded.extend(line for line in content.splitlines() if line.strip())
        else:
            expanded.append(arg)
    return expanded


__all__ = ["expand_flagfiles"]
