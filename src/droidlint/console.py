# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console management for diagnostic output on standard error."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stderr`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by colour and emoji settings.

    Consoles write to standard error so action messages never mix with the
    engine output captured from standard output.
    """

    def __init__(self) -> None:
        """Initialise the manager with an empty cache keyed by presentation flags."""

        self._cache: dict[tuple[bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return a Rich console configured for ``color`` and ``emoji`` preferences.

        Args:
            color: ``True`` when ANSI colour output should be enabled.
            emoji: ``True`` when Rich should render emoji glyphs.

        Returns:
            Console: Cached or newly constructed console matching the preferences.
        """

        tty = detect_tty()
        key = (color, emoji, tty)
        if key not in self._cache:
            color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
                "auto" if color and tty else None
            )
            self._cache[key] = Console(
                stderr=True,
                color_system=color_system,
                force_terminal=tty,
                no_color=not (color and tty),
                emoji=emoji,
                soft_wrap=True,
            )
        return self._cache[key]


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager` instance."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
