# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-invocation capture of standard output.

A single routing proxy is installed on ``sys.stdout`` and each invocation binds
its own sink through a context variable. Code outside a capture, including
other threads, keeps writing to the original stream.
"""

from __future__ import annotations

import io
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TextIO

_SINK: ContextVar[TextIO | None] = ContextVar("droidlint_stdout_sink", default=None)
_INSTALL_LOCK = threading.Lock()


class ContextRoutedStream(io.TextIOBase):
    """Text stream forwarding writes to the sink bound in the current context."""

    def __init__(self, fallback: TextIO) -> None:
        """Wrap ``fallback``, the stream used when no capture is active."""

        super().__init__()
        self.fallback = fallback

    def _target(self) -> TextIO:
        sink = _SINK.get()
        return self.fallback if sink is None else sink

    def write(self, text: str) -> int:  # type: ignore[override]
        """Write ``text`` to the active sink and return the character count."""

        return self._target().write(text)

    def flush(self) -> None:
        """Flush the active sink."""

        self._target().flush()

    def isatty(self) -> bool:
        """Report TTY support of the active sink."""

        return self._target().isatty()

    def fileno(self) -> int:
        """Return the descriptor of the original stream."""

        return self.fallback.fileno()

    @property
    def encoding(self) -> str:  # type: ignore[override]
        """Return the encoding of the original stream."""

        return getattr(self.fallback, "encoding", "utf-8")

    def writable(self) -> bool:
        """Return ``True``; the proxy always accepts writes."""

        return True


def install_stdout_router() -> ContextRoutedStream:
    """Install the routing proxy on ``sys.stdout`` if it is not already present.

    Returns:
        ContextRoutedStream: The proxy currently bound to ``sys.stdout``.
    """

    with _INSTALL_LOCK:
        current = sys.stdout
        if isinstance(current, ContextRoutedStream):
            return current
        router = ContextRoutedStream(current)
        sys.stdout = router
        return router


@contextmanager
def capture_stdout() -> Iterator[io.StringIO]:
    """Capture standard output written from the current context.

    Yields:
        io.StringIO: Buffer receiving everything printed while the context is
        active. The previous sink is restored on every exit path.
    """

    install_stdout_router()
    buffer = io.StringIO()
    token = _SINK.set(buffer)
    try:
        yield buffer
    finally:
        _SINK.reset(token)


__all__ = ["ContextRoutedStream", "capture_stdout", "install_stdout_router"]
