# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell-free subprocess wrapper used to launch the lint engine."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are argument lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Execution options applied to a single command."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    discard_stdin: bool = True


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` to an absolute path.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose first element is an absolute path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` capturing text output without raising on failure.

    A timeout is reported as a completed process with exit status ``124``
    and an explanatory line appended to stderr.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options; defaults discard stdin and inherit the
            current environment.

    Returns:
        CompletedProcess[str]: Subprocess metadata with captured output.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args)
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        completed = CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    return completed


__all__ = ["TIMEOUT_RETURNCODE", "CommandOptions", "run_command"]
