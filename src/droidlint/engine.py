# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Backends capable of running the external lint engine."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Protocol, runtime_checkable

from .errors import EngineLaunchError
from .process import CommandOptions, run_command

ERRNO_SUCCESS: Final[int] = 0
ERRNO_ERRORS: Final[int] = 1
ERRNO_CREATED_BASELINE: Final[int] = 6

ANDROID_USER_HOME_ENV: Final[str] = "ANDROID_USER_HOME"
JAVA_HOME_ENV: Final[str] = "JAVA_HOME"
_JAR_SUFFIX: Final[str] = ".jar"


@runtime_checkable
class LintEngine(Protocol):
    """Invocable lint tool: settings and arguments in, integer status out."""

    def set_check_dependencies(self, enabled: bool) -> None:
        """Toggle analysis of the module's dependencies."""

        raise NotImplementedError

    def set_baseline(self, path: Path | None) -> None:
        """Set the baseline file the engine reads and may create."""

        raise NotImplementedError

    def set_cache_directory(self, path: Path | None) -> None:
        """Set the directory the engine may use for its caches."""

        raise NotImplementedError

    def invoke(self, arguments: Sequence[str]) -> int:
        """Run the engine with ``arguments`` and return its exit status."""

        raise NotImplementedError


@dataclass(slots=True)
class EngineSettings:
    """Out-of-band engine settings not expressed in the adapter's flags."""

    check_dependencies: bool = False
    baseline: Path | None = None
    cache_directory: Path | None = None

    def extra_arguments(self) -> list[str]:
        """Return the command-line form of these settings."""

        extra = ["--check-dependencies" if self.check_dependencies else "--skip-dependencies"]
        if self.baseline is not None:
            extra.extend(["--baseline", str(self.baseline)])
        return extra


@dataclass(slots=True)
class _ConfigurableEngine:
    """Shared setter implementation for concrete engines."""

    settings: EngineSettings = field(default_factory=EngineSettings)

    def set_check_dependencies(self, enabled: bool) -> None:
        self.settings.check_dependencies = enabled

    def set_baseline(self, path: Path | None) -> None:
        self.settings.baseline = path

    def set_cache_directory(self, path: Path | None) -> None:
        self.settings.cache_directory = path


EngineRunner = Callable[..., CompletedProcess[str]]


@dataclass(slots=True)
class SubprocessLintEngine(_ConfigurableEngine):
    """Launch the lint tool artifact as a child process.

    Jar artifacts run through ``java -jar`` (preferring ``$JAVA_HOME/bin/java``);
    anything else is executed directly. Child output is forwarded to
    ``sys.stdout`` so per-invocation capture sees it.
    """

    tool: Path = field(default_factory=Path)
    timeout: float | None = None
    runner: EngineRunner = run_command
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def command(self, arguments: Sequence[str]) -> list[str]:
        """Return the full command line for ``arguments``."""

        if self.tool.suffix == _JAR_SUFFIX:
            java_home = self.environ.get(JAVA_HOME_ENV)
            java = str(Path(java_home) / "bin" / "java") if java_home else "java"
            launcher = [java, "-jar", str(self.tool)]
        else:
            launcher = [str(self.tool)]
        return [*launcher, *arguments, *self.settings.extra_arguments()]

    def environment(self) -> dict[str, str]:
        """Return the child environment, isolating caches when configured."""

        env = dict(self.environ)
        if self.settings.cache_directory is not None:
            env[ANDROID_USER_HOME_ENV] = str(self.settings.cache_directory)
        return env

    def invoke(self, arguments: Sequence[str]) -> int:
        """Run the tool and return its exit status.

        Raises:
            EngineLaunchError: If the tool artifact or its launcher is missing.
        """

        if not self.tool.is_file():
            raise EngineLaunchError(f"Lint tool artifact not found: {self.tool}")
        try:
            completed = self.runner(
                self.command(arguments),
                options=CommandOptions(env=self.environment(), timeout=self.timeout),
            )
        except FileNotFoundError as exc:
            raise EngineLaunchError(f"Unable to launch lint tool {self.tool}: {exc}") from exc
        if completed.stdout:
            sys.stdout.write(completed.stdout)
        if completed.stderr:
            sys.stdout.write(completed.stderr)
        return completed.returncode


EntryPoint = Callable[[list[str], EngineSettings], int]


@dataclass(slots=True)
class CallableLintEngine(_ConfigurableEngine):
    """Run a lint entry point loaded into the current process."""

    entry_point: EntryPoint | None = None

    def invoke(self, arguments: Sequence[str]) -> int:
        """Call the entry point with ``arguments`` and the current settings."""

        if self.entry_point is None:
            raise EngineLaunchError("No lint entry point configured")
        return self.entry_point(list(arguments), self.settings)


def create_engine(tool: Path) -> LintEngine:
    """Return the engine used for the caller-supplied ``tool`` artifact."""

    return SubprocessLintEngine(tool=tool)


__all__ = [
    "ERRNO_CREATED_BASELINE",
    "ERRNO_ERRORS",
    "ERRNO_SUCCESS",
    "CallableLintEngine",
    "EngineSettings",
    "LintEngine",
    "SubprocessLintEngine",
    "create_engine",
]
