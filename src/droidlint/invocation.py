# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate the action configuration into an engine run and interpret its status."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from .config import ActionConfiguration
from .engine import ERRNO_CREATED_BASELINE, ERRNO_ERRORS, ERRNO_SUCCESS, LintEngine

PWD_ENV: Final[str] = "PWD"


class Outcome(str, Enum):
    """Simplified interpretation of the engine's exit status."""

    CLEAN = "clean"
    BASELINE_CREATED = "baseline_created"
    FINDINGS = "findings"
    TOOL_ERROR = "tool_error"

    @classmethod
    def from_exit_code(cls, exit_code: int) -> Outcome:
        """Return the outcome represented by the engine ``exit_code``."""

        if exit_code == ERRNO_SUCCESS:
            return cls.CLEAN
        if exit_code == ERRNO_CREATED_BASELINE:
            return cls.BASELINE_CREATED
        if exit_code == ERRNO_ERRORS:
            return cls.FINDINGS
        return cls.TOOL_ERROR

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the outcome maps to a zero status."""

        return self in (Outcome.CLEAN, Outcome.BASELINE_CREATED)


def status_for(exit_code: int) -> int:
    """Map an engine exit code to the invocation status.

    Success and baseline creation both become ``0``; every other code is
    returned unchanged.
    """

    return 0 if Outcome.from_exit_code(exit_code).succeeded else exit_code


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Raw engine status together with the files it produced."""

    exit_code: int
    xml_output: Path
    html_output: Path

    @property
    def outcome(self) -> Outcome:
        """Return the interpreted outcome of :attr:`exit_code`."""

        return Outcome.from_exit_code(self.exit_code)

    @property
    def status(self) -> int:
        """Return the invocation status derived from :attr:`exit_code`."""

        return status_for(self.exit_code)


def resolve_sdk_home(android_home: str, environ: Mapping[str, str] | None = None) -> Path:
    """Return ``android_home`` as an absolute path anchored at ``$PWD``.

    Args:
        android_home: SDK location, usually relative to the execution root.
        environ: Environment used to look up ``PWD``; defaults to ``os.environ``.

    Returns:
        Path: Absolute SDK home path.
    """

    env = os.environ if environ is None else environ
    anchor = env.get(PWD_ENV) or os.getcwd()
    return Path(os.path.abspath(Path(anchor) / android_home))


def build_lint_arguments(
    config: ActionConfiguration,
    project_file: Path,
    *,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the engine flag vector for ``config``.

    Args:
        config: Invocation configuration.
        project_file: Generated project descriptor.
        environ: Environment used to anchor the SDK home.

    Returns:
        list[str]: Arguments in the engine's flag grammar.
    """

    args = [
        "--project",
        str(project_file),
        "--xml",
        str(config.xml_output),
        "--html",
        str(config.html_output),
        "--exitcode",
        "--fullpath",
    ]
    args.append("-Werror" if config.warnings_as_errors else "--nowarn")
    if config.config_file is not None:
        args.extend(["--config", str(config.config_file)])
    if config.enable_checks:
        args.extend(["--enable", ",".join(config.enable_checks)])
    if config.disable_checks:
        args.extend(["--disable", ",".join(config.disable_checks)])
    if config.android_home is not None:
        args.extend(["--sdk-home", str(resolve_sdk_home(config.android_home, environ))])
    return args


@dataclass(frozen=True, slots=True)
class ToolInvocationAdapter:
    """Configure and run a :class:`LintEngine` for one invocation."""

    engine: LintEngine
    environ: Mapping[str, str] | None = None

    def invoke(
        self,
        config: ActionConfiguration,
        *,
        project_file: Path,
        baseline_file: Path,
        cache_directory: Path,
    ) -> InvocationResult:
        """Run the engine against the staged inputs.

        Args:
            config: Invocation configuration.
            project_file: Generated project descriptor.
            baseline_file: Staged baseline location.
            cache_directory: Per-invocation engine cache directory.

        Returns:
            InvocationResult: Raw exit code and output locations.
        """

        arguments = build_lint_arguments(config, project_file, environ=self.environ)
        self.engine.set_check_dependencies(config.enable_check_dependencies)
        self.engine.set_baseline(baseline_file)
        self.engine.set_cache_directory(cache_directory)
        exit_code = self.engine.invoke(arguments)
        return InvocationResult(
            exit_code=exit_code,
            xml_output=config.xml_output,
            html_output=config.html_output,
        )


__all__ = [
    "InvocationResult",
    "Outcome",
    "ToolInvocationAdapter",
    "build_lint_arguments",
    "resolve_sdk_home",
    "status_for",
]
