# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from droidlint.config import ActionConfiguration

SANDBOX_ROOT = "/private/var/tmp/_bazel_dev/5f2a/sandbox/darwin-sandbox/17/execroot/_main/"


@dataclass(slots=True)
class FakeEngine:
    """In-memory stand-in for the lint engine recording how it was driven."""

    exit_code: int = 0
    report: str | None = None
    printed: str = ""
    arguments: list[str] = field(default_factory=list)
    check_dependencies: bool | None = None
    baseline: Path | None = None
    baseline_existed: bool = False
    cache_directory: Path | None = None
    project_xml: str | None = None
    calls: int = 0

    def set_check_dependencies(self, enabled: bool) -> None:
        self.check_dependencies = enabled

    def set_baseline(self, path: Path | None) -> None:
        self.baseline = path

    def set_cache_directory(self, path: Path | None) -> None:
        self.cache_directory = path

    def invoke(self, arguments: Sequence[str]) -> int:
        self.calls += 1
        self.arguments = list(arguments)
        self.baseline_existed = self.baseline is not None and self.baseline.exists()
        project = Path(arguments[arguments.index("--project") + 1])
        self.project_xml = project.read_text(encoding="utf-8")
        xml_output = Path(arguments[arguments.index("--xml") + 1])
        if self.report is not None:
            xml_output.write_text(self.report, encoding="utf-8")
        if self.printed:
            print(self.printed, end="")
        return self.exit_code


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Return a fresh fake engine that reports no issues."""

    return FakeEngine(report='<?xml version="1.0" encoding="UTF-8"?>\n<issues format="6">\n</issues>\n')


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing zip archives under ``tmp_path/deps``."""

    def _make(name: str, members: Mapping[str, bytes | str]) -> Path:
        deps = tmp_path / "deps"
        deps.mkdir(exist_ok=True)
        archive = deps / name
        with zipfile.ZipFile(archive, "w") as handle:
            for member, payload in members.items():
                handle.writestr(member, payload)
        return archive

    return _make


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., ActionConfiguration]:
    """Return a factory building configurations with outputs under ``tmp_path``."""

    def _make(**overrides: object) -> ActionConfiguration:
        payload: dict[str, object] = {
            "label": "app",
            "lint_tool": tmp_path / "lint.jar",
            "xml_output": tmp_path / "out" / "app_lint.xml",
            "html_output": tmp_path / "out" / "app_lint.html",
        }
        payload.update(overrides)
        (tmp_path / "out").mkdir(exist_ok=True)
        return ActionConfiguration.from_mapping(payload)

    return _make
