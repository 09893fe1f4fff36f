# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for engine flag mapping and exit status interpretation."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from droidlint.config import ActionConfiguration
from droidlint.invocation import (
    InvocationResult,
    Outcome,
    ToolInvocationAdapter,
    build_lint_arguments,
    resolve_sdk_home,
    status_for,
)


def test_arguments_cover_required_flags(make_config: Callable[..., ActionConfiguration], tmp_path: Path) -> None:
    config = make_config()
    project = tmp_path / "app_project_config.xml"

    args = build_lint_arguments(config, project, environ={})

    assert args == [
        "--project",
        str(project),
        "--xml",
        str(config.xml_output),
        "--html",
        str(config.html_output),
        "--exitcode",
        "--fullpath",
        "--nowarn",
    ]


def test_arguments_map_optional_flags(make_config: Callable[..., ActionConfiguration], tmp_path: Path) -> None:
    config = make_config(
        warnings_as_errors=True,
        config_file=tmp_path / "lint.xml",
        enable_checks=["NewApi", "InlinedApi"],
        disable_checks=["GradleDependency"],
        android_home="external/androidsdk",
    )

    args = build_lint_arguments(config, tmp_path / "p.xml", environ={"PWD": "/exec/root"})

    assert "-Werror" in args
    assert "--nowarn" not in args
    assert args[args.index("--config") + 1] == str(tmp_path / "lint.xml")
    assert args[args.index("--enable") + 1] == "NewApi,InlinedApi"
    assert args[args.index("--disable") + 1] == "GradleDependency"
    assert args[args.index("--sdk-home") + 1] == "/exec/root/external/androidsdk"


def test_sdk_home_resolution() -> None:
    assert resolve_sdk_home("sdk", {"PWD": "/a/b"}) == Path("/a/b/sdk")
    assert resolve_sdk_home("../sdk", {"PWD": "/a/b"}) == Path("/a/sdk")
    assert resolve_sdk_home("/opt/android", {"PWD": "/a/b"}) == Path("/opt/android")


def test_sdk_home_falls_back_to_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_sdk_home("sdk", {}) == Path(os.getcwd()) / "sdk"


@pytest.mark.parametrize(
    ("exit_code", "outcome", "status"),
    [
        (0, Outcome.CLEAN, 0),
        (6, Outcome.BASELINE_CREATED, 0),
        (1, Outcome.FINDINGS, 1),
        (2, Outcome.TOOL_ERROR, 2),
        (-9, Outcome.TOOL_ERROR, -9),
    ],
)
def test_exit_code_interpretation(exit_code: int, outcome: Outcome, status: int) -> None:
    result = InvocationResult(exit_code=exit_code, xml_output=Path("a.xml"), html_output=Path("a.html"))

    assert Outcome.from_exit_code(exit_code) is outcome
    assert status_for(exit_code) == status
    assert result.outcome is outcome
    assert result.status == status


def test_adapter_configures_engine_before_invoking(
    make_config: Callable[..., ActionConfiguration],
    fake_engine,
    tmp_path: Path,
) -> None:
    config = make_config(enable_check_dependencies=True)
    project = tmp_path / "app_project_config.xml"
    project.write_text("<project/>", encoding="utf-8")
    fake_engine.exit_code = 6

    result = ToolInvocationAdapter(fake_engine, environ={}).invoke(
        config,
        project_file=project,
        baseline_file=tmp_path / "app_lint_baseline",
        cache_directory=tmp_path / "android-cache",
    )

    assert fake_engine.calls == 1
    assert fake_engine.check_dependencies is True
    assert fake_engine.baseline == tmp_path / "app_lint_baseline"
    assert fake_engine.cache_directory == tmp_path / "android-cache"
    assert fake_engine.arguments == build_lint_arguments(config, project, environ={})
    assert result.outcome is Outcome.BASELINE_CREATED
    assert result.status == 0
    assert result.xml_output == config.xml_output
