# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application running the lint action once per process."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence

import click
import typer

from ..config import ActionConfiguration
from ..errors import ConfigurationError
from ..logging import fail, ok
from ..runner import FAILURE_STATUS, RequestRunner
from .flagfiles import expand_flagfiles
from .options import (
    ANDROID_HOME_OPTION,
    AUTOFIX_OPTION,
    BASELINE_OPTION,
    CHECK_DEPENDENCIES_OPTION,
    CLASSPATH_OPTION,
    COMPILE_SDK_OPTION,
    CONFIG_OPTION,
    CONFIGURATION_FIELDS,
    CUSTOM_RULE_OPTION,
    DISABLE_CHECK_OPTION,
    EMOJI_OPTION,
    ENABLE_CHECK_OPTION,
    HTML_OUTPUT_OPTION,
    JAVA_LEVEL_OPTION,
    KOTLIN_LEVEL_OPTION,
    LABEL_OPTION,
    LINT_TOOL_OPTION,
    MANIFEST_OPTION,
    REGENERATE_OPTION,
    REPEATABLE_PARAMETERS,
    RESOURCE_OPTION,
    SRC_OPTION,
    VERBOSE_OPTION,
    WERROR_OPTION,
    XML_OUTPUT_OPTION,
)

PROG_NAME = "droidlint"

app = typer.Typer(
    name=PROG_NAME,
    help="Run Android lint for one build target with reproducible output.",
    add_completion=False,
    no_args_is_help=True,
)


def build_configuration(params: Mapping[str, object]) -> ActionConfiguration:
    """Translate parsed CLI parameters into an :class:`ActionConfiguration`.

    Args:
        params: Parameter values keyed by CLI parameter name.

    Returns:
        ActionConfiguration: Validated configuration.

    Raises:
        ConfigurationError: If the values do not form a valid configuration.
    """

    payload: dict[str, object] = {}
    for name, field_name in CONFIGURATION_FIELDS.items():
        value = params.get(name)
        if name in REPEATABLE_PARAMETERS:
            payload[field_name] = tuple(value or ())  # type: ignore[call-overload]
        elif value is not None:
            payload[field_name] = value
    return ActionConfiguration.from_mapping(payload)


def parse_arguments(args: Sequence[str]) -> ActionConfiguration:
    """Decode ``args`` with the CLI grammar without running the action.

    Args:
        args: Command-line arguments, parameter files already expanded.

    Returns:
        ActionConfiguration: Validated configuration.

    Raises:
        ConfigurationError: If the arguments are malformed or incomplete.
    """

    command = typer.main.get_command(app)
    try:
        with command.make_context(PROG_NAME, list(args)) as ctx:
            return build_configuration(ctx.params)
    except click.ClickException as exc:
        raise ConfigurationError(exc.format_message()) from exc


@app.command()
def run(
    label: LABEL_OPTION,
    lint_tool: LINT_TOOL_OPTION,
    xml_output: XML_OUTPUT_OPTION,
    html_output: HTML_OUTPUT_OPTION,
    src: SRC_OPTION = None,
    resource: RESOURCE_OPTION = None,
    android_manifest: MANIFEST_OPTION = None,
    classpath: CLASSPATH_OPTION = None,
    custom_rule: CUSTOM_RULE_OPTION = None,
    baseline_file: BASELINE_OPTION = None,
    config_file: CONFIG_OPTION = None,
    autofix: AUTOFIX_OPTION = False,
    regenerate_baseline_files: REGENERATE_OPTION = False,
    warnings_as_errors: WERROR_OPTION = False,
    enable_check_dependencies: CHECK_DEPENDENCIES_OPTION = False,
    enable_check: ENABLE_CHECK_OPTION = None,
    disable_check: DISABLE_CHECK_OPTION = None,
    android_home: ANDROID_HOME_OPTION = None,
    compile_sdk_version: COMPILE_SDK_OPTION = None,
    java_language_level: JAVA_LEVEL_OPTION = None,
    kotlin_language_level: KOTLIN_LEVEL_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = False,
) -> None:
    """Lint one target and exit with the action status.

    Raises:
        typer.Exit: Always raised with the invocation status.
    """

    params = click.get_current_context().params
    try:
        config = build_configuration(params)
    except ConfigurationError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=FAILURE_STATUS) from exc

    status = RequestRunner(use_emoji=emoji, verbose=verbose).run(config)
    if status == 0 and verbose:
        ok(f"{config.label}: lint passed", use_emoji=emoji)
    raise typer.Exit(code=status)


def main(argv: Sequence[str] | None = None) -> None:
    """Console entry point expanding ``@file`` arguments before dispatch."""

    raw = sys.argv[1:] if argv is None else argv
    try:
        args = expand_flagfiles(raw)
    except OSError as exc:
        fail(f"Unable to read parameter file: {exc}", use_emoji=False)
        raise SystemExit(FAILURE_STATUS) from exc
    app(args=args, prog_name=PROG_NAME)


__all__ = ["app", "build_configuration", "main", "parse_arguments"]
