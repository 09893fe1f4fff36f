# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer option declarations mirroring the lint action flag grammar."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Final

import typer

LABEL_OPTION = Annotated[str, typer.Option("--label", help="Label of the target being linted.")]
LINT_TOOL_OPTION = Annotated[
    Path,
    typer.Option("--android-lint-cli-tool", help="Lint engine artifact (jar or executable)."),
]
SRC_OPTION = Annotated[list[Path] | None, typer.Option("--src", help="Source file (repeatable).")]
RESOURCE_OPTION = Annotated[list[Path] | None, typer.Option("--resource", help="Resource file (repeatable).")]
MANIFEST_OPTION = Annotated[Path | None, typer.Option("--android-manifest", help="Android manifest.")]
CLASSPATH_OPTION = Annotated[
    list[Path] | None,
    typer.Option("--classpath", help="Dependency .aar or .jar (repeatable)."),
]
CUSTOM_RULE_OPTION = Annotated[
    list[Path] | None,
    typer.Option("--custom-rule", help="Custom lint rule jar (repeatable)."),
]
BASELINE_OPTION = Annotated[Path | None, typer.Option("--baseline-file", help="Existing lint baseline.")]
CONFIG_OPTION = Annotated[Path | None, typer.Option("--config-file", help="Lint configuration XML.")]
XML_OUTPUT_OPTION = Annotated[Path, typer.Option("--xml-output", help="Machine-readable result file.")]
HTML_OUTPUT_OPTION = Annotated[Path, typer.Option("--html-output", help="Human-readable report file.")]
AUTOFIX_OPTION = Annotated[bool, typer.Option("--autofix", help="Request automatic fixes.")]
REGENERATE_OPTION = Annotated[
    bool,
    typer.Option("--regenerate-baseline-files", help="Ignore the existing baseline and create a new one."),
]
WERROR_OPTION = Annotated[bool, typer.Option("--warnings-as-errors", help="Treat warnings as errors.")]
CHECK_DEPENDENCIES_OPTION = Annotated[
    bool,
    typer.Option("--enable-check-dependencies", help="Also analyse the module's dependencies."),
]
ENABLE_CHECK_OPTION = Annotated[list[str] | None, typer.Option("--enable-check", help="Check id to enable.")]
DISABLE_CHECK_OPTION = Annotated[list[str] | None, typer.Option("--disable-check", help="Check id to disable.")]
ANDROID_HOME_OPTION = Annotated[
    str | None,
    typer.Option("--android-home", help="SDK home, relative to the execution root."),
]
COMPILE_SDK_OPTION = Annotated[str | None, typer.Option("--compile-sdk-version", help="Compile SDK version.")]
JAVA_LEVEL_OPTION = Annotated[str | None, typer.Option("--java-language-level", help="Java language level.")]
KOTLIN_LEVEL_OPTION = Annotated[str | None, typer.Option("--kotlin-language-level", help="Kotlin language level.")]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", help="Report each pipeline step on stderr.")]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")]

# CLI parameter name -> configuration field.
CONFIGURATION_FIELDS: Final[dict[str, str]] = {
    "label": "label",
    "lint_tool": "lint_tool",
    "src": "srcs",
    "resource": "resources",
    "android_manifest": "android_manifest",
    "classpath": "classpath",
    "custom_rule": "custom_checks",
    "baseline_file": "baseline_file",
    "config_file": "config_file",
    "autofix": "autofix",
    "regenerate_baseline_files": "regenerate_baseline",
    "warnings_as_errors": "warnings_as_errors",
    "enable_check_dependencies": "enable_check_dependencies",
    "enable_check": "enable_checks",
    "disable_check": "disable_checks",
    "xml_output": "xml_output",
    "html_output": "html_output",
    "android_home": "android_home",
    "compile_sdk_version": "compile_sdk_version",
    "java_language_level": "java_language_level",
    "kotlin_language_level": "kotlin_language_level",
}
REPEATABLE_PARAMETERS: Final[frozenset[str]] = frozenset(
    {"src", "resource", "classpath", "custom_rule", "enable_check", "disable_check"},
)
