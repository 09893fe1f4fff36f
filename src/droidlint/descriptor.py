# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the project descriptor XML consumed by the lint engine."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

PROJECT_FILE_SUFFIX: Final[str] = "_project_config.xml"
_XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>\n'
_INDENT: Final[str] = "  "


@dataclass(frozen=True, slots=True)
class ProjectModule:
    """Inputs describing the single module handed to the lint engine.

    ``extracted_archives`` lists extraction directories, never archive files:
    the engine must treat archive dependencies as already expanded.
    """

    name: str
    srcs: tuple[Path, ...] = ()
    resources: tuple[Path, ...] = ()
    android_manifest: Path | None = None
    classpath_jars: tuple[Path, ...] = ()
    extracted_archives: tuple[Path, ...] = ()
    custom_lint_checks: tuple[Path, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()


def module_attributes(
    *,
    compile_sdk_version: str | None = None,
    java_language_level: str | None = None,
    kotlin_language_level: str | None = None,
) -> tuple[tuple[str, str], ...]:
    """Return the optional language attributes for the ``<module>`` element as name/value pairs."""

    candidates = (
        ("compile-sdk-version", compile_sdk_version),
        ("javaLanguage", java_language_level),
        ("kotlinLanguage", kotlin_language_level),
    )
    return tuple((name, value) for name, value in candidates if value)


def _descending(paths: Iterable[Path]) -> list[str]:
    """Return the distinct ``paths`` as POSIX strings in descending order."""

    return sorted({path.as_posix() for path in paths}, reverse=True)


def build_project_xml(module: ProjectModule) -> str:
    """Render ``module`` as a deterministic project descriptor.

    Every multi-valued field is deduplicated and emitted in descending
    lexicographic order, so the document depends only on the input sets and
    not on the order the caller supplied them in.

    Args:
        module: Module inputs to describe.

    Returns:
        str: Complete XML document including the declaration.
    """

    project = ET.Element("project")
    element = ET.SubElement(
        project,
        "module",
        {
            "name": module.name,
            "android": "true",
            "library": "true",
            **dict(sorted(module.attributes)),
        },
    )
    if module.android_manifest is not None:
        ET.SubElement(element, "manifest", {"file": module.android_manifest.as_posix()})
    for src in _descending(module.srcs):
        ET.SubElement(element, "src", {"file": src})
    for resource in _descending(module.resources):
        ET.SubElement(element, "resource", {"file": resource})
    for jar in _descending(module.classpath_jars):
        ET.SubElement(element, "classpath", {"jar": jar})
    for directory in _descending(module.extracted_archives):
        ET.SubElement(element, "aar", {"extracted": directory})
    for jar in _descending(module.custom_lint_checks):
        ET.SubElement(element, "lint-checks", {"jar": jar})

    ET.indent(project, space=_INDENT)
    return f"{_XML_DECLARATION}{ET.tostring(project, encoding='unicode')}\n"


def write_project_descriptor(working_directory: Path, module: ProjectModule) -> Path:
    """Write the descriptor for ``module`` under ``working_directory``.

    Args:
        working_directory: Invocation working area.
        module: Module inputs to describe.

    Returns:
        Path: Location of the written descriptor.

    Raises:
        FileExistsError: If a descriptor for the module already exists.
    """

    path = working_directory / f"{module.name}{PROJECT_FILE_SUFFIX}"
    with path.open("x", encoding="utf-8") as handle:
        handle.write(build_project_xml(module))
    return path


__all__ = [
    "PROJECT_FILE_SUFFIX",
    "ProjectModule",
    "build_project_xml",
    "module_attributes",
    "write_project_descriptor",
]
