# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model describing one lint action invocation."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

_LABEL_SEPARATORS: Final[str] = "/\\:"


class ActionConfiguration(BaseModel):
    """Immutable snapshot of the inputs for a single lint invocation.

    The model is built once per invocation and never mutated afterwards. All
    multi-valued inputs are stored as tuples in the order the caller supplied
    them; downstream steps impose their own deterministic ordering.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    lint_tool: Path
    srcs: tuple[Path, ...] = Field(default_factory=tuple)
    resources: tuple[Path, ...] = Field(default_factory=tuple)
    android_manifest: Path | None = None
    classpath: tuple[Path, ...] = Field(default_factory=tuple)
    custom_checks: tuple[Path, ...] = Field(default_factory=tuple)
    baseline_file: Path | None = None
    config_file: Path | None = None
    autofix: bool = False
    regenerate_baseline: bool = False
    warnings_as_errors: bool = False
    enable_check_dependencies: bool = False
    enable_checks: tuple[str, ...] = Field(default_factory=tuple)
    disable_checks: tuple[str, ...] = Field(default_factory=tuple)
    xml_output: Path
    html_output: Path
    android_home: str | None = None
    compile_sdk_version: str | None = None
    java_language_level: str | None = None
    kotlin_language_level: str | None = None

    @field_validator("label")
    @classmethod
    def _require_label(cls, value: str) -> str:
        """Reject labels that cannot name a file inside the working area.

        Args:
            value: Raw label supplied by the caller.

        Returns:
            str: The stripped label.

        Raises:
            ValueError: If the label is empty after stripping whitespace or
                contains a path or package separator.
        """

        stripped = value.strip()
        if not stripped:
            raise ValueError("label must not be empty")
        if stripped in (".", "..") or any(char in stripped for char in _LABEL_SEPARATORS):
            raise ValueError(f"label must be a plain target name, got {stripped!r}")
        return stripped

    @field_validator("android_home")
    @classmethod
    def _blank_android_home(cls, value: str | None) -> str | None:
        # An empty --android-home flag means "no SDK home".
        if value is None or not value.strip():
            return None
        return value

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> ActionConfiguration:
        """Validate ``payload`` into a configuration instance.

        Args:
            payload: Loose mapping of field names to raw values.

        Returns:
            ActionConfiguration: Validated, frozen configuration.

        Raises:
            ConfigurationError: If ``payload`` fails validation.
        """

        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid lint action configuration: {exc}") from exc


__all__ = ["ActionConfiguration"]
