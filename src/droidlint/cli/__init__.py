# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line entry points for the lint action."""

from __future__ import annotations

from .app import app, build_configuration, main, parse_arguments

__all__ = ["app", "build_configuration", "main", "parse_arguments"]
