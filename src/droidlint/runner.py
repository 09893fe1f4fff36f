# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-invocation orchestration of the lint action pipeline."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from .baseline import BaselineStager
from .classpath import ClasspathPartitioner
from .config import ActionConfiguration
from .descriptor import ProjectModule, module_attributes, write_project_descriptor
from .engine import LintEngine, create_engine
from .invocation import InvocationResult, Outcome, ToolInvocationAdapter
from .logging import fail, info, warn
from .sanitizer import OutputSanitizer
from .unpack import DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT_SECONDS, ArchiveUnpacker, discover_rule_jars

FAILURE_STATUS: Final[int] = 1
WORKING_AREA_PREFIX: Final[str] = "rules"
ARCHIVES_DIR_NAME: Final[str] = "aars"
CACHE_DIR_NAME: Final[str] = "android-cache"


class RunnerState(str, Enum):
    """Pipeline stages of a single invocation."""

    START = "start"
    STAGING_BASELINE = "staging_baseline"
    PARTITIONING_CLASSPATH = "partitioning_classpath"
    UNPACKING = "unpacking"
    BUILDING_DESCRIPTOR = "building_descriptor"
    INVOKING = "invoking"
    SANITIZING = "sanitizing"
    DONE = "done"
    FAILED = "failed"


def remove_working_area(path: Path, *, use_emoji: bool = False) -> None:
    """Delete ``path`` recursively, reporting but never raising on failure."""

    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        warn(f"Failed to remove working area {path}: {exc}", use_emoji=use_emoji)


@dataclass(slots=True)
class RequestRunner:
    """Run the lint pipeline for one configuration inside an isolated working area.

    A runner tracks the state of a single invocation; hosts running several
    invocations create one runner per invocation.
    """

    engine_factory: Callable[[Path], LintEngine] = create_engine
    max_workers: int = DEFAULT_MAX_WORKERS
    extraction_timeout: float = DEFAULT_TIMEOUT_SECONDS
    environ: Mapping[str, str] | None = None
    temp_root: Path | None = None
    use_emoji: bool = False
    verbose: bool = False
    state: RunnerState = RunnerState.START
    failed_state: RunnerState | None = None

    def run(self, config: ActionConfiguration) -> int:
        """Run the pipeline in a fresh working area and return the status.

        Args:
            config: Invocation configuration.

        Returns:
            int: ``0`` for clean runs and created baselines, the engine exit
            code for findings or tool errors, and :data:`FAILURE_STATUS` when
            any pipeline step raised.
        """

        working_directory = Path(tempfile.mkdtemp(prefix=WORKING_AREA_PREFIX, dir=self.temp_root))
        try:
            return self.run_in(config, working_directory).status
        except Exception as exc:  # noqa: BLE001 - any step failure becomes FAILURE_STATUS
            fail(
                f"{config.label}: lint action failed while {self.failed_state.value}: {exc}",
                use_emoji=self.use_emoji,
            )
            return FAILURE_STATUS
        finally:
            remove_working_area(working_directory, use_emoji=self.use_emoji)

    def run_in(self, config: ActionConfiguration, working_directory: Path) -> InvocationResult:
        """Run every pipeline step inside the caller-owned ``working_directory``.

        Args:
            config: Invocation configuration.
            working_directory: Empty directory exclusively owned by this invocation.

        Returns:
            InvocationResult: Engine status and output locations.

        Raises:
            Exception: Whatever the failing step raised; :attr:`state` is then
                :attr:`RunnerState.FAILED` and :attr:`failed_state` names the step.
        """

        try:
            return self._pipeline(config, working_directory)
        except BaseException:
            self.failed_state = self.state
            self.state = RunnerState.FAILED
            raise

    def _pipeline(self, config: ActionConfiguration, working_directory: Path) -> InvocationResult:
        self._advance(RunnerState.STAGING_BASELINE, config)
        baseline_file = BaselineStager(working_directory).stage(
            config.label,
            config.baseline_file,
            regenerate=config.regenerate_baseline,
        )

        self._advance(RunnerState.PARTITIONING_CLASSPATH, config)
        partitioned = ClasspathPartitioner().partition(config.classpath)

        self._advance(RunnerState.UNPACKING, config)
        unpacker = ArchiveUnpacker(
            working_directory / ARCHIVES_DIR_NAME,
            max_workers=self.max_workers,
            timeout=self.extraction_timeout,
        )
        unpacked = unpacker.unpack(partitioned.archives)

        self._advance(RunnerState.BUILDING_DESCRIPTOR, config)
        module = ProjectModule(
            name=config.label,
            srcs=config.srcs,
            resources=config.resources,
            android_manifest=config.android_manifest,
            classpath_jars=partitioned.libraries,
            extracted_archives=tuple(entry.directory for entry in unpacked),
            custom_lint_checks=(*config.custom_checks, *discover_rule_jars(unpacked)),
            attributes=module_attributes(
                compile_sdk_version=config.compile_sdk_version,
                java_language_level=config.java_language_level,
                kotlin_language_level=config.kotlin_language_level,
            ),
        )
        project_file = write_project_descriptor(working_directory, module)

        self._advance(RunnerState.INVOKING, config)
        cache_directory = working_directory / CACHE_DIR_NAME
        cache_directory.mkdir()
        adapter = ToolInvocationAdapter(self.engine_factory(config.lint_tool), environ=self.environ)
        result = adapter.invoke(
            config,
            project_file=project_file,
            baseline_file=baseline_file,
            cache_directory=cache_directory,
        )

        self._advance(RunnerState.SANITIZING, config)
        if result.outcome is Outcome.TOOL_ERROR and not result.xml_output.exists():
            warn(
                f"{config.label}: lint exited with {result.exit_code} without writing {result.xml_output}",
                use_emoji=self.use_emoji,
            )
        else:
            OutputSanitizer.for_roots([working_directory]).sanitize_file(result.xml_output)

        self._advance(RunnerState.DONE, config)
        return result

    def _advance(self, state: RunnerState, config: ActionConfiguration) -> None:
        self.state = state
        if self.verbose:
            info(f"{config.label}: {state.value.replace('_', ' ')}", use_emoji=self.use_emoji)


__all__ = ["FAILURE_STATUS", "RequestRunner", "RunnerState", "WORKING_AREA_PREFIX", "remove_working_area"]
