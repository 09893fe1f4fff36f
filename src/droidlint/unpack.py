# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unpack archive dependencies ahead of the lint engine."""

from __future__ import annotations

import shutil
import threading
import zipfile
from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Final

from .errors import ArchiveExtractionError, ArchiveExtractionTimeout

CONTENTS_SUFFIX: Final[str] = "-aar-contents"
RULE_JAR_NAME: Final[str] = "lint.jar"
DEFAULT_MAX_WORKERS: Final[int] = 6
DEFAULT_TIMEOUT_SECONDS: Final[float] = 15.0


@dataclass(frozen=True, slots=True)
class UnpackedArchive:
    """Archive dependency paired with the directory it was extracted into."""

    archive: Path
    directory: Path

    @property
    def rule_jar(self) -> Path | None:
        """Return the bundled custom rule jar when the archive ships one."""

        candidate = self.directory / RULE_JAR_NAME
        return candidate if candidate.is_file() else None


def contents_directory(archive: Path, destination: Path) -> Path:
    """Return the extraction directory used for ``archive`` under ``destination``."""

    return destination / f"{archive.name}{CONTENTS_SUFFIX}"


def extract_archive(archive: Path, target: Path, cancelled: threading.Event | None = None) -> None:
    """Extract every member of ``archive`` into ``target`` verbatim.

    Extraction stops before the next member once ``cancelled`` is set.

    Args:
        archive: Zip-formatted archive to extract.
        target: Directory receiving the archive contents.
        cancelled: Optional event requesting an early stop.

    Raises:
        ArchiveExtractionError: If the archive is not a zip file or a member
            would be written outside ``target``.
        OSError: If reading the archive or writing a member fails.
    """

    try:
        handle = zipfile.ZipFile(archive)
    except zipfile.BadZipFile as exc:
        raise ArchiveExtractionError(f"{archive} is not a valid archive", archive=archive) from exc

    target.mkdir(parents=True, exist_ok=True)
    target_root = target.resolve()
    with handle:
        for info in handle.infolist():
            if cancelled is not None and cancelled.is_set():
                return
            relative = _normalize_member(info.filename)
            if relative is None:
                continue
            member_path = target / relative.as_posix()
            resolved = member_path.resolve()
            if target_root not in resolved.parents:
                raise ArchiveExtractionError(
                    f"Unsafe path detected in {archive.name}: {info.filename}",
                    archive=archive,
                )
            if info.is_dir():
                member_path.mkdir(parents=True, exist_ok=True)
                continue
            member_path.parent.mkdir(parents=True, exist_ok=True)
            with handle.open(info, "r") as src, member_path.open("wb") as dst:
                shutil.copyfileobj(src, dst)


def _normalize_member(name: str) -> PurePosixPath | None:
    """Return ``name`` as a relative POSIX path, or ``None`` for empty entries."""

    parts = [part for part in PurePosixPath(name.replace("\\", "/")).parts if part not in (".", "", "/")]
    if not parts:
        return None
    return PurePosixPath(*parts)


class ArchiveUnpacker:
    """Extract archive dependencies concurrently with a bounded worker pool.

    Each archive lands in ``<destination>/<archive-name>-aar-contents`` so the
    engine never has to unpack dependencies into a shared cache itself.
    """

    def __init__(
        self,
        destination: Path,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialise the unpacker.

        Args:
            destination: Root directory receiving one subdirectory per archive.
            max_workers: Upper bound on concurrent extractions.
            timeout: Seconds to wait for the pool to drain.
        """

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.destination = destination
        self.max_workers = max_workers
        self.timeout = timeout

    def unpack(self, archives: Sequence[Path]) -> list[UnpackedArchive]:
        """Extract ``archives`` and return the results sorted by archive path.

        A failing archive does not cancel its siblings; once the pool has
        drained the first failure (in archive order) is raised. On timeout the
        running extractions are told to stop and are joined before raising, so
        nothing writes under ``destination`` after this method returns.

        Args:
            archives: Archive packages to extract.

        Returns:
            list[UnpackedArchive]: One entry per archive, sorted by archive path.

        Raises:
            ArchiveExtractionTimeout: If extractions are still running when the
                bounded wait expires.
            ArchiveExtractionError: If any archive failed to extract.
        """

        planned = [UnpackedArchive(archive, contents_directory(archive, self.destination)) for archive in archives]
        if not planned:
            return []
        self.destination.mkdir(parents=True, exist_ok=True)
        cancelled = threading.Event()
        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="unpack")
        try:
            futures: dict[Future[None], UnpackedArchive] = {
                executor.submit(extract_archive, entry.archive, entry.directory, cancelled): entry for entry in planned
            }
            _, not_done = wait(futures, timeout=self.timeout)
        finally:
            cancelled.set()
            executor.shutdown(wait=True, cancel_futures=True)

        if not_done:
            pending = sorted(futures[future].archive for future in not_done)
            raise ArchiveExtractionTimeout(pending, self.timeout)

        failures = sorted(
            ((futures[future].archive, future.exception()) for future in futures if future.exception() is not None),
            key=lambda item: item[0],
        )
        if failures:
            archive, cause = failures[0]
            if isinstance(cause, ArchiveExtractionError):
                raise cause
            raise ArchiveExtractionError(f"Failed to extract {archive}: {cause}", archive=archive) from cause
        return sorted(planned, key=lambda entry: entry.archive)


def discover_rule_jars(unpacked: Iterable[UnpackedArchive]) -> list[Path]:
    """Return the custom rule jars bundled inside ``unpacked`` archives."""

    return [jar for jar in (entry.rule_jar for entry in unpacked) if jar is not None]


__all__ = [
    "CONTENTS_SUFFIX",
    "RULE_JAR_NAME",
    "ArchiveUnpacker",
    "UnpackedArchive",
    "contents_directory",
    "discover_rule_jars",
    "extract_archive",
]
