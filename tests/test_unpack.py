# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Behavioural tests for :mod:`droidlint.unpack`."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from droidlint.errors import ArchiveExtractionError, ArchiveExtractionTimeout
from droidlint.unpack import ArchiveUnpacker, discover_rule_jars, extract_archive


def _tree(root: Path) -> dict[str, bytes]:
    return {path.relative_to(root).as_posix(): path.read_bytes() for path in root.rglob("*") if path.is_file()}


def test_unpack_extracts_into_named_directories(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    archive = make_archive(
        "core.aar",
        {
            "AndroidManifest.xml": "<manifest/>",
            "classes.jar": b"PK\x03\x04",
            "res/values/strings.xml": "<resources/>",
        },
    )

    unpacked = ArchiveUnpacker(tmp_path / "aars").unpack([archive])

    assert len(unpacked) == 1
    entry = unpacked[0]
    assert entry.archive == archive
    assert entry.directory == tmp_path / "aars" / "core.aar-aar-contents"
    assert (entry.directory / "res" / "values" / "strings.xml").read_text(encoding="utf-8") == "<resources/>"
    assert entry.rule_jar is None


def test_unpack_results_sorted_by_archive(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    names = ["zeta.aar", "alpha.aar", "mid.aar"]
    archives = [make_archive(name, {"classes.jar": name}) for name in names]

    unpacked = ArchiveUnpacker(tmp_path / "aars", max_workers=2).unpack(archives)

    assert [entry.archive.name for entry in unpacked] == ["alpha.aar", "mid.aar", "zeta.aar"]


def test_discover_rule_jars_requires_regular_file(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    with_rules = make_archive("rules.aar", {"lint.jar": b"jar-bytes"})
    with_dir = make_archive("odd.aar", {"lint.jar/": b""})
    without = make_archive("plain.aar", {"classes.jar": b""})

    unpacked = ArchiveUnpacker(tmp_path / "aars").unpack([with_rules, with_dir, without])

    assert discover_rule_jars(unpacked) == [tmp_path / "aars" / "rules.aar-aar-contents" / "lint.jar"]


def test_unpack_is_idempotent_per_archive(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    archive = make_archive("ui.aar", {"a/b/c.txt": "nested", "lint.jar": b"x", "R.txt": "int id foo 0x1"})

    first = ArchiveUnpacker(tmp_path / "first").unpack([archive])[0]
    second = ArchiveUnpacker(tmp_path / "second").unpack([archive])[0]

    assert first.directory.name == second.directory.name
    assert _tree(first.directory) == _tree(second.directory)


def test_unpack_reports_failure_after_draining(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    good = make_archive("good.aar", {"classes.jar": b""})
    bad = tmp_path / "deps" / "broken.aar"
    bad.write_bytes(b"not a zip")

    with pytest.raises(ArchiveExtractionError) as excinfo:
        ArchiveUnpacker(tmp_path / "aars").unpack([bad, good])

    assert excinfo.value.archive == bad
    assert (tmp_path / "aars" / "good.aar-aar-contents" / "classes.jar").exists()


def test_unpack_rejects_escaping_members(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    archive = make_archive("evil.aar", {"../../escaped.txt": "boom"})

    with pytest.raises(ArchiveExtractionError, match="Unsafe path"):
        ArchiveUnpacker(tmp_path / "aars").unpack([archive])

    assert not (tmp_path / "escaped.txt").exists()


def test_unpack_times_out_instead_of_continuing(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    make_archive: Callable[..., Path],
) -> None:
    stopped: list[bool] = []

    def _stalled(archive: Path, target: Path, cancelled: threading.Event) -> None:
        del archive, target
        stopped.append(cancelled.wait(5))

    monkeypatch.setattr("droidlint.unpack.extract_archive", _stalled)
    archive = make_archive("slow.aar", {"classes.jar": b""})

    with pytest.raises(ArchiveExtractionTimeout) as excinfo:
        ArchiveUnpacker(tmp_path / "aars", timeout=0.05).unpack([archive])

    assert excinfo.value.pending == (archive,)
    assert stopped == [True]


def test_extract_archive_stops_once_cancelled(tmp_path: Path, make_archive: Callable[..., Path]) -> None:
    archive = make_archive("big.aar", {"a.txt": "a", "b.txt": "b"})
    cancelled = threading.Event()
    cancelled.set()

    extract_archive(archive, tmp_path / "out", cancelled)

    assert list((tmp_path / "out").iterdir()) == []


def test_unpack_without_archives_does_nothing(tmp_path: Path) -> None:
    assert ArchiveUnpacker(tmp_path / "aars").unpack([]) == []
    assert not (tmp_path / "aars").exists()


def test_unpacker_requires_positive_pool() -> None:
    with pytest.raises(ValueError):
        ArchiveUnpacker(Path("aars"), max_workers=0)
