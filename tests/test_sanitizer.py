# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for lint output path sanitisation."""

from __future__ import annotations

from pathlib import Path

from conftest import SANDBOX_ROOT

from droidlint.sanitizer import OutputSanitizer

REPORT = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<issues format="6" by="lint">\n'
    '    <issue id="NewApi" message="Call requires API level 26">\n'
    f'        <location file="{SANDBOX_ROOT}src/main/java/App.kt" line="12"/>\n'
    "    </issue>\n"
    '    <issue id="UnusedResources" message="The resource is unused">\n'
    f'        <location file="{SANDBOX_ROOT}res/values/strings.xml" line="4"/>\n'
    f'        <location file="{SANDBOX_ROOT}bazel-out/darwin_arm64-fastbuild/bin/app/R.txt"/>\n'
    "    </issue>\n"
    "</issues>\n"
)


def test_sanitize_removes_every_execroot_prefix() -> None:
    sanitized = OutputSanitizer().sanitize(REPORT)

    assert REPORT.count(SANDBOX_ROOT) == 3
    assert "execroot" not in sanitized
    assert '<location file="src/main/java/App.kt" line="12"/>' in sanitized
    assert '<location file="res/values/strings.xml" line="4"/>' in sanitized
    assert '<location file="bazel-out/bin/app/R.txt"/>' in sanitized


def test_sanitize_leaves_other_text_untouched() -> None:
    sanitized = OutputSanitizer().sanitize(REPORT)

    assert sanitized == REPORT.replace(SANDBOX_ROOT, "").replace(
        "bazel-out/darwin_arm64-fastbuild/bin/",
        "bazel-out/bin/",
    )


def test_sanitize_handles_plain_text_output() -> None:
    text = "/home/dev/.cache/bazel/_bazel_dev/abc/execroot/my_ws/lib/Foo.java:3: Error: bad [Check]\n"

    assert OutputSanitizer().sanitize(text) == "lib/Foo.java:3: Error: bad [Check]\n"


def test_sanitize_without_paths_is_identity() -> None:
    text = '<issues format="6">\n    <issue id="Typos" message="Did you mean \'/execroot\'?"/>\n</issues>\n'

    assert OutputSanitizer().sanitize(text) == text


def test_sanitizer_strips_working_area_roots(tmp_path: Path) -> None:
    working_area = tmp_path / "rules_x1"
    working_area.mkdir()
    content = f'<location file="{working_area}/aars/ui.aar-aar-contents/res/layout/main.xml"/>\n'

    sanitized = OutputSanitizer.for_roots([working_area]).sanitize(content)

    assert sanitized == '<location file="aars/ui.aar-aar-contents/res/layout/main.xml"/>\n'


def test_sanitize_file_rewrites_in_place(tmp_path: Path) -> None:
    report = tmp_path / "app_lint.xml"
    report.write_text(REPORT, encoding="utf-8")
    clean = tmp_path / "clean.xml"
    clean.write_text("<issues/>\n", encoding="utf-8")
    before = clean.stat().st_mtime_ns

    sanitizer = OutputSanitizer()
    sanitizer.sanitize_file(report)
    sanitizer.sanitize_file(clean)

    assert SANDBOX_ROOT not in report.read_text(encoding="utf-8")
    assert clean.read_text(encoding="utf-8") == "<issues/>\n"
    assert clean.stat().st_mtime_ns == before


def test_sanitize_file_preserves_line_endings(tmp_path: Path) -> None:
    report = tmp_path / "app_lint.xml"
    report.write_bytes(
        b'<issues>\r\n<location file="' + SANDBOX_ROOT.encode() + b'src/A.kt"/>\r\n</issues>\r\n',
    )

    OutputSanitizer().sanitize_file(report)

    assert report.read_bytes() == b'<issues>\r\n<location file="src/A.kt"/>\r\n</issues>\r\n'


def test_sanitize_file_keeps_undecodable_bytes(tmp_path: Path) -> None:
    report = tmp_path / "app_lint.xml"
    report.write_bytes(
        b'<issue message="caf\xe9">\n<location file="' + SANDBOX_ROOT.encode() + b'src/A.kt"/>\n</issue>\n',
    )

    OutputSanitizer().sanitize_file(report)

    assert report.read_bytes() == b'<issue message="caf\xe9">\n<location file="src/A.kt"/>\n</issue>\n'


def test_sanitize_quoted_execroot_with_spaces() -> None:
    content = (
        '<location file="/Users/Jane Doe/_bazel_jane/1f2e/execroot/_main/app/src/Main.kt" line="3"/>\n'
        "Plain /Users/Jane Doe/notes.txt stays\n"
    )

    assert OutputSanitizer().sanitize(content) == (
        '<location file="app/src/Main.kt" line="3"/>\n'
        "Plain /Users/Jane Doe/notes.txt stays\n"
    )
