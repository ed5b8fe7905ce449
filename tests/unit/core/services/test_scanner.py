from __future__ import annotations

"""
Unit tests for the Sample Discovery Service.

Verifies one-level listing, hidden/marker skipping, exclusion handling,
missing-directory reporting and subdirectory sample discovery.
"""

import logging
import os
from pathlib import Path

import pytest

from suitecheck.core.components.filters import ExclusionSet, compile_pattern
from suitecheck.core.services.scanner import (
    find_sample_directories,
    scan_directory,
    yield_sample_files,
)
from suitecheck.domain.config import DEFAULT_MARKER_FILES
from suitecheck.domain.errors import DirectoryNotFound

KTS = compile_pattern(r"^(.+)\.kts$")


def test_scan_directory_lists_one_level(sample_root: Path) -> None:
    """Samples of nested directories are not folded into the parent."""
    names = scan_directory(str(sample_root / "singleByPsi"), KTS, None, DEFAULT_MARKER_FILES)

    assert names == {"a.kts", "b.kts"}


def test_scan_directory_skips_hidden_files(sample_root: Path) -> None:
    names = scan_directory(str(sample_root / "singleByPsi"), KTS)

    assert ".hidden.kts" not in names


def test_scan_directory_reports_marker_without_marker_list(sample_root: Path) -> None:
    """Marker files are samples unless declared as markers."""
    names = scan_directory(str(sample_root / "singleByPsi"), KTS, None, [])

    assert "settings.gradle.kts" in names


def test_scan_directory_applies_exclusions_after_matching(sample_root: Path) -> None:
    names = scan_directory(
        str(sample_root / "singleByPsi"),
        KTS,
        ExclusionSet(["b.kts", "notes.txt"]),
        DEFAULT_MARKER_FILES,
    )

    assert names == {"a.kts"}


def test_scan_directory_empty_directory(sample_root: Path) -> None:
    assert scan_directory(str(sample_root / "singleByPsi" / "nonCalls"), KTS) == frozenset()


def test_scan_directory_missing_directory_raises(tmp_path: Path) -> None:
    """A missing directory is never treated as zero samples."""
    missing = tmp_path / "does_not_exist"

    with pytest.raises(DirectoryNotFound) as exc:
        scan_directory(str(missing), KTS)

    assert exc.value.path == str(missing)
    assert isinstance(exc.value, FileNotFoundError)


def test_scan_directory_file_instead_of_directory(tmp_path: Path) -> None:
    target = tmp_path / "file.kts"
    target.write_text("", encoding="utf-8")

    with pytest.raises(DirectoryNotFound):
        scan_directory(str(target), KTS)


def test_yield_sample_files_sorted_records(sample_root: Path) -> None:
    records = list(yield_sample_files(str(sample_root / "singleByPsi"), KTS, None, DEFAULT_MARKER_FILES))

    assert [r.file_name for r in records] == ["a.kts", "b.kts"]
    assert records[0].rel_path == "a.kts"


def test_find_sample_directories(sample_root: Path) -> None:
    """Only subdirectories holding samples are reported."""
    dirs = find_sample_directories(str(sample_root / "singleByPsi"), KTS, None, DEFAULT_MARKER_FILES)

    assert dirs == {"assignments"}


def test_find_sample_directories_looks_deep(tmp_path: Path) -> None:
    deep = tmp_path / "top" / "mid" / "leaf"
    deep.mkdir(parents=True)
    (deep / "x.kts").write_text("", encoding="utf-8")

    assert find_sample_directories(str(tmp_path), KTS) == {"top"}


def test_find_sample_directories_prunes_hidden_and_excluded(tmp_path: Path) -> None:
    for d in (".git", "build", "ok"):
        (tmp_path / d).mkdir()
        (tmp_path / d / "x.kts").write_text("", encoding="utf-8")

    dirs = find_sample_directories(str(tmp_path), KTS, excluded_dirs=["build"])

    assert dirs == {"ok"}


def test_find_sample_directories_ignores_excluded_only_content(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "skip.kts").write_text("", encoding="utf-8")
    (tmp_path / "sub" / "build.gradle.kts").write_text("", encoding="utf-8")

    dirs = find_sample_directories(str(tmp_path), KTS, ExclusionSet(["skip.kts"]), DEFAULT_MARKER_FILES)

    assert dirs == frozenset()


def test_find_sample_directories_warns_on_unreadable_subtree(
        tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "locked").mkdir()
    (tmp_path / "locked" / "x.kts").write_text("", encoding="utf-8")
    (tmp_path / "open").mkdir()
    (tmp_path / "open" / "y.kts").write_text("", encoding="utf-8")
    locked = os.path.normpath(str(tmp_path / "locked"))
    real_scandir = os.scandir

    def guarded_scandir(path="."):
        if os.path.normpath(os.fspath(path)) == locked:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", guarded_scandir)

    with caplog.at_level(logging.WARNING, logger="suitecheck.core.services.scanner"):
        found = find_sample_directories(str(tmp_path), KTS)

    assert found == {"open"}
    assert any("locked" in r.getMessage() and r.levelno == logging.WARNING for r in caplog.records)
