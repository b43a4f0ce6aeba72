"""Tests for zip extraction and wrapper-folder flattening."""

from pathlib import Path

import pytest

from tests.helpers import damaged_deflate_zip, make_zip
from wpm.core.archive import extract_archive, flatten_single_top_level_folder
from wpm.core.errors import ExtractError


def test_extract_writes_files_and_directories(tmp_path: Path) -> None:
    archive = make_zip(
        {
            "lib/": None,
            "lib/math.wsx": "fn add(a, b) { a + b }",
            "package.json": '{"version": "1.0.0"}',
        }
    )

    report = extract_archive(archive, tmp_path / "out")

    assert (tmp_path / "out" / "lib").is_dir()
    assert (tmp_path / "out" / "lib" / "math.wsx").read_text() == "fn add(a, b) { a + b }"
    assert sorted(report.written) == ["lib/math.wsx", "package.json"]
    assert report.skipped == []


def test_extract_creates_missing_parent_directories(tmp_path: Path) -> None:
    archive = make_zip({"a/b/c/deep.txt": "x"})

    extract_archive(archive, tmp_path)

    assert (tmp_path / "a" / "b" / "c" / "deep.txt").read_text() == "x"


def test_extract_skips_entries_escaping_destination(tmp_path: Path) -> None:
    dest = tmp_path / "pkg"
    archive = make_zip(
        {
            "../evil.txt": "pwned",
            "good/../../also-evil.txt": "pwned",
            "ok.txt": "fine",
        }
    )

    report = extract_archive(archive, dest)

    assert not (tmp_path / "evil.txt").exists()
    assert not (tmp_path / "also-evil.txt").exists()
    assert (dest / "ok.txt").read_text() == "fine"
    assert report.written == ["ok.txt"]
    assert sorted(report.skipped) == ["../evil.txt", "good/../../also-evil.txt"]


def test_extract_skips_absolute_entry_paths(tmp_path: Path) -> None:
    dest = tmp_path / "pkg"
    outside = tmp_path / "outside.txt"
    archive = make_zip({str(outside): "pwned", "inside.txt": "ok"})

    report = extract_archive(archive, dest)

    assert not outside.exists()
    assert (dest / "inside.txt").exists()
    assert len(report.skipped) == 1


def test_extract_allows_dotdot_that_stays_inside(tmp_path: Path) -> None:
    archive = make_zip({"sub/../top.txt": "ok"})

    report = extract_archive(archive, tmp_path)

    assert (tmp_path / "top.txt").read_text() == "ok"
    assert report.skipped == []


def test_extract_rejects_non_zip_bytes(tmp_path: Path) -> None:
    with pytest.raises(ExtractError):
        extract_archive(b"this is not a zip file", tmp_path)


def test_extract_rejects_damaged_entry_data(tmp_path: Path) -> None:
    with pytest.raises(ExtractError, match="Corrupt zip archive"):
        extract_archive(damaged_deflate_zip(), tmp_path)


def test_flatten_hoists_single_wrapper_directory(tmp_path: Path) -> None:
    wrapper = tmp_path / "mathlib-main"
    (wrapper / "src").mkdir(parents=True)
    (wrapper / "src" / "main.wsx").write_text("print 1")
    (wrapper / "package.json").write_text("{}")

    assert flatten_single_top_level_folder(tmp_path) is True

    assert sorted(p.name for p in tmp_path.iterdir()) == ["package.json", "src"]
    assert (tmp_path / "src" / "main.wsx").read_text() == "print 1"


def test_flatten_is_noop_with_multiple_top_level_entries(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "inner").mkdir()
    (tmp_path / "README.md").write_text("hi")

    assert flatten_single_top_level_folder(tmp_path) is False

    assert sorted(p.name for p in tmp_path.iterdir()) == ["README.md", "src"]
    assert (tmp_path / "src" / "inner").is_dir()


def test_flatten_is_noop_for_single_file(tmp_path: Path) -> None:
    (tmp_path / "only.wsx").write_text("x")

    assert flatten_single_top_level_folder(tmp_path) is False
    assert (tmp_path / "only.wsx").exists()


def test_flatten_applies_only_one_level(tmp_path: Path) -> None:
    (tmp_path / "outer" / "inner").mkdir(parents=True)
    (tmp_path / "outer" / "inner" / "file.txt").write_text("x")

    flatten_single_top_level_folder(tmp_path)

    assert (tmp_path / "inner" / "file.txt").exists()
    assert not (tmp_path / "outer").exists()


def test_flatten_handles_child_with_same_name_as_wrapper(tmp_path: Path) -> None:
    (tmp_path / "gfx" / "gfx").mkdir(parents=True)
    (tmp_path / "gfx" / "gfx" / "draw.wsx").write_text("x")
    (tmp_path / "gfx" / "package.json").write_text("{}")

    assert flatten_single_top_level_folder(tmp_path) is True

    assert (tmp_path / "gfx" / "draw.wsx").exists()
    assert (tmp_path / "package.json").exists()
