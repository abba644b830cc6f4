# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

from __future__ import annotations

import logging
import queue
from pathlib import Path

import pytest

from conftest import build_nef
from dnraw.batch import QUEUE_SIZE, build_output_path, find_images, run_conversion, run_export
from dnraw.exceptions import UnsupportedFormatError
from dnraw.options import ConversionOptions, ExportOptions


def _populate(source: Path, nef_factory) -> None:
    for name in ("a.nef", "b.nef", "c.nef"):
        nef_factory(name, directory=source)
    (source / "notes.txt").write_text("not an image")
    (source / "d.jpg").write_bytes(b"\xff\xd8\xff")


def test_converts_only_matching_files(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    _populate(source, nef_factory)
    output = tmp_path / "out"

    result = run_conversion(ConversionOptions(source, output))

    assert result.converted_count == 3
    assert sorted(p.name for p in output.iterdir()) == ["a.jpg", "b.jpg", "c.jpg"]
    assert result.failed == []


def test_failed_file_does_not_stop_the_batch(tmp_path, nef_factory, caplog) -> None:
    source = tmp_path / "in"
    _populate(source, nef_factory)
    (source / "e.nef").write_bytes(nef_factory("full.nef", directory=tmp_path).read_bytes()[:1000])
    output = tmp_path / "out"

    with caplog.at_level(logging.INFO, logger="dnraw"):
        result = run_conversion(ConversionOptions(source, output, output_type=".png"))

    assert result.converted_count == 3
    assert [path.name for path, _ in result.failed] == ["e.nef"]
    assert "[FAILED]" in caplog.text
    assert "Successfully converted 3 raw images" in caplog.text
    assert not (output / "e.png").exists()


def test_existing_outputs_count_as_failures(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    nef_factory("a.nef", directory=source)
    output = tmp_path / "out"
    output.mkdir()
    (output / "a.jpg").write_bytes(b"keep")

    result = run_conversion(ConversionOptions(source, output))
    assert result.converted_count == 0
    assert len(result.failed) == 1
    assert (output / "a.jpg").read_bytes() == b"keep"

    result = run_conversion(ConversionOptions(source, output, overwrite=True))
    assert result.converted_count == 1


def test_single_directory_files_are_skipped(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    nef_factory("a.nef", directory=source, sub_ifd_count=0)
    result = run_conversion(ConversionOptions(source, tmp_path / "out"))
    assert result.converted_count == 0
    assert [path.name for path in result.skipped] == ["a.nef"]


def test_recursive_walk(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    nef_factory("top.nef", directory=source)
    nef_factory("one.nef", directory=source / "sub")
    nef_factory("two.nef", directory=source / "sub" / "deeper")

    flat = run_conversion(ConversionOptions(source, tmp_path / "flat"))
    assert flat.converted_count == 1

    deep = run_conversion(ConversionOptions(source, tmp_path / "deep", recursive=True))
    assert deep.converted_count == 3
    assert sorted(p.name for p in (tmp_path / "deep").iterdir()) == ["one.jpg", "top.jpg", "two.jpg"]


def test_retain_folder_structure(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    nef_factory("top.nef", directory=source)
    nef_factory("one.nef", directory=source / "sub")
    output = tmp_path / "out"

    result = run_conversion(ConversionOptions(
        source, output, recursive=True, retain_folder_structure=True
    ))
    assert result.converted_count == 2
    assert (output / "top.jpg").is_file()
    assert (output / "sub" / "one.jpg").is_file()


def test_find_images_matches_extension_case_insensitively(tmp_path, nef_factory) -> None:
    nef_factory("UPPER.NEF")
    nef_factory("lower.nef")
    found: queue.Queue = queue.Queue()
    find_images(tmp_path, ".nef", False, found)
    names = sorted(found.get_nowait().path.name for _ in range(found.qsize()))
    assert names == ["UPPER.NEF", "lower.nef"]


def test_build_output_path() -> None:
    assert build_output_path("/in/a.nef", "/in", "/out", ".jpg") == Path("/out/a.jpg")
    assert build_output_path("/in/A.NEF", "/in", "/out", ".png") == Path("/out/A.PNG")
    assert build_output_path("/in/x/y/a.nef", "/in", "/out", ".jpg", True) == Path("/out/x/y/a.jpg")
    assert build_output_path("/in/x/y/a.nef", "/in", "/out", ".jpg", False) == Path("/out/a.jpg")


def test_unsupported_types_are_rejected(tmp_path) -> None:
    with pytest.raises(UnsupportedFormatError):
        run_conversion(ConversionOptions(tmp_path, tmp_path / "out", input_type=".arw"))
    with pytest.raises(UnsupportedFormatError):
        run_conversion(ConversionOptions(tmp_path, tmp_path / "out", output_type="gif"))


def test_missing_source_directory(tmp_path) -> None:
    with pytest.raises(NotADirectoryError):
        run_conversion(ConversionOptions(tmp_path / "missing", tmp_path / "out"))


def test_timestamp_is_reported(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    nef_factory("a.nef", directory=source)
    result = run_conversion(ConversionOptions(source, tmp_path / "out", timestamp=True))
    assert result.elapsed_ms is not None and result.elapsed_ms >= 0


def test_export_writes_reports(tmp_path, nef_factory) -> None:
    source = tmp_path / "in"
    _populate(source, nef_factory)
    output = tmp_path / "reports"

    result = run_export(ExportOptions(source, output))

    assert result.converted_count == 3
    assert sorted(p.name for p in output.iterdir()) == ["a.txt", "b.txt", "c.txt"]


def test_more_files_than_the_queue_holds(tmp_path) -> None:
    source = tmp_path / "in"
    source.mkdir()
    data = build_nef()
    total = QUEUE_SIZE + 8
    for index in range(total):
        (source / f"img{index:03d}.nef").write_bytes(data)

    result = run_conversion(ConversionOptions(source, tmp_path / "out"))

    assert result.converted_count == total
    assert result.failed == []
    assert len(list((tmp_path / "out").iterdir())) == total


def test_recursive_run_larger_than_the_queue(tmp_path) -> None:
    source = tmp_path / "in"
    data = build_nef()
    folders = [source, source / "a", source / "a" / "deep", source / "b", source / "c"]
    per_folder = 9
    for folder in folders:
        folder.mkdir(parents=True, exist_ok=True)
        for index in range(per_folder):
            (folder / f"{folder.name}_{index}.nef").write_bytes(data)
    total = len(folders) * per_folder
    assert total > QUEUE_SIZE

    output = tmp_path / "out"
    result = run_conversion(ConversionOptions(
        source, output, recursive=True, retain_folder_structure=True
    ))

    assert result.converted_count == total
    assert result.failed == []
    assert len(list(output.rglob("*.jpg"))) == total
    assert (output / "a" / "deep" / "deep_0.jpg").is_file()
