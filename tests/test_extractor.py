"""Tests for file record extraction."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from filefinder.ingestion.extractor import extract_record, read_text_content
from filefinder.models import UNKNOWN_EXTENSION
from filefinder.utils.files import compute_record_id


class TestReadTextContent:
    """Test graceful content reads."""

    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("ciao ✓", encoding="utf-8")
        assert read_text_content(path) == "ciao ✓"

    def test_invalid_utf8_returns_none(self, tmp_path: Path) -> None:
        """Binary bytes degrade to absent content."""
        path = tmp_path / "a.txt"
        path.write_bytes(b"\xff\xfe\x00\x80binary")
        assert read_text_content(path) is None

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert read_text_content(tmp_path / "gone.txt") is None


class TestExtractRecord:
    """Test extract_record."""

    def test_text_file_has_content(self, sample_tree: Path) -> None:
        path = sample_tree / "main.rs"

        record = extract_record(path)

        assert record.path == str(path)
        assert record.id == compute_record_id(str(path))
        assert record.size == len("fn main() {}")
        assert record.extension == "rs"
        assert record.content == "fn main() {}"

    def test_binary_extension_has_no_content(self, tmp_path: Path) -> None:
        path = tmp_path / "image.PNG"
        path.write_bytes(b"\x89PNG\r\n")

        record = extract_record(path)

        assert record.extension == "png"
        assert record.content is None
        assert record.size == 6

    def test_no_extension_uses_sentinel(self, tmp_path: Path) -> None:
        path = tmp_path / "Makefile"
        path.write_text("all:")

        record = extract_record(path)

        assert record.extension == UNKNOWN_EXTENSION
        assert record.content is None

    def test_undecodable_text_file_still_extracts(self, tmp_path: Path) -> None:
        """Decode failures leave content absent instead of failing."""
        path = tmp_path / "broken.txt"
        path.write_bytes(b"\xff\xfe\xfa")

        record = extract_record(path)

        assert record.content is None
        assert record.size == 3

    def test_relative_path_is_made_absolute(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        Path("notes.md").write_text("# notes")

        record = extract_record(Path("notes.md"))

        assert record.path == str(Path.cwd() / "notes.md")
        assert os.path.isabs(record.path)

    def test_timestamps_are_iso8601(self, sample_tree: Path) -> None:
        record = extract_record(sample_tree / "readme.txt")

        modified = datetime.fromisoformat(record.modified_at)
        created = datetime.fromisoformat(record.created_at)
        assert modified.tzinfo is not None
        assert created.tzinfo is not None
        assert modified.timestamp() == pytest.approx(
            (sample_tree / "readme.txt").stat().st_mtime, abs=1e-3
        )

    def test_extraction_is_deterministic(self, sample_tree: Path) -> None:
        """Extracting an unchanged file twice yields equal records."""
        path = sample_tree / "main.rs"
        assert extract_record(path) == extract_record(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            extract_record(tmp_path / "vanished.txt")

    def test_content_read_failure_is_not_fatal(self, sample_tree: Path) -> None:
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            record = extract_record(sample_tree / "main.rs")
        assert record.content is None
        assert record.extension == "rs"
