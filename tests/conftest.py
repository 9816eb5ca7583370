"""Shared fixtures for FileFinder tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from filefinder.index.storage import SQLiteRecordStore
from filefinder.models import FileRecord


@pytest.fixture
def store(tmp_path: Path):
    """Create a temporary record store."""
    record_store = SQLiteRecordStore(tmp_path / "test.db")
    yield record_store
    record_store.close()


@pytest.fixture
def make_record():
    """Factory for FileRecords with sensible defaults."""

    def _make(
        path: str = "/home/main.rs",
        *,
        size: int = 100,
        content: str | None = None,
        extension: str = "rs",
        record_id: str | None = None,
    ) -> FileRecord:
        return FileRecord(
            id=record_id or path,
            path=path,
            size=size,
            extension=extension,
            created_at="2024-01-19T00:00:00+00:00",
            modified_at="2024-01-19T00:00:00+00:00",
            content=content,
        )

    return _make


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Directory with a Rust source file and a text file."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "main.rs").write_text("fn main() {}", encoding="utf-8")
    (root / "readme.txt").write_text("Read me first", encoding="utf-8")
    return root
