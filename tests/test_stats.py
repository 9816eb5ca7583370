"""Tests for stats aggregation."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from filefinder.index.indexer import Indexer
from filefinder.index.stats import DatabaseStats, collect_stats


class TestCollectStats:
    """Test collect_stats."""

    def test_empty_store(self, store) -> None:
        stats = collect_stats(store)

        assert isinstance(stats, DatabaseStats)
        assert stats.total_files == 0
        assert stats.total_bytes == 0
        assert stats.total_size == "0.00B"
        assert stats.extensions == {}

    def test_counts_and_sizes(self, store, make_record) -> None:
        for index, (ext, size) in enumerate([("rs", 1024), ("rs", 512), ("txt", 512)]):
            record = make_record(f"/f{index}.{ext}", size=size, extension=ext)
            store.put(record.id, record)

        stats = collect_stats(store)

        assert stats.total_files == 3
        assert stats.total_bytes == 2048
        assert stats.total_size == "2.00KB"
        assert stats.extensions == {"rs": 2, "txt": 1}

    def test_indexed_at_is_timestamp(self, store) -> None:
        stats = collect_stats(store)
        assert datetime.fromisoformat(stats.indexed_at).tzinfo is not None

    def test_after_indexing(self, store, sample_tree: Path) -> None:
        Indexer(store).index(sample_tree)

        stats = collect_stats(store)

        expected_bytes = sum(p.stat().st_size for p in sample_tree.iterdir())
        assert stats.total_files == 2
        assert stats.total_bytes == expected_bytes
        assert stats.extensions == {"rs": 1, "txt": 1}
