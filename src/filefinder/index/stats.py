"""Summary statistics over the record store."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict

from filefinder.index.storage import SQLiteRecordStore
from filefinder.utils.text import format_size


@dataclass(slots=True)
class DatabaseStats:
    total_files: int = 0
    total_bytes: int = 0
    total_size: str = "0.00B"
    extensions: Dict[str, int] = field(default_factory=dict)
    indexed_at: str = ""


def collect_stats(store: SQLiteRecordStore) -> DatabaseStats:
    """Scan every record once and aggregate counts and sizes."""
    extensions: Counter[str] = Counter()
    total_bytes = 0
    total_files = 0
    for record in store.get_all():
        extensions[record.extension] += 1
        total_bytes += record.size
        total_files += 1

    return DatabaseStats(
        total_files=total_files,
        total_bytes=total_bytes,
        total_size=format_size(total_bytes),
        extensions=dict(extensions.most_common()),
        indexed_at=datetime.now(timezone.utc).isoformat(),
    )
