"""Directory indexing pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from filefinder.index.storage import SQLiteRecordStore
from filefinder.ingestion.extractor import extract_record
from filefinder.utils.files import iter_file_paths

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass(slots=True)
class IndexStats:
    root: Optional[Path] = None
    indexed: int = 0
    failed: int = 0


class Indexer:
    """Walks a directory tree and writes one record per regular file."""

    def __init__(self, store: SQLiteRecordStore, *, progress_every: int = 1000) -> None:
        self.store = store
        self.progress_every = progress_every

    def index(self, root: Path, progress: Optional[ProgressCallback] = None) -> IndexStats:
        """Index every regular file under ``root``.

        Unreadable files are skipped and counted as failed. Store errors abort
        the run. The store is flushed once after the walk.
        """
        root = Path(os.path.abspath(root))
        if not root.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        LOGGER.info("Indexing directory: %s", root)
        stats = IndexStats(root=root)

        for path in iter_file_paths(root):
            try:
                record = extract_record(path)
            except OSError as exc:
                LOGGER.debug("Skipping %s: %s", path, exc)
                stats.failed += 1
                continue

            self.store.put(record.id, record)
            stats.indexed += 1

            if progress is not None:
                progress(stats.indexed)
            if self.progress_every and stats.indexed % self.progress_every == 0:
                LOGGER.info("Indexed %d files", stats.indexed)

        self.store.flush()
        LOGGER.info("Indexing complete: %d files (%d skipped)", stats.indexed, stats.failed)
        return stats
