"""Filtered, scored scan over the record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional

from filefinder.index.scoring import extract_preview, score_content, score_filename
from filefinder.index.storage import SQLiteRecordStore
from filefinder.models import FileRecord
from filefinder.utils.files import normalize_extension

DEFAULT_LIMIT = 100


@dataclass(slots=True)
class SearchFilter:
    query: str
    search_content: bool = False
    case_sensitive: bool = False
    extensions: FrozenSet[str] = field(default_factory=frozenset)
    min_size: int = 0
    max_size: Optional[int] = None
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        self.extensions = frozenset(
            normalize_extension(ext) for ext in self.extensions if ext.strip()
        )

    def accepts(self, record: FileRecord) -> bool:
        """Apply the structural filters (extension set and size bounds)."""
        if self.extensions and record.extension not in self.extensions:
            return False
        if record.size < self.min_size:
            return False
        if self.max_size is not None and record.size > self.max_size:
            return False
        return True


@dataclass(slots=True)
class SearchResult:
    file_id: str
    path: str
    score: float
    size: int
    created_at: str
    modified_at: str
    matched_content: Optional[str] = None


class Searcher:
    """High-level API to query the record store."""

    def __init__(self, store: SQLiteRecordStore) -> None:
        self.store = store

    def search(self, search_filter: SearchFilter) -> List[SearchResult]:
        results = list(self._score_records(self.store.get_all(), search_filter))
        # list.sort is stable, so equal scores keep store order
        results.sort(key=lambda result: result.score, reverse=True)
        return results[: max(search_filter.limit, 0)]

    @staticmethod
    def _score_records(
        records: Iterable[FileRecord], search_filter: SearchFilter
    ) -> Iterable[SearchResult]:
        query = search_filter.query
        case_sensitive = search_filter.case_sensitive
        for record in records:
            if not search_filter.accepts(record):
                continue

            if search_filter.search_content:
                score = score_content(record, query, case_sensitive)
            else:
                score = score_filename(record, query, case_sensitive)
            if score <= 0:
                continue

            preview = None
            if search_filter.search_content:
                preview = extract_preview(record, query, case_sensitive)

            yield SearchResult(
                file_id=record.id,
                path=record.path,
                score=score,
                size=record.size,
                created_at=record.created_at,
                modified_at=record.modified_at,
                matched_content=preview,
            )
