"""SQLite-backed key-value record store."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from filefinder.models import FileRecord, RecordDecodeError

LOGGER = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised for any I/O or serialization fault in the record store."""


class CorruptRecordError(StoreError):
    """Raised when a stored value cannot be decoded during a scan."""

    def __init__(self, record_id: str, reason: str) -> None:
        super().__init__(f"Corrupt record {record_id!r}: {reason}")
        self.record_id = record_id


class SQLiteRecordStore:
    """Durable store of serialized FileRecords keyed by record id."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        try:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL;")
            self._conn.execute("PRAGMA synchronous=NORMAL;")
            self._ensure_schema()
        except sqlite3.Error as exc:
            raise StoreError(f"Unable to open store at {self.db_path}: {exc}") from exc

    def __enter__(self) -> "SQLiteRecordStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS records (
                    id TEXT PRIMARY KEY,
                    data TEXT NOT NULL
                )
                """
            )

    def put(self, record_id: str, record: FileRecord) -> None:
        """Persist ``record`` under ``record_id``, replacing any previous value."""
        try:
            payload = record.to_json()
            with self.transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO records(id, data) VALUES (?, ?)
                    ON CONFLICT(id) DO UPDATE SET data = excluded.data
                    """,
                    (record_id, payload),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to write record {record_id}: {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Failed to serialize record {record_id}: {exc}") from exc

    def get(self, record_id: str) -> Optional[FileRecord]:
        try:
            row = self._conn.execute(
                "SELECT id, data FROM records WHERE id = ?", (record_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to read record {record_id}: {exc}") from exc
        if row is None:
            return None
        return self._decode(row)

    def get_all(self) -> Iterator[FileRecord]:
        """Lazily yield every stored record in key order.

        A value that cannot be decoded aborts the scan with CorruptRecordError.
        """
        try:
            cursor = self._conn.execute("SELECT id, data FROM records ORDER BY id")
            for row in cursor:
                yield self._decode(row)
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to scan records: {exc}") from exc

    def count(self) -> int:
        try:
            return self._conn.execute("SELECT COUNT(*) FROM records").fetchone()[0]
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to count records: {exc}") from exc

    def delete_all(self) -> int:
        """Remove every record and return how many were deleted."""
        try:
            with self.transaction() as conn:
                return conn.execute("DELETE FROM records").rowcount
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to delete records: {exc}") from exc

    def clear(self) -> int:
        removed = self.delete_all()
        self.flush()
        LOGGER.info("Cleared %d records from %s", removed, self.db_path)
        return removed

    def flush(self) -> None:
        """Commit and checkpoint the WAL so prior writes survive a crash."""
        try:
            self._conn.commit()
            self._conn.execute("PRAGMA wal_checkpoint(FULL);")
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to flush store: {exc}") from exc

    def vacuum(self) -> None:
        self.flush()
        try:
            self._conn.execute("VACUUM;")
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to vacuum store: {exc}") from exc
        LOGGER.info("Database optimized: %s", self.db_path)

    @staticmethod
    def _decode(row: sqlite3.Row) -> FileRecord:
        try:
            return FileRecord.from_json(row["data"])
        except RecordDecodeError as exc:
            raise CorruptRecordError(row["id"], str(exc)) from exc
