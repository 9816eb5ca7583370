"""File record extraction.

Turns one filesystem entry into a :class:`FileRecord`. Content is only read for
extensions on the text allow-list, and any failure while reading it leaves the
record without content instead of failing the extraction.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from filefinder.models import FileRecord
from filefinder.utils.files import (
    compute_record_id,
    display_path,
    file_extension,
    is_text_extension,
)

LOGGER = logging.getLogger(__name__)


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def _creation_time(stat: os.stat_result) -> float:
    # st_birthtime exists on macOS/BSD and recent Windows builds only
    return getattr(stat, "st_birthtime", stat.st_ctime)


def read_text_content(path: Path) -> Optional[str]:
    """Read ``path`` as UTF-8, returning ``None`` on any decode or I/O error."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Content unavailable for %s: %s", path, exc)
        return None


def extract_record(path: Path) -> FileRecord:
    """Build a FileRecord for ``path``.

    Raises:
        OSError: when the file metadata cannot be read.
    """
    absolute = Path(os.path.abspath(path))
    stat = absolute.stat()
    path_text = display_path(absolute)
    extension = file_extension(path_text)
    content = read_text_content(absolute) if is_text_extension(extension) else None

    return FileRecord(
        id=compute_record_id(absolute),
        path=path_text,
        size=stat.st_size,
        extension=extension,
        created_at=_isoformat(_creation_time(stat)),
        modified_at=_isoformat(stat.st_mtime),
        content=content,
    )
