"""Text helpers used by scoring and reporting."""

from __future__ import annotations

import re
from typing import List

_PATH_SEPARATORS = re.compile(r"[/\\_\-.]")
SIZE_UNITS = ("B", "KB", "MB", "GB")


def fold_case(text: str, case_sensitive: bool) -> str:
    return text if case_sensitive else text.lower()


def split_path_tokens(path: str) -> List[str]:
    """Split a path on separators, underscores, hyphens and dots."""
    return _PATH_SEPARATORS.split(path)


def collapse_newlines(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def format_size(num_bytes: int) -> str:
    """Render a byte count with two decimals, e.g. ``2048 -> "2.00KB"``."""
    size = float(num_bytes)
    unit_index = 0
    while size > 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.2f}{SIZE_UNITS[unit_index]}"
