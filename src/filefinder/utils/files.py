"""Utility helpers for working with files."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Iterator

from filefinder.models import UNKNOWN_EXTENSION

TEXT_EXTENSIONS = frozenset(
    {
        "rs", "py", "js", "ts", "go", "c", "cpp", "h", "hpp", "java", "kt",
        "swift", "rb", "php", "scala", "sh", "bash", "yml", "yaml", "json",
        "toml", "xml", "html", "css", "sql", "md", "txt", "log",
    }
)


def compute_record_id(path: str | Path) -> str:
    """Derive the stable record id for an absolute path string."""
    return hashlib.md5(str(path).encode("utf-8", "surrogateescape")).hexdigest()


def display_path(path: str | Path) -> str:
    """Render ``path`` as valid UTF-8, replacing undecodable filename bytes."""
    return os.fsencode(path).decode("utf-8", "replace")


def file_extension(path: str | Path) -> str:
    """Return the lowercase extension of ``path`` without the dot."""
    suffix = Path(path).suffix
    if not suffix:
        return UNKNOWN_EXTENSION
    return suffix[1:].lower()


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def is_text_extension(extension: str) -> bool:
    return extension.lower() in TEXT_EXTENSIONS


def iter_file_paths(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` in lexicographic order.

    Symlinks are neither followed nor yielded. Directories that cannot be
    listed are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for name in sorted(filenames):
            candidate = Path(dirpath) / name
            if candidate.is_symlink() or not candidate.is_file():
                continue
            yield candidate
