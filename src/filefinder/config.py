"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def _get_default_db_path() -> Path:
    """Get the default database path for the current working directory."""
    # When running from a checkout, prefer local data/ if it exists
    local_db = Path("data/filefinder.db")
    if local_db.exists():
        return local_db

    return Path.home() / ".filefinder" / "filefinder.db"


@dataclass(slots=True)
class AppConfig:
    db_path: Path | None = None
    progress_every: int = 1000
    default_limit: int = 100
    max_limit: int = 1000

    def __post_init__(self) -> None:
        if self.db_path is None:
            self.db_path = _get_default_db_path()

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        if Path(self.db_path).is_absolute() or base_dir is None:
            return Path(self.db_path)
        return base_dir / self.db_path

    def clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.default_limit
        return max(1, min(limit, self.max_limit))
