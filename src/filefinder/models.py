"""Core FileFinder data models."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

UNKNOWN_EXTENSION = "unknown"


class RecordDecodeError(ValueError):
    """Raised when stored bytes cannot be turned back into a FileRecord."""


@dataclass(slots=True)
class FileRecord:
    """Persisted representation of one indexed file."""

    id: str
    path: str
    size: int
    extension: str
    created_at: str
    modified_at: str
    content: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return self.content is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRecord":
        try:
            return cls(
                id=str(data["id"]),
                path=str(data["path"]),
                size=int(data["size"]),
                extension=str(data.get("extension") or UNKNOWN_EXTENSION),
                created_at=str(data["created_at"]),
                modified_at=str(data["modified_at"]),
                content=data.get("content"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordDecodeError(f"Invalid record payload: {exc}") from exc

    @classmethod
    def from_json(cls, payload: str | bytes) -> "FileRecord":
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise RecordDecodeError(f"Malformed record JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise RecordDecodeError("Record JSON must be an object")
        return cls.from_dict(data)
