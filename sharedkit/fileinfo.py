"""Metadata about a cached file: its name and when it was last updated."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass
class FileInfo:
    """A cached file's name and last update as a unix timestamp in seconds."""

    file_name: str
    last_updated_timestamp: int = 0

    @classmethod
    def create(cls, file_name: str) -> FileInfo:
        """Make a record for ``file_name`` stamped with the current time."""
        info = cls(file_name=file_name)
        info.update_last_updated()
        return info

    def update_last_updated(self) -> None:
        self.last_updated_timestamp = int(time.time())

    def last_updated(self) -> datetime:
        return datetime.fromtimestamp(self.last_updated_timestamp, timezone.utc)

    def is_valid(self, expire_duration: timedelta | None) -> bool:
        """True if updated within ``expire_duration``; None or negative never expires."""
        if expire_duration is None or expire_duration < timedelta(0):
            return True
        threshold = datetime.now(timezone.utc) - expire_duration
        return self.last_updated() > threshold

    def file_path(self, folder_path: str | os.PathLike[str]) -> str:
        return os.path.join(folder_path, self.file_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file-name": self.file_name,
            "last-updated": self.last_updated_timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        return cls(
            file_name=data.get("file-name", ""),
            last_updated_timestamp=int(data.get("last-updated", 0)),
        )