"""A folder of cached files indexed by a JSON manifest of keys."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import timedelta

from sharedkit.fileinfo import FileInfo
from sharedkit.storage import JSONStorage, read_bytes_from_file, write_bytes_to_file

logger = logging.getLogger(__name__)


class FileCache:
    """Caches bytes under string keys, each stored in its own file.

    ``expire_duration`` arguments are timedeltas; None or a negative value
    means entries never expire.
    """

    def __init__(
        self,
        manifest_path: str | os.PathLike[str],
        item_folder_path: str | os.PathLike[str],
    ) -> None:
        self._manifest_store = JSONStorage(manifest_path)
        self.item_folder_path = item_folder_path
        self._manifest: dict[str, FileInfo] | None = None

    def cleanup_expired_items(self, expire_duration: timedelta | None) -> int:
        """Remove expired entries and their files, returning how many were removed."""
        manifest = self._get_manifest()
        removed = 0
        try:
            for key, info in list(manifest.items()):
                if info.is_valid(expire_duration):
                    continue
                del manifest[key]
                os.remove(info.file_path(self.item_folder_path))
                removed += 1
        finally:
            try:
                self._save_manifest()
            except OSError:
                logger.warning("error saving manifest store")
        return removed

    def try_load_file_with_expire(
        self, key: str, expire_duration: timedelta | None
    ) -> bytes | None:
        """The cached bytes for ``key``, or None if absent or expired."""
        info = self._get_manifest().get(key)
        if info is None or not info.is_valid(expire_duration):
            return None
        return read_bytes_from_file(info.file_path(self.item_folder_path))

    def try_load_file(self, key: str) -> bytes | None:
        return self.try_load_file_with_expire(key, None)

    def save_file_with_ext(self, key: str, data: bytes, ext: str) -> None:
        """Store ``data`` under ``key``; a new entry's file name ends with ``ext``."""
        info = self._get_or_create_file_info(key, ext)
        write_bytes_to_file(info.file_path(self.item_folder_path), data)
        info.update_last_updated()
        self._save_manifest()

    def save_file(self, key: str, data: bytes) -> None:
        self.save_file_with_ext(key, data, "")

    def _get_manifest(self) -> dict[str, FileInfo]:
        if self._manifest is None:
            try:
                raw = self._manifest_store.load()
            except (OSError, ValueError):
                logger.warning("error loading manifest store")
                raw = None
            if isinstance(raw, dict):
                self._manifest = {
                    key: FileInfo.from_dict(value)
                    for key, value in raw.items()
                    if isinstance(value, dict)
                }
            else:
                self._manifest = {}
        return self._manifest

    def _get_or_create_file_info(self, key: str, ext: str) -> FileInfo:
        manifest = self._get_manifest()
        info = manifest.get(key)
        if info is None:
            info = FileInfo.create(f"{uuid.uuid4()}{ext}")
            manifest[key] = info
        return info

    def _save_manifest(self) -> None:
        if self._manifest is None:
            raise RuntimeError("Cannot save file cache with nil manifest")
        self._manifest_store.save(
            {key: info.to_dict() for key, info in self._manifest.items()}
        )