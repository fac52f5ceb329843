"""File-backed storage of models: JSON, CSV, cached and event-calling stores."""

from __future__ import annotations

import csv
import dataclasses
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Generic, TypeVar

logger = logging.getLogger(__name__)

M = TypeVar("M")
R = TypeVar("R")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_KINDS_BY_NAME = {"str": str, "int": int, "float": float, "bool": bool, "Any": Any}


class Storage(ABC, Generic[M]):
    """A place that models can be saved to and loaded from."""

    @abstractmethod
    def load(self) -> M:
        """Load the stored model."""

    @abstractmethod
    def save(self, obj: M) -> None:
        """Store the given model."""


def _ensure_parent_dir(file_path: str | os.PathLike[str]) -> None:
    try:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OSError(f"Error creating directory: {exc}") from exc


def check(path: str | os.PathLike[str]) -> str:
    """Return the absolute form of ``path``, raising if nothing exists there."""
    abs_path = os.path.abspath(path)
    if not os.path.exists(abs_path):
        raise FileNotFoundError(f"Could not find file with path: {abs_path}")
    return abs_path


def open_file_for_reading(file_path: str | os.PathLike[str]) -> IO[str]:
    """Open an existing file as UTF-8 text for reading."""
    try:
        abs_path = check(file_path)
    except FileNotFoundError as exc:
        raise FileNotFoundError(
            f"failed to open file for reading with err: {exc}"
        ) from exc
    return open(abs_path, encoding="utf-8", newline="")


def open_file_for_writing(file_path: str | os.PathLike[str]) -> IO[str]:
    """Open a file as UTF-8 text for writing, creating parent folders and truncating."""
    _ensure_parent_dir(file_path)
    return open(file_path, "w", encoding="utf-8", newline="")


def read_bytes_from_file(file_path: str | os.PathLike[str]) -> bytes:
    """Read the whole content of an existing file."""
    try:
        abs_path = check(file_path)
    except FileNotFoundError as exc:
        raise FileNotFoundError(
            f"failed to open file for reading with err: {exc}"
        ) from exc
    return Path(abs_path).read_bytes()


def write_bytes_to_file(file_path: str | os.PathLike[str], data: bytes) -> None:
    """Write ``data`` to a file, creating parent folders and replacing any content."""
    _ensure_parent_dir(file_path)
    Path(file_path).write_bytes(data)


class JSONStorage(Storage[Any]):
    """Stores a JSON-serialisable value in a file, indented by two spaces."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self.file_path = file_path

    def save(self, obj: Any) -> None:
        text = json.dumps(obj, indent=2)
        with open_file_for_writing(self.file_path) as fh:
            fh.write(text)

    def load(self) -> Any:
        with open_file_for_reading(self.file_path) as fh:
            return json.load(fh)


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_cell(text: str, kind: Any) -> Any:
    stripped = text.strip()
    if kind is bool:
        if stripped == "":
            return False
        if stripped in _TRUE_WORDS:
            return True
        if stripped in _FALSE_WORDS:
            return False
        raise ValueError(f"cannot convert {text!r} to bool")
    if kind is int:
        return int(stripped) if stripped else 0
    if kind is float:
        return float(stripped) if stripped else 0.0
    if kind is str or kind is Any or not callable(kind):
        return text
    return kind(text)


def _field_kind(field: dataclasses.Field) -> Any:
    kind = field.type
    if isinstance(kind, str):
        return _KINDS_BY_NAME.get(kind.strip(), str)
    return kind


def _has_default(field: dataclasses.Field) -> bool:
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
    )


class CSVStorage(Storage[list]):
    """Stores a list of dataclass rows as CSV with a header line.

    A field's column name is taken from its ``csv`` metadata, else its name;
    a ``csv`` value of ``"-"`` leaves the field out.
    """

    def __init__(self, file_path: str | os.PathLike[str], row_type: type) -> None:
        if not (isinstance(row_type, type) and dataclasses.is_dataclass(row_type)):
            raise TypeError(f"row_type must be a dataclass, got {row_type!r}")
        self.file_path = file_path
        self.row_type = row_type
        self._fields = [
            (field.metadata.get("csv", field.name), field, _field_kind(field))
            for field in dataclasses.fields(row_type)
            if field.init and field.metadata.get("csv") != "-"
        ]

    def save(self, rows: list) -> None:
        with open_file_for_writing(self.file_path) as fh:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow([column for column, _, _ in self._fields])
            for row in rows:
                writer.writerow(
                    [_format_cell(getattr(row, field.name)) for _, field, _ in self._fields]
                )

    def load(self) -> list:
        with open_file_for_reading(self.file_path) as fh:
            records = [record for record in csv.reader(fh) if record]

        if not records:
            raise ValueError("empty csv file given")

        header, *body = records
        positions = {name: idx for idx, name in enumerate(header)}

        rows = []
        for line_no, record in enumerate(body, start=2):
            if len(record) != len(header):
                raise ValueError(f"record on line {line_no}: wrong number of fields")
            kwargs = {}
            for column, field, kind in self._fields:
                if column in positions:
                    kwargs[field.name] = _parse_cell(record[positions[column]], kind)
                elif not _has_default(field):
                    raise ValueError(f"column {column!r} missing from csv file")
            rows.append(self.row_type(**kwargs))
        return rows


@dataclasses.dataclass
class MockStorage(Storage[Any]):
    """In-memory storage whose results are set by the caller."""

    data: Any = None
    save_error: Exception | None = None
    load_error: Exception | None = None

    def save(self, obj: Any) -> None:
        if self.save_error is not None:
            raise self.save_error

    def load(self) -> Any:
        if self.load_error is not None:
            raise self.load_error
        return self.data


class EventCallableStorageItem(ABC):
    """An item that is told when it has been loaded and before it is saved."""

    @abstractmethod
    def on_load(self) -> None:
        """Called after the item has been loaded."""

    @abstractmethod
    def on_save(self) -> None:
        """Called before the item is saved."""


class StorageEventCaller(Storage[list]):
    """Wraps a store of item lists, calling each item's load and save hooks."""

    def __init__(self, sub_store: Storage[list]) -> None:
        self.sub_store = sub_store

    def save(self, items: list) -> None:
        for item in items:
            item.on_save()
        self.sub_store.save(items)

    def load(self) -> list:
        items = self.sub_store.load()
        for item in items:
            item.on_load()
        return items


class CachedFileStorage(Storage[M]):
    """Keeps the last loaded value until the file's modification time changes."""

    def __init__(self, file_path: str | os.PathLike[str], sub_store: Storage[M]) -> None:
        self.file_path = file_path
        self.sub_store = sub_store
        self._last_mod_time: int | None = None
        self._cached_content: Any = None

    def save(self, obj: M) -> None:
        self._cached_content = None
        self._last_mod_time = None
        self.sub_store.save(obj)

    def load(self) -> M:
        mod_time = os.stat(self.file_path).st_mtime_ns

        if self._last_mod_time is not None and mod_time == self._last_mod_time:
            logger.info("Cache HIT for: %s", self.file_path)
            return self._cached_content
        logger.info("Cache MISS for: %s", self.file_path)

        output = self.sub_store.load()
        self._last_mod_time = mod_time
        self._cached_content = output
        return output