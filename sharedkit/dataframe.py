"""A table of equally long, uniquely named series."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from sharedkit.element import Element
from sharedkit.series import Series, _to_element, build_series

_DESCRIBE_INDEX = ["count", "sum", "mean", "std", "min", "max"]


class DataFrame:
    """Columns of equal length addressed by position or by name."""

    def __init__(self, columns: Iterable[Series] | None = None) -> None:
        self._columns: list[Series] = []
        self._names: dict[str, int] = {}
        try:
            self.add_columns(columns or [])
        except ValueError as exc:
            raise ValueError(f"Error creating df: {exc}") from exc

    def num_columns(self) -> int:
        return len(self._columns)

    def num_rows(self) -> int:
        return len(self._columns[0]) if self._columns else 0

    def add_columns(self, columns: Iterable[Series]) -> None:
        for column in columns:
            self.add_column(column)

    def add_column(self, column: Series) -> None:
        if self._columns and len(column) != self.num_rows():
            raise ValueError(
                "Add Column called with column length not matching the dataframe's length"
            )
        if column.name in self._names:
            raise ValueError(
                f'Add Column called with column name that already exists: "{column.name}"'
            )
        self._names[column.name] = len(self._columns)
        self._columns.append(column)

    def add_rows(self, rows: Iterable[Sequence[Any]]) -> None:
        for row in rows:
            self.add_row(row)

    def add_row(self, row: Sequence[Any]) -> None:
        """Append one value per column; nothing is added if any value does not fit."""
        if len(row) != len(self._columns):
            raise ValueError(
                "Add row called with row length not matching the dataframe's length"
            )
        elements = [
            _to_element(column.elms.kind, value)
            for column, value in zip(self._columns, row)
        ]
        for column, element in zip(self._columns, elements):
            column.append(element)

    def _check_row(self, row_idx: int, caller: str) -> None:
        if not 0 <= row_idx < self.num_rows():
            raise IndexError(
                f"{caller} called with rowIdx: {row_idx} out or range 0 - {self.num_rows()}"
            )

    def get_row(self, row_idx: int) -> list[Element]:
        self._check_row(row_idx, "GetRow")
        return [column.elem(row_idx) for column in self._columns]

    def get_column_by_name(self, column_name: str) -> Series:
        try:
            idx = self._names[column_name]
        except KeyError:
            raise KeyError(f"column name not found in dataframe: {column_name}") from None
        return self.get_column(idx)

    def get_column(self, column_idx: int) -> Series:
        if not 0 <= column_idx < self.num_columns():
            raise IndexError(
                f"GetColumnByIdx called with columnIdx: {column_idx} "
                f"out or range 0 - {self.num_columns()}"
            )
        return self._columns[column_idx]

    def get_by_name(self, column_name: str, row_idx: int) -> Element:
        column = self.get_column_by_name(column_name)
        self._check_row(row_idx, "Get")
        return column.elem(row_idx)

    def get(self, column_idx: int, row_idx: int) -> Element:
        column = self.get_column(column_idx)
        self._check_row(row_idx, "Get")
        return column.elem(row_idx)

    def drop_column(self, *args: str) -> None:
        """Drop the named columns in order, stopping at the first unknown name."""
        for name in args:
            if name not in self._names:
                raise KeyError(f"column name not found in dataframe: {name}")
            del self._columns[self._names[name]]
            self._names = {col.name: idx for idx, col in enumerate(self._columns)}

    def render(
        self,
        show_headers: bool,
        show_types: bool,
        show_indexes: bool,
        header_rows: int,
        tail_rows: int,
        class_name: str,
    ) -> str:
        return render(
            self, show_headers, show_types, show_indexes, header_rows, tail_rows, class_name
        )

    def describe(self) -> DataFrame | None:
        return describe(self)

    def __str__(self) -> str:
        return self.render(True, True, True, 5, 3, "DataFrame")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataFrame):
            return NotImplemented
        return self._columns == other._columns

    def __repr__(self) -> str:
        return f"DataFrame({self._columns!r})"


def _width(text: str) -> int:
    return len(text.encode("utf-8"))


def render(
    df: DataFrame | None,
    show_headers: bool,
    show_types: bool,
    show_indexes: bool,
    header_rows: int,
    tail_rows: int,
    class_name: str,
) -> str:
    """Lay the frame out as an aligned text table, eliding middle rows."""
    class_name = class_name.strip()

    if df is None:
        return f"{class_name}: Nil" if class_name else "Nil"

    total_rows = df.num_rows()
    has_dot_row = True
    if header_rows + tail_rows + 1 >= total_rows:
        header_rows = min(header_rows + tail_rows + 1, total_rows)
        tail_rows = 0
        has_dot_row = False

    columns = df._columns
    if not columns:
        return f"{class_name}: Empty" if class_name else "Empty"

    def with_index(label: str, cells: list[str]) -> list[str]:
        return [label, *cells] if show_indexes else cells

    def data_row(r: int) -> list[str]:
        return with_index(f"{r}:", [col.elem(r).to_string() for col in columns])

    matrix: list[list[str]] = []
    if show_headers:
        matrix.append(with_index("", [col.name for col in columns]))
    matrix.extend(data_row(r) for r in range(header_rows))
    if has_dot_row:
        matrix.append(with_index("", ["..."] * len(columns)))
    matrix.extend(data_row(r) for r in range(total_rows - tail_rows, total_rows))
    if show_types:
        matrix.append(with_index("", [f"<{col.type()}>" for col in columns]))

    widths = [max(map(_width, cells)) for cells in zip(*matrix)]

    lines = [f"[{len(columns)}x{total_rows}] {class_name}".rstrip(" ")]
    for row in matrix:
        cells = []
        for c, (cell, width) in enumerate(zip(row, widths)):
            pad = " " * max(width - len(cell), 0)
            cells.append(pad + cell if show_indexes and c == 0 else cell + pad)
        lines.append(" ".join(cells).rstrip(" "))
    return "\n".join(lines)


def describe(df: DataFrame | None) -> DataFrame | None:
    """Summary statistics per column, or None for a missing or empty frame."""
    if df is None or df.num_columns() == 0:
        return None

    columns = [build_series("index", _DESCRIBE_INDEX)]
    for col in df._columns:
        stats = [
            float(len(col)),
            col.sum(),
            col.mean(),
            col.std_dev(),
            col.min(),
            col.max(),
        ]
        columns.append(build_series(col.name, stats))
    return DataFrame(columns)