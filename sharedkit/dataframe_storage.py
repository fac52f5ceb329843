"""Saving data frames to CSV files and loading them back with detected column types."""

from __future__ import annotations

import csv
import os
from typing import Any, Callable

from sharedkit.apptype import (
    Type,
    convert_all,
    find_type,
    string_to_bool,
    string_to_float,
    string_to_int,
    string_to_time,
)
from sharedkit.dataframe import DataFrame
from sharedkit.series import build_series
from sharedkit.storage import open_file_for_reading, open_file_for_writing

_CONVERTORS: dict[Type, Callable[[str], Any]] = {
    Type.DATETIME: string_to_time,
    Type.INT: string_to_int,
    Type.FLOAT: string_to_float,
    Type.BOOL: string_to_bool,
}


class DataFrameStorage:
    """Stores a data frame as CSV: a header line of column names, then one line per row."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self.file_path = file_path

    def save(self, df: DataFrame) -> None:
        header = [df.get_column(c).name for c in range(df.num_columns())]
        rows = [
            [item.to_string() for item in df.get_row(r)] for r in range(df.num_rows())
        ]
        with open_file_for_writing(self.file_path) as fh:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow(header)
            writer.writerows(rows)

    def load(self) -> DataFrame:
        """Read the file, detecting each column's type from its cells."""
        with open_file_for_reading(self.file_path) as fh:
            records = [
                record for record in csv.reader(fh, skipinitialspace=True) if record
            ]

        if not records:
            raise ValueError(f"empty csv file: {self.file_path}")

        header, *body = records
        for line_no, record in enumerate(body, start=2):
            if len(record) != len(header):
                raise ValueError(f"record on line {line_no}: wrong number of fields")

        cells_by_column = list(zip(*body)) if body else [()] * len(header)

        columns = []
        for name, cells in zip(header, cells_by_column):
            texts = list(cells)
            convertor = _CONVERTORS.get(find_type(texts))
            values = convert_all(texts, convertor) if convertor else texts
            columns.append(build_series(name, values))

        return DataFrame(columns)