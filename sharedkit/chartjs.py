"""Conversion of data frame columns into Chart.js chart data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from sharedkit.dataframe import DataFrame


def _jsonable(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


@dataclass
class ChartJSDataset:
    """One line or bar series of a chart."""

    label: str
    data: list[Any] = field(default_factory=list)


@dataclass
class ChartJSData:
    """Labels of the x axis and the datasets plotted against them."""

    labels: list[Any] = field(default_factory=list)
    datasets: list[ChartJSDataset] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The chart data in the shape Chart.js expects, ready for JSON."""
        return {
            "labels": [_jsonable(v) for v in self.labels],
            "datasets": [
                {"label": ds.label, "data": [_jsonable(v) for v in ds.data]}
                for ds in self.datasets
            ],
        }


def df_to_chartjs(
    df: DataFrame | None, x_axis_name: str, y_axes_names: Sequence[str]
) -> ChartJSData:
    """Use one column as labels and others as datasets."""
    if df is None:
        raise ValueError("DfToChartJS called with nil df")
    if not y_axes_names:
        raise ValueError("DfToChartJS called with empty x axes")

    labels = df.get_column_by_name(x_axis_name)
    datasets = [
        ChartJSDataset(label=name, data=df.get_column_by_name(name).values())
        for name in y_axes_names
    ]
    return ChartJSData(labels=labels.values(), datasets=datasets)