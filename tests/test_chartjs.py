import json
from datetime import datetime, timezone

import pytest

from sharedkit.chartjs import df_to_chartjs
from sharedkit.dataframe import DataFrame
from sharedkit.series import build_series

DAYS = ["mon", "tue", "wed"]
A_VALUES = [1.0, 2.0, 3.0]
B_VALUES = [3.5, 4.5, 5.5]


def _frame() -> DataFrame:
    return DataFrame(
        [
            build_series("day", DAYS),
            build_series("a", A_VALUES),
            build_series("b", B_VALUES),
        ]
    )


def test_labels_and_datasets_follow_columns():
    chart = df_to_chartjs(_frame(), "day", ["a", "b"])

    assert chart.labels == DAYS
    assert [ds.label for ds in chart.datasets] == ["a", "b"]
    assert chart.datasets[0].data == A_VALUES
    assert chart.datasets[1].data == B_VALUES


def test_dataset_order_follows_requested_names():
    chart = df_to_chartjs(_frame(), "day", ["b", "a"])
    assert [ds.label for ds in chart.datasets] == ["b", "a"]
    assert chart.datasets[0].data == B_VALUES


def test_to_dict_survives_json():
    chart = df_to_chartjs(_frame(), "day", ["a"])
    data = json.loads(json.dumps(chart.to_dict()))
    assert data == {"labels": DAYS, "datasets": [{"label": "a", "data": A_VALUES}]}


def test_to_dict_formats_datetimes():
    moment = datetime(2000, 1, 1, tzinfo=timezone.utc)
    df = DataFrame([build_series("when", [moment]), build_series("v", [1.0])])
    data = df_to_chartjs(df, "when", ["v"]).to_dict()
    assert data["labels"] == [moment.isoformat()]


def test_nil_frame_raises():
    with pytest.raises(ValueError, match="nil df"):
        df_to_chartjs(None, "day", ["a"])


def test_empty_axes_raises():
    with pytest.raises(ValueError, match="empty x axes"):
        df_to_chartjs(_frame(), "day", [])


def test_unknown_column_raises():
    with pytest.raises(KeyError):
        df_to_chartjs(_frame(), "day", ["missing"])
    with pytest.raises(KeyError):
        df_to_chartjs(_frame(), "missing", ["a"])