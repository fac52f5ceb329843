import math
from datetime import datetime, timezone

import pytest

from sharedkit.apptype import Type
from sharedkit.dataframe import DataFrame, describe, render
from sharedkit.element import FloatElement
from sharedkit.series import build_series


def _students():
    return DataFrame(
        [
            build_series("name", ["Alice", "Bob"]),
            build_series("age", ["20", "22"]),
            build_series("grade", ["A", "B"]),
        ]
    )


def _eleven_rows():
    return DataFrame(
        [
            build_series("A", [str(i) for i in range(1, 12)]),
            build_series("B", list(range(1, 12))),
            build_series("C", [float(i) for i in range(1, 12)]),
            build_series("D", [i % 2 == 0 for i in range(11)]),
        ]
    )


PRINT_CASES = [
    (lambda: None, False, False, False, 0, 0, "", "Nil"),
    (lambda: None, False, False, False, 0, 0, "DataFrame", "DataFrame: Nil"),
    (lambda: DataFrame([]), False, False, False, 0, 0, "", "Empty"),
    (lambda: DataFrame([]), False, False, False, 0, 0, "DataFrame", "DataFrame: Empty"),
    (
        lambda: DataFrame([build_series("name", [])]),
        True, True, True, 100, 100, "DataFrame",
        "\n".join(["[1x0] DataFrame", " name", " <string>"]),
    ),
    (
        _students, True, True, True, 100, 100, "DataFrame",
        "\n".join([
            "[3x2] DataFrame",
            "   name     age      grade",
            "0: Alice    20       A",
            "1: Bob      22       B",
            "   <string> <string> <string>",
        ]),
    ),
    (
        _students, True, False, False, 100, 100, "",
        "\n".join(["[3x2]", "name  age grade", "Alice 20  A", "Bob   22  B"]),
    ),
    (
        _students, False, False, True, 100, 100, "",
        "\n".join(["[3x2]", "0: Alice 20 A", "1: Bob   22 B"]),
    ),
    (
        _students, False, True, False, 100, 100, "",
        "\n".join([
            "[3x2]",
            "Alice    20       A",
            "Bob      22       B",
            "<string> <string> <string>",
        ]),
    ),
    (
        lambda: DataFrame([build_series("test", [str(i) for i in range(1, 12)])]),
        True, True, True, 100, 100, "",
        "\n".join([
            "[1x11]",
            "    test",
            " 0: 1",
            " 1: 2",
            " 2: 3",
            " 3: 4",
            " 4: 5",
            " 5: 6",
            " 6: 7",
            " 7: 8",
            " 8: 9",
            " 9: 10",
            "10: 11",
            "    <string>",
        ]),
    ),
    (
        _eleven_rows, True, True, True, 100, 100, "",
        "\n".join([
            "[4x11]",
            "    A        B       C       D",
            " 0: 1        1       1       true",
            " 1: 2        2       2       false",
            " 2: 3        3       3       true",
            " 3: 4        4       4       false",
            " 4: 5        5       5       true",
            " 5: 6        6       6       false",
            " 6: 7        7       7       true",
            " 7: 8        8       8       false",
            " 8: 9        9       9       true",
            " 9: 10       10      10      false",
            "10: 11       11      11      true",
            "    <string> <float> <float> <bool>",
        ]),
    ),
    (
        _eleven_rows, True, True, True, 5, 3, "",
        "\n".join([
            "[4x11]",
            "    A        B       C       D",
            " 0: 1        1       1       true",
            " 1: 2        2       2       false",
            " 2: 3        3       3       true",
            " 3: 4        4       4       false",
            " 4: 5        5       5       true",
            "    ...      ...     ...     ...",
            " 8: 9        9       9       true",
            " 9: 10       10      10      false",
            "10: 11       11      11      true",
            "    <string> <float> <float> <bool>",
        ]),
    ),
]


@pytest.mark.parametrize(
    "make, headers, types, indexes, head, tail, class_name, expected", PRINT_CASES
)
def test_render(make, headers, types, indexes, head, tail, class_name, expected):
    assert render(make(), headers, types, indexes, head, tail, class_name) == expected


def test_describe_missing_or_empty():
    assert describe(None) is None
    assert DataFrame(None).describe() is None
    assert DataFrame([]).describe() is None


def test_describe_int_column():
    df = DataFrame([build_series("test", list(range(1, 12)))])
    expected = DataFrame(
        [
            build_series("index", ["count", "sum", "mean", "std", "min", "max"]),
            build_series("test", [11.0, 66.0, 6.0, 3.3166247903554, 1.0, 11.0]),
        ]
    )
    assert df.describe() == expected


BENCH_EXPECTED = "\n".join([
    "[7x6] DataFrame",
    "   index    A               B               C               D                  E                A_Clone",
    "0: count    11              11              11              11                 11               11",
    "1: sum      NaN             66              66              NaN                -6.834915648e+11 NaN",
    "2: mean     6               6               6               0.5454545454545454 -6.21355968e+10  6",
    "3: std      3.3166247903554 3.3166247903554 3.3166247903554 0.5222329678670935 0                3.3166247903554",
    "4: min      NaN             1               1               NaN                -6.21355968e+10  NaN",
    "5: max      NaN             11              11              NaN                -6.21355968e+10  NaN",
    "   <string> <float>         <float>         <float>         <float>            <float>          <float>",
])


def test_full_workflow():
    col_a = build_series("A", [str(i) for i in range(1, 12)])
    bools = [i % 2 == 0 for i in range(11)]
    zero_time = datetime(1, 1, 1, tzinfo=timezone.utc)
    df = DataFrame(
        [
            col_a,
            build_series("B", list(range(1, 12))),
            build_series("C", [float(i) for i in range(1, 12)]),
            build_series("D", bools),
            build_series("D_2", bools),
            build_series("E", [zero_time] * 11),
        ]
    )

    col1 = df.get_column(0)
    assert col1 is col_a
    clone = col1.clone()
    assert clone == col_a

    clone.rename("A_Clone")
    df.add_column(clone)
    df.drop_column("D_2")
    assert df.get_column_by_name("A_Clone") is clone
    assert df.get_column_by_name("E").type() is Type.DATETIME

    assert str(df.describe()) == BENCH_EXPECTED

    clone.apply_in_place(lambda item: FloatElement(item.to_float() * 10))
    lines = str(df.describe()).split("\n")
    assert lines[1] == BENCH_EXPECTED.split("\n")[1]
    assert lines[2] == BENCH_EXPECTED.split("\n")[2]
    assert lines[4] == (
        "2: mean     6               6               6               "
        "0.5454545454545454 -6.21355968e+10  60"
    )
    assert lines[5] == (
        "3: std      3.3166247903554 3.3166247903554 3.3166247903554 "
        "0.5222329678670935 0                33.166247903554"
    )


def test_sizes_and_access():
    df = _students()
    assert df.num_columns() == 3
    assert df.num_rows() == 2
    assert df.get(1, 0).val() == "20"
    assert df.get_by_name("grade", 1).val() == "B"
    assert [e.val() for e in df.get_row(1)] == ["Bob", "22", "B"]


def test_access_errors():
    df = _students()
    with pytest.raises(IndexError):
        df.get_column(3)
    with pytest.raises(IndexError):
        df.get_column(-1)
    with pytest.raises(IndexError):
        df.get(0, 2)
    with pytest.raises(IndexError):
        df.get_row(-1)
    with pytest.raises(KeyError):
        df.get_column_by_name("missing")
    with pytest.raises(KeyError):
        df.get_by_name("missing", 0)


def test_add_column_errors():
    df = _students()
    with pytest.raises(ValueError, match="already exists"):
        df.add_column(build_series("name", ["x", "y"]))
    with pytest.raises(ValueError, match="length"):
        df.add_column(build_series("other", ["x"]))
    with pytest.raises(ValueError):
        DataFrame([build_series("a", [1]), build_series("a", [2])])


def test_drop_column_keeps_names_consistent():
    df = _students()
    df.drop_column("name")
    assert df.num_columns() == 2
    assert df.get_column_by_name("grade").values() == ["A", "B"]
    with pytest.raises(KeyError):
        df.drop_column("age", "nope")
    assert df.num_columns() == 1


def test_add_rows():
    df = DataFrame([build_series("n", ["a"]), build_series("v", [1.0])])
    df.add_rows([["b", 2], ["c", 3.5]])
    assert df.num_rows() == 3
    assert df.get_column_by_name("v").values() == [1.0, 2.0, 3.5]
    with pytest.raises(ValueError):
        df.add_row(["only one"])
    with pytest.raises(TypeError):
        df.add_row(["d", "not a number"])
    assert df.num_rows() == 3


def test_describe_nan_for_strings():
    described = _students().describe()
    assert math.isnan(described.get_by_name("name", 1).val())
    assert described.get_by_name("name", 0).val() == 2.0