"""Column value types and detection of the type that fits a list of strings."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Iterable, TypeVar

I = TypeVar("I")
O = TypeVar("O")


class Type(str, Enum):
    """The kind of value a column holds."""

    NONE = ""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATETIME = "datetime"

    def __str__(self) -> str:
        return self.value


_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_HEX_FLOAT_PATTERN = re.compile(r"[+-]?0[xX][0-9a-fA-F.]+[pP][+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_FRACTION = re.compile(r"(\d\d:\d\d:\d\d)[.,](\d+)")
_ZONE_ABBR = re.compile(r"(?<![A-Za-z])[A-Z]{3,5}(?![A-Za-z])")
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(Z|[+-]\d{2}:\d{2})"
)

# (strptime format, whether it carries a year)
_TIME_FORMATS: tuple[tuple[str, bool], ...] = (
    ("%m/%d %I:%M:%S%p '%y %z", True),
    ("%a %b %d %H:%M:%S %Y", True),
    ("%a %b %d %H:%M:%S %Z %Y", True),
    ("%a %b %d %H:%M:%S %z %Y", True),
    ("%d %b %y %H:%M %Z", True),
    ("%d %b %y %H:%M %z", True),
    ("%A, %d-%b-%y %H:%M:%S %Z", True),
    ("%a, %d %b %Y %H:%M:%S %Z", True),
    ("%a, %d %b %Y %H:%M:%S %z", True),
    ("%I:%M%p", False),
    ("%b %d %H:%M:%S", False),
    ("%Y-%m-%d %H:%M:%S", True),
    ("%Y-%m-%d", True),
    ("%H:%M:%S", False),
)


def _parse_rfc3339(text: str, micro: int) -> datetime | None:
    match = _RFC3339.fullmatch(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    zone = match.group(7)
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    try:
        return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError:
        return None


def string_to_time(text: str) -> datetime:
    """Parse ``text`` in any of the common layouts; raises ValueError otherwise."""
    base = text
    micro = 0
    fraction = _FRACTION.search(text)
    if fraction is not None:
        micro = int((fraction.group(2) + "000000")[:6])
        base = text[: fraction.end(1)] + text[fraction.end():]

    parsed = _parse_rfc3339(base, micro)
    if parsed is not None:
        return parsed

    zoned = _ZONE_ABBR.sub("UTC", base)
    for fmt, has_year in _TIME_FORMATS:
        candidate = zoned if "%Z" in fmt else base
        try:
            result = datetime.strptime(candidate, fmt)
            if not has_year:
                result = result.replace(year=1)
        except ValueError:
            continue
        if result.tzinfo is None:
            result = result.replace(tzinfo=timezone.utc)
        return result.replace(microsecond=micro)

    raise ValueError(f'cannot parse string: "{text}" as time')


def string_to_int(text: str) -> int:
    """Parse a base-10 signed 64-bit integer, strictly."""
    if _INT_PATTERN.fullmatch(text) is None:
        raise ValueError(f"invalid syntax for int: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def string_to_float(text: str) -> float:
    """Parse a float, rejecting surrounding space, underscores and overflow."""
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid syntax for float: {text!r}")
    if _HEX_FLOAT_PATTERN.fullmatch(text):
        return float.fromhex(text)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return value


def string_to_bool(text: str) -> bool:
    """Accept exactly ``true`` or ``false``."""
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"cannot convert string: {text} to bool")


def find_type(values: Iterable[str]) -> Type:
    """Return the narrowest type every non-empty value fits; raises if none is found."""
    has_dates = has_floats = has_ints = has_bools = has_strings = False
    for text in values:
        if text in ("", "NaN"):
            continue
        for parser, kind in (
            (string_to_time, "date"),
            (string_to_int, "int"),
            (string_to_float, "float"),
            (string_to_bool, "bool"),
        ):
            try:
                parser(text)
            except ValueError:
                continue
            if kind == "date":
                has_dates = True
            elif kind == "int":
                has_ints = True
            elif kind == "float":
                has_floats = True
            else:
                has_bools = True
            break
        else:
            has_strings = True

    if has_strings:
        return Type.STRING
    if has_bools:
        return Type.BOOL
    if has_floats:
        return Type.FLOAT
    if has_ints:
        return Type.INT
    if has_dates:
        return Type.DATETIME
    raise ValueError("couldn't detect type")


def convert_all(values: Iterable[I], convertor: Callable[[I], O]) -> list[O]:
    """Convert every value, letting the first failure propagate."""
    return [convertor(value) for value in values]