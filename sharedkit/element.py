"""Single typed cells of a series: strings, floats, bools and date-times."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from sharedkit.apptype import Type

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_float(value: float) -> str:
    """Shortest text for a float, switching to exponent form as Go's %v does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(d) for d in digits)
    nd = len(text)
    exp = nd + exponent - 1
    prefix = "-" if sign else ""

    if exp < -4 or exp >= 6:
        mantissa = text[0] + ("." + text[1:] if nd > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"

    dp = exp + 1
    if dp <= 0:
        body = "0." + "0" * (-dp) + text
    elif dp >= nd:
        body = text + "0" * (dp - nd)
    else:
        body = text[:dp] + "." + text[dp:]
    return prefix + body


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class Element(ABC):
    """A single value with comparisons and conversions."""

    _type = Type.NONE

    def __init__(self, val: Any) -> None:
        if not self._accepts(val):
            raise TypeError(f"{type(self).__name__} cannot hold {val!r}")
        self._val = val

    @staticmethod
    @abstractmethod
    def _accepts(value: Any) -> bool:
        """Whether ``value`` is of the type this element holds."""

    def clone(self) -> Element:
        return type(self)(self._val)

    def set(self, value: Any) -> None:
        """Replace the value; values of another type are ignored."""
        if self._accepts(value):
            self._val = value

    def val(self) -> Any:
        return self._val

    def to_string(self) -> str:
        return str(self._val)

    def eq(self, other: Element) -> bool:
        other_val = other.val()
        return self._accepts(other_val) and self._val == other_val

    def neq(self, other: Element) -> bool:
        other_val = other.val()
        return not self._accepts(other_val) or self._val != other_val

    @abstractmethod
    def less(self, other: Element) -> bool: ...

    @abstractmethod
    def less_eq(self, other: Element) -> bool: ...

    @abstractmethod
    def greater(self, other: Element) -> bool: ...

    @abstractmethod
    def greater_eq(self, other: Element) -> bool: ...

    def type(self) -> Type:
        return self._type

    @abstractmethod
    def to_float(self) -> float: ...

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._val == other._val

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._val!r})"


class StringElement(Element):
    """A text value, compared with the text form of the other element."""

    _type = Type.STRING

    @staticmethod
    def _accepts(value: Any) -> bool:
        return isinstance(value, str)

    def to_float(self) -> float:
        try:
            return float(self._val)
        except ValueError:
            return math.nan

    def less(self, other: Element) -> bool:
        return self._val < other.to_string()

    def less_eq(self, other: Element) -> bool:
        return self._val <= other.to_string()

    def greater(self, other: Element) -> bool:
        return self._val > other.to_string()

    def greater_eq(self, other: Element) -> bool:
        return self._val >= other.to_string()


class FloatElement(Element):
    """A floating point value; integers given to it are widened."""

    _type = Type.FLOAT

    def __init__(self, val: Any) -> None:
        if isinstance(val, int) and not isinstance(val, bool):
            val = float(val)
        super().__init__(val)

    @classmethod
    def from_int(cls, val: int) -> FloatElement:
        return cls(float(val))

    @staticmethod
    def _accepts(value: Any) -> bool:
        return type(value) is float

    def to_string(self) -> str:
        return _format_float(self._val)

    def to_float(self) -> float:
        return self._val

    def less(self, other: Element) -> bool:
        f = other.to_float()
        return not math.isnan(f) and self._val < f

    def less_eq(self, other: Element) -> bool:
        f = other.to_float()
        return not math.isnan(f) and self._val <= f

    def greater(self, other: Element) -> bool:
        f = other.to_float()
        return not math.isnan(f) and self._val > f

    def greater_eq(self, other: Element) -> bool:
        f = other.to_float()
        return not math.isnan(f) and self._val >= f


class BoolElement(Element):
    """A boolean value; false orders before true."""

    _type = Type.BOOL

    @staticmethod
    def _accepts(value: Any) -> bool:
        return type(value) is bool

    def to_string(self) -> str:
        return "true" if self._val else "false"

    def to_float(self) -> float:
        return 1.0 if self._val else 0.0

    def less(self, other: Element) -> bool:
        return isinstance(other, BoolElement) and not self._val and other._val

    def less_eq(self, other: Element) -> bool:
        return isinstance(other, BoolElement) and (not self._val or other._val)

    def greater(self, other: Element) -> bool:
        return isinstance(other, BoolElement) and self._val and not other._val

    def greater_eq(self, other: Element) -> bool:
        return isinstance(other, BoolElement) and (self._val or not other._val)


class DateTimeElement(Element):
    """A point in time; naive values are taken as UTC."""

    _type = Type.DATETIME

    @staticmethod
    def _accepts(value: Any) -> bool:
        return isinstance(value, datetime)

    def to_string(self) -> str:
        v = _aware(self._val)
        base = (
            f"{v.year:04d}-{v.month:02d}-{v.day:02d}"
            f"T{v.hour:02d}:{v.minute:02d}:{v.second:02d}"
        )
        offset = v.utcoffset() or timedelta(0)
        if offset == timedelta(0):
            return base + "Z"
        sign = "-" if offset < timedelta(0) else "+"
        minutes = abs(int(offset.total_seconds())) // 60
        return f"{base}{sign}{minutes // 60:02d}:{minutes % 60:02d}"

    def to_float(self) -> float:
        return float((_aware(self._val) - _EPOCH) // timedelta(seconds=1))

    def _other(self, other: Element) -> datetime | None:
        if isinstance(other, DateTimeElement):
            return _aware(other._val)
        return None

    def less(self, other: Element) -> bool:
        o = self._other(other)
        return o is not None and _aware(self._val) < o

    def less_eq(self, other: Element) -> bool:
        o = self._other(other)
        return o is not None and _aware(self._val) <= o

    def greater(self, other: Element) -> bool:
        o = self._other(other)
        return o is not None and _aware(self._val) > o

    def greater_eq(self, other: Element) -> bool:
        o = self._other(other)
        return o is not None and _aware(self._val) >= o