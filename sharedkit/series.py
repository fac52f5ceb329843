"""Named columns of elements with statistics, ordering and subsetting."""

from __future__ import annotations

import math
from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Iterable

from sharedkit.apptype import Type
from sharedkit.element import (
    BoolElement,
    DateTimeElement,
    Element,
    FloatElement,
    StringElement,
)
from sharedkit.elements import Elements, build_elements

Delegate = Callable[[Element], Element]


def _element_kind(values: list[Any]) -> type[Element]:
    if all(isinstance(v, str) for v in values):
        return StringElement
    if all(type(v) is bool for v in values):
        return BoolElement
    if all(isinstance(v, datetime) for v in values):
        return DateTimeElement
    if all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        return FloatElement
    raise TypeError(f"unknown type {values!r}")


def _to_element(kind: type[Element], value: Any) -> Element:
    """Wrap ``value`` in an element of ``kind``, raising TypeError if it cannot be."""
    if isinstance(value, Element):
        element = value
    elif kind is Element:
        raise TypeError(f"cannot build an element from {value!r}")
    else:
        element = kind(value)
    if not isinstance(element, kind):
        raise TypeError(f"{element!r} is not a {kind.__name__}")
    return element


def _plain_sum(values: Iterable[float]) -> float:
    total = 0.0
    for value in values:
        total += value
    return total


def build_series(name: str, values: Iterable[Any]) -> Series:
    """Build a series from plain values: str, int, float, bool or datetime."""
    items = list(values)
    kind = _element_kind(items)
    return Series(name, build_elements(items, kind))


def apply(elems: Iterable[Element], delegate: Delegate) -> list[Element]:
    """Map ``delegate`` over the elements, letting the first failure propagate."""
    return [delegate(item) for item in elems]


def _parse_indexes(length: int, indexes: Any) -> list[int]:
    if isinstance(indexes, bool):
        raise ValueError("indexing error: unknown indexing mode")
    if isinstance(indexes, int):
        return [indexes]
    if isinstance(indexes, (list, tuple)):
        items = list(indexes)
        if items and all(type(i) is bool for i in items):
            if len(items) != length:
                raise ValueError("indexing error: index dimensions mismatch")
            return [i for i, keep in enumerate(items) if keep]
        if all(isinstance(i, int) and not isinstance(i, bool) for i in items):
            return items
    raise ValueError("indexing error: unknown indexing mode")


class Series:
    """A named column of elements."""

    def __init__(self, name: str, elms: Elements) -> None:
        self.name = name
        self.elms = elms

    def clone(self) -> Series:
        return Series(self.name, self.elms.clone())

    def type(self) -> Type:
        return self.elms.type()

    def rename(self, new_name: str) -> None:
        self.name = new_name

    def __len__(self) -> int:
        return len(self.elms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return self.name == other.name and self.elms == other.elms

    def __repr__(self) -> str:
        return f"Series({self.name!r}, {self.elms!r})"

    def append(self, value: Any) -> None:
        """Append a value or element of this series' kind; raises TypeError otherwise."""
        self.elms.append(_to_element(self.elms.kind, value))

    def val(self, i: int) -> Any:
        return self.elem(i).val()

    def elem(self, i: int) -> Element:
        return self.elms.elem(i)

    def values(self) -> list[Any]:
        return [item.val() for item in self.elms]

    def to_floats(self) -> list[float]:
        return [item.to_float() for item in self.elms]

    def _not_numeric(self) -> bool:
        return len(self) == 0 or self.type() in (Type.STRING, Type.BOOL)

    def sum(self) -> float:
        if self._not_numeric():
            return math.nan
        return _plain_sum(self.to_floats())

    def std_dev(self) -> float:
        """Sample standard deviation; NaN with fewer than two values."""
        floats = self.to_floats()
        n = len(floats)
        if n < 2:
            return math.nan
        mean = _plain_sum(floats) / n
        squares = 0.0
        compensation = 0.0
        for value in floats:
            diff = value - mean
            squares += diff * diff
            compensation += diff
        variance = (squares - compensation * compensation / n) / (n - 1)
        return math.sqrt(variance) if variance >= 0 or math.isnan(variance) else math.nan

    def mean(self) -> float:
        floats = self.to_floats()
        if not floats:
            return math.nan
        return _plain_sum(floats) / len(floats)

    def _extreme(self, pick: Callable[[float, float], float]) -> float:
        if self._not_numeric():
            return math.nan
        floats = self.to_floats()
        if any(math.isnan(f) for f in floats):
            return math.nan
        result = floats[0]
        for value in floats[1:]:
            result = pick(result, value)
        return result

    def min(self) -> float:
        return self._extreme(min)

    def max(self) -> float:
        return self._extreme(max)

    def apply_in_place(self, delegate: Delegate) -> None:
        """Replace every element with ``delegate(element)``; the result is untyped."""
        self.elms = Elements(apply(self.elms, delegate), Element)

    def subset(self, indexes: Any) -> Series:
        """Select by an index, a list of indexes or a boolean mask.

        An index spec that cannot be understood selects everything.
        """
        try:
            idx = _parse_indexes(len(self), indexes)
        except ValueError:
            return Series(self.name, self.elms)
        return Series(self.name, self.elms.subset(idx))

    def order(self, reverse: bool = False) -> list[int]:
        """Indexes that stably sort the series, ascending or descending."""

        def ascending(a: tuple[int, Element], b: tuple[int, Element]) -> int:
            if a[1].less(b[1]):
                return -1
            if b[1].less(a[1]):
                return 1
            return 0

        def descending(a: tuple[int, Element], b: tuple[int, Element]) -> int:
            return ascending(b, a)

        compare = descending if reverse else ascending
        ranked = sorted(enumerate(self.elms), key=cmp_to_key(compare))
        return [index for index, _ in ranked]