"""Homogeneous sequences of elements."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from sharedkit.apptype import Type
from sharedkit.element import (
    BoolElement,
    DateTimeElement,
    Element,
    FloatElement,
    StringElement,
)

_KIND_TYPES = {
    StringElement: Type.STRING,
    FloatElement: Type.FLOAT,
    BoolElement: Type.BOOL,
    DateTimeElement: Type.DATETIME,
}

# Builders that are not element classes themselves, keyed to the class they build.
_BUILDER_KINDS: dict[Callable[[Any], Element], type[Element]] = {
    FloatElement.from_int: FloatElement,
}


class Elements:
    """A list of elements that all belong to one element class."""

    def __init__(self, items: Iterable[Element], kind: type[Element]) -> None:
        self.kind = kind
        self._items = list(items)

    def type(self) -> Type:
        return _KIND_TYPES.get(self.kind, Type.NONE)

    def all_elems(self) -> list[Element]:
        return list(self._items)

    def clone(self) -> Elements:
        cloned = []
        for item in self._items:
            copy = item.clone()
            if not isinstance(copy, self.kind):
                raise TypeError("clone() called on element but it returned wrong type")
            cloned.append(copy)
        return Elements(cloned, self.kind)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Elements):
            return NotImplemented
        return self.kind is other.kind and self._items == other._items

    def __repr__(self) -> str:
        return f"Elements({self._items!r}, {self.kind.__name__})"

    def elem(self, i: int) -> Element:
        if i < 0:
            raise IndexError(f"index {i} out of range")
        return self._items[i]

    def subset(self, indexes: Iterable[int]) -> Elements:
        return Elements([self.elem(i) for i in indexes], self.kind)

    def append(self, *args: Any) -> None:
        """Append the given elements, skipping any not of this sequence's kind."""
        self._items.extend(value for value in args if isinstance(value, self.kind))


def build_elements(values: Iterable[Any], builder: Callable[[Any], Element]) -> Elements:
    """Build one element per value with ``builder``."""
    items = [builder(value) for value in values]
    if isinstance(builder, type) and issubclass(builder, Element):
        kind: type[Element] = builder
    elif builder in _BUILDER_KINDS:
        kind = _BUILDER_KINDS[builder]
    elif items:
        kind = type(items[0])
    else:
        kind = Element
    return Elements(items, kind)