import pytest

from sharedkit.apptype import Type
from sharedkit.element import BoolElement, Element, FloatElement, StringElement
from sharedkit.elements import Elements, build_elements


def test_build_elements_and_type():
    strings = build_elements(["Alice", "Bob"], StringElement)
    assert strings.type() == Type.STRING
    assert [e.val() for e in strings.all_elems()] == ["Alice", "Bob"]

    floats = build_elements([20, 22], FloatElement.from_int)
    assert floats.type() == Type.FLOAT
    assert floats.elem(1).val() == 22.0

    assert build_elements([True], BoolElement).type() == Type.BOOL


def test_generic_kind_has_no_type():
    elems = Elements([FloatElement(1.0)], Element)
    assert elems.type() == Type.NONE


def test_clone_is_deep():
    elems = build_elements(["a", "b"], StringElement)
    copy = elems.clone()
    assert copy == elems
    copy.elem(0).set("z")
    assert elems.elem(0).val() == "a"


def test_clone_wrong_type_raises():
    elems = Elements([StringElement("a")], FloatElement)
    with pytest.raises(TypeError):
        elems.clone()


def test_subset_and_len():
    elems = build_elements(["a", "b", "c"], StringElement)
    sub = elems.subset([2, 0])
    assert [e.val() for e in sub] == ["c", "a"]
    assert len(sub) == 2 and len(elems) == 3


def test_append_skips_other_kinds():
    elems = build_elements(["a"], StringElement)
    elems.append(StringElement("b"), FloatElement(1.0), "c")
    assert [e.val() for e in elems] == ["a", "b"]


def test_elem_out_of_range():
    elems = build_elements(["a"], StringElement)
    with pytest.raises(IndexError):
        elems.elem(1)
    with pytest.raises(IndexError):
        elems.elem(-1)