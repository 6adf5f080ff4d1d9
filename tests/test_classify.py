"""
/tests/test_classify.py

值分类器单元测试
"""
import sys
import os
from collections import OrderedDict
from decimal import Decimal

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from pretty.classify import ValueKind, classify, is_primitive, is_tabular, shape


@pytest.mark.parametrize("value,kind", [
    (None, ValueKind.NULL),
    ("text", ValueKind.STRING),
    ("", ValueKind.STRING),
    (42, ValueKind.NUMBER),
    (10 ** 60, ValueKind.NUMBER),
    (3.5, ValueKind.NUMBER),
    (Decimal("1.10"), ValueKind.NUMBER),
    (True, ValueKind.BOOLEAN),
    (False, ValueKind.BOOLEAN),
    ([1, 2], ValueKind.SEQUENCE),
    ((1, 2), ValueKind.SEQUENCE),
    ({"a": 1}, ValueKind.RECORD),
    (OrderedDict(a=1), ValueKind.RECORD),
    (b"blob", ValueKind.OTHER),
    (object(), ValueKind.OTHER),
])
def test_classify(value, kind):
    assert classify(value) is kind


def test_containers_are_not_primitive():
    assert not is_primitive(ValueKind.SEQUENCE)
    assert not is_primitive(ValueKind.RECORD)
    assert is_primitive(ValueKind.OTHER)
    assert is_primitive(ValueKind.NULL)


def test_shape_ignores_order_and_values():
    assert shape({"a": 1, "b": 2}) == shape({"b": None, "a": "x"})


def test_tabular_requires_same_shape():
    assert is_tabular([{"x": 1, "y": 2}, {"x": 3, "y": 4}])
    assert is_tabular([{"a": 1, "b": 2}, {"b": 3, "a": 4}])
    assert not is_tabular([{"x": 1}, {"y": 2}])
    assert not is_tabular([{"a": 1}, {"a": 1, "b": 2}])


def test_tabular_rejects_empty_and_mixed():
    assert not is_tabular([])
    assert not is_tabular([{}])
    assert not is_tabular([{}, {}])
    assert not is_tabular([{"a": 1}, 5])
    assert not is_tabular(["a", "b"])
