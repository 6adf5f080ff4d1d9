"""
值分类器
"""

from collections.abc import Mapping
from enum import Enum
from numbers import Number
from typing import Any, FrozenSet, Sequence


class ValueKind(Enum):
    """值的类别"""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    RECORD = "record"
    OTHER = "other"  # 未知类型，按普通标量以 str() 显示


_PRIMITIVE_KINDS = {
    ValueKind.NULL,
    ValueKind.STRING,
    ValueKind.NUMBER,
    ValueKind.BOOLEAN,
    ValueKind.OTHER,
}


def classify(value: Any) -> ValueKind:
    """返回值的类别，从不抛出异常"""
    if value is None:
        return ValueKind.NULL
    # bool 是 int 的子类，必须先判断
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER


def is_primitive(kind: ValueKind) -> bool:
    return kind in _PRIMITIVE_KINDS


def shape(record: Mapping) -> FrozenSet:
    """记录的形状：键的集合，与顺序和值无关"""
    return frozenset(record.keys())


def is_tabular(items: Sequence) -> bool:
    """非空、全部为记录、形状相同且至少有一个键时使用表格模式"""
    if not items:
        return False
    if not all(classify(item) is ValueKind.RECORD for item in items):
        return False
    first = shape(items[0])
    if not first:
        return False
    return all(shape(item) == first for item in items[1:])
