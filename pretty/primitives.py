"""
标量格式化
"""

from typing import Any, Optional

from .classify import ValueKind, classify
from .options import DEFAULT_OPTIONS, RenderOptions
from .styles import (
    FALSE_COLOR,
    NULL_COLOR,
    NUMBER_COLOR,
    STRING_COLOR,
    TRUE_COLOR,
    stylize,
)
from .truncate import truncate

_KIND_COLORS = {
    ValueKind.STRING: STRING_COLOR,
    ValueKind.NUMBER: NUMBER_COLOR,
    ValueKind.NULL: NULL_COLOR,
}


def primitive_style(value: Any) -> str:
    """返回标量对应的颜色转义序列"""
    kind = classify(value)
    if kind is ValueKind.BOOLEAN:
        return TRUE_COLOR if value else FALSE_COLOR
    return _KIND_COLORS.get(kind, "")


def primitive_text(value: Any, options: Optional[RenderOptions] = None) -> str:
    """标量的纯文本表示（已截断，不含样式）"""
    options = options or DEFAULT_OPTIONS
    kind = classify(value)

    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    # 数字直接用 str()，不经过浮点转换，大整数不会丢失精度
    text = value if kind is ValueKind.STRING else str(value)
    return truncate(
        text, options.max_primitive_length, options.discourage_multiline
    )


def format_primitive(value: Any, options: Optional[RenderOptions] = None) -> str:
    """格式化标量为带颜色的文本"""
    return stylize(primitive_text(value, options), primitive_style(value))
