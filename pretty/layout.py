"""
递归块布局
"""

from typing import Any, Mapping, Optional, Sequence

from .classify import ValueKind, classify, is_primitive, is_tabular
from .options import DEFAULT_OPTIONS, RenderOptions
from .primitives import format_primitive
from .styles import bold, indent
from .table import render_table


def render(
    value: Any, indent_level: int = 0, options: Optional[RenderOptions] = None
) -> str:
    """把任意结构化数据渲染为带颜色、缩进的终端文本"""
    options = options or DEFAULT_OPTIONS
    kind = classify(value)

    if kind is ValueKind.RECORD:
        return _render_record(value, indent_level, options)
    if kind is ValueKind.SEQUENCE:
        return _render_sequence(value, indent_level, options)
    return indent(indent_level) + format_primitive(value, options)


def _render_record(record: Mapping, indent_level: int, options: RenderOptions) -> str:
    if not record:
        return indent(indent_level) + "{}"

    # 键比所在层级多缩进一级，嵌套值再由下一层负责自己的缩进
    prefix = indent(indent_level + 1)
    lines = []
    for key, value in record.items():
        label = bold(str(key))
        if is_primitive(classify(value)):
            lines.append(f"{prefix}{label}: {format_primitive(value, options)}")
        else:
            lines.append(f"{prefix}{label}:")
            lines.append(render(value, indent_level + 1, options))
    return "\n".join(lines)


def _render_sequence(items: Sequence, indent_level: int, options: RenderOptions) -> str:
    if not items:
        return indent(indent_level) + "[]"

    if is_tabular(items):
        return render_table(items, indent_level, options)

    return "\n".join(render(item, indent_level + 1, options) for item in items)


class PrettyPrinter:
    """携带渲染选项的打印器"""

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or DEFAULT_OPTIONS

    def render(self, value: Any, indent_level: int = 0) -> str:
        return render(value, indent_level, self.options)

    def print(self, value: Any, indent_level: int = 0):
        print(self.render(value, indent_level))
