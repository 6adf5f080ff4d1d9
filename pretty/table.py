"""
表格布局：形状相同的记录序列显示为带边框的表格
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .options import DEFAULT_OPTIONS, RenderOptions
from .primitives import primitive_style, primitive_text
from .styles import (
    BOTTOM_JOIN,
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    HORIZONTAL,
    MID_LEFT,
    MID_RIGHT,
    RESET,
    TOP_JOIN,
    TOP_LEFT,
    TOP_RIGHT,
    VERTICAL,
    bold,
    indent,
    strip_styles,
)
from .truncate import truncate

# 单元格最大显示宽度（表头除外）
MAX_COLUMN_WIDTH = 50


def column_widths(
    rows: Sequence[Mapping], keys: List[Any], options: Optional[RenderOptions] = None
) -> Dict[Any, int]:
    """计算每列宽度：不小于表头长度，单元格内容最多占 MAX_COLUMN_WIDTH"""
    widths = {}
    for key in keys:
        longest = max(
            (len(strip_styles(primitive_text(row[key], options))) for row in rows),
            default=0,
        )
        widths[key] = max(len(str(key)), min(longest, MAX_COLUMN_WIDTH))
    return widths


def render_table(
    rows: Sequence[Mapping],
    indent_level: int = 0,
    options: Optional[RenderOptions] = None,
) -> str:
    """渲染表格，返回以换行开头的文本块

    rows 必须非空且所有记录形状相同，列顺序取第一条记录的键顺序。
    """
    options = options or DEFAULT_OPTIONS
    keys = list(rows[0].keys())
    widths = column_widths(rows, keys, options)
    prefix = indent(indent_level)

    total_width = sum(widths[key] + 3 for key in keys) - 3 + 2

    lines = [f"{prefix}{TOP_LEFT}{HORIZONTAL * total_width}{TOP_RIGHT}"]

    header = VERTICAL.join(f" {bold(str(key).ljust(widths[key]))} " for key in keys)
    lines.append(f"{prefix}{VERTICAL}{header}{VERTICAL}")
    lines.append(f"{prefix}{MID_LEFT}{_rule(keys, widths, TOP_JOIN)}{MID_RIGHT}")

    for row in rows:
        cells = VERTICAL.join(_cell(row[key], widths[key], options) for key in keys)
        lines.append(f"{prefix}{VERTICAL}{cells}{VERTICAL}")

    lines.append(
        f"{prefix}{BOTTOM_LEFT}{_rule(keys, widths, BOTTOM_JOIN)}{BOTTOM_RIGHT}"
    )
    return "\n" + "\n".join(lines)


def _rule(keys: List[Any], widths: Dict[Any, int], joint: str) -> str:
    return joint.join(HORIZONTAL * (widths[key] + 2) for key in keys)


def _cell(value: Any, width: int, options: RenderOptions) -> str:
    # 截断纯文本后再套回原来的颜色，避免切断转义序列
    color = primitive_style(value)
    plain = strip_styles(primitive_text(value, options))
    text = strip_styles(truncate(plain, width, options.discourage_multiline))
    return f" {color}{text.ljust(width)}{RESET} "
