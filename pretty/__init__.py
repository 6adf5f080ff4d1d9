"""
终端美化输出模块
"""

from .options import RenderOptions, DEFAULT_OPTIONS
from .classify import ValueKind, classify, is_primitive, is_tabular, shape
from .truncate import truncate
from .primitives import format_primitive, primitive_text, primitive_style
from .layout import render, PrettyPrinter
from .table import render_table, column_widths, MAX_COLUMN_WIDTH
from .styles import strip_styles, stylize, bold, INDENT_SIZE

__all__ = [
    "RenderOptions",
    "DEFAULT_OPTIONS",
    "ValueKind",
    "classify",
    "is_primitive",
    "is_tabular",
    "shape",
    "truncate",
    "format_primitive",
    "primitive_text",
    "primitive_style",
    "render",
    "PrettyPrinter",
    "INDENT_SIZE",
    "render_table",
    "column_widths",
    "MAX_COLUMN_WIDTH",
    "strip_styles",
    "stylize",
    "bold",
]
