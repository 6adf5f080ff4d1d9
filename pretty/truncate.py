"""
长文本截断
"""

from typing import Optional

from .options import normalize_limit
from .styles import RESET

ELLIPSIS = "..."
# 详细截断说明至少需要的长度
VERBOSE_MIN_LENGTH = 24


def truncate(text: str, max_length, discourage_multiline: bool = False) -> str:
    """将文本截断到不超过 max_length 的长度

    max_length 为空、非数字或向下取整后不大于0时不限制长度。第一个换行符若出现在
    限制之前，则在换行处截断，第一行在限制内完整保留。结果不含换行符，
    对同一长度重复截断得到相同结果。
    """
    limit = normalize_limit(max_length)

    newline = text.find("\n")
    at_line_break = newline != -1 and (limit is None or newline < limit)

    if at_line_break:
        cut = newline
    elif limit is None or len(text) <= limit:
        return text
    else:
        cut = limit

    if discourage_multiline and cut > VERBOSE_MIN_LENGTH:
        verbose = _truncate_verbose(text, cut, limit, at_line_break)
        if verbose is not None:
            return verbose

    return _truncate_compact(text, cut, limit, at_line_break)


def _room(cut: int, limit: Optional[int], suffix_length: int, at_line_break: bool) -> int:
    """后缀之前可以保留的字符数"""
    if not at_line_break:
        return cut - suffix_length
    if limit is None:
        return cut
    return min(cut, limit - suffix_length)


def _truncate_compact(
    text: str, cut: int, limit: Optional[int], at_line_break: bool
) -> str:
    keep = max(_room(cut, limit, len(ELLIPSIS), at_line_break), 0)
    result = text[:keep] + ELLIPSIS
    if limit is not None:
        result = result[:limit]
    return result


def _truncate_verbose(
    text: str, cut: int, limit: Optional[int], at_line_break: bool
) -> Optional[str]:
    """带剩余行数/字符数说明的截断，说明放不下时返回 None"""
    if at_line_break:
        lines = len(text[cut + 1:].splitlines()) or 1
        unit = "line" if lines == 1 else "lines"
        annotation = f" {RESET}(+{lines} more {unit})"
    else:
        remaining = len(text) - cut
        unit = "character" if remaining == 1 else "characters"
        annotation = f"... {RESET}({remaining} more {unit})"

    keep = _room(cut, limit, len(annotation), at_line_break)
    if keep <= 0:
        return None
    return text[:keep] + annotation
