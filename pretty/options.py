"""
渲染选项
"""

from decimal import Decimal
from numbers import Real
from typing import List, Optional, Tuple


class RenderOptions:
    """单次渲染调用使用的显示选项"""

    def __init__(
        self,
        max_primitive_length: Optional[int] = None,
        discourage_multiline: bool = False,
    ):
        self.max_primitive_length = max_primitive_length
        self.discourage_multiline = bool(discourage_multiline)

    def effective_max_length(self) -> Optional[int]:
        """返回有效的截断长度，None 表示不限制"""
        return normalize_limit(self.max_primitive_length)

    def replace(self, **changes) -> "RenderOptions":
        """返回修改后的副本"""
        values = {
            "max_primitive_length": self.max_primitive_length,
            "discourage_multiline": self.discourage_multiline,
        }
        values.update(changes)
        return RenderOptions(**values)

    @classmethod
    def from_args(cls, argv: List[str]) -> Tuple["RenderOptions", List[str]]:
        """从命令行参数中解析选项，返回 (选项, 剩余参数)"""
        max_length = None
        discourage = False
        remaining = []
        i = 0
        while i < len(argv):
            arg = argv[i]
            if arg == "--max-length":
                if i + 1 >= len(argv):
                    raise ValueError("--max-length 需要一个整数参数")
                max_length = _parse_length(argv[i + 1])
                i += 2
                continue
            if arg.startswith("--max-length="):
                max_length = _parse_length(arg.split("=", 1)[1])
            elif arg == "--discourage-multiline":
                discourage = True
            else:
                remaining.append(arg)
            i += 1
        return cls(max_length, discourage), remaining

    def __eq__(self, other):
        if not isinstance(other, RenderOptions):
            return NotImplemented
        return (
            self.max_primitive_length == other.max_primitive_length
            and self.discourage_multiline == other.discourage_multiline
        )

    def __repr__(self):
        return (
            f"RenderOptions(max_primitive_length={self.max_primitive_length!r}, "
            f"discourage_multiline={self.discourage_multiline!r})"
        )


def normalize_limit(value) -> Optional[int]:
    """非数字、零或负数都视为不限制，小数向下取整"""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return None
    try:
        value = int(value)
    except (ValueError, OverflowError):
        # NaN 或无穷大
        return None
    if value <= 0:
        return None
    return value


def _parse_length(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"无效的长度: {text}")


DEFAULT_OPTIONS = RenderOptions()
