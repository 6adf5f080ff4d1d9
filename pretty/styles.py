"""
ANSI样式与表格边框字符
"""

import re

RESET = "\033[0m"
BOLD = "\033[1m"

STRING_COLOR = "\033[93m"  # 亮黄
NUMBER_COLOR = "\033[36m"  # 青色
TRUE_COLOR = "\033[32m"  # 绿色
FALSE_COLOR = "\033[31m"  # 红色
NULL_COLOR = "\033[90m"  # 灰色
WARNING_COLOR = "\033[33m"

# 表格边框
TOP_LEFT, TOP_RIGHT = "┌", "┐"
MID_LEFT, MID_RIGHT = "├", "┤"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"
TOP_JOIN, BOTTOM_JOIN = "┬", "┴"
VERTICAL, HORIZONTAL = "│", "─"

_STYLE_PATTERN = re.compile(r"\033\[[0-9;]*m")


def stylize(text: str, style: str) -> str:
    """用样式包裹文本，无样式时原样返回"""
    if not style:
        return text
    return f"{style}{text}{RESET}"


def bold(text: str) -> str:
    return stylize(text, BOLD)


def strip_styles(text: str) -> str:
    """去掉所有ANSI样式序列"""
    return _STYLE_PATTERN.sub("", text)


# 每级缩进的空格数
INDENT_SIZE = 2


def indent(level: int) -> str:
    return " " * (max(level, 0) * INDENT_SIZE)
