"""
查询结果格式化器
"""

from typing import Any, Dict, List, Optional

from pretty import RenderOptions, render
from pretty.styles import FALSE_COLOR, TRUE_COLOR, WARNING_COLOR, bold, stylize


def format_query_result(
    result: Dict[str, Any], options: Optional[RenderOptions] = None
) -> str:
    """格式化查询结果"""
    if not result.get("success", True):
        # 错误只输出纯文本诊断，不交给渲染器
        return stylize(f"✗ SQL 错误: {result.get('error', '未知错误')}", FALSE_COLOR)

    result_type = result.get("type", "UNKNOWN")

    if result_type == "SELECT":
        return _format_select_result(result, options)
    if result_type == "MODIFY":
        return _format_modify_result(result)
    return stylize(f"✓ {result.get('message', '操作完成')}", TRUE_COLOR)


def _format_select_result(result: Dict[str, Any], options: Optional[RenderOptions]) -> str:
    """格式化SELECT查询结果"""
    data = result.get("data", [])

    if not data:
        return stylize("(没有返回任何行)", WARNING_COLOR)

    return f"{render(data, 0, options)}\n\n共 {len(data)} 行"


def _format_modify_result(result: Dict[str, Any]) -> str:
    lines = [stylize("✓ 语句执行成功", TRUE_COLOR)]
    if result.get("changes") is not None:
        lines.append(f"   影响行数: {result['changes']}")
    if result.get("last_id"):
        lines.append(f"   最后插入ID: {result['last_id']}")
    return "\n".join(lines)


def format_table_list(tables: List[str], options: Optional[RenderOptions] = None) -> str:
    """格式化表名列表"""
    if not tables:
        return stylize("数据库中没有用户表", WARNING_COLOR)
    rows = [{"table_name": name} for name in tables]
    return bold("可用的表:") + render(rows, 0, options)


def format_table_info(
    table_name: str,
    columns: List[Dict[str, Any]],
    options: Optional[RenderOptions] = None,
) -> str:
    """格式化表结构"""
    if not columns:
        return stylize(f"❌ 表 '{table_name}' 不存在", FALSE_COLOR)

    rows = [
        {
            "name": col["name"],
            "type": col["type"],
            "not_null": bool(col["notnull"]),
            "default": col["dflt_value"],
            "primary_key": bool(col["pk"]),
        }
        for col in columns
    ]
    return bold(f"表: {table_name}") + render(rows, 0, options)


def format_database_stats(
    stats: Dict[str, Any], options: Optional[RenderOptions] = None
) -> str:
    """格式化数据库统计信息"""
    return bold("数据库统计信息") + "\n" + render(stats, 0, options)
