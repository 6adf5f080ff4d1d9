"""
用户接口层模块
"""

from .database import SQLiteDatabase, DatabaseConnectionError, find_local_databases
from .shell import SQLShell, interactive_sql_shell
from .formatter import (
    format_query_result,
    format_table_list,
    format_table_info,
    format_database_stats,
)

__all__ = [
    "SQLiteDatabase",
    "DatabaseConnectionError",
    "find_local_databases",
    "SQLShell",
    "interactive_sql_shell",
    "format_query_result",
    "format_table_list",
    "format_table_info",
    "format_database_stats",
]
