"""
SQLite数据库接口
"""

import os
import sqlite3
import time
from typing import Any, Callable, Dict, List, Optional

from db_logging.log_manager import LogManager

DATABASE_EXTENSIONS = (".sqlite", ".sqlite3", ".db", ".s3db")

# 打开加密库或非数据库文件时SQLite返回的错误
_ENCRYPTED_MARKERS = ("file is not a database", "file is encrypted")


class DatabaseConnectionError(Exception):
    """数据库连接失败"""

    def __init__(self, message: str, db_file: str = None, missing_file: bool = False):
        super().__init__(message)
        self.message = message
        self.db_file = db_file
        self.missing_file = missing_file


def find_local_databases(directory: Optional[str] = None) -> List[str]:
    """扫描目录中的SQLite数据库文件"""
    directory = directory or os.getcwd()
    try:
        names = os.listdir(directory)
    except OSError:
        return []

    found = []
    for name in sorted(names):
        path = os.path.join(directory, name)
        if os.path.splitext(name)[1].lower() in DATABASE_EXTENSIONS and os.path.isfile(path):
            found.append(os.path.abspath(path))
    return found


def normalize_path(text: str) -> str:
    """去掉首尾空白和包裹路径的引号"""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        text = text[1:-1]
    return text


class SQLiteDatabase:
    """SQLite数据库连接封装"""

    def __init__(
        self,
        db_file: str,
        password_provider: Optional[Callable[[], str]] = None,
        log_dir: str = "logs",
    ):
        self.db_file = db_file
        self.password_provider = password_provider
        self.connection: Optional[sqlite3.Connection] = None

        db_name = os.path.splitext(os.path.basename(db_file))[0] or "database"
        self.log_manager = LogManager(db_name, log_dir)

    def connect(self) -> "SQLiteDatabase":
        """连接数据库，加密数据库会请求密码"""
        if not os.path.isfile(self.db_file):
            self.log_manager.log_connection(self.db_file, False, "文件不存在")
            raise DatabaseConnectionError(
                f"数据库文件不存在: {self.db_file}", self.db_file, missing_file=True
            )

        connection = self._open()
        try:
            self._probe(connection)
        except sqlite3.DatabaseError as e:
            connection.close()
            if not _looks_encrypted(e) or self.password_provider is None:
                self.log_manager.log_connection(self.db_file, False, str(e))
                raise DatabaseConnectionError(str(e), self.db_file) from e
            connection = self._open_encrypted()

        self.connection = connection
        self.log_manager.log_connection(self.db_file, True)
        return self

    def _open(self) -> sqlite3.Connection:
        # 自动提交模式，修改语句立即生效
        try:
            return sqlite3.connect(self.db_file, isolation_level=None)
        except sqlite3.Error as e:
            self.log_manager.log_connection(self.db_file, False, str(e))
            raise DatabaseConnectionError(str(e), self.db_file) from e

    def _open_encrypted(self) -> sqlite3.Connection:
        password = self.password_provider()
        connection = self._open()
        try:
            escaped = password.replace("'", "''")
            connection.execute(f"PRAGMA key = '{escaped}'")
            self._probe(connection)
        except sqlite3.Error as e:
            connection.close()
            self.log_manager.log_connection(self.db_file, False, f"密码错误: {e}")
            raise DatabaseConnectionError("密码错误或连接失败", self.db_file) from e
        return connection

    @staticmethod
    def _probe(connection: sqlite3.Connection):
        connection.execute("SELECT count(*) FROM sqlite_master").fetchone()

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def list_tables(self) -> List[str]:
        """列出所有用户表"""
        if not self.is_connected:
            return []
        rows = self.connection.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]

    def get_table_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """获取表的列定义，表不存在时返回空列表"""
        if not self.is_connected:
            return []
        cursor = self.connection.execute(
            f"PRAGMA table_info({_quote_identifier(table_name)})"
        )
        return _rows_to_dicts(cursor)

    def count_rows(self, table_name: str) -> int:
        row = self.connection.execute(
            f"SELECT count(*) FROM {_quote_identifier(table_name)}"
        ).fetchone()
        return row[0]

    def _safe_count_rows(self, table_name: str):
        """统计行数，失败时返回错误信息（如虚拟表模块未加载）"""
        try:
            return self.count_rows(table_name)
        except sqlite3.Error as e:
            self.log_manager.log_error("STATS", f"统计表 {table_name} 行数失败", str(e))
            return f"错误: {e}"

    def execute_sql(self, sql: str) -> Dict[str, Any]:
        """执行单条SQL语句，错误以结果字典返回"""
        if not self.is_connected:
            return {"success": False, "error": "未连接数据库"}

        sql = sql.strip()
        start = time.perf_counter()
        try:
            cursor = self.connection.execute(sql)
            if cursor.description is not None:
                data = _rows_to_dicts(cursor)
                result = {
                    "success": True,
                    "type": "SELECT",
                    "columns": [column[0] for column in cursor.description],
                    "data": data,
                }
                count = len(data)
            else:
                result = {
                    "success": True,
                    "type": "MODIFY",
                    "changes": cursor.rowcount if cursor.rowcount >= 0 else 0,
                    "last_id": cursor.lastrowid,
                    "message": "语句执行成功",
                }
                count = result["changes"]
        except (sqlite3.Error, sqlite3.Warning) as e:
            elapsed = (time.perf_counter() - start) * 1000
            self.log_manager.log_sql_execution(sql, False, elapsed)
            self.log_manager.log_error("SQL_EXECUTOR", str(e), sql)
            return {"success": False, "error": str(e)}

        elapsed = (time.perf_counter() - start) * 1000
        self.log_manager.log_sql_execution(sql, True, elapsed, count)
        return result

    def get_database_stats(self) -> Dict[str, Any]:
        """数据库统计信息"""
        stats: Dict[str, Any] = {
            "database_file": os.path.abspath(self.db_file),
            "file_size_bytes": os.path.getsize(self.db_file)
            if os.path.exists(self.db_file)
            else 0,
        }
        if not self.is_connected:
            return stats

        tables = self.list_tables()
        stats["page_size"] = self.connection.execute("PRAGMA page_size").fetchone()[0]
        stats["page_count"] = self.connection.execute("PRAGMA page_count").fetchone()[0]
        stats["sqlite_version"] = sqlite3.sqlite_version
        stats["tables_count"] = len(tables)
        stats["tables"] = [
            {"table_name": name, "rows": self._safe_count_rows(name)} for name in tables
        ]
        return stats

    def close(self):
        """关闭连接"""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
        self.log_manager.close()

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _looks_encrypted(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in _ENCRYPTED_MARKERS)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _rows_to_dicts(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
    columns = [column[0] for column in cursor.description or []]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]
