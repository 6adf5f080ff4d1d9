"""
交互式SQL Shell
"""

import getpass
import os
import sqlite3
import sys
from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from db_logging import LogLevel
from pretty import RenderOptions, render
from pretty.styles import FALSE_COLOR, HORIZONTAL, NULL_COLOR, TRUE_COLOR, WARNING_COLOR, bold, stylize
from .database import (
    DatabaseConnectionError,
    SQLiteDatabase,
    find_local_databases,
    normalize_path,
)
from .formatter import (
    format_database_stats,
    format_query_result,
    format_table_info,
    format_table_list,
)

SQL_KEYWORDS = [
    "SELECT", "FROM", "WHERE", "INSERT", "INTO", "VALUES", "CREATE", "TABLE",
    "UPDATE", "SET", "DELETE", "DROP", "ALTER", "JOIN", "INNER", "LEFT",
    "ON", "GROUP", "BY", "ORDER", "ASC", "DESC", "LIMIT", "OFFSET", "INDEX",
    "UNIQUE", "VIEW", "AS", "PRAGMA", "COUNT", "SUM", "AVG", "MIN", "MAX",
]

# 第一个词是这些时按Shell命令处理，其余按SQL执行
SHELL_COMMANDS = {
    "help", "?", "tables", "describe", "desc", "show", "stats",
    "options", "set", "log", "clear", "quit", "exit",
}

SEPARATOR = HORIZONTAL * 60


class _SQLCompleter(Completer):
    def __init__(self, database: SQLiteDatabase):
        self.db = database

    def get_completions(self, document: Document, complete_event):
        text = document.text_before_cursor
        word = document.get_word_before_cursor(WORD=True)
        low = word.lower()

        for kw in SQL_KEYWORDS:
            if kw.lower().startswith(low):
                yield Completion(kw, start_position=-len(word))

        tables = self.db.list_tables()
        for t in tables:
            if t.lower().startswith(low):
                yield Completion(t, start_position=-len(word))

        # 文本中出现的表，补全其列名
        for t in tables:
            if t.lower() not in text.lower():
                continue
            for col in self.db.get_table_columns(t):
                name = col["name"]
                if word and name.lower().startswith(low):
                    yield Completion(name, start_position=-len(word))


class _InlineSuggest(AutoSuggest):
    def __init__(self, database: SQLiteDatabase):
        self.db = database
        self.seed_words = [
            "help", "tables", "stats", "options", "describe ", "show ",
            "set maxlen ", "set multiline ", "log level ",
            "SELECT * FROM ", "INSERT INTO ", "UPDATE ", "DELETE FROM ",
        ]

    def get_suggestion(self, buffer, document: Document):
        text = document.text_before_cursor
        if not text:
            return None
        for w in self.seed_words + self.db.list_tables():
            if w.lower().startswith(text.lower()) and w.lower() != text.lower():
                return Suggestion(w[len(text):])
        return None


class SQLShell:
    """SQLite交互式Shell"""

    def __init__(
        self,
        database: Optional[SQLiteDatabase] = None,
        options: Optional[RenderOptions] = None,
        db_path: Optional[str] = None,
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass.getpass,
        log_dir: str = "logs",
        interactive: Optional[bool] = None,
    ):
        self.database = database
        self.db_path = db_path
        self.options = options or RenderOptions()
        self.input_func = input_func
        self.password_func = password_func
        self.log_dir = log_dir
        self.running = True
        if interactive is None:
            interactive = sys.stdin.isatty()
        self.interactive = interactive
        self._pt_session = None

    def start(self):
        """启动Shell"""
        print(bold("SQLite 管理工具") + "\n")

        try:
            if self.database is None:
                if not self._open_database(self.db_path):
                    return
            self._create_session()
            print(format_table_list(self.database.list_tables(), self.options) + "\n")
            print("输入 'help' 查看帮助，输入 'quit' 或 'exit' 退出")
            print()

            while self.running:
                try:
                    user_input = self._get_input()
                except KeyboardInterrupt:
                    print()
                    continue
                if user_input is None:
                    break
                self._process_command(user_input)
        except (KeyboardInterrupt, EOFError):
            print()
        finally:
            self._safe_exit()

    def _create_session(self):
        if not self.interactive:
            return
        try:
            self._pt_session = PromptSession(
                completer=_SQLCompleter(self.database),
                auto_suggest=_InlineSuggest(self.database),
            )
        except Exception:
            self._pt_session = None

    def _ask(self, prompt: str) -> str:
        if self._pt_session is not None:
            return self._pt_session.prompt(prompt)
        return self.input_func(prompt)

    def _ask_password(self) -> str:
        return self.password_func("数据库似乎已加密，请输入密码: ")

    def choose_database(self, directory: Optional[str] = None) -> str:
        """列出本地数据库供选择，也可以输入自定义路径"""
        found = find_local_databases(directory)
        if not found:
            print("当前目录中没有找到SQLite数据库\n")
            return normalize_path(self._ask("请输入SQLite数据库的完整路径: "))

        print("在当前目录中找到以下SQLite数据库:\n")
        for i, path in enumerate(found, 1):
            print(f"  {i}. {os.path.basename(path)}  {stylize(f'({path})', NULL_COLOR)}")
        print(f"  {len(found) + 1}. 输入自定义路径\n")

        choice = self._ask("请选择数据库（编号）或选择自定义路径: ").strip()
        try:
            num = int(choice)
        except ValueError:
            num = 0
        if 1 <= num <= len(found):
            return found[num - 1]
        return normalize_path(self._ask("请输入SQLite数据库的完整路径: "))

    def _open_database(self, db_path: Optional[str] = None) -> bool:
        """连接数据库，失败时询问是否重试"""
        db_path = db_path or self.choose_database()

        while True:
            database = SQLiteDatabase(db_path, self._ask_password, self.log_dir)
            try:
                self.database = database.connect()
                print(stylize(f"\n✓ 已成功连接: {db_path}", TRUE_COLOR) + "\n")
                return True
            except DatabaseConnectionError as e:
                database.close()
                print(stylize(f"✗ 连接失败: {e.message}", FALSE_COLOR))
                retry = self._ask("是否使用其他路径/密码重试? (y/n): ")
                if retry.strip().lower() != "y":
                    return False
                if e.missing_file:
                    db_path = normalize_path(self._ask("请输入正确的数据库路径: "))

    def _get_input(self) -> Optional[str]:
        """获取用户输入：Shell命令直接提交，SQL以分号结尾或空行提交"""
        lines = []
        prompt_main = "SQL> "
        prompt_more = "...> "
        try:
            while True:
                line = self._ask(prompt_main if not lines else prompt_more)
                if not line.strip():
                    if lines:
                        break
                    continue
                lines.append(line.rstrip())
                text = "\n".join(lines)
                if len(lines) == 1 and _is_shell_command(text):
                    break
                if sqlite3.complete_statement(text):
                    break
        except EOFError:
            return None
        return "\n".join(lines)

    def _process_command(self, command: str):
        """处理一条命令或SQL语句，数据库错误不会中断Shell"""
        command = command.strip()
        if not command:
            return
        try:
            self._dispatch(command)
        except sqlite3.Error as e:
            print(stylize(f"✗ SQL 错误: {e}", FALSE_COLOR))

    def _dispatch(self, command: str):
        lower = command.lower()
        parts = command.split()

        if lower in ("quit", "exit"):
            self.running = False
            return

        if lower in ("help", "?"):
            self._show_help()
            return

        if lower == "clear":
            print("\033[2J\033[H", end="")  # 清屏
            return

        if lower == "tables":
            print(format_table_list(self.database.list_tables(), self.options))
            return

        if parts[0].lower() in ("describe", "desc") and len(parts) >= 2:
            table_name = parts[1].rstrip(";")
            columns = self.database.get_table_columns(table_name)
            print(format_table_info(table_name, columns, self.options))
            return

        if parts[0].lower() == "show" and len(parts) >= 2:
            self._show_table_data(parts[1].rstrip(";"))
            return

        if lower == "stats":
            print(format_database_stats(self.database.get_database_stats(), self.options))
            return

        if lower == "options":
            self._show_options()
            return

        if parts[0].lower() == "set":
            self._set_option(parts[1:])
            return

        if lower.startswith("log level"):
            self._set_log_level(parts[2] if len(parts) > 2 else "")
            return

        if parts[0].lower() in SHELL_COMMANDS:
            print(stylize(f"❌ 无法识别的命令: {command}，输入 'help' 查看帮助", FALSE_COLOR))
            return

        result = self.database.execute_sql(command)
        print()
        print(format_query_result(result, self.options))
        print("\n" + SEPARATOR + "\n")

    def _show_table_data(self, table_name: str):
        """显示表的所有数据"""
        # SQLite 表名不区分大小写
        match = next(
            (t for t in self.database.list_tables() if t.lower() == table_name.lower()),
            None,
        )
        if match is None:
            print(stylize(f"❌ 表 '{table_name}' 不存在", FALSE_COLOR))
            return
        table_name = match
        escaped = table_name.replace('"', '""')
        result = self.database.execute_sql(f'SELECT * FROM "{escaped}"')
        print(f"表 '{table_name}' 的数据:")
        print(format_query_result(result, self.options))

    def _show_options(self):
        current = {
            "max_primitive_length": self.options.effective_max_length(),
            "discourage_multiline": self.options.discourage_multiline,
        }
        print(render(current, 0, self.options))

    def _set_option(self, args):
        """set maxlen <n|off> / set multiline <on|off>"""
        if len(args) != 2:
            print("用法: set maxlen <n|off> | set multiline <on|off>")
            return

        name, value = args[0].lower(), args[1].lower()
        if name == "maxlen":
            if value in ("off", "none", "0"):
                self.options = self.options.replace(max_primitive_length=None)
            else:
                try:
                    length = int(value)
                except ValueError:
                    print(stylize(f"❌ 无效的长度: {args[1]}", FALSE_COLOR))
                    return
                self.options = self.options.replace(max_primitive_length=length)
        elif name == "multiline":
            if value not in ("on", "off"):
                print("用法: set multiline <on|off>")
                return
            self.options = self.options.replace(discourage_multiline=(value == "on"))
        else:
            print(stylize(f"❌ 未知的选项: {args[0]}", FALSE_COLOR))
            return
        self._show_options()

    def _set_log_level(self, level: str):
        try:
            log_level = LogLevel.from_name(level)
        except ValueError as e:
            print(stylize(f"❌ {e}", FALSE_COLOR))
            print("可用级别: " + ", ".join(l.name for l in LogLevel))
            return
        self.database.log_manager.set_log_level(log_level)
        print(stylize(f"✓ 日志级别已设置为 {log_level.name}", TRUE_COLOR))

    def _show_help(self):
        print(
            """
            📋 Shell命令:
            help | ?                         - 显示帮助
            tables                           - 列出所有表
            describe <table> | desc <table>  - 查看表结构
            show <table>                     - 显示表的所有数据
            stats                            - 数据库统计信息
            options                          - 查看显示选项
            set maxlen <n|off>               - 设置标量最大显示长度
            set multiline <on|off>           - 截断时显示剩余行数/字符数
            log level <LEVEL>                - 设置日志级别
            clear                            - 清屏
            quit | exit                      - 退出

            💡 SQL语句以 ';' 结尾或输入空行提交
            """
        )

    def _safe_exit(self):
        """安全退出"""
        if self.database is not None:
            self.database.close()
        print(stylize("再见!", WARNING_COLOR))


def _is_shell_command(text: str) -> bool:
    words = text.split()
    return bool(words) and words[0].lower() in SHELL_COMMANDS


def interactive_sql_shell(
    db_path: Optional[str] = None,
    options: Optional[RenderOptions] = None,
    log_dir: str = "logs",
):
    """启动交互式SQL Shell，未指定数据库时从当前目录选择"""
    shell = SQLShell(options=options, db_path=db_path, log_dir=log_dir)
    shell.start()
