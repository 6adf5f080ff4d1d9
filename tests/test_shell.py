"""
/tests/test_shell.py

交互式Shell测试
"""
import sys
import os
import sqlite3

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from db_logging import LogLevel
from interface.database import SQLiteDatabase
from interface.shell import SQLShell
from pretty import RenderOptions, strip_styles


@pytest.fixture
def db_file(tmp_path):
    path = tmp_path / "shop.db"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, price REAL)")
    conn.execute("INSERT INTO items VALUES (1, 'pen', 1.5)")
    conn.execute("INSERT INTO items VALUES (2, 'book', 12.0)")
    conn.commit()
    conn.close()
    return str(path)


def scripted(answers):
    answers = list(answers)

    def ask(prompt):
        if not answers:
            raise EOFError
        return answers.pop(0)

    return ask


@pytest.fixture
def shell(db_file, tmp_path):
    database = SQLiteDatabase(db_file, log_dir=str(tmp_path / "logs")).connect()
    shell = SQLShell(database, interactive=False, log_dir=str(tmp_path / "logs"))
    yield shell
    database.close()


def output_of(capsys):
    return strip_styles(capsys.readouterr().out)


def test_select_prints_table(shell, capsys):
    shell._process_command("SELECT id, name FROM items ORDER BY id;")
    out = output_of(capsys)
    assert "│ id │ name │" in out
    assert "共 2 行" in out
    assert "─" * 60 in out


def test_no_rows_notice(shell, capsys):
    shell._process_command("SELECT * FROM items WHERE id = 99")
    assert "(没有返回任何行)" in output_of(capsys)


def test_sql_error_is_reported(shell, capsys):
    shell._process_command("SELECT * FROM missing")
    assert "✗ SQL 错误: no such table: missing" in output_of(capsys)


def test_insert_reports_affected_rows(shell, capsys):
    shell._process_command("INSERT INTO items (name, price) VALUES ('cup', 3)")
    out = output_of(capsys)
    assert "影响行数: 1" in out
    assert "最后插入ID: 3" in out


def test_tables_describe_show(shell, capsys):
    shell._process_command("tables")
    assert "│ table_name │" in output_of(capsys)

    shell._process_command("describe items")
    assert "primary_key" in output_of(capsys)

    shell._process_command("show items")
    out = output_of(capsys)
    assert "表 'items' 的数据:" in out
    assert "book" in out

    shell._process_command("show nothing")
    assert "不存在" in output_of(capsys)


def test_stats(shell, capsys):
    shell._process_command("stats")
    out = output_of(capsys)
    assert "tables_count: 1" in out
    assert "│ table_name │ rows │" in out


def test_show_table_ignores_case(shell, capsys):
    shell._process_command("show ITEMS")
    out = output_of(capsys)
    assert "表 'items' 的数据:" in out
    assert "pen" in out
    assert "不存在" not in out


def test_stats_with_unreadable_table(shell, capsys, monkeypatch):
    def broken(table_name):
        raise sqlite3.OperationalError("no such module: nosuchmod")

    monkeypatch.setattr(shell.database, "count_rows", broken)
    shell._process_command("stats")
    out = output_of(capsys)
    assert "tables_count: 1" in out
    assert "no such module: nosuchmod" in out
    assert shell.running


def test_database_error_keeps_shell_running(shell, capsys, monkeypatch):
    def broken():
        raise sqlite3.DatabaseError("database disk image is malformed")

    monkeypatch.setattr(shell.database, "list_tables", broken)
    shell._process_command("tables")
    assert "✗ SQL 错误: database disk image is malformed" in output_of(capsys)
    assert shell.running


def test_set_options(shell, capsys):
    shell._process_command("set maxlen 10")
    assert shell.options.max_primitive_length == 10
    shell._process_command("set multiline on")
    assert shell.options.discourage_multiline is True
    shell._process_command("set maxlen off")
    assert shell.options.effective_max_length() is None
    out = output_of(capsys)
    assert "max_primitive_length: null" in out


def test_set_option_errors(shell, capsys):
    shell._process_command("set maxlen ten")
    shell._process_command("set colour on")
    out = output_of(capsys)
    assert "无效的长度" in out
    assert "未知的选项" in out
    assert shell.options == RenderOptions()


def test_log_level(shell, capsys):
    shell._process_command("log level debug")
    assert shell.database.log_manager.logger.min_level is LogLevel.DEBUG
    shell._process_command("log level loud")
    assert "未知的日志级别" in output_of(capsys)


def test_unknown_shell_command(shell, capsys):
    shell._process_command("describe")
    assert "无法识别的命令" in output_of(capsys)


def test_quit_stops_loop(shell):
    shell._process_command("exit")
    assert shell.running is False


def test_multiline_input_until_semicolon(shell):
    shell.input_func = scripted(["SELECT *", "FROM items;"])
    assert shell._get_input() == "SELECT *\nFROM items;"


def test_empty_line_submits(shell):
    shell.input_func = scripted(["SELECT 1", ""])
    assert shell._get_input() == "SELECT 1"


def test_shell_command_submits_immediately(shell):
    shell.input_func = scripted(["tables"])
    assert shell._get_input() == "tables"


def test_start_runs_until_quit(shell, capsys):
    shell.input_func = scripted(["SELECT name FROM items ORDER BY id;", "quit"])
    shell.start()
    out = output_of(capsys)
    assert "│ name │" in out
    assert "再见!" in out
    assert not shell.database.is_connected


def test_choose_database_by_number(db_file, tmp_path, capsys):
    shell = SQLShell(input_func=scripted(["1"]), interactive=False)
    assert shell.choose_database(str(tmp_path)) == db_file
    assert "1. shop.db" in output_of(capsys)


def test_choose_custom_path(tmp_path):
    (tmp_path / "a.db").write_text("")
    shell = SQLShell(input_func=scripted(["2", " '/data/other.db' "]), interactive=False)
    assert shell.choose_database(str(tmp_path)) == "/data/other.db"


def test_retry_after_missing_file(db_file, tmp_path, capsys):
    shell = SQLShell(
        db_path=str(tmp_path / "missing.db"),
        input_func=scripted(["y", db_file, "quit"]),
        log_dir=str(tmp_path / "logs"),
        interactive=False,
    )
    shell.start()
    out = output_of(capsys)
    assert "✗ 连接失败" in out
    assert f"✓ 已成功连接: {db_file}" in out
    assert "再见!" in out


def test_give_up_after_failure(tmp_path, capsys):
    shell = SQLShell(
        db_path=str(tmp_path / "missing.db"),
        input_func=scripted(["n"]),
        log_dir=str(tmp_path / "logs"),
        interactive=False,
    )
    shell.start()
    assert shell.database is None
    assert "再见!" in output_of(capsys)
