#!/usr/bin/env python3
"""
SQLite 管理工具主程序
"""

import sys
from decimal import Decimal

from interface import interactive_sql_shell
from pretty import RenderOptions, render

# 演示用的嵌套数据
DEMO_DATA = {
    "user": "Alice",
    "age": 30,
    "active": True,
    "notes": None,
    "really_long_number": 2312831290482390185483215893218590851830483248239085931851,
    "balance": Decimal("1024.50"),
    "settings": {
        "theme": "dark",
        "notifications": False,
        "motd": "first line\nsecond line\nthird line",
    },
    "rooms": [
        {
            "name": "general",
            "topic": "A very long topic that describes the purpose of this room in great detail and goes on forever",
            "member_count": 123,
        },
        {"name": "random", "topic": "", "member_count": 45},
        {
            "name": "tech-talk",
            "topic": "Discussions about programming, databases and terminal tooling",
            "member_count": 8,
        },
    ],
    "tags": ["admin", "beta", "vip"],
    "mixed": [{"x": 1}, {"y": 2}],
    "empty_list": [],
    "empty_record": {},
}


def run_demo(options: RenderOptions):
    """打印演示数据"""
    print(render(DEMO_DATA, 0, options))


def print_usage():
    print("🗄️  SQLite 管理工具")
    print("=" * 40)
    print("用法:")
    print("  python main.py                 # 从当前目录选择数据库")
    print("  python main.py shell [file]    # 启动交互式Shell")
    print("  python main.py <file>          # 直接打开指定数据库")
    print("  python main.py demo            # 显示渲染演示")
    print()
    print("选项:")
    print("  --max-length N          标量最大显示长度")
    print("  --discourage-multiline  截断时显示剩余行数/字符数")
    print("  --log-dir DIR           日志目录（默认 logs）")


def _pop_log_dir(args):
    if "--log-dir" not in args:
        return "logs", args
    i = args.index("--log-dir")
    if i + 1 >= len(args):
        raise ValueError("--log-dir 需要一个目录参数")
    return args[i + 1], args[:i] + args[i + 2:]


def main(argv=None):
    """主程序"""
    argv = sys.argv[1:] if argv is None else argv
    try:
        options, args = RenderOptions.from_args(argv)
        log_dir, args = _pop_log_dir(args)
    except ValueError as e:
        print(f"❌ {e}")
        print_usage()
        return 2

    command = args[0].lower() if args else "shell"

    if command == "demo":
        run_demo(options)
        return 0
    if command in ("help", "-h", "--help"):
        print_usage()
        return 0
    if command == "shell":
        db_file = args[1] if len(args) > 1 else None
    elif len(args) == 1 and not args[0].startswith("-"):
        db_file = args[0]
    else:
        print_usage()
        return 2

    interactive_sql_shell(db_file, options, log_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
