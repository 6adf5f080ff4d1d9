"""
数据库日志器
"""

import os
from datetime import datetime
from enum import Enum


class LogLevel(Enum):
    """日志级别"""

    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """按名称查找日志级别，忽略大小写"""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"未知的日志级别: {name}")


class DatabaseLogger:
    """数据库日志器，每个数据库写一个日志文件"""

    def __init__(self, db_name: str, log_dir: str = "logs"):
        self.db_name = db_name
        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, f"{db_name}.log")
        self.min_level = LogLevel.INFO

        # 确保日志目录存在
        os.makedirs(log_dir, exist_ok=True)

        self._write_log(LogLevel.INFO, f"打开数据库 {self.db_name}")

    def _write_log(self, level: LogLevel, message: str, component: str = "SYSTEM"):
        """写入日志"""
        if level.value < self.min_level.value:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_line = f"[{timestamp}] [{level.name}] [{component}] {message}\n"

        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(log_line)
        except OSError as e:
            print(f"写入日志失败: {e}")

    def debug(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.DEBUG, message, component)

    def info(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.INFO, message, component)

    def warning(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.WARNING, message, component)

    def error(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.ERROR, message, component)

    def critical(self, message: str, component: str = "SYSTEM"):
        self._write_log(LogLevel.CRITICAL, message, component)

    def set_log_level(self, level: LogLevel):
        self.min_level = level

    def close(self):
        self._write_log(LogLevel.INFO, f"关闭数据库 {self.db_name}")
