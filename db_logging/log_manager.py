"""
日志管理器 - 为不同组件提供统一的日志接口
"""

from .logger import DatabaseLogger, LogLevel


class LogManager:
    """日志管理器"""

    def __init__(self, db_name: str, log_dir: str = "logs"):
        self.logger = DatabaseLogger(db_name, log_dir)

    def log_connection(self, db_file: str, success: bool, details: str = ""):
        """记录连接日志"""
        status = "成功" if success else "失败"
        message = f"连接数据库{status}: {db_file}"
        if details:
            message += f" - {details}"

        if success:
            self.logger.info(message, "CONNECTION")
        else:
            self.logger.error(message, "CONNECTION")

    def log_sql_execution(
        self, sql: str, success: bool, execution_time: float, result_count: int = 0
    ):
        """记录SQL执行日志"""
        status = "成功" if success else "失败"
        sql_preview = sql[:100] + "..." if len(sql) > 100 else sql
        message = f"SQL执行{status}: {sql_preview} (耗时: {execution_time:.3f}ms, 结果: {result_count}行)"

        if success:
            self.logger.info(message, "SQL_EXECUTOR")
        else:
            self.logger.error(message, "SQL_EXECUTOR")

    def log_error(self, component: str, error_message: str, details: str = ""):
        """记录错误"""
        message = f"{error_message}"
        if details:
            message += f" - {details}"
        self.logger.error(message, component)

    def set_log_level(self, level: LogLevel):
        """设置日志级别"""
        self.logger.set_log_level(level)

    def close(self):
        self.logger.close()
