"""
日志配置
Logger Configuration

日期: 2026-10-18
描述: 容器日志格式化器和日志初始化函数，日志记录中的bean_name和package字段会追加在消息后面
"""

import logging
import sys
from typing import Optional, Sequence, Union

DEFAULT_FORMAT = "[{asctime}] {level} [{name}] {message}"

# 容器通过extra传入的上下文字段
CONTEXT_FIELDS = ("bean_name", "package")

# ANSI颜色代码
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
RESET = "\033[0m"


class ContainerFormatter(logging.Formatter):
    """
    容器日志格式化器

    输出示例:
        [2026-10-18 12:00:00,000] DEBUG    [minioc.context] Creating bean instance: service_a | bean_name=service_a
    """

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: Optional[str] = None,
        colored: bool = False,
        fields: Sequence[str] = CONTEXT_FIELDS
    ):
        """
        Args:
            format_string: 自定义格式字符串，{level}为对齐后的级别名称
            date_format: 日期格式
            colored: 级别名称是否带ANSI颜色
            fields: 追加到消息后面的extra字段
        """
        super().__init__(format_string or DEFAULT_FORMAT, date_format, style="{")
        self.colored = colored
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        # 复制一份，避免影响同一记录的其他处理器
        record = logging.makeLogRecord(record.__dict__)

        level = f"{record.levelname:8}"
        if self.colored and record.levelno in LEVEL_COLORS:
            level = f"{LEVEL_COLORS[record.levelno]}{level}{RESET}"
        record.level = level

        formatted = super().format(record)

        context = [
            f"{field}={getattr(record, field)}"
            for field in self.fields
            if getattr(record, field, None) is not None
        ]
        if context:
            formatted += " | " + " ".join(context)

        return formatted


def setup_logging(
    level: Union[int, str] = logging.INFO,
    colored: Optional[bool] = None,
    logger_name: str = "minioc"
) -> logging.Logger:
    """
    初始化日志输出到stderr

    Args:
        level: 日志级别
        colored: 是否彩色输出，None表示终端时自动启用
        logger_name: 要配置的日志器名称

    Returns:
        配置后的日志器
    """
    if isinstance(level, str):
        level = level.upper()

    if colored is None:
        colored = sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContainerFormatter(colored=colored))

    target = logging.getLogger(logger_name)
    # 重复调用时替换之前安装的处理器
    for existing in list(target.handlers):
        if getattr(existing, "_minioc_handler", False):
            target.removeHandler(existing)
    handler._minioc_handler = True

    target.addHandler(handler)
    target.setLevel(level)
    return target
