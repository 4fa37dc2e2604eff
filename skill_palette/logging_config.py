"""
日志配置模块

为 Skill Palette 提供统一的日志配置，支持文件和控制台输出。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    log_format: str = DEFAULT_FORMAT,
):
    """
    设置应用日志配置

    Args:
        log_level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: 日志文件路径（None 时仅输出到控制台）
        max_bytes: 单个日志文件最大大小
        backup_count: 保留的日志备份数量
        log_format: 日志格式
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 清除现有的处理器
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=log_format, datefmt='%Y-%m-%d %H:%M:%S')

    # 控制台处理器（stderr，避免干扰命令输出）
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 文件处理器 (轮转)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(f"日志系统初始化完成: level={log_level}, file={log_file}")


__all__ = ["setup_logging"]
