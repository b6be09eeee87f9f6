# -*- coding: utf-8 -*-
"""日志配置 — 控制台输出 + 可选日志文件"""

import logging
from logging import FileHandler, Formatter, StreamHandler, getLogger

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def set_up_logging(log_file: str | None = None, log_level: str = 'WARNING',
                   silent: bool = False) -> str | None:
    """配置根 logger，返回日志文件路径 (未启用文件日志时为 None)"""
    level = getattr(logging, str(log_level).upper(), logging.WARNING)

    root_logger = getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_formatter = Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_formatter = Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not silent:
        console_handler = StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        file_handler = FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
        getLogger(__name__).info("日志文件: %s", log_file)
        return log_file

    return None
