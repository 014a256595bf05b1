"""
日志初始化

各模块统一使用 logging.getLogger(__name__)，这里只负责给 "wordbank"
根 logger 挂上 handler：始终输出到 stderr；配置了 log_file 时额外写入按大小
轮转的文件（保留 5 个备份）。
"""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import Settings, get_settings

LOGGER_NAME = "wordbank"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_BACKUP_COUNT = 5

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def init_logger(settings: Optional[Settings] = None) -> logging.Logger:
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_LEVELS.get(settings.log_level.upper(), logging.INFO))

    # 重复调用时先摘掉旧 handler，避免日志重复输出
    for h in list(logger.handlers):
        if getattr(h, "_wordbank_handler", False):
            logger.removeHandler(h)
            h.close()

    formatter = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        os.makedirs(os.path.dirname(os.path.abspath(settings.log_file)), exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_size_mb * 1024 * 1024,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    for h in handlers:
        h.setFormatter(formatter)
        h._wordbank_handler = True
        logger.addHandler(h)

    logger.debug(
        f"Logger initialized: level={settings.log_level} file={settings.log_file} "
        f"max_size_mb={settings.log_max_size_mb}"
    )
    return logger
