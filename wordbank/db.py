from __future__ import annotations

# wordbank/db.py
import datetime as dt
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .config import get_settings

_TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def _adapt_datetime(value: dt.datetime) -> str:
    return value.strftime(_TS_FORMAT)


def _convert_timestamp(raw: bytes) -> dt.datetime | str:
    text = raw.decode("utf-8")
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        # 非标准格式时原样返回，交给调用方处理
        return text


# TIMESTAMP 列统一按 "YYYY-MM-DD HH:MM:SS" 存取
sqlite3.register_adapter(dt.datetime, _adapt_datetime)
sqlite3.register_converter("TIMESTAMP", _convert_timestamp)


def get_db_path(config_path: str | None = None) -> str:
    """按配置解析数据库路径；config_path 为 None 时读项目根 config.yaml"""
    path = get_settings(config_path).db_path
    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    打开 foreign_keys，设置 row_factory 为 Row。
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """在自动提交连接上显式开启事务；异常时回滚并继续抛出"""
    conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
