from __future__ import annotations

# wordbank/config.py
import os
from dataclasses import dataclass
from typing import Optional

import yaml

# 配置解析顺序：
# 1) 环境变量（最高优先级）
# 2) 项目根 config.yaml（测试环境下优先 test_db_path）
# 3) 默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "wordbank.db")

_YAML_KEYS = (
    "db_path",
    "test_db_path",
    "db_type",
    "table_prefix",
    "log_level",
    "log_file",
    "log_max_size_mb",
)


@dataclass(frozen=True)
class Settings:
    db_path: str
    db_type: str = "sqlite"
    table_prefix: str = ""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_size_mb: int = 10


def get_or_default(key: str, default: Optional[str] = None) -> Optional[str]:
    """Environment variable value, or ``default`` when unset or blank."""
    value = os.environ.get(key)
    if value is not None and value.strip():
        return value.strip()
    return default


def _read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in _YAML_KEYS:
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
        elif isinstance(v, int) and not isinstance(v, bool):
            out[k] = v
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_settings(config_path: str | None = None) -> Settings:
    cfg = _read_config_yaml(config_path)

    env_db = get_or_default("WORDBANK_DB_PATH")
    if env_db:
        db_path = env_db
    elif is_test_env() and cfg.get("test_db_path"):
        db_path = cfg["test_db_path"]
    else:
        db_path = cfg.get("db_path") or _DEFAULT_DB

    try:
        max_size = int(get_or_default("LOG_FILE_MAX_SIZE_MB", cfg.get("log_max_size_mb", 10)))
    except (TypeError, ValueError):
        max_size = 10

    return Settings(
        db_path=db_path,
        db_type=(get_or_default("DB_TYPE", cfg.get("db_type", "sqlite")) or "sqlite").lower(),
        # prefix 允许显式设为空串，因此直接读环境变量
        table_prefix=os.environ.get("DB_TABLE_PREFIX", cfg.get("table_prefix", "")),
        log_level=(get_or_default("LOG_LEVEL", cfg.get("log_level", "INFO")) or "INFO").upper(),
        log_file=get_or_default("LOG_FILE_PATH", cfg.get("log_file")),
        log_max_size_mb=max_size,
    )
