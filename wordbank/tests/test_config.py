import logging
from logging.handlers import RotatingFileHandler

from wordbank.config import Settings, get_settings
from wordbank.db import get_db_path
from wordbank.logs import LOGGER_NAME, init_logger


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "db_path: /tmp/from_yaml.db\n"
        "table_prefix: wfc_\n"
        "log_level: debug\n"
        "log_max_size_mb: 3\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("WORDBANK_DB_PATH", "/tmp/from_env.db")
    monkeypatch.delenv("DB_TABLE_PREFIX", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE_MAX_SIZE_MB", raising=False)

    s = get_settings(str(cfg))
    assert s.db_path == "/tmp/from_env.db"
    assert s.table_prefix == "wfc_"
    assert s.log_level == "DEBUG"
    assert s.log_max_size_mb == 3

    monkeypatch.setenv("DB_TABLE_PREFIX", "")
    assert get_settings(str(cfg)).table_prefix == ""


def test_test_db_path_used_under_pytest(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: prod.db\ntest_db_path: test.db\n", encoding="utf-8")
    monkeypatch.delenv("WORDBANK_DB_PATH", raising=False)
    assert get_settings(str(cfg)).db_path == "test.db"


def test_broken_yaml_falls_back_to_defaults(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: [unclosed\n", encoding="utf-8")
    monkeypatch.delenv("WORDBANK_DB_PATH", raising=False)
    monkeypatch.delenv("DB_TYPE", raising=False)
    s = get_settings(str(cfg))
    assert s.db_path.endswith("wordbank.db")
    assert s.db_type == "sqlite"


def test_init_logger_with_rotating_file(tmp_path):
    log_file = tmp_path / "wordbank.log"
    settings = Settings(db_path=str(tmp_path / "x.db"), log_level="WARN", log_file=str(log_file), log_max_size_mb=1)
    logger = init_logger(settings)
    try:
        assert logger.level == logging.WARNING
        rotating = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].maxBytes == 1024 * 1024

        # 再次初始化不会叠加 handler
        init_logger(settings)
        assert len([h for h in logger.handlers if isinstance(h, RotatingFileHandler)]) == 1

        logging.getLogger(f"{LOGGER_NAME}.test").warning("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        logger.setLevel(logging.NOTSET)


def test_get_db_path_uses_given_config(tmp_path, monkeypatch):
    db_file = tmp_path / "nested" / "dir" / "words.db"
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"db_path: {db_file}\ntest_db_path: {db_file}\n", encoding="utf-8")
    monkeypatch.delenv("WORDBANK_DB_PATH", raising=False)

    assert get_db_path(str(cfg)) == str(db_file)
    assert db_file.parent.is_dir()
