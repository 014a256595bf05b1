import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from wordbank.db import get_conn  # noqa: E402
from wordbank.schema import TableRegistry, initialize_all  # noqa: E402
from wordbank.tables import register_all_tables  # noqa: E402


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "wordbank_test.db"
    # Point wordbank to this temp DB
    os.environ["WORDBANK_DB_PATH"] = str(path)
    # Initialize schema from the registered table declarations
    registry = TableRegistry()
    register_all_tables(registry)
    with get_conn(str(path)) as conn:
        initialize_all(conn, registry)
    return str(path)


@pytest.fixture()
def registry():
    reg = TableRegistry()
    register_all_tables(reg)
    return reg


@pytest.fixture()
def conn(tmp_db_path):
    with get_conn() as c:
        yield c


@pytest.fixture()
def memory_conn():
    c = sqlite3.connect(":memory:", isolation_level=None)
    c.execute("PRAGMA foreign_keys = ON;")
    try:
        yield c
    finally:
        c.close()


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("WORDBANK_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = [
        "word_definitions",
        "words",
        "questions",
    ]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield
