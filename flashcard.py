#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Word flashcard data store (SQLite)

Commands:
  init                Register tables and create them (plus indexes) if absent
  ddl                 Print the CREATE statements for a database dialect
  tables              List registered tables
  demo                Insert demo words when the words table is empty
  search              Search words with a JSON filter, e.g.
                      --filter '{"conditions":[{"key":"familiarity","operator":"eq","value":"red"}],"logic":"AND"}'

Notes:
- DB path / prefix / log settings come from env vars first, then --config (config.yaml).
- Schema changes after the first `init` are not reconciled.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from wordbank.config import get_settings
from wordbank.db import get_conn
from wordbank.errors import FilterError, SchemaError, WordbankError
from wordbank.filters import SearchFilter
from wordbank.logs import init_logger
from wordbank.schema import TableRegistry, build_statements, initialize_all
from wordbank.services.demo_svc import insert_demo_data
from wordbank.services.word_svc import get_words
from wordbank.tables import register_all_tables

logger = logging.getLogger("wordbank.cli")


def _registry() -> TableRegistry:
    registry = TableRegistry()
    register_all_tables(registry)
    return registry


# ---------------- Commands ----------------

def cmd_init(args, settings):
    with get_conn(settings.db_path) as conn:
        # get_conn 只连接 SQLite，建表统一按 sqlite 方言生成
        n = initialize_all(conn, _registry(), "sqlite", settings.table_prefix)
        print(f"Initialized {n} tables in {settings.db_path}")
        if args.demo:
            inserted = insert_demo_data(conn, settings.table_prefix)
            print(f"Inserted {inserted} demo words")


def cmd_ddl(args, settings):
    dialect = args.dialect or settings.db_type
    for stmt in build_statements(_registry(), dialect, settings.table_prefix):
        print(stmt.sql + ";\n")


def cmd_tables(args, settings):
    for table in _registry().all():
        print(f"{settings.table_prefix}{table.name:<24} {len(table.columns):>3} columns  {table.description}")


def cmd_demo(args, settings):
    with get_conn(settings.db_path) as conn:
        inserted = insert_demo_data(conn, settings.table_prefix)
    print(f"Inserted {inserted} demo words")


def cmd_search(args, settings):
    search = SearchFilter.model_validate_json(args.filter) if args.filter else SearchFilter()
    with get_conn(settings.db_path) as conn:
        words = get_words(conn, search, limit=args.limit, offset=args.offset, table_prefix=settings.table_prefix)
    if not words:
        print("(none)")
        return
    for w in words:
        print(f"{w.id:>5}  {w.word:<20} {w.familiarity:<8} {len(w.definitions)} definition(s)")
        for d in w.definitions:
            pos = f"[{d.part_of_speech}] " if d.part_of_speech else ""
            print(f"         {pos}{d.definition}")


# ---------------- Entry ----------------

def main(argv=None):
    parser = argparse.ArgumentParser(description="Word flashcard data store (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create registered tables if absent")
    p_init.add_argument("--demo", action="store_true", help="also insert demo data")
    p_init.set_defaults(func=cmd_init)

    p_ddl = sub.add_parser("ddl", help="print CREATE statements")
    p_ddl.add_argument("--dialect", choices=["sqlite", "mysql", "postgresql"], required=False)
    p_ddl.set_defaults(func=cmd_ddl)

    p_tables = sub.add_parser("tables", help="list registered tables")
    p_tables.set_defaults(func=cmd_tables)

    p_demo = sub.add_parser("demo", help="insert demo words")
    p_demo.set_defaults(func=cmd_demo)

    p_search = sub.add_parser("search", help="search words with a JSON filter")
    p_search.add_argument("--filter", required=False, help="SearchFilter JSON")
    p_search.add_argument("--limit", required=False, type=int)
    p_search.add_argument("--offset", required=False, type=int)
    p_search.set_defaults(func=cmd_search)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    settings = get_settings(args.config)
    init_logger(settings)
    try:
        args.func(args, settings)
    except (FilterError, ValidationError) as e:
        print(f"Invalid filter: {e}", file=sys.stderr)
        return 2
    except SchemaError as e:
        logger.error(f"Schema declaration error: {e}")
        return 3
    except WordbankError as e:
        logger.error(f"{args.func.__name__} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
