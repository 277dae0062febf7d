"""Apply ``database/schema.sql`` and ``database/seed.sql`` through mysql-connector.

The scripts are split client-side so they can be run with a plain cursor;
``CREATE DATABASE``/``USE`` lines are dropped and the configured database is
used instead.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

_DB_SWITCH_RE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;`` outside of quotes, skipping ``--`` comments."""
    stmt: list[str] = []
    quote = ""
    i, n = 0, len(sql)

    while i < n:
        ch = sql[i]
        if quote:
            stmt.append(ch)
            if ch == "\\" and i + 1 < n:
                stmt.append(sql[i + 1])
                i += 1
            elif ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
            stmt.append(ch)
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            i = n if end == -1 else end
            continue
        elif ch == ";":
            text = "".join(stmt).strip()
            if text:
                yield text
            stmt = []
        else:
            stmt.append(ch)
        i += 1

    text = "".join(stmt).strip()
    if text:
        yield text


def _execute_script(db: DatabaseConnection, path: Path) -> int:
    sql = _DB_SWITCH_RE.sub("", path.read_text(encoding="utf-8"))
    executed = 0
    with closing(db.connect()) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    return executed


def ensure_database_exists(db_config: dict) -> None:
    db = DatabaseConnection(DBConfig.from_mapping(db_config))
    with closing(db.connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{db.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _execute_script(DatabaseConnection(DBConfig.from_mapping(db_config)), Path(schema_path))
    logger.info("Applied %s statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _execute_script(DatabaseConnection(DBConfig.from_mapping(db_config)), Path(seed_path))
    logger.info("Applied %s seed statements from %s", count, seed_path)


def list_tables(db_config: dict) -> list[str]:
    with closing(DatabaseConnection(DBConfig.from_mapping(db_config)).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
