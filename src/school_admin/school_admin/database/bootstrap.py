"""Apply ``database/schema.sql`` and ``database/seed.sql`` to MySQL."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Mapping

from ..core.logger import get_logger
from .connection import DatabaseConnection, DBConfig

logger = get_logger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[4] / "database"
SCHEMA_PATH = DATABASE_DIR / "schema.sql"
SEED_PATH = DATABASE_DIR / "seed.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep the .sql files usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            continue
        if ch == ";" and quote is None:
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def script_statements(sql: str) -> list[str]:
    """Executable statements of a .sql file, minus comments and database switches."""
    return list(iter_sql_statements(_strip_comments(_strip_create_db_and_use(sql))))


def _run_script(conn_factory: DatabaseConnection, path: Path) -> int:
    statements = script_statements(Path(path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    ensure_database_exists(conn_factory)
    count = _run_script(conn_factory, Path(schema_path))
    logger.info("Schema applied to %s (%d statements)", conn_factory.config.describe(), count)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path = SEED_PATH) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    count = _run_script(conn_factory, Path(seed_path))
    logger.info("Seed applied to %s (%d statements)", conn_factory.config.describe(), count)


def list_tables(db_config: Mapping) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
