from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

import mysql.connector

from ..core.exceptions import StaleTableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .base import BaseTableStore

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS store_tables (
    name VARCHAR(64) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    version INT NOT NULL DEFAULT 0
)
"""


class MySQLTableStore(BaseTableStore):
    """One row per table in `store_tables`.

    Each row carries a version counter. A transaction commit only updates a
    row still at the version it read (compare-and-swap), so writers in
    separate processes cannot silently overwrite each other.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, seed: bool = True):
        super().__init__(seed=seed)
        self._conn_factory = conn_factory

    def ensure_schema(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(SCHEMA_SQL)

    def _load(self, name: str) -> Tuple[Optional[Any], Optional[int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload, version FROM store_tables WHERE name=%s", (name,))
            row = fetchone(cur)
            if not row:
                return None, None
            return json.loads(row["payload"]), int(row["version"])

    def _commit(self, tables: Dict[str, Any], expected_versions: Dict[str, Optional[int]]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for name, records in tables.items():
                payload = json.dumps(records)
                if name not in expected_versions:
                    cur.execute(
                        """
                        INSERT INTO store_tables(name, payload, version) VALUES(%s,%s,0)
                        ON DUPLICATE KEY UPDATE payload=VALUES(payload), version=version+1
                        """,
                        (name, payload),
                    )
                    continue

                expected = expected_versions[name]
                if expected is None:
                    try:
                        cur.execute(
                            "INSERT INTO store_tables(name, payload, version) VALUES(%s,%s,0)",
                            (name, payload),
                        )
                    except mysql.connector.IntegrityError as e:
                        raise StaleTableError(f"Table {name!r} was created by another writer") from e
                    continue

                cur.execute(
                    "UPDATE store_tables SET payload=%s, version=version+1 WHERE name=%s AND version=%s",
                    (payload, name, expected),
                )
                if cur.rowcount == 0:
                    raise StaleTableError(f"Table {name!r} changed since version {expected}")
