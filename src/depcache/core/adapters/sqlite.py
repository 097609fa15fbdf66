from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Hashable

_TABLES_SQL = (
    "SELECT name FROM sqlite_master "
    "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
)


class SqliteSchemaEnumerator:
    """Lists the tables of a SQLite database (owner = path or open connection)."""

    def list_resource_names(self, owner: Hashable) -> list[str]:
        """Return table names from `sqlite_master`, skipping SQLite internals."""
        if isinstance(owner, sqlite3.Connection):
            return [row[0] for row in owner.execute(_TABLES_SQL)]

        path = Path(str(owner))
        if not path.exists():
            raise FileNotFoundError(f"SQLite database not found: {path}")

        # Read-only so a bad path never creates an empty database
        conn = sqlite3.connect(f"file:{path}?mode=ro", uri=True)
        try:
            return [row[0] for row in conn.execute(_TABLES_SQL)]
        finally:
            conn.close()
