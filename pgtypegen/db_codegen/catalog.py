"""Read-only access to the PostgreSQL catalog for one schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

import psycopg
from psycopg.rows import dict_row

from ..shared import (
    CatalogQueryError,
    DatabaseConnectionError,
    Diagnostics,
    redact_conninfo,
)

LIST_TABLES_SQL: Final[str] = """
    SELECT c.relname AS name
    FROM pg_class c
    WHERE c.relnamespace = (
        SELECT oid FROM pg_namespace WHERE nspname = %(schema)s
    )
    AND c.relkind = 'r'
    ORDER BY c.relname
"""

LIST_COLUMNS_SQL: Final[str] = """
    SELECT column_name, udt_name, is_nullable
    FROM information_schema.columns
    WHERE table_schema = %(schema)s AND table_name = %(table)s
    ORDER BY ordinal_position
"""

LIST_ENUMS_SQL: Final[str] = """
    SELECT
        t.typname AS enum_name,
        array_agg(e.enumlabel ORDER BY e.enumsortorder) AS enum_values
    FROM pg_type t
    JOIN pg_enum e ON t.oid = e.enumtypid
    JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
    WHERE n.nspname = %(schema)s
    GROUP BY t.typname
    ORDER BY t.typname
"""


@dataclass(frozen=True, slots=True)
class CatalogColumn:
    """A column as reported by ``information_schema.columns``."""

    name: str
    native_type: str
    nullable: bool


def connect(conninfo: str, diagnostics: Diagnostics) -> psycopg.Connection:
    """Open the connection shared by every catalog query of a run.

    Raises:
        DatabaseConnectionError: If the server is unreachable or the
            credentials are rejected.
    """
    diagnostics.debug("Using connection string: %s", redact_conninfo(conninfo))
    try:
        conn = psycopg.connect(conninfo, autocommit=True, row_factory=dict_row)
    except psycopg.Error as e:
        raise DatabaseConnectionError(f"Could not connect to database: {e}") from e
    diagnostics.debug("Connected to database")
    return conn


class CatalogReader:
    """Issues the catalog queries for a single schema.

    A psycopg connection serialises concurrent operations internally, so
    one reader may be shared by several worker threads.
    """

    __slots__ = ("_conn", "schema", "_diagnostics")

    def __init__(
        self,
        conn: psycopg.Connection,
        schema: str,
        diagnostics: Diagnostics,
    ) -> None:
        self._conn = conn
        self.schema = schema
        self._diagnostics = diagnostics

    def _fetch(self, query_name: str, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            return list(self._conn.execute(query, params).fetchall())
        except psycopg.Error as e:
            raise CatalogQueryError(str(e).strip(), query_name) from e

    def list_tables(self) -> list[str]:
        """Base tables of the schema, sorted by name."""
        self._diagnostics.debug("List tables in schema '%s'", self.schema)
        rows = self._fetch("list_tables", LIST_TABLES_SQL, {"schema": self.schema})
        return [row["name"] for row in rows]

    def list_columns(self, table: str) -> list[CatalogColumn]:
        """Columns of ``table`` in ordinal position order.

        An unknown table simply has no columns.
        """
        self._diagnostics.debug("List columns for table '%s'", table)
        rows = self._fetch(
            "list_columns",
            LIST_COLUMNS_SQL,
            {"schema": self.schema, "table": table},
        )
        return [
            CatalogColumn(
                name=row["column_name"],
                native_type=row["udt_name"],
                nullable=row["is_nullable"] == "YES",
            )
            for row in rows
        ]

    def list_enums(self) -> dict[str, list[str]]:
        """Enum types of the schema mapped to their labels in sort order."""
        self._diagnostics.debug("List enums in schema '%s'", self.schema)
        rows = self._fetch("list_enums", LIST_ENUMS_SQL, {"schema": self.schema})
        return {row["enum_name"]: list(row["enum_values"]) for row in rows}
