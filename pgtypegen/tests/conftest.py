import random
import threading
import time

import psycopg
import pytest

from pgtypegen.db_codegen.catalog import (
    LIST_COLUMNS_SQL,
    LIST_ENUMS_SQL,
    LIST_TABLES_SQL,
)
from pgtypegen.shared import Diagnostics


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    """Stands in for a psycopg connection with a dict_row factory.

    ``tables`` maps table name to a list of (column_name, udt_name, nullable)
    tuples; ``enums`` maps enum name to its labels.
    """

    def __init__(self, tables=None, enums=None, delay=0.0, fail_on=None):
        self.tables = tables or {}
        self.enums = enums or {}
        self.delay = delay
        self.fail_on = fail_on
        self.queries = []
        self._lock = threading.Lock()

    def execute(self, query, params=None):
        with self._lock:
            self.queries.append((query, dict(params or {})))
        if self.fail_on is not None and self.fail_on == query:
            raise psycopg.errors.InsufficientPrivilege("permission denied for table pg_class")

        if query == LIST_TABLES_SQL:
            return FakeCursor([{"name": name} for name in sorted(self.tables)])
        if query == LIST_COLUMNS_SQL:
            if self.delay:
                time.sleep(random.uniform(0, self.delay))
            columns = self.tables.get(params["table"], [])
            return FakeCursor(
                [
                    {
                        "column_name": name,
                        "udt_name": udt,
                        "is_nullable": "YES" if nullable else "NO",
                    }
                    for name, udt, nullable in columns
                ]
            )
        if query == LIST_ENUMS_SQL:
            # Catalog grouping order is not alphabetical on purpose
            return FakeCursor(
                [
                    {"enum_name": name, "enum_values": list(labels)}
                    for name, labels in reversed(list(self.enums.items()))
                ]
            )
        raise AssertionError(f"unexpected query: {query}")

    def queried_tables(self):
        return [params["table"] for query, params in self.queries if query == LIST_COLUMNS_SQL]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


PEOPLE_SCHEMA = {
    "tables": {
        "people": [
            ("id", "int4", False),
            ("name", "text", True),
            ("mood", "mood", False),
        ],
    },
    "enums": {"mood": ["sad", "ok", "happy"]},
}


@pytest.fixture
def diagnostics():
    return Diagnostics.silent()


@pytest.fixture
def people_conn():
    return FakeConnection(PEOPLE_SCHEMA["tables"], PEOPLE_SCHEMA["enums"])


@pytest.fixture
def make_conn():
    return FakeConnection
