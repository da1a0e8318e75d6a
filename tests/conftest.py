# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.

The Supabase client is replaced by FakeSupabase, a small in-memory stand-in
for the PostgREST query builder (select with embedded resources, eq, in_,
order, limit, insert, update, delete and exact counts). Supabase Auth is a
Mock hanging off the fake so tests can script sign-in and token checks.
"""

import os

os.environ.setdefault("RATE_LIMIT", "100000/minute")

import copy
from datetime import datetime, timedelta, timezone
from typing import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from floortrack.core.dependencies import get_current_auth_user
from floortrack.database.supabase_client import get_supabase, get_supabase_admin, get_supabase_auth
from floortrack.main import app as fastapi_app
from floortrack.modules.auth.service import clear_auth_cache

# Foreign key column pointing at each table
FOREIGN_KEYS = {
    "users": "user_id",
    "roles": "role_id",
    "groups": "group_id",
    "buildings": "building_id",
    "floors": "floor_id",
    "aps": "ap_id",
}

UNIQUE_COLUMNS = {
    "users": ["auth_uid"],
    "roles": ["name"],
    "groups": ["name"],
    "clients": ["mac"],
    "user_devices": ["mac"],
}

TIMESTAMPED_TABLES = {"users", "clients"}


class FakeAPIError(Exception):
    """Shaped like postgrest's APIError: message and code attributes."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _split_columns(columns: str):
    parts, depth, current = [], 0, ""
    for char in columns:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += char
    if current.strip():
        parts.append(current.strip())
    return parts


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*", count=None):
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, payload):
        self.operation = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.limit_to = size
        return self

    def _matching(self):
        rows = self.db.tables.setdefault(self.table_name, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def execute(self):
        if self.table_name in self.db.failing_tables:
            raise FakeAPIError("connection refused")
        return getattr(self, f"_execute_{self.operation}")()

    def _execute_select(self):
        rows = self._matching()
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda row: row.get(column), reverse=desc)
        count = len(rows) if self.count_mode == "exact" else None
        if self.limit_to is not None:
            rows = rows[:self.limit_to]
        data = [self.db.project(self.table_name, row, self.columns) for row in rows]
        return FakeResponse(data, count)

    def _execute_insert(self):
        if self.table_name in self.db.failing_inserts:
            raise FakeAPIError("insert or update on table violates foreign key constraint", code="23503")
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        created = [self.db.add(self.table_name, dict(row)) for row in payload]
        return FakeResponse([dict(row) for row in created])

    def _execute_update(self):
        rows = self._matching()
        for row in rows:
            self.db.check_unique(self.table_name, {**row, **self.payload}, ignore=row)
        for row in rows:
            row.update(self.payload)
        return FakeResponse([dict(row) for row in rows])

    def _execute_delete(self):
        rows = self._matching()
        self.db.remove(self.table_name, rows)
        return FakeResponse([dict(row) for row in rows])


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.failing_tables = set()
        self.failing_inserts = set()
        self.auth = Mock()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str):
        return self.tables.setdefault(name, [])

    def check_unique(self, table, row, ignore=None):
        for column in UNIQUE_COLUMNS.get(table, []):
            for other in self.rows(table):
                if other is not ignore and other.get(column) == row.get(column):
                    raise FakeAPIError(
                        f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        code="23505",
                    )

    def add(self, table, row):
        rows = self.rows(table)
        if "id" not in row:
            row["id"] = max((r["id"] for r in rows), default=0) + 1
        if table in TIMESTAMPED_TABLES and "created_at" not in row:
            self._clock += timedelta(seconds=1)
            row["created_at"] = self._clock.isoformat()
        self.check_unique(table, row)
        rows.append(row)
        return row

    def seed(self, table, *rows):
        for row in rows:
            self.add(table, dict(row))

    def remove(self, table, doomed):
        doomed_ids = {row["id"] for row in doomed}
        self.tables[table] = [row for row in self.rows(table) if row["id"] not in doomed_ids]
        # ON DELETE CASCADE
        fk = FOREIGN_KEYS.get(table)
        if not fk:
            return
        for child_table, child_rows in list(self.tables.items()):
            children = [row for row in child_rows if row.get(fk) in doomed_ids]
            if children:
                self.remove(child_table, children)

    def project(self, table, row, columns):
        result = {}
        for column in _split_columns(columns):
            if "(" not in column:
                if column == "*":
                    result.update(copy.deepcopy(row))
                else:
                    result[column] = row.get(column)
                continue
            relation = column[:column.index("(")].strip()
            inner = column[column.index("(") + 1:column.rindex(")")]
            fk = FOREIGN_KEYS.get(relation)
            if fk and fk in row:
                target = next((r for r in self.rows(relation) if r["id"] == row[fk]), None)
                result[relation] = self.project(relation, target, inner) if target else None
            else:
                back_key = FOREIGN_KEYS[table]
                result[relation] = [
                    self.project(relation, child, inner)
                    for child in self.rows(relation)
                    if child.get(back_key) == row["id"]
                ]
        return result


def seed_world(db: FakeSupabase):
    """
    Two buildings and one grant:
    group North (1) holds building HQ (1) / floor HQ-Ground (10).
    HQ also has floor HQ-First (11); Annex (2) has floor Annex-Ground (20).
    """
    db.seed(
        "roles",
        {"id": 1, "name": "Owner"},
        {"id": 2, "name": "Organization Admin"},
        {"id": 3, "name": "Site Admin"},
        {"id": 4, "name": "User"},
        {"id": 5, "name": "Pending User"},
    )
    db.seed("groups", {"id": 1, "name": "North"}, {"id": 2, "name": "South"})
    db.seed(
        "users",
        {"id": 1, "auth_uid": "uid-owner", "email": "owner@example.com",
         "first_name": "Olive", "last_name": "Owner", "role_id": 1},
        {"id": 2, "auth_uid": "uid-org", "email": "org@example.com",
         "first_name": "Oscar", "last_name": "Org", "role_id": 2},
        {"id": 3, "auth_uid": "uid-site", "email": "site@example.com",
         "first_name": "Sam", "last_name": "Site", "role_id": 3},
        {"id": 4, "auth_uid": "uid-user", "email": "user@example.com",
         "first_name": "Uma", "last_name": "User", "role_id": 4},
        {"id": 5, "auth_uid": "uid-pending", "email": "pending@example.com",
         "first_name": "Pat", "last_name": "Pending", "role_id": 5},
        {"id": 6, "auth_uid": "uid-lonely", "email": "lonely@example.com",
         "first_name": "Lou", "last_name": "Lonely", "role_id": 3},
    )
    db.seed(
        "user_groups",
        {"id": 1, "user_id": 2, "group_id": 1},
        {"id": 2, "user_id": 3, "group_id": 1},
        {"id": 3, "user_id": 4, "group_id": 1},
    )
    db.seed("buildings", {"id": 1, "name": "HQ"}, {"id": 2, "name": "Annex"})
    db.seed(
        "floors",
        {"id": 10, "name": "HQ-Ground", "svg_map": "<svg id='hq0'/>", "building_id": 1},
        {"id": 11, "name": "HQ-First", "svg_map": "<svg id='hq1'/>", "building_id": 1},
        {"id": 20, "name": "Annex-Ground", "svg_map": "<svg id='an0'/>", "building_id": 2},
    )
    db.seed(
        "aps",
        {"id": 100, "name": "AP-Lobby", "cx": 10.0, "cy": 20.0, "floor_id": 10},
        {"id": 101, "name": "AP-Office", "cx": 30.5, "cy": 40.5, "floor_id": 11},
        {"id": 200, "name": "AP-Annex", "cx": 5.0, "cy": 5.0, "floor_id": 20},
    )
    db.seed(
        "clients",
        {"id": 1000, "mac": "aa:aa:aa:aa:aa:01", "ap_id": 100},
        {"id": 1001, "mac": "aa:aa:aa:aa:aa:02", "ap_id": 100},
        {"id": 1002, "mac": "aa:aa:aa:aa:aa:03", "ap_id": 200},
    )
    db.seed(
        "global_permissions",
        {"id": 1, "group_id": 1, "building_id": 1, "floor_id": 10},
    )
    return db


@pytest.fixture
def fake_db() -> FakeSupabase:
    return seed_world(FakeSupabase())


@pytest.fixture(scope="function")
def app(fake_db):
    """The FastAPI application wired to the in-memory store."""
    clear_auth_cache()
    fastapi_app.dependency_overrides[get_supabase] = lambda: fake_db
    fastapi_app.dependency_overrides[get_supabase_admin] = lambda: fake_db
    fastapi_app.dependency_overrides[get_supabase_auth] = lambda: fake_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """Authenticate subsequent requests as the given identity-provider uid."""
    def _login(auth_uid: str, email: str = "someone@example.com"):
        app.dependency_overrides[get_current_auth_user] = lambda: {
            "id": auth_uid,
            "email": email,
            "user_metadata": {},
            "app_metadata": {},
        }
    return _login
