"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import copy
import pytest
from contextlib import ExitStack
from unittest.mock import patch
from datetime import datetime, timezone
from typing import Callable, Generator, Optional


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        if count is not None:
            self.count = count
        else:
            self.count = len(self.data) if isinstance(self.data, list) else 1


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    Filters are applied to the table's rows on execute(); inserts, updates
    and deletes change the stored rows so later queries see them.
    """

    def __init__(self, client: "MockSupabaseClient", table: str, op: str, payload=None):
        self._client = client
        self._table = table
        self._op = op
        self._payload = payload
        self._filters: list[tuple[str, str, object]] = []
        self._orders: list[tuple[str, bool]] = []
        self._limit: Optional[int] = None
        self._is_single = False
        self._count = None

    def select(self, *args, **kwargs):
        self._count = kwargs.get("count")
        return self

    def eq(self, column, value):
        self._filters.append(("eq", column, value))
        return self

    def neq(self, column, value):
        self._filters.append(("neq", column, value))
        return self

    def in_(self, column, values):
        self._filters.append(("in", column, list(values)))
        return self

    def is_(self, column, value):
        self._filters.append(("is", column, None if value in (None, "null") else value))
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._orders.append((column, desc))
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        for kind, column, value in self._filters:
            current = row.get(column)
            if kind == "eq" and current != value:
                return False
            if kind == "neq" and current == value:
                return False
            if kind == "in" and current not in value:
                return False
            if kind == "is" and current is not value:
                return False
        return True

    def execute(self) -> MockSupabaseResponse:
        self._client.record(self._table, self._op, self._payload, self._filters)
        self._client.raise_if_failing(self._table, self._op, self._payload, self._filters)

        rows = self._client.rows(self._table)

        if self._op == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            created = []
            for item in items:
                row = copy.deepcopy(item)
                row.setdefault("id", self._client.next_id(self._table))
                row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(row)
                created.append(copy.deepcopy(row))
            return MockSupabaseResponse(data=created)

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        if self._op == "delete":
            for row in matched:
                rows.remove(row)
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        for column, desc in reversed(self._orders):
            matched.sort(
                key=lambda r: (r.get(column) is None, r.get(column) if r.get(column) is not None else 0),
                reverse=desc
            )
        if self._limit is not None:
            matched = matched[:self._limit]

        data = copy.deepcopy(matched)
        if self._is_single:
            return MockSupabaseResponse(data=data[0] if data else None)
        return MockSupabaseResponse(data=data, count=len(data) if self._count else None)


class MockSupabaseTable:
    """Mock Supabase table bound to the client's stored rows."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self._client = client
        self._name = name

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self._client, self._name, "select").select(*args, **kwargs)

    def insert(self, data):
        return MockSupabaseQuery(self._client, self._name, "insert", data)

    def update(self, data):
        return MockSupabaseQuery(self._client, self._name, "update", data)

    def delete(self):
        return MockSupabaseQuery(self._client, self._name, "delete")


class MockRpcCall:
    """Mock result of client.rpc()."""

    def __init__(self, client: "MockSupabaseClient", name: str, params):
        self._client = client
        self._name = name
        self._params = params

    def execute(self) -> MockSupabaseResponse:
        self._client.record(self._name, "rpc", self._params, [])
        self._client.raise_if_failing(self._name, "rpc", self._params, [])
        return MockSupabaseResponse(data=self._client.rpc_results.get(self._name))


class MockSupabaseClient:
    """
    Mock Supabase client.

    Every executed query is appended to .calls as a dict with table, op,
    payload and filters.
    """

    def __init__(self):
        self._tables: dict[str, list[dict]] = {}
        self._failures: list[tuple[str, str, Optional[Callable]]] = []
        self._ids = 0
        self.rpc_results: dict[str, object] = {}
        self.calls: list[dict] = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = copy.deepcopy(data)

    def set_rpc_result(self, name: str, data):
        """Configure the value returned by an RPC."""
        self.rpc_results[name] = data

    def fail_on(self, table_name: str, op: str, when: Optional[Callable] = None):
        """
        Make matching queries raise.

        Args:
            table_name: Table (or RPC) name
            op: select, insert, update, delete or rpc
            when: Optional predicate called with (payload, filters)
        """
        self._failures.append((table_name, op, when))

    def raise_if_failing(self, table_name: str, op: str, payload, filters):
        for name, failing_op, when in self._failures:
            if name == table_name and failing_op == op and (when is None or when(payload, filters)):
                raise Exception(f"simulated {op} failure on {table_name}")

    def record(self, table_name: str, op: str, payload, filters):
        self.calls.append({
            "table": table_name,
            "op": op,
            "payload": copy.deepcopy(payload),
            "filters": list(filters),
        })

    def calls_for(self, table_name: str, op: Optional[str] = None) -> list[dict]:
        """Recorded calls for a table, optionally of one operation."""
        return [
            call for call in self.calls
            if call["table"] == table_name and (op is None or call["op"] == op)
        ]

    def rows(self, table_name: str) -> list[dict]:
        """Live rows of a table."""
        return self._tables.setdefault(table_name, [])

    def next_id(self, table_name: str) -> str:
        self._ids += 1
        return f"{table_name}-new-{self._ids}"

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return MockSupabaseTable(self, name)

    def rpc(self, name: str, params=None) -> MockRpcCall:
        return MockRpcCall(self, name, params)


# ===================
# FIXTURES
# ===================

CLIENT_PATCHES = (
    "config.database.get_supabase_client",
    "services.product_service.get_supabase_client",
    "services.category_service.get_supabase_client",
    "services.color_service.get_supabase_client",
    "services.order_service.get_admin_client",
    "services.draft_order_service.get_admin_client",
    "services.question_service.get_admin_client",
    "services.user_service.get_admin_client",
    "services.vendor_service.get_admin_client",
    "services.purchase_order_service.get_admin_client",
)

SERVICE_SINGLETONS = (
    "services.product_service._product_service",
    "services.category_service._category_service",
    "services.color_service._color_service",
    "services.order_service._order_service",
    "services.draft_order_service._draft_order_service",
    "services.question_service._question_service",
    "services.user_service._user_service",
    "services.vendor_service._vendor_service",
    "services.purchase_order_service._purchase_order_service",
)


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Linen Shirt", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database clients with the mock.

    Service singletons are reset so get_x_service() builds a fresh
    instance bound to the mock.
    """
    with ExitStack() as stack:
        for target in CLIENT_PATCHES:
            stack.enter_context(patch(target, return_value=mock_supabase))
        for target in SERVICE_SINGLETONS:
            stack.enter_context(patch(target, None))
        yield mock_supabase


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.post("/api/variants/sync", json={...})
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("categories", [...])
            response = test_client_with_mock_db.get("/api/categories")
    """
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)
