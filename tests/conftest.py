import os
import sys
from pathlib import Path
from typing import Any

import pytest


# Add project root to path
root = Path(__file__).resolve().parents[1]
project_root = str(root)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Tests never talk to real backends
for _key in ("SUPABASE_URL", "SUPABASE_API_KEY", "CATALOG_API_BASE", "FEATURE_FLAGS"):
    os.environ.pop(_key, None)
os.environ["MOCK_CATALOG_SEED"] = "1234"


# =============================================================================
# FAKE SUPABASE CLIENT
# =============================================================================


class FakeResponse:
    def __init__(self, data: Any, count: int | None = None):
        self.data = data
        self.count = count


class FakeQuery:
    """Records builder calls and answers from the client's rows."""

    def __init__(self, client: "FakeSupabaseClient", table: str):
        self.client = client
        self.table = table
        self.calls: list[tuple] = []
        self.columns: tuple[str, ...] = ("*",)
        self.count_mode: str | None = None
        self.eqs: list[tuple[str, Any]] = []
        self.not_null: list[str] = []
        self.limit_n: int | None = None
        self._negate = False

    def select(self, *columns, count=None):
        self.calls.append(("select", columns, count))
        self.columns = columns
        self.count_mode = count
        return self

    def or_(self, filters):
        self.calls.append(("or_", filters))
        return self

    def in_(self, column, values):
        self.calls.append(("in_", column, list(values)))
        return self

    def gte(self, column, value):
        self.calls.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.calls.append(("lte", column, value))
        return self

    def order(self, column, desc=False):
        self.calls.append(("order", column, desc))
        return self

    def range(self, start, end):
        self.calls.append(("range", start, end))
        return self

    def eq(self, column, value):
        self.calls.append(("eq", column, value))
        self.eqs.append((column, value))
        return self

    def limit(self, n):
        self.calls.append(("limit", n))
        self.limit_n = n
        return self

    @property
    def not_(self):
        self._negate = True
        return self

    def is_(self, column, value):
        self.calls.append(("not.is_" if self._negate else "is_", column, value))
        if self._negate and value == "null":
            self.not_null.append(column)
        self._negate = False
        return self

    def execute(self):
        if self.client.error is not None:
            raise self.client.error
        rows = list(self.client.rows)
        for column, value in self.eqs:
            rows = [r for r in rows if str(r.get(column)) == str(value)]
        for column in self.not_null:
            rows = [r for r in rows if r.get(column) is not None]
        if self.columns != ("*",):
            rows = [{c: r.get(c) for c in self.columns} for r in rows]
        if self.limit_n is not None:
            rows = rows[: self.limit_n]
        count = self.client.count if self.count_mode == "exact" else None
        return FakeResponse(rows, count=count)


class FakeRpc:
    def __init__(self, client: "FakeSupabaseClient", name: str):
        self.client = client
        self.name = name

    def execute(self):
        if self.name in self.client.failing_rpcs:
            raise RuntimeError(f"rpc {self.name} failed")
        return FakeResponse(self.client.rpc_results.get(self.name))


class FakeSupabaseClient:
    def __init__(self, rows: list[dict] | None = None, count: int | None = None):
        self.rows = rows or []
        self.count = count
        self.error: Exception | None = None
        self.rpc_results: dict[str, Any] = {}
        self.failing_rpcs: set[str] = set()
        self.queries: list[FakeQuery] = []

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def rpc(self, name, params=None):
        return FakeRpc(self, name)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def catalog():
    from catalog_browser.services.data.mock_catalog import generate_catalog

    return generate_catalog(seed=42)


@pytest.fixture
def mock_source(catalog):
    from catalog_browser.services.catalog.mock_source import MockCatalogSource

    return MockCatalogSource(catalog)


@pytest.fixture
def make_settings():
    from catalog_browser.conf.config import Settings

    def _make(**overrides):
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def fake_supabase():
    return FakeSupabaseClient()


@pytest.fixture
def supabase_row():
    return {
        "id": 7,
        "name": "Globex Lamp",
        "brand": "Globex",
        "category": "Home",
        "price": "49.999",
        "rating": 4.2,
        "stock": 3,
        "image_url": "https://cdn.example.com/lamp.jpg",
        "description": None,
        "attributes": {"color": "Amber", "watts": 40},
    }
