# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the parts of the supabase-py client
#   we use (table query builder + storage buckets), installed as the
#   SupabaseClient singleton
# - Provides an authenticated TestClient for route tests
# =============================================================================

import os
from datetime import datetime, timedelta, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("PUBLIC_BASE_URL", "https://md.example.com")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest

from lib.supabase_client import SupabaseClient


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeResponse:
    """Mimics postgrest APIResponse."""

    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Chainable query builder over a list of row dicts."""

    def __init__(self, fake: "FakeSupabase", table: str):
        self._fake = fake
        self._table = table
        self._op = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None
        self._single = False
        self._count = None
        self._head = False

    # -- operations ----------------------------------------------------------

    def select(self, columns="*", count=None, head=False):
        self._op = "select"
        self._count = count
        self._head = head
        return self

    def insert(self, data):
        self._op = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._op = "update"
        self._payload = data
        return self

    def delete(self):
        self._op = "delete"
        return self

    # -- modifiers -----------------------------------------------------------

    def eq(self, column, value):
        self._filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: str(row.get(column)) != str(value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def single(self):
        self._single = True
        return self

    # -- execution -----------------------------------------------------------

    def _matching(self):
        return [row for row in self._fake.tables.setdefault(self._table, []) if all(f(row) for f in self._filters)]

    def execute(self):
        if (self._table, self._op) in self._fake.fail_on:
            raise Exception(f"simulated {self._op} failure on {self._table}")

        rows = self._fake.tables.setdefault(self._table, [])

        if self._op == "insert":
            row = dict(self._payload)
            now = self._fake.tick()
            row.setdefault("id", str(uuid4()))
            row.setdefault("created_at", now)
            row.setdefault("updated_at", now)
            rows.append(row)
            return FakeResponse([dict(row)])

        if self._op == "update":
            matched = self._matching()
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])

        if self._op == "delete":
            matched = self._matching()
            for row in matched:
                rows.remove(row)
            return FakeResponse([dict(row) for row in matched])

        matched = self._matching()
        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]

        count = len(matched) if self._count else None
        if self._head:
            return FakeResponse([], count)

        if self._single:
            if len(matched) != 1:
                raise Exception("{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}")
            return FakeResponse(dict(matched[0]), count)

        return FakeResponse([dict(row) for row in matched], count)


class FakeBucket:
    """Mimics storage3 bucket file API."""

    def __init__(self, fake: "FakeSupabase", blobs: dict):
        self._fake = fake
        self._blobs = blobs

    def _check(self, op):
        if ("storage", op) in self._fake.fail_on:
            raise Exception(f"simulated storage {op} failure")

    def upload(self, path, file, file_options=None):
        self._check("upload")
        if path in self._blobs:
            raise Exception("The resource already exists")
        self._blobs[path] = bytes(file)
        return {"Key": path}

    def update(self, path, file, file_options=None):
        self._check("update")
        if path not in self._blobs:
            raise Exception("Object not found")
        self._blobs[path] = bytes(file)
        return {"Key": path}

    def download(self, path):
        self._check("download")
        if path not in self._blobs:
            raise Exception("Object not found")
        return self._blobs[path]

    def remove(self, paths):
        self._check("remove")
        return [{"name": path} for path in paths if self._blobs.pop(path, None) is not None]


class FakeStorage:
    def __init__(self, fake: "FakeSupabase"):
        self._fake = fake
        self.buckets: dict[str, dict[str, bytes]] = {}

    def from_(self, bucket):
        return FakeBucket(self._fake, self.buckets.setdefault(bucket, {}))

    def get_bucket(self, bucket):
        return {"id": bucket, "name": bucket}


class FakeSupabase:
    """
    Enough of supabase.Client for the services under test.

    Failures are injected with fail_on, e.g.
        fake.fail_on.add(("storage", "upload"))
        fake.fail_on.add(("markdown_documents", "delete"))
    """

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.storage = FakeStorage(self)
        self.auth = MagicMock()
        self.fail_on: set[tuple[str, str]] = set()
        self._clock = datetime(2025, 1, 21, 9, 0, tzinfo=timezone.utc)

    def table(self, name):
        return FakeQuery(self, name)

    def tick(self) -> str:
        """Monotonic timestamps so ordering by created_at is deterministic."""
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def rows(self, table="markdown_documents"):
        return self.tables.get(table, [])

    def blobs(self, bucket="markdown-files"):
        return self.storage.buckets.setdefault(bucket, {})


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """Install an empty FakeSupabase as the shared client."""
    fake = FakeSupabase()
    with patch.object(SupabaseClient, "_instance", fake):
        yield fake


@pytest.fixture
def owner_id():
    return uuid4()


@pytest.fixture
def other_user_id():
    return uuid4()


@pytest.fixture
def sample_markdown():
    return "# Release notes\n\n- Added sharing\n- Fixed *emphasis* rendering\n"


@pytest.fixture
def sample_document_row(owner_id):
    """A markdown_documents row as PostgREST returns it."""
    return {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "alias": None,
        "file_name": "release-notes.md",
        "user_id": str(owner_id),
        "storage_path": f"{owner_id}/release-notes.md",
        "is_public": False,
        "created_at": "2025-01-21T09:00:00+00:00",
        "updated_at": "2025-01-21T09:00:00+00:00",
    }


@pytest.fixture
def api_client(fake_supabase, owner_id):
    """TestClient signed in as owner_id."""
    from fastapi.testclient import TestClient

    from app.auth import AuthUser, get_current_user
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: AuthUser(id=owner_id, email="writer@example.com")
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(fake_supabase):
    """TestClient without credentials."""
    from fastapi.testclient import TestClient

    from app.main import app

    return TestClient(app)
