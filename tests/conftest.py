"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from fastapi.testclient import TestClient

from audit_manager.database.supabase_client import get_admin_supabase, get_client_factory, get_supabase
from audit_manager.main import app, limiter
from audit_manager.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Fresh in-memory store and identity provider."""
    return FakeSupabase()


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides, the token cache and rate-limit counters are reset between tests."""
    app.dependency_overrides = {}
    clear_auth_cache()
    limiter.reset()
    yield
    app.dependency_overrides = {}
    clear_auth_cache()


@pytest.fixture
def test_client(fake_supabase: FakeSupabase) -> TestClient:
    """FastAPI test client wired to the fake store.

    The fake doubles as service-role client, and per-request clients are
    scoped views of it that record the bearer token they send.
    """
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_admin_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_client_factory] = lambda: fake_supabase.scoped
    return TestClient(app)


@pytest.fixture
def admin_headers(fake_supabase: FakeSupabase) -> dict:
    token = fake_supabase.create_account("admin@example.com", "Ayşe Admin", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def team_headers(fake_supabase: FakeSupabase) -> dict:
    token = fake_supabase.create_account("team@example.com", "Tarik Team", role="team")
    return {"Authorization": f"Bearer {token}"}
