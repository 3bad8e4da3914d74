# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the Supabase client (auth + tables)
# - Provides a TestClient wired to that stand-in
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from types import SimpleNamespace
from unittest.mock import patch

import pytest


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeAuthError(Exception):
    """Stands in for the errors raised by supabase auth calls."""


class FakeQuery:
    """Chainable stand-in for a postgrest query builder."""

    def __init__(self, table, op, payload=None):
        self._table = table
        self._op = op
        self._payload = payload
        self._filters = []
        self._order = None
        self._limit = None

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def execute(self):
        table = self._table
        table.calls.append(self._op)
        if table.error is not None:
            raise table.error

        if self._op == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for row in payload:
                row = dict(row)
                row.setdefault("id", table.next_id())
                table.rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted)

        matched = [r for r in table.rows if all(f(r) for f in self._filters)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return SimpleNamespace(data=[dict(r) for r in matched])

        if self._op == "delete":
            table.rows = [r for r in table.rows if r not in matched]
            return SimpleNamespace(data=[dict(r) for r in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: r.get(column), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return SimpleNamespace(data=[dict(r) for r in matched])


class FakeTable:
    """One table: rows in a list, optional error raised on every execute."""

    def __init__(self):
        self.rows = []
        self.calls = []
        self.error = None
        self._ids = 0

    def next_id(self):
        self._ids += 1
        return self._ids

    def select(self, *columns):
        return FakeQuery(self, "select")

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload)

    def delete(self):
        return FakeQuery(self, "delete")


class FakeAuth:
    """Stand-in for supabase.auth: tokens map to users, emails to passwords."""

    def __init__(self):
        self.tokens = {}
        self.passwords = {}
        self.get_user_calls = []
        self.sign_up_error = None
        self.sign_in_error = None
        self.sign_up_opens_session = True

    def get_user(self, token):
        self.get_user_calls.append(token)
        if token not in self.tokens:
            raise FakeAuthError("invalid JWT: unable to parse or verify signature")
        user = self.tokens[token]
        return SimpleNamespace(user=user)

    def sign_in_with_password(self, credentials):
        if self.sign_in_error is not None:
            raise self.sign_in_error
        email = credentials["email"]
        entry = self.passwords.get(email)
        if entry is None or entry["password"] != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        return SimpleNamespace(
            user=entry["user"],
            session=SimpleNamespace(access_token=entry["token"]),
        )

    def sign_up(self, credentials):
        if self.sign_up_error is not None:
            raise self.sign_up_error
        email = credentials["email"]
        user = SimpleNamespace(id=f"new-{len(self.passwords) + 1}", email=email)
        token = f"token-{user.id}"
        self.passwords[email] = {
            "password": credentials["password"],
            "user": user,
            "token": token,
        }
        self.tokens[token] = user
        session = SimpleNamespace(access_token=token) if self.sign_up_opens_session else None
        return SimpleNamespace(user=user, session=session)


class FakeSupabase:
    """In-memory Supabase client with the subset of the API the app uses."""

    def __init__(self):
        self.auth = FakeAuth()
        self.tables = {}

    def table(self, name):
        return self.tables.setdefault(name, FakeTable())

    def add_user(self, token, user_id, email, role=None, password=None):
        """
        Register a user with Supabase Auth.

        A profile row is only created when `role` is given.
        """
        user = SimpleNamespace(id=user_id, email=email)
        self.auth.tokens[token] = user
        if password is not None:
            self.auth.passwords[email] = {"password": password, "user": user, "token": token}
        if role is not None:
            self.table("profiles").rows.append({"id": user_id, "email": email, "role": role})
        return user


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """Patch the Supabase singleton with an in-memory fake."""
    from lib.supabase_client import SupabaseClient

    fake = FakeSupabase()
    with patch.object(SupabaseClient, "get_client", return_value=fake):
        yield fake


@pytest.fixture
def client(fake_supabase):
    """TestClient for the app, backed by the fake Supabase."""
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def customer(fake_supabase):
    """User u2 with the customer role; token 'customer-token'."""
    fake_supabase.add_user("customer-token", "u2", "u2@lvlup.com", role="customer")
    return {"Authorization": "Bearer customer-token"}


@pytest.fixture
def admin(fake_supabase):
    """User a1 with the admin role; token 'admin-token'."""
    fake_supabase.add_user("admin-token", "a1", "admin@lvlup.com", role="admin")
    return {"Authorization": "Bearer admin-token"}
