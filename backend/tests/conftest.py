"""Pytest configuration and fixtures for chat admin tests."""

import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault(
    "FIREBASE_CREDENTIALS", '{"type":"service_account","project_id":"test"}'
)
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")
os.environ.setdefault("HOOK_SECRET", "test-hook-secret")

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from db import FirestoreService  # noqa: E402
from services.authorization import AdminPolicy, CallerIdentity  # noqa: E402
from tests.fakes import APP_ID, FakeFirestore, FakeIdentityService  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory Firestore."""
    return FakeFirestore()


@pytest.fixture
def firestore(store):
    """Firestore service bound to the in-memory store."""
    return FirestoreService(client=store, app_id=APP_ID)


@pytest.fixture
def identity():
    """Empty in-memory identity directory."""
    return FakeIdentityService()


@pytest.fixture
def policy():
    """Policy with a single admin email and the default admin claim."""
    return AdminPolicy(admin_emails=frozenset({"admin@example.com"}), admin_claim="admin")


@pytest.fixture
def admin_caller():
    return CallerIdentity(
        uid="admin-uid", email="admin@example.com", claims={"email_verified": True}
    )


@pytest.fixture
def user_caller():
    return CallerIdentity(uid="user-uid", email="someone@example.com")
