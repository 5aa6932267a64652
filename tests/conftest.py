"""Shared fixtures: a fresh SQLite file database per test."""
import pytest
from fastapi.testclient import TestClient

from fintrack.db import Database
from fintrack.main import create_app
from fintrack.services.category_store import CategoryStore
from fintrack.services.transaction_ledger import TransactionLedger
from fintrack.services.user_service import save_user


@pytest.fixture
def database(tmp_path):
    """Database with all tables created."""
    db = Database(f"sqlite:///{tmp_path / 'fintrack_test.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def ledger(database):
    return TransactionLedger(database)


@pytest.fixture
def store(database, ledger):
    return CategoryStore(database, ledger)


@pytest.fixture
def owner(database):
    return save_user(database, "Ana", "ana@example.com").id


@pytest.fixture
def other_owner(database):
    return save_user(database, "Bruno", "bruno@example.com").id


@pytest.fixture
def client(database):
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client
