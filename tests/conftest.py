import os
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_store import InMemoryDocumentStore
from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.store import SQLiteDocumentStore
from src.domain.entities import Account
from src.ports.store import DocumentStorePort
from src.rules.loader import load_rules
from src.rules.models import Rules

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def test_data_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def rules() -> Rules:
    # Load REAL rules from project root; tests run from there
    rules_path = Path("rules.yaml").resolve()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def sqlite_store(test_data_dir) -> SQLiteDocumentStore:
    """Document store backed by a temporary SQLite DB with real migrations applied."""
    db_path = os.path.join(test_data_dir, "folio.db")
    SQLiteMigrator(db_path, "migrations").run_migrations()
    return SQLiteDocumentStore(db_path)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, memory_store, sqlite_store) -> Iterator[DocumentStorePort]:
    """Both store adapters, for behavior that must hold on each."""
    yield memory_store if request.param == "memory" else sqlite_store


@pytest.fixture
def portfolio_repo(store: DocumentStorePort) -> PortfolioDocumentRepo:
    return PortfolioDocumentRepo(store)


@pytest.fixture
def account_repo(store: DocumentStorePort) -> AccountDocumentRepo:
    repo = AccountDocumentRepo(store)
    repo.save(Account(id="acct-free", plan="free"))
    repo.save(Account(id="acct-pro", plan="pro"))
    return repo
