from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.draft_store import InMemoryDraftStore
from src.adapters.memory_store import InMemoryDocumentStore
from src.adapters.repos import AccountDocumentRepo
from src.api.auth_utils import create_access_token
from src.api.deps import get_draft_store, get_store
from src.api.main import app as main_app
from src.domain.entities import Account


@pytest.fixture
def api_store() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    accounts = AccountDocumentRepo(store)
    accounts.save(Account(id="acct-free", plan="free"))
    accounts.save(Account(id="acct-pro", plan="pro"))
    accounts.save(Account(id="acct-admin", plan="pro", is_admin=True))
    return store


@pytest.fixture
def app(api_store: InMemoryDocumentStore) -> Iterator[FastAPI]:
    """Main app with storage swapped for in-memory adapters."""
    drafts = InMemoryDraftStore()
    main_app.dependency_overrides[get_store] = lambda: api_store
    main_app.dependency_overrides[get_draft_store] = lambda: drafts
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    # Not used as a context manager: startup would open the real data dir
    return TestClient(app)


def auth_headers(account_id: str, is_admin: bool = False) -> dict[str, str]:
    token = create_access_token({"sub": account_id, "is_admin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def free_headers() -> dict[str, str]:
    return auth_headers("acct-free")


@pytest.fixture
def pro_headers() -> dict[str, str]:
    return auth_headers("acct-pro")


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return auth_headers("acct-admin", is_admin=True)


@pytest.fixture
def make_headers():
    return auth_headers
