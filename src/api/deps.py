import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from src.adapters.clock import SystemClock
from src.adapters.draft_store import InMemoryDraftStore
from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.store import SQLiteDocumentStore
from src.api.auth_utils import decode_access_token
from src.components.plans import PlanPolicy, PlanPolicyStore, load_config_from_rules
from src.components.portfolios import PortfolioService
from src.components.publish import PublishingResolver
from src.components.render import TemplateRenderer
from src.components.templates import TemplateCatalog, create_default_catalog
from src.components.wizard import AuthoringWizard
from src.domain.entities import Account, Actor
from src.ports.clock import ClockPort
from src.ports.store import DocumentStorePort
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("FOLIO_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "folio.db")
        self.migrations_dir = self.base_dir / "migrations"
        self.rules_path = Path(os.environ.get("FOLIO_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Storage ---
@lru_cache
def get_store() -> DocumentStorePort:
    """SQLite document store with migrations applied; created once per process."""
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, str(settings.migrations_dir)).run_migrations()
    if applied:
        logger.info("Applied %d migration(s) to %s", applied, settings.db_path)
    return SQLiteDocumentStore(settings.db_path)


def get_portfolio_repo(store: DocumentStorePort = Depends(get_store)) -> PortfolioDocumentRepo:
    return PortfolioDocumentRepo(store)


def get_account_repo(store: DocumentStorePort = Depends(get_store)) -> AccountDocumentRepo:
    return AccountDocumentRepo(store)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> ClockPort:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# Wizard drafts are held in process, keyed by draft id
_draft_store_instance: InMemoryDraftStore | None = None


def get_draft_store() -> InMemoryDraftStore:
    """Get draft store singleton."""
    global _draft_store_instance
    if _draft_store_instance is None:
        _draft_store_instance = InMemoryDraftStore()
    return _draft_store_instance


# --- Component Services ---
@lru_cache
def get_catalog() -> TemplateCatalog:
    return create_default_catalog()


@lru_cache
def get_plan_policies() -> PlanPolicyStore:
    return PlanPolicyStore(PlanPolicy(load_config_from_rules(get_rules())))


def get_resolver(
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> PublishingResolver:
    return PublishingResolver(repo=repo, clock=clock, slug_rules=rules.slugs)


def get_renderer(
    catalog: TemplateCatalog = Depends(get_catalog),
    resolver: PublishingResolver = Depends(get_resolver),
    rules: Rules = Depends(get_rules),
) -> TemplateRenderer:
    return TemplateRenderer(
        catalog,
        view_counter=resolver,
        count_views=rules.rendering.count_views,
        watermark_text=rules.rendering.watermark_text,
    )


def get_wizard(
    catalog: TemplateCatalog = Depends(get_catalog),
    policies: PlanPolicyStore = Depends(get_plan_policies),
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    resolver: PublishingResolver = Depends(get_resolver),
    rules: Rules = Depends(get_rules),
) -> AuthoringWizard:
    return AuthoringWizard(
        catalog=catalog,
        policies=policies,
        portfolios=repo,
        publisher=resolver,
        slug_rules=rules.slugs,
    )


def get_portfolio_service(
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    accounts: AccountDocumentRepo = Depends(get_account_repo),
    catalog: TemplateCatalog = Depends(get_catalog),
    policies: PlanPolicyStore = Depends(get_plan_policies),
    resolver: PublishingResolver = Depends(get_resolver),
    clock: ClockPort = Depends(get_clock),
) -> PortfolioService:
    return PortfolioService(
        repo=repo,
        accounts=accounts,
        catalog=catalog,
        policies=policies,
        lifecycle=resolver,
        clock=clock,
    )


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


async def get_actor(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Actor:
    # Cookie (HttpOnly) wins over the Authorization header
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ")[1]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    account_id = payload.get("sub")
    if account_id is None or not isinstance(account_id, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return Actor(account_id=account_id, is_admin=bool(payload.get("is_admin", False)))


def get_current_account(
    actor: Actor = Depends(get_actor),
    accounts: AccountDocumentRepo = Depends(get_account_repo),
) -> Account:
    account = accounts.get_by_id(actor.account_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
        )
    return account


def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return actor
