"""
Portfolios component unit tests.

Owner dashboard operations: listing, section edits under plan limits, page
selection and the slug-affecting lifecycle delegated to the resolver.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_store import InMemoryDocumentStore
from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.components.plans import PlanPolicyStore
from src.components.portfolios import (
    ChangeSlugInput,
    DeletePortfolioInput,
    GetPortfolioInput,
    ListPortfoliosInput,
    PortfolioService,
    PublishPortfolioInput,
    SetActivePagesInput,
    UpdateSectionInput,
    run,
    run_list,
)
from src.components.publish import PortfolioDraft, PublishingResolver
from src.components.templates import create_default_catalog
from src.domain.entities import Account, Actor, ContentDocument, PersonalInfo, Portfolio
from src.domain.errors import (
    CapabilityError,
    ContentValidationError,
    NotFoundError,
    PermissionDeniedError,
)

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

OWNER = Actor(account_id="acct-1")
STRANGER = Actor(account_id="acct-2")
ADMIN = Actor(account_id="admin-1", is_admin=True)


def project(idx: int, images: int = 0) -> dict[str, Any]:
    return {
        "id": f"p{idx}",
        "title": f"Project {idx}",
        "short_description": "A project worth describing at length.",
        "techs": ["Python"],
        "images": [f"https://cdn.example.com/{idx}/{n}.png" for n in range(images)],
    }


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repo(store: InMemoryDocumentStore) -> PortfolioDocumentRepo:
    return PortfolioDocumentRepo(store)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def resolver(repo: PortfolioDocumentRepo, clock: FixedClock) -> PublishingResolver:
    return PublishingResolver(repo=repo, clock=clock)


@pytest.fixture
def accounts(store: InMemoryDocumentStore) -> AccountDocumentRepo:
    accounts = AccountDocumentRepo(store)
    accounts.save(Account(id="acct-1", plan="free"))
    accounts.save(Account(id="acct-2", plan="pro"))
    return accounts


@pytest.fixture
def service(
    repo: PortfolioDocumentRepo,
    accounts: AccountDocumentRepo,
    resolver: PublishingResolver,
    clock: FixedClock,
) -> PortfolioService:
    return PortfolioService(
        repo=repo,
        accounts=accounts,
        catalog=create_default_catalog(),
        policies=PlanPolicyStore(),
        lifecycle=resolver,
        clock=clock,
    )


@pytest.fixture
def published(resolver: PublishingResolver) -> Portfolio:
    return resolver.publish(
        PortfolioDraft(
            owner_id="acct-1",
            template_id="devfolio",
            slug="ada",
            data=ContentDocument(
                personal=PersonalInfo(
                    name="Ada Lovelace", title="Engineer", bio="Building things."
                )
            ),
            active_pages=("home", "about", "projects", "contact"),
        )
    )


# --- Reads ---


class TestReads:
    def test_owner_lists_newest_first(
        self, service: PortfolioService, resolver: PublishingResolver, clock: FixedClock,
        published: Portfolio,
    ) -> None:
        clock.advance(timedelta(minutes=5))
        later = resolver.publish(
            PortfolioDraft(
                owner_id="acct-1",
                template_id="minimal",
                slug="ada-two",
                data=published.data,
                active_pages=("home",),
                publish=False,
            )
        )

        listed = service.list_for(OWNER)
        assert [p.id for p in listed] == [later.id, published.id]

    def test_stranger_cannot_list_other_account(self, service: PortfolioService) -> None:
        with pytest.raises(PermissionDeniedError):
            service.list_for(STRANGER, owner_id="acct-1")

    def test_admin_lists_any_account(
        self, service: PortfolioService, published: Portfolio
    ) -> None:
        assert [p.id for p in service.list_for(ADMIN, owner_id="acct-1")] == [published.id]

    def test_get_checks_ownership(self, service: PortfolioService, published: Portfolio) -> None:
        assert service.get(OWNER, published.id) == published
        assert service.get(ADMIN, published.id) == published
        with pytest.raises(PermissionDeniedError):
            service.get(STRANGER, published.id)

    def test_get_missing(self, service: PortfolioService) -> None:
        with pytest.raises(NotFoundError):
            service.get(OWNER, "nope")


# --- Edits ---


class TestUpdateSection:
    def test_personal_update_persists(
        self, service: PortfolioService, repo: PortfolioDocumentRepo, clock: FixedClock,
        published: Portfolio,
    ) -> None:
        clock.advance(timedelta(hours=1))
        updated = service.update_section(
            OWNER,
            published.id,
            "personal",
            {"name": "Ada King", "title": "Countess", "bio": "Analytical engine notes."},
        )

        assert updated.data.personal.name == "Ada King"
        assert updated.updated_at == NOW + timedelta(hours=1)
        assert repo.get_by_id(published.id) == updated

    def test_invalid_payload(self, service: PortfolioService, published: Portfolio) -> None:
        with pytest.raises(ContentValidationError) as exc:
            service.update_section(
                OWNER, published.id, "personal", {"name": "A", "title": "Eng", "bio": "x"}
            )
        fields = {e.field for e in exc.value.field_errors}
        assert "personal.name" in fields
        assert "personal.bio" in fields

    def test_free_plan_project_quota(
        self, service: PortfolioService, published: Portfolio
    ) -> None:
        service.update_section(OWNER, published.id, "projects", [project(i) for i in range(6)])
        with pytest.raises(CapabilityError) as exc:
            service.update_section(
                OWNER, published.id, "projects", [project(i) for i in range(7)]
            )
        assert exc.value.capability == "projects"

    def test_admin_edits_are_measured_against_owner_plan(
        self, service: PortfolioService, published: Portfolio
    ) -> None:
        with pytest.raises(CapabilityError) as exc:
            service.update_section(ADMIN, published.id, "projects", [project(1, images=11)])
        assert exc.value.capability == "images"

    def test_theme_update(self, service: PortfolioService, published: Portfolio) -> None:
        updated = service.update_section(
            OWNER, published.id, "theme", {"dark_mode_enabled": True, "primary_color": "#112233"}
        )
        assert updated.theme.dark_mode_enabled is True
        assert updated.theme.primary_color == "#112233"


class TestActivePages:
    def test_home_kept_first_and_duplicates_dropped(
        self, service: PortfolioService, published: Portfolio
    ) -> None:
        updated = service.set_active_pages(
            OWNER, published.id, ["contact", "about", "contact"]
        )
        assert updated.active_pages == ["home", "contact", "about"]

    def test_unknown_page_rejected(
        self, service: PortfolioService, published: Portfolio
    ) -> None:
        with pytest.raises(ContentValidationError) as exc:
            service.set_active_pages(OWNER, published.id, ["home", "blog"])
        assert exc.value.field_errors[0].code == "unknown_page"


# --- Lifecycle ---


class TestLifecycle:
    def test_slug_change_requires_unpublish(
        self, service: PortfolioService, repo: PortfolioDocumentRepo, published: Portfolio
    ) -> None:
        with pytest.raises(ContentValidationError):
            service.change_slug(OWNER, published.id, "lovelace")

        service.unpublish(OWNER, published.id)
        renamed = service.change_slug(OWNER, published.id, "Lovelace")
        assert renamed.slug == "lovelace"

        republished = service.publish(OWNER, published.id)
        assert republished.is_published is True
        assert repo.slug_holder("lovelace") == published.id
        assert repo.slug_holder("ada") is None

    def test_publish_checks_owner_template_access(
        self, service: PortfolioService, repo: PortfolioDocumentRepo, published: Portfolio
    ) -> None:
        service.unpublish(OWNER, published.id)
        repo.update(published.id, {"template_id": "studio-pro"})

        with pytest.raises(CapabilityError) as exc:
            service.publish(OWNER, published.id)
        assert exc.value.capability == "template"

    def test_delete_releases_slug(
        self, service: PortfolioService, repo: PortfolioDocumentRepo, published: Portfolio
    ) -> None:
        service.delete(OWNER, published.id)
        assert repo.get_by_id(published.id) is None
        assert repo.slug_holder("ada") is None

    def test_stranger_cannot_delete(
        self, service: PortfolioService, repo: PortfolioDocumentRepo, published: Portfolio
    ) -> None:
        with pytest.raises(PermissionDeniedError):
            service.delete(STRANGER, published.id)
        assert repo.get_by_id(published.id) is not None


# --- Entry points ---


class TestRun:
    def test_get_ok(self, service: PortfolioService, published: Portfolio) -> None:
        out = run(service, GetPortfolioInput(actor=OWNER, portfolio_id=published.id))
        assert out.success is True
        assert out.status == "ok"
        assert out.portfolio == published

    def test_forbidden(self, service: PortfolioService, published: Portfolio) -> None:
        out = run(service, DeletePortfolioInput(actor=STRANGER, portfolio_id=published.id))
        assert out.success is False
        assert out.status == "forbidden"

    def test_not_found(self, service: PortfolioService) -> None:
        out = run(service, GetPortfolioInput(actor=OWNER, portfolio_id="missing"))
        assert out.status == "not_found"
        assert out.errors[0].code == "NOT_FOUND"

    def test_invalid_section(self, service: PortfolioService, published: Portfolio) -> None:
        out = run(
            service,
            UpdateSectionInput(
                actor=OWNER, portfolio_id=published.id, section="socials",
                payload={"email": "not-an-email"},
            ),
        )
        assert out.status == "invalid"
        assert out.errors[0].field == "socials.email"

    def test_upgrade_required(self, service: PortfolioService, published: Portfolio) -> None:
        out = run(
            service,
            UpdateSectionInput(
                actor=OWNER, portfolio_id=published.id, section="projects",
                payload=[project(i) for i in range(7)],
            ),
        )
        assert out.status == "upgrade_required"
        assert out.errors[0].code == "UPGRADE_REQUIRED"

    def test_publish_conflict_carries_suggestion(
        self, service: PortfolioService, resolver: PublishingResolver, published: Portfolio
    ) -> None:
        draft = resolver.publish(
            PortfolioDraft(
                owner_id="acct-1",
                template_id="minimal",
                slug="ada",
                data=published.data,
                active_pages=("home",),
                publish=False,
            )
        )
        out = run(service, PublishPortfolioInput(actor=OWNER, portfolio_id=draft.id))
        assert out.status == "conflict"
        assert out.suggestion == "ada-1"

    def test_pages_and_slug(self, service: PortfolioService, published: Portfolio) -> None:
        out = run(
            service,
            SetActivePagesInput(actor=OWNER, portfolio_id=published.id, pages=["about"]),
        )
        assert out.portfolio.active_pages == ["home", "about"]  # type: ignore[union-attr]

        out = run(service, ChangeSlugInput(actor=OWNER, portfolio_id=published.id, slug="x1"))
        assert out.status == "invalid"

    def test_list(self, service: PortfolioService, published: Portfolio) -> None:
        assert run_list(service, ListPortfoliosInput(actor=OWNER)).portfolios == [published]
        denied = run_list(service, ListPortfoliosInput(actor=STRANGER, owner_id="acct-1"))
        assert denied.status == "forbidden"

    def test_unknown_input(self, service: PortfolioService) -> None:
        with pytest.raises(TypeError):
            run(service, object())  # type: ignore[arg-type]
