"""
Publish component unit tests.

Tests for slug reservation, publishing, unpublishing and view counting.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_store import InMemoryDocumentStore
from src.adapters.repos import PortfolioDocumentRepo
from src.components.publish import (
    CheckSlugInput,
    IncrementViewsInput,
    PortfolioDraft,
    PublishingResolver,
    PublishInput,
    UnpublishInput,
    run,
)
from src.domain.entities import ContentDocument, PersonalInfo
from src.domain.errors import ConflictError, ContentValidationError, NotFoundError
from src.ports.store import StorageError

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

# --- Fixtures ---


@pytest.fixture
def repo() -> PortfolioDocumentRepo:
    return PortfolioDocumentRepo(InMemoryDocumentStore())


@pytest.fixture
def resolver(repo: PortfolioDocumentRepo) -> PublishingResolver:
    return PublishingResolver(repo=repo, clock=FixedClock(NOW))


def make_draft(slug: str = "ada", owner_id: str = "acct-1", publish: bool = True) -> PortfolioDraft:
    return PortfolioDraft(
        owner_id=owner_id,
        template_id="minimal",
        slug=slug,
        data=ContentDocument(
            personal=PersonalInfo(name="Ada Lovelace", title="Engineer", bio="Building things.")
        ),
        active_pages=("home", "about", "projects", "contact"),
        publish=publish,
    )


# --- Publish ---


class TestPublish:
    def test_publish_new_portfolio(
        self, resolver: PublishingResolver, repo: PortfolioDocumentRepo
    ) -> None:
        portfolio = resolver.publish(make_draft())

        assert portfolio.is_published is True
        assert portfolio.slug == "ada"
        assert portfolio.views == 0
        assert portfolio.created_at == NOW
        assert portfolio.seo.title == "Ada Lovelace - Engineer"
        assert portfolio.seo.description == "Building things."
        assert repo.slug_holder("ada") == portfolio.id
        assert repo.get_published_by_slug("ada") == portfolio

    def test_slug_is_normalized(self, resolver: PublishingResolver) -> None:
        portfolio = resolver.publish(make_draft(slug="  Ada_Lovelace!! "))
        assert portfolio.slug == "adalovelace"

    def test_invalid_slug_rejected(self, resolver: PublishingResolver) -> None:
        with pytest.raises(ContentValidationError) as exc:
            resolver.publish(make_draft(slug="ab"))
        assert exc.value.field_errors[0].code == "slug_too_short"

    def test_taken_slug_conflicts_with_suggestion(self, resolver: PublishingResolver) -> None:
        resolver.publish(make_draft())
        with pytest.raises(ConflictError) as exc:
            resolver.publish(make_draft(owner_id="acct-2"))
        assert exc.value.slug == "ada"
        assert exc.value.suggestion == "ada-1"

    def test_drafts_may_share_a_slug(
        self, resolver: PublishingResolver, repo: PortfolioDocumentRepo
    ) -> None:
        first = resolver.publish(make_draft(publish=False))
        second = resolver.publish(make_draft(owner_id="acct-2", publish=False))

        assert not first.is_published and not second.is_published
        assert repo.slug_holder("ada") is None

    def test_failed_write_releases_reservation(self) -> None:
        repo = Mock(wraps=PortfolioDocumentRepo(InMemoryDocumentStore()))
        repo.create.side_effect = StorageError("disk full")
        resolver = PublishingResolver(repo=repo, clock=FixedClock(NOW))

        with pytest.raises(StorageError):
            resolver.publish(make_draft())

        assert repo.slug_holder("ada") is None

    def test_concurrent_publish_same_slug(self, resolver: PublishingResolver) -> None:
        def attempt(i: int) -> str:
            try:
                resolver.publish(make_draft(owner_id=f"acct-{i}"))
                return "ok"
            except ConflictError:
                return "conflict"

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(8)))

        assert results.count("ok") == 1
        assert results.count("conflict") == 7


# --- Unpublish / republish / slug changes ---


class TestLifecycle:
    def test_unpublish_releases_slug(
        self, resolver: PublishingResolver, repo: PortfolioDocumentRepo
    ) -> None:
        portfolio = resolver.publish(make_draft())
        updated = resolver.unpublish(portfolio.id)

        assert updated.is_published is False
        assert repo.slug_holder("ada") is None
        # another account can now claim it
        other = resolver.publish(make_draft(owner_id="acct-2"))
        assert other.slug == "ada"

    def test_publish_existing_conflicts_when_slug_claimed(
        self, resolver: PublishingResolver
    ) -> None:
        draft = resolver.publish(make_draft(publish=False))
        resolver.publish(make_draft(owner_id="acct-2"))

        with pytest.raises(ConflictError):
            resolver.publish_existing(draft.id)

    def test_publish_existing(self, resolver: PublishingResolver) -> None:
        draft = resolver.publish(make_draft(publish=False))
        published = resolver.publish_existing(draft.id)
        assert published.is_published is True

    def test_change_slug_only_while_unpublished(self, resolver: PublishingResolver) -> None:
        portfolio = resolver.publish(make_draft())
        with pytest.raises(ContentValidationError) as exc:
            resolver.change_slug(portfolio.id, "ada-2")
        assert exc.value.field_errors[0].code == "slug_immutable"

        resolver.unpublish(portfolio.id)
        renamed = resolver.change_slug(portfolio.id, "Ada Two")
        assert renamed.slug == "adatwo"

    def test_delete_releases_slug(
        self, resolver: PublishingResolver, repo: PortfolioDocumentRepo
    ) -> None:
        portfolio = resolver.publish(make_draft())
        resolver.delete(portfolio.id)

        assert repo.get_by_id(portfolio.id) is None
        assert repo.slug_holder("ada") is None

    def test_unknown_portfolio(self, resolver: PublishingResolver) -> None:
        with pytest.raises(NotFoundError):
            resolver.unpublish("missing")


# --- Slug checks ---


class TestCheckSlug:
    def test_available(self, resolver: PublishingResolver) -> None:
        check = resolver.check_slug("Fresh Name")
        assert check.slug == "freshname"
        assert check.available is True

    def test_taken_offers_next_free_suffix(self, resolver: PublishingResolver) -> None:
        resolver.publish(make_draft(slug="ada"))
        resolver.publish(make_draft(slug="ada-1", owner_id="acct-2"))

        check = resolver.check_slug("ada")
        assert check.available is False
        assert check.suggestion == "ada-2"

    def test_own_slug_counts_as_available(self, resolver: PublishingResolver) -> None:
        portfolio = resolver.publish(make_draft())
        assert resolver.check_slug("ada", portfolio.id).available is True

    def test_invalid_candidate(self, resolver: PublishingResolver) -> None:
        check = resolver.check_slug("!!")
        assert check.available is False
        assert check.errors


# --- Views ---


class TestViews:
    def test_increment_is_monotonic(self, resolver: PublishingResolver) -> None:
        portfolio = resolver.publish(make_draft())
        assert resolver.increment_views(portfolio.id) == 1
        assert resolver.increment_views(portfolio.id) == 2

    def test_concurrent_increments_not_lost(
        self, resolver: PublishingResolver, repo: PortfolioDocumentRepo
    ) -> None:
        portfolio = resolver.publish(make_draft())
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: resolver.increment_views(portfolio.id), range(100)))
        assert repo.get_by_id(portfolio.id).views == 100  # type: ignore[union-attr]


# --- Entry point ---


class TestRun:
    def test_publish_output(self, resolver: PublishingResolver) -> None:
        out = run(resolver, PublishInput(draft=make_draft()))
        assert out.success
        assert out.portfolio is not None

    def test_conflict_output_carries_suggestion(self, resolver: PublishingResolver) -> None:
        run(resolver, PublishInput(draft=make_draft()))
        out = run(resolver, PublishInput(draft=make_draft(owner_id="acct-2")))
        assert not out.success
        assert out.errors[0].code == "SLUG_TAKEN"
        assert out.suggestion == "ada-1"  # type: ignore[union-attr]

    def test_validation_output(self, resolver: PublishingResolver) -> None:
        out = run(resolver, PublishInput(draft=make_draft(slug="x")))
        assert not out.success
        assert out.errors[0].field == "slug"

    def test_unpublish_unknown(self, resolver: PublishingResolver) -> None:
        out = run(resolver, UnpublishInput(portfolio_id="nope"))
        assert not out.success
        assert out.errors[0].code == "NOT_FOUND"

    def test_check_and_views(self, resolver: PublishingResolver) -> None:
        assert run(resolver, CheckSlugInput(candidate="hello")).success
        assert not run(resolver, IncrementViewsInput(portfolio_id="nope")).success

    def test_unknown_input(self, resolver: PublishingResolver) -> None:
        with pytest.raises(TypeError):
            run(resolver, "publish")  # type: ignore[arg-type]
