"""
Publish component - slug ownership and the draft/published transition.

A published portfolio always holds the reservation of its slug in the slug
reservation collection. The reservation is taken with a single conditional
insert, so two concurrent publishes of the same slug cannot both succeed.
Unpublished portfolios hold no reservation and may share a working slug.
"""

from __future__ import annotations

import logging

from src.components.publish.models import (
    CheckSlugInput,
    CheckSlugOutput,
    IncrementViewsInput,
    IncrementViewsOutput,
    PortfolioDraft,
    PublishInput,
    PublishOutput,
    PublishValidationError,
    SlugCheck,
    UnpublishInput,
    UnpublishOutput,
)
from src.components.publish.ports import ClockPort, PortfolioRepoPort
from src.domain.entities import Portfolio, Seo, new_id
from src.domain.errors import ConflictError, ContentValidationError, NotFoundError
from src.domain.slugs import normalize_slug, suggest_slug, validate_slug
from src.ports.store import DocumentNotFoundError
from src.rules.models import SlugRules

logger = logging.getLogger(__name__)

# Type alias for all supported inputs
ResolverInput = PublishInput | UnpublishInput | CheckSlugInput | IncrementViewsInput
ResolverOutput = PublishOutput | UnpublishOutput | CheckSlugOutput | IncrementViewsOutput


def default_seo(draft: PortfolioDraft) -> Seo:
    personal = draft.data.personal
    return Seo(title=f"{personal.name} - {personal.title}", description=personal.bio)


class PublishingResolver:
    """Owns slug uniqueness, the publish transition and the view counter."""

    def __init__(
        self,
        repo: PortfolioRepoPort,
        clock: ClockPort,
        slug_rules: SlugRules | None = None,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._slug_rules = slug_rules or SlugRules()

    # --- Slugs ---

    def normalize(self, candidate: str) -> str:
        """Normalize and validate a slug candidate; raises ContentValidationError."""
        slug = normalize_slug(candidate)
        errors = validate_slug(slug, self._slug_rules.min_length, self._slug_rules.max_length)
        if errors:
            raise ContentValidationError(errors)
        return slug

    def suggest(self, slug: str, exclude_portfolio_id: str | None = None) -> str | None:
        return suggest_slug(
            slug,
            lambda s: self._repo.is_slug_taken(s, exclude_portfolio_id),
            max_attempts=self._slug_rules.max_suggestions,
            max_length=self._slug_rules.max_length,
        )

    def check_slug(self, candidate: str, portfolio_id: str | None = None) -> SlugCheck:
        """Report whether a candidate could be published, with a suggestion if taken."""
        slug = normalize_slug(candidate)
        errors = validate_slug(slug, self._slug_rules.min_length, self._slug_rules.max_length)
        if errors:
            return SlugCheck(slug=slug, available=False, errors=tuple(errors))
        if not self._repo.is_slug_taken(slug, portfolio_id):
            return SlugCheck(slug=slug, available=True)
        return SlugCheck(slug=slug, available=False, suggestion=self.suggest(slug, portfolio_id))

    def reserve_slug(self, candidate: str, portfolio_id: str) -> str:
        """
        Claim a slug for a portfolio.

        Returns the normalized slug. Raises ConflictError (with a suggested
        alternative) when another portfolio already holds it.
        """
        slug = self.normalize(candidate)
        if not self._repo.reserve_slug(slug, portfolio_id, self._clock.now()):
            suggestion = self.suggest(slug, portfolio_id)
            logger.info("Slug '%s' already taken (suggested %s)", slug, suggestion)
            raise ConflictError(slug, suggestion)
        return slug

    # --- Transitions ---

    def publish(self, draft: PortfolioDraft) -> Portfolio:
        """
        Store a validated draft, publishing it when draft.publish is set.

        The slug is reserved before the portfolio document is written, and
        released again if the write fails, so no published portfolio exists
        without its reservation.
        """
        slug = self.normalize(draft.slug)
        portfolio_id = new_id()
        now = self._clock.now()

        if draft.publish:
            slug = self.reserve_slug(slug, portfolio_id)

        portfolio = Portfolio(
            id=portfolio_id,
            owner_id=draft.owner_id,
            slug=slug,
            template_id=draft.template_id,
            is_published=draft.publish,
            active_pages=list(draft.active_pages),
            data=draft.data,
            theme=draft.theme,
            seo=draft.seo or default_seo(draft),
            views=0,
            created_at=now,
            updated_at=now,
        )
        try:
            self._repo.create(portfolio)
        except Exception:
            if draft.publish:
                self._repo.release_slug(slug, portfolio_id)
            raise

        logger.info(
            "Portfolio %s %s at '%s' for account %s",
            portfolio.id,
            "published" if portfolio.is_published else "saved as draft",
            slug,
            draft.owner_id,
        )
        return portfolio

    def publish_existing(self, portfolio_id: str) -> Portfolio:
        """Publish a stored, unpublished portfolio under its current slug."""
        portfolio = self._get(portfolio_id)
        if portfolio.is_published:
            return portfolio

        self.reserve_slug(portfolio.slug, portfolio.id)
        try:
            updated = self._repo.update(
                portfolio.id, {"is_published": True, "updated_at": self._clock.now()}
            )
        except Exception:
            self._repo.release_slug(portfolio.slug, portfolio.id)
            raise
        logger.info("Portfolio %s published at '%s'", portfolio.id, portfolio.slug)
        return updated

    def unpublish(self, portfolio_id: str) -> Portfolio:
        """Take a portfolio offline and give up its slug."""
        portfolio = self._get(portfolio_id)
        if not portfolio.is_published:
            return portfolio

        updated = self._repo.update(
            portfolio.id, {"is_published": False, "updated_at": self._clock.now()}
        )
        self._repo.release_slug(portfolio.slug, portfolio.id)
        logger.info("Portfolio %s unpublished, slug '%s' released", portfolio.id, portfolio.slug)
        return updated

    def change_slug(self, portfolio_id: str, candidate: str) -> Portfolio:
        """Rename an unpublished portfolio's slug; published slugs are immutable."""
        portfolio = self._get(portfolio_id)
        if portfolio.is_published:
            raise ContentValidationError.single(
                "slug", "slug_immutable", "Unpublish the portfolio before changing its slug"
            )
        slug = self.normalize(candidate)
        return self._repo.update(portfolio.id, {"slug": slug, "updated_at": self._clock.now()})

    def delete(self, portfolio_id: str) -> None:
        portfolio = self._get(portfolio_id)
        self._repo.delete(portfolio.id)
        # release is a no-op unless this portfolio holds the reservation
        self._repo.release_slug(portfolio.slug, portfolio.id)
        logger.info("Portfolio %s deleted", portfolio.id)

    def increment_views(self, portfolio_id: str) -> int:
        """Atomically add one view; returns the new count."""
        try:
            return self._repo.increment_views(portfolio_id)
        except DocumentNotFoundError:
            raise NotFoundError(f"Portfolio {portfolio_id} not found") from None

    def _get(self, portfolio_id: str) -> Portfolio:
        portfolio = self._repo.get_by_id(portfolio_id)
        if portfolio is None:
            raise NotFoundError(f"Portfolio {portfolio_id} not found")
        return portfolio


# --- Component Entry Points ---


def _errors_from(exc: ContentValidationError) -> list[PublishValidationError]:
    return [PublishValidationError.from_field_error(e) for e in exc.field_errors]


def run_publish(resolver: PublishingResolver, input_data: PublishInput) -> PublishOutput:
    try:
        portfolio = resolver.publish(input_data.draft)
    except ContentValidationError as e:
        return PublishOutput(portfolio=None, errors=_errors_from(e), success=False)
    except ConflictError as e:
        return PublishOutput(
            portfolio=None,
            errors=[PublishValidationError(code="SLUG_TAKEN", message=str(e), field="slug")],
            success=False,
            suggestion=e.suggestion,
        )
    return PublishOutput(portfolio=portfolio, errors=[], success=True)


def run_unpublish(resolver: PublishingResolver, input_data: UnpublishInput) -> UnpublishOutput:
    try:
        portfolio = resolver.unpublish(input_data.portfolio_id)
    except NotFoundError:
        return UnpublishOutput(
            portfolio=None,
            errors=[
                PublishValidationError(
                    code="NOT_FOUND", message="Portfolio not found", field="portfolio_id"
                )
            ],
            success=False,
        )
    return UnpublishOutput(portfolio=portfolio, errors=[], success=True)


def run_check_slug(resolver: PublishingResolver, input_data: CheckSlugInput) -> CheckSlugOutput:
    check = resolver.check_slug(input_data.candidate, input_data.portfolio_id)
    return CheckSlugOutput(check=check, success=not check.errors)


def run_increment_views(
    resolver: PublishingResolver, input_data: IncrementViewsInput
) -> IncrementViewsOutput:
    try:
        views = resolver.increment_views(input_data.portfolio_id)
    except NotFoundError:
        return IncrementViewsOutput(
            views=0,
            errors=[
                PublishValidationError(
                    code="NOT_FOUND", message="Portfolio not found", field="portfolio_id"
                )
            ],
            success=False,
        )
    return IncrementViewsOutput(views=views, errors=[], success=True)


def run(resolver: PublishingResolver, input_data: ResolverInput) -> ResolverOutput:
    """Main dispatcher - routes to the handler for the input type."""
    if isinstance(input_data, PublishInput):
        return run_publish(resolver, input_data)
    elif isinstance(input_data, UnpublishInput):
        return run_unpublish(resolver, input_data)
    elif isinstance(input_data, CheckSlugInput):
        return run_check_slug(resolver, input_data)
    elif isinstance(input_data, IncrementViewsInput):
        return run_increment_views(resolver, input_data)
    else:
        raise TypeError(f"Unknown input type: {type(input_data)}")
