"""
Portfolios component - owner dashboard over stored portfolios.

Only the owning account or an admin may read or change a portfolio here.
Content edits go through the same section validation and plan limits as the
authoring wizard, measured against the owner's plan (not the admin's).
Slug-affecting transitions are delegated to the Publishing Resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from src.components.plans import (
    PlanLimits,
    PlanPolicyStore,
    ensure_dark_mode,
    ensure_image_quota,
    ensure_project_quota,
    ensure_template_access,
)
from src.components.templates import HOME_PAGE, TemplateCatalog
from src.domain.entities import Account, Actor, Portfolio
from src.domain.errors import (
    CapabilityError,
    ConflictError,
    ContentValidationError,
    NotFoundError,
    PermissionDeniedError,
    TemplateMissingError,
)
from src.domain.policy import ensure_can_manage
from src.domain.sections import validate_section
from src.ports.clock import ClockPort

from .models import (
    ChangeSlugInput,
    DeletePortfolioInput,
    GetPortfolioInput,
    ListPortfoliosInput,
    PortfolioListOutput,
    PortfolioOutput,
    PortfolioValidationError,
    PublishPortfolioInput,
    SetActivePagesInput,
    UnpublishPortfolioInput,
    UpdateSectionInput,
)
from .ports import AccountRepoPort, LifecyclePort, PortfolioRepoPort

logger = logging.getLogger(__name__)


class PortfolioService:
    def __init__(
        self,
        repo: PortfolioRepoPort,
        accounts: AccountRepoPort,
        catalog: TemplateCatalog,
        policies: PlanPolicyStore,
        lifecycle: LifecyclePort,
        clock: ClockPort,
    ) -> None:
        self._repo = repo
        self._accounts = accounts
        self._catalog = catalog
        self._policies = policies
        self._lifecycle = lifecycle
        self._clock = clock

    # --- Reads ---

    def list_for(self, actor: Actor, owner_id: str | None = None) -> list[Portfolio]:
        """Portfolios of owner_id (default: the actor), most recently updated first."""
        target = owner_id or actor.account_id
        if target != actor.account_id and not actor.is_admin:
            raise PermissionDeniedError(f"Account {actor.account_id} may not list {target}")
        return self._repo.list_by_owner(target)

    def get(self, actor: Actor, portfolio_id: str) -> Portfolio:
        portfolio = self._repo.get_by_id(portfolio_id)
        if portfolio is None:
            raise NotFoundError(f"Portfolio {portfolio_id} not found")
        ensure_can_manage(actor, portfolio)
        return portfolio

    # --- Edits ---

    def update_section(
        self, actor: Actor, portfolio_id: str, section: str, payload: Any
    ) -> Portfolio:
        portfolio = self.get(actor, portfolio_id)
        result = validate_section(section, payload)
        if not result.ok:
            raise ContentValidationError(list(result.field_errors))

        limits = self._owner_limits(portfolio)
        if section == "theme":
            if result.value.dark_mode_enabled:
                ensure_dark_mode(limits, self._template_grants_dark_mode(portfolio))
            return self._save(portfolio.id, theme=result.value)

        data = portfolio.data.model_copy(update={section: result.value})
        ensure_project_quota(limits, len(data.projects))
        ensure_image_quota(limits, data.image_count())
        return self._save(portfolio.id, data=data)

    def set_active_pages(self, actor: Actor, portfolio_id: str, pages: list[str]) -> Portfolio:
        """
        Replace the active pages.

        Pages must be offered by the template; duplicates are dropped and the
        landing page is always kept, in first position.
        """
        portfolio = self.get(actor, portfolio_id)
        template = self._catalog.get_by_id(portfolio.template_id)
        if template is None:
            raise TemplateMissingError(portfolio.id, portfolio.template_id)

        unknown = [p for p in pages if not template.supports_page(p)]
        if unknown:
            raise ContentValidationError.single(
                "pages", "unknown_page", f"Template does not offer: {', '.join(unknown)}"
            )
        ordered = [HOME_PAGE] + [p for p in dict.fromkeys(pages) if p != HOME_PAGE]
        return self._save(portfolio.id, active_pages=ordered)

    # --- Lifecycle ---

    def change_slug(self, actor: Actor, portfolio_id: str, slug: str) -> Portfolio:
        portfolio = self.get(actor, portfolio_id)
        return self._lifecycle.change_slug(portfolio.id, slug)

    def publish(self, actor: Actor, portfolio_id: str) -> Portfolio:
        portfolio = self.get(actor, portfolio_id)
        limits = self._owner_limits(portfolio)
        ensure_template_access(limits, portfolio.template_id)
        ensure_project_quota(limits, len(portfolio.data.projects))
        ensure_image_quota(limits, portfolio.data.image_count())
        return self._lifecycle.publish_existing(portfolio.id)

    def unpublish(self, actor: Actor, portfolio_id: str) -> Portfolio:
        portfolio = self.get(actor, portfolio_id)
        return self._lifecycle.unpublish(portfolio.id)

    def delete(self, actor: Actor, portfolio_id: str) -> None:
        portfolio = self.get(actor, portfolio_id)
        self._lifecycle.delete(portfolio.id)

    # --- Internals ---

    def _owner_limits(self, portfolio: Portfolio) -> PlanLimits:
        account = self._accounts.get_by_id(portfolio.owner_id)
        if account is None:
            logger.warning(
                "Portfolio %s owner %s has no account; applying free plan limits",
                portfolio.id,
                portfolio.owner_id,
            )
            account = Account(id=portfolio.owner_id, plan="free")
        return self._policies.current().limits_for(account)

    def _template_grants_dark_mode(self, portfolio: Portfolio) -> bool:
        template = self._catalog.get_by_id(portfolio.template_id)
        return bool(template and template.features.dark_mode)

    def _save(self, portfolio_id: str, **fields: Any) -> Portfolio:
        return self._repo.update(portfolio_id, {**fields, "updated_at": self._clock.now()})


# --- Component Entry Points ---

SingleInput = (
    GetPortfolioInput
    | UpdateSectionInput
    | SetActivePagesInput
    | ChangeSlugInput
    | PublishPortfolioInput
    | UnpublishPortfolioInput
    | DeletePortfolioInput
)


def _error_output(exc: Exception) -> PortfolioOutput:
    if isinstance(exc, ContentValidationError):
        return PortfolioOutput(
            portfolio=None,
            errors=[
                PortfolioValidationError(code=e.code, message=e.message, field=e.field)
                for e in exc.field_errors
            ],
            success=False,
            status="invalid",
        )
    if isinstance(exc, CapabilityError):
        return PortfolioOutput(
            portfolio=None,
            errors=[
                PortfolioValidationError(
                    code="UPGRADE_REQUIRED", message=str(exc), field=exc.capability
                )
            ],
            success=False,
            status="upgrade_required",
        )
    if isinstance(exc, ConflictError):
        return PortfolioOutput(
            portfolio=None,
            errors=[PortfolioValidationError(code="SLUG_TAKEN", message=str(exc), field="slug")],
            success=False,
            status="conflict",
            suggestion=exc.suggestion,
        )
    if isinstance(exc, PermissionDeniedError):
        return PortfolioOutput(
            portfolio=None,
            errors=[
                PortfolioValidationError(
                    code="PERMISSION_DENIED", message="Access denied", field="portfolio_id"
                )
            ],
            success=False,
            status="forbidden",
        )
    return PortfolioOutput(
        portfolio=None,
        errors=[
            PortfolioValidationError(code="NOT_FOUND", message="Not found", field="portfolio_id")
        ],
        success=False,
        status="not_found",
    )


def _guarded(call: Callable[[], Portfolio | None]) -> PortfolioOutput:
    try:
        portfolio = call()
    except (
        ContentValidationError,
        CapabilityError,
        ConflictError,
        PermissionDeniedError,
        NotFoundError,
    ) as e:
        return _error_output(e)
    return PortfolioOutput(portfolio=portfolio)


def run_list(service: PortfolioService, inp: ListPortfoliosInput) -> PortfolioListOutput:
    try:
        portfolios = service.list_for(inp.actor, inp.owner_id)
    except PermissionDeniedError:
        return PortfolioListOutput(
            portfolios=[],
            errors=[
                PortfolioValidationError(
                    code="PERMISSION_DENIED", message="Access denied", field="owner_id"
                )
            ],
            success=False,
            status="forbidden",
        )
    return PortfolioListOutput(portfolios=portfolios)


def run(service: PortfolioService, inp: SingleInput) -> PortfolioOutput:
    """
    Main dispatcher for single-portfolio operations.

    IntegrityError and storage failures are not converted and propagate.
    """
    if isinstance(inp, GetPortfolioInput):
        return _guarded(lambda: service.get(inp.actor, inp.portfolio_id))
    elif isinstance(inp, UpdateSectionInput):
        return _guarded(
            lambda: service.update_section(inp.actor, inp.portfolio_id, inp.section, inp.payload)
        )
    elif isinstance(inp, SetActivePagesInput):
        return _guarded(lambda: service.set_active_pages(inp.actor, inp.portfolio_id, inp.pages))
    elif isinstance(inp, ChangeSlugInput):
        return _guarded(lambda: service.change_slug(inp.actor, inp.portfolio_id, inp.slug))
    elif isinstance(inp, PublishPortfolioInput):
        return _guarded(lambda: service.publish(inp.actor, inp.portfolio_id))
    elif isinstance(inp, UnpublishPortfolioInput):
        return _guarded(lambda: service.unpublish(inp.actor, inp.portfolio_id))
    elif isinstance(inp, DeletePortfolioInput):
        return _guarded(lambda: service.delete(inp.actor, inp.portfolio_id))
    else:
        raise TypeError(f"Unknown input type: {type(inp)}")

