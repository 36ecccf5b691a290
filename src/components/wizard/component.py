"""
Wizard component - the step-by-step authoring state machine.

Steps run Template -> Personal -> Experience -> Projects -> Skills ->
Contact -> Theme -> Publish. Moving forward requires the current step's
section to validate; moving back never validates and never drops data.
Plan limits are enforced when a template is chosen, when a section is saved,
and again in full when the publish step is submitted.

Every public method returns a WizardOutput. Validation, capability and slug
conflicts are reported as output errors and leave the draft untouched;
storage failures propagate to the caller.
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
    ensure_portfolio_quota,
    ensure_project_quota,
    ensure_template_access,
)
from src.components.publish import PortfolioDraft
from src.components.templates import TemplateCatalog, TemplateConfig
from src.domain.entities import Account, ContentDocument, utcnow
from src.domain.errors import (
    CapabilityError,
    ConflictError,
    ContentValidationError,
    PermissionDeniedError,
)
from src.domain.sections import validate_document, validate_section
from src.domain.slugs import slugify
from src.domain.state import (
    FIRST_STEP,
    TERMINAL_STEP,
    WizardAction,
    WizardStep,
    can_transition,
    section_for,
    transition,
)
from src.rules.models import SlugRules

from .models import (
    NextInput,
    PrevInput,
    ResetInput,
    SelectTemplateInput,
    StartInput,
    SubmitInput,
    UpdateSectionInput,
    WizardDraft,
    WizardOutput,
    WizardValidationError,
)
from .ports import PortfolioCounterPort, PublisherPort

logger = logging.getLogger(__name__)

WizardInput = (
    StartInput
    | SelectTemplateInput
    | UpdateSectionInput
    | NextInput
    | PrevInput
    | ResetInput
    | SubmitInput
)


class AuthoringWizard:
    def __init__(
        self,
        catalog: TemplateCatalog,
        policies: PlanPolicyStore,
        portfolios: PortfolioCounterPort,
        publisher: PublisherPort,
        slug_rules: SlugRules | None = None,
    ) -> None:
        self._catalog = catalog
        self._policies = policies
        self._portfolios = portfolios
        self._publisher = publisher
        self._slug_rules = slug_rules or SlugRules()

    # --- Actions ---

    def start(self, owner_id: str) -> WizardOutput:
        return WizardOutput(draft=WizardDraft(owner_id=owner_id))

    def select_template(
        self, draft: WizardDraft, account: Account, template_id: str
    ) -> WizardOutput:
        def apply() -> WizardDraft:
            config = self._template(template_id)
            ensure_template_access(self._limits(account), config.id)
            return self._touch(draft, template_id=config.id)

        return self._guard(draft, account, apply)

    def update_section(
        self, draft: WizardDraft, account: Account, section: str, payload: Any
    ) -> WizardOutput:
        """
        Validate a section and merge it into the draft.

        The current step is not changed. Raises KeyError for an unknown
        section name.
        """
        result = validate_section(section, payload)

        def apply() -> WizardDraft:
            if not result.ok:
                raise ContentValidationError(list(result.field_errors))
            candidate = self._touch(draft, **{section: result.value})
            self._check_content_limits(candidate, self._limits(account))
            if section == "personal" and draft.slug is None:
                candidate = candidate.model_copy(update={"slug": self._suggest_slug(candidate)})
            return candidate

        return self._guard(draft, account, apply)

    def next(self, draft: WizardDraft) -> WizardOutput:
        def apply() -> WizardDraft:
            step = draft.current_step
            if not can_transition(step, "next"):
                raise ContentValidationError.single(
                    "current_step", "no_next_step", "Already at the final step"
                )
            self._validate_step(draft, step)
            return self._move(draft, "next")

        return self._guard(draft, None, apply)

    def prev(self, draft: WizardDraft) -> WizardOutput:
        return WizardOutput(draft=self._move(draft, "prev"))

    def reset(self, draft: WizardDraft) -> WizardOutput:
        fresh = WizardDraft(id=draft.id, owner_id=draft.owner_id, created_at=draft.created_at)
        return WizardOutput(draft=fresh)

    def submit(
        self,
        draft: WizardDraft,
        account: Account,
        slug: str | None = None,
        publish: bool = True,
    ) -> WizardOutput:
        """
        Terminal step: re-validate everything, enforce limits, hand off.

        Nothing is written unless every check passes. On failure the draft
        stays at the publish step with the errors attached to the output.
        """
        self._ensure_owner(draft, account)
        try:
            portfolio_draft = self._build_portfolio_draft(draft, account, slug, publish)
            portfolio = self._publisher.publish(portfolio_draft)
        except ContentValidationError as e:
            logger.info("Wizard %s submission rejected: %s", draft.id, e)
            return self._failure(
                draft, [WizardValidationError.from_field_error(f) for f in e.field_errors]
            )
        except CapabilityError as e:
            logger.info("Wizard %s submission over plan limits: %s", draft.id, e)
            return self._capability_failure(draft, e)
        except ConflictError as e:
            logger.info("Wizard %s submission slug conflict on '%s'", draft.id, e.slug)
            return WizardOutput(
                draft=draft,
                errors=[WizardValidationError(code="SLUG_TAKEN", message=str(e), field="slug")],
                success=False,
                suggestion=e.suggestion,
            )

        completed = self._touch(draft, slug=portfolio.slug)
        return WizardOutput(draft=completed, portfolio=portfolio)

    # --- Internals ---

    def _build_portfolio_draft(
        self, draft: WizardDraft, account: Account, slug: str | None, publish: bool
    ) -> PortfolioDraft:
        if draft.current_step != TERMINAL_STEP:
            raise ContentValidationError.single(
                "current_step", "not_at_publish_step", "Complete the previous steps first"
            )
        config = self._template(draft.template_id)
        limits = self._limits(account)
        ensure_template_access(limits, config.id)

        result = validate_document(draft.document_payload())
        if not result.ok:
            raise ContentValidationError(list(result.field_errors))
        document: ContentDocument = result.value

        chosen_slug = slug if slug is not None else draft.slug
        if not chosen_slug:
            raise ContentValidationError.single(
                "slug", "missing", "Choose a slug for your portfolio"
            )

        self._check_content_limits(draft, limits)
        ensure_portfolio_quota(limits, self._portfolios.count_by_owner(account.id))

        return PortfolioDraft(
            owner_id=account.id,
            template_id=config.id,
            slug=chosen_slug,
            data=document,
            active_pages=config.available_pages,
            theme=draft.theme,
            publish=publish,
        )

    def _check_content_limits(self, draft: WizardDraft, limits: PlanLimits) -> None:
        ensure_project_quota(limits, len(draft.projects or []))
        ensure_image_quota(limits, draft.image_count())
        if draft.theme.dark_mode_enabled:
            ensure_dark_mode(limits, self._template_grants_dark_mode(draft.template_id))

    def _validate_step(self, draft: WizardDraft, step: WizardStep) -> None:
        if step == FIRST_STEP:
            if draft.template_id is None:
                raise ContentValidationError.single(
                    "template_id", "missing", "Choose a template to continue"
                )
            return
        section = section_for(step)
        if section is None:
            return
        result = validate_section(section, draft.section_payload(section))
        if not result.ok:
            raise ContentValidationError(list(result.field_errors))

    def _template(self, template_id: str | None) -> TemplateConfig:
        config = self._catalog.get_by_id(template_id) if template_id else None
        if config is None:
            raise ContentValidationError.single(
                "template_id", "unknown_template", f"Template '{template_id}' does not exist"
            )
        return config

    def _template_grants_dark_mode(self, template_id: str | None) -> bool:
        config = self._catalog.get_by_id(template_id) if template_id else None
        return bool(config and config.features.dark_mode)

    def _limits(self, account: Account) -> PlanLimits:
        return self._policies.current().limits_for(account)

    def _suggest_slug(self, draft: WizardDraft) -> str | None:
        if draft.personal is None:
            return None
        slug = slugify(draft.personal.name)[: self._slug_rules.max_length].rstrip("-")
        return slug if len(slug) >= self._slug_rules.min_length else None

    def _move(self, draft: WizardDraft, action: WizardAction) -> WizardDraft:
        return self._touch(draft, current_step=transition(draft.current_step, action))

    @staticmethod
    def _touch(draft: WizardDraft, **changes: Any) -> WizardDraft:
        return draft.model_copy(update={**changes, "updated_at": utcnow()})

    @staticmethod
    def _ensure_owner(draft: WizardDraft, account: Account) -> None:
        if draft.owner_id != account.id:
            raise PermissionDeniedError(f"Draft {draft.id} belongs to another account")

    def _guard(
        self, draft: WizardDraft, account: Account | None, apply: Callable[[], WizardDraft]
    ) -> WizardOutput:
        if account is not None:
            self._ensure_owner(draft, account)
        try:
            return WizardOutput(draft=apply())
        except ContentValidationError as e:
            return self._failure(
                draft, [WizardValidationError.from_field_error(f) for f in e.field_errors]
            )
        except CapabilityError as e:
            return self._capability_failure(draft, e)

    @staticmethod
    def _failure(draft: WizardDraft, errors: list[WizardValidationError]) -> WizardOutput:
        return WizardOutput(draft=draft, errors=errors, success=False)

    @staticmethod
    def _capability_failure(draft: WizardDraft, exc: CapabilityError) -> WizardOutput:
        return WizardOutput(
            draft=draft,
            errors=[
                WizardValidationError(
                    code="UPGRADE_REQUIRED", message=str(exc), field=exc.capability
                )
            ],
            success=False,
            upgrade_required=True,
        )


def run(wizard: AuthoringWizard, input_data: WizardInput) -> WizardOutput:
    """Main dispatcher - routes to appropriate handler based on input type."""
    if isinstance(input_data, StartInput):
        return wizard.start(input_data.owner_id)
    elif isinstance(input_data, SelectTemplateInput):
        return wizard.select_template(input_data.draft, input_data.account, input_data.template_id)
    elif isinstance(input_data, UpdateSectionInput):
        return wizard.update_section(
            input_data.draft, input_data.account, input_data.section, input_data.payload
        )
    elif isinstance(input_data, NextInput):
        return wizard.next(input_data.draft)
    elif isinstance(input_data, PrevInput):
        return wizard.prev(input_data.draft)
    elif isinstance(input_data, ResetInput):
        return wizard.reset(input_data.draft)
    elif isinstance(input_data, SubmitInput):
        return wizard.submit(
            input_data.draft, input_data.account, input_data.slug, input_data.publish
        )
    else:
        raise TypeError(f"Unknown input type: {type(input_data)}")

