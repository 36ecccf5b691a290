"""
Plans component.

Resolves the limits an account is entitled to and enforces them. Policy
configuration is process-wide and read-only; a reload swaps the whole
snapshot so concurrent readers see either the old or the new policy, never
a mix.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType

from src.domain.entities import Account, PlanType
from src.domain.errors import CapabilityError
from src.rules.models import PlanLimitsRules, Rules

from .models import (
    UNRESTRICTED_LIMITS,
    LimitsInput,
    LimitsOutput,
    PlanLimits,
    PlanPolicyConfig,
)

logger = logging.getLogger(__name__)


class PlanPolicy:
    """Read-only resolver from account to PlanLimits."""

    def __init__(self, config: PlanPolicyConfig | None = None) -> None:
        self._config = config or PlanPolicyConfig()

    @property
    def config(self) -> PlanPolicyConfig:
        return self._config

    def base_limits(self, plan: PlanType) -> PlanLimits:
        return self._config.plans[plan]

    def limits_for(self, account: Account) -> PlanLimits:
        """
        Resolve the effective limits for an account.

        Order of precedence:
        1. Site-wide "free" pricing mode grants unrestricted limits
        2. Grandfathered overrides, field by field, over the plan's base limits
        3. The plan's base limits
        """
        if self._config.pricing_mode == "free":
            return UNRESTRICTED_LIMITS

        limits = self.base_limits(account.plan)
        overrides = account.grandfathered_features
        if account.grandfathered and overrides is not None:
            limits = limits.with_overrides(**overrides.model_dump())
        return limits


class PlanPolicyStore:
    """Holder for the current PlanPolicy supporting atomic replacement."""

    def __init__(self, policy: PlanPolicy | None = None) -> None:
        self._policy = policy or PlanPolicy()
        self._lock = threading.Lock()

    def current(self) -> PlanPolicy:
        return self._policy

    def replace(self, policy: PlanPolicy) -> None:
        with self._lock:
            self._policy = policy
        logger.info("Plan policy replaced (pricing mode: %s)", policy.config.pricing_mode)


# --- Enforcement helpers ---


def ensure_template_access(limits: PlanLimits, template_id: str) -> None:
    if not limits.allows_template(template_id):
        raise CapabilityError(
            "template",
            f"Template '{template_id}' is not available on your plan. Upgrade to unlock it.",
        )


def ensure_project_quota(limits: PlanLimits, project_count: int) -> None:
    if project_count > limits.projects:
        raise CapabilityError(
            "projects",
            f"Your plan allows up to {limits.projects} projects. Upgrade to add more.",
        )


def ensure_image_quota(limits: PlanLimits, image_count: int) -> None:
    if image_count > limits.images:
        raise CapabilityError(
            "images",
            f"Your plan allows up to {limits.images} images. Upgrade to add more.",
        )


def ensure_portfolio_quota(limits: PlanLimits, existing_count: int) -> None:
    """Raises CapabilityError if creating one more portfolio would exceed the quota."""
    if existing_count + 1 > limits.portfolios:
        raise CapabilityError(
            "portfolios",
            f"Your plan allows up to {limits.portfolios} portfolio(s). Upgrade to create more.",
        )


def ensure_dark_mode(limits: PlanLimits, template_grants_dark_mode: bool) -> None:
    if not (limits.dark_mode or template_grants_dark_mode):
        raise CapabilityError("dark_mode", "Dark mode is not available on your plan.")


# --- Configuration Loader ---


def _limits_from_rules(rules: PlanLimitsRules) -> PlanLimits:
    access = rules.templates_access
    return PlanLimits(
        portfolios=rules.portfolios,
        projects=rules.projects,
        images=rules.images,
        dark_mode=rules.dark_mode,
        templates_access="all" if access == "all" else frozenset(access),
        watermark=rules.watermark,
        analytics=rules.analytics,
    )


def load_config_from_rules(rules: Rules) -> PlanPolicyConfig:
    plans: dict[PlanType, PlanLimits] = {
        "free": _limits_from_rules(rules.plans.free),
        "pro": _limits_from_rules(rules.plans.pro),
        "grandfathered": _limits_from_rules(rules.plans.grandfathered),
    }
    return PlanPolicyConfig(pricing_mode=rules.pricing.mode, plans=MappingProxyType(plans))


def run(input_data: LimitsInput, policy: PlanPolicy | None = None) -> LimitsOutput:
    """Component entry point: resolve limits for an account."""
    if not isinstance(input_data, LimitsInput):
        raise TypeError(f"Unknown input type: {type(input_data)}")
    policy = policy or PlanPolicy()
    account = input_data.account
    return LimitsOutput(
        limits=policy.limits_for(account),
        plan=account.plan,
        grandfathered=account.grandfathered,
    )
