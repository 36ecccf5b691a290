"""
Plans component models.

Plan limits per account tier and the input/output types of the component.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Literal

from src.domain.entities import Account, PlanType

PricingMode = Literal["free", "freemium"]
TemplatesAccess = frozenset[str] | Literal["all"]

UNLIMITED = 999


@dataclass(frozen=True)
class PlanLimits:
    """Quotas and feature flags granted by a plan."""

    portfolios: int
    projects: int
    images: int
    dark_mode: bool
    templates_access: TemplatesAccess
    watermark: bool
    analytics: bool = False

    def allows_template(self, template_id: str) -> bool:
        if self.templates_access == "all":
            return True
        return template_id in self.templates_access

    def with_overrides(self, **overrides: object) -> PlanLimits:
        """Copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **updates)  # type: ignore[arg-type]


# Limits granted to everyone while the site runs in "free" pricing mode
UNRESTRICTED_LIMITS = PlanLimits(
    portfolios=UNLIMITED,
    projects=UNLIMITED,
    images=UNLIMITED,
    dark_mode=True,
    templates_access="all",
    watermark=False,
    analytics=False,
)

DEFAULT_PLAN_LIMITS: Mapping[PlanType, PlanLimits] = MappingProxyType(
    {
        "free": PlanLimits(
            portfolios=1,
            projects=6,
            images=10,
            dark_mode=False,
            templates_access=frozenset({"devfolio", "designstudio", "minimal"}),
            watermark=True,
            analytics=False,
        ),
        "pro": PlanLimits(
            portfolios=UNLIMITED,
            projects=UNLIMITED,
            images=UNLIMITED,
            dark_mode=True,
            templates_access="all",
            watermark=False,
            analytics=True,
        ),
        "grandfathered": PlanLimits(
            portfolios=1,
            projects=UNLIMITED,
            images=UNLIMITED,
            dark_mode=False,
            templates_access="all",
            watermark=True,
            analytics=False,
        ),
    }
)


@dataclass(frozen=True)
class PlanPolicyConfig:
    """Immutable policy snapshot; replaced as a whole on reload."""

    pricing_mode: PricingMode = "freemium"
    plans: Mapping[PlanType, PlanLimits] = field(default_factory=lambda: DEFAULT_PLAN_LIMITS)


# --- Input / Output ---


@dataclass(frozen=True)
class LimitsInput:
    account: Account


@dataclass(frozen=True)
class LimitsOutput:
    limits: PlanLimits
    plan: PlanType
    grandfathered: bool
