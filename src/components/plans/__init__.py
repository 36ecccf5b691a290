"""
Plans component - account tier limits and entitlement checks.
"""

from .component import (
    PlanPolicy,
    PlanPolicyStore,
    ensure_dark_mode,
    ensure_image_quota,
    ensure_portfolio_quota,
    ensure_project_quota,
    ensure_template_access,
    load_config_from_rules,
    run,
)
from .models import (
    DEFAULT_PLAN_LIMITS,
    UNLIMITED,
    UNRESTRICTED_LIMITS,
    LimitsInput,
    LimitsOutput,
    PlanLimits,
    PlanPolicyConfig,
    PricingMode,
)

__all__ = [
    # Entry point
    "run",
    # Policy
    "PlanPolicy",
    "PlanPolicyStore",
    "load_config_from_rules",
    # Enforcement
    "ensure_dark_mode",
    "ensure_image_quota",
    "ensure_portfolio_quota",
    "ensure_project_quota",
    "ensure_template_access",
    # Models
    "DEFAULT_PLAN_LIMITS",
    "UNLIMITED",
    "UNRESTRICTED_LIMITS",
    "LimitsInput",
    "LimitsOutput",
    "PlanLimits",
    "PlanPolicyConfig",
    "PricingMode",
]
