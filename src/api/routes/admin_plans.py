"""
Admin plan policy API.

Switching the pricing mode or a plan's limits is an edit to `rules.yaml`
followed by a reload; the new policy replaces the old one as a whole.
Slug and rendering rules are only read at startup.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import Settings, get_plan_policies, get_settings, require_admin
from src.api.schemas import ErrorItem, PlanPolicyResponse, error_detail
from src.components.plans import PlanPolicy, PlanPolicyStore, load_config_from_rules
from src.domain.entities import Actor
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=PlanPolicyResponse)
def get_plan_policy(
    _: Actor = Depends(require_admin),
    policies: PlanPolicyStore = Depends(get_plan_policies),
) -> PlanPolicyResponse:
    return PlanPolicyResponse.from_policy(policies.current())


@router.post("/reload", response_model=PlanPolicyResponse)
def reload_plan_policy(
    actor: Actor = Depends(require_admin),
    settings: Settings = Depends(get_settings),
    policies: PlanPolicyStore = Depends(get_plan_policies),
) -> PlanPolicyResponse:
    """
    Re-read the rules file and swap in its plan limits.

    An unreadable or invalid file leaves the current policy in place (400).
    """
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.warning("Plan reload by %s rejected: %s", actor.account_id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail([ErrorItem(code="invalid_rules", message=str(e))]),
        ) from e

    policy = PlanPolicy(load_config_from_rules(rules))
    policies.replace(policy)
    logger.info("Plan policy reloaded by %s from %s", actor.account_id, settings.rules_path)
    return PlanPolicyResponse.from_policy(policy)
