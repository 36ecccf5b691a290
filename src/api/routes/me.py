from fastapi import APIRouter, Depends

from src.api.deps import get_current_account, get_plan_policies
from src.api.schemas import LimitsResponse
from src.components.plans import PlanPolicyStore
from src.domain.entities import Account

router = APIRouter()


@router.get("/limits", response_model=LimitsResponse)
def get_my_limits(
    account: Account = Depends(get_current_account),
    policies: PlanPolicyStore = Depends(get_plan_policies),
) -> LimitsResponse:
    """Effective limits of the calling account, grandfathered overrides applied."""
    limits = policies.current().limits_for(account)
    return LimitsResponse.from_limits(account.plan, limits)
