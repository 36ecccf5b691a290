from typing import Any

from src.domain.entities import Actor
from src.domain.errors import PermissionDeniedError


def owns(actor: Actor, resource: Any) -> bool:
    if not hasattr(resource, "owner_id"):
        return False
    return str(resource.owner_id) == str(actor.account_id)


def can_manage(actor: Actor, resource: Any) -> bool:
    """
    Whether the actor may mutate or delete the resource.

    Order of precedence:
    1. Admins may manage anything
    2. Otherwise only the owning account
    """
    if actor.is_admin:
        return True
    return owns(actor, resource)


def ensure_can_manage(actor: Actor, resource: Any) -> None:
    """Raises PermissionDeniedError unless can_manage() allows the actor."""
    if not can_manage(actor, resource):
        raise PermissionDeniedError(
            f"Account {actor.account_id} may not modify this portfolio"
        )
