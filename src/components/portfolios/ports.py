"""Portfolios component port definitions."""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.entities import Account, Portfolio


class PortfolioRepoPort(Protocol):
    def get_by_id(self, portfolio_id: str) -> Portfolio | None: ...

    def list_by_owner(self, owner_id: str) -> list[Portfolio]:
        """Owner's portfolios, most recently updated first."""
        ...

    def update(self, portfolio_id: str, fields: dict[str, Any]) -> Portfolio: ...


class AccountRepoPort(Protocol):
    def get_by_id(self, account_id: str) -> Account | None: ...


class LifecyclePort(Protocol):
    """Slug-aware transitions, normally the Publishing Resolver."""

    def publish_existing(self, portfolio_id: str) -> Portfolio: ...

    def unpublish(self, portfolio_id: str) -> Portfolio: ...

    def change_slug(self, portfolio_id: str, candidate: str) -> Portfolio: ...

    def delete(self, portfolio_id: str) -> None: ...
