"""Publish component port definitions - protocols for dependencies."""

from datetime import datetime
from typing import Any, Protocol

from src.domain.entities import Portfolio
from src.ports.clock import ClockPort


class PortfolioRepoPort(Protocol):
    """Portfolio persistence plus slug reservations."""

    def get_by_id(self, portfolio_id: str) -> Portfolio | None: ...

    def create(self, portfolio: Portfolio) -> Portfolio: ...

    def update(self, portfolio_id: str, fields: dict[str, Any]) -> Portfolio: ...

    def delete(self, portfolio_id: str) -> bool: ...

    def increment_views(self, portfolio_id: str) -> int: ...

    def is_slug_taken(self, slug: str, exclude_portfolio_id: str | None = None) -> bool: ...

    def reserve_slug(self, slug: str, portfolio_id: str, now: datetime) -> bool:
        """Insert-if-absent claim; True when portfolio_id holds the slug afterwards."""
        ...

    def release_slug(self, slug: str, portfolio_id: str) -> bool: ...


__all__ = ["ClockPort", "PortfolioRepoPort"]
