"""Wizard component port definitions."""

from __future__ import annotations

from typing import Protocol

from src.components.publish import PortfolioDraft
from src.domain.entities import Portfolio

from .models import WizardDraft


class PortfolioCounterPort(Protocol):
    def count_by_owner(self, owner_id: str) -> int:
        """Number of portfolios (published or not) the account already has."""
        ...


class PublisherPort(Protocol):
    """Hand-off target for a validated draft, normally the Publishing Resolver."""

    def publish(self, draft: PortfolioDraft) -> Portfolio: ...


class DraftStorePort(Protocol):
    """Session-scoped storage of in-progress drafts."""

    def get(self, draft_id: str) -> WizardDraft | None: ...

    def save(self, draft: WizardDraft) -> None: ...

    def discard(self, draft_id: str) -> None: ...
