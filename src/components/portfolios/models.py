"""Portfolios component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from src.domain.entities import Actor, Portfolio, SectionName

OutcomeStatus = Literal[
    "ok", "invalid", "forbidden", "not_found", "upgrade_required", "conflict"
]


@dataclass(frozen=True)
class PortfolioValidationError:
    code: str
    message: str
    field: str


# --- Input Models ---


@dataclass(frozen=True)
class ListPortfoliosInput:
    actor: Actor
    owner_id: str | None = None


@dataclass(frozen=True)
class GetPortfolioInput:
    actor: Actor
    portfolio_id: str


@dataclass(frozen=True)
class UpdateSectionInput:
    actor: Actor
    portfolio_id: str
    section: SectionName
    payload: Any


@dataclass(frozen=True)
class SetActivePagesInput:
    actor: Actor
    portfolio_id: str
    pages: list[str]


@dataclass(frozen=True)
class ChangeSlugInput:
    actor: Actor
    portfolio_id: str
    slug: str


@dataclass(frozen=True)
class PublishPortfolioInput:
    actor: Actor
    portfolio_id: str


@dataclass(frozen=True)
class UnpublishPortfolioInput:
    actor: Actor
    portfolio_id: str


@dataclass(frozen=True)
class DeletePortfolioInput:
    actor: Actor
    portfolio_id: str


# --- Output Models ---


@dataclass(frozen=True)
class PortfolioOutput:
    portfolio: Portfolio | None
    errors: list[PortfolioValidationError] = field(default_factory=list)
    success: bool = True
    status: OutcomeStatus = "ok"
    suggestion: str | None = None


@dataclass(frozen=True)
class PortfolioListOutput:
    portfolios: list[Portfolio]
    errors: list[PortfolioValidationError] = field(default_factory=list)
    success: bool = True
    status: OutcomeStatus = "ok"
