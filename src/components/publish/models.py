"""Publish component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import ContentDocument, Portfolio, Seo, Theme
from src.domain.errors import FieldError


@dataclass(frozen=True)
class PublishValidationError:
    """Error details for publish operations."""

    code: str
    message: str
    field: str

    @classmethod
    def from_field_error(cls, err: FieldError) -> PublishValidationError:
        return cls(code=err.code, message=err.message, field=err.field)


@dataclass(frozen=True)
class PortfolioDraft:
    """
    A fully validated, not yet stored portfolio.

    Only built once the whole content document has passed validation, so a
    draft that reaches the resolver is always persistable.
    """

    owner_id: str
    template_id: str
    slug: str
    data: ContentDocument
    active_pages: tuple[str, ...]
    theme: Theme = field(default_factory=Theme)
    seo: Seo | None = None
    publish: bool = True


@dataclass(frozen=True)
class SlugCheck:
    """Availability of a normalized slug candidate."""

    slug: str
    available: bool
    suggestion: str | None = None
    errors: tuple[FieldError, ...] = ()


# --- Input / Output ---


@dataclass(frozen=True)
class PublishInput:
    draft: PortfolioDraft


@dataclass(frozen=True)
class PublishOutput:
    portfolio: Portfolio | None
    errors: list[PublishValidationError]
    success: bool
    suggestion: str | None = None


@dataclass(frozen=True)
class UnpublishInput:
    portfolio_id: str


@dataclass(frozen=True)
class UnpublishOutput:
    portfolio: Portfolio | None
    errors: list[PublishValidationError]
    success: bool


@dataclass(frozen=True)
class CheckSlugInput:
    candidate: str
    portfolio_id: str | None = None


@dataclass(frozen=True)
class CheckSlugOutput:
    check: SlugCheck
    success: bool


@dataclass(frozen=True)
class IncrementViewsInput:
    portfolio_id: str


@dataclass(frozen=True)
class IncrementViewsOutput:
    views: int
    errors: list[PublishValidationError]
    success: bool
