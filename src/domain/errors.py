"""
Domain error taxonomy.

ContentValidationError and CapabilityError are user-correctable and are
converted to output errors by the component that raised them. NotFoundError
subclasses are surfaced publicly as a generic "not found". IntegrityError
signals inconsistent stored data and is never shown with detail.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level problem with user input."""

    field: str
    code: str
    message: str


class FolioError(Exception):
    """Base class for domain errors."""


class ContentValidationError(FolioError):
    def __init__(self, field_errors: list[FieldError]) -> None:
        self.field_errors = list(field_errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.field_errors)
        super().__init__(f"Validation failed: {summary}")

    @classmethod
    def single(cls, field: str, code: str, message: str) -> ContentValidationError:
        return cls([FieldError(field=field, code=code, message=message)])


class CapabilityError(FolioError):
    """The account's plan does not grant the requested template, feature or quota."""

    def __init__(self, capability: str, message: str) -> None:
        self.capability = capability
        super().__init__(message)


class ConflictError(FolioError):
    """Slug already claimed by another published portfolio."""

    def __init__(self, slug: str, suggestion: str | None = None) -> None:
        self.slug = slug
        self.suggestion = suggestion
        super().__init__(f"Slug '{slug}' is already taken")


class PermissionDeniedError(FolioError):
    """Actor is neither the owner nor an admin."""


class NotFoundError(FolioError):
    """Portfolio, page or entity is absent or not public."""


class PortfolioUnavailableError(NotFoundError):
    """Portfolio exists but is not published."""


class PageNotFoundError(NotFoundError):
    """Requested page is not active for the portfolio."""


class EntityNotFoundError(NotFoundError):
    """Sub-resource referenced by the page path does not exist."""


class IntegrityError(FolioError):
    """Stored data is inconsistent with the running configuration."""


class TemplateMissingError(IntegrityError):
    def __init__(self, portfolio_id: str, template_id: str) -> None:
        self.portfolio_id = portfolio_id
        self.template_id = template_id
        super().__init__(
            f"Portfolio {portfolio_id} references unknown template '{template_id}'"
        )
