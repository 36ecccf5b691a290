"""
Wizard component models.

WizardDraft is the in-progress authoring state. It is deliberately a
different type from the stored Portfolio: only a successful submission at the
publish step turns it into something persistable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import (
    Account,
    Experience,
    PersonalInfo,
    Portfolio,
    Project,
    SectionName,
    Skill,
    Socials,
    Theme,
    new_id,
    utcnow,
)
from src.domain.errors import FieldError
from src.domain.state import FIRST_STEP, WizardStep


class WizardDraft(BaseModel):
    """Authoring session state; sections hold only values that passed validation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    owner_id: str
    current_step: WizardStep = FIRST_STEP
    template_id: str | None = None
    slug: str | None = None

    personal: PersonalInfo | None = None
    experience: list[Experience] | None = None
    projects: list[Project] | None = None
    skills: list[Skill] | None = None
    socials: Socials | None = None
    theme: Theme = Field(default_factory=Theme)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def section_payload(self, name: str) -> Any:
        """
        Plain data for a section, as fed back into validation.

        Sections never entered yield their empty form: lists are empty and
        socials has no channels, while a missing personal section yields {}
        which fails validation.
        """
        value = getattr(self, name)
        if value is None:
            return [] if name in ("experience", "projects", "skills") else {}
        if isinstance(value, list):
            return [item.model_dump() for item in value]
        return value.model_dump()

    def document_payload(self) -> dict[str, Any]:
        return {
            name: self.section_payload(name)
            for name in ("personal", "experience", "projects", "skills", "socials")
        }

    def filled_sections(self) -> dict[str, Any]:
        """Sections the author has entered, for preview."""
        names = ("personal", "experience", "projects", "skills", "socials")
        return {name: getattr(self, name) for name in names if getattr(self, name)}

    def image_count(self) -> int:
        photo = 1 if self.personal and self.personal.photo else 0
        return photo + sum(len(p.images) for p in self.projects or [])


@dataclass(frozen=True)
class WizardValidationError:
    code: str
    message: str
    field: str

    @classmethod
    def from_field_error(cls, err: FieldError) -> WizardValidationError:
        return cls(code=err.code, message=err.message, field=err.field)


# --- Input Models ---


@dataclass(frozen=True)
class StartInput:
    owner_id: str


@dataclass(frozen=True)
class SelectTemplateInput:
    draft: WizardDraft
    account: Account
    template_id: str


@dataclass(frozen=True)
class UpdateSectionInput:
    draft: WizardDraft
    account: Account
    section: SectionName
    payload: Any


@dataclass(frozen=True)
class NextInput:
    draft: WizardDraft


@dataclass(frozen=True)
class PrevInput:
    draft: WizardDraft


@dataclass(frozen=True)
class ResetInput:
    draft: WizardDraft


@dataclass(frozen=True)
class SubmitInput:
    draft: WizardDraft
    account: Account
    slug: str | None = None
    publish: bool = True


# --- Output Models ---


@dataclass(frozen=True)
class WizardOutput:
    """
    Result of a wizard action.

    On failure draft is the unchanged input draft. On a successful submit the
    draft is complete and portfolio carries the stored result.
    """

    draft: WizardDraft
    errors: list[WizardValidationError] = field(default_factory=list)
    success: bool = True
    portfolio: Portfolio | None = None
    suggestion: str | None = None
    upgrade_required: bool = False
