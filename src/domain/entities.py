import re
from datetime import UTC, datetime
from typing import Annotated, Literal
from urllib.parse import urlparse
from uuid import uuid4

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

# --- Enums / Literals ---
PlanType = Literal["free", "pro", "grandfathered"]
TemplateTier = Literal["free", "premium"]
TemplateCategory = Literal["developer", "designer", "generic"]
SectionName = Literal["personal", "experience", "projects", "skills", "socials", "theme"]

CONTENT_SECTIONS: tuple[str, ...] = ("personal", "experience", "projects", "skills", "socials")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
HEX_COLOR_RE = r"^#[0-9A-Fa-f]{6}$"


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_url(value: str | None) -> str | None:
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Must be a valid http(s) URL")
    return value


def _check_email(value: str | None) -> str | None:
    if value is None:
        return None
    if not EMAIL_RE.match(value):
        raise ValueError("Must be a valid email address")
    return value


Url = Annotated[str, AfterValidator(_check_url)]
OptionalUrl = Annotated[str | None, BeforeValidator(_blank_to_none), AfterValidator(_check_url)]
OptionalEmail = Annotated[
    str | None, BeforeValidator(_blank_to_none), AfterValidator(_check_email)
]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]


class _Section(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


# --- Content Document ---

class PersonalInfo(_Section):
    name: str = Field(min_length=2)
    title: str = Field(min_length=2)
    bio: str = Field(min_length=10, max_length=200)
    long_bio: OptionalText = None
    location: OptionalText = None
    photo: OptionalUrl = None  # asset URL
    cv: OptionalUrl = None  # asset URL


class Experience(_Section):
    id: str = Field(default_factory=new_id, min_length=1)
    company: str = Field(min_length=2)
    position: str = Field(min_length=2)
    period: str = Field(min_length=2)
    description: str = Field(min_length=10)


class Project(_Section):
    id: str = Field(default_factory=new_id, min_length=1)
    title: str = Field(min_length=2)
    short_description: str = Field(min_length=10)
    full_description: OptionalText = None
    images: list[Url] = Field(default_factory=list)
    live_url: OptionalUrl = None
    source_url: OptionalUrl = None
    techs: list[Annotated[str, Field(min_length=1)]] = Field(min_length=1)
    featured: bool = False
    challenges: OptionalText = None
    solution: OptionalText = None


class Skill(_Section):
    name: str = Field(min_length=1)
    level: int | None = Field(default=None, ge=0, le=100)
    category: str = Field(min_length=1)


class Socials(_Section):
    email: OptionalEmail = None
    linkedin: OptionalUrl = None
    github: OptionalUrl = None
    twitter: OptionalUrl = None
    dribbble: OptionalUrl = None
    behance: OptionalUrl = None
    website: OptionalUrl = None

    def channels(self) -> dict[str, str]:
        """Return only the channels that carry a value, in declaration order."""
        return {k: v for k, v in self.model_dump().items() if v}


def _ensure_unique_ids(items: list[Experience] | list[Project]) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate id '{item.id}'")
        seen.add(item.id)


class ContentDocument(BaseModel):
    personal: PersonalInfo
    experience: list[Experience] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    socials: Socials = Field(default_factory=Socials)

    @field_validator("experience", "projects")
    @classmethod
    def _unique_ids(cls, value: list) -> list:  # type: ignore[type-arg]
        _ensure_unique_ids(value)
        return value

    def get_project(self, project_id: str) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def image_count(self) -> int:
        return sum(len(p.images) for p in self.projects) + (1 if self.personal.photo else 0)


# --- Theme ---

class ThemeColors(_Section):
    bg: str = Field(pattern=HEX_COLOR_RE)
    text: str = Field(pattern=HEX_COLOR_RE)
    accent: str = Field(pattern=HEX_COLOR_RE)


class Theme(_Section):
    dark_mode_enabled: bool = False
    primary_color: str = Field(default="#3B82F6", pattern=HEX_COLOR_RE)
    font: str = Field(default="inter", min_length=1)
    light_mode: ThemeColors = Field(
        default_factory=lambda: ThemeColors(bg="#FFFFFF", text="#000000", accent="#3B82F6")
    )
    dark_mode: ThemeColors = Field(
        default_factory=lambda: ThemeColors(bg="#0A0A0A", text="#FFFFFF", accent="#60A5FA")
    )

    def active_colors(self) -> ThemeColors:
        return self.dark_mode if self.dark_mode_enabled else self.light_mode


# --- Portfolio ---

class Seo(BaseModel):
    title: str
    description: str
    image: str | None = None


class Portfolio(BaseModel):
    id: str = Field(default_factory=new_id)
    owner_id: str
    slug: str
    template_id: str
    is_published: bool = False
    active_pages: list[str] = Field(min_length=1)
    data: ContentDocument
    theme: Theme = Field(default_factory=Theme)
    seo: Seo
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# --- Accounts ---

class GrandfatheredFeatures(BaseModel):
    """Per-field plan overrides for legacy accounts; unset fields fall through."""

    dark_mode: bool | None = None
    portfolios: int | None = Field(default=None, ge=0)
    projects: int | None = Field(default=None, ge=0)
    images: int | None = Field(default=None, ge=0)
    watermark: bool | None = None
    analytics: bool | None = None


class Account(BaseModel):
    id: str = Field(default_factory=new_id)
    plan: PlanType = "free"
    grandfathered: bool = False
    grandfathered_features: GrandfatheredFeatures | None = None
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Actor(BaseModel):
    """Already-authenticated caller as supplied by the identity provider."""

    account_id: str
    is_admin: bool = False
