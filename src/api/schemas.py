from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.components.plans import PlanLimits, PlanPolicy
from src.components.templates import TemplateConfig
from src.domain.entities import TemplateCategory, TemplateTier


class ErrorItem(BaseModel):
    code: str
    message: str
    field: str | None = None


# --- Templates ---
class TemplateFeaturesResponse(BaseModel):
    project_detail: bool
    dark_mode: bool

    model_config = ConfigDict(from_attributes=True)


class TemplateResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    preview_image: str
    category: TemplateCategory
    tier: TemplateTier
    features: TemplateFeaturesResponse
    available_pages: list[str]

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_config(cls, config: TemplateConfig) -> "TemplateResponse":
        return cls.model_validate(config)


# --- Plans ---
class LimitsResponse(BaseModel):
    plan: str
    portfolios: int
    projects: int
    images: int
    dark_mode: bool
    templates_access: list[str] | Literal["all"]
    watermark: bool
    analytics: bool

    @classmethod
    def from_limits(cls, plan: str, limits: PlanLimits) -> "LimitsResponse":
        access = limits.templates_access
        return cls(
            plan=plan,
            portfolios=limits.portfolios,
            projects=limits.projects,
            images=limits.images,
            dark_mode=limits.dark_mode,
            templates_access=access if access == "all" else sorted(access),
            watermark=limits.watermark,
            analytics=limits.analytics,
        )


class PlanPolicyResponse(BaseModel):
    pricing_mode: str
    plans: dict[str, LimitsResponse]

    @classmethod
    def from_policy(cls, policy: PlanPolicy) -> "PlanPolicyResponse":
        config = policy.config
        return cls(
            pricing_mode=config.pricing_mode,
            plans={
                plan: LimitsResponse.from_limits(plan, limits)
                for plan, limits in config.plans.items()
            },
        )


# --- Wizard ---
class SelectTemplateRequest(BaseModel):
    template_id: str


class SubmitRequest(BaseModel):
    slug: str | None = None
    publish: bool = True


# --- Portfolios ---
class ActivePagesRequest(BaseModel):
    pages: list[str] = Field(min_length=1)


class SlugChangeRequest(BaseModel):
    slug: str


class SlugCheckResponse(BaseModel):
    slug: str
    available: bool
    suggestion: str | None = None
    errors: list[ErrorItem] = []


def error_detail(
    errors: list[Any],
    *,
    upgrade_required: bool = False,
    suggestion: str | None = None,
) -> dict[str, Any]:
    """Body of a 4xx response carrying component errors."""
    detail: dict[str, Any] = {
        "errors": [
            ErrorItem(code=e.code, message=e.message, field=e.field).model_dump() for e in errors
        ]
    }
    if upgrade_required:
        detail["upgrade_required"] = True
    if suggestion is not None:
        detail["suggestion"] = suggestion
    return detail
