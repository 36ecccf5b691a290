from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class PricingRules(BaseModel):
    mode: Literal["free", "freemium"] = "freemium"


class PlanLimitsRules(BaseModel):
    portfolios: int = Field(ge=0)
    projects: int = Field(ge=0)
    images: int = Field(ge=0)
    dark_mode: bool
    templates_access: list[str] | Literal["all"]
    watermark: bool
    analytics: bool = False

    model_config = ConfigDict(extra="forbid")


class PlansRules(BaseModel):
    free: PlanLimitsRules
    pro: PlanLimitsRules
    grandfathered: PlanLimitsRules


class SlugRules(BaseModel):
    min_length: int = 3
    max_length: int = 30
    max_suggestions: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def _check_bounds(self) -> "SlugRules":
        if self.min_length > self.max_length:
            raise ValueError("slugs.min_length must not exceed slugs.max_length")
        return self


class RenderingRules(BaseModel):
    count_views: bool = True
    watermark_text: str = "Made with Folio"


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    pricing: PricingRules = Field(default_factory=PricingRules)
    plans: PlansRules
    slugs: SlugRules = Field(default_factory=SlugRules)
    rendering: RenderingRules = Field(default_factory=RenderingRules)
    ops: OpsRules = Field(default_factory=OpsRules)
