"""
Templates component models.

Catalog metadata for each template and the page value a template renders.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import TemplateCategory, TemplateTier

HOME_PAGE = "home"
PROJECTS_PAGE = "projects"
STANDARD_PAGES: tuple[str, ...] = ("home", "about", "projects", "contact")


@dataclass(frozen=True)
class TemplateFeatures:
    project_detail: bool = False
    dark_mode: bool = False


@dataclass(frozen=True)
class TemplateConfig:
    """
    Catalog entry for a template.

    available_pages is ordered and always starts with the landing page "home".
    """

    id: str
    name: str
    slug: str
    description: str
    preview_image: str
    category: TemplateCategory
    tier: TemplateTier
    features: TemplateFeatures
    available_pages: tuple[str, ...] = STANDARD_PAGES

    def __post_init__(self) -> None:
        if not self.available_pages or self.available_pages[0] != HOME_PAGE:
            raise ValueError(f"Template '{self.id}' must list '{HOME_PAGE}' as its first page")

    def supports_page(self, page: str) -> bool:
        return page in self.available_pages


@dataclass(frozen=True)
class PageRef:
    """
    A requested page name split into its top-level page and optional entity.

    "projects/abc" -> PageRef(page="projects", entity_id="abc")
    """

    page: str
    entity_id: str | None = None

    @classmethod
    def parse(cls, page_name: str) -> PageRef:
        name = page_name.strip().strip("/") or HOME_PAGE
        base, _, rest = name.partition("/")
        return cls(page=base, entity_id=rest or None)

    @property
    def is_sub_resource(self) -> bool:
        return self.entity_id is not None

    def __str__(self) -> str:
        return f"{self.page}/{self.entity_id}" if self.entity_id else self.page


@dataclass(frozen=True)
class RenderedPage:
    """Output of a template implementation."""

    template_id: str
    page: str
    title: str
    html: str
    content_type: str = "text/html; charset=utf-8"
