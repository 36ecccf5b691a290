"""
Template Catalog.

A static registry of template metadata paired with the implementation that
renders each template. The catalog is built once at start-up and only read
afterwards; adding a template means adding an entry and an implementation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from src.domain.entities import TemplateCategory

from .designstudio import DesignStudioTemplate
from .devfolio import DevFolioTemplate
from .minimal import MinimalTemplate
from .models import TemplateConfig, TemplateFeatures
from .ports import TemplateImplementation

BUILTIN_TEMPLATES: tuple[TemplateConfig, ...] = (
    TemplateConfig(
        id="devfolio",
        name="DevFolio",
        slug="devfolio",
        description="A clean, modern portfolio for developers with code-friendly typography.",
        preview_image="/templates/devfolio-preview.png",
        category="developer",
        tier="free",
        features=TemplateFeatures(project_detail=True, dark_mode=True),
    ),
    TemplateConfig(
        id="designstudio",
        name="DesignStudio",
        slug="designstudio",
        description="A visual-first portfolio for designers with large imagery.",
        preview_image="/templates/designstudio-preview.png",
        category="designer",
        tier="free",
        features=TemplateFeatures(project_detail=True, dark_mode=True),
    ),
    TemplateConfig(
        id="minimal",
        name="Minimal",
        slug="minimal",
        description="A minimalist, text-focused portfolio that works for any profession.",
        preview_image="/templates/minimal-preview.png",
        category="generic",
        tier="free",
        features=TemplateFeatures(project_detail=True, dark_mode=True),
    ),
)


class TemplateCatalog:
    """Read-only lookup over template entries and their implementations."""

    def __init__(
        self,
        entries: Iterable[TemplateConfig],
        implementations: Mapping[str, TemplateImplementation],
    ) -> None:
        entries = tuple(entries)
        by_id: dict[str, TemplateConfig] = {}
        for entry in entries:
            if entry.id in by_id:
                raise ValueError(f"Duplicate template id '{entry.id}'")
            if entry.id not in implementations:
                raise ValueError(f"Template '{entry.id}' has no implementation")
            by_id[entry.id] = entry
        self._entries = entries
        self._by_id = MappingProxyType(by_id)
        self._by_slug = MappingProxyType({e.slug: e for e in entries})
        self._implementations = MappingProxyType(
            {entry.id: implementations[entry.id] for entry in entries}
        )

    def get_by_id(self, template_id: str) -> TemplateConfig | None:
        return self._by_id.get(template_id)

    def get_by_slug(self, slug: str) -> TemplateConfig | None:
        return self._by_slug.get(slug)

    def list_by_category(self, category: TemplateCategory) -> list[TemplateConfig]:
        return [e for e in self._entries if e.category == category]

    def list_all(self) -> list[TemplateConfig]:
        return list(self._entries)

    def get_implementation(self, template_id: str) -> TemplateImplementation | None:
        return self._implementations.get(template_id)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    def __len__(self) -> int:
        return len(self._entries)


def builtin_implementations() -> dict[str, TemplateImplementation]:
    return {
        "devfolio": DevFolioTemplate(),
        "designstudio": DesignStudioTemplate(),
        "minimal": MinimalTemplate(),
    }


def create_default_catalog() -> TemplateCatalog:
    """Catalog of the templates shipped with the application."""
    return TemplateCatalog(BUILTIN_TEMPLATES, builtin_implementations())
