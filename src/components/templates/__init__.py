"""
Templates component - template catalog and built-in page renderers.
"""

from .catalog import (
    BUILTIN_TEMPLATES,
    TemplateCatalog,
    builtin_implementations,
    create_default_catalog,
)
from .designstudio import DesignStudioTemplate
from .devfolio import DevFolioTemplate
from .minimal import MinimalTemplate
from .models import (
    HOME_PAGE,
    PROJECTS_PAGE,
    STANDARD_PAGES,
    PageRef,
    RenderedPage,
    TemplateConfig,
    TemplateFeatures,
)
from .placeholders import preview_document
from .ports import TemplateImplementation

__all__ = [
    # Catalog
    "BUILTIN_TEMPLATES",
    "TemplateCatalog",
    "builtin_implementations",
    "create_default_catalog",
    # Implementations
    "DesignStudioTemplate",
    "DevFolioTemplate",
    "MinimalTemplate",
    "TemplateImplementation",
    "preview_document",
    # Models
    "HOME_PAGE",
    "PROJECTS_PAGE",
    "STANDARD_PAGES",
    "PageRef",
    "RenderedPage",
    "TemplateConfig",
    "TemplateFeatures",
]
