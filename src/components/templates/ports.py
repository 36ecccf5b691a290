"""
Templates component port definitions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from src.domain.entities import ContentDocument, Seo, Theme

from .models import RenderedPage


class TemplateImplementation(Protocol):
    """Capability every template variant provides."""

    template_id: str

    def render(
        self,
        data: ContentDocument,
        theme: Theme,
        page: str,
        *,
        nav_pages: Sequence[str] = (),
        base_path: str = "",
        seo: Seo | None = None,
    ) -> RenderedPage:
        """
        Render one page of the portfolio.

        page is a validated page name ("home", "projects/<id>", ...);
        nav_pages lists the pages to link in navigation and base_path is the
        public prefix those links hang off. seo feeds the document head.
        """
        ...
