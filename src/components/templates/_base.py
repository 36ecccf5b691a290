"""
Shared page dispatch for the built-in templates.

Each template subclasses PageTemplate and supplies one method per page. The
page name is dispatched here so individual templates only produce markup.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.domain.entities import ContentDocument, Project, Seo, Theme
from src.domain.errors import EntityNotFoundError

from . import _html
from .models import HOME_PAGE, PROJECTS_PAGE, PageRef, RenderedPage


class PageTemplate:
    template_id: str = ""
    extra_css: str = ""

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
        ref = PageRef.parse(page)
        nav = _html.nav_html(nav_pages, ref.page, base_path, css_class="site-nav")

        if ref.page == PROJECTS_PAGE and ref.entity_id is not None:
            project = data.get_project(ref.entity_id)
            if project is None:
                raise EntityNotFoundError(f"Project {ref.entity_id!r} not found")
            heading = project.title
            body = self.project_detail(data, project, base_path)
        else:
            handlers = {
                HOME_PAGE: self.home,
                "about": self.about,
                PROJECTS_PAGE: self.projects,
                "contact": self.contact,
            }
            # unknown page names fall back to the landing page
            handler = handlers.get(ref.page, self.home)
            heading = _html.PAGE_LABELS.get(ref.page, "Home")
            body = handler(data, base_path)

        title = f"{data.personal.name} | {heading}"
        html = _html.document(
            title=title,
            theme=theme,
            seo=seo,
            body=self.layout(data, nav, body),
            extra_css=self.extra_css,
        )
        return RenderedPage(template_id=self.template_id, page=str(ref), title=title, html=html)

    # --- Page hooks ---

    def layout(self, data: ContentDocument, nav: str, body: str) -> str:
        return f"<header>{nav}</header>\n<main>{body}</main>"

    def home(self, data: ContentDocument, base_path: str) -> str:
        raise NotImplementedError

    def about(self, data: ContentDocument, base_path: str) -> str:
        raise NotImplementedError

    def projects(self, data: ContentDocument, base_path: str) -> str:
        raise NotImplementedError

    def contact(self, data: ContentDocument, base_path: str) -> str:
        raise NotImplementedError

    def project_detail(self, data: ContentDocument, project: Project, base_path: str) -> str:
        raise NotImplementedError

    # --- Helpers ---

    @staticmethod
    def project_url(base_path: str, project: Project) -> str:
        return _html.page_url(base_path, f"{PROJECTS_PAGE}/{project.id}")
