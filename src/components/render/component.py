"""
Render component - template dispatcher for public portfolio pages.

Given a stored portfolio and a requested page name, checks that the page may
be shown and hands off to the implementation registered for the portfolio's
template. The only side effect is the optional view increment, issued once
per top-level page view and never for sub-resource pages.
"""

from __future__ import annotations

import dataclasses
import logging

from src.components.render.models import (
    RenderOutput,
    RenderPageInput,
    RenderPreviewInput,
    RenderValidationError,
)
from src.components.render.ports import ViewCounterPort
from src.components.templates import (
    PROJECTS_PAGE,
    PageRef,
    RenderedPage,
    TemplateCatalog,
    preview_document,
)
from src.components.templates._html import escape
from src.domain.entities import Portfolio, Theme
from src.domain.errors import (
    EntityNotFoundError,
    IntegrityError,
    NotFoundError,
    PageNotFoundError,
    PortfolioUnavailableError,
    TemplateMissingError,
)

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/u"


def public_base_path(slug: str) -> str:
    return f"{PUBLIC_PREFIX}/{slug}"


def watermark_badge(text: str) -> str:
    return (
        '<footer class="folio-watermark" style="text-align:center;padding:1rem;'
        f'font-size:0.8rem;opacity:0.7">{escape(text)}</footer>'
    )


def apply_watermark(page: RenderedPage, text: str) -> RenderedPage:
    head, sep, tail = page.html.rpartition("</body>")
    if not sep:
        return dataclasses.replace(page, html=page.html + watermark_badge(text))
    return dataclasses.replace(page, html=f"{head}{watermark_badge(text)}\n{sep}{tail}")


class TemplateRenderer:
    """Stateless dispatcher from (portfolio, page) to a rendered page."""

    def __init__(
        self,
        catalog: TemplateCatalog,
        view_counter: ViewCounterPort | None = None,
        *,
        count_views: bool = True,
        watermark_text: str = "Made with Folio",
    ) -> None:
        self._catalog = catalog
        self._view_counter = view_counter
        self._count_views = count_views
        self._watermark_text = watermark_text

    def render(
        self,
        portfolio: Portfolio,
        page: str = "home",
        *,
        watermark: bool = False,
        base_path: str | None = None,
    ) -> RenderedPage:
        """
        Render one public page of a portfolio.

        Raises:
            PortfolioUnavailableError: portfolio is not published
            PageNotFoundError: page is not active, or not offered by the template
            EntityNotFoundError: sub-resource (project) does not exist
            TemplateMissingError: template id is not in the catalog
        """
        if not portfolio.is_published:
            raise PortfolioUnavailableError(f"Portfolio {portfolio.id} is not published")

        ref = PageRef.parse(page)
        if ref.page not in portfolio.active_pages:
            raise PageNotFoundError(f"Page '{ref.page}' is not active")

        if ref.is_sub_resource:
            if ref.page != PROJECTS_PAGE:
                raise PageNotFoundError(f"Page '{ref}' does not exist")
            if portfolio.data.get_project(ref.entity_id or "") is None:
                raise EntityNotFoundError(f"Project '{ref.entity_id}' not found")

        config = self._catalog.get_by_id(portfolio.template_id)
        impl = self._catalog.get_implementation(portfolio.template_id)
        if config is None or impl is None:
            logger.error(
                "Portfolio %s references missing template '%s'",
                portfolio.id,
                portfolio.template_id,
            )
            raise TemplateMissingError(portfolio.id, portfolio.template_id)

        if ref.is_sub_resource and not config.features.project_detail:
            raise PageNotFoundError(f"Template '{config.id}' has no project pages")

        rendered = impl.render(
            portfolio.data,
            portfolio.theme,
            str(ref),
            nav_pages=tuple(portfolio.active_pages),
            base_path=base_path if base_path is not None else public_base_path(portfolio.slug),
            seo=portfolio.seo,
        )
        if watermark:
            rendered = apply_watermark(rendered, self._watermark_text)

        if self._count_views and self._view_counter is not None and not ref.is_sub_resource:
            self._view_counter.increment_views(portfolio.id)

        return rendered

    def preview(
        self,
        template_id: str,
        sections: dict | None = None,
        theme: Theme | None = None,
        page: str = "home",
        *,
        base_path: str = "",
    ) -> RenderedPage:
        """
        Render a draft without publish or view checks.

        Sections the author has not filled in are replaced by sample content.
        """
        config = self._catalog.get_by_id(template_id)
        impl = self._catalog.get_implementation(template_id)
        if config is None or impl is None:
            raise NotFoundError(f"Template '{template_id}' not found")

        ref = PageRef.parse(page)
        if not config.supports_page(ref.page):
            raise PageNotFoundError(f"Template '{template_id}' has no page '{ref.page}'")

        document = preview_document(sections or {}, config)
        return impl.render(
            document,
            theme or Theme(),
            str(ref),
            nav_pages=config.available_pages,
            base_path=base_path,
        )


# --- Component Entry Points ---


def _failure(exc: Exception) -> RenderOutput:
    if isinstance(exc, NotFoundError):
        return RenderOutput(
            page=None,
            errors=[RenderValidationError(code="NOT_FOUND", message="Not found")],
            success=False,
            status="not_found",
        )
    return RenderOutput(
        page=None,
        errors=[RenderValidationError(code="INTERNAL", message="Internal error")],
        success=False,
        status="error",
    )


def run_render(renderer: TemplateRenderer, inp: RenderPageInput) -> RenderOutput:
    """Render a public page, collapsing every not-found cause into one answer."""
    try:
        page = renderer.render(
            inp.portfolio, inp.page, watermark=inp.watermark, base_path=inp.base_path
        )
    except (NotFoundError, IntegrityError) as e:
        return _failure(e)
    return RenderOutput(page=page, errors=[], success=True)


def run_preview(renderer: TemplateRenderer, inp: RenderPreviewInput) -> RenderOutput:
    try:
        page = renderer.preview(
            inp.template_id, dict(inp.sections), inp.theme, inp.page, base_path=inp.base_path
        )
    except NotFoundError as e:
        return _failure(e)
    return RenderOutput(page=page, errors=[], success=True)


def run(
    renderer: TemplateRenderer, inp: RenderPageInput | RenderPreviewInput
) -> RenderOutput:
    """
    Main entry point for the render component.

    Dispatches to the appropriate handler based on input type.
    """
    if isinstance(inp, RenderPageInput):
        return run_render(renderer, inp)
    elif isinstance(inp, RenderPreviewInput):
        return run_preview(renderer, inp)
    else:
        raise TypeError(f"Unknown input type: {type(inp)}")
