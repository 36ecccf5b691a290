"""
Public portfolio pages - server-side rendered HTML.

Every way a page can be missing (unknown slug, unpublished portfolio, page
not active, unknown project) answers the same 404 so nothing about unpublished
portfolios leaks. Template integrity failures are logged by the renderer and
answer a bare 500.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.api.deps import get_account_repo, get_plan_policies, get_portfolio_repo, get_renderer
from src.components.plans import PlanPolicyStore
from src.components.render import RenderPageInput, TemplateRenderer, run_render
from src.domain.entities import Account, Portfolio

router = APIRouter()


def _wants_watermark(
    portfolio: Portfolio, accounts: AccountDocumentRepo, policies: PlanPolicyStore
) -> bool:
    owner = accounts.get_by_id(portfolio.owner_id) or Account(id=portfolio.owner_id)
    return policies.current().limits_for(owner).watermark


def _serve(
    slug: str,
    page: str,
    repo: PortfolioDocumentRepo,
    accounts: AccountDocumentRepo,
    policies: PlanPolicyStore,
    renderer: TemplateRenderer,
) -> HTMLResponse:
    portfolio = repo.get_published_by_slug(slug)
    if portfolio is None:
        return HTMLResponse(content="Not found", status_code=404)

    result = run_render(
        renderer,
        RenderPageInput(
            portfolio=portfolio,
            page=page,
            watermark=_wants_watermark(portfolio, accounts, policies),
        ),
    )
    if result.status == "not_found":
        return HTMLResponse(content="Not found", status_code=404)
    if not result.success or result.page is None:
        return HTMLResponse(content="Internal error", status_code=500)
    return HTMLResponse(content=result.page.html)


@router.get("/u/{slug}", response_class=HTMLResponse)
def portfolio_home(
    slug: str,
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    accounts: AccountDocumentRepo = Depends(get_account_repo),
    policies: PlanPolicyStore = Depends(get_plan_policies),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    return _serve(slug, "home", repo, accounts, policies, renderer)


@router.get("/u/{slug}/projects/{project_id}", response_class=HTMLResponse)
def portfolio_project(
    slug: str,
    project_id: str,
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    accounts: AccountDocumentRepo = Depends(get_account_repo),
    policies: PlanPolicyStore = Depends(get_plan_policies),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    return _serve(slug, f"projects/{project_id}", repo, accounts, policies, renderer)


@router.get("/u/{slug}/{page}", response_class=HTMLResponse)
def portfolio_page(
    slug: str,
    page: str,
    repo: PortfolioDocumentRepo = Depends(get_portfolio_repo),
    accounts: AccountDocumentRepo = Depends(get_account_repo),
    policies: PlanPolicyStore = Depends(get_plan_policies),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    return _serve(slug, page, repo, accounts, policies, renderer)
