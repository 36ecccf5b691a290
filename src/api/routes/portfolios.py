from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from src.api.deps import get_actor, get_portfolio_service, get_resolver
from src.api.schemas import (
    ActivePagesRequest,
    ErrorItem,
    SlugChangeRequest,
    SlugCheckResponse,
    error_detail,
)
from src.components.portfolios import (
    ChangeSlugInput,
    DeletePortfolioInput,
    GetPortfolioInput,
    ListPortfoliosInput,
    PortfolioOutput,
    PortfolioService,
    PublishPortfolioInput,
    SetActivePagesInput,
    UnpublishPortfolioInput,
    UpdateSectionInput,
    run,
    run_list,
)
from src.components.publish import CheckSlugInput, PublishingResolver, run_check_slug
from src.domain.entities import Actor, Portfolio
from src.domain.sections import SECTION_NAMES

router = APIRouter()
slugs_router = APIRouter()

_STATUS_CODES = {
    "invalid": status.HTTP_400_BAD_REQUEST,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "upgrade_required": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
}


def _unwrap(result: PortfolioOutput) -> Portfolio | None:
    if result.success:
        return result.portfolio
    if result.status == "not_found":
        raise HTTPException(status_code=404, detail="Not found")
    raise HTTPException(
        status_code=_STATUS_CODES[result.status],
        detail=error_detail(
            result.errors,
            upgrade_required=result.status == "upgrade_required",
            suggestion=result.suggestion,
        ),
    )


@router.get("", response_model=list[Portfolio])
def list_portfolios(
    owner_id: str | None = None,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[Portfolio]:
    """Portfolios of the caller (or, for admins, of owner_id), newest first."""
    result = run_list(service, ListPortfoliosInput(actor=actor, owner_id=owner_id))
    if not result.success:
        raise HTTPException(status_code=403, detail="Access denied")
    return result.portfolios


@router.get("/{portfolio_id}", response_model=Portfolio)
def get_portfolio(
    portfolio_id: str,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    return _unwrap(run(service, GetPortfolioInput(actor=actor, portfolio_id=portfolio_id)))


@router.put("/{portfolio_id}/sections/{section}", response_model=Portfolio)
def update_section(
    portfolio_id: str,
    section: str,
    payload: Any = Body(...),
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    if section not in SECTION_NAMES:
        raise HTTPException(status_code=404, detail="Unknown section")
    inp = UpdateSectionInput(
        actor=actor,
        portfolio_id=portfolio_id,
        section=section,  # type: ignore[arg-type]
        payload=payload,
    )
    return _unwrap(run(service, inp))


@router.put("/{portfolio_id}/pages", response_model=Portfolio)
def set_active_pages(
    portfolio_id: str,
    req: ActivePagesRequest,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    inp = SetActivePagesInput(actor=actor, portfolio_id=portfolio_id, pages=req.pages)
    return _unwrap(run(service, inp))


@router.put("/{portfolio_id}/slug", response_model=Portfolio)
def change_slug(
    portfolio_id: str,
    req: SlugChangeRequest,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    inp = ChangeSlugInput(actor=actor, portfolio_id=portfolio_id, slug=req.slug)
    return _unwrap(run(service, inp))


@router.post("/{portfolio_id}/publish", response_model=Portfolio)
def publish(
    portfolio_id: str,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    return _unwrap(run(service, PublishPortfolioInput(actor=actor, portfolio_id=portfolio_id)))


@router.post("/{portfolio_id}/unpublish", response_model=Portfolio)
def unpublish(
    portfolio_id: str,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio | None:
    return _unwrap(run(service, UnpublishPortfolioInput(actor=actor, portfolio_id=portfolio_id)))


@router.delete("/{portfolio_id}", status_code=204)
def delete_portfolio(
    portfolio_id: str,
    actor: Actor = Depends(get_actor),
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    _unwrap(run(service, DeletePortfolioInput(actor=actor, portfolio_id=portfolio_id)))


# --- Slug availability ---


@slugs_router.get(
    "/{candidate}", response_model=SlugCheckResponse, dependencies=[Depends(get_actor)]
)
def check_slug(
    candidate: str,
    resolver: PublishingResolver = Depends(get_resolver),
) -> SlugCheckResponse:
    check = run_check_slug(resolver, CheckSlugInput(candidate=candidate)).check
    return SlugCheckResponse(
        slug=check.slug,
        available=check.available,
        suggestion=check.suggestion,
        errors=[ErrorItem(code=e.code, message=e.message, field=e.field) for e in check.errors],
    )
