"""
Authoring wizard routes.

Drafts live in the in-process draft store and are bound to the account that
started them; another account asking for a draft id gets a 404.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from src.api.deps import get_current_account, get_draft_store, get_renderer, get_wizard
from src.api.schemas import SelectTemplateRequest, SubmitRequest, error_detail
from src.components.render import RenderPreviewInput, TemplateRenderer, run_preview
from src.components.wizard import (
    AuthoringWizard,
    DraftStorePort,
    NextInput,
    PrevInput,
    SelectTemplateInput,
    StartInput,
    SubmitInput,
    UpdateSectionInput,
    WizardDraft,
    WizardOutput,
    run,
)
from src.domain.entities import Account
from src.domain.sections import SECTION_NAMES

router = APIRouter()


def _load_draft(draft_id: str, account: Account, drafts: DraftStorePort) -> WizardDraft:
    draft = drafts.get(draft_id)
    if draft is None or draft.owner_id != account.id:
        raise HTTPException(status_code=404, detail="Draft not found")
    return draft


def _unwrap(result: WizardOutput, drafts: DraftStorePort) -> WizardDraft:
    """Persist a successful step, or raise the HTTP error matching the failure."""
    if result.success:
        drafts.save(result.draft)
        return result.draft
    if result.upgrade_required:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail(result.errors, upgrade_required=True),
        )
    if result.suggestion is not None or any(e.code == "SLUG_TAKEN" for e in result.errors):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(result.errors, suggestion=result.suggestion),
        )
    raise HTTPException(status_code=400, detail=error_detail(result.errors))


@router.post("", response_model=WizardDraft, status_code=201)
def start_wizard(
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    return _unwrap(run(wizard, StartInput(owner_id=account.id)), drafts)


@router.get("/{draft_id}", response_model=WizardDraft)
def get_draft(
    draft_id: str,
    account: Account = Depends(get_current_account),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    return _load_draft(draft_id, account, drafts)


@router.post("/{draft_id}/template", response_model=WizardDraft)
def select_template(
    draft_id: str,
    req: SelectTemplateRequest,
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    draft = _load_draft(draft_id, account, drafts)
    inp = SelectTemplateInput(draft=draft, account=account, template_id=req.template_id)
    return _unwrap(run(wizard, inp), drafts)


@router.put("/{draft_id}/sections/{section}", response_model=WizardDraft)
def update_section(
    draft_id: str,
    section: str,
    payload: Any = Body(...),
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    if section not in SECTION_NAMES:
        raise HTTPException(status_code=404, detail="Unknown section")
    draft = _load_draft(draft_id, account, drafts)
    inp = UpdateSectionInput(
        draft=draft, account=account, section=section, payload=payload  # type: ignore[arg-type]
    )
    return _unwrap(run(wizard, inp), drafts)


@router.post("/{draft_id}/next", response_model=WizardDraft)
def next_step(
    draft_id: str,
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    draft = _load_draft(draft_id, account, drafts)
    return _unwrap(run(wizard, NextInput(draft=draft)), drafts)


@router.post("/{draft_id}/prev", response_model=WizardDraft)
def prev_step(
    draft_id: str,
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> WizardDraft:
    draft = _load_draft(draft_id, account, drafts)
    return _unwrap(run(wizard, PrevInput(draft=draft)), drafts)


@router.post("/{draft_id}/submit", status_code=201)
def submit(
    draft_id: str,
    req: SubmitRequest,
    account: Account = Depends(get_current_account),
    wizard: AuthoringWizard = Depends(get_wizard),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> dict[str, Any]:
    """Publish (or save unpublished) the finished draft; the draft is discarded on success."""
    draft = _load_draft(draft_id, account, drafts)
    inp = SubmitInput(draft=draft, account=account, slug=req.slug, publish=req.publish)
    result = run(wizard, inp)
    _unwrap(result, drafts)
    drafts.discard(draft_id)
    return {"portfolio": result.portfolio.model_dump(mode="json")}  # type: ignore[union-attr]


@router.delete("/{draft_id}", status_code=204)
def discard_draft(
    draft_id: str,
    account: Account = Depends(get_current_account),
    drafts: DraftStorePort = Depends(get_draft_store),
) -> None:
    _load_draft(draft_id, account, drafts)
    drafts.discard(draft_id)


@router.get("/{draft_id}/preview", response_class=HTMLResponse)
@router.get("/{draft_id}/preview/{page:path}", response_class=HTMLResponse)
def preview(
    draft_id: str,
    page: str = "home",
    account: Account = Depends(get_current_account),
    drafts: DraftStorePort = Depends(get_draft_store),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Live preview of the draft; sections not yet entered show sample content."""
    draft = _load_draft(draft_id, account, drafts)
    if draft.template_id is None:
        raise HTTPException(status_code=400, detail="Choose a template first")

    result = run_preview(
        renderer,
        RenderPreviewInput(
            template_id=draft.template_id,
            sections=draft.filled_sections(),
            theme=draft.theme,
            page=page,
            base_path=f"/api/wizard/{draft_id}/preview",
        ),
    )
    if not result.success or result.page is None:
        raise HTTPException(status_code=404, detail="Not found")
    return HTMLResponse(content=result.page.html)
