from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_catalog
from src.api.schemas import TemplateCategory, TemplateResponse
from src.components.templates import TemplateCatalog

router = APIRouter()


@router.get("", response_model=list[TemplateResponse])
def list_templates(
    category: TemplateCategory | None = None,
    catalog: TemplateCatalog = Depends(get_catalog),
) -> list[TemplateResponse]:
    """List catalog templates, optionally filtered by category."""
    configs = catalog.list_by_category(category) if category else catalog.list_all()
    return [TemplateResponse.from_config(c) for c in configs]


@router.get("/{slug}", response_model=TemplateResponse)
def get_template(slug: str, catalog: TemplateCatalog = Depends(get_catalog)) -> TemplateResponse:
    config = catalog.get_by_slug(slug)
    if config is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return TemplateResponse.from_config(config)
