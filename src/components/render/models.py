"""
Render component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from src.components.templates import RenderedPage
from src.domain.entities import Portfolio, Theme

RenderStatus = Literal["ok", "not_found", "error"]


@dataclass(frozen=True)
class RenderValidationError:
    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderPageInput:
    """Public page view of a stored portfolio."""

    portfolio: Portfolio
    page: str = "home"
    watermark: bool = False
    base_path: str | None = None


@dataclass(frozen=True)
class RenderPreviewInput:
    """Preview of an unsaved draft; empty sections fall back to sample data."""

    template_id: str
    sections: Mapping[str, Any] = field(default_factory=dict)
    theme: Theme = field(default_factory=Theme)
    page: str = "home"
    base_path: str = ""


# --- Output Models ---


@dataclass(frozen=True)
class RenderOutput:
    page: RenderedPage | None
    errors: list[RenderValidationError]
    success: bool
    status: RenderStatus = "ok"
