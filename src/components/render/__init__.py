"""
Render component - dispatches portfolio pages to template implementations.
"""

from __future__ import annotations

from .component import (
    PUBLIC_PREFIX,
    TemplateRenderer,
    apply_watermark,
    public_base_path,
    run,
    run_preview,
    run_render,
)
from .models import (
    RenderOutput,
    RenderPageInput,
    RenderPreviewInput,
    RenderStatus,
    RenderValidationError,
)
from .ports import ViewCounterPort

__all__ = [
    # Entry points
    "run",
    "run_preview",
    "run_render",
    # Dispatcher
    "PUBLIC_PREFIX",
    "TemplateRenderer",
    "apply_watermark",
    "public_base_path",
    # Models
    "RenderOutput",
    "RenderPageInput",
    "RenderPreviewInput",
    "RenderStatus",
    "RenderValidationError",
    # Ports
    "ViewCounterPort",
]
