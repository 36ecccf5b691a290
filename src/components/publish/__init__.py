"""Publish component - slug reservation and portfolio publish lifecycle."""

from src.components.publish.component import (
    PublishingResolver,
    default_seo,
    run,
    run_check_slug,
    run_increment_views,
    run_publish,
    run_unpublish,
)
from src.components.publish.models import (
    CheckSlugInput,
    CheckSlugOutput,
    IncrementViewsInput,
    IncrementViewsOutput,
    PortfolioDraft,
    PublishInput,
    PublishOutput,
    PublishValidationError,
    SlugCheck,
    UnpublishInput,
    UnpublishOutput,
)
from src.components.publish.ports import ClockPort, PortfolioRepoPort

__all__ = [
    # Entry points
    "run",
    "run_check_slug",
    "run_increment_views",
    "run_publish",
    "run_unpublish",
    # Component
    "PublishingResolver",
    "default_seo",
    # Models
    "CheckSlugInput",
    "CheckSlugOutput",
    "IncrementViewsInput",
    "IncrementViewsOutput",
    "PortfolioDraft",
    "PublishInput",
    "PublishOutput",
    "PublishValidationError",
    "SlugCheck",
    "UnpublishInput",
    "UnpublishOutput",
    # Ports
    "ClockPort",
    "PortfolioRepoPort",
]
