"""Portfolios component - owner dashboard operations on stored portfolios."""

from src.components.portfolios.component import PortfolioService, run, run_list
from src.components.portfolios.models import (
    ChangeSlugInput,
    DeletePortfolioInput,
    GetPortfolioInput,
    ListPortfoliosInput,
    PortfolioListOutput,
    PortfolioOutput,
    PortfolioValidationError,
    PublishPortfolioInput,
    SetActivePagesInput,
    UnpublishPortfolioInput,
    UpdateSectionInput,
)
from src.components.portfolios.ports import AccountRepoPort, LifecyclePort, PortfolioRepoPort

__all__ = [
    # Entry points
    "run",
    "run_list",
    # Component
    "PortfolioService",
    # Models
    "ChangeSlugInput",
    "DeletePortfolioInput",
    "GetPortfolioInput",
    "ListPortfoliosInput",
    "PortfolioListOutput",
    "PortfolioOutput",
    "PortfolioValidationError",
    "PublishPortfolioInput",
    "SetActivePagesInput",
    "UnpublishPortfolioInput",
    "UpdateSectionInput",
    # Ports
    "AccountRepoPort",
    "LifecyclePort",
    "PortfolioRepoPort",
]
