"""
Wizard component - guided authoring of a portfolio draft.
"""

from .component import AuthoringWizard, run
from .models import (
    NextInput,
    PrevInput,
    ResetInput,
    SelectTemplateInput,
    StartInput,
    SubmitInput,
    UpdateSectionInput,
    WizardDraft,
    WizardOutput,
    WizardValidationError,
)
from .ports import DraftStorePort, PortfolioCounterPort, PublisherPort

__all__ = [
    # Entry point
    "run",
    # Component
    "AuthoringWizard",
    # Models
    "NextInput",
    "PrevInput",
    "ResetInput",
    "SelectTemplateInput",
    "StartInput",
    "SubmitInput",
    "UpdateSectionInput",
    "WizardDraft",
    "WizardOutput",
    "WizardValidationError",
    # Ports
    "DraftStorePort",
    "PortfolioCounterPort",
    "PublisherPort",
]
