from enum import IntEnum
from typing import Literal

WizardAction = Literal["next", "prev", "reset"]


class WizardStep(IntEnum):
    TEMPLATE = 1
    PERSONAL = 2
    EXPERIENCE = 3
    PROJECTS = 4
    SKILLS = 5
    CONTACT = 6
    THEME = 7
    PUBLISH = 8


FIRST_STEP = WizardStep.TEMPLATE
TERMINAL_STEP = WizardStep.PUBLISH

# Draft section collected by each step; None for steps that hold no section.
STEP_SECTIONS: dict[WizardStep, str | None] = {
    WizardStep.TEMPLATE: None,
    WizardStep.PERSONAL: "personal",
    WizardStep.EXPERIENCE: "experience",
    WizardStep.PROJECTS: "projects",
    WizardStep.SKILLS: "skills",
    WizardStep.CONTACT: "socials",
    WizardStep.THEME: "theme",
    WizardStep.PUBLISH: None,
}


def _build_transitions() -> dict[tuple[WizardStep, WizardAction], WizardStep]:
    table: dict[tuple[WizardStep, WizardAction], WizardStep] = {}
    steps = list(WizardStep)
    for idx, step in enumerate(steps):
        if step is not TERMINAL_STEP:
            table[(step, "next")] = steps[idx + 1]
        # prev on the first step is a no-op, never an error
        table[(step, "prev")] = steps[idx - 1] if idx > 0 else step
        table[(step, "reset")] = FIRST_STEP
    return table


TRANSITIONS = _build_transitions()


def can_transition(current: WizardStep, action: WizardAction) -> bool:
    """Whether the transition table has an edge for this step and action."""
    return (current, action) in TRANSITIONS


def transition(current: WizardStep, action: WizardAction) -> WizardStep:
    """
    Return the step reached from current via action.
    Raises ValueError if the table has no such edge.
    """
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        raise ValueError(f"Invalid wizard transition '{action}' from step {current.name}") from None


def section_for(step: WizardStep) -> str | None:
    return STEP_SECTIONS[step]
