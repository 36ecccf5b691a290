"""
Content section validation.

Each section of a content document is validated independently so the
authoring wizard can accept one step at a time. Validation is pure: it never
touches storage and reports expected input problems as field errors rather
than raising. Only an unknown section name (a programming error) raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.entities import (
    ContentDocument,
    Experience,
    PersonalInfo,
    Project,
    Skill,
    Socials,
    Theme,
)
from src.domain.errors import FieldError

_SECTION_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "personal": TypeAdapter(PersonalInfo),
    "experience": TypeAdapter(list[Experience]),
    "projects": TypeAdapter(list[Project]),
    "skills": TypeAdapter(list[Skill]),
    "socials": TypeAdapter(Socials),
    "theme": TypeAdapter(Theme),
}

_LIST_SECTIONS_WITH_IDS = ("experience", "projects")

SECTION_NAMES: tuple[str, ...] = tuple(_SECTION_ADAPTERS)


@dataclass(frozen=True)
class SectionResult:
    """Outcome of validating a section payload."""

    ok: bool
    value: Any = None
    field_errors: tuple[FieldError, ...] = field(default_factory=tuple)


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from custom validators
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def field_errors_from_pydantic(
    exc: PydanticValidationError, prefix: str | None = None
) -> list[FieldError]:
    """Convert a pydantic error into one FieldError per offending field."""
    errors: list[FieldError] = []
    seen: set[str] = set()
    for err in exc.errors():
        parts = [str(p) for p in err["loc"]]
        if prefix:
            parts.insert(0, prefix)
        name = ".".join(parts) or "__root__"
        if name in seen:
            continue
        seen.add(name)
        errors.append(
            FieldError(field=name, code=err["type"], message=_clean_message(err["msg"]))
        )
    return errors


def _duplicate_id_errors(section_name: str, items: list[Any]) -> list[FieldError]:
    errors: list[FieldError] = []
    seen: set[str] = set()
    for idx, item in enumerate(items):
        if item.id in seen:
            errors.append(
                FieldError(
                    field=f"{section_name}.{idx}.id",
                    code="duplicate_id",
                    message=f"Duplicate id '{item.id}'",
                )
            )
        seen.add(item.id)
    return errors


def validate_section(section_name: str, payload: Any) -> SectionResult:
    """
    Validate a single section payload.

    Returns a SectionResult carrying the parsed value on success or the field
    errors on failure.

    Raises:
        KeyError: If section_name is not a known section.
    """
    try:
        adapter = _SECTION_ADAPTERS[section_name]
    except KeyError:
        raise KeyError(f"Unknown content section '{section_name}'") from None

    try:
        value = adapter.validate_python(payload)
    except PydanticValidationError as e:
        return SectionResult(
            ok=False, field_errors=tuple(field_errors_from_pydantic(e, section_name))
        )

    if section_name in _LIST_SECTIONS_WITH_IDS:
        dupes = _duplicate_id_errors(section_name, value)
        if dupes:
            return SectionResult(ok=False, field_errors=tuple(dupes))

    return SectionResult(ok=True, value=value)


def validate_document(payload: Any) -> SectionResult:
    """Validate a complete content document (all five sections)."""
    try:
        value = ContentDocument.model_validate(payload)
    except PydanticValidationError as e:
        return SectionResult(ok=False, field_errors=tuple(field_errors_from_pydantic(e)))
    return SectionResult(ok=True, value=value)
