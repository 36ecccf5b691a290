import re
import unicodedata
from collections.abc import Callable, Iterator

from src.domain.errors import FieldError

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 30

_INVALID_CHARS = re.compile(r"[^a-z0-9-]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """
    Turn free text (e.g. a person's name) into a slug candidate.

    Accents are folded to ASCII and runs of other characters become a single
    hyphen: "Ada Lovelace" -> "ada-lovelace".
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    lowered = folded.lower().strip()
    hyphenated = re.sub(r"[\s_]+", "-", lowered)
    return normalize_slug(hyphenated)


def normalize_slug(candidate: str) -> str:
    """Lowercase and strip everything outside [a-z0-9-]."""
    slug = _INVALID_CHARS.sub("", candidate.strip().lower())
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")


def validate_slug(
    slug: str,
    min_length: int = SLUG_MIN_LENGTH,
    max_length: int = SLUG_MAX_LENGTH,
) -> list[FieldError]:
    errors: list[FieldError] = []
    if len(slug) < min_length:
        errors.append(
            FieldError(
                field="slug",
                code="slug_too_short",
                message=f"Slug must be at least {min_length} characters",
            )
        )
    elif len(slug) > max_length:
        errors.append(
            FieldError(
                field="slug",
                code="slug_too_long",
                message=f"Slug must be at most {max_length} characters",
            )
        )
    elif not SLUG_PATTERN.match(slug):
        errors.append(
            FieldError(
                field="slug",
                code="slug_invalid_chars",
                message="Slug can only contain lowercase letters, numbers, and hyphens",
            )
        )
    return errors


def suffixed_candidates(base: str, max_length: int = SLUG_MAX_LENGTH) -> Iterator[str]:
    """Yield base-1, base-2, ... trimming the base so each fits max_length."""
    counter = 1
    while True:
        suffix = f"-{counter}"
        stem = base[: max_length - len(suffix)].rstrip("-")
        yield f"{stem}{suffix}"
        counter += 1


def suggest_slug(
    base: str,
    is_taken: Callable[[str], bool],
    max_attempts: int = 50,
    max_length: int = SLUG_MAX_LENGTH,
) -> str | None:
    """Try suffixed candidates sequentially until one is free."""
    for attempt, candidate in enumerate(suffixed_candidates(base, max_length)):
        if attempt >= max_attempts:
            return None
        if not is_taken(candidate):
            return candidate
    return None
