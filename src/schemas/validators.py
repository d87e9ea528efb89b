"""
Shared validation functions for Pydantic schemas.

Tag and category names share one rule: surrounding whitespace is trimmed, the result
must be non-empty and at most TAG_NAME_MAX_LENGTH characters. Case is preserved;
uniqueness is exact-match per user.
"""
from models.tag import TAG_NAME_MAX_LENGTH


def validate_and_normalize_name(name: str, kind: str = "Tag") -> str:
    """
    Normalize and validate a single tag or category name.

    Args:
        name: The raw name.
        kind: Label used in error messages ("Tag", "Category").

    Returns:
        The trimmed name.

    Raises:
        ValueError: If the name is not a string, is empty, or is too long.
    """
    if not isinstance(name, str):
        raise ValueError(f"{kind} name must be a string")
    normalized = name.strip()
    if not normalized:
        raise ValueError(f"{kind} name is required and must be a non-empty string")
    if len(normalized) > TAG_NAME_MAX_LENGTH:
        raise ValueError(
            f"{kind} name exceeds maximum length of {TAG_NAME_MAX_LENGTH} characters",
        )
    return normalized


def validate_and_normalize_tags(tags: list[str]) -> list[str]:
    """
    Normalize and validate a list of tag names.

    Empty entries are dropped silently and duplicates collapse onto their first
    occurrence, so a bookmark's tag set never repeats a name.

    Raises:
        ValueError: If any entry is not a string or is too long.
    """
    normalized: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        if isinstance(tag, str) and not tag.strip():
            continue
        name = validate_and_normalize_name(tag)
        if name not in seen:
            seen.add(name)
            normalized.append(name)
    return normalized


def split_tag_param(values: list[str]) -> list[str]:
    """Flatten query values that may each hold comma-separated tag names."""
    names: list[str] = []
    for value in values:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    return names
