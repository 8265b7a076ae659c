from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Path segments under the storage root: user ids, note ids, entity ids.
_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")
_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")


def is_safe_identifier(value: str) -> bool:
    """Return True if value can be used as a single path segment."""
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def is_valid_color(value: str) -> bool:
    return _COLOR_RE.fullmatch(value) is not None


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Clean user-supplied tags: strip whitespace, drop blanks, keep first occurrence.

    Case is preserved; "Work" and "work" are different tags.
    """
    normalized: list[str] = []
    for tag in tags:
        stripped = tag.strip()
        if stripped and stripped not in normalized:
            normalized.append(stripped)
    return normalized
