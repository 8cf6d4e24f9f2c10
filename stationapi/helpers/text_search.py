"""
Free-text search input helpers.

Name searches always bind the user's text as a query parameter. These pure
functions validate the text and turn it into a LIKE pattern whose wildcard
characters are escaped, so "%" or "_" typed by a user match literally.
"""

from __future__ import annotations

import unicodedata

from stationapi.core.exceptions import InvalidInputError

# Omitting a limit means "nearest one" / "first match", never unbounded
DEFAULT_LIMIT = 1

LIKE_ESCAPE_CHAR = "\\"


def sanitize_search_query(query: str, max_length: int) -> str:
    """
    Validate free-text search input.

    Args:
        query: Raw user text
        max_length: Maximum accepted length after trimming

    Returns:
        Trimmed text, otherwise exactly as typed

    Raises:
        InvalidInputError: If the text is empty, too long or contains control characters

    Examples:
        >>> sanitize_search_query("  Shibuya ", 100)
        'Shibuya'
    """
    text = query.strip()
    if not text:
        msg = "Search text must not be empty."
        raise InvalidInputError(msg)
    if len(text) > max_length:
        msg = f"Search text must be at most {max_length} characters."
        raise InvalidInputError(msg)
    if any(unicodedata.category(char) == "Cc" for char in text):
        msg = "Search text must not contain control characters."
        raise InvalidInputError(msg)
    return text


def escape_like(text: str) -> str:
    """
    Escape LIKE wildcards so they match literally.

    Examples:
        >>> escape_like("100%_off")
        '100\\\\%\\\\_off'
    """
    return (
        text.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )


def build_contains_pattern(text: str) -> str:
    """Build a substring LIKE pattern for already-sanitized text."""
    return f"%{escape_like(text)}%"


def resolve_limit(limit: int | None) -> int:
    """
    Apply the default limit and reject non-positive values.

    Raises:
        InvalidInputError: If limit is zero or negative

    Examples:
        >>> resolve_limit(None)
        1
        >>> resolve_limit(5)
        5
    """
    if limit is None:
        return DEFAULT_LIMIT
    if limit <= 0:
        msg = f"limit must be a positive integer, got {limit}."
        raise InvalidInputError(msg)
    return limit
