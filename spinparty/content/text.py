"""
Text helpers shared by the content value types.

Sanitization trims the characters a user can accidentally type around a
name or prompt (whitespace, newlines, stray control characters). The
appropriateness check is a plain case-insensitive denylist match.
"""

from __future__ import annotations
import unicodedata
from typing import Iterable


DEFAULT_DENYLIST: tuple[str, ...] = ("inappropriate", "offensive")


def _is_trimmable(char: str) -> bool:
    return char.isspace() or unicodedata.category(char) == "Cc"


def sanitize_text(text: str) -> str:
    """Strip leading/trailing whitespace and control characters."""
    start = 0
    end = len(text)
    while start < end and _is_trimmable(text[start]):
        start += 1
    while end > start and _is_trimmable(text[end - 1]):
        end -= 1
    return text[start:end]


def is_blank(text: str) -> bool:
    return not sanitize_text(text)


def contains_disallowed(text: str, denylist: Iterable[str] | None = None) -> bool:
    """
    Check text against a denylist of disallowed substrings.

    Matching is case-insensitive. Empty terms are ignored.
    """
    terms = DEFAULT_DENYLIST if denylist is None else denylist
    lowered = text.lower()
    return any(term and term.lower() in lowered for term in terms)
