"""
Repository and deck-service errors.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for storage failures."""
    default_message = "Repository error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class StoreUnavailableError(RepositoryError):
    default_message = "Deck store is unavailable"


class EntityNotFoundError(RepositoryError):
    default_message = "The requested entity was not found"


class InvalidDataError(RepositoryError):
    default_message = "The provided data is invalid"


class DeckServiceError(Exception):
    """Raised when the deck service refuses an operation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidDeckError(DeckServiceError):
    def __init__(self, errors: list[str] | None = None):
        super().__init__("The deck data is invalid", errors)


class InvalidQuestionError(DeckServiceError):
    def __init__(self, errors: list[str] | None = None):
        super().__init__("The question data is invalid", errors)


class DeckNotFoundError(DeckServiceError):
    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(f"Deck {deck_id} not found")
