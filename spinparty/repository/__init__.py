"""
Repository - Deck and question storage for the game.

Storage is in-memory. The session engine never talks to it directly: it
receives already-validated decks from whoever looked them up here.
"""

from .errors import (
    RepositoryError,
    StoreUnavailableError,
    EntityNotFoundError,
    InvalidDataError,
    DeckServiceError,
    InvalidDeckError,
    InvalidQuestionError,
    DeckNotFoundError,
)
from .store import DeckRepository, QuestionRepository
from .service import DeckService

__all__ = [
    "RepositoryError",
    "StoreUnavailableError",
    "EntityNotFoundError",
    "InvalidDataError",
    "DeckServiceError",
    "InvalidDeckError",
    "InvalidQuestionError",
    "DeckNotFoundError",
    "DeckRepository",
    "QuestionRepository",
    "DeckService",
]
