"""
Content - Validated value types consumed by the session engine.

Players, questions and decks are immutable. Anything that looks like a
mutation returns a new value.
"""

from .text import DEFAULT_DENYLIST, sanitize_text, contains_disallowed
from .player import Player, new_id
from .question import Question, QuestionCategory, DifficultyLevel
from .deck import QuestionDeck
from .defaults import default_decks, sample_deck, sample_players, sample_questions

__all__ = [
    "DEFAULT_DENYLIST",
    "sanitize_text",
    "contains_disallowed",
    "Player",
    "new_id",
    "Question",
    "QuestionCategory",
    "DifficultyLevel",
    "QuestionDeck",
    "default_decks",
    "sample_deck",
    "sample_players",
    "sample_questions",
]
