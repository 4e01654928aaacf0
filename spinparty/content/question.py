"""
Question - A single prompt shown to the selected player.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable

from .player import new_id
from .text import contains_disallowed, is_blank, sanitize_text


class QuestionCategory(Enum):
    """Kinds of prompts a deck can hold."""
    TRUTH_OR_DARE = "Truth or Dare"
    WOULD_YOU_RATHER = "Would You Rather"
    CUSTOM = "Custom"

    @property
    def display_name(self) -> str:
        return self.value


class DifficultyLevel(Enum):
    """How daring a prompt is."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def sort_order(self) -> int:
        return _DIFFICULTY_ORDER[self]


_DIFFICULTY_ORDER = {
    DifficultyLevel.EASY: 1,
    DifficultyLevel.MEDIUM: 2,
    DifficultyLevel.HARD: 3,
}


@dataclass(frozen=True, eq=False)
class Question:
    """
    A prompt in a deck.

    Equality and hashing use question_id only, so an edited question
    still matches its earlier version.
    """
    text: str
    category: QuestionCategory = QuestionCategory.CUSTOM
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    question_id: str = field(default_factory=new_id)

    def __hash__(self):
        return hash(self.question_id)

    def __eq__(self, other):
        if not isinstance(other, Question):
            return False
        return self.question_id == other.question_id

    def is_valid(self) -> bool:
        return not is_blank(self.text)

    def sanitized_text(self) -> str:
        return sanitize_text(self.text)

    def is_appropriate(self, denylist: Iterable[str] | None = None) -> bool:
        """False if the text contains any disallowed term."""
        return not contains_disallowed(self.text, denylist)

    def with_text(self, text: str) -> Question:
        return replace(self, text=text)
