"""
QuestionDeck - A named, validated collection of questions.

Decks are immutable values. Every editing operation returns a new deck
with last_modified refreshed; the original is left untouched, because a
session snapshot may still hold it.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable
import random
import time

from .player import new_id
from .question import DifficultyLevel, Question, QuestionCategory
from .text import contains_disallowed, is_blank, sanitize_text


@dataclass(frozen=True, eq=False)
class QuestionDeck:
    """
    A deck of questions.

    Use QuestionDeck.create() for a brand-new deck. The plain constructor
    is for rebuilding a deck whose id and timestamps are already known
    (e.g. from storage).
    """
    deck_id: str
    name: str
    description: str
    questions: tuple[Question, ...] = ()
    is_default: bool = False  # System-provided vs user-created
    is_public: bool = False  # Shareable
    created_by: str | None = None
    download_count: int = 0
    rating: float = 0.0  # 0.0 - 5.0
    created_date: float = field(default_factory=time.time)
    last_modified: float = field(default_factory=time.time)

    def __post_init__(self):
        # Accept any iterable of questions but always store a tuple
        if not isinstance(self.questions, tuple):
            object.__setattr__(self, "questions", tuple(self.questions))

    def __hash__(self):
        return hash(self.deck_id)

    def __eq__(self, other):
        if not isinstance(other, QuestionDeck):
            return False
        return self.deck_id == other.deck_id

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        questions: Iterable[Question] = (),
        is_default: bool = False,
        is_public: bool = False,
        created_by: str | None = None,
    ) -> QuestionDeck:
        """Create a new deck with a fresh id and timestamps."""
        now = time.time()
        return cls(
            deck_id=new_id(),
            name=name,
            description=description,
            questions=tuple(questions),
            is_default=is_default,
            is_public=is_public,
            created_by=created_by,
            created_date=now,
            last_modified=now,
        )

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_empty(self) -> bool:
        return len(self.questions) == 0

    # =========================================================================
    # Validation
    # =========================================================================

    def is_valid(self) -> bool:
        """
        A deck is valid when name and description are not blank, it has
        at least one question, and every question is valid.
        """
        return (
            not is_blank(self.name)
            and not is_blank(self.description)
            and bool(self.questions)
            and all(q.is_valid() for q in self.questions)
        )

    def validation_errors(self) -> list[str]:
        """List the reasons the deck is invalid (empty when valid)."""
        errors: list[str] = []
        if is_blank(self.name):
            errors.append("name is required")
        if is_blank(self.description):
            errors.append("description is required")
        if not self.questions:
            errors.append("deck must contain at least one question")
        for index, question in enumerate(self.questions):
            if not question.is_valid():
                errors.append(f"question {index} has empty text")
        return errors

    def sanitized_name(self) -> str:
        return sanitize_text(self.name)

    def sanitized_description(self) -> str:
        return sanitize_text(self.description)

    def has_appropriate_content(self, denylist: Iterable[str] | None = None) -> bool:
        """True if every question passes the denylist check."""
        terms = None if denylist is None else tuple(denylist)
        return all(q.is_appropriate(terms) for q in self.questions)

    def is_appropriate(self, denylist: Iterable[str] | None = None) -> bool:
        """Check name and description as well as the questions."""
        terms = None if denylist is None else tuple(denylist)
        if contains_disallowed(self.name, terms):
            return False
        if contains_disallowed(self.description, terms):
            return False
        return self.has_appropriate_content(terms)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_question(self, question_id: str) -> Question | None:
        for q in self.questions:
            if q.question_id == question_id:
                return q
        return None

    def contains_question(self, question_id: str) -> bool:
        return any(q.question_id == question_id for q in self.questions)

    def questions_in_category(self, category: QuestionCategory) -> list[Question]:
        return [q for q in self.questions if q.category == category]

    def questions_with_difficulty(self, difficulty: DifficultyLevel) -> list[Question]:
        return [q for q in self.questions if q.difficulty == difficulty]

    # =========================================================================
    # Editing (all return a new deck)
    # =========================================================================

    def adding_question(self, question: Question, now: float | None = None) -> QuestionDeck:
        """Return new deck with the question appended."""
        return self._copy_with(questions=self.questions + (question,), now=now)

    def removing_question(self, question_id: str, now: float | None = None) -> QuestionDeck:
        """Return new deck without the question. Unknown ids are a no-op."""
        if not self.contains_question(question_id):
            return self
        new_questions = tuple(q for q in self.questions if q.question_id != question_id)
        return self._copy_with(questions=new_questions, now=now)

    def updating_question(self, question: Question, now: float | None = None) -> QuestionDeck:
        """Return new deck with the matching question replaced in place."""
        if not self.contains_question(question.question_id):
            return self
        new_questions = tuple(
            question if q.question_id == question.question_id else q
            for q in self.questions
        )
        return self._copy_with(questions=new_questions, now=now)

    def shuffled(self, rng: random.Random | None = None, now: float | None = None) -> QuestionDeck:
        """Return new deck with the questions in random order."""
        new_questions = list(self.questions)
        (rng or random).shuffle(new_questions)
        return self._copy_with(questions=tuple(new_questions), now=now)

    def with_details(
        self,
        name: str | None = None,
        description: str | None = None,
        is_public: bool | None = None,
        now: float | None = None,
    ) -> QuestionDeck:
        """Return new deck with edited metadata."""
        return self._copy_with(
            name=self.name if name is None else name,
            description=self.description if description is None else description,
            is_public=self.is_public if is_public is None else is_public,
            now=now,
        )

    def _copy_with(self, now: float | None = None, **kwargs) -> QuestionDeck:
        """Create a copy with some fields replaced and last_modified refreshed."""
        kwargs["last_modified"] = time.time() if now is None else now
        return replace(self, **kwargs)
