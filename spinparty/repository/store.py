"""
Deck Store - In-memory repositories for decks and their questions.

Decks are immutable values, so "saving" a deck replaces the stored value
for its id. Questions live inside their deck; the question repository
edits a question by storing a new deck value.

The store is guarded by a lock so it can be shared by request handlers.
"""

from __future__ import annotations
import logging
import threading
import time

from ..content import DifficultyLevel, Question, QuestionCategory, QuestionDeck
from .errors import EntityNotFoundError, InvalidDataError, StoreUnavailableError

logger = logging.getLogger(__name__)


class DeckRepository:
    """
    Deck storage keyed by deck_id.

    Usage:
        decks = DeckRepository()
        decks.save_deck(deck)
        decks.get_deck(deck.deck_id)
    """

    def __init__(self, decks: list[QuestionDeck] | None = None):
        self._decks: dict[str, QuestionDeck] = {}
        self._lock = threading.RLock()
        self._closed = False
        for deck in decks or []:
            self._decks[deck.deck_id] = deck

    def close(self):
        """Release the store. Later calls raise StoreUnavailableError."""
        with self._lock:
            self._closed = True
            self._decks.clear()

    def _check_open(self):
        if self._closed:
            raise StoreUnavailableError()

    def get_all_decks(self) -> list[QuestionDeck]:
        """Default decks first, then alphabetically by name."""
        with self._lock:
            self._check_open()
            return sorted(self._decks.values(), key=lambda d: (not d.is_default, d.name))

    def get_deck(self, deck_id: str) -> QuestionDeck | None:
        with self._lock:
            self._check_open()
            return self._decks.get(deck_id)

    def get_default_decks(self) -> list[QuestionDeck]:
        with self._lock:
            self._check_open()
            return sorted((d for d in self._decks.values() if d.is_default), key=lambda d: d.name)

    def get_custom_decks(self) -> list[QuestionDeck]:
        """User-created decks, most recently modified first."""
        with self._lock:
            self._check_open()
            return sorted(
                (d for d in self._decks.values() if not d.is_default),
                key=lambda d: d.last_modified,
                reverse=True,
            )

    def save_deck(self, deck: QuestionDeck) -> QuestionDeck:
        """Insert or replace a deck."""
        if not isinstance(deck, QuestionDeck) or not deck.deck_id:
            raise InvalidDataError("Only decks with an id can be stored")
        with self._lock:
            self._check_open()
            existed = deck.deck_id in self._decks
            self._decks[deck.deck_id] = deck
        logger.debug("%s deck %s (%s)", "Updated" if existed else "Saved", deck.deck_id, deck.name)
        return deck

    def update_deck(self, deck: QuestionDeck) -> QuestionDeck:
        return self.save_deck(deck)

    def delete_deck(self, deck_id: str):
        with self._lock:
            self._check_open()
            if self._decks.pop(deck_id, None) is None:
                raise EntityNotFoundError(f"Deck {deck_id} not found")
        logger.debug("Deleted deck %s", deck_id)

    def deck_exists(self, deck_id: str) -> bool:
        with self._lock:
            self._check_open()
            return deck_id in self._decks

    def find_deck_for_question(self, question_id: str) -> QuestionDeck | None:
        """Return the deck holding a question, if any."""
        with self._lock:
            self._check_open()
            for deck in self._decks.values():
                if deck.contains_question(question_id):
                    return deck
            return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._decks)


class QuestionRepository:
    """
    Question access on top of a DeckRepository.

    Every write produces a new deck value with last_modified refreshed.
    """

    def __init__(self, decks: DeckRepository):
        self.decks = decks

    def get_questions(self, deck_id: str) -> list[Question]:
        """Questions of a deck sorted by text. Empty if the deck is unknown."""
        deck = self.decks.get_deck(deck_id)
        if deck is None:
            return []
        return sorted(deck.questions, key=lambda q: q.text)

    def get_question(self, question_id: str) -> Question | None:
        deck = self.decks.find_deck_for_question(question_id)
        if deck is None:
            return None
        return deck.get_question(question_id)

    def save_question(self, question: Question, deck_id: str) -> Question:
        """
        Add a question to a deck, or replace it if the deck already has it.

        A question that currently sits in another deck is moved.
        """
        with self.decks._lock:
            deck = self.decks.get_deck(deck_id)
            if deck is None:
                raise EntityNotFoundError(f"Deck {deck_id} not found")

            now = time.time()
            previous = self.decks.find_deck_for_question(question.question_id)
            if previous is not None and previous.deck_id != deck_id:
                self.decks.save_deck(previous.removing_question(question.question_id, now=now))

            if deck.contains_question(question.question_id):
                deck = deck.updating_question(question, now=now)
            else:
                deck = deck.adding_question(question, now=now)
            self.decks.save_deck(deck)
        return question

    def update_question(self, question: Question) -> Question:
        with self.decks._lock:
            deck = self.decks.find_deck_for_question(question.question_id)
            if deck is None:
                raise EntityNotFoundError(f"Question {question.question_id} not found")
            self.decks.save_deck(deck.updating_question(question))
        return question

    def delete_question(self, question_id: str):
        with self.decks._lock:
            deck = self.decks.find_deck_for_question(question_id)
            if deck is None:
                raise EntityNotFoundError(f"Question {question_id} not found")
            self.decks.save_deck(deck.removing_question(question_id))

    def get_questions_by_category(self, category: QuestionCategory, deck_id: str) -> list[Question]:
        return [q for q in self.get_questions(deck_id) if q.category == category]

    def get_questions_by_difficulty(self, difficulty: DifficultyLevel, deck_id: str) -> list[Question]:
        return [q for q in self.get_questions(deck_id) if q.difficulty == difficulty]

    def question_exists(self, question_id: str) -> bool:
        return self.decks.find_deck_for_question(question_id) is not None
