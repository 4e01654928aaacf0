"""
Deck Service - Business rules on top of the deck and question stores.

The service:
1. Refuses to store invalid decks or questions
2. Seeds the built-in decks on first use
3. Keeps a cached list of decks for listing screens
"""

from __future__ import annotations
import logging
from typing import Iterable

from ..content import Question, QuestionDeck, default_decks
from .errors import DeckNotFoundError, EntityNotFoundError, InvalidDeckError, InvalidQuestionError
from .store import DeckRepository, QuestionRepository

logger = logging.getLogger(__name__)


class DeckService:
    """
    Deck management with validation.

    Usage:
        service = DeckService()
        service.seed_default_decks_if_needed()
        deck = service.create_deck(QuestionDeck.create(...))
    """

    def __init__(
        self,
        deck_repository: DeckRepository | None = None,
        question_repository: QuestionRepository | None = None,
        denylist: Iterable[str] | None = None,
    ):
        self.deck_repository = deck_repository or DeckRepository()
        self.question_repository = question_repository or QuestionRepository(self.deck_repository)
        self.denylist = None if denylist is None else tuple(denylist)
        self.decks: list[QuestionDeck] = []

    def load_decks(self) -> list[QuestionDeck]:
        """Refresh the cached deck list from the repository."""
        self.decks = self.deck_repository.get_all_decks()
        return self.decks

    def create_deck(self, deck: QuestionDeck) -> QuestionDeck:
        if not deck.is_valid():
            raise InvalidDeckError(deck.validation_errors())
        saved = self.deck_repository.save_deck(deck)
        logger.info("Created deck '%s' with %d questions", deck.name, deck.question_count)
        self.load_decks()
        return saved

    def update_deck(self, deck: QuestionDeck) -> QuestionDeck:
        if not deck.is_valid():
            raise InvalidDeckError(deck.validation_errors())
        saved = self.deck_repository.update_deck(deck)
        self.load_decks()
        return saved

    def delete_deck(self, deck_id: str):
        try:
            self.deck_repository.delete_deck(deck_id)
        except EntityNotFoundError:
            raise DeckNotFoundError(deck_id)
        logger.info("Deleted deck %s", deck_id)
        self.load_decks()

    def get_deck(self, deck_id: str) -> QuestionDeck | None:
        return self.deck_repository.get_deck(deck_id)

    def require_deck(self, deck_id: str) -> QuestionDeck:
        deck = self.get_deck(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return deck

    def get_default_decks(self) -> list[QuestionDeck]:
        return self.deck_repository.get_default_decks()

    def get_custom_decks(self) -> list[QuestionDeck]:
        return self.deck_repository.get_custom_decks()

    def add_question(self, question: Question, deck_id: str) -> Question:
        if not question.is_valid():
            raise InvalidQuestionError(["question text is required"])
        try:
            saved = self.question_repository.save_question(question, deck_id)
        except EntityNotFoundError:
            raise DeckNotFoundError(deck_id)
        self.load_decks()
        return saved

    def update_question(self, question: Question) -> Question:
        if not question.is_valid():
            raise InvalidQuestionError(["question text is required"])
        saved = self.question_repository.update_question(question)
        self.load_decks()
        return saved

    def remove_question(self, question_id: str):
        self.question_repository.delete_question(question_id)
        self.load_decks()

    def is_appropriate(self, deck: QuestionDeck) -> bool:
        """Denylist check using the service's configured terms."""
        return deck.is_appropriate(self.denylist)

    def seed_default_decks_if_needed(self) -> list[QuestionDeck]:
        """
        Store the built-in decks if no default deck exists yet.

        Returns the decks that were seeded (empty when nothing was needed).
        """
        if self.deck_repository.get_default_decks():
            return []
        seeded = default_decks()
        for deck in seeded:
            self.deck_repository.save_deck(deck)
        logger.info("Seeded %d default decks", len(seeded))
        self.load_decks()
        return seeded
