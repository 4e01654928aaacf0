"""
Pytest fixtures for Spin Party tests.
"""

import pytest

from ..content import (
    DifficultyLevel,
    Player,
    Question,
    QuestionCategory,
    QuestionDeck,
    sample_players,
    sample_questions,
)
from ..engine_core.state import GameState, GamePhase


NOW = 1_700_000_000.0


@pytest.fixture
def now() -> float:
    """A fixed clock value so timestamps can be asserted exactly."""
    return NOW


@pytest.fixture
def players() -> list[Player]:
    return sample_players(4)


@pytest.fixture
def deck() -> QuestionDeck:
    """A four-question deck with fixed timestamps."""
    return QuestionDeck(
        deck_id="deck-sample",
        name="Sample Deck",
        description="A sample deck for testing",
        questions=tuple(sample_questions()),
        created_date=NOW - 100,
        last_modified=NOW - 100,
    )


@pytest.fixture
def single_question_deck() -> QuestionDeck:
    return QuestionDeck(
        deck_id="deck-single",
        name="Tiny",
        description="Only one prompt",
        questions=(
            Question(
                text="What's your favorite movie?",
                category=QuestionCategory.CUSTOM,
                difficulty=DifficultyLevel.EASY,
                question_id="q-only",
            ),
        ),
        created_date=NOW - 100,
        last_modified=NOW - 100,
    )


@pytest.fixture
def empty_deck() -> QuestionDeck:
    return QuestionDeck(
        deck_id="deck-empty",
        name="Empty",
        description="No questions yet",
        created_date=NOW - 100,
        last_modified=NOW - 100,
    )


@pytest.fixture
def setup_state(players, deck) -> GameState:
    """A fresh 4-player session in SETUP."""
    return GameState.create(players=players, deck=deck, now=NOW - 10)


@pytest.fixture
def spinning_state(setup_state) -> GameState:
    state = setup_state.start(now=NOW - 5)
    assert state.phase == GamePhase.SPINNING
    return state


@pytest.fixture
def questioning_state(spinning_state, players) -> GameState:
    state = spinning_state.select_player(players[0], now=NOW - 1)
    assert state.phase == GamePhase.QUESTIONING
    return state
