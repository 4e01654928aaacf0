"""
Built-in content: the default decks shipped with the game, plus sample
players and decks used for previews, demos and tests.

Each call builds fresh values (new ids), like the factories in
games/setup code.
"""

from __future__ import annotations

from .deck import QuestionDeck
from .player import Player
from .question import DifficultyLevel, Question, QuestionCategory


SAMPLE_PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Henry"]

TRUTH_OR_DARE_PROMPTS = [
    "What's your most embarrassing moment?",
    "What's the weirdest thing you've ever eaten?",
    "What's your biggest fear?",
    "What's the most trouble you've ever been in?",
    "What's your most unusual talent?",
    "Sing your favorite song out loud",
    "Do your best impression of someone in the room",
    "Dance for 30 seconds without music",
    "Tell a joke that makes everyone laugh",
    "Act out your favorite movie scene",
]

WOULD_YOU_RATHER_PROMPTS = [
    "Would you rather have the ability to fly or be invisible?",
    "Would you rather live in the past or the future?",
    "Would you rather be able to read minds or predict the future?",
    "Would you rather have unlimited money or unlimited time?",
    "Would you rather be famous or anonymous?",
    "Would you rather live underwater or in space?",
    "Would you rather have super strength or super speed?",
    "Would you rather never have to sleep or never have to eat?",
    "Would you rather be able to speak all languages or play all instruments?",
    "Would you rather have the power to heal others or bring back the dead?",
]


def sample_players(count: int = 4) -> list[Player]:
    """Create up to eight named sample players."""
    return [Player(name=name) for name in SAMPLE_PLAYER_NAMES[:count]]


def default_truth_or_dare_questions() -> list[Question]:
    # Truths first (medium), then dares (easy)
    return [
        Question(
            text=text,
            category=QuestionCategory.TRUTH_OR_DARE,
            difficulty=DifficultyLevel.MEDIUM if index < 5 else DifficultyLevel.EASY,
        )
        for index, text in enumerate(TRUTH_OR_DARE_PROMPTS)
    ]


def default_would_you_rather_questions() -> list[Question]:
    questions = []
    for index, text in enumerate(WOULD_YOU_RATHER_PROMPTS):
        if index < 3:
            difficulty = DifficultyLevel.EASY
        elif index < 7:
            difficulty = DifficultyLevel.MEDIUM
        else:
            difficulty = DifficultyLevel.HARD
        questions.append(
            Question(text=text, category=QuestionCategory.WOULD_YOU_RATHER, difficulty=difficulty)
        )
    return questions


def default_truth_or_dare_deck() -> QuestionDeck:
    return QuestionDeck.create(
        name="Truth or Dare",
        description="Classic party game with truth questions and fun dares",
        questions=default_truth_or_dare_questions(),
        is_default=True,
    )


def default_would_you_rather_deck() -> QuestionDeck:
    return QuestionDeck.create(
        name="Would You Rather",
        description="Thought-provoking choices that spark great conversations",
        questions=default_would_you_rather_questions(),
        is_default=True,
    )


def default_decks() -> list[QuestionDeck]:
    """All system-provided decks."""
    return [default_truth_or_dare_deck(), default_would_you_rather_deck()]


def sample_questions() -> list[Question]:
    return [
        Question(
            text="What's your most embarrassing moment?",
            category=QuestionCategory.TRUTH_OR_DARE,
            difficulty=DifficultyLevel.MEDIUM,
        ),
        Question(
            text="Would you rather have the ability to fly or be invisible?",
            category=QuestionCategory.WOULD_YOU_RATHER,
            difficulty=DifficultyLevel.EASY,
        ),
        Question(
            text="Tell us about a time you broke the rules",
            category=QuestionCategory.TRUTH_OR_DARE,
            difficulty=DifficultyLevel.HARD,
        ),
        Question(
            text="Would you rather live in the past or the future?",
            category=QuestionCategory.WOULD_YOU_RATHER,
            difficulty=DifficultyLevel.MEDIUM,
        ),
    ]


def sample_deck() -> QuestionDeck:
    return QuestionDeck.create(
        name="Sample Deck",
        description="A sample deck for testing",
        questions=sample_questions(),
    )


def sample_community_decks() -> list[QuestionDeck]:
    """Public user-created decks, as a community listing would return them."""
    return [
        QuestionDeck.create(
            name="Icebreakers",
            description="Perfect questions to get to know new people",
            questions=[
                Question(text="What's your favorite childhood memory?", difficulty=DifficultyLevel.EASY),
                Question(
                    text="If you could have dinner with anyone, who would it be?",
                    difficulty=DifficultyLevel.MEDIUM,
                ),
            ],
            is_public=True,
            created_by="PartyMaster",
        ),
        QuestionDeck.create(
            name="Deep Thoughts",
            description="Questions that make you think",
            questions=[
                Question(text="What's the meaning of life to you?", difficulty=DifficultyLevel.HARD),
                Question(
                    text="What would you do if you knew you couldn't fail?",
                    difficulty=DifficultyLevel.MEDIUM,
                ),
            ],
            is_public=True,
            created_by="Philosopher",
        ),
    ]
