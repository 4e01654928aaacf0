"""
Question Rotation - Pick questions without repeating until the deck runs out.

The rotation rule is a set difference: deck questions minus the ids
already used this session. Once the used set is as large as the deck,
the caller resets it and the whole deck becomes available again.

Exhaustion and the used fraction are measured by the size of the used
set against the deck size.
"""

from __future__ import annotations
from typing import AbstractSet
import random

from ..content import Question, QuestionDeck


def unused_questions(deck: QuestionDeck, used: AbstractSet[str]) -> list[Question]:
    """Questions not yet used, in deck order."""
    return [q for q in deck.questions if q.question_id not in used]


def has_unused(deck: QuestionDeck, used: AbstractSet[str]) -> bool:
    return len(used) < deck.question_count


def next_available(
    deck: QuestionDeck,
    used: AbstractSet[str],
    rng: random.Random | None = None,
) -> Question | None:
    """
    Pick one unused question uniformly at random.

    Returns None when every question in the deck has been used.
    """
    available = unused_questions(deck, used)
    if not available:
        return None
    return (rng or random).choice(available)


def used_fraction(deck: QuestionDeck, used: AbstractSet[str]) -> float:
    """Used-set size over deck size, capped at 1.0. 0.0 for an empty deck."""
    if deck.is_empty:
        return 0.0
    return min(len(used) / deck.question_count, 1.0)
