"""
Transitions - Inputs to the session state machine, and their results.

A Transition names one state-machine input plus its argument (a player,
a player id or a question id). Callers that receive inputs as data (API
requests, CLI scripts) build Transition values and hand them to the
reducer instead of calling GameState methods directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..content import Player

if TYPE_CHECKING:
    from .state import GameState, GamePhase


class TransitionType(Enum):
    """Inputs the session state machine understands."""
    # Lifecycle
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    END = "end"

    # Turn flow
    SELECT_PLAYER = "select_player"
    ADVANCE_TURN = "advance_turn"

    # Question rotation
    MARK_QUESTION_USED = "mark_question_used"
    RESET_QUESTIONS = "reset_questions"

    # Roster
    ADD_PLAYER = "add_player"
    REMOVE_PLAYER = "remove_player"


@dataclass(frozen=True)
class Transition:
    """
    A single input to apply to a GameState.

    Only the field relevant to the transition type is set.
    """
    transition_type: TransitionType
    player: Player | None = None
    player_id: str | None = None
    question_id: str | None = None

    @classmethod
    def start(cls) -> Transition:
        return cls(TransitionType.START)

    @classmethod
    def pause(cls) -> Transition:
        return cls(TransitionType.PAUSE)

    @classmethod
    def resume(cls) -> Transition:
        return cls(TransitionType.RESUME)

    @classmethod
    def end(cls) -> Transition:
        return cls(TransitionType.END)

    @classmethod
    def select_player(cls, player: Player) -> Transition:
        return cls(TransitionType.SELECT_PLAYER, player=player)

    @classmethod
    def advance_turn(cls) -> Transition:
        return cls(TransitionType.ADVANCE_TURN)

    @classmethod
    def mark_question_used(cls, question_id: str) -> Transition:
        return cls(TransitionType.MARK_QUESTION_USED, question_id=question_id)

    @classmethod
    def reset_questions(cls) -> Transition:
        return cls(TransitionType.RESET_QUESTIONS)

    @classmethod
    def add_player(cls, player: Player) -> Transition:
        return cls(TransitionType.ADD_PLAYER, player=player)

    @classmethod
    def remove_player(cls, player_id: str) -> Transition:
        return cls(TransitionType.REMOVE_PLAYER, player_id=player_id)


@dataclass(frozen=True)
class TransitionResult:
    """
    Result of applying a transition.

    applied is False when the guard rejected the input; state is then
    the unchanged input snapshot. previous_phase is the phase of the
    snapshot the transition was applied to.
    """
    state: GameState
    applied: bool
    transition: Transition
    previous_phase: GamePhase | None = None

    @property
    def rejected(self) -> bool:
        return not self.applied
