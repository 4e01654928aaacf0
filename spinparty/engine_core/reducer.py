"""
Reducer - Applies transitions to session state.

Design principles:
- Pure function: (state, transition) -> new state
- Never raises for a rejected input; the result says whether it applied
- Dispatches to the GameState transition methods
"""

from __future__ import annotations
from typing import Callable

from .state import GameState
from .transition import Transition, TransitionResult, TransitionType


Handler = Callable[..., GameState]


def _select_player(state: GameState, t: Transition, now: float | None) -> GameState:
    if t.player is not None:
        return state.select_player(t.player, now=now)
    if t.player_id is not None:
        player = state.get_player(t.player_id)
        if player is not None:
            return state.select_player(player, now=now)
    return state


def _add_player(state: GameState, t: Transition, now: float | None) -> GameState:
    if t.player is None:
        return state
    return state.add_player(t.player, now=now)


def _remove_player(state: GameState, t: Transition, now: float | None) -> GameState:
    player_id = t.player_id or (t.player.player_id if t.player is not None else None)
    if player_id is None:
        return state
    return state.remove_player(player_id, now=now)


def _mark_question_used(state: GameState, t: Transition, now: float | None) -> GameState:
    if t.question_id is None:
        return state
    return state.mark_question_used(t.question_id, now=now)


_HANDLERS: dict[TransitionType, Handler] = {
    TransitionType.START: lambda s, t, now: s.start(now=now),
    TransitionType.PAUSE: lambda s, t, now: s.pause(now=now),
    TransitionType.RESUME: lambda s, t, now: s.resume(now=now),
    TransitionType.END: lambda s, t, now: s.end(now=now),
    TransitionType.SELECT_PLAYER: _select_player,
    TransitionType.ADVANCE_TURN: lambda s, t, now: s.advance_turn(now=now),
    TransitionType.MARK_QUESTION_USED: _mark_question_used,
    TransitionType.RESET_QUESTIONS: lambda s, t, now: s.reset_questions(now=now),
    TransitionType.ADD_PLAYER: _add_player,
    TransitionType.REMOVE_PLAYER: _remove_player,
}


def apply_transition(
    state: GameState,
    transition: Transition,
    now: float | None = None,
) -> TransitionResult:
    """
    Apply a transition to a snapshot.

    Rejected transitions return the same snapshot object with
    applied=False.
    """
    handler = _HANDLERS[transition.transition_type]
    new_state = handler(state, transition, now)
    return TransitionResult(
        state=new_state,
        applied=new_state is not state,
        transition=transition,
        previous_phase=state.phase,
    )


def apply_all(
    state: GameState,
    transitions: list[Transition],
    now: float | None = None,
) -> GameState:
    """Apply transitions in order, skipping rejected ones."""
    for transition in transitions:
        state = apply_transition(state, transition, now=now).state
    return state
