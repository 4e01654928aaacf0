"""
Game State - Immutable snapshot of one party game session.

Design principles:
- Immutable: every transition returns a new snapshot
- Total: a transition whose guard fails returns the same snapshot unchanged
- Serializable: every field round-trips through the snapshot schema
- No I/O: the holder of the snapshot decides when to persist or display it

Phases:
    SETUP -> SPINNING -> QUESTIONING -> SPINNING -> ...
    PAUSED is entered from any active phase and left via resume()
    ENDED is terminal and reachable from every phase
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable
import random
import time

from ..content import Player, Question, QuestionDeck, new_id
from . import rotation


DEFAULT_STALE_SECONDS = 1800.0
MIN_PLAYERS = 2


class GamePhase(Enum):
    """Stages of a session."""
    SETUP = "setup"
    SPINNING = "spinning"
    QUESTIONING = "questioning"
    PAUSED = "paused"
    ENDED = "ended"

    @property
    def display_name(self) -> str:
        return _PHASE_NAMES[self]

    @property
    def is_active(self) -> bool:
        return self not in (GamePhase.PAUSED, GamePhase.ENDED)


_PHASE_NAMES = {
    GamePhase.SETUP: "Setup",
    GamePhase.SPINNING: "Spinning",
    GamePhase.QUESTIONING: "Question",
    GamePhase.PAUSED: "Paused",
    GamePhase.ENDED: "Ended",
}


def _now(now: float | None) -> float:
    return time.time() if now is None else now


@dataclass(frozen=True)
class GameState:
    """
    Complete session state at a point in time.

    The caller (UI, session manager) owns the current snapshot and
    replaces it with whatever a transition returns. Callers that need to
    know whether a transition was accepted compare phase before/after,
    or use reducer.apply_transition() which reports it.
    """
    players: tuple[Player, ...]
    deck: QuestionDeck
    current_player: Player | None = None
    used_questions: frozenset[str] = frozenset()
    phase: GamePhase = GamePhase.SETUP
    session_id: str = field(default_factory=new_id)
    start_time: float | None = None
    last_activity_time: float = field(default_factory=time.time)

    def __post_init__(self):
        if not isinstance(self.players, tuple):
            object.__setattr__(self, "players", tuple(self.players))
        if not isinstance(self.used_questions, frozenset):
            object.__setattr__(self, "used_questions", frozenset(self.used_questions))

    @classmethod
    def create(
        cls,
        players: Iterable[Player],
        deck: QuestionDeck,
        phase: GamePhase = GamePhase.SETUP,
        now: float | None = None,
    ) -> GameState:
        """Create a fresh session snapshot."""
        return cls(
            players=tuple(players),
            deck=deck,
            phase=phase,
            last_activity_time=_now(now),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def has_player(self, player_id: str) -> bool:
        return self.get_player(player_id) is not None

    def is_valid(self) -> bool:
        """Structural invariants of a session."""
        if len(self.players) < MIN_PLAYERS:
            return False
        if not all(p.is_valid() for p in self.players):
            return False
        if not self.deck.is_valid():
            return False
        if self.current_player is not None and self.current_player not in self.players:
            return False
        return True

    def can_start(self) -> bool:
        return (
            len(self.players) >= MIN_PLAYERS
            and not self.deck.is_empty
            and self.phase == GamePhase.SETUP
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(self, now: float | None = None) -> GameState:
        """SETUP -> SPINNING, recording the start time."""
        if not self.can_start():
            return self
        ts = _now(now)
        return self._copy_with(phase=GamePhase.SPINNING, start_time=ts, last_activity_time=ts)

    def pause(self, now: float | None = None) -> GameState:
        if not self.phase.is_active:
            return self
        return self._copy_with(phase=GamePhase.PAUSED, last_activity_time=_now(now))

    def resume(self, now: float | None = None) -> GameState:
        """Back to QUESTIONING if a player was selected, otherwise SPINNING."""
        if self.phase != GamePhase.PAUSED:
            return self
        phase = GamePhase.QUESTIONING if self.current_player is not None else GamePhase.SPINNING
        return self._copy_with(phase=phase, last_activity_time=_now(now))

    def end(self, now: float | None = None) -> GameState:
        return self._copy_with(
            phase=GamePhase.ENDED,
            current_player=None,
            last_activity_time=_now(now),
        )

    def select_player(self, player: Player, now: float | None = None) -> GameState:
        """Wheel landed on a player: SPINNING -> QUESTIONING."""
        if self.phase != GamePhase.SPINNING or player not in self.players:
            return self
        # Keep the session's own copy of the player
        member = self.get_player(player.player_id)
        return self._copy_with(
            current_player=member,
            phase=GamePhase.QUESTIONING,
            last_activity_time=_now(now),
        )

    def mark_question_used(self, question_id: str, now: float | None = None) -> GameState:
        return self._copy_with(
            used_questions=self.used_questions | {question_id},
            last_activity_time=_now(now),
        )

    def advance_turn(self, now: float | None = None) -> GameState:
        """QUESTIONING -> SPINNING, clearing the selected player."""
        if self.phase != GamePhase.QUESTIONING:
            return self
        return self._copy_with(
            current_player=None,
            phase=GamePhase.SPINNING,
            last_activity_time=_now(now),
        )

    def reset_questions(self, now: float | None = None) -> GameState:
        return self._copy_with(used_questions=frozenset(), last_activity_time=_now(now))

    def add_player(self, player: Player, now: float | None = None) -> GameState:
        if player in self.players:
            return self
        return self._copy_with(players=self.players + (player,), last_activity_time=_now(now))

    def remove_player(self, player_id: str, now: float | None = None) -> GameState:
        """
        Remove a player by id.

        Removing the selected player clears the selection and, mid-question,
        sends the game back to spinning. Dropping below two players is
        allowed; is_valid() reports it.
        """
        new_players = tuple(p for p in self.players if p.player_id != player_id)
        changes = {"players": new_players, "last_activity_time": _now(now)}
        if self.current_player is not None and self.current_player.player_id == player_id:
            changes["current_player"] = None
            if self.phase == GamePhase.QUESTIONING:
                changes["phase"] = GamePhase.SPINNING
        return self._copy_with(**changes)

    # =========================================================================
    # Question rotation
    # =========================================================================

    def has_unused_questions(self) -> bool:
        return rotation.has_unused(self.deck, self.used_questions)

    def next_available_question(self, rng: random.Random | None = None) -> Question | None:
        return rotation.next_available(self.deck, self.used_questions, rng)

    def unused_questions(self) -> list[Question]:
        return rotation.unused_questions(self.deck, self.used_questions)

    def questions_used_percentage(self) -> float:
        return rotation.used_fraction(self.deck, self.used_questions)

    # =========================================================================
    # Statistics
    # =========================================================================

    def game_duration(self, now: float | None = None) -> float | None:
        """Seconds since start, or None if the game hasn't started."""
        if self.start_time is None:
            return None
        return _now(now) - self.start_time

    def time_since_last_activity(self, now: float | None = None) -> float:
        return _now(now) - self.last_activity_time

    def is_stale(self, threshold: float = DEFAULT_STALE_SECONDS, now: float | None = None) -> bool:
        """True when there has been no activity for longer than threshold seconds."""
        return self.time_since_last_activity(now) > threshold

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
