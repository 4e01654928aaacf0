"""
Session Manager - Owns the authoritative snapshot of each running game.

LIFECYCLE:
1. Caller picks a deck and names the players -> session created (phase SETUP)
2. During the game:
   - UI gestures become transitions (start, spin result, next turn, ...)
   - Each transition is applied to the session's current snapshot
   - The new snapshot replaces the old one
3. Game ends or is abandoned -> session removed from memory

SERIALIZATION:
- The engine core is lock-free and pure
- This manager applies transitions one at a time per manager, so two
  near-simultaneous inputs never start from the same stale snapshot

Sessions are in-memory only. Persisting a snapshot is the job of
whoever calls snapshot serialization (see api.schemas).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable
import logging
import random
import threading
import time

from ..content import Player, Question, QuestionDeck
from ..engine_core import (
    DEFAULT_STALE_SECONDS,
    GamePhase,
    GameState,
    Transition,
    TransitionResult,
    apply_transition,
)

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or the session has ended."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")

    def __str__(self) -> str:
        return self.args[0]


@dataclass
class Session:
    """
    A running game.

    Contains:
    - The current snapshot (replaced on every applied transition)
    - Session metadata (creation time, counters)
    """
    session_id: str
    state: GameState
    created_at: float

    transitions_applied: int = 0
    transitions_rejected: int = 0
    questions_drawn: int = 0
    last_question: Question | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def is_active(self) -> bool:
        """A session is active until it has ended."""
        return self.state.phase != GamePhase.ENDED


@dataclass
class DrawResult:
    """A question handed to the current player."""
    question: Question | None
    state: GameState
    reshuffled: bool = False


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from a deck and players
    - Apply transitions atomically against the current snapshot
    - Clean up ended and stale sessions
    """

    def __init__(self, stale_seconds: float = DEFAULT_STALE_SECONDS):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.RLock()
        self.stale_seconds = stale_seconds

    def create_session(
        self,
        deck: QuestionDeck,
        players: Iterable[Player] | None = None,
        player_names: Iterable[str] | None = None,
        start: bool = False,
    ) -> Session:
        """
        Create a new game session.

        Args:
            deck: Deck to draw questions from
            players: Existing Player values
            player_names: Names to create players from (appended after players)
            start: Start the game immediately if it can start

        Returns:
            New Session in SETUP (or SPINNING when start=True and allowed)
        """
        roster = list(players or [])
        roster.extend(Player(name=name) for name in player_names or [])

        state = GameState.create(players=roster, deck=deck)
        if start:
            state = state.start()

        session = Session(
            session_id=state.session_id,
            state=state,
            created_at=time.time(),
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(
            "Created session %s with %d players on deck '%s'",
            session.session_id, len(roster), deck.name,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def get_state(self, session_id: str) -> GameState:
        return self.require_session(session_id).state

    def apply(self, session_id: str, transition: Transition) -> TransitionResult:
        """Apply one transition to the session's current snapshot."""
        with self._lock:
            session = self.require_session(session_id)
            result = apply_transition(session.state, transition)
            session.state = result.state
            if result.applied:
                session.transitions_applied += 1
            else:
                session.transitions_rejected += 1
        if result.rejected:
            logger.debug(
                "Session %s rejected %s in phase %s",
                session_id, transition.transition_type.value, result.state.phase.value,
            )
        return result

    def draw_question(self, session_id: str, rng: random.Random | None = None) -> DrawResult:
        """
        Hand out the next unused question and mark it used.

        When the deck is exhausted the used set is reset first, so the
        deck cycles without repeats until every question has been seen.
        """
        with self._lock:
            session = self.require_session(session_id)
            state = session.state
            reshuffled = False
            if not state.has_unused_questions():
                state = state.reset_questions()
                reshuffled = True
            question = state.next_available_question(rng)
            if question is not None:
                state = state.mark_question_used(question.question_id)
                session.questions_drawn += 1
            session.state = state
            session.last_question = question
        if reshuffled:
            logger.info("Session %s exhausted its deck, questions reset", session_id)
        return DrawResult(question=question, state=state, reshuffled=reshuffled)

    def replace_state(self, session_id: str, state: GameState) -> Session:
        """Install a snapshot restored from storage."""
        with self._lock:
            session = self.require_session(session_id)
            session.state = state
            return session

    def restore_session(self, state: GameState) -> Session:
        """Register a snapshot (e.g. loaded from JSON) as a running session."""
        session = Session(session_id=state.session_id, state=state, created_at=time.time())
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Restored session %s in phase %s", state.session_id, state.phase.value)
        return session

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                return False
            session.state = session.state.end()
            session.metadata["end_reason"] = reason
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        with self._lock:
            return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(
        self,
        threshold: float | None = None,
        now: float | None = None,
    ) -> list[str]:
        """
        Remove sessions with no activity for longer than threshold seconds,
        and sessions that have already ended.

        Returns the removed session ids.
        """
        threshold = self.stale_seconds if threshold is None else threshold
        with self._lock:
            to_remove = [
                sid for sid, session in self._sessions.items()
                if not session.is_active() or session.state.is_stale(threshold, now=now)
            ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
