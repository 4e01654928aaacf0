"""
API Service - Business logic layer between the REST API and the engine.

The service:
1. Translates API requests into deck-service and session-manager calls
2. Turns transition requests into Transition values
3. Formats snapshots for the app

This layer is framework-agnostic (the FastAPI app is a thin shell over it).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from ..config import Settings
from ..content import Player, Question, QuestionDeck
from ..engine_core import GameState, Transition, TransitionType
from ..repository import DeckNotFoundError, DeckService
from ..session import SessionManager
from .schemas import (
    # Requests
    CreateDeckRequest,
    CreateSessionRequest,
    QuestionCreate,
    TransitionRequest,
    # Responses
    DeckSummary,
    GameStateSnapshot,
    NextQuestionResponse,
    PlayerInfo,
    QuestionInfo,
    SessionResponse,
    TransitionResponse,
)

logger = logging.getLogger(__name__)


class InvalidTransitionRequest(ValueError):
    """A transition request is missing the argument its type needs."""


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        deck_id = service.list_decks()[0].deck_id
        session = service.create_session(CreateSessionRequest(deck_id=deck_id, player_names=["A", "B"]))
        service.apply_transition(session.session_id, TransitionRequest(transition_type="start"))
    """
    settings: Settings = field(default_factory=Settings)
    deck_service: DeckService | None = None
    session_manager: SessionManager | None = None
    rng: random.Random | None = None

    def __post_init__(self):
        if self.deck_service is None:
            self.deck_service = DeckService(denylist=self.settings.denylist)
        if self.session_manager is None:
            self.session_manager = SessionManager(stale_seconds=self.settings.stale_seconds)
        if self.settings.seed_default_decks:
            self.deck_service.seed_default_decks_if_needed()

    # =========================================================================
    # Decks
    # =========================================================================

    def list_decks(self) -> list[DeckSummary]:
        return [self._deck_summary(d) for d in self.deck_service.load_decks()]

    def get_deck(self, deck_id: str) -> QuestionDeck:
        return self.deck_service.require_deck(deck_id)

    def create_deck(self, request: CreateDeckRequest) -> DeckSummary:
        deck = QuestionDeck.create(
            name=request.name,
            description=request.description,
            questions=[self._new_question(q) for q in request.questions],
            is_public=request.is_public,
            created_by=request.created_by,
        )
        return self._deck_summary(self.deck_service.create_deck(deck))

    def delete_deck(self, deck_id: str):
        self.deck_service.delete_deck(deck_id)

    def add_question(self, deck_id: str, request: QuestionCreate) -> QuestionInfo:
        question = self.deck_service.add_question(self._new_question(request), deck_id)
        return self._question_info(question)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        deck = self.deck_service.get_deck(request.deck_id)
        if deck is None:
            raise DeckNotFoundError(request.deck_id)
        self.cleanup()
        session = self.session_manager.create_session(
            deck=deck,
            player_names=request.player_names,
            start=request.start,
        )
        return self._state_to_response(session.state)

    def get_session(self, session_id: str) -> SessionResponse:
        return self._state_to_response(self.session_manager.get_state(session_id))

    def get_snapshot(self, session_id: str) -> GameStateSnapshot:
        return GameStateSnapshot.from_domain(self.session_manager.get_state(session_id))

    def restore_snapshot(self, snapshot: GameStateSnapshot) -> SessionResponse:
        session = self.session_manager.restore_session(snapshot.to_domain())
        return self._state_to_response(session.state)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def apply_transition(self, session_id: str, request: TransitionRequest) -> TransitionResponse:
        transition = self._build_transition(request)
        result = self.session_manager.apply(session_id, transition)
        return TransitionResponse(
            applied=result.applied,
            transition_type=request.transition_type,
            previous_phase=result.previous_phase,
            session=self._state_to_response(result.state),
        )

    def next_question(self, session_id: str) -> NextQuestionResponse:
        draw = self.session_manager.draw_question(session_id, rng=self.rng)
        return NextQuestionResponse(
            session_id=session_id,
            question=self._question_info(draw.question) if draw.question else None,
            reshuffled=draw.reshuffled,
            questions_remaining=len(draw.state.unused_questions()),
        )

    def cleanup(self) -> list[str]:
        """Drop ended sessions and those idle past settings.stale_seconds."""
        removed = self.session_manager.cleanup_stale_sessions()
        if removed:
            logger.info("Removed %d stale sessions", len(removed))
        return removed

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _build_transition(self, request: TransitionRequest) -> Transition:
        kind = request.transition_type
        if kind == TransitionType.SELECT_PLAYER:
            if not request.player_id:
                raise InvalidTransitionRequest("select_player requires player_id")
            return Transition(kind, player_id=request.player_id)
        if kind == TransitionType.REMOVE_PLAYER:
            if not request.player_id:
                raise InvalidTransitionRequest("remove_player requires player_id")
            return Transition.remove_player(request.player_id)
        if kind == TransitionType.ADD_PLAYER:
            if not request.player_name:
                raise InvalidTransitionRequest("add_player requires player_name")
            return Transition.add_player(Player(name=request.player_name))
        if kind == TransitionType.MARK_QUESTION_USED:
            if not request.question_id:
                raise InvalidTransitionRequest("mark_question_used requires question_id")
            return Transition.mark_question_used(request.question_id)
        return Transition(kind)

    @staticmethod
    def _new_question(request: QuestionCreate) -> Question:
        return Question(text=request.text, category=request.category, difficulty=request.difficulty)

    @staticmethod
    def _question_info(question: Question) -> QuestionInfo:
        return QuestionInfo(
            question_id=question.question_id,
            text=question.sanitized_text(),
            category=question.category.display_name,
            difficulty=question.difficulty.display_name,
            difficulty_rank=question.difficulty.sort_order,
        )

    def _deck_summary(self, deck: QuestionDeck) -> DeckSummary:
        return DeckSummary(
            deck_id=deck.deck_id,
            name=deck.sanitized_name(),
            description=deck.sanitized_description(),
            question_count=deck.question_count,
            is_default=deck.is_default,
            is_public=deck.is_public,
            created_by=deck.created_by,
            rating=deck.rating,
            last_modified=deck.last_modified,
            is_appropriate=self.deck_service.is_appropriate(deck),
        )

    def _state_to_response(self, state: GameState) -> SessionResponse:
        """Convert a session snapshot to SessionResponse."""
        current_id = state.current_player.player_id if state.current_player else None
        players = [
            PlayerInfo(
                player_id=p.player_id,
                name=p.sanitized_name(),
                is_active=p.is_active,
                is_current_turn=p.player_id == current_id,
            )
            for p in state.players
        ]
        return SessionResponse(
            session_id=state.session_id,
            phase=state.phase,
            phase_display=state.phase.display_name,
            is_active=state.phase.is_active,
            players=players,
            current_player_id=current_id,
            deck_id=state.deck.deck_id,
            deck_name=state.deck.sanitized_name(),
            questions_total=state.deck.question_count,
            questions_remaining=len(state.unused_questions()),
            questions_used_fraction=state.questions_used_percentage(),
            can_start=state.can_start(),
            is_valid=state.is_valid(),
            start_time=state.start_time,
            last_activity_time=state.last_activity_time,
            game_duration=state.game_duration(),
        )

