"""
Pydantic Schemas - Snapshot and request/response models.

Two families of models live here:

1. Snapshot models (PlayerSchema, QuestionSchema, DeckSchema,
   GameStateSnapshot). They convert to and from the engine's value types
   and round-trip a full session through JSON without losing any field.
2. API models used by the REST layer.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- DECK_NOT_FOUND: Deck id unknown
- INVALID_DECK: Deck failed validation
- INVALID_QUESTION: Question failed validation
- INVALID_TRANSITION: Transition request is malformed
- VALIDATION_ERROR: Request body or parameters failed validation
- INTERNAL_ERROR: Deck store unavailable or failed
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..content import DifficultyLevel, Player, Question, QuestionCategory, QuestionDeck
from ..engine_core import GamePhase, GameState, TransitionType


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    DECK_NOT_FOUND = "DECK_NOT_FOUND"
    INVALID_DECK = "INVALID_DECK"
    INVALID_QUESTION = "INVALID_QUESTION"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Snapshot Models
# =============================================================================

class PlayerSchema(BaseModel):
    """A player as stored in a snapshot."""
    player_id: str
    name: str
    is_active: bool = True

    model_config = {"from_attributes": True}

    @classmethod
    def from_domain(cls, player: Player) -> PlayerSchema:
        return cls(player_id=player.player_id, name=player.name, is_active=player.is_active)

    def to_domain(self) -> Player:
        return Player(name=self.name, player_id=self.player_id, is_active=self.is_active)


class QuestionSchema(BaseModel):
    """A question as stored in a snapshot."""
    question_id: str
    text: str
    category: QuestionCategory = QuestionCategory.CUSTOM
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM

    model_config = {"from_attributes": True}

    @classmethod
    def from_domain(cls, question: Question) -> QuestionSchema:
        return cls(
            question_id=question.question_id,
            text=question.text,
            category=question.category,
            difficulty=question.difficulty,
        )

    def to_domain(self) -> Question:
        return Question(
            text=self.text,
            category=self.category,
            difficulty=self.difficulty,
            question_id=self.question_id,
        )


class DeckSchema(BaseModel):
    """A deck with all its questions and metadata."""
    deck_id: str
    name: str
    description: str
    questions: list[QuestionSchema] = Field(default_factory=list)
    is_default: bool = False
    is_public: bool = False
    created_by: Optional[str] = None
    download_count: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    created_date: float
    last_modified: float

    @classmethod
    def from_domain(cls, deck: QuestionDeck) -> DeckSchema:
        return cls(
            deck_id=deck.deck_id,
            name=deck.name,
            description=deck.description,
            questions=[QuestionSchema.from_domain(q) for q in deck.questions],
            is_default=deck.is_default,
            is_public=deck.is_public,
            created_by=deck.created_by,
            download_count=deck.download_count,
            rating=deck.rating,
            created_date=deck.created_date,
            last_modified=deck.last_modified,
        )

    def to_domain(self) -> QuestionDeck:
        return QuestionDeck(
            deck_id=self.deck_id,
            name=self.name,
            description=self.description,
            questions=tuple(q.to_domain() for q in self.questions),
            is_default=self.is_default,
            is_public=self.is_public,
            created_by=self.created_by,
            download_count=self.download_count,
            rating=self.rating,
            created_date=self.created_date,
            last_modified=self.last_modified,
        )


class GameStateSnapshot(BaseModel):
    """
    Full session snapshot.

    Usage:
        data = GameStateSnapshot.from_domain(state).model_dump_json()
        state = GameStateSnapshot.model_validate_json(data).to_domain()
    """
    session_id: str
    phase: GamePhase
    players: list[PlayerSchema]
    deck: DeckSchema
    current_player: Optional[PlayerSchema] = None
    used_questions: set[str] = Field(default_factory=set)
    start_time: Optional[float] = None
    last_activity_time: float

    @classmethod
    def from_domain(cls, state: GameState) -> GameStateSnapshot:
        return cls(
            session_id=state.session_id,
            phase=state.phase,
            players=[PlayerSchema.from_domain(p) for p in state.players],
            deck=DeckSchema.from_domain(state.deck),
            current_player=(
                PlayerSchema.from_domain(state.current_player)
                if state.current_player is not None else None
            ),
            used_questions=set(state.used_questions),
            start_time=state.start_time,
            last_activity_time=state.last_activity_time,
        )

    def to_domain(self) -> GameState:
        return GameState(
            players=tuple(p.to_domain() for p in self.players),
            deck=self.deck.to_domain(),
            current_player=self.current_player.to_domain() if self.current_player else None,
            used_questions=frozenset(self.used_questions),
            phase=self.phase,
            session_id=self.session_id,
            start_time=self.start_time,
            last_activity_time=self.last_activity_time,
        )


def dump_state(state: GameState) -> str:
    """Serialize a snapshot to JSON."""
    return GameStateSnapshot.from_domain(state).model_dump_json()


def load_state(data: str | bytes) -> GameState:
    """Parse a snapshot serialized with dump_state()."""
    return GameStateSnapshot.model_validate_json(data).to_domain()


# =============================================================================
# Shared API Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_active: bool = True
    is_current_turn: bool = False


class QuestionInfo(BaseModel):
    """A question as shown to players."""
    question_id: str
    text: str
    category: str
    difficulty: str
    difficulty_rank: int


class DeckSummary(BaseModel):
    """Deck listing entry."""
    deck_id: str
    name: str
    description: str
    question_count: int
    is_default: bool
    is_public: bool
    created_by: Optional[str] = None
    rating: float = 0.0
    last_modified: float
    is_appropriate: bool = Field(True, description="False when the configured denylist matches the deck")


# =============================================================================
# Request Models
# =============================================================================

class QuestionCreate(BaseModel):
    """A new question for a deck."""
    text: str = Field(min_length=1)
    category: QuestionCategory = QuestionCategory.CUSTOM
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM


class CreateDeckRequest(BaseModel):
    """Request to create a user deck."""
    name: str
    description: str
    questions: list[QuestionCreate] = Field(default_factory=list)
    is_public: bool = False
    created_by: Optional[str] = None


class CreateSessionRequest(BaseModel):
    """Request to start a session on a deck."""
    deck_id: str
    player_names: list[str] = Field(default_factory=list, description="Display names, in seating order")
    start: bool = Field(False, description="Start immediately if the game can start")


class TransitionRequest(BaseModel):
    """
    A state-machine input.

    player_id is used by select_player and remove_player, player_name by
    add_player, question_id by mark_question_used.
    """
    transition_type: TransitionType
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    question_id: Optional[str] = None


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Session status as shown by the app."""
    session_id: str
    phase: GamePhase
    phase_display: str
    is_active: bool
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player_id: Optional[str] = None
    deck_id: str
    deck_name: str
    questions_total: int
    questions_remaining: int
    questions_used_fraction: float = Field(ge=0.0, le=1.0)
    can_start: bool
    is_valid: bool
    start_time: Optional[float] = None
    last_activity_time: float
    game_duration: Optional[float] = None
    api_version: str = "v1"


class TransitionResponse(BaseModel):
    """Result of a transition request."""
    applied: bool
    transition_type: TransitionType
    previous_phase: GamePhase
    session: SessionResponse


class NextQuestionResponse(BaseModel):
    """A question handed out to the current player."""
    session_id: str
    question: Optional[QuestionInfo] = None
    reshuffled: bool = False
    questions_remaining: int


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class DeckListResponse(BaseModel):
    decks: list[DeckSummary]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    env: str
    active_sessions: int
    decks: int


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
