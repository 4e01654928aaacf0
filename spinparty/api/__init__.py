"""
API Module - App-facing interface.

Exposes the engine via REST for the mobile/web client:
1. Browses and edits decks
2. Creates game sessions
3. Sends state-machine inputs as the players spin and answer
4. Saves and restores JSON snapshots

All game state is session-scoped and in-memory.
"""

from .schemas import (
    # Snapshots
    PlayerSchema,
    QuestionSchema,
    DeckSchema,
    GameStateSnapshot,
    dump_state,
    load_state,
    # Requests
    CreateDeckRequest,
    CreateSessionRequest,
    QuestionCreate,
    TransitionRequest,
    # Responses
    SessionResponse,
    TransitionResponse,
    NextQuestionResponse,
    ErrorResponse,
    ErrorCode,
)
from .service import APIService, InvalidTransitionRequest
from .app import create_app

__all__ = [
    # Snapshots
    "PlayerSchema",
    "QuestionSchema",
    "DeckSchema",
    "GameStateSnapshot",
    "dump_state",
    "load_state",
    # Requests
    "CreateDeckRequest",
    "CreateSessionRequest",
    "QuestionCreate",
    "TransitionRequest",
    # Responses
    "SessionResponse",
    "TransitionResponse",
    "NextQuestionResponse",
    "ErrorResponse",
    "ErrorCode",
    # Service
    "APIService",
    "InvalidTransitionRequest",
    "create_app",
]
