"""
FastAPI Application - REST API for the party game app.

Endpoints:
    GET    /api/v1/health                          Service status
    GET    /api/v1/decks                           List decks
    POST   /api/v1/decks                           Create a user deck
    GET    /api/v1/decks/{id}                      Full deck with questions
    DELETE /api/v1/decks/{id}                      Delete a deck
    POST   /api/v1/decks/{id}/questions            Add a question to a deck
    POST   /api/v1/sessions                        Create game session
    GET    /api/v1/sessions                        List active sessions
    GET    /api/v1/sessions/{id}                   Get session status
    DELETE /api/v1/sessions/{id}                   End session
    POST   /api/v1/sessions/{id}/transitions       Apply a state-machine input
    POST   /api/v1/sessions/{id}/questions/next    Hand out the next question
    GET    /api/v1/sessions/{id}/snapshot          Full JSON snapshot
    POST   /api/v1/sessions/restore                Resume from a snapshot

Rejected transitions are not errors: the response carries applied=false
and the unchanged session.
"""

from typing import Optional
import logging

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.exceptions import RequestValidationError
        from fastapi.encoders import jsonable_encoder
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService, InvalidTransitionRequest
    from .schemas import (
        # Request models
        CreateDeckRequest,
        CreateSessionRequest,
        QuestionCreate,
        TransitionRequest,
        # Response models
        DeckListResponse,
        DeckSchema,
        EndSessionResponse,
        ErrorResponse,
        GameStateSnapshot,
        HealthResponse,
        NextQuestionResponse,
        QuestionInfo,
        SessionListResponse,
        SessionResponse,
        TransitionResponse,
        DeckSummary,
        # Enums
        ErrorCode,
    )
    from ..repository import (
        DeckNotFoundError,
        EntityNotFoundError,
        InvalidDeckError,
        InvalidQuestionError,
        RepositoryError,
    )
    from ..session import SessionNotFoundError

    settings = settings or (service.settings if service is not None else get_settings())
    api_service = service or APIService(settings=settings)

    app = FastAPI(
        title="Spin Party API",
        description="""
Party game engine - spin the wheel, answer the prompt.

## Turn Flow

1. `POST /sessions` with a deck and player names
2. `POST /transitions` `start`
3. The wheel picks a player: `POST /transitions` `select_player`
4. `POST /questions/next` hands out an unused prompt
5. `POST /transitions` `advance_turn` and spin again

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `DECK_NOT_FOUND` | Deck id unknown |
| `INVALID_DECK` | Deck failed validation |
| `INVALID_QUESTION` | Question failed validation |
| `INVALID_TRANSITION` | Transition request is missing an argument |
| `VALIDATION_ERROR` | Request body failed validation |
| `INTERNAL_ERROR` | Deck store unavailable |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.api_service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(request, exc: SessionNotFoundError):
        return make_error_response(ErrorCode.SESSION_NOT_FOUND, str(exc), status_code=404)

    @app.exception_handler(DeckNotFoundError)
    async def deck_not_found(request, exc: DeckNotFoundError):
        return make_error_response(ErrorCode.DECK_NOT_FOUND, str(exc), status_code=404)

    @app.exception_handler(EntityNotFoundError)
    async def entity_not_found(request, exc: EntityNotFoundError):
        return make_error_response(ErrorCode.DECK_NOT_FOUND, str(exc), status_code=404)

    @app.exception_handler(InvalidDeckError)
    async def invalid_deck(request, exc: InvalidDeckError):
        return make_error_response(
            ErrorCode.INVALID_DECK, str(exc), status_code=422, details={"errors": exc.errors},
        )

    @app.exception_handler(InvalidQuestionError)
    async def invalid_question(request, exc: InvalidQuestionError):
        return make_error_response(
            ErrorCode.INVALID_QUESTION, str(exc), status_code=422, details={"errors": exc.errors},
        )

    @app.exception_handler(InvalidTransitionRequest)
    async def invalid_transition(request, exc: InvalidTransitionRequest):
        return make_error_response(ErrorCode.INVALID_TRANSITION, str(exc), status_code=422)

    @app.exception_handler(RequestValidationError)
    async def request_validation(request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request body or parameters are invalid",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(RepositoryError)
    async def repository_error(request, exc: RepositoryError):
        logger.error("Deck store error on %s: %s", request.url.path, exc)
        return make_error_response(ErrorCode.INTERNAL_ERROR, str(exc), status_code=503)

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(
            env=settings.env,
            active_sessions=len(api_service.list_sessions()),
            decks=len(api_service.list_decks()),
        )

    # =========================================================================
    # Deck Endpoints
    # =========================================================================

    @app.get("/api/v1/decks", response_model=DeckListResponse, tags=["Decks"])
    async def list_decks() -> DeckListResponse:
        """List all decks, built-in decks first."""
        decks = api_service.list_decks()
        return DeckListResponse(decks=decks, count=len(decks))

    @app.post(
        "/api/v1/decks",
        response_model=DeckSummary,
        status_code=201,
        responses={422: {"model": ErrorResponse}},
        tags=["Decks"],
    )
    async def create_deck(body: CreateDeckRequest) -> DeckSummary:
        return api_service.create_deck(body)

    @app.get(
        "/api/v1/decks/{deck_id}",
        response_model=DeckSchema,
        responses={404: {"model": ErrorResponse}},
        tags=["Decks"],
    )
    async def get_deck(deck_id: str) -> DeckSchema:
        return DeckSchema.from_domain(api_service.get_deck(deck_id))

    @app.delete(
        "/api/v1/decks/{deck_id}",
        status_code=204,
        responses={404: {"model": ErrorResponse}},
        tags=["Decks"],
    )
    async def delete_deck(deck_id: str):
        api_service.delete_deck(deck_id)

    @app.post(
        "/api/v1/decks/{deck_id}/questions",
        response_model=QuestionInfo,
        status_code=201,
        responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Decks"],
    )
    async def add_question(deck_id: str, body: QuestionCreate) -> QuestionInfo:
        return api_service.add_question(deck_id, body)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        status_code=201,
        responses={404: {"model": ErrorResponse, "description": "Unknown deck"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> SessionResponse:
        return api_service.create_session(body)

    @app.get("/api/v1/sessions", response_model=SessionListResponse, tags=["Sessions"])
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.post(
        "/api/v1/sessions/restore",
        response_model=SessionResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Resume a session from a saved snapshot",
    )
    async def restore_session(body: GameStateSnapshot) -> SessionResponse:
        return api_service.restore_snapshot(body)

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
    )
    async def get_session(session_id: str) -> SessionResponse:
        return api_service.get_session(session_id)

    @app.delete("/api/v1/sessions/{session_id}", response_model=EndSessionResponse, tags=["Sessions"])
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a game session and release it."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/snapshot",
        response_model=GameStateSnapshot,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
    )
    async def get_snapshot(session_id: str) -> GameStateSnapshot:
        return api_service.get_snapshot(session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/transitions",
        response_model=TransitionResponse,
        responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Apply a state-machine input",
    )
    async def apply_transition(session_id: str, body: TransitionRequest) -> TransitionResponse:
        return api_service.apply_transition(session_id, body)

    @app.post(
        "/api/v1/sessions/{session_id}/questions/next",
        response_model=NextQuestionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Hand out the next unused question",
    )
    async def next_question(session_id: str) -> NextQuestionResponse:
        return api_service.next_question(session_id)

    return app
