"""
Tests for the API service and the FastAPI app.

Tests:
- APIService deck and session flows
- Transition request validation
- REST endpoints and error bodies
"""

import random

import pytest

from ..api import (
    APIService,
    CreateDeckRequest,
    CreateSessionRequest,
    GameStateSnapshot,
    InvalidTransitionRequest,
    QuestionCreate,
    TransitionRequest,
    create_app,
)
from ..config import Settings
from ..engine_core import GamePhase, TransitionType
from ..repository import DeckNotFoundError, InvalidDeckError
from ..session import SessionNotFoundError


@pytest.fixture
def settings():
    return Settings(env="test")


@pytest.fixture
def service(settings):
    return APIService(settings=settings, rng=random.Random(1))


@pytest.fixture
def truth_or_dare_id(service):
    return next(d.deck_id for d in service.list_decks() if d.name == "Truth or Dare")


@pytest.fixture
def started(service, truth_or_dare_id):
    return service.create_session(CreateSessionRequest(
        deck_id=truth_or_dare_id,
        player_names=["Ann", "Ben", "Cat"],
        start=True,
    ))


class TestAPIServiceDecks:
    """Deck operations through the service."""

    def test_default_decks_seeded(self, service):
        decks = service.list_decks()
        assert [d.name for d in decks] == ["Truth or Dare", "Would You Rather"]
        assert all(d.is_default and d.question_count == 10 for d in decks)

    def test_no_seeding_when_disabled(self):
        service = APIService(settings=Settings(seed_default_decks=False))
        assert service.list_decks() == []

    def test_create_deck(self, service):
        summary = service.create_deck(CreateDeckRequest(
            name="  Road Trip ",
            description="Car games",
            questions=[QuestionCreate(text="Best snack?")],
        ))
        assert summary.name == "Road Trip"
        assert summary.question_count == 1
        assert not summary.is_default
        assert service.get_deck(summary.deck_id).questions[0].text == "Best snack?"

    def test_create_empty_deck_rejected(self, service):
        with pytest.raises(InvalidDeckError):
            service.create_deck(CreateDeckRequest(name="Empty", description="Nothing"))

    def test_add_question(self, service, truth_or_dare_id):
        info = service.add_question(truth_or_dare_id, QuestionCreate(text="New dare?", difficulty="hard"))
        assert info.difficulty == "Hard"
        assert info.difficulty_rank == 3
        assert service.get_deck(truth_or_dare_id).question_count == 11

    def test_delete_unknown_deck(self, service):
        with pytest.raises(DeckNotFoundError):
            service.delete_deck("missing")

    def test_configured_denylist_flags_deck(self):
        service = APIService(settings=Settings(env="test", denylist=("banana",)))
        summary = service.create_deck(CreateDeckRequest(
            name="Banana",
            description="Fruit",
            questions=[QuestionCreate(text="banana?")],
        ))
        assert summary.is_appropriate is False
        assert all(d.is_appropriate for d in service.list_decks() if d.is_default)

    def test_default_denylist_allows_built_in_decks(self, service):
        assert all(d.is_appropriate for d in service.list_decks())


class TestAPIServiceSessions:
    """Session operations through the service."""

    def test_create_session(self, started):
        assert started.phase == GamePhase.SPINNING
        assert started.phase_display == "Spinning"
        assert [p.name for p in started.players] == ["Ann", "Ben", "Cat"]
        assert started.questions_total == 10
        assert started.questions_remaining == 10
        assert started.questions_used_fraction == 0.0

    def test_create_session_unknown_deck(self, service):
        with pytest.raises(DeckNotFoundError):
            service.create_session(CreateSessionRequest(deck_id="missing", player_names=["A", "B"]))

    def test_turn(self, service, started):
        sid = started.session_id
        ann = started.players[0].player_id

        selected = service.apply_transition(sid, TransitionRequest(
            transition_type=TransitionType.SELECT_PLAYER, player_id=ann,
        ))
        assert selected.applied
        assert selected.previous_phase == GamePhase.SPINNING
        assert selected.session.current_player_id == ann
        assert selected.session.players[0].is_current_turn

        drawn = service.next_question(sid)
        assert drawn.question is not None
        assert drawn.questions_remaining == 9

        advanced = service.apply_transition(sid, TransitionRequest(transition_type="advance_turn"))
        assert advanced.applied
        assert advanced.session.phase == GamePhase.SPINNING
        assert advanced.session.current_player_id is None

    def test_rejected_transition(self, service, started):
        response = service.apply_transition(
            started.session_id, TransitionRequest(transition_type="advance_turn"),
        )
        assert not response.applied
        assert response.session.phase == GamePhase.SPINNING

    @pytest.mark.parametrize("kind", [
        "select_player", "remove_player", "add_player", "mark_question_used",
    ])
    def test_missing_argument(self, service, started, kind):
        with pytest.raises(InvalidTransitionRequest):
            service.apply_transition(started.session_id, TransitionRequest(transition_type=kind))

    def test_add_player(self, service, started):
        response = service.apply_transition(started.session_id, TransitionRequest(
            transition_type="add_player", player_name="Dan",
        ))
        assert [p.name for p in response.session.players][-1] == "Dan"

    def test_snapshot_restore(self, service, started):
        snapshot = service.get_snapshot(started.session_id)
        service.end_session(started.session_id)
        restored = service.restore_snapshot(snapshot)
        assert restored.session_id == started.session_id
        assert restored.phase == GamePhase.SPINNING

    def test_create_session_sweeps_stale_sessions(self, service, started, setup_state):
        stale = service.restore_snapshot(GameStateSnapshot.from_domain(setup_state))
        assert stale.session_id in service.list_sessions()
        fresh = service.create_session(CreateSessionRequest(
            deck_id=started.deck_id, player_names=["Ann", "Ben"],
        ))
        sessions = service.list_sessions()
        assert stale.session_id not in sessions
        assert started.session_id in sessions
        assert fresh.session_id in sessions

    def test_end_session(self, service, started):
        assert service.end_session(started.session_id)
        assert service.list_sessions() == []
        with pytest.raises(SessionNotFoundError):
            service.get_session(started.session_id)

    def test_draw_cycles_whole_deck(self, service, started):
        seen = set()
        for _ in range(10):
            seen.add(service.next_question(started.session_id).question.question_id)
        assert len(seen) == 10
        assert service.next_question(started.session_id).reshuffled


@pytest.fixture
def client(service):
    from fastapi.testclient import TestClient
    return TestClient(create_app(service))


class TestHTTPAPI:
    """Endpoint tests with the FastAPI test client."""

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "env": "test", "active_sessions": 0, "decks": 2}

    def test_list_decks(self, client):
        data = client.get("/api/v1/decks").json()
        assert data["count"] == 2

    def test_get_deck(self, client, truth_or_dare_id):
        data = client.get(f"/api/v1/decks/{truth_or_dare_id}").json()
        assert data["name"] == "Truth or Dare"
        assert len(data["questions"]) == 10

    def test_get_unknown_deck(self, client):
        response = client.get("/api/v1/decks/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "DECK_NOT_FOUND"

    def test_create_invalid_deck(self, client):
        response = client.post("/api/v1/decks", json={"name": "", "description": "x"})
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "INVALID_DECK"
        assert "name is required" in body["details"]["errors"]

    def test_create_and_delete_deck(self, client):
        response = client.post("/api/v1/decks", json={
            "name": "Office",
            "description": "Work-safe",
            "questions": [{"text": "Favourite meeting?", "category": "Custom"}],
        })
        assert response.status_code == 201
        deck_id = response.json()["deck_id"]
        assert client.delete(f"/api/v1/decks/{deck_id}").status_code == 204
        assert client.delete(f"/api/v1/decks/{deck_id}").status_code == 404

    def test_add_question(self, client, truth_or_dare_id):
        response = client.post(f"/api/v1/decks/{truth_or_dare_id}/questions", json={"text": "Sing?"})
        assert response.status_code == 201
        assert response.json()["text"] == "Sing?"

    def test_game_loop(self, client, truth_or_dare_id):
        created = client.post("/api/v1/sessions", json={
            "deck_id": truth_or_dare_id,
            "player_names": ["Ann", "Ben"],
        })
        assert created.status_code == 201
        session = created.json()
        sid = session["session_id"]
        assert session["phase"] == "setup"

        started = client.post(f"/api/v1/sessions/{sid}/transitions", json={"transition_type": "start"})
        assert started.json()["applied"] is True

        player_id = session["players"][1]["player_id"]
        selected = client.post(f"/api/v1/sessions/{sid}/transitions", json={
            "transition_type": "select_player", "player_id": player_id,
        }).json()
        assert selected["session"]["phase"] == "questioning"

        question = client.post(f"/api/v1/sessions/{sid}/questions/next").json()
        assert question["question"]["category"] == "Truth or Dare"

        again = client.post(f"/api/v1/sessions/{sid}/transitions", json={"transition_type": "start"})
        assert again.status_code == 200
        assert again.json()["applied"] is False

        assert client.get("/api/v1/sessions").json() == {"sessions": [sid], "count": 1}
        ended = client.delete(f"/api/v1/sessions/{sid}", params={"reason": "done"})
        assert ended.json() == {"success": True, "session_id": sid}
        assert client.get(f"/api/v1/sessions/{sid}").status_code == 404

    def test_snapshot_and_restore(self, client, truth_or_dare_id):
        sid = client.post("/api/v1/sessions", json={
            "deck_id": truth_or_dare_id, "player_names": ["Ann", "Ben"], "start": True,
        }).json()["session_id"]
        snapshot = client.get(f"/api/v1/sessions/{sid}/snapshot").json()
        assert snapshot["phase"] == "spinning"

        client.delete(f"/api/v1/sessions/{sid}")
        restored = client.post("/api/v1/sessions/restore", json=snapshot)
        assert restored.status_code == 201
        assert restored.json()["session_id"] == sid
        assert client.get(f"/api/v1/sessions/{sid}").json()["phase"] == "spinning"

    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/nope")
        assert response.status_code == 404
        assert response.json() == {
            "error": "Session nope not found",
            "error_code": "SESSION_NOT_FOUND",
            "details": None,
        }

    def test_create_session_unknown_deck(self, client):
        response = client.post("/api/v1/sessions", json={"deck_id": "missing"})
        assert response.status_code == 404

    def test_malformed_transition_body(self, client, truth_or_dare_id):
        sid = client.post("/api/v1/sessions", json={
            "deck_id": truth_or_dare_id, "player_names": ["Ann", "Ben"],
        }).json()["session_id"]
        response = client.post(f"/api/v1/sessions/{sid}/transitions", json={"transition_type": "fly"})
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["loc"] == ["body", "transition_type"]

    def test_store_unavailable(self, client, service):
        service.deck_service.deck_repository.close()
        response = client.get("/api/v1/decks")
        assert response.status_code == 503
        assert response.json()["error_code"] == "INTERNAL_ERROR"

    def test_transition_missing_argument(self, client, truth_or_dare_id):
        sid = client.post("/api/v1/sessions", json={
            "deck_id": truth_or_dare_id, "player_names": ["Ann", "Ben"], "start": True,
        }).json()["session_id"]
        response = client.post(f"/api/v1/sessions/{sid}/transitions", json={"transition_type": "select_player"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_TRANSITION"
