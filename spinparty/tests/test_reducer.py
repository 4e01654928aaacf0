"""
Tests for the transition reducer.

Tests:
- Dispatch to GameState transitions
- Applied vs rejected results
- Missing transition arguments
"""

from ..content import Player
from ..engine_core import (
    GamePhase,
    Transition,
    TransitionType,
    apply_all,
    apply_transition,
)


class TestApplyTransition:
    """Tests for apply_transition."""

    def test_start_applied(self, setup_state, now):
        result = apply_transition(setup_state, Transition.start(), now=now)
        assert result.applied
        assert not result.rejected
        assert result.state.phase == GamePhase.SPINNING
        assert result.state.start_time == now
        assert result.transition.transition_type == TransitionType.START

    def test_rejected_returns_same_state(self, setup_state):
        result = apply_transition(setup_state, Transition.advance_turn())
        assert result.rejected
        assert result.state is setup_state
        assert result.previous_phase == GamePhase.SETUP

    def test_previous_phase_recorded(self, questioning_state):
        result = apply_transition(questioning_state, Transition.advance_turn())
        assert result.previous_phase == GamePhase.QUESTIONING
        assert result.state.phase == GamePhase.SPINNING

    def test_select_by_player(self, spinning_state, players):
        result = apply_transition(spinning_state, Transition.select_player(players[1]))
        assert result.applied
        assert result.state.current_player == players[1]

    def test_select_by_player_id(self, spinning_state, players):
        transition = Transition(TransitionType.SELECT_PLAYER, player_id=players[2].player_id)
        result = apply_transition(spinning_state, transition)
        assert result.applied
        assert result.state.current_player == players[2]

    def test_select_unknown_player_id_rejected(self, spinning_state):
        transition = Transition(TransitionType.SELECT_PLAYER, player_id="nobody")
        assert apply_transition(spinning_state, transition).rejected

    def test_select_without_argument_rejected(self, spinning_state):
        transition = Transition(TransitionType.SELECT_PLAYER)
        assert apply_transition(spinning_state, transition).rejected

    def test_mark_used_without_question_rejected(self, spinning_state):
        transition = Transition(TransitionType.MARK_QUESTION_USED)
        assert apply_transition(spinning_state, transition).rejected

    def test_mark_used(self, spinning_state, deck):
        qid = deck.questions[0].question_id
        result = apply_transition(spinning_state, Transition.mark_question_used(qid))
        assert result.applied
        assert qid in result.state.used_questions

    def test_add_and_remove_player(self, setup_state):
        newcomer = Player(name="Eve")
        added = apply_transition(setup_state, Transition.add_player(newcomer)).state
        assert added.has_player(newcomer.player_id)
        removed = apply_transition(added, Transition.remove_player(newcomer.player_id)).state
        assert not removed.has_player(newcomer.player_id)

    def test_remove_player_by_player_value(self, setup_state, players):
        transition = Transition(TransitionType.REMOVE_PLAYER, player=players[0])
        result = apply_transition(setup_state, transition)
        assert not result.state.has_player(players[0].player_id)

    def test_add_player_without_argument_rejected(self, setup_state):
        assert apply_transition(setup_state, Transition(TransitionType.ADD_PLAYER)).rejected

    def test_pause_resume_end(self, questioning_state):
        paused = apply_transition(questioning_state, Transition.pause()).state
        assert paused.phase == GamePhase.PAUSED
        resumed = apply_transition(paused, Transition.resume()).state
        assert resumed.phase == GamePhase.QUESTIONING
        ended = apply_transition(resumed, Transition.end()).state
        assert ended.phase == GamePhase.ENDED

    def test_reset_questions(self, spinning_state, deck):
        state = spinning_state.mark_question_used(deck.questions[0].question_id)
        result = apply_transition(state, Transition.reset_questions())
        assert result.state.used_questions == frozenset()


class TestApplyAll:
    """Tests for apply_all."""

    def test_full_turn(self, setup_state, players, deck, now):
        state = apply_all(setup_state, [
            Transition.start(),
            Transition.select_player(players[0]),
            Transition.mark_question_used(deck.questions[0].question_id),
            Transition.advance_turn(),
        ], now=now)
        assert state.phase == GamePhase.SPINNING
        assert state.current_player is None
        assert state.used_questions == frozenset({deck.questions[0].question_id})
        assert state.last_activity_time == now

    def test_rejected_steps_skipped(self, setup_state, players):
        state = apply_all(setup_state, [
            Transition.advance_turn(),
            Transition.start(),
            Transition.start(),
            Transition.select_player(players[1]),
        ])
        assert state.phase == GamePhase.QUESTIONING
        assert state.current_player == players[1]
