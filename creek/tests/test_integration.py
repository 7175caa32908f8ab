"""
Integration tests - End-to-end workflow tests.

Tests the complete flow:
1. Set up a game
2. Create a session
3. Step human inputs and bot turns through the game loop
4. Snapshot and restore state
"""

import random

import pytest

from ..card_effects.catalog import CardCatalog
from ..engine_core.action import Action
from ..engine_core.state import GameState, PlayerState, TurnPhase
from ..errors import StepInFlightError
from ..games.shitz_creek import new_game
from ..session import GameLoop, LoopState, SessionManager, SessionState
from .conftest import make_state


class TestGameSetup:
    """Tests for the opening state."""

    def test_new_game_seats_humans_then_bots(self):
        state = new_game(["Ann", "Ben"], num_bots=2, rng=random.Random(1))

        assert [p.player_id for p in state.players] == ["player_1", "player_2", "bot_1", "bot_2"]
        assert all(p.position == 0 and p.paddles == 1 for p in state.players)
        assert state.players[2].is_bot
        assert state.phase == TurnPhase.AWAITING_ROLL
        assert state.turn_number == 1
        assert state.last_message == "Ann's turn. Roll the die!"
        assert len(state.deck.draw_pile) == 50

    @pytest.mark.parametrize("humans,bots", [(["Solo"], 0), (["A", "B", "C"], 4)])
    def test_player_count_limits(self, humans, bots):
        with pytest.raises(ValueError):
            new_game(humans, num_bots=bots)


class TestSessionLifecycle:
    """Tests for SessionManager."""

    def test_create_session(self):
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=2, seed=11)

        assert session.is_active()
        assert session.game_state.game_id == session.session_id
        assert set(session.agents) == {"player_1", "bot_1", "bot_2"}
        assert session.human_agent("player_1") is not None
        assert session.human_agent("bot_1") is None

    def test_session_lifecycle(self):
        """Session can be created and ended."""
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=1)
        session_id = session.session_id

        assert session_id in manager.list_active_sessions()
        assert manager.end_session(session_id)
        assert session_id not in manager.list_active_sessions()
        assert session.state == SessionState.ABANDONED
        assert not manager.end_session(session_id)

    def test_cleanup_stale_sessions(self):
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=1)
        session.last_activity -= 7200

        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert manager.get_session(session.session_id) is None


class TestGameLoop:
    """Tests for stepping a session."""

    def test_initial_loop_state(self):
        manager = SessionManager()
        loop = GameLoop(manager.create_session(["Ann"], num_bots=1, seed=3))
        assert loop.state == LoopState.WAITING_HUMAN_ACTION

    def test_human_roll_then_bots_due(self):
        """After a plain-space roll the bot is due, with a suggested delay."""
        manager = SessionManager()
        loop = GameLoop(manager.create_session(["Ann"], num_bots=1, seed=3))

        result = loop.submit_roll("player_1", 2)

        assert result.success
        assert result.loop_state == LoopState.BOTS_DUE
        assert result.bot_delay_seconds == manager.config.bot_delay_seconds

    def test_run_bot_turns_returns_to_human(self):
        manager = SessionManager()
        loop = GameLoop(manager.create_session(["Ann"], num_bots=2, seed=3))
        loop.submit_roll("player_1", 2)

        result = loop.run_bot_turns()

        assert result.success
        assert result.loop_state in (LoopState.WAITING_HUMAN_ACTION, LoopState.GAME_OVER)
        assert result.bot_actions

    def test_out_of_turn_roll_fails(self):
        manager = SessionManager()
        loop = GameLoop(manager.create_session(["Ann"], num_bots=1, seed=3))

        result = loop.submit_roll("bot_1", 4)

        assert not result.success
        assert result.error_code == "NOT_YOUR_TURN"

    def test_server_roll_for_unknown_player(self):
        manager = SessionManager()
        loop = GameLoop(manager.create_session(["Ann"], num_bots=1, seed=3))

        result = loop.submit_roll("ghost")
        assert result.error_code == "UNKNOWN_PLAYER"

    def test_step_in_flight_rejected(self):
        """A second step while one is resolving is refused."""
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=1, seed=3)
        loop = GameLoop(session)

        session.step_in_flight = True
        with pytest.raises(StepInFlightError):
            loop.submit_roll("player_1", 2)

        session.step_in_flight = False
        assert loop.submit_roll("player_1", 2).success
        assert not session.step_in_flight

    def test_human_target_goes_through_seat_agent(self):
        """The picked target is fed through the human seat's agent queue."""
        catalog = CardCatalog.from_records([{"id": "steal", "name": "Pirate", "effect": "Steal a paddle"}])
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=1, seed=1, catalog=catalog)
        loop = GameLoop(session)
        loop.submit_roll("player_1", 3)
        loop.submit_draw("player_1")
        assert loop.state == LoopState.WAITING_TARGET

        result = loop.submit_target("player_1", "bot_1")

        assert result.success
        assert session.game_state.get_player("player_1").paddles == 2
        assert session.game_state.get_player("bot_1").paddles == 0
        human = session.human_agent("player_1")
        assert human.select_target(session.game_state, None, "player_1") is None

    def test_target_outside_target_phase_fails(self):
        manager = SessionManager()
        session = manager.create_session(["Ann"], num_bots=1, seed=3)
        loop = GameLoop(session)

        result = loop.submit_target("player_1", "bot_1")

        assert result.error_code == "INVALID_PHASE"
        assert session.human_agent("player_1").select_target(session.game_state, None, "player_1") is None

    def test_all_bot_game_is_reproducible(self):
        """A seeded bot game plays out the same way every time."""
        def play(seed):
            manager = SessionManager()
            session = manager.create_session([], num_bots=4, seed=seed)
            result = GameLoop(session).run_bot_turns(max_steps=2000)
            return session, result

        first, result = play(2024)
        second, _ = play(2024)

        assert result.success
        assert first.message_log == second.message_log
        assert first.game_state.to_dict()["players"] == second.game_state.to_dict()["players"]
        if result.loop_state == LoopState.GAME_OVER:
            assert first.state == SessionState.GAME_OVER
            winner = first.game_state.get_player(first.game_state.winner)
            assert winner.position == 25
            assert winner.paddles >= 2


class TestSnapshots:
    """Tests for the state snapshot round trip."""

    def test_restore_mid_target(self, reducer):
        """A snapshot taken while waiting for a target resumes correctly."""
        state = make_state(
            PlayerState(player_id="player_1", name="Ann", position=3),
            PlayerState(player_id="bot_1", name="Robo", is_bot=True, paddles=2),
            deck=["sc_17", "sc_01"],
            phase=TurnPhase.CARD_PENDING,
        )
        state = reducer.apply(state, Action.draw_card("player_1")).new_state

        restored = GameState.from_dict(state.to_dict())

        assert restored == state
        result = reducer.apply(restored, Action.choose_target("player_1", "bot_1"))
        assert result.new_state.get_player("player_1").paddles == 2
