"""
Tests for card action execution.

Tests:
- Each action kind's state change
- Clamping and paddle floor
- Target validation
- Win check after a card
"""

from ..card_effects.actions import CardActionType, ParsedAction, SpaceLookup
from ..engine_core.board import SpaceType
from ..engine_core.effect_resolver import (
    check_win,
    closest_player,
    execute_card_action,
    seat_successor,
)
from ..engine_core.state import PlayerState
from .conftest import make_state

A = CardActionType


def _player(pid: str, position: int = 0, paddles: int = 1) -> PlayerState:
    return PlayerState(player_id=pid, name=pid.title(), position=position, paddles=paddles)


def _act(kind: CardActionType, **kwargs) -> ParsedAction:
    return ParsedAction.of(kind, kind.value, **kwargs)


class TestPaddleActions:
    """Tests for paddle effects."""

    def test_paddle_lose_on_finish_without_enough(self):
        """Losing paddles on FINISH leaves the player short and no winner."""
        state = make_state(_player("ann", position=25, paddles=3), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.PADDLE_LOSE, magnitude=2))

        assert result.state.get_player("ann").paddles == 1
        assert result.state.winner is None
        assert "needs 2 paddles" in result.messages[-1]

    def test_paddle_floor(self):
        state = make_state(_player("ann", paddles=1), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.PADDLE_LOSE, magnitude=3))
        assert result.state.get_player("ann").paddles == 0

    def test_paddle_gain_on_finish_wins(self):
        """Gaining the second paddle while on FINISH wins."""
        state = make_state(_player("ann", position=25, paddles=1), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.PADDLE_GAIN, magnitude=1))

        assert result.state.winner == "ann"

    def test_steal(self):
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=2))
        result = execute_card_action(state, "ann", _act(A.PADDLE_STEAL), "ben")

        assert result.state.get_player("ann").paddles == 2
        assert result.state.get_player("ben").paddles == 1

    def test_steal_from_empty_handed(self):
        """Nothing to steal means nothing changes."""
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=0))
        result = execute_card_action(state, "ann", _act(A.PADDLE_STEAL), "ben")

        assert result.state.get_player("ann").paddles == 1
        assert result.state.get_player("ben").paddles == 0

    def test_gift_right_wraps_seating(self):
        """The last seat gifts to the first."""
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=1), _player("cat", paddles=2))
        result = execute_card_action(state, "cat", _act(A.PADDLE_GIFT_RIGHT))

        assert result.state.get_player("cat").paddles == 1
        assert result.state.get_player("ann").paddles == 2

    def test_gift_without_paddles(self):
        state = make_state(_player("ann", paddles=0), _player("ben", paddles=1))
        result = execute_card_action(state, "ann", _act(A.PADDLE_GIFT_CHOOSE), "ben")
        assert result.state.get_player("ben").paddles == 1


class TestMovementActions:
    """Tests for movement effects."""

    def test_move_back_clamps_at_start(self):
        state = make_state(_player("ann", position=2), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.MOVE_BACK, magnitude=5))
        assert result.state.get_player("ann").position == 0

    def test_move_forward_clamps_at_finish(self):
        state = make_state(_player("ann", position=24), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.MOVE_FORWARD, magnitude=4))
        assert result.state.get_player("ann").position == 25

    def test_explicit_zero_moves_nowhere(self):
        """A printed 0 is an amount, not a missing one."""
        state = make_state(_player("ann", position=5), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.MOVE_FORWARD, magnitude=0))
        assert result.state.get_player("ann").position == 5

    def test_missing_amount_uses_default(self):
        state = make_state(_player("ann", position=5), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.MOVE_FORWARD))
        assert result.state.get_player("ann").position == 7

    def test_go_to_next_space(self):
        state = make_state(_player("ann", position=5), _player("ben"))
        action = _act(A.GO_TO_SPACE, target_space=SpaceType.SEWER)
        result = execute_card_action(state, "ann", action)
        assert result.state.get_player("ann").position == 10

    def test_go_to_closest_space_backwards(self):
        state = make_state(_player("ann", position=13), _player("ben"))
        action = _act(A.GO_TO_SPACE, target_space=SpaceType.SHIT_PILE, lookup=SpaceLookup.CLOSEST)
        result = execute_card_action(state, "ann", action)
        assert result.state.get_player("ann").position == 11

    def test_shop_and_gain(self):
        state = make_state(_player("ann", position=16, paddles=1), _player("ben"))
        action = _act(
            A.GO_TO_SPACE_AND_GAIN_PADDLE,
            magnitude=1,
            target_space=SpaceType.PADDLE_SHOP,
            lookup=SpaceLookup.CLOSEST,
        )
        result = execute_card_action(state, "ann", action)
        ann = result.state.get_player("ann")
        assert ann.position == 18
        assert ann.paddles == 2

    def test_take_lead(self):
        state = make_state(_player("ann", position=4), _player("ben", position=12))
        result = execute_card_action(state, "ann", _act(A.TAKE_LEAD))
        assert result.state.get_player("ann").position == 13

    def test_take_lead_when_leading_is_noop(self):
        """The leader taking the lead stays put."""
        state = make_state(_player("ann", position=12), _player("ben", position=4))
        result = execute_card_action(state, "ann", _act(A.TAKE_LEAD))
        assert result.state.get_player("ann").position == 12

    def test_behind_leader(self):
        state = make_state(_player("ann", position=2), _player("ben", position=20))
        result = execute_card_action(state, "ann", _act(A.BEHIND_LEADER, magnitude=3))
        assert result.state.get_player("ann").position == 17

    def test_move_ahead_of_player(self):
        state = make_state(_player("ann", position=2), _player("ben", position=9))
        result = execute_card_action(state, "ann", _act(A.MOVE_AHEAD_OF_PLAYER), "ben")
        assert result.state.get_player("ann").position == 10


class TestTurnFlowActions:
    """Tests for flags and draw chaining."""

    def test_lose_turn_sets_flag(self):
        state = make_state(_player("ann"), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.LOSE_TURN))
        assert result.state.get_player("ann").skip_turn

    def test_extra_turn_sets_flag(self):
        state = make_state(_player("ann"), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.EXTRA_TURN))
        assert result.state.get_player("ann").extra_roll

    def test_skip_yellow_grants_token(self):
        state = make_state(_player("ann"), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.SKIP_YELLOW))
        assert result.state.get_player("ann").skip_yellow

    def test_draw_again_signals(self):
        state = make_state(_player("ann"), _player("ben"))
        result = execute_card_action(state, "ann", _act(A.DRAW_AGAIN))
        assert result.draw_again
        assert result.state == state


class TestMultiPlayerActions:
    """Tests for effects on other players."""

    def test_send_player_to_crossing(self):
        state = make_state(_player("ann", position=3), _player("ben", position=17))
        action = _act(A.SEND_PLAYER_TO, target_space=SpaceType.CROSSING, lookup=SpaceLookup.CLOSEST)
        result = execute_card_action(state, "ann", action, "ben")

        assert result.state.get_player("ben").position == 20
        assert result.state.get_player("ann").position == 3

    def test_bring_player(self):
        state = make_state(_player("ann", position=3), _player("ben", position=17))
        result = execute_card_action(state, "ann", _act(A.BRING_PLAYER), "ben")
        assert result.state.get_player("ben").position == 3

    def test_bring_all(self):
        state = make_state(_player("ann", position=8), _player("ben", position=17), _player("cat", position=1))
        result = execute_card_action(state, "ann", _act(A.BRING_ALL_PLAYERS))
        assert [p.position for p in result.state.players] == [8, 8, 8]

    def test_go_back_with_closest(self):
        """Actor and the nearest player both retreat."""
        state = make_state(
            _player("ann", position=10),
            _player("ben", position=20),
            _player("cat", position=8),
        )
        result = execute_card_action(state, "ann", _act(A.GO_BACK_WITH_PLAYER, magnitude=3))

        assert result.state.get_player("ann").position == 7
        assert result.state.get_player("cat").position == 5
        assert result.state.get_player("ben").position == 20

    def test_move_player_behind_last(self):
        state = make_state(_player("ann", position=10), _player("ben", position=20), _player("cat", position=4))
        result = execute_card_action(state, "ann", _act(A.MOVE_PLAYER_BEHIND_LAST), "ben")
        assert result.state.get_player("ben").position == 3

    def test_move_both_to_sewer(self):
        state = make_state(_player("ann", position=8), _player("ben", position=20))
        action = _act(A.MOVE_BOTH_TO_SPACE, target_space=SpaceType.SEWER, lookup=SpaceLookup.CLOSEST)
        result = execute_card_action(state, "ann", action, "ben")

        assert result.state.get_player("ann").position == 10
        assert result.state.get_player("ben").position == 10


class TestTargetValidation:
    """Tests for missing or bad targets."""

    def test_missing_target_is_noop(self):
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=2))
        result = execute_card_action(state, "ann", _act(A.PADDLE_STEAL), None)

        assert result.state == state
        assert "nothing happens" in result.messages[0]

    def test_self_target_is_noop(self):
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=2))
        result = execute_card_action(state, "ann", _act(A.PADDLE_STEAL), "ann")
        assert result.state == state

    def test_unknown_target_is_noop(self):
        state = make_state(_player("ann", paddles=1), _player("ben", paddles=2))
        result = execute_card_action(state, "ann", _act(A.PADDLE_STEAL), "zed")

        assert result.state == state
        assert "invalid target zed" in result.messages[0]

    def test_unrecognized_is_noop_with_text(self):
        state = make_state(_player("ann"), _player("ben"))
        result = execute_card_action(state, "ann", ParsedAction.unrecognized("Sing loudly"))

        assert result.state == state
        assert result.messages == ["Sing loudly"]


class TestHelpers:
    """Tests for seating and win helpers."""

    def test_seat_successor(self):
        state = make_state(_player("ann"), _player("ben"), _player("cat"))
        assert seat_successor(state, "ann").player_id == "ben"
        assert seat_successor(state, "cat").player_id == "ann"

    def test_seat_successor_alone(self):
        assert seat_successor(make_state(_player("ann")), "ann") is None

    def test_closest_player_tie_goes_to_first_seat(self):
        state = make_state(_player("ann", position=10), _player("ben", position=12), _player("cat", position=8))
        assert closest_player(state, "ann").player_id == "ben"

    def test_check_win_needs_finish(self):
        state = make_state(_player("ann", position=24, paddles=5))
        new_state, messages = check_win(state, "ann")
        assert new_state.winner is None
        assert messages == []

    def test_check_win_is_sticky(self):
        """Once someone has won, nobody else can."""
        state = make_state(_player("ann", position=25, paddles=2), _player("ben", position=25, paddles=2))
        state, _ = check_win(state, "ann")
        state, messages = check_win(state, "ben")

        assert state.winner == "ann"
        assert messages == []
