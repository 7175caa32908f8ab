"""
Tests for seat controllers.

Tests:
- Bot targeting rules
- Bot determinism
- Human/bot parity through the same reducer
"""

import random

from ..bots import (
    BotAdapter,
    HumanAdapter,
    pick_closest_behind,
    pick_furthest_ahead,
    pick_last_place,
    pick_most_paddles,
)
from ..card_effects.actions import CardActionType, ParsedAction
from ..card_effects.classifier import classify_card_effect
from ..engine_core.action import Action, ActionType
from ..engine_core.reducer import Reducer
from ..engine_core.state import PlayerState, TurnPhase
from .conftest import make_state


def _p(pid: str, position: int = 0, paddles: int = 1, is_bot: bool = False) -> PlayerState:
    return PlayerState(player_id=pid, name=pid, position=position, paddles=paddles, is_bot=is_bot)


class TestTargetPickers:
    """Tests for the fixed targeting rules."""

    def test_most_paddles(self, three_player_state):
        assert pick_most_paddles(three_player_state, "player_1").player_id == "player_2"

    def test_furthest_ahead(self, three_player_state):
        assert pick_furthest_ahead(three_player_state, "bot_1").player_id == "player_2"

    def test_last_place(self, three_player_state):
        assert pick_last_place(three_player_state, "player_2").player_id == "bot_1"

    def test_closest_behind(self, three_player_state):
        assert pick_closest_behind(three_player_state, "player_2").player_id == "player_1"

    def test_closest_behind_falls_back(self, three_player_state):
        """With nobody behind, the closest player overall is picked."""
        assert pick_closest_behind(three_player_state, "bot_1").player_id == "player_1"

    def test_ties_go_to_earliest_seat(self):
        state = make_state(_p("a"), _p("b", paddles=2), _p("c", paddles=2))
        assert pick_most_paddles(state, "a").player_id == "b"


class TestBotAdapter:
    """Tests for the autonomous bot."""

    def test_steal_targets_richest(self, three_player_state):
        bot = BotAdapter(rng=random.Random(1))
        action = classify_card_effect("Steal a paddle from any player of your choice")
        assert bot.select_target(three_player_state, action, "bot_1") == "player_2"

    def test_send_targets_leader(self, three_player_state):
        bot = BotAdapter(rng=random.Random(1))
        action = classify_card_effect("Send another player to the crossing")
        assert bot.select_target(three_player_state, action, "bot_1") == "player_2"

    def test_gift_right_targets_successor(self, three_player_state):
        bot = BotAdapter(rng=random.Random(1))
        action = ParsedAction.of(CardActionType.PADDLE_GIFT_RIGHT, "Gift a paddle to your right")
        assert bot.select_target(three_player_state, action, "bot_1") == "player_1"

    def test_roll_in_range(self, two_player_state):
        bot = BotAdapter(rng=random.Random(3))
        for _ in range(50):
            roll = bot.roll(two_player_state, "bot_1")
            assert 1 <= roll.value <= 6
            assert roll.source == "bot"

    def test_same_seed_same_rolls(self, two_player_state):
        a = BotAdapter(rng=random.Random(9))
        b = BotAdapter(rng=random.Random(9))
        assert [a.roll(two_player_state, "bot_1").value for _ in range(10)] == [
            b.roll(two_player_state, "bot_1").value for _ in range(10)
        ]

    def test_next_action_by_phase(self, two_player_state):
        bot = BotAdapter(rng=random.Random(2))
        state = two_player_state._copy_with(current_player_idx=1)

        assert bot.next_action(state, "bot_1").action_type == ActionType.ROLL
        pending = state._copy_with(phase=TurnPhase.CARD_PENDING)
        assert bot.next_action(pending, "bot_1").action_type == ActionType.DRAW_CARD

    def test_get_name(self):
        assert BotAdapter().get_name() == "BotAdapter"


class TestHumanAdapter:
    """Tests for the human seat."""

    def test_no_target_until_submitted(self, two_player_state):
        human = HumanAdapter(rng=random.Random(1))
        action = classify_card_effect("Take a paddle")
        state = two_player_state._copy_with(phase=TurnPhase.TARGET_PENDING, pending_action=action)

        assert human.next_action(state, "player_1") is None

        human.submit_target("bot_1")
        chosen = human.next_action(state, "player_1")
        assert chosen.action_type == ActionType.CHOOSE_TARGET
        assert chosen.payload.target_player_id == "bot_1"


class TestParity:
    """Human and bot seats run the same rules."""

    def test_same_inputs_same_outcome(self, catalog):
        """Identical rolls and targets give identical states for either seat kind."""
        def play(is_bot: bool):
            state = make_state(
                _p("x", is_bot=is_bot),
                _p("y", paddles=3),
                deck=["sc_17"],
            )
            reducer = Reducer(catalog=catalog, rng=random.Random(0))
            state = reducer.apply(state, Action.roll("x", 3)).new_state
            state = reducer.apply(state, Action.draw_card("x")).new_state
            state = reducer.apply(state, Action.choose_target("x", "y")).new_state
            return state

        def snapshot(state):
            data = state.to_dict()
            for player in data["players"]:
                player.pop("is_bot")
            return data

        human_state = play(is_bot=False)
        bot_state = play(is_bot=True)

        assert snapshot(human_state) == snapshot(bot_state)
        assert human_state.get_player("x").paddles == 2
        assert human_state.current_player_idx == 1

    def test_bot_and_human_agents_submit_same_action(self, three_player_state):
        """Given the same target choice both agents emit the same input."""
        action = classify_card_effect("Steal a paddle from any player of your choice")
        state = three_player_state._copy_with(phase=TurnPhase.TARGET_PENDING, pending_action=action)

        bot = BotAdapter(rng=random.Random(0))
        human = HumanAdapter(rng=random.Random(0))
        human.submit_target(bot.select_target(state, action, "player_1"))

        assert bot.next_action(state, "player_1") == human.next_action(state, "player_1")

