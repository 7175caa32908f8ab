"""
Creek Bot - Deterministic autonomous player.

The bot rolls a fair die from its own rng and picks card targets with
fixed rules, so a seeded bot game always plays out the same way:
- paddle_steal                           -> player with the most paddles
- paddle_gift_choose, bring_player       -> closest player at or behind
- move_player_behind_last                -> player in last place
- everything else (send, move ahead of,
  move both to a space)                  -> furthest-ahead player

Ties go to the earliest seat.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import random

from ..card_effects.actions import CardActionType
from ..config import DEFAULT_CONFIG
from ..engine_core.effect_resolver import seat_successor
from .policy import DecisionAgent, RollInput

if TYPE_CHECKING:
    from ..card_effects.actions import ParsedAction
    from ..engine_core.state import GameState, PlayerState


def pick_most_paddles(state: GameState, player_id: str) -> PlayerState | None:
    best = None
    for p in state.others(player_id):
        if best is None or p.paddles > best.paddles:
            best = p
    return best


def pick_furthest_ahead(state: GameState, player_id: str) -> PlayerState | None:
    best = None
    for p in state.others(player_id):
        if best is None or p.position > best.position:
            best = p
    return best


def pick_last_place(state: GameState, player_id: str) -> PlayerState | None:
    best = None
    for p in state.others(player_id):
        if best is None or p.position < best.position:
            best = p
    return best


def pick_closest_behind(state: GameState, player_id: str) -> PlayerState | None:
    """Closest player at or behind; closest overall if nobody is behind."""
    me = state.get_player(player_id)
    if me is None:
        return None
    others = state.others(player_id)
    behind = [p for p in others if p.position <= me.position]
    pool = behind or others
    best = None
    for p in pool:
        if best is None or abs(me.position - p.position) < abs(me.position - best.position):
            best = p
    return best


_TARGET_RULES = {
    CardActionType.PADDLE_STEAL: pick_most_paddles,
    CardActionType.PADDLE_GIFT_CHOOSE: pick_closest_behind,
    CardActionType.BRING_PLAYER: pick_closest_behind,
    CardActionType.MOVE_PLAYER_BEHIND_LAST: pick_last_place,
}


class BotAdapter(DecisionAgent):
    """
    Bot seat.

    Usage:
        bot = BotAdapter(rng=random.Random(7))
        action = bot.next_action(state, "bot_1")
        result = reducer.apply(state, action)
    """

    def __init__(self, rng: random.Random | None = None, dice_sides: int = DEFAULT_CONFIG.dice_sides):
        self.rng = rng or random.Random()
        self.dice_sides = dice_sides

    def roll(self, state: GameState, player_id: str) -> RollInput:
        return RollInput(player_id=player_id, value=self.rng.randint(1, self.dice_sides), source="bot")

    def select_target(
        self,
        state: GameState,
        action: ParsedAction,
        player_id: str,
    ) -> str | None:
        if action.kind == CardActionType.PADDLE_GIFT_RIGHT:
            target = seat_successor(state, player_id)
        else:
            rule = _TARGET_RULES.get(action.kind, pick_furthest_ahead)
            target = rule(state, player_id)
        return target.player_id if target else None
