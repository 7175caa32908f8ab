"""
Decision Agent - Interface for whoever drives a seat.

A DecisionAgent answers the two questions the Turn Controller can ask:
- What did you roll?
- Which player do you target with this card?

Human and bot seats both turn their answers into the same Actions for
the same Reducer, which is what keeps practice games, live games and
bot turns on identical rules.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from ..config import DEFAULT_CONFIG
from ..engine_core.action import Action
from ..engine_core.state import TurnPhase

if TYPE_CHECKING:
    from ..card_effects.actions import ParsedAction
    from ..engine_core.state import GameState


@dataclass
class RollInput:
    """A die value together with where it came from."""
    player_id: str
    value: int
    source: str = "dice"


class DecisionAgent(ABC):
    """
    Abstract base class for seat controllers.

    Implementations only produce inputs; they never touch state.
    """

    @abstractmethod
    def roll(self, state: GameState, player_id: str) -> RollInput:
        """
        Produce the die roll for player_id.

        Args:
            state: Current game state
            player_id: The seat that is rolling

        Returns:
            RollInput with a value in 1..dice_sides
        """
        pass

    @abstractmethod
    def select_target(
        self,
        state: GameState,
        action: ParsedAction,
        player_id: str,
    ) -> str | None:
        """
        Choose the target player for a targeted card.

        Returns a player id, or None when no choice is available yet.
        """
        pass

    def next_action(self, state: GameState, player_id: str) -> Action | None:
        """
        The Action this agent submits for the current phase.

        None means the agent has nothing to submit yet (a human who has
        not picked a target).
        """
        if state.phase == TurnPhase.AWAITING_ROLL:
            return Action.roll(player_id, self.roll(state, player_id).value)
        if state.phase == TurnPhase.CARD_PENDING:
            return Action.draw_card(player_id)
        if state.phase == TurnPhase.TARGET_PENDING and state.pending_action is not None:
            target = self.select_target(state, state.pending_action, player_id)
            if target is None:
                return None
            return Action.choose_target(player_id, target)
        return None

    def get_name(self) -> str:
        """Get the agent's name/identifier."""
        return self.__class__.__name__


class HumanAdapter(DecisionAgent):
    """
    Human seat.

    Rolls come from an injected random source (the on-screen die);
    targets come from UI selection events queued with submit_target.
    """

    def __init__(self, rng: random.Random | None = None, dice_sides: int = DEFAULT_CONFIG.dice_sides):
        self.rng = rng or random.Random()
        self.dice_sides = dice_sides
        self._targets: deque[str] = deque()

    def submit_target(self, target_id: str) -> None:
        """Queue the player picked in the UI."""
        self._targets.append(target_id)

    def roll(self, state: GameState, player_id: str) -> RollInput:
        return RollInput(player_id=player_id, value=self.rng.randint(1, self.dice_sides))

    def select_target(
        self,
        state: GameState,
        action: ParsedAction,
        player_id: str,
    ) -> str | None:
        if not self._targets:
            return None
        return self._targets.popleft()
