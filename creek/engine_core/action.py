"""
Action System - Turn inputs, payloads, and results.

A turn is driven by three inputs:
1. ROLL - the die value for the current player
2. DRAW_CARD - draw from the Shit Pile after landing on one
3. CHOOSE_TARGET - the player picked for a targeted card

Humans and bots submit the same Actions; all state changes flow through
the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..card_effects.actions import ParsedAction
    from .state import GameState


class ActionType(Enum):
    """Inputs the Turn Controller accepts."""
    ROLL = "roll"
    DRAW_CARD = "draw_card"
    CHOOSE_TARGET = "choose_target"


@dataclass
class ActionPayload:
    """
    Payload for an action.

    Fields are optional; which ones matter depends on the action type and
    validation happens in the reducer.
    """
    player_id: str | None = None
    roll_value: int | None = None
    target_player_id: str | None = None


@dataclass
class Action:
    """A complete input to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str | None:
        return self.payload.player_id

    @classmethod
    def roll(cls, player_id: str, value: int) -> Action:
        """Factory for a die roll."""
        return cls(
            action_type=ActionType.ROLL,
            payload=ActionPayload(player_id=player_id, roll_value=value),
        )

    @classmethod
    def draw_card(cls, player_id: str) -> Action:
        """Factory for drawing the pending card."""
        return cls(
            action_type=ActionType.DRAW_CARD,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def choose_target(cls, player_id: str, target_player_id: str | None) -> Action:
        """Factory for the target chosen for a targeted card."""
        return cls(
            action_type=ActionType.CHOOSE_TARGET,
            payload=ActionPayload(player_id=player_id, target_player_id=target_player_id),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "action_type": self.action_type.value,
            "player_id": self.payload.player_id,
            "roll_value": self.payload.roll_value,
            "target_player_id": self.payload.target_player_id,
        }


# Picker prompt per targeted card kind
TARGET_PROMPTS = {
    "paddle_steal": "Select a player to steal a paddle from",
    "paddle_gift_choose": "Select a player to gift a paddle to",
    "send_player_to": "Select a player to send to {space}",
    "bring_player": "Select a player to bring to your space",
    "move_ahead_of_player": "Select a player to move ahead of",
    "move_player_behind_last": "Select a player to move behind last place",
    "move_both_to_space": "Select a player to move to {space} with you",
}


@dataclass
class TargetPrompt:
    """
    A player choice the caller must obtain before the card can resolve.

    Returned to the UI/bot while the turn is in TARGET_PENDING.
    """
    player_id: str
    prompt_text: str
    candidate_targets: list[str]
    action: ParsedAction
    card_id: str | None = None

    @classmethod
    def for_action(
        cls,
        state: GameState,
        player_id: str,
        action: ParsedAction,
        card_id: str | None = None,
    ) -> TargetPrompt:
        """Build the prompt for a targeted action; candidates are the other players."""
        space = action.target_space.value if action.target_space else "a space"
        template = TARGET_PROMPTS.get(action.kind.value, "Select a player")
        return cls(
            player_id=player_id,
            prompt_text=template.format(space=space),
            candidate_targets=[p.player_id for p in state.others(player_id)],
            action=action,
            card_id=card_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "prompt_text": self.prompt_text,
            "candidate_targets": list(self.candidate_targets),
            "action": self.action.to_dict(),
            "card_id": self.card_id,
        }


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - New state (if succeeded)
    - Error and error code (if failed)
    - Messages describing what happened, in order
    """
    success: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)  # Human-readable messages

    drawn_card_id: str | None = None
    pending_choice: TargetPrompt | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        changes: list[str] | None = None,
        drawn_card_id: str | None = None,
        pending_choice: TargetPrompt | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            drawn_card_id=drawn_card_id,
            pending_choice=pending_choice,
        )
