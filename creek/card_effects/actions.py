"""
Parsed card actions - the closed set of things a card can do.

A ParsedAction is the typed result of classifying a card's free text.
The executor only ever sees these, never the raw text.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..engine_core.board import SpaceType


class CardActionType(Enum):
    """Every mechanical card effect the engine can execute."""
    # Paddles
    PADDLE_GAIN = "paddle_gain"
    PADDLE_LOSE = "paddle_lose"
    PADDLE_STEAL = "paddle_steal"
    PADDLE_GIFT_RIGHT = "paddle_gift_right"
    PADDLE_GIFT_CHOOSE = "paddle_gift_choose"

    # Own movement
    MOVE_FORWARD = "move_forward"
    MOVE_BACK = "move_back"
    GO_TO_SPACE = "go_to_space"
    GO_TO_SPACE_AND_GAIN_PADDLE = "go_to_space_and_gain_paddle"
    TAKE_LEAD = "take_lead"
    MOVE_AHEAD_OF_PLAYER = "move_ahead_of_player"
    BEHIND_LEADER = "behind_leader"

    # Turn flow
    LOSE_TURN = "lose_turn"
    EXTRA_TURN = "extra_turn"
    DRAW_AGAIN = "draw_again"
    SKIP_YELLOW = "skip_yellow"

    # Moving other players
    SEND_PLAYER_TO = "send_player_to"
    BRING_PLAYER = "bring_player"
    BRING_ALL_PLAYERS = "bring_all_players"
    GO_BACK_WITH_PLAYER = "go_back_with_player"
    MOVE_PLAYER_BEHIND_LAST = "move_player_behind_last"
    MOVE_BOTH_TO_SPACE = "move_both_to_space"

    # Fallback: text the classifier did not recognise
    UNRECOGNIZED = "unrecognized"


class SpaceLookup(Enum):
    """How a go-to-space style action picks its destination."""
    NEXT = "next"  # Next space of the kind at or after the current one
    CLOSEST = "closest"  # Nearest space of the kind in either direction


# Kinds that cannot resolve without a chosen player
TARGETED_KINDS = frozenset({
    CardActionType.PADDLE_STEAL,
    CardActionType.PADDLE_GIFT_CHOOSE,
    CardActionType.MOVE_AHEAD_OF_PLAYER,
    CardActionType.SEND_PLAYER_TO,
    CardActionType.BRING_PLAYER,
    CardActionType.MOVE_PLAYER_BEHIND_LAST,
    CardActionType.MOVE_BOTH_TO_SPACE,
})

# Kinds that need a target space kind
SPACE_KINDS = frozenset({
    CardActionType.GO_TO_SPACE,
    CardActionType.GO_TO_SPACE_AND_GAIN_PADDLE,
    CardActionType.SEND_PLAYER_TO,
    CardActionType.MOVE_BOTH_TO_SPACE,
})


@dataclass(frozen=True)
class ParsedAction:
    """
    A classified card effect.

    text is the card's original effect text, kept for messaging.
    """
    kind: CardActionType
    text: str
    magnitude: int | None = None
    target_space: SpaceType | None = None
    lookup: SpaceLookup = SpaceLookup.NEXT
    needs_player_target: bool = False

    @property
    def is_noop(self) -> bool:
        return self.kind == CardActionType.UNRECOGNIZED

    @classmethod
    def of(
        cls,
        kind: CardActionType,
        text: str,
        magnitude: int | None = None,
        target_space: SpaceType | None = None,
        lookup: SpaceLookup = SpaceLookup.NEXT,
    ) -> ParsedAction:
        """Build an action, deriving needs_player_target from the kind."""
        return cls(
            kind=kind,
            text=text,
            magnitude=magnitude,
            target_space=target_space,
            lookup=lookup,
            needs_player_target=kind in TARGETED_KINDS,
        )

    @classmethod
    def unrecognized(cls, text: str) -> ParsedAction:
        return cls(kind=CardActionType.UNRECOGNIZED, text=text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "magnitude": self.magnitude,
            "target_space": self.target_space.value if self.target_space else None,
            "lookup": self.lookup.value,
            "needs_player_target": self.needs_player_target,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedAction:
        target_space = data.get("target_space")
        return cls(
            kind=CardActionType(data["kind"]),
            text=data.get("text", ""),
            magnitude=data.get("magnitude"),
            target_space=SpaceType(target_space) if target_space else None,
            lookup=SpaceLookup(data.get("lookup", SpaceLookup.NEXT.value)),
            needs_player_target=data.get("needs_player_target", False),
        )
