"""
Game State - Snapshot containers the engine operates on.

Design principles:
- Snapshot-in / snapshot-out: every mutation returns a new object
- Serializable: can be handed to the external store and loaded back
- Seating order is the order of GameState.players
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..card_effects.actions import ParsedAction


class TurnPhase(Enum):
    """Where the Turn Controller is paused for the current player."""
    AWAITING_ROLL = "awaiting_roll"
    CARD_PENDING = "card_pending"  # Landed on a draw space, card not drawn yet
    TARGET_PENDING = "target_pending"  # Drawn card needs a player target
    FINISHED = "finished"


@dataclass
class PlayerState:
    """
    State for a single player.

    The three flags are one-shot tokens: the Turn Controller consumes
    skip_turn and extra_roll, space resolution consumes skip_yellow.
    """
    player_id: str
    name: str
    is_bot: bool = False

    position: int = 0
    paddles: int = 1

    skip_turn: bool = False
    extra_roll: bool = False
    skip_yellow: bool = False

    def moved_to(self, position: int, finish: int) -> PlayerState:
        """Return new player state at position, clamped to the board."""
        return replace(self, position=max(0, min(position, finish)))

    def moved_by(self, delta: int, finish: int) -> PlayerState:
        """Return new player state shifted by delta spaces, clamped to the board."""
        return self.moved_to(self.position + delta, finish)

    def with_paddles(self, paddles: int) -> PlayerState:
        """Return new player state with paddle count (never negative)."""
        return replace(self, paddles=max(0, paddles))

    def with_flags(self, **flags: bool) -> PlayerState:
        """Return new player state with token flags replaced."""
        return replace(self, **flags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "is_bot": self.is_bot,
            "position": self.position,
            "paddles": self.paddles,
            "skip_turn": self.skip_turn,
            "extra_roll": self.extra_roll,
            "skip_yellow": self.skip_yellow,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        return cls(**data)


@dataclass
class DeckState:
    """
    The two partitions of the card deck.

    Top of the draw pile is index 0. A card id is always in exactly
    one of the two piles.
    """
    draw_pile: list[str] = field(default_factory=list)
    discard_pile: list[str] = field(default_factory=list)
    total_cards: int = 0
    reshuffle_count: int = 0

    @property
    def is_exhausted(self) -> bool:
        """True when the next draw triggers a reshuffle (or fails)."""
        return len(self.draw_pile) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "draw_pile": list(self.draw_pile),
            "discard_pile": list(self.discard_pile),
            "total_cards": self.total_cards,
            "reshuffle_count": self.reshuffle_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeckState:
        return cls(
            draw_pile=list(data.get("draw_pile", [])),
            discard_pile=list(data.get("discard_pile", [])),
            total_cards=data.get("total_cards", 0),
            reshuffle_count=data.get("reshuffle_count", 0),
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical snapshot the caller persists and broadcasts.
    All state changes go through the reducer.
    """
    game_id: str
    players: list[PlayerState] = field(default_factory=list)
    current_player_idx: int = 0
    turn_number: int = 0

    deck: DeckState = field(default_factory=DeckState)
    phase: TurnPhase = TurnPhase.AWAITING_ROLL

    winner: str | None = None
    last_message: str = ""
    last_roll: int | None = None

    # Card resolution in progress
    pending_card_id: str | None = None
    pending_action: ParsedAction | None = None
    chained_draws: int = 0

    @property
    def current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def seat_of(self, player_id: str) -> int:
        """Seating index of a player, -1 if not seated."""
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        return -1

    def others(self, player_id: str) -> list[PlayerState]:
        """All players except player_id, in seating order."""
        return [p for p in self.players if p.player_id != player_id]

    def max_position(self) -> int:
        return max((p.position for p in self.players), default=0)

    def min_position(self) -> int:
        return min((p.position for p in self.players), default=0)

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = [
            player if p.player_id == player.player_id else p
            for p in self.players
        ]
        return self._copy_with(players=new_players)

    def with_deck(self, deck: DeckState) -> GameState:
        """Return new state with updated deck."""
        return self._copy_with(deck=deck)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe snapshot for the external game-state store."""
        return {
            "game_id": self.game_id,
            "players": [p.to_dict() for p in self.players],
            "current_player_idx": self.current_player_idx,
            "turn_number": self.turn_number,
            "deck": self.deck.to_dict(),
            "phase": self.phase.value,
            "winner": self.winner,
            "last_message": self.last_message,
            "last_roll": self.last_roll,
            "pending_card_id": self.pending_card_id,
            "pending_action": self.pending_action.to_dict() if self.pending_action else None,
            "chained_draws": self.chained_draws,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        """Rebuild a state from a to_dict() snapshot."""
        from ..card_effects.actions import ParsedAction

        pending = data.get("pending_action")
        return cls(
            game_id=data["game_id"],
            players=[PlayerState.from_dict(p) for p in data.get("players", [])],
            current_player_idx=data.get("current_player_idx", 0),
            turn_number=data.get("turn_number", 0),
            deck=DeckState.from_dict(data.get("deck", {})),
            phase=TurnPhase(data.get("phase", TurnPhase.AWAITING_ROLL.value)),
            winner=data.get("winner"),
            last_message=data.get("last_message", ""),
            last_roll=data.get("last_roll"),
            pending_card_id=data.get("pending_card_id"),
            pending_action=ParsedAction.from_dict(pending) if pending else None,
            chained_draws=data.get("chained_draws", 0),
        )
