"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Holds the board and resolves space effects
2. Manages GameState snapshots and the card deck
3. Applies turn inputs via the reducer (engine_core.reducer)
4. Executes classified card actions (engine_core.effect_resolver)

The reducer and effect resolver depend on card_effects, which in turn
uses the board types below, so they are imported from their modules
rather than re-exported here.
"""

from .state import GameState, PlayerState, DeckState, TurnPhase
from .board import Board, Space, SpaceType, SpaceEffectType, DEFAULT_BOARD, resolve_space
from .deck import DrawResult, initialize_deck, draw_card, cards_remaining, cards_discarded
from .action import Action, ActionType, ActionPayload, ActionResult, TargetPrompt

__all__ = [
    "GameState",
    "PlayerState",
    "DeckState",
    "TurnPhase",
    "Board",
    "Space",
    "SpaceType",
    "SpaceEffectType",
    "DEFAULT_BOARD",
    "resolve_space",
    "DrawResult",
    "initialize_deck",
    "draw_card",
    "cards_remaining",
    "cards_discarded",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "TargetPrompt",
]
