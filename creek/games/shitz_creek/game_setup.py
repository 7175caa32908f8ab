"""
Shitz Creek Game Setup - Creates the opening GameState.

Everyone starts on START with one paddle; humans are seated first, then
bots. The deck is every catalog card, shuffled with the injected rng.
"""

from __future__ import annotations
import random
import uuid

from ...config import DEFAULT_CONFIG, EngineConfig
from ...engine_core.deck import initialize_deck
from ...engine_core.state import GameState, PlayerState, TurnPhase
from ...card_effects.catalog import CardCatalog
from .cards import BOT_NAMES, default_catalog

MIN_PLAYERS = 2
MAX_PLAYERS = 6


def new_game(
    human_names: list[str],
    num_bots: int = 0,
    catalog: CardCatalog | None = None,
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new Shitz Creek game.

    Args:
        human_names: Display names of human players, in seating order
        num_bots: Number of bot players seated after the humans
        catalog: Card source (built-in deck if not provided)
        rng: Random source for the deck shuffle
        config: Rule settings (starting paddles)
        game_id: Identifier for the game (random if not provided)

    Returns:
        Initial GameState with the first player to roll
    """
    num_players = len(human_names) + num_bots
    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise ValueError(f"Shitz Creek supports {MIN_PLAYERS}-{MAX_PLAYERS} players")

    rng = rng or random.Random()
    cards = catalog or default_catalog()

    players = _create_players(human_names, num_bots, config.starting_paddles)
    deck = initialize_deck(cards.ids(), rng)

    return GameState(
        game_id=game_id or f"creek_{uuid.uuid4().hex[:8]}",
        players=players,
        current_player_idx=0,
        turn_number=1,
        deck=deck,
        phase=TurnPhase.AWAITING_ROLL,
        last_message=f"{players[0].name}'s turn. Roll the die!",
    )


def _create_players(
    human_names: list[str],
    num_bots: int,
    starting_paddles: int,
) -> list[PlayerState]:
    """Create player states."""
    players = []

    for i, name in enumerate(human_names):
        players.append(PlayerState(
            player_id=f"player_{i + 1}",
            name=name,
            is_bot=False,
            paddles=starting_paddles,
        ))

    for i in range(num_bots):
        name = BOT_NAMES[i] if i < len(BOT_NAMES) else f"Bot {i + 1}"
        players.append(PlayerState(
            player_id=f"bot_{i + 1}",
            name=name,
            is_bot=True,
            paddles=starting_paddles,
        ))

    return players
