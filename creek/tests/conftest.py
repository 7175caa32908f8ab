"""
Pytest fixtures for Creek tests.
"""

import random

import pytest

from ..card_effects.catalog import CardCatalog
from ..engine_core.board import DEFAULT_BOARD, Board
from ..engine_core.reducer import Reducer
from ..engine_core.state import DeckState, GameState, PlayerState, TurnPhase
from ..games.shitz_creek import default_catalog


def make_state(*players: PlayerState, deck: list[str] | None = None, **kwargs) -> GameState:
    """Build a state around hand-placed players with a fixed draw pile."""
    draw_pile = list(deck or [])
    return GameState(
        game_id="test_game",
        players=list(players),
        current_player_idx=kwargs.pop("current_player_idx", 0),
        turn_number=kwargs.pop("turn_number", 1),
        deck=DeckState(draw_pile=draw_pile, discard_pile=[], total_cards=len(draw_pile)),
        phase=kwargs.pop("phase", TurnPhase.AWAITING_ROLL),
        **kwargs,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def board() -> Board:
    return DEFAULT_BOARD


@pytest.fixture
def catalog() -> CardCatalog:
    """The built-in 50-card deck."""
    return default_catalog()


@pytest.fixture
def two_player_state(catalog: CardCatalog) -> GameState:
    """Ann (human) and Robo (bot) on START with one paddle each."""
    return make_state(
        PlayerState(player_id="player_1", name="Ann"),
        PlayerState(player_id="bot_1", name="Robo", is_bot=True),
        deck=catalog.ids(),
    )


@pytest.fixture
def three_player_state(catalog: CardCatalog) -> GameState:
    """Three players spread along the creek."""
    return make_state(
        PlayerState(player_id="player_1", name="Ann", position=10, paddles=1),
        PlayerState(player_id="player_2", name="Ben", position=16, paddles=3),
        PlayerState(player_id="bot_1", name="Robo", is_bot=True, position=5, paddles=0),
        deck=catalog.ids(),
    )


@pytest.fixture
def reducer(catalog: CardCatalog, rng: random.Random) -> Reducer:
    """Reducer over the default board and deck."""
    return Reducer(board=DEFAULT_BOARD, catalog=catalog, rng=rng)
