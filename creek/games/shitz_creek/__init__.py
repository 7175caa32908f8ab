"""
Up Shitz Creek - Race up the creek on a 26-space board.

Players roll a die and move; landing on a Shit Pile draws a card. The
first player to reach FINISH holding at least two paddles wins.

This module contains:
- The built-in 50-card Shit Pile deck
- Game setup (seating, starting paddles, shuffled deck)
"""

from .cards import SHITZ_CREEK_CARDS, BOT_NAMES, default_catalog
from .game_setup import new_game

__all__ = [
    "SHITZ_CREEK_CARDS",
    "BOT_NAMES",
    "default_catalog",
    "new_game",
]
