"""
Bots module - Seat controllers.

Provides:
- DecisionAgent: Interface shared by human and bot seats
- HumanAdapter: Rolls from the UI die, targets from UI selections
- BotAdapter: Seeded autonomous player with fixed targeting rules
"""

from .policy import DecisionAgent, HumanAdapter, RollInput
from .creek_bot import (
    BotAdapter,
    pick_closest_behind,
    pick_furthest_ahead,
    pick_last_place,
    pick_most_paddles,
    seat_successor,
)

__all__ = [
    "DecisionAgent",
    "HumanAdapter",
    "RollInput",
    "BotAdapter",
    "pick_closest_behind",
    "pick_furthest_ahead",
    "pick_last_place",
    "pick_most_paddles",
    "seat_successor",
]
