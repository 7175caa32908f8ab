"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when players start a game
- Holds the canonical game state and one agent per seat
- Steps human inputs and bot turns through the reducer
- Dropped when the game ends

Persistence and broadcast belong to the caller; sessions hand out
GameState snapshots for that.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
