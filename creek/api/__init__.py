"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Submits rolls, draws and target choices for human seats
3. Steps bot seats, pacing them with bot_delay_seconds
4. Reads the game state for display

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    RollRequest,
    DrawRequest,
    TargetRequest,
    RunBotsRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    TurnResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    DeckInfo,
    TargetPromptInfo,
    SessionStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "RollRequest",
    "DrawRequest",
    "TargetRequest",
    "RunBotsRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "TurnResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "DeckInfo",
    "TargetPromptInfo",
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
