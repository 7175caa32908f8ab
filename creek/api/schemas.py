"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between game clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- NOT_YOUR_TURN: Input from a player whose turn it is not
- INVALID_PHASE: Input does not match the paused turn phase
- INVALID_ROLL: Die value outside 1..6
- GAME_OVER: The game already has a winner
- STEP_IN_FLIGHT: Another step is still resolving for the session
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    WAITING_TARGET = "waiting_target"
    BOTS_THINKING = "bots_thinking"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_PHASE = "INVALID_PHASE"
    INVALID_ROLL = "INVALID_ROLL"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    STEP_IN_FLIGHT = "STEP_IN_FLIGHT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_bot: bool
    is_current_turn: bool = False
    position: int = 0
    paddles: int = 0
    skip_turn: bool = False
    extra_roll: bool = False
    skip_yellow: bool = False

    model_config = {"from_attributes": True}


class DeckInfo(BaseModel):
    """Shit Pile counts. Card order stays server-side."""
    draw_pile: int = 0
    discard_pile: int = 0
    total_cards: int = 0
    reshuffle_count: int = 0


class TargetPromptInfo(BaseModel):
    """A player choice the current player must make."""
    player_id: str
    prompt_text: str
    candidate_targets: list[str] = Field(default_factory=list)
    card_id: Optional[str] = None
    action_kind: str


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    human_names: list[str] = Field(
        default_factory=lambda: ["Player"], description="Human players, in seating order"
    )
    num_bots: int = Field(1, ge=0, le=5, description="Number of bot opponents")
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")
    cards: Optional[list[dict[str, Any]]] = Field(
        None, description="Card records to use instead of the built-in deck"
    )


class RollRequest(BaseModel):
    """A die roll for a human seat."""
    player_id: str
    value: Optional[int] = Field(None, description="Die value shown in the UI; server rolls if omitted")


class DrawRequest(BaseModel):
    """Draw the pending Shit Pile card."""
    player_id: str


class TargetRequest(BaseModel):
    """The player picked for a targeted card."""
    player_id: str
    target_player_id: Optional[str] = None


class RunBotsRequest(BaseModel):
    """Step bot seats."""
    max_steps: int = Field(500, ge=1, le=5000)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: SessionStatus
    phase: str
    turn_number: int
    players: list[PlayerInfo] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    deck: DeckInfo = Field(default_factory=DeckInfo)
    last_roll: Optional[int] = None
    last_message: str = ""
    pending_choice: Optional[TargetPromptInfo] = None
    winner: Optional[PlayerInfo] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    game_name: str = "Up Shitz Creek"
    players: list[PlayerInfo] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    turn_number: int = 0
    created_at: float = 0.0
    seed: Optional[int] = None
    api_version: str = "v1"


class TurnResponse(BaseModel):
    """Response after a roll, draw, target or bot run."""
    session_id: str
    success: bool
    status: SessionStatus
    messages: list[str] = Field(default_factory=list)
    drawn_card_ids: list[str] = Field(default_factory=list)
    bot_actions: list[str] = Field(default_factory=list)
    bot_delay_seconds: float = 0.0
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str = "development"
