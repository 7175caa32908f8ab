"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/v1/sessions                  Create game session
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get session status
    DELETE /api/v1/sessions/{id}             End session
    GET    /api/v1/sessions/{id}/state       Get game state
    POST   /api/v1/sessions/{id}/roll        Roll for a human seat
    POST   /api/v1/sessions/{id}/draw        Draw the pending Shit Pile card
    POST   /api/v1/sessions/{id}/target      Choose the target of a card
    POST   /api/v1/sessions/{id}/bots/run    Step bot seats

Bot Pacing:
    Turn responses with status=bots_thinking carry bot_delay_seconds.
    Clients wait that long, then call /bots/run (max_steps=1 for a
    step-by-step table, or larger to fast-forward).

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union

from ..config import ALLOWED_ORIGINS, CREEK_ENV
from ..errors import CatalogError
from ..logging_config import get_logger

logger = get_logger(__name__)

API_VERSION = "0.1.0"


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, HTTPException, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        RollRequest,
        DrawRequest,
        TargetRequest,
        RunBotsRequest,
        # Response models
        SessionResponse,
        GameStateResponse,
        TurnResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Creek Engine API",
        description="""
Up Shitz Creek rule engine - turn resolution for human and bot seats.

## Turn Flow

1. `POST /roll` moves the current player and resolves the space
2. On a Shit Pile space, `POST /draw` draws and resolves a card
3. If the card names another player, `POST /target` picks them
4. While `status=bots_thinking`, `POST /bots/run` steps the bot seats

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `NOT_YOUR_TURN` | Input from a player whose turn it is not |
| `INVALID_PHASE` | Input does not match the paused turn phase |
| `INVALID_ROLL` | Die value outside 1-6 |
| `GAME_OVER` | The game already has a winner |
| `STEP_IN_FLIGHT` | Another step is still resolving |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    _status_by_code = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.UNKNOWN_PLAYER: 404,
        ErrorCode.NOT_YOUR_TURN: 409,
        ErrorCode.INVALID_PHASE: 409,
        ErrorCode.GAME_OVER: 409,
        ErrorCode.STEP_IN_FLIGHT: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_from(response: ErrorResponse) -> JSONResponse:
        return make_error_response(
            response.error_code,
            response.error,
            status_code=_status_by_code.get(response.error_code, 400),
            details=response.details,
        )

    error_responses = {
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Session or player not found"},
        409: {"model": ErrorResponse, "description": "Input out of turn or phase"},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid players or cards"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Humans are seated first in the order given, then the bots.
        Pass `cards` to play with a custom deck instead of the built-in one.
        """
        try:
            return api_service.create_session(body)
        except CatalogError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the full game state for display."""
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/roll",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Game Loop"],
        summary="Roll the die for a human seat",
    )
    async def roll(session_id: str, body: RollRequest) -> Union[TurnResponse, JSONResponse]:
        """
        Roll for the current player.

        Send the `value` the client showed, or omit it to let the server roll.
        """
        response = api_service.roll(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Game Loop"],
        summary="Draw the pending Shit Pile card",
    )
    async def draw(session_id: str, body: DrawRequest) -> Union[TurnResponse, JSONResponse]:
        """Draw and resolve a card after landing on a Shit Pile space."""
        response = api_service.draw(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/target",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Game Loop"],
        summary="Choose the player a card acts on",
    )
    async def choose_target(session_id: str, body: TargetRequest) -> Union[TurnResponse, JSONResponse]:
        """
        Resolve the pending targeted card.

        A target that is missing, unknown or the player themselves makes
        the card a no-op.
        """
        response = api_service.choose_target(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/bots/run",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Game Loop"],
        summary="Step bot seats",
    )
    async def run_bots(
        session_id: str,
        body: Optional[RunBotsRequest] = None,
    ) -> Union[TurnResponse, JSONResponse]:
        """Play bot turns until a human is due, the game ends or max_steps is hit."""
        response = api_service.run_bots(session_id, body or RunBotsRequest())
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="creek-engine",
            version=API_VERSION,
            environment=CREEK_ENV,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Creek Engine API",
            "version": API_VERSION,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn creek.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
