"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session and game-loop calls
2. Manages sessions
3. Formats engine state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

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
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..card_effects.catalog import CardCatalog
from ..config import EngineConfig
from ..engine_core.action import TargetPrompt
from ..engine_core.reducer import pending_target_prompt
from ..engine_core.state import GameState, PlayerState
from ..errors import StepInFlightError
from ..logging_config import get_logger
from ..session import SessionManager, Session, GameLoop, LoopState, TurnResult

logger = get_logger(__name__)

_STATUS_BY_LOOP_STATE = {
    LoopState.WAITING_HUMAN_ACTION: SessionStatus.YOUR_TURN,
    LoopState.WAITING_TARGET: SessionStatus.WAITING_TARGET,
    LoopState.BOTS_DUE: SessionStatus.BOTS_THINKING,
    LoopState.GAME_OVER: SessionStatus.GAME_OVER,
}


def _env_session_manager() -> SessionManager:
    return SessionManager(config=EngineConfig.from_env())


def _error_code(code: str | None) -> ErrorCode:
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


@dataclass
class APIService:
    """
    Main API service for game clients.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest(human_names=["Ann"]))
        turn = service.roll(session.session_id, RollRequest(player_id="player_1", value=4))
    """
    session_manager: SessionManager = field(default_factory=_env_session_manager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Raises ValueError for an impossible seat count and CatalogError
        for bad card records.
        """
        catalog = CardCatalog.from_records(request.cards) if request.cards else None
        session = self.session_manager.create_session(
            human_names=request.human_names,
            num_bots=request.num_bots,
            seed=request.random_seed,
            catalog=catalog,
        )
        self._game_loops[session.session_id] = GameLoop(session)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the full display state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._game_state_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def roll(self, session_id: str, request: RollRequest) -> TurnResponse | ErrorResponse:
        return self._run(session_id, lambda loop: loop.submit_roll(request.player_id, request.value))

    def draw(self, session_id: str, request: DrawRequest) -> TurnResponse | ErrorResponse:
        return self._run(session_id, lambda loop: loop.submit_draw(request.player_id))

    def choose_target(self, session_id: str, request: TargetRequest) -> TurnResponse | ErrorResponse:
        return self._run(
            session_id,
            lambda loop: loop.submit_target(request.player_id, request.target_player_id),
        )

    def run_bots(self, session_id: str, request: RunBotsRequest) -> TurnResponse | ErrorResponse:
        return self._run(session_id, lambda loop: loop.run_bot_turns(max_steps=request.max_steps))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _loop_for(self, session: Session) -> GameLoop:
        loop = self._game_loops.get(session.session_id)
        if loop is None:
            loop = GameLoop(session)
            self._game_loops[session.session_id] = loop
        return loop

    def _run(self, session_id: str, step) -> TurnResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            result: TurnResult = step(self._loop_for(session))
        except StepInFlightError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.STEP_IN_FLIGHT)

        if not result.success:
            return ErrorResponse(
                error=result.error or "Action failed",
                error_code=_error_code(result.error_code),
                details={"messages": result.messages} if result.messages else None,
            )

        return TurnResponse(
            session_id=session_id,
            success=True,
            status=_STATUS_BY_LOOP_STATE[result.loop_state],
            messages=result.messages,
            drawn_card_ids=result.drawn_card_ids,
            bot_actions=result.bot_actions,
            bot_delay_seconds=result.bot_delay_seconds,
            game_state=self._game_state_to_response(session),
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _status(self, session: Session) -> SessionStatus:
        return _STATUS_BY_LOOP_STATE[self._loop_for(session).state]

    def _player_info(self, state: GameState, player: PlayerState) -> PlayerInfo:
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            is_bot=player.is_bot,
            is_current_turn=player.player_id == state.current_player.player_id,
            position=player.position,
            paddles=player.paddles,
            skip_turn=player.skip_turn,
            extra_roll=player.extra_roll,
            skip_yellow=player.skip_yellow,
        )

    def _prompt_info(self, prompt: TargetPrompt | None) -> TargetPromptInfo | None:
        if prompt is None:
            return None
        return TargetPromptInfo(
            player_id=prompt.player_id,
            prompt_text=prompt.prompt_text,
            candidate_targets=prompt.candidate_targets,
            card_id=prompt.card_id,
            action_kind=prompt.action.kind.value,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        state = session.game_state
        return SessionResponse(
            session_id=session.session_id,
            status=self._status(session),
            players=[self._player_info(state, p) for p in state.players],
            current_turn_player_id=state.current_player.player_id,
            turn_number=state.turn_number,
            created_at=session.created_at,
            seed=session.seed,
        )

    def _game_state_to_response(self, session: Session) -> GameStateResponse:
        state = session.game_state
        winner = state.get_player(state.winner) if state.winner else None
        return GameStateResponse(
            session_id=session.session_id,
            status=self._status(session),
            phase=state.phase.value,
            turn_number=state.turn_number,
            players=[self._player_info(state, p) for p in state.players],
            current_turn_player_id=state.current_player.player_id,
            deck=DeckInfo(
                draw_pile=len(state.deck.draw_pile),
                discard_pile=len(state.deck.discard_pile),
                total_cards=state.deck.total_cards,
                reshuffle_count=state.deck.reshuffle_count,
            ),
            last_roll=state.last_roll,
            last_message=state.last_message,
            pending_choice=self._prompt_info(pending_target_prompt(state)),
            winner=self._player_info(state, winner) if winner else None,
        )
