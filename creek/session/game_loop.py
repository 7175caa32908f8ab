"""
Game Loop - Drives a session one input at a time.

The loop:
1. A human seat submits a roll, a draw or a target
2. The reducer resolves it into a new canonical state
3. When bots are due, the caller schedules run_bot_turns, waiting
   bot_delay_seconds between steps if it wants the pacing the UI shows
4. Repeat until someone wins

The loop never sleeps; pacing is the caller's job. Only one step may be
resolving per session at a time.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from ..engine_core.action import Action, ActionResult, TargetPrompt
from ..engine_core.reducer import pending_target_prompt
from ..engine_core.state import TurnPhase
from ..errors import StepInFlightError, UnknownPlayerError
from ..logging_config import get_logger
from .manager import Session, SessionState

logger = get_logger(__name__)


class LoopState(Enum):
    """What the loop is waiting for."""
    WAITING_HUMAN_ACTION = "waiting_human_action"
    WAITING_TARGET = "waiting_target"
    BOTS_DUE = "bots_due"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of one loop call.

    messages are everything the reducer reported, in order, ready to be
    broadcast to the other players.
    """
    success: bool
    loop_state: LoopState
    messages: list[str] = field(default_factory=list)

    error: str | None = None
    error_code: str | None = None

    drawn_card_ids: list[str] = field(default_factory=list)
    pending_choice: TargetPrompt | None = None
    bot_actions: list[str] = field(default_factory=list)

    # Suggested pause before the next bot step
    bot_delay_seconds: float = 0.0
    winner: str | None = None


class GameLoop:
    """
    The session driver.

    Usage:
        loop = GameLoop(session)

        result = loop.submit_roll("player_1")
        if result.pending_choice:
            result = loop.submit_target("player_1", chosen_id)

        while result.loop_state == LoopState.BOTS_DUE:
            time.sleep(result.bot_delay_seconds)
            result = loop.run_bot_turns(max_steps=1)
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    def state(self) -> LoopState:
        return self._loop_state()

    @contextmanager
    def _step(self) -> Iterator[None]:
        """Reentrancy guard around one resolving step."""
        if self.session.step_in_flight:
            raise StepInFlightError(self.session.session_id)
        self.session.step_in_flight = True
        try:
            yield
        finally:
            self.session.step_in_flight = False

    def submit_roll(self, player_id: str, value: int | None = None) -> TurnResult:
        """
        Roll for a human seat.

        value is the die the UI showed; without one the seat's agent rolls.
        """
        with self._step():
            if value is None:
                agent = self.session.agents.get(player_id)
                if agent is None:
                    err = UnknownPlayerError(player_id)
                    return self._failure(str(err), err.code)
                value = agent.roll(self.session.game_state, player_id).value
            return self._result(self._apply(Action.roll(player_id, value)))

    def submit_draw(self, player_id: str) -> TurnResult:
        """Draw the pending Shit Pile card."""
        with self._step():
            return self._result(self._apply(Action.draw_card(player_id)))

    def submit_target(self, player_id: str, target_id: str | None) -> TurnResult:
        """
        Resolve the pending targeted card against target_id.

        A human seat's pick goes through its HumanAdapter queue so the
        seat produces the Action the same way a bot does.
        """
        with self._step():
            state = self.session.game_state
            agent = self.session.human_agent(player_id)
            action = None
            if agent is not None and target_id is not None and state.phase == TurnPhase.TARGET_PENDING:
                agent.submit_target(target_id)
                action = agent.next_action(state, player_id)
            if action is None:
                action = Action.choose_target(player_id, target_id)
            return self._result(self._apply(action))

    def run_bot_turns(self, max_steps: int = 500) -> TurnResult:
        """
        Step bot seats until a human is due, the game ends, or max_steps.

        Each reducer input counts as one step.
        """
        with self._step():
            messages: list[str] = []
            bot_actions: list[str] = []
            drawn: list[str] = []
            steps = 0

            while steps < max_steps and self.session.is_bot_turn():
                state = self.session.game_state
                player = state.current_player
                agent = self.session.current_agent()
                action = agent.next_action(state, player.player_id) if agent else None
                if action is None:
                    logger.warning("bot %s produced no action in phase %s", player.player_id, state.phase.value)
                    break

                result = self._apply(action)
                if not result.success:
                    logger.error("bot %s action rejected: %s", player.player_id, result.error)
                    return self._failure(result.error, result.error_code, messages)

                steps += 1
                messages.extend(result.state_changes)
                bot_actions.append(f"{player.name}: {_describe(action)}")
                if result.drawn_card_id:
                    drawn.append(result.drawn_card_id)

            loop_state = self._loop_state()
            return TurnResult(
                success=True,
                loop_state=loop_state,
                messages=messages,
                drawn_card_ids=drawn,
                pending_choice=pending_target_prompt(self.session.game_state),
                bot_actions=bot_actions,
                bot_delay_seconds=self._delay(loop_state),
                winner=self.session.game_state.winner,
            )

    def _apply(self, action: Action) -> ActionResult:
        session = self.session
        result = session.reducer.apply(session.game_state, action)
        if result.success and result.new_state is not None:
            session.game_state = result.new_state
            session.message_log.extend(result.state_changes)
            session.touch()
            if session.game_state.is_finished:
                session.state = SessionState.GAME_OVER
        return result

    def _loop_state(self) -> LoopState:
        state = self.session.game_state
        if state.is_finished:
            return LoopState.GAME_OVER
        if state.current_player.is_bot:
            return LoopState.BOTS_DUE
        if state.phase == TurnPhase.TARGET_PENDING:
            return LoopState.WAITING_TARGET
        return LoopState.WAITING_HUMAN_ACTION

    def _delay(self, loop_state: LoopState) -> float:
        if loop_state == LoopState.BOTS_DUE:
            return self.session.reducer.config.bot_delay_seconds
        return 0.0

    def _result(self, result: ActionResult) -> TurnResult:
        if not result.success:
            return self._failure(result.error, result.error_code)
        loop_state = self._loop_state()
        return TurnResult(
            success=True,
            loop_state=loop_state,
            messages=list(result.state_changes),
            drawn_card_ids=[result.drawn_card_id] if result.drawn_card_id else [],
            pending_choice=result.pending_choice,
            bot_delay_seconds=self._delay(loop_state),
            winner=self.session.game_state.winner,
        )

    def _failure(
        self,
        error: str | None,
        error_code: str | None,
        messages: list[str] | None = None,
    ) -> TurnResult:
        return TurnResult(
            success=False,
            loop_state=self._loop_state(),
            messages=messages or [],
            error=error,
            error_code=error_code,
        )


def _describe(action: Action) -> str:
    payload = action.payload
    if payload.roll_value is not None:
        return f"roll {payload.roll_value}"
    if payload.target_player_id is not None:
        return f"target {payload.target_player_id}"
    return action.action_type.value
