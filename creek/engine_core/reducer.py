"""
Reducer - The Turn Controller.

The reducer is the single point of state mutation.
All state changes must go through Reducer.apply().

Design principles:
- Pure transition: (state, action) -> ActionResult with a new state
- Validates turn ownership and phase before applying
- Pauses in CARD_PENDING / TARGET_PENDING until the next input arrives
- Delegates space effects to the board and card effects to the
  effect resolver

Turn sequence:
    AWAITING_ROLL --ROLL--> space resolution
        draw space      -> CARD_PENDING --DRAW_CARD--> card resolution
        targeted card   -> TARGET_PENDING --CHOOSE_TARGET--> card resolution
        draw again      -> CARD_PENDING (bounded per landing)
        extra roll      -> AWAITING_ROLL, same player
        otherwise       -> next seat (skipping players who lost a turn)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from ..card_effects.actions import ParsedAction
from ..card_effects.catalog import CardCatalog
from ..card_effects.classifier import classify_card_effect
from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import (
    CreekError,
    EmptyDeckError,
    GameOverError,
    InvalidPhaseError,
    InvalidRollError,
    NotYourTurnError,
    UnknownPlayerError,
)
from ..games.shitz_creek.cards import default_catalog
from ..logging_config import get_logger
from .action import Action, ActionResult, ActionType, TargetPrompt
from .board import DEFAULT_BOARD, Board, resolve_space
from .deck import draw_card
from .effect_resolver import check_win, execute_card_action
from .state import GameState, TurnPhase

logger = get_logger(__name__)

# Phase each input is accepted in
_REQUIRED_PHASE = {
    ActionType.ROLL: TurnPhase.AWAITING_ROLL,
    ActionType.DRAW_CARD: TurnPhase.CARD_PENDING,
    ActionType.CHOOSE_TARGET: TurnPhase.TARGET_PENDING,
}


def _failure(error: CreekError) -> ActionResult:
    return ActionResult.failure(str(error), error_code=error.code)


@dataclass
class Reducer:
    """
    Reducer applies turn inputs to game state.

    Stateless between calls - all game state is in GameState. The rng is
    used for space effects and reshuffles only; dice values arrive in
    the ROLL input.
    """
    board: Board = DEFAULT_BOARD
    catalog: CardCatalog = field(default_factory=default_catalog)
    rng: random.Random = field(default_factory=random.Random)
    config: EngineConfig = DEFAULT_CONFIG

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        error = self._validate_action(state, action)
        if error is not None:
            logger.debug("rejected %s from %s: %s", action.action_type.value, action.player_id, error)
            return _failure(error)

        handler = self._get_handler(action.action_type)
        try:
            return handler(state, action)
        except CreekError as e:
            logger.warning("game=%s %s failed: %s", state.game_id, action.action_type.value, e)
            return _failure(e)

    def _validate_action(self, state: GameState, action: Action) -> CreekError | None:
        """
        Check the entry guards.

        Returns the error to report, None if the action may proceed.
        """
        if state.is_finished or state.phase == TurnPhase.FINISHED:
            return GameOverError(state.winner)

        player_id = action.player_id
        if player_id is None or state.get_player(player_id) is None:
            return UnknownPlayerError(str(player_id))

        current = state.current_player
        if player_id != current.player_id:
            return NotYourTurnError(player_id, current.player_id)

        required = _REQUIRED_PHASE[action.action_type]
        if state.phase != required:
            return InvalidPhaseError(action.action_type.value, state.phase.value)

        if action.action_type == ActionType.ROLL:
            value = action.payload.roll_value
            if value is None or not 1 <= value <= self.config.dice_sides:
                return InvalidRollError(value if value is not None else 0, self.config.dice_sides)

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.ROLL: self._handle_roll,
            ActionType.DRAW_CARD: self._handle_draw_card,
            ActionType.CHOOSE_TARGET: self._handle_choose_target,
        }
        return handlers[action_type]

    # -- handlers -----------------------------------------------------------

    def _handle_roll(self, state: GameState, action: Action) -> ActionResult:
        """Move the current player and resolve the space they land on."""
        roll = action.payload.roll_value
        player = state.current_player
        moved = player.moved_to(player.position + roll, self.board.finish)
        state = state.with_player(moved)._copy_with(last_roll=roll)
        messages = [f"{moved.name} rolled a {roll} and moved to space {moved.position}."]

        state, win_messages = check_win(state, moved.player_id, self.board, self.config)
        messages.extend(win_messages)
        if state.is_finished:
            return self._finish(state, messages)

        resolution = resolve_space(state, moved.player_id, self.board, self.rng)
        state = resolution.state
        messages.extend(resolution.messages)

        flags = {}
        if resolution.skip_turn:
            flags["skip_turn"] = True
        if resolution.extra_roll:
            flags["extra_roll"] = True
        if flags:
            state = state.with_player(state.get_player(moved.player_id).with_flags(**flags))

        state, win_messages = check_win(state, moved.player_id, self.board, self.config)
        messages.extend(win_messages)
        if state.is_finished:
            return self._finish(state, messages)

        if resolution.draw_card:
            state = state._copy_with(phase=TurnPhase.CARD_PENDING, chained_draws=0)
            messages.append(f"{moved.name} must draw from the Shit Pile!")
            return self._success(state, messages)

        return self._end_turn(state, messages)

    def _handle_draw_card(self, state: GameState, action: Action) -> ActionResult:
        """Draw, classify and either execute or pause for a target."""
        player = state.current_player
        messages: list[str] = []

        try:
            drawn = draw_card(state.deck, self.rng)
        except EmptyDeckError:
            logger.warning("game=%s deck is empty, skipping draw", state.game_id)
            messages.append("The deck is empty. No card drawn.")
            return self._end_turn(state, messages)

        if drawn.reshuffled:
            messages.append("The Shit Pile was reshuffled.")
        logger.debug("game=%s %s drew %s", state.game_id, player.player_id, drawn.card_id)

        parsed = self._classify(drawn.card_id)
        card = self.catalog.get(drawn.card_id)
        card_name = card.display_name if card else drawn.card_id
        messages.append(f"{player.name} drew '{card_name}': {parsed.text}")

        state = state.with_deck(drawn.deck)._copy_with(
            pending_card_id=drawn.card_id,
            chained_draws=state.chained_draws + 1,
        )

        if parsed.needs_player_target:
            if not state.others(player.player_id):
                messages.append("No other players to target. Nothing happens.")
                return self._after_card(state, messages, draw_again=False)
            state = state._copy_with(phase=TurnPhase.TARGET_PENDING, pending_action=parsed)
            prompt = TargetPrompt.for_action(state, player.player_id, parsed, drawn.card_id)
            return self._success(state, messages, drawn_card_id=drawn.card_id, pending_choice=prompt)

        result = execute_card_action(
            state, player.player_id, parsed, None, self.board, self.config
        )
        messages.extend(result.messages)
        outcome = self._after_card(result.state, messages, draw_again=result.draw_again)
        outcome.drawn_card_id = drawn.card_id
        return outcome

    def _handle_choose_target(self, state: GameState, action: Action) -> ActionResult:
        """Resolve the pending targeted card against the chosen player."""
        player = state.current_player
        parsed = state.pending_action
        messages: list[str] = []
        if parsed is None:
            # Snapshot lost its pending card; resume the turn as if it resolved
            logger.warning("game=%s TARGET_PENDING without a pending action", state.game_id)
            return self._after_card(state, messages, draw_again=False)

        result = execute_card_action(
            state,
            player.player_id,
            parsed,
            action.payload.target_player_id,
            self.board,
            self.config,
        )
        messages.extend(result.messages)
        state = result.state._copy_with(pending_action=None)
        return self._after_card(state, messages, draw_again=result.draw_again)

    # -- turn flow ------------------------------------------------------------

    def _classify(self, card_id: str) -> ParsedAction:
        card = self.catalog.get(card_id)
        if card is None:
            logger.warning("drawn card %s is not in the catalog", card_id)
            return ParsedAction.unrecognized(f"Unknown card {card_id}")
        return classify_card_effect(card.effect_text)

    def _after_card(self, state: GameState, messages: list[str], draw_again: bool) -> ActionResult:
        """Continue the turn once a card has resolved."""
        if state.is_finished:
            return self._finish(state, messages)

        if draw_again:
            if state.chained_draws < self.config.max_chained_draws:
                state = state._copy_with(
                    phase=TurnPhase.CARD_PENDING,
                    pending_card_id=None,
                    pending_action=None,
                )
                return self._success(state, messages)
            messages.append("No more draws this turn.")

        return self._end_turn(state, messages)

    def _end_turn(self, state: GameState, messages: list[str]) -> ActionResult:
        """Close out the current player's turn: extra roll or advance."""
        state = state._copy_with(pending_card_id=None, pending_action=None, chained_draws=0)
        player = state.current_player

        if player.extra_roll:
            state = state.with_player(player.with_flags(extra_roll=False))
            state = state._copy_with(phase=TurnPhase.AWAITING_ROLL)
            messages.append(f"{player.name} rolls again!")
            return self._success(state, messages)

        return self._success(advance_turn(state, messages), messages)

    def _finish(self, state: GameState, messages: list[str]) -> ActionResult:
        state = state._copy_with(
            phase=TurnPhase.FINISHED,
            pending_card_id=None,
            pending_action=None,
            chained_draws=0,
        )
        return self._success(state, messages)

    def _success(
        self,
        state: GameState,
        messages: list[str],
        drawn_card_id: str | None = None,
        pending_choice: TargetPrompt | None = None,
    ) -> ActionResult:
        if messages:
            state = state._copy_with(last_message=messages[-1])
        return ActionResult.success_with_state(
            state,
            changes=messages,
            drawn_card_id=drawn_card_id,
            pending_choice=pending_choice,
        )


def advance_turn(state: GameState, messages: list[str]) -> GameState:
    """
    Pass the turn to the next seat.

    A player entering their turn with skip_turn set has it cleared and
    is passed over. Each skip is consumed, so this terminates.
    """
    n = state.num_players
    idx = state.current_player_idx
    turn_number = state.turn_number
    for _ in range(n + 1):
        idx = (idx + 1) % n
        turn_number += 1
        player = state.players[idx]
        if not player.skip_turn:
            break
        state = state.with_player(player.with_flags(skip_turn=False))
        messages.append(f"{player.name} skipped their turn.")
        logger.debug("game=%s %s turn skipped", state.game_id, player.player_id)

    next_player = state.players[idx]
    messages.append(f"{next_player.name}'s turn.")
    logger.debug("game=%s turn %d -> %s", state.game_id, turn_number, next_player.player_id)
    return state._copy_with(
        current_player_idx=idx,
        turn_number=turn_number,
        phase=TurnPhase.AWAITING_ROLL,
    )


def pending_target_prompt(state: GameState) -> TargetPrompt | None:
    """Rebuild the target prompt for a snapshot paused in TARGET_PENDING."""
    if state.phase != TurnPhase.TARGET_PENDING or state.pending_action is None:
        return None
    return TargetPrompt.for_action(
        state, state.current_player.player_id, state.pending_action, state.pending_card_id
    )


def legal_actions(state: GameState, config: EngineConfig = DEFAULT_CONFIG) -> list[Action]:
    """
    All inputs the current player may submit.

    Used by bots to enumerate moves and by UIs to enable controls.
    """
    if state.is_finished or state.phase == TurnPhase.FINISHED or not state.players:
        return []

    player_id = state.current_player.player_id
    if state.phase == TurnPhase.AWAITING_ROLL:
        return [Action.roll(player_id, v) for v in range(1, config.dice_sides + 1)]
    if state.phase == TurnPhase.CARD_PENDING:
        return [Action.draw_card(player_id)]
    if state.phase == TurnPhase.TARGET_PENDING:
        return [Action.choose_target(player_id, p.player_id) for p in state.others(player_id)]
    return []


def apply_action(
    state: GameState,
    action: Action,
    board: Board = DEFAULT_BOARD,
    catalog: CardCatalog | None = None,
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(
        board=board,
        catalog=catalog or default_catalog(),
        rng=rng or random.Random(),
        config=config,
    )
    return reducer.apply(state, action)
