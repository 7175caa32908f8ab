"""
Effect Resolver - Applies a classified card action to the game state.

Each CardActionType has one handler. Handlers take the current state and
return a new one plus the messages to show; they never mutate their
inputs. Targeted actions that arrive without a usable target resolve to
a no-op with an explanatory message instead of failing, so a bad target
can never stall a turn.

The win check lives here as well because it runs after every movement,
whether the movement came from a roll, a space or a card.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from ..card_effects.actions import CardActionType, ParsedAction, SpaceLookup
from ..config import DEFAULT_CONFIG, EngineConfig
from ..logging_config import get_logger
from .board import DEFAULT_BOARD, Board
from .state import GameState, PlayerState

logger = get_logger(__name__)

A = CardActionType


@dataclass
class ExecutionResult:
    """Result of executing one card action."""
    state: GameState
    messages: list[str] = field(default_factory=list)
    draw_again: bool = False


def seat_successor(state: GameState, player_id: str) -> PlayerState | None:
    """The player seated after player_id (the one "to the right")."""
    idx = state.seat_of(player_id)
    if idx < 0 or state.num_players < 2:
        return None
    return state.players[(idx + 1) % state.num_players]


def closest_player(state: GameState, player_id: str) -> PlayerState | None:
    """Other player nearest by distance; seating order breaks ties."""
    me = state.get_player(player_id)
    if me is None:
        return None
    best = None
    best_dist = None
    for p in state.others(player_id):
        dist = abs(p.position - me.position)
        if best_dist is None or dist < best_dist:
            best, best_dist = p, dist
    return best


def check_win(
    state: GameState,
    player_id: str,
    board: Board = DEFAULT_BOARD,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[GameState, list[str]]:
    """
    Set the winner if player_id is on FINISH with enough paddles.

    A player on FINISH without enough paddles stays there and is told
    so. Once a winner exists this does nothing.
    """
    if state.winner is not None:
        return state, []
    player = state.get_player(player_id)
    if player is None or player.position < board.finish:
        return state, []

    if player.paddles >= config.finish_paddles:
        logger.info("game=%s won by %s", state.game_id, player_id)
        return state._copy_with(winner=player_id), [
            f"{player.name} reached the finish with {player.paddles} paddles and WINS!"
        ]
    return state, [
        f"{player.name} reached the finish but needs {config.finish_paddles} paddles "
        f"(has {player.paddles}). Must collect more!"
    ]


def resolve_target_space(board: Board, from_index: int, action: ParsedAction) -> int:
    """Destination index for a space-targeting action."""
    if action.target_space is None:
        return from_index
    if action.lookup == SpaceLookup.CLOSEST:
        return board.find_closest_space_of_type(from_index, action.target_space)
    return board.find_next_space_of_type(from_index, action.target_space)


class _Executor:
    """Holds the per-call context the handlers share."""

    def __init__(
        self,
        state: GameState,
        actor: PlayerState,
        action: ParsedAction,
        target: PlayerState | None,
        board: Board,
    ):
        self.state = state
        self.actor = actor
        self.action = action
        self.target = target
        self.board = board
        self.finish = board.finish

    def handlers(self) -> dict[CardActionType, Callable[[], ExecutionResult]]:
        return {
            A.PADDLE_GAIN: self._paddle_gain,
            A.PADDLE_LOSE: self._paddle_lose,
            A.PADDLE_STEAL: self._paddle_steal,
            A.PADDLE_GIFT_RIGHT: self._paddle_gift_right,
            A.PADDLE_GIFT_CHOOSE: self._paddle_gift_choose,
            A.MOVE_FORWARD: self._move_forward,
            A.MOVE_BACK: self._move_back,
            A.GO_TO_SPACE: self._go_to_space,
            A.GO_TO_SPACE_AND_GAIN_PADDLE: self._go_to_space_and_gain_paddle,
            A.TAKE_LEAD: self._take_lead,
            A.MOVE_AHEAD_OF_PLAYER: self._move_ahead_of_player,
            A.BEHIND_LEADER: self._behind_leader,
            A.LOSE_TURN: self._lose_turn,
            A.EXTRA_TURN: self._extra_turn,
            A.DRAW_AGAIN: self._draw_again,
            A.SKIP_YELLOW: self._skip_yellow,
            A.SEND_PLAYER_TO: self._send_player_to,
            A.BRING_PLAYER: self._bring_player,
            A.BRING_ALL_PLAYERS: self._bring_all_players,
            A.GO_BACK_WITH_PLAYER: self._go_back_with_player,
            A.MOVE_PLAYER_BEHIND_LAST: self._move_player_behind_last,
            A.MOVE_BOTH_TO_SPACE: self._move_both_to_space,
            A.UNRECOGNIZED: self._unrecognized,
        }

    def _magnitude(self, default: int) -> int:
        """Classified amount, or the card kind's default when the text gave none."""
        magnitude = self.action.magnitude
        return default if magnitude is None else magnitude

    def _done(self, *updated: PlayerState, message: str) -> ExecutionResult:
        state = self.state
        for player in updated:
            state = state.with_player(player)
        return ExecutionResult(state=state, messages=[message])

    # -- paddles ------------------------------------------------------------

    def _paddle_gain(self) -> ExecutionResult:
        amount = self._magnitude(1)
        actor = self.actor.with_paddles(self.actor.paddles + amount)
        return self._done(actor, message=f"{actor.name} gained {amount} paddle(s)! Now has {actor.paddles}.")

    def _paddle_lose(self) -> ExecutionResult:
        amount = self._magnitude(1)
        actor = self.actor.with_paddles(self.actor.paddles - amount)
        return self._done(actor, message=f"{actor.name} lost {amount} paddle(s)! Now has {actor.paddles}.")

    def _paddle_steal(self) -> ExecutionResult:
        target = self.target
        if target.paddles <= 0:
            return self._done(message=f"{self.actor.name} tried to steal but {target.name} has no paddles.")
        return self._done(
            target.with_paddles(target.paddles - 1),
            self.actor.with_paddles(self.actor.paddles + 1),
            message=f"{self.actor.name} stole a paddle from {target.name}!",
        )

    def _give_paddle(self, recipient: PlayerState | None) -> ExecutionResult:
        if recipient is None:
            return self._done(message="No one to gift a paddle to.")
        if self.actor.paddles <= 0:
            return self._done(message=f"{self.actor.name} has no paddle to give.")
        return self._done(
            self.actor.with_paddles(self.actor.paddles - 1),
            recipient.with_paddles(recipient.paddles + 1),
            message=f"{self.actor.name} gifted a paddle to {recipient.name}.",
        )

    def _paddle_gift_right(self) -> ExecutionResult:
        return self._give_paddle(seat_successor(self.state, self.actor.player_id))

    def _paddle_gift_choose(self) -> ExecutionResult:
        return self._give_paddle(self.target)

    # -- own movement -------------------------------------------------------

    def _move_forward(self) -> ExecutionResult:
        steps = self._magnitude(2)
        actor = self.actor.moved_by(steps, self.finish)
        return self._done(actor, message=f"{actor.name} moved forward {steps} spaces to space {actor.position}.")

    def _move_back(self) -> ExecutionResult:
        steps = self._magnitude(2)
        actor = self.actor.moved_by(-steps, self.finish)
        return self._done(actor, message=f"{actor.name} moved back {steps} spaces to space {actor.position}.")

    def _go_to_space(self) -> ExecutionResult:
        dest = resolve_target_space(self.board, self.actor.position, self.action)
        actor = self.actor.moved_to(dest, self.finish)
        space = self.board.space_at(dest)
        return self._done(actor, message=f"{actor.name} moved to {space.name} (space {dest}).")

    def _go_to_space_and_gain_paddle(self) -> ExecutionResult:
        dest = resolve_target_space(self.board, self.actor.position, self.action)
        amount = self._magnitude(1)
        actor = self.actor.moved_to(dest, self.finish).with_paddles(self.actor.paddles + amount)
        space = self.board.space_at(dest)
        return self._done(actor, message=f"{actor.name} moved to {space.name} (space {dest}) and got a free paddle!")

    def _take_lead(self) -> ExecutionResult:
        leader = self.state.max_position()
        if leader <= self.actor.position:
            return self._done(message=f"{self.actor.name} is already in the lead.")
        actor = self.actor.moved_to(leader + 1, self.finish)
        return self._done(actor, message=f"{actor.name} took the lead at space {actor.position}!")

    def _move_ahead_of_player(self) -> ExecutionResult:
        actor = self.actor.moved_to(self.target.position + 1, self.finish)
        return self._done(actor, message=f"{actor.name} moved ahead of {self.target.name} to space {actor.position}!")

    def _behind_leader(self) -> ExecutionResult:
        steps = self._magnitude(3)
        actor = self.actor.moved_to(self.state.max_position() - steps, self.finish)
        return self._done(actor, message=f"{actor.name} moved to {steps} spaces behind the leader (space {actor.position}).")

    # -- turn flow ----------------------------------------------------------

    def _lose_turn(self) -> ExecutionResult:
        return self._done(self.actor.with_flags(skip_turn=True), message=f"{self.actor.name} loses their next turn!")

    def _extra_turn(self) -> ExecutionResult:
        return self._done(self.actor.with_flags(extra_roll=True), message=f"{self.actor.name} gets another turn!")

    def _draw_again(self) -> ExecutionResult:
        return ExecutionResult(state=self.state, messages=[f"{self.actor.name} draws again!"], draw_again=True)

    def _skip_yellow(self) -> ExecutionResult:
        return self._done(
            self.actor.with_flags(skip_yellow=True),
            message=f"{self.actor.name} got a Skip Yellow Space token!",
        )

    # -- moving other players -----------------------------------------------

    def _send_player_to(self) -> ExecutionResult:
        dest = resolve_target_space(self.board, self.target.position, self.action)
        target = self.target.moved_to(dest, self.finish)
        space = self.board.space_at(dest)
        return self._done(target, message=f"{self.actor.name} sent {target.name} to {space.name} (space {dest})!")

    def _bring_player(self) -> ExecutionResult:
        target = self.target.moved_to(self.actor.position, self.finish)
        return self._done(target, message=f"{self.actor.name} brought {target.name} to space {target.position}!")

    def _bring_all_players(self) -> ExecutionResult:
        moved = [p.moved_to(self.actor.position, self.finish) for p in self.state.others(self.actor.player_id)]
        return self._done(*moved, message=f"{self.actor.name} brought all players to space {self.actor.position}!")

    def _go_back_with_player(self) -> ExecutionResult:
        steps = self._magnitude(3)
        actor = self.actor.moved_by(-steps, self.finish)
        other = closest_player(self.state, self.actor.player_id)
        if other is None:
            return self._done(actor, message=f"{actor.name} went back {steps} spaces!")
        other = other.moved_by(-steps, self.finish)
        return self._done(actor, other, message=f"{actor.name} and {other.name} went back {steps} spaces!")

    def _move_player_behind_last(self) -> ExecutionResult:
        target = self.target.moved_to(self.state.min_position() - 1, self.finish)
        return self._done(target, message=f"{self.actor.name} moved {target.name} behind last place (space {target.position})!")

    def _move_both_to_space(self) -> ExecutionResult:
        dest = resolve_target_space(self.board, self.actor.position, self.action)
        actor = self.actor.moved_to(dest, self.finish)
        target = self.target.moved_to(dest, self.finish)
        space = self.board.space_at(dest)
        return self._done(actor, target, message=f"{actor.name} and {target.name} moved to {space.name} (space {dest})!")

    def _unrecognized(self) -> ExecutionResult:
        return self._done(message=self.action.text)


def execute_card_action(
    state: GameState,
    actor_id: str,
    action: ParsedAction,
    target_id: str | None = None,
    board: Board = DEFAULT_BOARD,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ExecutionResult:
    """
    Execute a card action for actor_id and win-check the actor.

    Targeted actions with a missing, unknown or self target are no-ops
    that report why.
    """
    actor = state.get_player(actor_id)
    if actor is None:
        return ExecutionResult(state=state, messages=[f"Unknown player {actor_id}"])

    target = None
    if action.needs_player_target:
        target = state.get_player(target_id) if target_id else None
        if target is None or target.player_id == actor_id:
            reason = "no target chosen" if not target_id else f"invalid target {target_id}"
            logger.warning("card %s for %s skipped: %s", action.kind.value, actor_id, reason)
            return ExecutionResult(
                state=state,
                messages=[f"{action.text}: {reason}, nothing happens."],
            )

    executor = _Executor(state, actor, action, target, board)
    result = executor.handlers()[action.kind]()
    logger.debug("executed %s for %s: %s", action.kind.value, actor_id, result.messages)

    new_state, win_messages = check_win(result.state, actor_id, board, config)
    result.state = new_state
    result.messages.extend(win_messages)
    return result
