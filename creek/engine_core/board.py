"""
Board - The space table and space-effect resolution.

The board is a static lookup from position to effect. Index 0 is START
and the last index is FINISH; neither has an effect, FINISH only
triggers the win check (done by the caller).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from .state import GameState

if TYPE_CHECKING:
    import random

logger = get_logger(__name__)


class SpaceType(Enum):
    """Printed space categories. Cards refer to spaces by these."""
    START = "start"
    FINISH = "finish"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"
    SEWER = "sewer"
    SHITFACED = "shitfaced"
    CROSSING = "crossing"
    PADDLE_SHOP = "paddle_shop"
    DOG_POO = "dog_poo"
    SHIT_PILE = "shit_pile"
    SAFE = "safe"


class SpaceEffectType(Enum):
    """What happens when a player lands on a space."""
    NONE = "none"
    PADDLE_GAIN = "paddle_gain"
    PADDLE_LOSE = "paddle_lose"
    MOVE_FORWARD = "move_forward"
    MOVE_BACK = "move_back"
    GO_TO_START = "go_to_start"
    TAKE_LEAD = "take_lead"
    SKIP_TURN = "skip_turn"
    EXTRA_ROLL = "extra_roll"
    SWAP_RANDOM = "swap_random"
    DRAW_CARD = "draw_card"


@dataclass(frozen=True)
class Space:
    """One position on the board."""
    index: int
    effect_type: SpaceEffectType
    space_type: SpaceType
    name: str
    text: str
    value: int | None = None


@dataclass(frozen=True)
class Board:
    """An ordered, immutable run of spaces."""
    spaces: tuple[Space, ...]

    def __post_init__(self):
        if len(self.spaces) < 2:
            raise ValueError("A board needs at least a start and a finish space")
        for idx, space in enumerate(self.spaces):
            if space.index != idx:
                raise ValueError(f"Space at position {idx} has index {space.index}")

    @property
    def size(self) -> int:
        return len(self.spaces)

    @property
    def finish(self) -> int:
        return len(self.spaces) - 1

    def space_at(self, index: int) -> Space:
        """Get the space at index; out-of-range positions are inert."""
        if index < 0 or index >= len(self.spaces):
            return Space(
                index=index,
                effect_type=SpaceEffectType.NONE,
                space_type=SpaceType.SAFE,
                name="UNKNOWN",
                text="Unknown space",
            )
        return self.spaces[index]

    def find_next_space_of_type(self, from_index: int, space_type: SpaceType) -> int:
        """
        First space of a type strictly after from_index.

        Wraps around to the start of the board; returns from_index when
        the board has no such space.
        """
        for i in range(from_index + 1, len(self.spaces)):
            if self.spaces[i].space_type == space_type:
                return i
        for i in range(0, min(from_index + 1, len(self.spaces))):
            if self.spaces[i].space_type == space_type:
                return i
        return from_index

    def find_closest_space_of_type(self, from_index: int, space_type: SpaceType) -> int:
        """
        Nearest space of a type in either direction, excluding from_index.

        The lower index wins a tie. Returns from_index when none exists.
        """
        closest_idx = -1
        closest_dist = len(self.spaces) + 1
        for space in self.spaces:
            if space.index != from_index and space.space_type == space_type:
                dist = abs(space.index - from_index)
                if dist < closest_dist:
                    closest_dist = dist
                    closest_idx = space.index
        return closest_idx if closest_idx >= 0 else from_index


def _space(
    index: int,
    effect: SpaceEffectType,
    space_type: SpaceType,
    text: str,
    value: int | None = None,
) -> Space:
    return Space(
        index=index,
        effect_type=effect,
        space_type=space_type,
        name=space_type.value.replace("_", " ").upper(),
        text=text,
        value=value,
    )


E = SpaceEffectType
T = SpaceType

# 26 spaces, matching the printed board
DEFAULT_BOARD = Board(spaces=(
    _space(0, E.NONE, T.START, "Start! Begin your journey up Shitz Creek!"),
    _space(1, E.PADDLE_GAIN, T.PADDLE_SHOP, "Paddle Shop! +1 Paddle", 1),
    _space(2, E.NONE, T.BLUE, "Blue space - Safe waters!"),
    _space(3, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(4, E.MOVE_BACK, T.DOG_POO, "Dog Poo! Go back 2!", 2),
    _space(5, E.NONE, T.GREEN, "Green space - Smooth sailing!"),
    _space(6, E.EXTRA_ROLL, T.BLUE, "Blue space - Roll again!"),
    _space(7, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(8, E.NONE, T.CROSSING, "Crossing - Safe checkpoint!"),
    _space(9, E.PADDLE_LOSE, T.RED, "Red space - Lost a paddle! -1", 1),
    _space(10, E.SKIP_TURN, T.SEWER, "Sewer! Skip next turn!"),
    _space(11, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(12, E.MOVE_FORWARD, T.GREEN, "Green space - Forward 2!", 2),
    _space(13, E.MOVE_BACK, T.SHITFACED, "Shitfaced! Go back 3!", 3),
    _space(14, E.PADDLE_GAIN, T.BLUE, "Blue space - Found a paddle! +1", 1),
    _space(15, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(16, E.NONE, T.GREEN, "Green space - Rest here."),
    _space(17, E.SWAP_RANDOM, T.RED, "Red - Swap with a random player!"),
    _space(18, E.PADDLE_GAIN, T.PADDLE_SHOP, "Paddle Shop! +1 Paddle", 1),
    _space(19, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(20, E.NONE, T.CROSSING, "Crossing - Safe checkpoint!"),
    _space(21, E.MOVE_BACK, T.DOG_POO, "Dog Poo! Go back 2!", 2),
    _space(22, E.NONE, T.BLUE, "Blue space - Calm waters."),
    _space(23, E.DRAW_CARD, T.SHIT_PILE, "Shit Pile! Draw a card!"),
    _space(24, E.EXTRA_ROLL, T.BLUE, "Blue space - Final push! Roll again!"),
    _space(25, E.NONE, T.FINISH, "Finish! Need 2 paddles to win!"),
))

del E, T


@dataclass
class SpaceResolution:
    """
    Result of resolving the space a player landed on.

    skip_turn, extra_roll and draw_card are signals for the Turn
    Controller; they are not applied to the returned state.
    """
    state: GameState
    messages: list[str] = field(default_factory=list)
    draw_card: bool = False
    skip_turn: bool = False
    extra_roll: bool = False
    skipped: bool = False  # Effect bypassed with a skip-yellow token


def resolve_space(
    state: GameState,
    player_id: str,
    board: Board,
    rng: random.Random,
) -> SpaceResolution:
    """
    Apply the effect of the space player_id currently stands on.

    Movement and paddle changes are applied to the returned state.
    """
    player = state.get_player(player_id)
    if player is None:
        return SpaceResolution(state=state, messages=[f"Unknown player {player_id}"])

    space = board.space_at(player.position)
    effect = space.effect_type
    if effect == SpaceEffectType.NONE:
        return SpaceResolution(state=state)

    messages = [f"Space {space.index}: {space.text}"]

    if space.space_type == SpaceType.SHIT_PILE and player.skip_yellow:
        state = state.with_player(player.with_flags(skip_yellow=False))
        messages.append(f"{player.name} used a Skip Yellow token and skipped the Shit Pile!")
        logger.debug("player=%s consumed skip_yellow at space %d", player_id, space.index)
        return SpaceResolution(state=state, messages=messages, skipped=True)

    finish = board.finish

    if effect == SpaceEffectType.PADDLE_GAIN:
        amount = space.value or 1
        player = player.with_paddles(player.paddles + amount)
        messages.append(f"{player.name} gained {amount} paddle(s)! Now has {player.paddles}.")

    elif effect == SpaceEffectType.PADDLE_LOSE:
        amount = space.value or 1
        player = player.with_paddles(player.paddles - amount)
        messages.append(f"{player.name} lost {amount} paddle(s)! Now has {player.paddles}.")

    elif effect == SpaceEffectType.MOVE_FORWARD:
        player = player.moved_by(space.value or 2, finish)
        messages.append(f"{player.name} moved forward to space {player.position}.")

    elif effect == SpaceEffectType.MOVE_BACK:
        player = player.moved_by(-(space.value or 2), finish)
        messages.append(f"{player.name} moved back to space {player.position}.")

    elif effect == SpaceEffectType.GO_TO_START:
        player = player.moved_to(0, finish)
        messages.append(f"{player.name} was sent back to Start!")

    elif effect == SpaceEffectType.TAKE_LEAD:
        leader = state.max_position()
        if leader > player.position:
            player = player.moved_to(leader + 1, finish)
            messages.append(f"{player.name} took the lead at space {player.position}!")

    elif effect == SpaceEffectType.SKIP_TURN:
        messages.append(f"{player.name} must skip their next turn!")
        return SpaceResolution(state=state, messages=messages, skip_turn=True)

    elif effect == SpaceEffectType.EXTRA_ROLL:
        messages.append(f"{player.name} gets to roll again!")
        return SpaceResolution(state=state, messages=messages, extra_roll=True)

    elif effect == SpaceEffectType.SWAP_RANDOM:
        others = state.others(player_id)
        if not others:
            messages.append("No other players to swap with.")
            return SpaceResolution(state=state, messages=messages)
        other = rng.choice(others)
        mine, theirs = player.position, other.position
        state = state.with_player(other.moved_to(mine, finish))
        player = player.moved_to(theirs, finish)
        messages.append(f"{player.name} swapped positions with {other.name}!")

    elif effect == SpaceEffectType.DRAW_CARD:
        return SpaceResolution(state=state, messages=messages, draw_card=True)

    return SpaceResolution(state=state.with_player(player), messages=messages)
