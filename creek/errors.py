"""Custom exception classes for the Creek engine."""

from __future__ import annotations


class CreekError(Exception):
    """Base exception for all Creek engine errors."""

    code = "ENGINE_ERROR"


class DeckError(CreekError):
    """Raised when a deck is built from invalid card ids."""

    code = "DECK_ERROR"


class EmptyDeckError(DeckError):
    """Raised when both the draw pile and the discard pile are empty."""

    code = "EMPTY_DECK"

    def __init__(self) -> None:
        super().__init__("Cannot draw; draw pile and discard pile are both empty")


class CatalogError(CreekError):
    """Raised when card records cannot be turned into a catalog."""

    code = "CATALOG_ERROR"


class InvalidActionError(CreekError):
    """Raised when an input cannot be applied to the current state."""

    code = "INVALID_ACTION"


class NotYourTurnError(InvalidActionError):
    """Raised when a player acts outside their turn."""

    code = "NOT_YOUR_TURN"

    def __init__(self, player_id: str, current_player_id: str) -> None:
        self.player_id = player_id
        self.current_player_id = current_player_id
        super().__init__(f"Not {player_id}'s turn (current player: {current_player_id})")


class InvalidPhaseError(InvalidActionError):
    """Raised when an input arrives in the wrong turn phase."""

    code = "INVALID_PHASE"

    def __init__(self, action: str, phase: str) -> None:
        self.action = action
        self.phase = phase
        super().__init__(f"Cannot {action} while turn is in phase '{phase}'")


class InvalidRollError(InvalidActionError):
    """Raised when a dice value is outside the die's faces."""

    code = "INVALID_ROLL"

    def __init__(self, value: int, sides: int) -> None:
        self.value = value
        self.sides = sides
        super().__init__(f"Invalid roll {value}. Must be in range [1, {sides}].")


class GameOverError(InvalidActionError):
    """Raised when trying to step a game that already has a winner."""

    code = "GAME_OVER"

    def __init__(self, winner: str | None = None) -> None:
        self.winner = winner
        super().__init__(f"Cannot step; game already won by {winner}")


class UnknownPlayerError(CreekError):
    """Raised when a player id is not seated in the game."""

    code = "UNKNOWN_PLAYER"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Unknown player: {player_id}")


class StepInFlightError(CreekError):
    """Raised when a turn step is triggered while another one is still resolving."""

    code = "STEP_IN_FLIGHT"

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"A turn step is already resolving for session {session_id}")


__all__ = [
    "CatalogError",
    "CreekError",
    "DeckError",
    "EmptyDeckError",
    "GameOverError",
    "InvalidActionError",
    "InvalidPhaseError",
    "InvalidRollError",
    "NotYourTurnError",
    "StepInFlightError",
    "UnknownPlayerError",
]
