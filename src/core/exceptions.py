"""
Custom exceptions shared by all layers.

Every exception derives from GameError, so the API layer can translate any of them into a client-facing error response.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a bowling game request."""


class InvalidRequestError(GameError):
    """Request data is structurally invalid (e.g. no player names supplied)."""


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Storing or retrieving a game failed."""


class GameNotFoundError(RepositoryError):
    """No game is stored under the requested ID."""


# --- GAME STATE ---
class PlayerNotFoundError(GameError):
    """The player ID does not belong to the game."""


class GameStateError(GameError):
    """The game (or frame) is not in a state that accepts the requested action."""


class GameAlreadyCompleteError(GameStateError):
    """All ten frames of the player are complete. No more rolls can be recorded."""


# --- ROLL VALIDATION ---
class IllegalRollError(GameError):
    """A roll breaks the rules of ten-pin bowling."""


class InvalidPinCountError(IllegalRollError):
    """Pin count is outside the range that can be knocked down with this roll."""

    def __init__(self, pins: int, max_allowed: int) -> None:
        self.pins = pins
        self.max_allowed = max_allowed
        super().__init__(
            f"Invalid pin count: {pins}. Max allowed: {max_allowed}"
        )


class NoBonusRollAllowedError(IllegalRollError):
    """A third roll in the final frame is only granted after a strike or a spare."""
