"""
Exceptions used across layers.

Anything deriving from RejectedActionError is an expected outcome of a player's request (bad notation, illegal move, ...).
The Game converts those into a failed MoveResult. Everything else signals a bug or a corrupted state and should propagate.
"""


class GameError(Exception):
    """Base class for all errors raised by tenchess"""


class RejectedActionError(GameError):
    """The requested action is not allowed. Recoverable: the game state is left untouched."""


class InvalidNotationError(RejectedActionError):
    """Text could not be interpreted as a square or a move."""


class InvalidSquareError(RejectedActionError):
    """Coordinates fall outside the board."""


class GameStateError(RejectedActionError):
    """The action does not fit the current status of the game (e.g. moving after checkmate)."""


class NotYourTurnError(RejectedActionError):
    """Tried to move a piece of the side that is not active."""


class IllegalMoveError(RejectedActionError):
    """The move breaks the movement rules or leaves your own king in check."""


class CastlingError(IllegalMoveError):
    """One of the castling preconditions is not met."""


class DrawOfferError(GameStateError):
    """Offering / accepting / declining a draw at the wrong moment."""


class BoardIntegrityError(GameError):
    """The board is in a state no sequence of legal operations can reach (e.g. a side without a king)."""


class RepositoryError(GameError):
    """Requested game record does not exist."""


class InvalidRequestError(GameError):
    """Request data that cannot be interpreted by the service."""
