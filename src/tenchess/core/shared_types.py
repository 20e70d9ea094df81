"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    DRAW = "draw"
    TIME_UP = "time up"
    RESIGNED = "resigned"

    @property
    def is_terminal(self) -> bool:
        """Once reached, only a full reset brings the game back to life."""
        return self not in (Status.ONGOING, Status.CHECK)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    def opposite(self) -> Color:
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
    LOVER = "lover"
