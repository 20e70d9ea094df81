"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from typing import Self

from tenchess.chess.moves import Move, squares_between_on_rank
from tenchess.chess.pieces import Color, Piece, PieceType
from tenchess.chess.square import Square

# Castling only happens towards the A-file: Lover on the A-file, castling Rook on the B-file
LOVER_FILE = 1
ROOK_FILE = 2
KING_STEPS = 2


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling, plus the Lover's square which has to stay untouched.

    NOTE: The rook jumps over the king and lands right next to it.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    lover: Square

    @classmethod
    def for_king_on(cls, king_from: Square) -> Self:
        rank = king_from.rank
        return cls(
            king_from=king_from,
            king_to=Square(king_from.file - KING_STEPS, rank),
            rook_from=Square(ROOK_FILE, rank),
            rook_to=Square(king_from.file - 1, rank),
            lover=Square(LOVER_FILE, rank),
        )

    def path(self) -> list[Square]:
        """Squares that must be empty: everything between the castling rook and the king"""
        return squares_between_on_rank(self.rook_from, self.king_from)

    def king_transit(self) -> list[Square]:
        """Squares the king passes through (and ends up on). None of them may be under attack."""
        return squares_between_on_rank(self.king_from, self.king_to) + [self.king_to]


def is_castling_move(move: Move, piece: Piece, home_rank: int) -> bool:
    """
    An unmoved king stepping exactly two files towards the Lover, along its home rank.

    The king has to land right of the castling rook, so the rook has a square to jump to
    and neither the Lover nor the rook gets overwritten.
    """
    if piece.type != PieceType.KING or piece.has_moved:
        return False
    df, dr = move.delta
    return (
        dr == 0
        and move.from_square.rank == home_rank
        and df == -KING_STEPS
        and move.to_square.file > ROOK_FILE
    )


def is_unmoved(piece: Piece | None, piece_type: PieceType, color: Color) -> bool:
    return (
        piece is not None
        and piece.type == piece_type
        and piece.color == color
        and not piece.has_moved
    )
