"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement rule for each piece type.
A rule only answers "does the piece's movement pattern allow this move on this board?"

Whether the move leaves your own king in check is decided later by the Game.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from tenchess.chess.pieces import Color, Piece, PieceType
from tenchess.chess.square import BOARD_SIZE, Square
from tenchess.core.exceptions import InvalidNotationError

# Variant rules: bishops cannot slide across the whole diagonal, knights leap 3+1 instead of 2+1
BISHOP_MAX_DISTANCE = 6
KNIGHT_LEAP = (3, 1)

# "A2 A3", "A2-A3", "a2 to a3" (separators can be padded by any amount of whitespace)
MOVE_SEPARATOR = re.compile(r"\s*-\s*|\s*TO\s*|\s+")


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_text(cls, text: str) -> Self:
        """
        Parse the notation players type in:
        ---

        * "F1 D1"
        * "F1-D1"
        * "f1 to d1"
        """
        normalized = text.strip().upper()
        if not normalized:
            raise InvalidNotationError("Empty move")

        parts = MOVE_SEPARATOR.split(normalized)
        if len(parts) != 2 or not all(parts):
            raise InvalidNotationError("Use notation like A2 A3 or A2-A3")

        from_sq = Square.from_algebraic(parts[0])
        to_sq = Square.from_algebraic(parts[1])
        return cls(from_sq, to_sq)

    def to_text(self) -> str:
        return f"{self.from_square.to_algebraic()} {self.to_square.to_algebraic()}"

    @property
    def delta(self) -> tuple[int, int]:
        """(file difference, rank difference)"""
        return (
            self.to_square.file - self.from_square.file,
            self.to_square.rank - self.from_square.rank,
        )

    @property
    def distance(self) -> int:
        """Number of king steps needed to cover the move"""
        df, dr = self.delta
        return max(abs(df), abs(dr))


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- SHARED PRIMITIVE ---
def path_clear(board: Board, move: Move, max_distance: int) -> bool:
    """
    Walk from the starting square towards the target square one step at a time.
    ---

    Neither end is inspected: the target square may hold an opponent's piece (capture), that part is checked by the caller.
    Fails as soon as an intermediate square is occupied, or the move is longer than the piece is allowed to slide.
    """
    if move.distance > max_distance:
        return False

    df, dr = move.delta
    step_file, step_rank = sign(df), sign(dr)
    current: Optional[Square] = move.from_square
    for _ in range(move.distance - 1):
        assert current is not None
        current = current.offset(step_file, step_rank)
        if current is None or board.piece(current) is not None:
            return False
    return True


# --- MOVEMENT RULES ---
def king_like_move(board: Board, move: Move, piece: Piece) -> bool:
    """King and Lover: a single step in any direction"""
    df, dr = move.delta
    if abs(df) > 1 or abs(dr) > 1:
        return False
    return path_clear(board, move, max_distance=1)


def queen_move(board: Board, move: Move, piece: Piece) -> bool:
    """The Queen combines the rook moves (horizontal + vertical) and the bishop moves (diagonal), without the bishop's range limit"""
    df, dr = move.delta
    is_diagonal = abs(df) == abs(dr)
    is_straight = df == 0 or dr == 0
    if not (is_diagonal or is_straight):
        return False
    return path_clear(board, move, max_distance=BOARD_SIZE)


def rook_move(board: Board, move: Move, piece: Piece) -> bool:
    """Rooks move either horizontally or vertically"""
    df, dr = move.delta
    stays_on_rank = dr == 0 and df != 0
    stays_on_file = df == 0 and dr != 0
    if not (stays_on_rank or stays_on_file):
        return False
    return path_clear(board, move, max_distance=BOARD_SIZE)


def bishop_move(board: Board, move: Move, piece: Piece) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|, but at most BISHOP_MAX_DISTANCE squares"""
    df, dr = move.delta
    if abs(df) != abs(dr):
        return False
    return path_clear(board, move, max_distance=BISHOP_MAX_DISTANCE)


def knight_move(board: Board, move: Move, piece: Piece) -> bool:
    """Knights leap (3, 1) in any orientation. Nothing in between can block them."""
    df, dr = move.delta
    long_leg, short_leg = KNIGHT_LEAP
    return sorted((abs(df), abs(dr)), reverse=True) == [long_leg, short_leg]


def pawn_move(board: Board, move: Move, piece: Piece) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (one step), only when an opponent's piece stands there

    NOTE: no en passant in this variant.
    """
    # White moves UP the board, black moves DOWN
    forward = 1 if piece.color == Color.WHITE else -1
    start_rank = 2 if piece.color == Color.WHITE else BOARD_SIZE - 1
    df, dr = move.delta
    target = board.piece(move.to_square)

    # pawns take diagonally
    if abs(df) == 1 and dr == forward:
        return target is not None and target.color != piece.color

    if df != 0:
        return False

    if dr == forward:
        return target is None

    if dr == 2 * forward and move.from_square.rank == start_rank:
        intermediate = move.from_square.offset(0, forward)
        return (
            intermediate is not None
            and board.piece(intermediate) is None
            and target is None
        )

    return False


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Board, Move, Piece], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.KING: king_like_move,
    PieceType.LOVER: king_like_move,
    PieceType.QUEEN: queen_move,
    PieceType.ROOK: rook_move,
    PieceType.BISHOP: bishop_move,
    PieceType.KNIGHT: knight_move,
    PieceType.PAWN: pawn_move,
}


def is_legal_ignoring_check(board: Board, move: Move, piece: Piece) -> bool:
    """
    Geometry + path check of a move for the given piece.
    ---

    1. Standing still is not a move
    2. You cannot take your own pieces
    3. The piece's own movement rule decides the rest
    """
    if move.from_square == move.to_square:
        return False

    target = board.piece(move.to_square)
    if target is not None and target.color == piece.color:
        return False

    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(board, move, piece)


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same rank (both ends excluded)

    Needed for checking if you can still castle (the Board will check which of those are empty etc.)
    """
    if from_square.rank != to_square.rank:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )

    step = sign(to_square.file - from_square.file)
    return [
        Square(file, from_square.rank)
        for file in range(from_square.file + step, to_square.file, step)
    ]
