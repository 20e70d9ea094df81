"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from tenchess.chess.moves import Move, is_legal_ignoring_check
from tenchess.chess.pieces import Color, Piece, PieceType
from tenchess.chess.square import BOARD_SIZE, Square, all_squares
from tenchess.core.exceptions import BoardIntegrityError, InvalidNotationError

# Both sides line up the same way, so castling always happens towards the A-file (where the Lover stands)
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.LOVER,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.ROOK,
)


def home_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_SIZE


def pawn_rank(color: Color) -> int:
    return 2 if color == Color.WHITE else BOARD_SIZE - 1


def promotion_rank(color: Color) -> int:
    return BOARD_SIZE if color == Color.WHITE else 1


def _index(square: Square) -> int:
    return (square.rank - 1) * BOARD_SIZE + (square.file - 1)


@dataclass
class Board:
    """
    Flat list of cells, indexed by (rank - 1) * BOARD_SIZE + (file - 1). An empty square holds None.

    Pieces are immutable, so a shallow copy of the list is a fully independent board.
    """

    cells: list[Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls([None] * BOARD_SIZE * BOARD_SIZE)

    @classmethod
    def starting_position(cls) -> Self:
        board = cls.empty()
        for color in Color:
            for file, piece_type in enumerate(BACK_RANK, start=1):
                board.place_piece(Piece(piece_type, color), Square(file, home_rank(color)))
                board.place_piece(Piece(PieceType.PAWN, color), Square(file, pawn_rank(color)))
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the piece placement part of a FEN-like string.

        Works like the standard FEN board field, stretched to 10x10 and with 'l' for the Lover:
        ex. standard starting position:
        lrnbqkbnrr/pppppppppp/10/10/10/10/10/10/PPPPPPPPPP/LRNBQKBNRR
        means:
        * black pieces are on the 10th rank, Lover on a10, rook on b10, etc.
        * ranks 8 through 3 have 10 consecutive empty squares
        * the 1st rank holds the white pieces (capital letters), read from the a-file to the j-file.

        All pieces are created as unmoved.
        """
        fen_by_ranks = fen_str.strip().split("/")
        if len(fen_by_ranks) != BOARD_SIZE:
            raise InvalidNotationError(
                f"Expected {BOARD_SIZE} ranks in board layout, got {len(fen_by_ranks)}: {fen_str!r}"
            )

        board = cls.empty()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # read from top rank (10th) to bottom rank (1st)
            rank = BOARD_SIZE - rank_idx
            file = 1
            # a number (possibly "10") denotes the amount of empty squares after each other
            for token in re.findall(r"[0-9]+|[^0-9]", fen_one_rank):
                if token.isascii() and token.isdigit():
                    file += int(token)
                    continue
                if file > BOARD_SIZE:
                    raise InvalidNotationError(
                        f"Rank {rank} describes more than {BOARD_SIZE} squares: {fen_one_rank!r}"
                    )
                board.place_piece(Piece.from_fen(token), Square(file, rank))
                file += 1
            if file != BOARD_SIZE + 1:
                raise InvalidNotationError(
                    f"Rank {rank} does not describe exactly {BOARD_SIZE} squares: {fen_one_rank!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes."""
        return "/".join(self._rank_to_fen(rank) for rank in range(BOARD_SIZE, 0, -1))

    def _rank_to_fen(self, rank: int) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_SIZE + 1):
            piece = self.piece(Square(file, rank))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- CONTAINER ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.cells[_index(square)]

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.cells[_index(square)] = piece

    def remove_piece(self, square: Square) -> None:
        self.cells[_index(square)] = None

    def copy(self) -> Self:
        """Independent duplicate, used for every what-if test"""
        return type(self)(self.cells.copy())

    def occupied_squares(self) -> Iterator[tuple[Square, Piece]]:
        for square in all_squares():
            piece = self.piece(square)
            if piece is not None:
                yield square, piece

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.occupied_squares() if piece.color == color]

    def is_any_occupied(self, squares: list[Square]) -> bool:
        return any(self.piece(square) is not None for square in squares)

    def move_piece(self, move: Move) -> None:
        """
        Update the position on the board
        ---

        The moving piece gets flagged as moved. A pawn reaching the far rank is promoted to a Queen.
        """
        piece_that_moved = self.piece(move.from_square)
        if piece_that_moved is None:
            raise BoardIntegrityError(f"No piece to move on {move.from_square}")

        moved = piece_that_moved.with_moved()
        if moved.type == PieceType.PAWN and move.to_square.rank == promotion_rank(moved.color):
            moved = moved.promoted_to(PieceType.QUEEN)

        self.remove_piece(move.from_square)
        self.place_piece(moved, move.to_square)

    # --- CHECK DETECTION ---
    def find_king(self, color: Color) -> Square:
        """Every side always has exactly one king. Not finding one means the board got corrupted."""
        for square, piece in self.occupied_squares():
            if piece.type == PieceType.KING and piece.color == color:
                return square
        raise BoardIntegrityError(f"King missing for {color.name}")

    def is_check(self, color: Color) -> bool:
        """
        Is the king of `color` under attack?
        ---

        Test, for every opponent piece, whether it could move onto the king's square.
        NOTE: A Lover moves like a king but never gives check.
        """
        king_square = self.find_king(color)
        opponent = color.opposite()
        for square, attacker in self.occupied_squares():
            if attacker.color != opponent or attacker.type == PieceType.LOVER:
                continue
            if is_legal_ignoring_check(self, Move(square, king_square), attacker):
                return True
        return False

    def generate_candidate_moves(self, color: Color) -> Iterator[Move]:
        """
        Every move of `color` allowed by the movement rules (may still put yourself in check).

        Tries every target square for every piece of the given color.
        """
        targets = all_squares()
        for from_square in self.locate_color(color):
            piece = self.piece(from_square)
            assert piece is not None
            for to_square in targets:
                move = Move(from_square, to_square)
                if is_legal_ignoring_check(self, move, piece):
                    yield move

    def leaves_king_in_check(self, move: Move) -> bool:
        """Play the move on a copy of the board and look whether the mover's king is attacked afterwards."""
        piece = self.piece(move.from_square)
        if piece is None:
            raise BoardIntegrityError(f"No piece to move on {move.from_square}")
        simulated = self.copy()
        simulated.move_piece(move)
        return simulated.is_check(piece.color)

    def has_any_legal_move(self, color: Color) -> bool:
        """Stops at the first candidate move that does not leave your own king in check."""
        return any(
            not self.leaves_king_in_check(move)
            for move in self.generate_candidate_moves(color)
        )
