"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from tenchess.chess.board import Board
from tenchess.chess.pieces import Piece
from tenchess.chess.square import Square

EMPTY_FEN = "/".join(["10"] * 10)

PlacePieces = Callable[..., Board]


class FakeTime:
    """Manually advanced time source for the clock (seconds)."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def place_pieces() -> PlacePieces:
    """
    Call the inner function with `square_name=fen_character` pairs, e.g. place_pieces(F1="K", J10="k").
    Use `moved=[...]` to list the squares whose pieces have already moved.
    """

    def _create_board(moved: tuple[str, ...] = (), **pieces: str) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            piece = Piece.from_fen(fen_char)
            if square_name in moved:
                piece = piece.with_moved()
            board.place_piece(piece, Square.from_algebraic(square_name))
        return board

    return _create_board
