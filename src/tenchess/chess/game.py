"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes the outcome back as a MoveResult, which the service layer can pass onwards to whoever is hosting the game.

Rejected requests (illegal moves, bad notation, draw offers at the wrong time, ...) are ordinary outcomes, not crashes:
the public methods always answer with a MoveResult. Only a corrupted board (a side without king) raises.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from functools import wraps
from typing import Any, Callable, Optional, Self

from tenchess.chess.board import Board, home_rank
from tenchess.chess.castling import CastlingSquares, is_castling_move, is_unmoved
from tenchess.chess.clock import DEFAULT_CLOCK_MINUTES, ChessClock, Clock
from tenchess.chess.moves import Move, is_legal_ignoring_check
from tenchess.chess.pieces import Color, Piece, PieceType
from tenchess.core.exceptions import (
    CastlingError,
    DrawOfferError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RejectedActionError,
)
from tenchess.core.shared_types import Status

logger = logging.getLogger("tenchess.game")


@dataclass(frozen=True)
class MoveResult:
    """Uniform answer to every request made to the Game.

    `check` is only True when the move went through and the opponent is now in check (but not mated).
    """

    success: bool
    message: str
    check: bool = False

    @classmethod
    def ok(cls, message: str, check: bool = False) -> Self:
        return cls(True, message, check)

    @classmethod
    def fail(cls, message: str) -> Self:
        return cls(False, message, False)


def rejections_as_result(
    method: Callable[..., MoveResult],
) -> Callable[..., MoveResult]:
    """Turn an expected rejection (RejectedActionError) into a failed MoveResult. Anything else propagates."""

    @wraps(method)
    def wrapper(self: "Game", *args: Any, **kwargs: Any) -> MoveResult:
        try:
            return method(self, *args, **kwargs)
        except RejectedActionError as error:
            logger.debug("%s rejected: %s", method.__name__, error)
            return MoveResult.fail(str(error))

    return wrapper


@dataclass
class Game:
    board: Board = field(default_factory=Board.starting_position)
    active_color: Color = Color.WHITE
    status: Status = Status.ONGOING
    winner: Optional[Color] = None
    draw_offered_by: Optional[Color] = None
    clock: Optional[Clock] = None
    clock_duration: Optional[timedelta] = None

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move."""
        return cls(board=Board.starting_position())

    @classmethod
    def from_fen(cls, board_fen: str, active_color: Color = Color.WHITE) -> Self:
        """Start from a custom position (all pieces unmoved). Handy to set up puzzles and tests."""
        return cls(board=Board.from_fen(board_fen), active_color=active_color)

    # --- QUERIES ---
    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def draw_offered(self) -> bool:
        return self.draw_offered_by is not None

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def reset(self) -> None:
        """Back to the starting position. The only way to leave a finished game. An enabled clock is restarted with full time."""
        self.board = Board.starting_position()
        self.active_color = Color.WHITE
        self.status = Status.ONGOING
        self.winner = None
        self.draw_offered_by = None
        if self.clock_duration is not None:
            self.enable_clock(self.clock_duration)
        logger.info("Game reset")

    def enable_clock(
        self, time_per_player: timedelta = timedelta(minutes=DEFAULT_CLOCK_MINUTES)
    ) -> None:
        self.clock = ChessClock(time_per_player)
        self.clock_duration = time_per_player
        self.clock.start(self.active_color)
        logger.info("Clock enabled: %s per player", time_per_player)

    @rejections_as_result
    def play_move(self, move: Move | str) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. parse the move (if typed in as text)
        2. make sure the game is (still) in progress and the clock did not run out
        3. make sure there is a piece of the active side on the starting square
        4. a king stepping two files towards the Lover is a castling attempt
        5. check the movement rule of the piece
        6. play the move on a copy of the board: it may not leave your own king in check
        7. update the board, hand the turn over and update the game status
        """
        if isinstance(move, str):
            move = Move.from_text(move)

        self._assert_in_progress()
        self._assert_time_left()

        piece = self.board.piece(move.from_square)
        if piece is None:
            raise IllegalMoveError(f"No piece at {move.from_square}")
        if piece.color != self.active_color:
            raise NotYourTurnError(f"It is not {piece.color.name}'s turn")

        if is_castling_move(move, piece, home_rank(piece.color)):
            return self._castle(move, piece)

        if not is_legal_ignoring_check(self.board, move, piece):
            raise IllegalMoveError(f"Illegal move for {piece.type.name}")

        if self.board.leaves_king_in_check(move):
            raise IllegalMoveError("Move would leave king in check")

        self.board.move_piece(move)
        logger.debug("%s played %s", self.active_color.name, move.to_text())
        return self._end_turn(completed="Move accepted")

    @rejections_as_result
    def offer_draw(self, by: Optional[Color] = None) -> MoveResult:
        """The offering side defaults to the side to move. The clock stops while the offer is pending."""
        if self.is_game_over:
            raise DrawOfferError("Cannot offer draw - game is over")
        if self.draw_offered:
            raise DrawOfferError("A draw offer is already pending")

        offering = by or self.active_color
        self.draw_offered_by = offering
        if self.clock is not None:
            self.clock.pause()
        return MoveResult.ok(f"Draw offered by {offering.name}")

    @rejections_as_result
    def accept_draw(self, by: Optional[Color] = None) -> MoveResult:
        """The accepting side defaults to the side to move. You cannot accept your own offer."""
        if not self.draw_offered:
            raise DrawOfferError("No draw has been offered")
        self._assert_in_progress()

        accepting = by or self.active_color
        if accepting == self.draw_offered_by:
            raise DrawOfferError("You cannot accept your own draw offer")

        self._change_status(Status.DRAW)
        return MoveResult.ok("Draw accepted. Game ends in a draw.")

    @rejections_as_result
    def decline_draw(self) -> MoveResult:
        if not self.draw_offered:
            raise DrawOfferError("No draw has been offered")
        self._assert_in_progress()

        self._clear_draw_offer()
        return MoveResult.ok("Draw declined. Game continues.")

    @rejections_as_result
    def resign(self, by: Optional[Color] = None) -> MoveResult:
        """The resigning side defaults to the side to move."""
        if self.is_game_over:
            raise GameStateError("Game is already over")

        resigning = by or self.active_color
        self.winner = resigning.opposite()
        self._change_status(Status.RESIGNED)
        return MoveResult.ok(f"{resigning.name} resigns. {self.winner.name} wins!")

    def has_any_legal_move(self, color: Color) -> bool:
        return self.board.has_any_legal_move(color)

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.is_game_over:
            raise GameStateError(f"Game is over: {self.status.name}")

    def _assert_time_left(self) -> None:
        """Running out of time ends the game on the spot, in favour of the opponent."""
        if self.clock is not None and self.clock.is_expired(self.active_color):
            self.winner = self.active_color.opposite()
            self._change_status(Status.TIME_UP)
            raise GameStateError(f"Time is up for {self.active_color.name}")

    def _clear_draw_offer(self) -> None:
        if self.draw_offered_by is None:
            return
        self.draw_offered_by = None
        if self.clock is not None:
            self.clock.resume()

    def _change_status(self, new_status: Status) -> None:
        """A finished game keeps no pending draw offer and its clock stands still."""
        if new_status.is_terminal:
            self.draw_offered_by = None
            if self.clock is not None:
                self.clock.pause()
            if new_status != self.status:
                winner = self.winner.name if self.winner else "nobody"
                logger.info("Game ended: %s (winner: %s)", new_status.name, winner)
        self.status = new_status

    def _end_turn(self, completed: str, prefix: str = "") -> MoveResult:
        """
        Hand the turn over and decide what the move did to the opponent
        ---

        * in check and no legal move: checkmate, the player who just moved wins
        * not in check and no legal move: stalemate, a draw
        * in check with moves left: check
        """
        self._clear_draw_offer()
        if self.clock is not None:
            self.clock.switch_turn()
        self.active_color = self.active_color.opposite()

        check = self.board.is_check(self.active_color)
        has_legal_move = self.board.has_any_legal_move(self.active_color)

        if check and not has_legal_move:
            self.winner = self.active_color.opposite()
            self._change_status(Status.CHECKMATE)
            return MoveResult.ok(f"{prefix}Checkmate! {self.winner.name} wins!")
        if not has_legal_move:
            self._change_status(Status.DRAW)
            return MoveResult.ok(f"{prefix}Stalemate! Game is a draw.")
        if check:
            self._change_status(Status.CHECK)
            return MoveResult.ok(f"{prefix}Check!", check=True)

        self._change_status(Status.ONGOING)
        return MoveResult.ok(completed)

    # -- CASTLING RULE HELPERS ---
    def _castle(self, move: Move, king: Piece) -> MoveResult:
        """
        Castling towards the Lover
        ---

        **you are allowed to castle if**

        * the Lover (A-file) and the Rook (B-file) have not moved yet (the king hasn't either, or we would not be here).
        * You are not currently in check (you cannot castle out of a check).
        * All squares between the Rook and the King are empty.
        * None of the squares the king passes through or lands on is under attack.

        The king moves two squares towards the Lover, the Rook jumps over it and lands right next to it.
        """
        squares = CastlingSquares.for_king_on(move.from_square)
        color = king.color

        if not is_unmoved(self.board.piece(squares.lover), PieceType.LOVER, color):
            raise CastlingError("Cannot castle: Lover has moved or is missing")

        rook = self.board.piece(squares.rook_from)
        if rook is None or not is_unmoved(rook, PieceType.ROOK, color):
            raise CastlingError("Cannot castle: Rook has moved or is missing")

        if self.board.is_check(color):
            raise CastlingError("Cannot castle while in check")

        if self.board.is_any_occupied(squares.path()):
            raise CastlingError("Cannot castle: pieces in the way")

        for transit_square in squares.king_transit():
            simulated = self.board.copy()
            simulated.remove_piece(squares.king_from)
            simulated.place_piece(king.with_moved(), transit_square)
            if simulated.is_check(color):
                raise CastlingError("Cannot castle through check")

        self.board.remove_piece(squares.king_from)
        self.board.remove_piece(squares.rook_from)
        self.board.place_piece(king.with_moved(), squares.king_to)
        self.board.place_piece(rook.with_moved(), squares.rook_to)
        logger.debug("%s castled %s", color.name, move.to_text())
        return self._end_turn(completed="Castling completed", prefix="Castling. ")
