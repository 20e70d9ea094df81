"""Orchestration of communication from a host (CLI, web handler, ...) to the game logic and the game storage (and the reverse direction)."""

import logging
from datetime import timedelta
from uuid import UUID

from tenchess.api.models import (
    ActionResponse,
    CreateGameRequest,
    DeleteGameRequest,
    EnableClockRequest,
    GameActionRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
)
from tenchess.chess.clock import Clock
from tenchess.chess.game import Game, MoveResult
from tenchess.core.exceptions import (
    BoardIntegrityError,
    InvalidRequestError,
    RejectedActionError,
    RepositoryError,
)
from tenchess.core.shared_types import Color
from tenchess.db.repository import GameRepository

logger = logging.getLogger("tenchess.service")


class ChessService:
    """Orchestration of layers for the chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Host requests ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game, optionally from a custom board and with a clock."""
        if request.starting_board:
            try:
                game = Game.from_fen(request.starting_board, request.active_color)
                # both kings must be on the board before any move can be judged
                for color in Color:
                    game.board.find_king(color)
            except (RejectedActionError, BoardIntegrityError) as error:
                raise InvalidRequestError(f"Cannot set up board: {error}") from error
        else:
            game = Game.new_game()

        if request.clock_minutes is not None:
            game.enable_clock(timedelta(minutes=request.clock_minutes))

        game_id = self.repo.create_game(game)
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by hosts to redraw the board, check whose turn it is, etc.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def make_move(self, request: MoveRequest) -> ActionResponse:
        """Make a move attempt."""
        game = self._fetch_game(request.game_id)
        move_text = f"{request.from_square} {request.to_square}"
        result = game.play_move(move_text)
        return self._create_action_response(request.game_id, game, result)

    def play_text_move(self, game_id: UUID, text: str) -> ActionResponse:
        """Same as `make_move`, for hosts that pass on whatever the player typed (e.g. "F1-D1")."""
        game = self._fetch_game(game_id)
        result = game.play_move(text)
        return self._create_action_response(game_id, game, result)

    def offer_draw(self, request: GameActionRequest) -> ActionResponse:
        game = self._fetch_game(request.game_id)
        result = game.offer_draw(request.color)
        return self._create_action_response(request.game_id, game, result)

    def accept_draw(self, request: GameActionRequest) -> ActionResponse:
        game = self._fetch_game(request.game_id)
        result = game.accept_draw(request.color)
        return self._create_action_response(request.game_id, game, result)

    def decline_draw(self, request: GameActionRequest) -> ActionResponse:
        game = self._fetch_game(request.game_id)
        result = game.decline_draw()
        return self._create_action_response(request.game_id, game, result)

    def resign(self, request: GameActionRequest) -> ActionResponse:
        game = self._fetch_game(request.game_id)
        result = game.resign(request.color)
        return self._create_action_response(request.game_id, game, result)

    def reset_game(self, request: GetGameRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.reset()
        return self._create_game_response(request.game_id, game)

    def enable_clock(self, request: EnableClockRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.enable_clock(timedelta(minutes=request.minutes))
        return self._create_game_response(request.game_id, game)

    def list_games(self) -> list[UUID]:
        """Show all running games."""
        return self.repo.list_games()

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        return GameResponse(
            game_id=game_id,
            board=game.board.to_fen(),
            active_color=game.active_color,
            status=game.status,
            winner=game.winner,
            draw_offered_by=game.draw_offered_by,
            remaining_seconds=self._remaining_seconds(game.clock),
        )

    def _create_action_response(
        self, game_id: UUID, game: Game, result: MoveResult
    ) -> ActionResponse:
        return ActionResponse(
            success=result.success,
            message=result.message,
            check=result.check,
            game=self._create_game_response(game_id, game),
        )

    def _remaining_seconds(self, clock: Clock | None) -> dict[Color, float] | None:
        if clock is None:
            return None
        return {color: clock.remaining(color).total_seconds() for color in Color}

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game
