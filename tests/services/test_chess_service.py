"""Unit tests for src/tenchess/services/chess_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from tenchess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    EnableClockRequest,
    GameActionRequest,
    GetGameRequest,
    MoveRequest,
)
from tenchess.chess.game import Game
from tenchess.core.exceptions import GameError, InvalidRequestError, RepositoryError
from tenchess.core.shared_types import Color, Status
from tenchess.services.chess_service import ChessService

STARTING_FEN = "lrnbqkbnrr/pppppppppp/10/10/10/10/10/10/PPPPPPPPPP/LRNBQKBNRR"
# White to mate with G1-G10 (rook on H9 covers the 9th rank)
MATE_IN_ONE_FEN = "9k/7R2/10/10/10/10/10/10/10/K5R3"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of games."""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def create_game(self, game: Game) -> UUID:
        game_id = uuid4()
        self._games[game_id] = game
        return game_id

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> list[UUID]:
        return list(self._games)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> ChessService:
    return ChessService(mock_repository)


@pytest.fixture
def game_id(service: ChessService) -> UUID:
    return service.create_game(CreateGameRequest()).game_id


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: ChessService, mock_repository: MockRepository) -> None:
    """Check that new game is created, stored in repo, and return has the appropriate information."""
    response = service.create_game(CreateGameRequest())

    assert response.board == STARTING_FEN
    assert response.active_color == Color.WHITE
    assert response.status == Status.ONGOING
    assert response.winner is None
    assert response.draw_offered_by is None
    assert response.remaining_seconds is None
    assert mock_repository.get_game(response.game_id) is not None


def test_create_game_with_clock(service: ChessService) -> None:
    response = service.create_game(CreateGameRequest(clock_minutes=5))
    assert response.remaining_seconds is not None
    assert set(response.remaining_seconds) == {Color.WHITE, Color.BLACK}
    assert response.remaining_seconds[Color.BLACK] == 300.0
    assert 0 < response.remaining_seconds[Color.WHITE] <= 300.0


def test_create_game_from_custom_board(service: ChessService) -> None:
    response = service.create_game(
        CreateGameRequest(starting_board=MATE_IN_ONE_FEN, active_color=Color.BLACK)
    )
    assert response.board == MATE_IN_ONE_FEN
    assert response.active_color == Color.BLACK


@pytest.mark.parametrize(
    "board",
    [
        "/".join(["10"] * 10),  # no kings at all
        "/".join(["9k"] + ["10"] * 9),  # no white king
        "/".join(["9k", "11"] + ["10"] * 7 + ["K9"]),  # rank too long
        "/".join(["9x"] + ["10"] * 8 + ["K9"]),  # unknown piece
        "/".join(["9k"] + ["10"] * 8 + ["K\u00b27"]),  # superscript digit
    ],
)
def test_create_game_from_broken_board(service: ChessService, mock_repository: MockRepository, board: str) -> None:
    with pytest.raises(InvalidRequestError, match="Cannot set up board"):
        service.create_game(CreateGameRequest(starting_board=board))
    assert mock_repository.list_games() == []


# --- SERVICE - QUERIES ---
def test_get_game_state(service: ChessService, game_id: UUID) -> None:
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.board == STARTING_FEN


def test_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))
    with pytest.raises(GameError):
        service.make_move(MoveRequest(game_id=uuid4(), from_square="e2", to_square="e4"))


def test_list_games(service: ChessService) -> None:
    first = service.create_game(CreateGameRequest()).game_id
    second = service.create_game(CreateGameRequest()).game_id
    assert service.list_games() == [first, second]


# --- SERVICE - MOVES ---
def test_make_move(service: ChessService, game_id: UUID) -> None:
    response = service.make_move(MoveRequest(game_id=game_id, from_square="e2", to_square="e4"))
    assert response.success
    assert response.message == "Move accepted"
    assert not response.check
    assert response.game.active_color == Color.BLACK
    assert response.game.board == "lrnbqkbnrr/pppppppppp/10/10/10/10/4P5/10/PPPP1PPPPP/LRNBQKBNRR"


def test_rejected_move_is_a_normal_response(service: ChessService, game_id: UUID) -> None:
    response = service.make_move(MoveRequest(game_id=game_id, from_square="e9", to_square="e8"))
    assert not response.success
    assert response.message == "It is not BLACK's turn"
    assert response.game.board == STARTING_FEN


def test_play_text_move(service: ChessService, game_id: UUID) -> None:
    assert service.play_text_move(game_id, "c1-d4").success
    response = service.play_text_move(game_id, "what?")
    assert not response.success
    assert response.game.active_color == Color.BLACK


def test_checkmate_through_the_service(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest(starting_board=MATE_IN_ONE_FEN)).game_id
    response = service.make_move(MoveRequest(game_id=game_id, from_square="G1", to_square="G10"))
    assert response.message == "Checkmate! WHITE wins!"
    assert response.game.status == Status.CHECKMATE
    assert response.game.winner == Color.WHITE


# --- SERVICE - DRAW / RESIGN ---
def test_draw_protocol(service: ChessService, game_id: UUID) -> None:
    offered = service.offer_draw(GameActionRequest(game_id=game_id))
    assert offered.success
    assert offered.game.draw_offered_by == Color.WHITE

    own = service.accept_draw(GameActionRequest(game_id=game_id))
    assert not own.success

    accepted = service.accept_draw(GameActionRequest(game_id=game_id, color=Color.BLACK))
    assert accepted.success
    assert accepted.game.status == Status.DRAW


def test_decline_draw(service: ChessService, game_id: UUID) -> None:
    service.offer_draw(GameActionRequest(game_id=game_id, color=Color.BLACK))
    response = service.decline_draw(GameActionRequest(game_id=game_id))
    assert response.message == "Draw declined. Game continues."
    assert response.game.draw_offered_by is None


def test_resign(service: ChessService, game_id: UUID) -> None:
    response = service.resign(GameActionRequest(game_id=game_id, color=Color.BLACK))
    assert response.message == "BLACK resigns. WHITE wins!"
    assert response.game.status == Status.RESIGNED
    assert response.game.winner == Color.WHITE


# --- SERVICE - RESET / CLOCK ---
def test_reset_game(service: ChessService, game_id: UUID) -> None:
    service.make_move(MoveRequest(game_id=game_id, from_square="e2", to_square="e4"))
    service.resign(GameActionRequest(game_id=game_id))
    response = service.reset_game(GetGameRequest(game_id=game_id))
    assert response.board == STARTING_FEN
    assert response.status == Status.ONGOING
    assert response.winner is None


def test_enable_clock(service: ChessService, game_id: UUID) -> None:
    response = service.enable_clock(EnableClockRequest(game_id=game_id, minutes=2))
    assert response.remaining_seconds is not None
    assert response.remaining_seconds[Color.BLACK] == 120.0


# --- SERVICE - DELETE GAME ---
def test_delete_game(service: ChessService, mock_repository: MockRepository, game_id: UUID) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
    assert mock_repository.get_game(game_id) is None


def test_delete_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.delete_game(DeleteGameRequest(game_id=uuid4()))
