"""Implementation of (Game)Repository keeping the games in process memory"""

from uuid import UUID, uuid4

from tenchess.chess.game import Game


class InMemoryGameRepository:
    """
    Games live as long as the repository does. Every game is its own independent Game instance.

    NOTE: no locking. A host serving several requests at once must serialize access per game.
    """

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        new_id = uuid4()
        self._games[new_id] = game
        return new_id

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> list[UUID]:
        return list(self._games.keys())
