"""Protocol repository (the service only needs somewhere to keep the live games)"""

from typing import Protocol
from uuid import UUID

from tenchess.chess.game import Game


class GameRepository(Protocol):
    """Game storage orchestration"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        ...

    def list_games(self) -> list[UUID]:
        """IDs of all stored games."""
        ...
