"""Protocol repository (the service only depends on this, not on SQLAlchemy)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, MoveModel, PlayerModel, StateFence


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record, together with its players and moves."""
        ...

    def get_player(self, player_id: UUID) -> tuple[PlayerModel, UUID] | None:
        """Get player by ID, if record exists. Returns the player + the ID of the game it belongs to."""
        ...

    def count_players(self, game_id: UUID) -> int:
        """Number of players that joined the game."""
        ...

    def get_move(self, game_id: UUID, seq: int) -> MoveModel | None:
        """Get the move with the given position in the game's move sequence."""
        ...

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        """All moves of the game, ordered by seq."""
        ...

    def commit_join(
        self, game_id: UUID, fence: StateFence, game: GameModel, player: PlayerModel
    ) -> UUID:
        """
        Store the updated game and the new player in one go, return the new player ID.
        Raises StaleGameStateError (nothing written) if the game's counters no longer match the fence.
        """
        ...

    def commit_turn(
        self,
        game_id: UUID,
        fence: StateFence,
        game: GameModel,
        player_id: UUID,
        player: PlayerModel,
        move: MoveModel,
    ) -> None:
        """
        Store the updated game, the updated player and the new move record in one go.
        Raises StaleGameStateError (nothing written) if the game's counters no longer match the fence.
        """
        ...
