"""Storage contract for draughts games. The service only talks to this protocol, `SQLGameRepository` implements it."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Keeps one record per game: variant, starting position, the moves played since, and the registered players.

    The current position is stored as well, but it is always derivable by replaying the moves.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored game, or None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a freshly created game and hand out its new ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the record after a join, a move, an undo or a loaded position. None for an unknown ID."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove the record and return what was stored (None for an unknown ID)."""
        ...
