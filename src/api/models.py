"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.config import DEFAULT_VARIANT
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side, Status
from src.draughts.fen import is_valid_turn
from src.draughts.moves import is_valid_move_notation
from src.draughts.variants import AVAILABLE_VARIANTS

SideName = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    side: Side
    variant: str = DEFAULT_VARIANT
    starting_position: Optional[str] = None

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, value: str) -> str:
        if value not in AVAILABLE_VARIANTS:
            raise InvalidRequestError(
                f"Unknown variant {value!r}. Pick one from {', '.join(AVAILABLE_VARIANTS)}"
            )
        return value

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        """Only the structure is checked here. The squares themselves are validated by the domain layer."""
        if value is None:
            return value

        parts = value.strip().split(" ")
        if len(parts) not in (1, 3):
            raise InvalidRequestError(
                "Position must be '<position>' or '<position> <half-moves> <full-moves>'."
            )

        segments = parts[0].split(":")
        if len(segments) < 2 or not is_valid_turn(segments[0]):
            raise InvalidRequestError(
                "Position must start with the side to move (W or B) followed by ':' and the piece segments."
            )
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str
    square: Optional[str] = None

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        def _is_square_name(value: str) -> bool:
            # either a serial number ('32') or an algebraic name ('c3')
            if value.isdigit():
                return True
            return len(value) >= 2 and value[0].isalpha() and value[1:].isdigit()

        if value is not None and not _is_square_name(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    move: str

    @field_validator("move")
    @classmethod
    def validate_move(cls, value: str) -> str:
        if not is_valid_move_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret move: {value!r}. Expected '<from>-<to>' or '<from>x...x<to>'."
            )
        return value.strip()


class UndoRequest(BaseModel):
    game_id: UUID
    player_name: str


class LoadPositionRequest(BaseModel):
    game_id: UUID
    position: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    variant: str
    players: dict[SideName, PlayerName]
    position: str
    starting_position: str
    move_history: list[str]
    status: Status


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    side: Side
    legal_moves: list[str]


class LoadPositionResponse(BaseModel):
    game_id: UUID
    success: bool
    errors: list[str] = []
    stats: dict[str, int] = {}
