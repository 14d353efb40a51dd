"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    PLAYING = "playing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_REPETITION = "draw by repetition"
    DRAW_FIFTY_MOVES = "draw by fifty moves"
    DRAW_INSUFFICIENT_MATERIAL = "draw by insufficient material"


class Side(StrEnum):
    """FIRST moves up the board (white/red in notation), SECOND moves down (black)."""

    FIRST = "first"
    SECOND = "second"

    @property
    def opponent(self) -> "Side":
        return Side.SECOND if self == Side.FIRST else Side.FIRST


class PieceKind(StrEnum):
    MAN = "man"
    KING = "king"
