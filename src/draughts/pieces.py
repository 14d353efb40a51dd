"""Defines the draughts pieces: a man or a king, owned by one of the two sides"""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import PieceKind, Side

# Letters used in the position notation for each side
SIDE_TO_TOKEN: dict[Side, str] = {
    Side.FIRST: "W",
    Side.SECOND: "B",
}
TOKEN_TO_SIDE: dict[str, Side] = {value: key for key, value in SIDE_TO_TOKEN.items()}
KING_TOKEN = "K"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    side: Side

    @classmethod
    def man(cls, side: Side) -> Self:
        return cls(PieceKind.MAN, side)

    @classmethod
    def king(cls, side: Side) -> Self:
        return cls(PieceKind.KING, side)

    @property
    def is_king(self) -> bool:
        return self.kind == PieceKind.KING

    def promoted(self) -> "Piece":
        """Pieces are immutable: promotion hands back a new king of the same side."""
        return Piece(PieceKind.KING, self.side)

    def key(self) -> str:
        """Short token used in position keys, e.g. 'Wm' or 'Bk'"""
        return f"{SIDE_TO_TOKEN[self.side]}{self.kind.value[0]}"
