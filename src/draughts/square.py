"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidSquareError

# Boards come in 8x8, 10x10 and 12x12 depending on the variant
SUPPORTED_BOARD_SIZES = (8, 10, 12)

Vector = tuple[int, int]


@dataclass(frozen=True, order=True)
class Square:
    """(row, col) with row 0 at the top edge (the SECOND side's home row)."""

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str, board_size: int) -> Square:
        """Algebraic notation: 'a1' is the bottom-left corner, so rank 1 is the last row."""
        if len(sq) < 2 or sq[0] not in ascii_lowercase[:board_size]:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        if not sq[1:].isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")

        col = ord(sq[0]) - ord("a")
        row = board_size - int(sq[1:])
        square = cls(row, col)
        if not square.is_within_bounds(board_size):
            raise InvalidSquareError(f"Square {sq!r} is not on a {board_size}x{board_size} board.")
        return square

    def to_algebraic(self, board_size: int) -> str:
        return f"{chr(self.col + ord('a'))}{board_size - self.row}"

    def is_within_bounds(self, board_size: int) -> bool:
        return (0 <= self.row < board_size) and (0 <= self.col < board_size)

    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def offset(self, direction: Vector, steps: int = 1) -> Square:
        dr, dc = direction
        return Square(self.row + dr * steps, self.col + dc * steps)
