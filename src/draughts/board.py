"""The Board holds the position: which piece stands on which playable square"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator, Optional, Self

from src.core.exceptions import InvalidSquareError
from src.core.shared_types import PieceKind, Side
from src.draughts.pieces import Piece
from src.draughts.square import SUPPORTED_BOARD_SIZES, Square
from src.draughts.variants import Variant

SquareInput = int | str | Square


@lru_cache(maxsize=None)
def playable_squares(size: int, all_squares: bool = False) -> tuple[Square, ...]:
    """
    The playable squares in row-major order.

    The index in this tuple + 1 is the serial number of the square used by both the move notation and the position notation.
    """
    return tuple(
        Square(row, col)
        for row in range(size)
        for col in range(size)
        if all_squares or (row + col) % 2 == 1
    )


@lru_cache(maxsize=None)
def _serial_lookup(size: int, all_squares: bool = False) -> dict[Square, int]:
    return {
        square: serial
        for serial, square in enumerate(playable_squares(size, all_squares), start=1)
    }


@dataclass
class Board:
    size: int
    # orthogonal-movement variants play on every square, the others on dark squares only
    all_squares: bool = False
    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls, size: int, all_squares: bool = False) -> Self:
        if size not in SUPPORTED_BOARD_SIZES:
            raise ValueError(f"Board size must be one of {SUPPORTED_BOARD_SIZES}, got {size}")
        return cls(size, all_squares)

    @classmethod
    def for_variant(cls, variant: Variant) -> Self:
        return cls.empty(variant.board_size, variant.orthogonal_movement)

    @classmethod
    def starting(cls, variant: Variant) -> Self:
        """
        Initial setup of a variant.

        * diagonal variants: the first `home_rows` rows carry the SECOND side's men, the last `home_rows` rows the FIRST side's men (dark squares only)
        * orthogonal variants: rows 1-2 and the rows just above the bottom row are completely filled, leaving both back rows empty
        """
        board = cls.for_variant(variant)
        size = variant.board_size
        if variant.orthogonal_movement:
            second_rows = range(1, 3)
            first_rows = range(size - 3, size - 1)
        else:
            second_rows = range(0, variant.home_rows)
            first_rows = range(size - variant.home_rows, size)

        for square in playable_squares(size, board.all_squares):
            if square.row in second_rows:
                board.position[square] = Piece.man(Side.SECOND)
            elif square.row in first_rows:
                board.position[square] = Piece.man(Side.FIRST)
        return board

    # --- SQUARE ADDRESSING ---
    def is_within_bounds(self, square: Square) -> bool:
        return square.is_within_bounds(self.size)

    def is_playable(self, square: Square) -> bool:
        return self.is_within_bounds(square) and (self.all_squares or square.is_dark())

    def playable_squares(self) -> tuple[Square, ...]:
        return playable_squares(self.size, self.all_squares)

    @property
    def max_serial(self) -> int:
        return len(self.playable_squares())

    def square_from_serial(self, serial: int) -> Square:
        if not (1 <= serial <= self.max_serial):
            raise InvalidSquareError(f"Square {serial} out of range (1-{self.max_serial})")
        return self.playable_squares()[serial - 1]

    def serial_from_square(self, square: Square) -> int:
        self._assert_playable(square)
        return _serial_lookup(self.size, self.all_squares)[square]

    def parse_square(self, value: SquareInput) -> Square:
        """Accepts a serial number, a serial as text ('32'), an algebraic name ('c3') or a Square"""
        if isinstance(value, Square):
            self._assert_playable(value)
            return value
        if isinstance(value, int):
            return self.square_from_serial(value)
        if value.isdigit():
            return self.square_from_serial(int(value))
        return self.square_from_algebraic(value)

    def square_from_algebraic(self, name: str) -> Square:
        square = Square.from_algebraic(name, self.size)
        self._assert_playable(square)
        return square

    def _assert_playable(self, square: Square) -> None:
        if not self.is_within_bounds(square):
            raise InvalidSquareError(
                f"{square} is outside of the {self.size}x{self.size} board"
            )
        if not self.is_playable(square):
            raise InvalidSquareError(f"{square} is not a playable (dark) square")

    # --- PIECES ---
    def get(self, square: Square) -> Optional[Piece]:
        self._assert_playable(square)
        return self.position.get(square)

    def piece(self, square: Square) -> Optional[Piece]:
        """Unchecked lookup, for callers that already know the square is on the board."""
        return self.position.get(square)

    def put(self, square: Square, piece: Piece) -> None:
        self._assert_playable(square)
        self.position[square] = piece

    def remove(self, square: Square) -> Optional[Piece]:
        self._assert_playable(square)
        return self.position.pop(square, None)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def pieces(self, side: Optional[Side] = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally only those of one side"""
        for square in self.playable_squares():
            piece = self.position.get(square)
            if piece is not None and (side is None or piece.side == side):
                yield square, piece

    def count(self, side: Optional[Side] = None, kind: Optional[PieceKind] = None) -> int:
        return sum(
            1
            for _, piece in self.pieces(side)
            if kind is None or piece.kind == kind
        )

    def position_key(self) -> str:
        """
        Canonical description of the occupied squares, used for repetition detection.

        NOTE: whose turn it is is not part of the key.
        """
        return "|".join(
            f"{square.row},{square.col}:{piece.key()}" for square, piece in self.pieces()
        )

    def copy(self) -> Board:
        return Board(self.size, self.all_squares, dict(self.position))
