"""
Move definitions and the move notation

* simple move: <from>-<to>, e.g. "32-28"
* capture chain: <from>x<landing>x...x<to>, e.g. "26x37x48". The last serial is the destination,
  the ones in between are the intermediate landing squares of the chain.
"""

import re
from dataclasses import dataclass
from typing import Protocol, Self

from src.core.exceptions import MalformedNotationError
from src.draughts.pieces import Piece
from src.draughts.square import Square

SIMPLE_MOVE_PATTERN = re.compile(r"^(\d+)-(\d+)$")
CAPTURE_PATTERN = re.compile(r"^(\d+)((?:x\d+)+)$")


class Board(Protocol):
    """Just the part of the board the notation needs"""

    def serial_from_square(self, square: Square) -> int: ...


@dataclass(frozen=True)
class Capture:
    """A piece taken during a chain, and where it stood"""

    square: Square
    piece: Piece


@dataclass(frozen=True)
class Move:
    """
    A complete move of one piece.

    `path` holds every square the piece lands on, in order. For a simple move that is just the destination.
    """

    from_square: Square
    to_square: Square
    captured: tuple[Capture, ...] = ()
    path: tuple[Square, ...] = ()

    def __post_init__(self) -> None:
        if not self.path:
            # frozen dataclass: bypass __setattr__ for the derived default
            object.__setattr__(self, "path", (self.to_square,))

    @property
    def is_capture(self) -> bool:
        return len(self.captured) > 0

    @property
    def length(self) -> int:
        """Number of pieces taken"""
        return len(self.captured)

    @property
    def chain_squares(self) -> tuple[Square, ...]:
        """Intermediate landing squares (excludes the destination)"""
        return self.path[:-1]

    @property
    def captured_squares(self) -> frozenset[Square]:
        return frozenset(capture.square for capture in self.captured)

    def to_notation(self, board: Board) -> str:
        from_serial = board.serial_from_square(self.from_square)
        if not self.is_capture:
            return f"{from_serial}-{board.serial_from_square(self.to_square)}"
        landings = "x".join(str(board.serial_from_square(square)) for square in self.path)
        return f"{from_serial}x{landings}"


@dataclass(frozen=True)
class MoveNotation:
    """Parsed, but not yet resolved against a board, move notation"""

    from_serial: int
    landing_serials: tuple[int, ...]
    is_capture: bool

    @property
    def to_serial(self) -> int:
        return self.landing_serials[-1]

    @property
    def chain_serials(self) -> tuple[int, ...]:
        return self.landing_serials[:-1]

    @classmethod
    def parse(cls, notation: str) -> Self:
        text = notation.strip()
        simple = SIMPLE_MOVE_PATTERN.match(text)
        if simple:
            return cls(int(simple.group(1)), (int(simple.group(2)),), is_capture=False)

        capture = CAPTURE_PATTERN.match(text)
        if capture:
            landings = tuple(int(part) for part in capture.group(2).split("x") if part)
            return cls(int(capture.group(1)), landings, is_capture=True)

        raise MalformedNotationError(
            f"Cannot interpret {notation!r} as a move. Expected '<from>-<to>' or '<from>x<square>x...x<to>'."
        )


def is_valid_move_notation(notation: str) -> bool:
    text = notation.strip()
    return bool(SIMPLE_MOVE_PATTERN.match(text) or CAPTURE_PATTERN.match(text))
