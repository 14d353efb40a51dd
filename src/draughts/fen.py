"""
Position notation (the draughts flavour of FEN)
----

<turn>:W<serial>,<serial>,...:B<serial>,...:K<serial>,...

* <turn> is W (FIRST side to move) or B (SECOND side to move)
* the W and B segments list every occupied square of that side, kings included
* the optional K segment marks which of those squares hold a king
* serial numbers are 1-based over the playable squares in row-major order
  (so a serial can never address a light square)

ex) a lone white king on 46 against a black man on 5, white to move:
W:W46:B5:K46

The extended form appends the half-move clock and the full-move number, separated by spaces:
W:W46:B5:K46 12 31
"""

from dataclasses import dataclass, field
from typing import Self

from src.core.exceptions import PositionValidationError
from src.core.shared_types import Side
from src.draughts.board import Board
from src.draughts.pieces import KING_TOKEN, SIDE_TO_TOKEN, TOKEN_TO_SIDE, Piece
from src.draughts.variants import Variant

SEGMENT_SEPARATOR = ":"
ENTRY_SEPARATOR = ","
VALID_SEGMENT_TOKENS = (*TOKEN_TO_SIDE, KING_TOKEN)


@dataclass
class FENValidation:
    """Outcome of validating a position string. Collects every violation rather than stopping at the first."""

    errors: list[str] = field(default_factory=list)
    white_squares: list[int] = field(default_factory=list)
    black_squares: list[int] = field(default_factory=list)
    king_squares: list[int] = field(default_factory=list)
    turn: Side = Side.FIRST

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def stats(self) -> dict[str, int]:
        return {
            "white_pieces": len(self.white_squares),
            "black_pieces": len(self.black_squares),
            "kings": len(self.king_squares),
            "total_pieces": len(self.white_squares) + len(self.black_squares),
        }


def is_valid_turn(turn: str) -> bool:
    return turn in TOKEN_TO_SIDE


def validate_position(text: str, variant: Variant) -> FENValidation:
    """
    Structural checks of a position string for the given variant.

    Reports one message per violation:
    non-numeric entries, out-of-range serials, duplicate occupancy,
    kings without a matching side entry and too many pieces for one side.
    """
    result = FENValidation()
    if not text or not text.strip():
        result.errors.append("Position must be a non-empty string")
        return result

    segments = text.strip().split(SEGMENT_SEPARATOR)
    if len(segments) < 2:
        result.errors.append(
            "Position must contain the side to move and at least one piece segment"
        )
        return result

    turn = segments[0]
    if not is_valid_turn(turn):
        result.errors.append(f'Side to move must be "W" or "B", got {turn!r}')
    else:
        result.turn = TOKEN_TO_SIDE[turn]

    board = Board.for_variant(variant)
    occupied: set[int] = set()
    for segment in segments[1:]:
        if not segment:
            continue
        token = segment[0]
        if token not in VALID_SEGMENT_TOKENS:
            result.errors.append(f"Unknown segment token: {token!r}")
            continue

        entries = [entry for entry in segment[1:].split(ENTRY_SEPARATOR) if entry]
        for entry in entries:
            if not entry.isdigit():
                result.errors.append(f"Invalid square number: {entry!r}")
                continue

            serial = int(entry)
            if not (1 <= serial <= board.max_serial):
                result.errors.append(
                    f"Square {serial} out of range (1-{board.max_serial})"
                )
                continue

            if token == KING_TOKEN:
                if serial in result.king_squares:
                    result.errors.append(f"Square {serial} is listed as a king more than once")
                    continue
                result.king_squares.append(serial)
                continue

            if serial in occupied:
                result.errors.append(f"Square {serial} is occupied by more than one piece")
                continue
            occupied.add(serial)

            if TOKEN_TO_SIDE[token] == Side.FIRST:
                result.white_squares.append(serial)
            else:
                result.black_squares.append(serial)

    for serial in result.king_squares:
        if serial not in occupied:
            result.errors.append(
                f"King on square {serial} must also be listed as a white or black piece"
            )

    max_pieces = variant.max_pieces_per_side
    if len(result.white_squares) > max_pieces:
        result.errors.append(
            f"Too many white pieces: {len(result.white_squares)} (max: {max_pieces})"
        )
    if len(result.black_squares) > max_pieces:
        result.errors.append(
            f"Too many black pieces: {len(result.black_squares)} (max: {max_pieces})"
        )
    return result


def counter_errors(fen: str) -> list[str]:
    """Checks of the optional move counters: either none or both, as non-negative integers"""
    parts = fen.strip().split(" ")
    if len(parts) not in (1, 3):
        return [f"Expected '<position>' or '<position> <half-moves> <full-moves>', got {fen!r}"]

    counters = parts[1:]
    if not all(counter.isdigit() for counter in counters):
        return [f"Move counters must be non-negative integers, got {' '.join(counters)!r}"]
    return []


def validate_extended_position(fen: str, variant: Variant) -> FENValidation:
    """Validate a position that may carry move counters. Position and counter problems are reported together."""
    result = validate_position(fen.strip().split(" ")[0], variant)
    result.errors.extend(counter_errors(fen))
    return result


def encode_position(board: Board, turn: Side) -> str:
    white: list[int] = []
    black: list[int] = []
    kings: list[int] = []
    for square, piece in board.pieces():
        serial = board.serial_from_square(square)
        (white if piece.side == Side.FIRST else black).append(serial)
        if piece.is_king:
            kings.append(serial)

    segments = [SIDE_TO_TOKEN[turn]]
    for token, serials in (
        (SIDE_TO_TOKEN[Side.FIRST], white),
        (SIDE_TO_TOKEN[Side.SECOND], black),
        (KING_TOKEN, kings),
    ):
        if serials:
            segments.append(token + ENTRY_SEPARATOR.join(str(serial) for serial in serials))
    return SEGMENT_SEPARATOR.join(segments)


def decode_position(text: str, variant: Variant) -> tuple[Board, Side]:
    """Validate first, then build a fresh board. Never touches an existing board."""
    validation = validate_position(text, variant)
    if not validation.valid:
        raise PositionValidationError(validation.errors)

    board = Board.for_variant(variant)
    for serials, side in (
        (validation.white_squares, Side.FIRST),
        (validation.black_squares, Side.SECOND),
    ):
        for serial in serials:
            board.put(board.square_from_serial(serial), Piece.man(side))

    for serial in validation.king_squares:
        square = board.square_from_serial(serial)
        man = board.get(square)
        # validation guarantees every king square is occupied
        assert man is not None
        board.put(square, man.promoted())
    return board, validation.turn


@dataclass
class PositionState:
    """
    Data that can be constructed from the extended position string.
    ----

    <position> <half-move clock> <full-move number>

    * The half-move clock counts the consecutive king moves without a capture (draw after 50 by default)
    * The full-move number starts at 1 and increments after every move of the SECOND side
    """

    board: Board
    turn: Side
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def from_fen(cls, fen: str, variant: Variant) -> Self:
        errors = counter_errors(fen)
        if errors:
            raise PositionValidationError(errors)

        parts = fen.strip().split(" ")
        halfmove_clock, fullmove_number = 0, 1
        if len(parts) == 3:
            halfmove_clock, fullmove_number = (int(counter) for counter in parts[1:])

        board, turn = decode_position(parts[0], variant)
        return cls(board, turn, halfmove_clock, max(fullmove_number, 1))

    def to_fen(self) -> str:
        return f"{encode_position(self.board, self.turn)} {self.halfmove_clock} {self.fullmove_number}"
