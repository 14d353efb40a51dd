"""Unit tests for src/draughts/board.py"""

import pytest

from src.core.exceptions import InvalidSquareError
from src.core.shared_types import PieceKind, Side
from src.draughts.board import Board, playable_squares
from src.draughts.pieces import Piece
from src.draughts.square import Square
from src.draughts.variants import VARIANTS, lookup


# --- SQUARE ADDRESSING ---
@pytest.mark.parametrize("variant_id", list(VARIANTS))
def test_serial_round_trip(variant_id: str) -> None:
    """Every serial number maps to a playable square and back."""
    board = Board.for_variant(lookup(variant_id))
    for serial in range(1, board.max_serial + 1):
        square = board.square_from_serial(serial)
        assert board.is_playable(square)
        assert board.serial_from_square(square) == serial


def test_serials_follow_row_major_dark_squares() -> None:
    """International numbering: 1 is top row, second column. 46 is bottom row, first column."""
    board = Board.for_variant(lookup("international"))
    assert board.max_serial == 50
    assert board.square_from_serial(1) == Square(0, 1)
    assert board.square_from_serial(5) == Square(0, 9)
    assert board.square_from_serial(6) == Square(1, 0)
    assert board.square_from_serial(32) == Square(6, 3)
    assert board.square_from_serial(46) == Square(9, 0)
    assert board.square_from_serial(50) == Square(9, 8)


def test_orthogonal_board_numbers_every_square() -> None:
    board = Board.for_variant(lookup("turkish"))
    assert board.max_serial == 64
    assert board.square_from_serial(1) == Square(0, 0)
    assert board.square_from_serial(64) == Square(7, 7)
    assert board.is_playable(Square(0, 0))


@pytest.mark.parametrize("serial", [0, -1, 51, 100])
def test_serial_out_of_range(serial: int) -> None:
    board = Board.for_variant(lookup("international"))
    with pytest.raises(InvalidSquareError):
        board.square_from_serial(serial)


@pytest.mark.parametrize("square", [Square(0, 0), Square(10, 1), Square(-1, 0), Square(4, 4)])
def test_serial_of_unplayable_square(square: Square) -> None:
    """Light squares and squares off the board have no serial number: fail instead of clamping."""
    board = Board.for_variant(lookup("international"))
    with pytest.raises(InvalidSquareError):
        board.serial_from_square(square)


def test_parse_square() -> None:
    board = Board.for_variant(lookup("international"))
    assert board.parse_square(32) == Square(6, 3)
    assert board.parse_square("32") == Square(6, 3)
    assert board.parse_square("a1") == Square(9, 0)
    assert board.parse_square(Square(9, 0)) == Square(9, 0)

    with pytest.raises(InvalidSquareError):
        board.parse_square("b1")  # light square

    with pytest.raises(InvalidSquareError):
        board.parse_square(Square(0, 0))


def test_square_from_algebraic() -> None:
    board = Board.for_variant(lookup("american"))
    assert board.square_from_algebraic("a1") == Square(7, 0)
    assert board.serial_from_square(board.square_from_algebraic("h8")) == 4

    with pytest.raises(InvalidSquareError):
        board.square_from_algebraic("i1")  # off the 8x8 board


def test_playable_squares_are_cached_per_geometry() -> None:
    assert playable_squares(8) is playable_squares(8)
    assert len(playable_squares(12)) == 72


def test_unsupported_board_size() -> None:
    with pytest.raises(ValueError):
        Board.empty(9)


# --- STARTING POSITIONS ---
@pytest.mark.parametrize(
    "variant_id, pieces_per_side",
    [
        ("international", 20),
        ("american", 12),
        ("russian", 12),
        ("brazilian", 24),
        ("turkish", 16),
    ],
)
def test_starting_position_piece_count(variant_id: str, pieces_per_side: int) -> None:
    board = Board.starting(lookup(variant_id))
    assert board.count(Side.FIRST) == pieces_per_side
    assert board.count(Side.SECOND) == pieces_per_side
    assert board.count(kind=PieceKind.KING) == 0


def test_international_starting_position() -> None:
    """Black men on 1-20, white men on 31-50."""
    board = Board.starting(lookup("international"))
    for serial in range(1, 51):
        piece = board.get(board.square_from_serial(serial))
        if serial <= 20:
            assert piece == Piece.man(Side.SECOND)
        elif serial <= 30:
            assert piece is None
        else:
            assert piece == Piece.man(Side.FIRST)


def test_turkish_starting_position_leaves_back_rows_empty() -> None:
    board = Board.starting(lookup("turkish"))
    occupied_rows = {square.row for square, _ in board.pieces()}
    assert occupied_rows == {1, 2, 5, 6}


def test_pieces_only_on_playable_squares() -> None:
    for variant in VARIANTS.values():
        board = Board.starting(variant)
        assert all(board.is_playable(square) for square, _ in board.pieces())


# --- PIECE ACCESS ---
def test_put_get_remove() -> None:
    board = Board.for_variant(lookup("american"))
    square = board.square_from_serial(14)
    king = Piece.king(Side.SECOND)

    assert board.get(square) is None
    board.put(square, king)
    assert board.get(square) == king
    assert board.count(Side.SECOND, PieceKind.KING) == 1
    assert board.remove(square) == king
    assert board.is_empty(square)
    assert board.remove(square) is None


def test_put_on_light_square() -> None:
    board = Board.for_variant(lookup("american"))
    with pytest.raises(InvalidSquareError):
        board.put(Square(0, 0), Piece.man(Side.FIRST))


def test_pieces_filtered_by_side_in_row_major_order() -> None:
    board = Board.starting(lookup("american"))
    first = [square for square, _ in board.pieces(Side.FIRST)]
    assert first == sorted(first)
    assert all(square.row >= 5 for square in first)


def test_position_key() -> None:
    """Key lists every occupied square with its piece, independent of insertion order."""
    board = Board.for_variant(lookup("american"))
    board.put(Square(7, 0), Piece.man(Side.FIRST))
    board.put(Square(0, 1), Piece.king(Side.SECOND))
    assert board.position_key() == "0,1:Bk|7,0:Wm"

    other = Board.for_variant(lookup("american"))
    other.put(Square(0, 1), Piece.king(Side.SECOND))
    other.put(Square(7, 0), Piece.man(Side.FIRST))
    assert other.position_key() == board.position_key()


def test_copy_is_independent() -> None:
    board = Board.starting(lookup("american"))
    copied = board.copy()
    assert copied == board
    copied.remove(copied.square_from_serial(1))
    assert copied != board
