"""Unit tests for src/draughts/captures.py"""

from src.core.shared_types import PieceKind, Side
from src.draughts.board import Board
from src.draughts.captures import find_captures
from src.draughts.fen import decode_position
from src.draughts.moves import Move
from src.draughts.pieces import Piece
from src.draughts.variants import Variant, lookup


def setup(position: str, variant_id: str) -> tuple[Board, Variant]:
    variant = lookup(variant_id)
    board, _ = decode_position(position, variant)
    return board, variant


def notations(moves: list[Move], board: Board) -> set[str]:
    return {move.to_notation(board) for move in moves}


# --- MEN ---
def test_single_capture_by_man() -> None:
    board, variant = setup("W:W32:B27", "international")
    captures = find_captures(board, board.square_from_serial(32), variant)
    assert notations(captures, board) == {"32x21"}
    assert captures[0].captured[0].square == board.square_from_serial(27)
    assert captures[0].captured[0].piece == Piece.man(Side.SECOND)


def test_no_capture_when_landing_occupied() -> None:
    board, variant = setup("W:W32:B27,21", "international")
    assert find_captures(board, board.square_from_serial(32), variant) == []


def test_no_capture_of_own_piece() -> None:
    board, variant = setup("W:W32,27:B1", "international")
    assert find_captures(board, board.square_from_serial(32), variant) == []


def test_no_capture_over_the_edge() -> None:
    """Enemy on the edge of the board: nowhere to land."""
    board, variant = setup("W:W30:B25", "international")
    assert find_captures(board, board.square_from_serial(30), variant) == []


def test_empty_square_has_no_captures() -> None:
    board, variant = setup("W:W32:B27", "international")
    assert find_captures(board, board.square_from_serial(1), variant) == []


def test_backward_capture_depends_on_variant() -> None:
    """A white man on 22 (american numbering) with a black man behind it on 26."""
    board, variant = setup("W:W22:B26", "american")
    assert find_captures(board, board.square_from_serial(22), variant) == []

    board, variant = setup("W:W22:B26", "russian")
    assert notations(find_captures(board, board.square_from_serial(22), variant), board) == {"22x31"}


def test_longest_extension_kept_at_branch_point() -> None:
    """Two branches from 32: a single capture via 27, and a double capture via 28 and 18."""
    board, variant = setup("W:W32:B27,28,18", "international")
    captures = find_captures(board, board.square_from_serial(32), variant)
    assert notations(captures, board) == {"32x23x12"}


def test_all_terminal_chains_without_longest_rule() -> None:
    board, variant = setup("W:W22:B17,18,11", "american")
    captures = find_captures(board, board.square_from_serial(22), variant)
    assert notations(captures, board) == {"22x13", "22x15x8"}


def test_man_stays_man_mid_chain() -> None:
    """Passing the promotion row mid-chain: the man does not continue as a king."""
    board, variant = setup("W:W13:B8,7", "international")
    captures = find_captures(board, board.square_from_serial(13), variant)
    assert notations(captures, board) == {"13x2x11"}


# --- KINGS ---
def test_flying_king_captures_three_in_one_chain() -> None:
    board, variant = setup("W:W46:B7,17,37:K46", "international")
    captures = find_captures(board, board.square_from_serial(46), variant)
    assert notations(captures, board) == {"46x28x11x2"}
    move = captures[0]
    assert move.length == 3
    assert move.captured_squares == {board.square_from_serial(serial) for serial in (37, 17, 7)}


def test_flying_king_lands_anywhere_behind_the_piece() -> None:
    board, variant = setup("W:W29:B22:K29", "russian")
    captures = find_captures(board, board.square_from_serial(29), variant)
    assert notations(captures, board) == {"29x18", "29x15", "29x11", "29x8", "29x4"}


def test_king_capture_limit() -> None:
    """Italian kings land directly behind the captured piece."""
    board, variant = setup("W:W29:B22:K29", "italian")
    captures = find_captures(board, board.square_from_serial(29), variant)
    assert notations(captures, board) == {"29x18"}


def test_non_flying_king_only_captures_adjacent_pieces() -> None:
    board, variant = setup("W:W29:B22:K29", "american")
    assert find_captures(board, board.square_from_serial(29), variant) == []

    board, variant = setup("W:W29:B25:K29", "american")
    assert notations(find_captures(board, board.square_from_serial(29), variant), board) == {"29x22"}


def test_king_blocked_by_two_pieces_in_a_row() -> None:
    board, variant = setup("W:W46:B41,37:K46", "international")
    captures = find_captures(board, board.square_from_serial(46), variant)
    assert all(board.square_from_serial(41) not in move.captured_squares for move in captures)


def test_search_restores_the_board() -> None:
    board, variant = setup("W:W46:B7,17,37:K46", "international")
    before = board.copy()
    find_captures(board, board.square_from_serial(46), variant)
    assert board == before
    assert board.get(board.square_from_serial(46)) == Piece(PieceKind.KING, Side.FIRST)


def test_no_piece_captured_twice() -> None:
    """A king surrounded by loosely spaced men: no chain may take the same square twice."""
    board, variant = setup("W:W28:B17,19,37,39,22,33:K28", "international")
    captures = find_captures(board, board.square_from_serial(28), variant)
    assert captures
    for move in captures:
        squares = [capture.square for capture in move.captured]
        assert len(squares) == len(set(squares))
        assert len(move.path) == len(move.captured)


# --- ORTHOGONAL ---
def test_orthogonal_capture() -> None:
    """Turkish numbering covers all 64 squares: 44 is (5, 3), 36 is (4, 3), 28 is (3, 3)."""
    board, variant = setup("W:W44:B36", "turkish")
    assert notations(find_captures(board, board.square_from_serial(44), variant), board) == {"44x28"}


def test_orthogonal_men_do_not_capture_diagonally() -> None:
    board, variant = setup("W:W44:B35", "turkish")
    assert find_captures(board, board.square_from_serial(44), variant) == []
