"""Unit tests for src/draughts/generator.py"""

import pytest

from src.core.shared_types import Side
from src.draughts.board import Board
from src.draughts.fen import decode_position
from src.draughts.generator import (
    all_captures,
    has_legal_moves,
    legal_moves,
    max_capture_length,
    moves_for_piece,
    simple_moves,
)
from src.draughts.moves import Move
from src.draughts.variants import VARIANTS, Variant, lookup


def setup(position: str, variant_id: str) -> tuple[Board, Side, Variant]:
    variant = lookup(variant_id)
    board, turn = decode_position(position, variant)
    return board, turn, variant


def notations(moves: list[Move], board: Board) -> set[str]:
    return {move.to_notation(board) for move in moves}


# --- SIMPLE MOVES ---
def test_opening_moves_international() -> None:
    """Only the front row (31-35) can move at the start: 9 moves in total."""
    variant = lookup("international")
    board = Board.starting(variant)
    moves = legal_moves(board, Side.FIRST, variant)
    assert len(moves) == 9
    assert "32-28" in notations(moves, board)
    assert not any(move.is_capture for move in moves)


@pytest.mark.parametrize("variant_id", [v for v in VARIANTS if not VARIANTS[v].orthogonal_movement])
def test_both_sides_have_opening_moves(variant_id: str) -> None:
    variant = lookup(variant_id)
    board = Board.starting(variant)
    assert has_legal_moves(board, Side.FIRST, variant)
    assert has_legal_moves(board, Side.SECOND, variant)


def test_man_moves_forward_only() -> None:
    board, _, variant = setup("W:W28:B1", "international")
    assert notations(simple_moves(board, board.square_from_serial(28), variant), board) == {"28-22", "28-23"}

    board, _, variant = setup("B:W50:B23", "international")
    assert notations(simple_moves(board, board.square_from_serial(23), variant), board) == {"23-28", "23-29"}


def test_non_flying_king_steps_once() -> None:
    board, _, variant = setup("W:W22:B1:K22", "american")
    assert notations(simple_moves(board, board.square_from_serial(22), variant), board) == {
        "22-17",
        "22-18",
        "22-25",
        "22-26",
    }


def test_flying_king_runs_until_blocked() -> None:
    """King in the corner on 46 sees the whole long diagonal."""
    board, _, variant = setup("W:W46:B1:K46", "international")
    moves = simple_moves(board, board.square_from_serial(46), variant)
    assert notations(moves, board) == {"46-41", "46-37", "46-32", "46-28", "46-23", "46-19", "46-14", "46-10", "46-5"}


def test_orthogonal_man_moves() -> None:
    board, _, variant = setup("W:W44:B1", "turkish")
    assert notations(simple_moves(board, board.square_from_serial(44), variant), board) == {
        "44-36",
        "44-43",
        "44-45",
    }


# --- MANDATORY CAPTURE ---
def test_forced_capture() -> None:
    """The man on 32 could step to 28, but capturing 27 is mandatory."""
    board, turn, variant = setup("W:W32:B27", "international")
    moves = legal_moves(board, turn, variant)
    assert len(moves) == 1
    assert moves[0].is_capture
    assert notations(moves, board) == {"32x21"}


def test_capture_restricts_every_piece() -> None:
    """The man on 45 can not move while 32 must capture."""
    board, turn, variant = setup("W:W32,45:B27", "international")
    assert moves_for_piece(board, board.square_from_serial(45), turn, variant) == []
    assert notations(moves_for_piece(board, board.square_from_serial(32), turn, variant), board) == {"32x21"}


def test_every_capturing_piece_may_be_chosen() -> None:
    board, turn, variant = setup("W:W32,34:B27,30", "international")
    assert notations(legal_moves(board, turn, variant), board) == {"32x21", "34x25"}


def test_captures_only() -> None:
    board, turn, variant = setup("W:W32:B1", "international")
    assert legal_moves(board, turn, variant, captures_only=True) == []
    assert len(legal_moves(board, turn, variant)) == 2


# --- LONGEST CAPTURE ---
def test_longest_capture_board_wide() -> None:
    """
    The man on 32 can take one piece (27), the man on 43 can take two (39 and 29).
    Under the longest-capture rule only the double capture is legal.
    """
    board, turn, variant = setup("W:W32,43:B27,39,29", "international")
    moves = legal_moves(board, turn, variant)
    assert notations(moves, board) == {"43x34x23"}
    assert max_capture_length(all_captures(board, turn, variant)) == 2


def test_shorter_captures_allowed_without_longest_rule() -> None:
    board, turn, variant = setup("W:W22:B17,18,11", "american")
    moves = legal_moves(board, turn, variant)
    assert notations(moves, board) == {"22x13", "22x15x8"}
    assert {move.length for move in moves} == {1, 2}


def test_longest_capture_property_holds_for_every_returned_move() -> None:
    board, turn, variant = setup("W:W46,32:B7,17,37,27:K46", "international")
    moves = legal_moves(board, turn, variant)
    longest = max_capture_length(all_captures(board, turn, variant))
    assert moves
    assert all(move.length == longest for move in moves)


# --- SIDE TO MOVE ---
def test_pieces_of_side_not_to_move_have_no_moves() -> None:
    board, turn, variant = setup("W:W32:B1", "international")
    assert moves_for_piece(board, board.square_from_serial(1), turn, variant) == []
    assert moves_for_piece(board, board.square_from_serial(20), turn, variant) == []


def test_no_moves_when_blocked() -> None:
    """White man on 5 (american) is stuck behind a black man on 1 at the edge."""
    board, turn, variant = setup("W:W5:B1", "american")
    assert legal_moves(board, turn, variant) == []
    assert not has_legal_moves(board, turn, variant)
