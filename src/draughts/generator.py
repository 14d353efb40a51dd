"""
Move generation
-----

Combines the capture search with simple (non-capturing) moves and applies the variant's arbitration rules:

1. Search capture chains for every piece of the side to move.
2. Mandatory capture: if any piece can capture, only captures are legal (of every piece that can capture).
3. Longest capture: only chains taking the board-wide maximum amount of pieces are legal.
4. Without captures: men step forward, kings run over empty squares (a single step unless kings fly).
"""

import logging

from src.core.shared_types import Side
from src.draughts.board import Board
from src.draughts.captures import find_captures
from src.draughts.moves import Move
from src.draughts.square import Square
from src.draughts.variants import Variant

logger = logging.getLogger(__name__)


def simple_moves(board: Board, square: Square, variant: Variant) -> list[Move]:
    """Non-capturing moves of the piece on `square`"""
    piece = board.piece(square)
    if piece is None:
        return []

    if piece.is_king:
        directions = list(variant.directions)
        max_steps = variant.king_step_limit()
    else:
        directions = variant.man_step_directions(piece.side)
        max_steps = 1

    moves: list[Move] = []
    for direction in directions:
        for steps in range(1, max_steps + 1):
            target = square.offset(direction, steps)
            if not board.is_playable(target) or not board.is_empty(target):
                break
            moves.append(Move(from_square=square, to_square=target))
    return moves


def all_captures(board: Board, side: Side, variant: Variant) -> list[Move]:
    """Every capture chain of every piece of `side`, before any arbitration"""
    captures: list[Move] = []
    for square, _ in list(board.pieces(side)):
        captures.extend(find_captures(board, square, variant))
    return captures


def max_capture_length(captures: list[Move]) -> int:
    return max((move.length for move in captures), default=0)


def _arbitrate_captures(captures: list[Move], variant: Variant) -> list[Move]:
    """Longest-capture rule: keep only the chains with the board-wide maximum length."""
    if not variant.longest_capture:
        return captures
    longest = max_capture_length(captures)
    return [move for move in captures if move.length == longest]


def legal_moves(
    board: Board, side: Side, variant: Variant, captures_only: bool = False
) -> list[Move]:
    """
    The set of legal moves for the side to move.
    ----

    NOTE: the caller decides whose turn it is. Pass the side to move, the opponent's pieces never generate moves.
    """
    captures = _arbitrate_captures(all_captures(board, side, variant), variant)

    if captures and variant.mandatory_capture:
        logger.debug(
            "%s must capture: %d legal chain(s) of length %d",
            side,
            len(captures),
            max_capture_length(captures),
        )
        return captures

    if captures_only:
        return captures

    moves = list(captures)
    for square, _ in board.pieces(side):
        moves.extend(simple_moves(board, square, variant))
    return moves


def moves_for_piece(
    board: Board, square: Square, side: Side, variant: Variant
) -> list[Move]:
    """
    Legal moves of a single piece.

    Derived from the full legal move set, so the mandatory/longest capture rules of the whole board apply:
    a piece that can not capture has no moves while another piece is forced to capture.
    """
    piece = board.piece(square)
    if piece is None or piece.side != side:
        return []
    return [move for move in legal_moves(board, side, variant) if move.from_square == square]


def has_legal_moves(board: Board, side: Side, variant: Variant) -> bool:
    return bool(legal_moves(board, side, variant))
