"""
Capture search
-----

Depth-first search over the capture chains a single piece can make.

Key ideas:

* The moving piece is lifted off its origin square for the duration of the search (and put back afterwards),
  so a chain may pass over the square it started from. Landing there again is not allowed.
* Captured pieces stay on the board until the move is executed: they block landings and can not be jumped a second time.
* A chain never lands twice on the same square, and never takes the same piece twice. Together with the finite amount of
  pieces this bounds the recursion.
* Under a longest-capture variant only the longest extensions are kept at every branch point,
  otherwise every terminal chain is returned.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from src.core.shared_types import Side
from src.draughts.board import Board
from src.draughts.moves import Capture, Move
from src.draughts.pieces import Piece
from src.draughts.square import Square, Vector
from src.draughts.variants import Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chain:
    """Partial (or terminal) capture chain: where the piece landed and what it took on the way"""

    path: tuple[Square, ...]
    captured: tuple[Capture, ...]

    @property
    def length(self) -> int:
        return len(self.captured)

    def extend(self, landing: Square, capture: Capture) -> "Chain":
        return Chain(self.path + (landing,), self.captured + (capture,))

    def takes(self, square: Square) -> bool:
        return any(capture.square == square for capture in self.captured)


Jump = tuple[Square, Capture]


def find_captures(board: Board, square: Square, variant: Variant) -> list[Move]:
    """
    Every maximal capture chain for the piece standing on `square`.

    Returns an empty list if the square is empty or no capture is available.
    NOTE: the board is temporarily modified, but restored before returning.
    """
    piece = board.piece(square)
    if piece is None:
        return []

    # lift the moving piece: its origin square counts as empty while it travels
    del board.position[square]
    try:
        chains = _search(
            board,
            current=square,
            piece=piece,
            variant=variant,
            chain=Chain(path=(), captured=()),
            visited=frozenset({square}),
        )
    finally:
        board.position[square] = piece

    if chains:
        logger.debug(
            "%d capture chain(s) from %s, longest takes %d",
            len(chains),
            square,
            max(chain.length for chain in chains),
        )
    return [
        Move(
            from_square=square,
            to_square=chain.path[-1],
            captured=chain.captured,
            path=chain.path,
        )
        for chain in chains
    ]


def _search(
    board: Board,
    current: Square,
    piece: Piece,
    variant: Variant,
    chain: Chain,
    visited: frozenset[Square],
) -> list[Chain]:
    """
    Recursive step: try every jump available from `current`.

    A jump without any continuation is a terminal chain. Returns an empty list when no jump is available at all.
    """
    jumps = (
        _king_jumps(board, current, piece.side, variant, chain, visited)
        if piece.is_king
        else _man_jumps(board, current, piece.side, variant, chain, visited)
    )

    chains: list[Chain] = []
    for landing, capture in jumps:
        extended = chain.extend(landing, capture)
        continuations = _search(
            board, landing, piece, variant, extended, visited | {landing}
        )
        chains.extend(continuations or [extended])

    if variant.longest_capture and chains:
        longest = max(found.length for found in chains)
        chains = [found for found in chains if found.length == longest]
    return chains


def _capturable(
    board: Board, square: Square, side: Side, chain: Chain
) -> Optional[Piece]:
    """The enemy piece on the square, if it may still be taken in this chain"""
    target = board.piece(square)
    if target is None or target.side == side or chain.takes(square):
        return None
    return target


def _man_jumps(
    board: Board,
    current: Square,
    side: Side,
    variant: Variant,
    chain: Chain,
    visited: frozenset[Square],
) -> Iterator[Jump]:
    """A man jumps over an adjacent enemy onto the empty square directly behind it."""
    for direction in variant.man_capture_directions(side):
        over = current.offset(direction)
        landing = current.offset(direction, 2)
        if not board.is_playable(landing) or landing in visited:
            continue
        if not board.is_empty(landing):
            continue

        target = _capturable(board, over, side, chain)
        if target is not None:
            yield landing, Capture(over, target)


def _king_jumps(
    board: Board,
    current: Square,
    side: Side,
    variant: Variant,
    chain: Chain,
    visited: frozenset[Square],
) -> Iterator[Jump]:
    """
    Raycasting for kings.

    Look along each line until the first occupied square. If it holds an enemy that can be taken,
    every empty square behind it (up to the variant's landing limit) is a candidate landing.
    A non-flying king only captures an adjacent enemy and lands directly behind it.
    """
    for direction in variant.directions:
        found = _first_piece_along(board, current, direction, variant.flying_kings)
        if found is None:
            continue

        over, _ = found
        target = _capturable(board, over, side, chain)
        if target is None:
            continue

        for landing in _landings_behind(board, over, direction, variant.king_landing_limit()):
            if landing in visited:
                continue
            yield landing, Capture(over, target)


def _first_piece_along(
    board: Board, start: Square, direction: Vector, flying: bool
) -> Optional[tuple[Square, Piece]]:
    steps = 1
    while True:
        square = start.offset(direction, steps)
        if not board.is_playable(square):
            return None
        piece = board.piece(square)
        if piece is not None:
            return square, piece
        if not flying:
            return None
        steps += 1


def _landings_behind(
    board: Board, over: Square, direction: Vector, limit: int
) -> Iterator[Square]:
    """Consecutive empty squares behind the captured piece, stopping at the first obstacle or the edge"""
    for steps in range(1, limit + 1):
        landing = over.offset(direction, steps)
        if not board.is_playable(landing) or not board.is_empty(landing):
            return
        yield landing
