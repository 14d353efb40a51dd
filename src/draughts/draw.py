"""
Draw rules
----

* repetition: the same position key occurs `threshold` times (the current position included)
* fifty-move rule: `limit` consecutive half-moves made by kings without a capture
* insufficient material: a lone king against a lone king, or a single king against nothing at all
"""

from dataclasses import dataclass
from typing import Self

from src.core.config import FIFTY_MOVE_LIMIT, REPETITION_THRESHOLD
from src.core.shared_types import PieceKind, Side
from src.draughts.board import Board


def is_draw_by_repetition(
    position_history: list[str],
    current_key: str,
    threshold: int = REPETITION_THRESHOLD,
) -> bool:
    if len(position_history) < threshold:
        return False
    return position_history.count(current_key) >= threshold


def is_draw_by_fifty_move_rule(halfmove_clock: int, limit: int = FIFTY_MOVE_LIMIT) -> bool:
    return halfmove_clock >= limit


def is_draw_by_insufficient_material(board: Board) -> bool:
    counts = {
        side: {kind: board.count(side, kind) for kind in PieceKind} for side in Side
    }
    total = sum(sum(per_kind.values()) for per_kind in counts.values())

    # one king each
    if total == 2 and all(counts[side][PieceKind.KING] == 1 for side in Side):
        return True

    # a single king against an empty side
    for side in Side:
        opponent_total = sum(counts[side.opponent].values())
        if counts[side][PieceKind.KING] == 1 and opponent_total == 0:
            return True
    return False


@dataclass(frozen=True)
class DrawInfo:
    """Snapshot of the draw predicates for one position"""

    by_repetition: bool = False
    by_fifty_move_rule: bool = False
    by_insufficient_material: bool = False

    @property
    def is_draw(self) -> bool:
        return self.by_repetition or self.by_fifty_move_rule or self.by_insufficient_material

    @classmethod
    def evaluate(
        cls,
        board: Board,
        position_history: list[str],
        halfmove_clock: int,
        repetition_threshold: int = REPETITION_THRESHOLD,
        fifty_move_limit: int = FIFTY_MOVE_LIMIT,
    ) -> Self:
        return cls(
            by_repetition=is_draw_by_repetition(
                position_history, board.position_key(), repetition_threshold
            ),
            by_fifty_move_rule=is_draw_by_fifty_move_rule(halfmove_clock, fifty_move_limit),
            by_insufficient_material=is_draw_by_insufficient_material(board),
        )
