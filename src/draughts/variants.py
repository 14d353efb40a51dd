"""
Rule-sets for the supported draughts variants.

The table is read-only configuration: one frozen `Variant` per id, consulted by the
move generator at a handful of well-defined decision points.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import UnknownVariantError
from src.core.shared_types import Side
from src.draughts.square import Vector

DIAGONALS: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
STRAIGHTS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Variant:
    id: str
    name: str
    board_size: int
    flying_kings: bool
    mandatory_capture: bool
    capture_backwards: bool
    longest_capture: bool
    promotion_rank: str = "opposite"
    orthogonal_movement: bool = False
    king_capture_limit: Optional[int] = None

    # --- decision points ---
    @property
    def directions(self) -> tuple[Vector, ...]:
        """Lines along which pieces move and capture"""
        return STRAIGHTS if self.orthogonal_movement else DIAGONALS

    def forward(self, side: Side) -> int:
        """Row delta pointing towards the side's promotion row. FIRST starts at the bottom."""
        return -1 if side == Side.FIRST else 1

    def man_step_directions(self, side: Side) -> list[Vector]:
        """A man steps forward diagonally, or forward and sideways in orthogonal variants."""
        forward = self.forward(side)
        if self.orthogonal_movement:
            return [(forward, 0), (0, 1), (0, -1)]
        return [(forward, 1), (forward, -1)]

    def man_capture_directions(self, side: Side) -> list[Vector]:
        if self.capture_backwards:
            return list(self.directions)
        backward = -self.forward(side)
        return [(dr, dc) for dr, dc in self.directions if dr != backward]

    def king_landing_limit(self) -> int:
        """How many empty squares behind a captured piece a king may land on."""
        if not self.flying_kings:
            return 1
        return self.king_capture_limit or self.board_size

    def king_step_limit(self) -> int:
        return self.board_size if self.flying_kings else 1

    def promotion_row(self, side: Side) -> int:
        """'opposite': the far edge as seen from the side's own home rows."""
        return 0 if side == Side.FIRST else self.board_size - 1

    @property
    def max_serial(self) -> int:
        """Amount of playable squares (numbered 1..max_serial)"""
        if self.orthogonal_movement:
            return self.board_size * self.board_size
        return (self.board_size * self.board_size) // 2

    @property
    def max_pieces_per_side(self) -> int:
        return (self.board_size * self.board_size) // 4

    @property
    def home_rows(self) -> int:
        """Rows filled with men at the start (diagonal variants)"""
        if self.board_size == 8:
            return 3
        if self.board_size in (10, 12):
            return 4
        return self.board_size // 2 - 1


VARIANTS: dict[str, Variant] = {
    "international": Variant(
        id="international",
        name="International/Polish",
        board_size=10,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=True,
        longest_capture=True,
    ),
    "american": Variant(
        id="american",
        name="American/English",
        board_size=8,
        flying_kings=False,
        mandatory_capture=True,
        capture_backwards=False,
        longest_capture=False,
    ),
    "russian": Variant(
        id="russian",
        name="Russian",
        board_size=8,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=True,
        longest_capture=True,
    ),
    "spanish": Variant(
        id="spanish",
        name="Spanish",
        board_size=8,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=False,
        longest_capture=True,
    ),
    "italian": Variant(
        id="italian",
        name="Italian",
        board_size=8,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=False,
        longest_capture=True,
        king_capture_limit=1,
    ),
    "brazilian": Variant(
        id="brazilian",
        name="Brazilian/Canadian",
        board_size=12,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=True,
        longest_capture=True,
    ),
    "turkish": Variant(
        id="turkish",
        name="Turkish",
        board_size=8,
        flying_kings=True,
        mandatory_capture=True,
        capture_backwards=True,
        longest_capture=False,
        orthogonal_movement=True,
    ),
}

AVAILABLE_VARIANTS: tuple[str, ...] = tuple(VARIANTS)


def lookup(variant_id: str) -> Variant:
    try:
        return VARIANTS[variant_id]
    except KeyError:
        raise UnknownVariantError(
            f"Unknown variant {variant_id!r}. Pick one from {', '.join(AVAILABLE_VARIANTS)}"
        ) from None
