"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the full game state (board, side to move, history and draw tracking) and is responsible for
resolving a requested move against the legal move set, executing it, and undoing it again.
"""

import logging
from dataclasses import dataclass, field
from typing import NoReturn, Optional, Self

from src.core.config import (
    DEFAULT_VARIANT,
    FIFTY_MOVE_LIMIT,
    POSITION_HISTORY_LIMIT,
    REPETITION_THRESHOLD,
)
from src.core.exceptions import (
    AmbiguousMoveError,
    IllegalMoveError,
    PositionValidationError,
)
from src.core.shared_types import Side, Status
from src.draughts.board import Board, SquareInput
from src.draughts.draw import (
    DrawInfo,
    is_draw_by_fifty_move_rule,
    is_draw_by_insufficient_material,
    is_draw_by_repetition,
)
from src.draughts.fen import (
    FENValidation,
    PositionState,
    encode_position,
    validate_extended_position,
)
from src.draughts.generator import all_captures, legal_moves, moves_for_piece
from src.draughts.moves import Move, MoveNotation
from src.draughts.pieces import Piece
from src.draughts.variants import Variant, lookup

logger = logging.getLogger(__name__)

MoveRequest = str | Move | tuple[SquareInput, SquareInput]


@dataclass(frozen=True)
class MoveRecord:
    """
    An executed move, with everything needed to take it back.

    `piece` is the piece as it stood on the origin square (so a promotion is reverted on undo).
    """

    move: Move
    side: Side
    piece: Piece
    notation: str
    promotion: bool
    draw_info: DrawInfo
    halfmove_clock_before: int
    fullmove_number_before: int

    @property
    def is_capture(self) -> bool:
        return self.move.is_capture


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    variant: Variant
    board: Board
    turn: Side = Side.FIRST
    history: list[MoveRecord] = field(default_factory=list)
    position_history: list[str] = field(default_factory=list)
    halfmove_clock: int = 0
    fullmove_number: int = 1
    # where the current move history starts from (extended position string)
    starting_position: str = ""

    def __post_init__(self) -> None:
        if not self.position_history:
            self.position_history = [self.board.position_key()]
        if not self.starting_position:
            self.starting_position = self.to_position(with_counters=True)

    @classmethod
    def new(cls, variant_id: str = DEFAULT_VARIANT) -> Self:
        variant = lookup(variant_id)
        return cls(variant=variant, board=Board.starting(variant))

    @classmethod
    def from_position(cls, fen: str, variant_id: str = DEFAULT_VARIANT) -> Self:
        """Start from an arbitrary position. Accepts both the plain and the extended (with counters) form."""
        variant = lookup(variant_id)
        state = PositionState.from_fen(fen, variant)
        return cls(
            variant=variant,
            board=state.board,
            turn=state.turn,
            halfmove_clock=state.halfmove_clock,
            fullmove_number=state.fullmove_number,
        )

    @classmethod
    def replay(cls, variant_id: str, starting_position: str, moves: list[str]) -> Self:
        """Rebuild a game by replaying its moves, which restores the undo history as well."""
        game = cls.from_position(starting_position, variant_id)
        for notation in moves:
            game.apply_move(notation)
        return game

    # --- GAME CONTROL ---
    def reset(self, variant_id: Optional[str] = None) -> None:
        """
        Back to the starting position, optionally switching variant.

        Switching is never partial: an unknown variant raises before anything changes.
        """
        variant = lookup(variant_id) if variant_id is not None else self.variant
        self.variant = variant
        self.board = Board.starting(variant)
        self.turn = Side.FIRST
        self.history = []
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.position_history = [self.board.position_key()]
        self.starting_position = self.to_position(with_counters=True)
        logger.info("Game reset to the starting position of variant %s", variant.id)

    def validate(self, fen: str) -> FENValidation:
        """Check a position string (with or without move counters) against the current variant without loading it"""
        return validate_extended_position(fen, self.variant)

    def load(self, fen: str) -> FENValidation:
        """
        Replace the position.
        ----

        Validates completely before touching any state, then swaps the board, side to move and draw tracking at once.
        The move history is cleared: the loaded position becomes the new starting position.
        """
        validation = self.validate(fen)
        if not validation.valid:
            raise PositionValidationError(validation.errors)
        state = PositionState.from_fen(fen, self.variant)

        self.board = state.board
        self.turn = state.turn
        self.halfmove_clock = state.halfmove_clock
        self.fullmove_number = state.fullmove_number
        self.history = []
        self.position_history = [self.board.position_key()]
        self.starting_position = state.to_fen()
        logger.info("Loaded position %s", self.starting_position)
        return validation

    def to_position(self, with_counters: bool = False) -> str:
        if with_counters:
            return PositionState(
                self.board, self.turn, self.halfmove_clock, self.fullmove_number
            ).to_fen()
        return encode_position(self.board, self.turn)

    # --- MOVES ---
    def legal_moves(self, captures_only: bool = False) -> list[Move]:
        return legal_moves(self.board, self.turn, self.variant, captures_only)

    def legal_moves_for(self, square: SquareInput) -> list[Move]:
        """Legal moves of the piece on one square. Empty for an empty square or a piece of the side not to move."""
        return moves_for_piece(self.board, self.board.parse_square(square), self.turn, self.variant)

    def legal_notations(self, captures_only: bool = False) -> list[str]:
        return [move.to_notation(self.board) for move in self.legal_moves(captures_only)]

    def resolve_move(self, request: MoveRequest) -> Move:
        """
        Find the legal move matching the request.
        ----

        * a Move object must be one of the legal moves
        * a (from, to) pair matches on origin and destination
        * notation: '-' only matches simple moves, 'x' only captures. When intermediate landing squares are given,
          the whole path must match.

        Several chains from the same origin to the same destination are only accepted if they take the same pieces.
        """
        candidates = self.legal_moves()

        if isinstance(request, Move):
            if request not in candidates:
                self._reject(f"Move not allowed: {request.to_notation(self.board)}")
            return request

        if isinstance(request, tuple):
            origin, destination = (self.board.parse_square(value) for value in request)
            matches = [
                move
                for move in candidates
                if move.from_square == origin and move.to_square == destination
            ]
            return self._single_match(matches, f"{request[0]}-{request[1]}")

        notation = MoveNotation.parse(request)
        origin = self.board.square_from_serial(notation.from_serial)
        destination = self.board.square_from_serial(notation.to_serial)
        matches = [
            move
            for move in candidates
            if move.from_square == origin
            and move.to_square == destination
            and move.is_capture == notation.is_capture
        ]
        if notation.chain_serials:
            chain = tuple(self.board.square_from_serial(serial) for serial in notation.chain_serials)
            matches = [move for move in matches if move.chain_squares == chain]
        return self._single_match(matches, request)

    def _single_match(self, matches: list[Move], requested: str) -> Move:
        if not matches:
            self._reject(f"Move not allowed: {requested}")
        if len({move.captured_squares for move in matches}) > 1:
            options = ", ".join(move.to_notation(self.board) for move in matches)
            logger.warning("Ambiguous move %s, candidates: %s", requested, options)
            raise AmbiguousMoveError(
                f"Move {requested} is ambiguous. Specify the landing squares: {options}"
            )
        return matches[0]

    def _reject(self, message: str) -> NoReturn:
        logger.warning(message)
        raise IllegalMoveError(message)

    def apply_move(self, request: MoveRequest) -> MoveRecord:
        """
        Execute a move
        -----

        1. resolve the request against the legal moves (nothing changes if that fails)
        2. remove every captured piece, then relocate the moving piece
        3. promote a man that ends its move on its promotion row (the destination only, never mid-chain)
        4. update the counters, the side to move and the position history
        5. store the move record
        """
        move = self.resolve_move(request)
        notation = move.to_notation(self.board)
        side = self.turn
        piece = self.board.position[move.from_square]
        halfmove_clock_before = self.halfmove_clock
        fullmove_number_before = self.fullmove_number

        # update the board
        for capture in move.captured:
            del self.board.position[capture.square]
        del self.board.position[move.from_square]
        promotion = (not piece.is_king) and (
            move.to_square.row == self.variant.promotion_row(piece.side)
        )
        self.board.position[move.to_square] = piece.promoted() if promotion else piece

        # move counters: only king moves without capture count towards the fifty-move rule
        if move.is_capture or not piece.is_king:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if side == Side.SECOND:
            self.fullmove_number += 1
        self.turn = side.opponent

        self._update_position_history()

        record = MoveRecord(
            move=move,
            side=side,
            piece=piece,
            notation=notation,
            promotion=promotion,
            draw_info=self.draw_info(),
            halfmove_clock_before=halfmove_clock_before,
            fullmove_number_before=fullmove_number_before,
        )
        self.history.append(record)
        logger.info(
            "%s played %s%s", side, notation, " (promotion)" if promotion else ""
        )
        return record

    def undo(self) -> Optional[MoveRecord]:
        """Take back the last move. Returns None when there is nothing to undo."""
        if not self.history:
            return None

        record = self.history.pop()
        move = record.move
        del self.board.position[move.to_square]
        self.board.position[move.from_square] = record.piece
        for capture in move.captured:
            self.board.position[capture.square] = capture.piece

        self.turn = record.side
        self.halfmove_clock = record.halfmove_clock_before
        self.fullmove_number = record.fullmove_number_before
        if self.position_history:
            self.position_history.pop()
        if not self.position_history:
            # undone past the retained window: the current position still counts
            self.position_history = [self.board.position_key()]
        logger.info("Took back %s", record.notation)
        return record

    def history_notation(self) -> list[str]:
        return [record.notation for record in self.history]

    def _update_position_history(self) -> None:
        self.position_history.append(self.board.position_key())
        if len(self.position_history) > POSITION_HISTORY_LIMIT:
            self.position_history = self.position_history[-POSITION_HISTORY_LIMIT:]

    # --- DRAWS ---
    def position_key(self) -> str:
        return self.board.position_key()

    def is_draw_by_repetition(self, threshold: int = REPETITION_THRESHOLD) -> bool:
        return is_draw_by_repetition(self.position_history, self.position_key(), threshold)

    def is_draw_by_fifty_move_rule(self, limit: int = FIFTY_MOVE_LIMIT) -> bool:
        return is_draw_by_fifty_move_rule(self.halfmove_clock, limit)

    def is_draw_by_insufficient_material(self) -> bool:
        return is_draw_by_insufficient_material(self.board)

    def is_draw(self) -> bool:
        return self.draw_info().is_draw

    def draw_info(self) -> DrawInfo:
        return DrawInfo.evaluate(self.board, self.position_history, self.halfmove_clock)

    # --- END OF GAME ---
    def has_legal_moves(self) -> bool:
        return bool(self.legal_moves())

    def game_over(self) -> bool:
        return not self.has_legal_moves() or self.is_draw()

    def is_stalemate(self) -> bool:
        """Blocked: no legal moves, and the opponent is not threatening to capture anything"""
        return not self.has_legal_moves() and not self._is_under_threat()

    def is_checkmate(self) -> bool:
        """No legal moves while the opponent has captures lined up (or no pieces left at all)"""
        return not self.has_legal_moves() and self._is_under_threat()

    def _is_under_threat(self) -> bool:
        if self.board.count(self.turn) == 0:
            return True
        return bool(all_captures(self.board, self.turn.opponent, self.variant))

    def status(self) -> Status:
        """Draws take precedence, then a blocked side to move, otherwise the game goes on."""
        draw = self.draw_info()
        if draw.by_repetition:
            return Status.DRAW_REPETITION
        if draw.by_fifty_move_rule:
            return Status.DRAW_FIFTY_MOVES
        if draw.by_insufficient_material:
            return Status.DRAW_INSUFFICIENT_MATERIAL
        if not self.has_legal_moves():
            return Status.CHECKMATE if self._is_under_threat() else Status.STALEMATE
        return Status.PLAYING

    @property
    def winner(self) -> Optional[Side]:
        """A side that can not move loses, whether it got blocked or mated."""
        if self.status() in (Status.CHECKMATE, Status.STALEMATE):
            return self.turn.opponent
        return None
