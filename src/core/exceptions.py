"""
Custom exceptions shared by every layer.

All of them are recoverable: the domain leaves its state untouched before raising.
"""


class GameError(Exception):
    """Top-level exception for anything the draughts application rejects."""


class InvalidSquareError(GameError):
    """Coordinates out of range, an unknown serial number, or a square off the playable lattice."""


class IllegalMoveError(GameError):
    """Move is not in the generated set of legal moves."""


class AmbiguousMoveError(IllegalMoveError):
    """Notation matches more than one legal capture chain."""


class MalformedNotationError(GameError):
    """Move notation cannot be parsed."""


class PositionValidationError(GameError):
    """Position string failed its structural checks. Carries one message per violation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NothingToUndoError(GameError):
    pass


class UnknownVariantError(GameError):
    pass


class GameStateError(GameError):
    """Requested action does not fit the current status of the game."""


class NotYourTurnError(GameError):
    pass


class InvalidRequestError(GameError):
    """Raised by the request models when the payload cannot be interpreted."""


class RepositoryError(GameError):
    pass
