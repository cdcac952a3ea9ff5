"""Errors raised by the trainer engine."""


class TrainerError(Exception):
    """Base class for all trainer errors."""


class EmptyDeckError(TrainerError, IndexError):
    """Raised when dealing from a deck with no cards left."""


class InvalidCardError(TrainerError, ValueError):
    """Raised when a card string cannot be parsed."""


class InvalidSituationError(TrainerError, LookupError):
    """Raised when a hand has no entry in the strategy table."""
