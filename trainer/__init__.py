"""Basic strategy trainer engine - 100% UI-agnostic."""

from trainer.cards import Card, Deck, Rank, Suit
from trainer.exceptions import (
    EmptyDeckError,
    InvalidCardError,
    InvalidSituationError,
    TrainerError,
)
from trainer.hand import Hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "TrainerError",
    "EmptyDeckError",
    "InvalidCardError",
    "InvalidSituationError",
]
