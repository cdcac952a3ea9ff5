"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterator

from trainer.exceptions import EmptyDeckError, InvalidCardError


class Suit(Enum):
    """Card suits, in canonical deck order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, in canonical deck order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the point value (Ace = 1, face cards = 10)."""
        if self == Rank.ACE:
            return 1
        if self.is_face:
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


_RANK_ALIASES = {rank.value: rank for rank in Rank}
_RANK_ALIASES["T"] = Rank.TEN

_SUIT_ALIASES = {
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the point value with Aces counted as 1."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_face_card(self) -> bool:
        return self.rank.is_face

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10♦' or 'kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise InvalidCardError(f"Invalid card string: {s!r}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_ALIASES:
            raise InvalidCardError(f"Invalid rank: {rank_str!r}")
        if suit_str not in _SUIT_ALIASES:
            raise InvalidCardError(f"Invalid suit: {suit_str!r}")

        return cls(_RANK_ALIASES[rank_str], _SUIT_ALIASES[suit_str])


class Deck:
    """
    A single 52-card deck dealt from the front.

    The deck is rebuilt and reshuffled before every hand, so it never runs
    out during normal play.
    """

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reshuffle()

    def reset(self) -> None:
        """Rebuild all 52 cards in (suit, rank) order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        for i in range(len(self._cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            self._cards[i], self._cards[j] = self._cards[j], self._cards[i]

    def reshuffle(self) -> None:
        """Restore the full deck and shuffle it."""
        self.reset()
        self.shuffle()

    def deal(self) -> Card:
        """Remove and return the front card."""
        if not self._cards:
            raise EmptyDeckError("Cannot deal from an empty deck")
        return self._cards.pop(0)

    @property
    def remaining_count(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
