"""Hand evaluation for blackjack."""

from typing import Iterable, Iterator

from trainer.cards import Card


class Hand:
    """
    An append-only blackjack hand.

    Aces are counted as 1 in the hard total. At most one Ace can ever be
    promoted to 11 without busting, so the soft total is simply the hard
    total plus 10 when that stays at or under 21.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    def add_card(self, card: Card) -> None:
        """Add a card to the end of the hand."""
        self._cards.append(card)

    @property
    def cards(self) -> tuple[Card, ...]:
        """Return the cards in the order they were dealt."""
        return tuple(self._cards)

    @property
    def hard_total(self) -> int:
        """Sum of card values with every Ace counted as 1."""
        return sum(card.value for card in self._cards)

    @property
    def soft_total(self) -> int | None:
        """
        Total with one Ace counted as 11.

        Returns None if the hand has no Ace, or if promoting an Ace would
        take the hand over 21.
        """
        if not any(card.is_ace for card in self._cards):
            return None
        total = self.hard_total + 10
        if total > 21:
            return None
        return total

    @property
    def best_total(self) -> int:
        """The soft total when defined, otherwise the hard total."""
        soft = self.soft_total
        return soft if soft is not None else self.hard_total

    @property
    def is_soft(self) -> bool:
        return self.soft_total is not None

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with exactly two cards)."""
        return len(self._cards) == 2 and self.best_total == 21

    @property
    def is_busted(self) -> bool:
        return self.best_total > 21

    @property
    def can_split(self) -> bool:
        """Check if the hand is two cards of the same rank."""
        return (
            len(self._cards) == 2
            and self._cards[0].rank == self._cards[1].rank
        )

    @property
    def card_count(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self._cards)
        value_str = f"({self.best_total})"
        if self.is_soft:
            value_str = f"(soft {self.best_total})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self._cards!r}, value={self.best_total})"
