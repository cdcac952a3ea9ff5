"""Pytest fixtures for basic strategy trainer tests."""

from random import Random

import pytest

from trainer.cards import Card, Deck
from trainer.hand import Hand
from trainer.game import TrainingSession
from trainer.rules import RuleSet
from trainer.strategy import BasicStrategy


class StackedDeck(Deck):
    """A deck that puts chosen cards on top after every reshuffle."""

    def __init__(self, top: list[Card]) -> None:
        self._top = list(top)
        super().__init__(rng=Random(0))

    def shuffle(self) -> None:
        rest = [card for card in self._cards if card not in self._top]
        self._cards = self._top + rest


def build_hand(*codes: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand(Card.from_string(code) for code in codes)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def make_hand():
    """Factory for hands built from card strings."""
    return build_hand


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return build_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return build_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return build_hand("10S", "6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return build_hand("8S", "8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return build_hand("10S", "6H", "KC")


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def basic_strategy():
    """Basic strategy tables."""
    return BasicStrategy()


@pytest.fixture
def session(rng, rules):
    """A new training session with a seeded deck."""
    return TrainingSession(rules=rules, rng=rng)


@pytest.fixture
def stacked_session():
    """
    Factory for sessions whose deck deals the given cards first.

    Deal order is player, player, dealer upcard, dealer hole card,
    then any hits.
    """

    def _make(*codes: str, rules: RuleSet | None = None) -> TrainingSession:
        s = TrainingSession(rules=rules or RuleSet(), rng=Random(0))
        s.deck = StackedDeck([Card.from_string(code) for code in codes])
        return s

    return _make

