"""Basic strategy tables for blackjack."""

from typing import Iterable, Mapping

from trainer.actions import Action
from trainer.cards import Card, Rank
from trainer.exceptions import InvalidSituationError
from trainer.hand import Hand

# Dealer upcard columns, in table order
UPCARDS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "A")

# Pair rows, keyed by the rank of either card (face cards pair as "10")
PAIR_KEYS: tuple[str, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10")

HARD_TOTALS = range(5, 22)
SOFT_TOTALS = range(13, 22)

# Type aliases for clarity
DealerUpcard = str  # "2"-"10" or "A"
HandKey = tuple[str, int | str]  # ("hard", 16), ("soft", 17) or ("pair", "8")


def upcard_column(card: Card) -> DealerUpcard:
    """Return the table column for a dealer upcard."""
    if card.rank == Rank.ACE:
        return "A"
    if card.rank.is_face:
        return "10"
    return card.rank.value


def pair_key(card: Card) -> str:
    """Return the pair row for one card of a pair."""
    return upcard_column(card)


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Three fixed partitions (hard totals, soft totals, pairs), each keyed by
    (row, dealer upcard column). Tables are built once per instance.
    """

    def __init__(self) -> None:
        self._hard_table = self._build_hard_table()
        self._soft_table = self._build_soft_table()
        self._pair_table = self._build_pair_table()

    def classify(self, hand: Hand) -> HandKey:
        """
        Classify a hand for lookup.

        Pairs take priority over soft totals, which take priority over
        hard totals.
        """
        if hand.can_split:
            return ("pair", pair_key(hand.cards[0]))
        soft = hand.soft_total
        if soft is not None:
            return ("soft", soft)
        return ("hard", hand.hard_total)

    def get_action(
        self,
        hand: Hand,
        dealer_upcard: Card,
        allowed_actions: Iterable[Action] | None = None,
    ) -> Action:
        """
        Get the basic strategy action.

        Args:
            hand: Player's hand
            dealer_upcard: Dealer's face-up card
            allowed_actions: If given, a disallowed recommendation falls back
                to a legal action. If None, the raw table entry is returned.

        Returns:
            The recommended action

        Raises:
            InvalidSituationError: If the hand has no row in the table
        """
        column = upcard_column(dealer_upcard)
        kind, row = self.classify(hand)
        action = self._lookup(kind, row, column)

        if allowed_actions is None:
            return action

        allowed = set(allowed_actions)
        if action in allowed:
            return action
        return self._fallback(action, hand, column, allowed)

    def _lookup(self, kind: str, row: int | str, column: DealerUpcard) -> Action:
        tables = {
            "hard": self._hard_table,
            "soft": self._soft_table,
            "pair": self._pair_table,
        }
        try:
            return tables[kind][(row, column)]  # type: ignore[index]
        except KeyError:
            raise InvalidSituationError(
                f"No basic strategy entry for {kind} {row} vs {column}"
            ) from None

    def _fallback(
        self,
        action: Action,
        hand: Hand,
        column: DealerUpcard,
        allowed: set[Action],
    ) -> Action:
        """Resolve a disallowed recommendation to the next best legal action."""
        if action == Action.SPLIT:
            # Play the pair as an ordinary total; A,A and 2,2 sit below the table
            soft = hand.soft_total
            if soft is not None and soft in SOFT_TOTALS:
                action = self._lookup("soft", soft, column)
            elif hand.hard_total in HARD_TOTALS:
                action = self._lookup("hard", hand.hard_total, column)
            else:
                action = Action.HIT
            if action in allowed:
                return action

        if action == Action.DOUBLE:
            # Soft 18+ would rather stand than take a card
            soft = hand.soft_total
            action = Action.STAND if soft is not None and soft >= 18 else Action.HIT
            if action in allowed:
                return action

        return Action.STAND

    def _build_hard_table(self) -> Mapping[tuple[int, str], Action]:
        """Build hard totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE

        table: dict[tuple[int, str], Action] = {}

        # Hard 5-8: Always hit
        for total in range(5, 9):
            for dealer in UPCARDS:
                table[(total, dealer)] = H

        # Hard 9
        for dealer in UPCARDS:
            table[(9, dealer)] = D if dealer in ("3", "4", "5", "6") else H

        # Hard 10
        for dealer in UPCARDS:
            table[(10, dealer)] = H if dealer in ("10", "A") else D

        # Hard 11: Always double
        for dealer in UPCARDS:
            table[(11, dealer)] = D

        # Hard 12
        for dealer in UPCARDS:
            table[(12, dealer)] = S if dealer in ("4", "5", "6") else H

        # Hard 13-16
        for total in range(13, 17):
            for dealer in UPCARDS:
                table[(total, dealer)] = S if dealer in ("2", "3", "4", "5", "6") else H

        # Hard 17+: Always stand
        for total in range(17, 22):
            for dealer in UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_soft_table(self) -> Mapping[tuple[int, str], Action]:
        """Build soft totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE

        table: dict[tuple[int, str], Action] = {}

        # Soft 13-14 (A,2 / A,3)
        for total in (13, 14):
            for dealer in UPCARDS:
                table[(total, dealer)] = D if dealer in ("5", "6") else H

        # Soft 15-16 (A,4 / A,5)
        for total in (15, 16):
            for dealer in UPCARDS:
                table[(total, dealer)] = D if dealer in ("4", "5", "6") else H

        # Soft 17 (A,6)
        for dealer in UPCARDS:
            table[(17, dealer)] = D if dealer in ("3", "4", "5", "6") else H

        # Soft 18 (A,7)
        for dealer in ("2", "3", "4", "5", "6"):
            table[(18, dealer)] = D
        for dealer in ("7", "8"):
            table[(18, dealer)] = S
        for dealer in ("9", "10", "A"):
            table[(18, dealer)] = H

        # Soft 19 (A,8): Double vs 6 only
        for dealer in UPCARDS:
            table[(19, dealer)] = D if dealer == "6" else S

        # Soft 20-21: Always stand
        for total in (20, 21):
            for dealer in UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_pair_table(self) -> Mapping[tuple[str, str], Action]:
        """Build pair splitting strategy table."""
        H = Action.HIT
        S = Action.STAND
        P = Action.SPLIT
        D = Action.DOUBLE

        table: dict[tuple[str, str], Action] = {}

        # Pair of Aces: Split, except hit vs Ace
        for dealer in UPCARDS:
            table[("A", dealer)] = H if dealer == "A" else P

        # Pair of 2s, 3s and 7s: Split vs 2-7
        for pair in ("2", "3", "7"):
            for dealer in UPCARDS:
                table[(pair, dealer)] = P if dealer in UPCARDS[:6] else H

        # Pair of 4s: Split vs 5-6 only
        for dealer in UPCARDS:
            table[("4", dealer)] = P if dealer in ("5", "6") else H

        # Pair of 5s: Never split, play as hard 10
        for dealer in UPCARDS:
            table[("5", dealer)] = H if dealer in ("10", "A") else D

        # Pair of 6s: Split vs 2-6
        for dealer in UPCARDS:
            table[("6", dealer)] = P if dealer in UPCARDS[:5] else H

        # Pair of 8s: Always split
        for dealer in UPCARDS:
            table[("8", dealer)] = P

        # Pair of 9s: Stand vs 7, 10, A
        for dealer in UPCARDS:
            table[("9", dealer)] = S if dealer in ("7", "10", "A") else P

        # Pair of 10s: Never split
        for dealer in UPCARDS:
            table[("10", dealer)] = S

        return table

    @property
    def hard_table(self) -> Mapping[tuple[int, str], Action]:
        """Return the hard totals strategy table."""
        return self._hard_table

    @property
    def soft_table(self) -> Mapping[tuple[int, str], Action]:
        """Return the soft totals strategy table."""
        return self._soft_table

    @property
    def pair_table(self) -> Mapping[tuple[str, str], Action]:
        """Return the pair splitting strategy table."""
        return self._pair_table


_default_strategy = BasicStrategy()


def recommend_action(
    player_hand: Hand,
    dealer_upcard: Card,
    allowed_actions: Iterable[Action] | None = None,
) -> Action:
    """Return the basic strategy action for a hand against a dealer upcard."""
    return _default_strategy.get_action(player_hand, dealer_upcard, allowed_actions)


def is_basic_strategy_correct(player_action: Action, recommended_action: Action) -> bool:
    """Check whether the player's action matches the recommendation."""
    return player_action == recommended_action
