"""Player actions and the rules for when each one is allowed."""

from enum import Enum

from trainer.hand import Hand


class Action(Enum):
    """Possible player actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value


def can_hit(hand: Hand) -> bool:
    """A hand can take a card until it reaches 21, busts or is a natural."""
    return not hand.is_busted and not hand.is_blackjack and hand.best_total < 21


def can_stand(hand: Hand) -> bool:
    """Standing is always allowed."""
    return True


def can_double(hand: Hand) -> bool:
    """Doubling is only allowed as the first decision on a live hand."""
    return hand.card_count == 2 and not hand.is_busted and not hand.is_blackjack


def can_split(hand: Hand) -> bool:
    return hand.card_count == 2 and hand.can_split


def get_allowed_actions(hand: Hand) -> list[Action]:
    """
    Return the legal actions for a hand.

    Order is always hit, stand, double, split; stand is always present.
    """
    checks = (
        (Action.HIT, can_hit),
        (Action.STAND, can_stand),
        (Action.DOUBLE, can_double),
        (Action.SPLIT, can_split),
    )
    return [action for action, allowed in checks if allowed(hand)]
