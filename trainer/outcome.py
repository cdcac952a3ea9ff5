"""Hand outcome resolution and flat scoring."""

from enum import Enum

from trainer.hand import Hand

DEFAULT_POINTS = 10


class HandResult(Enum):
    """Verdict for a finished hand."""

    PLAYER_WIN = "player_win"
    DEALER_WIN = "dealer_win"
    PUSH = "push"
    PLAYER_BLACKJACK = "player_blackjack"
    DEALER_BLACKJACK = "dealer_blackjack"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def player_won(self) -> bool:
        return self in (HandResult.PLAYER_WIN, HandResult.PLAYER_BLACKJACK)

    @property
    def dealer_won(self) -> bool:
        return self in (HandResult.DEALER_WIN, HandResult.DEALER_BLACKJACK)


def resolve_hand(player_hand: Hand, dealer_hand: Hand) -> HandResult:
    """
    Compare finished player and dealer hands.

    A player bust loses even if the dealer also busts. Two naturals push.
    """
    if player_hand.is_busted:
        return HandResult.DEALER_WIN
    if dealer_hand.is_busted:
        return HandResult.PLAYER_WIN

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack
    if player_bj and not dealer_bj:
        return HandResult.PLAYER_BLACKJACK
    if dealer_bj and not player_bj:
        return HandResult.DEALER_BLACKJACK

    player_value = player_hand.best_total
    dealer_value = dealer_hand.best_total
    if player_value > dealer_value:
        return HandResult.PLAYER_WIN
    if dealer_value > player_value:
        return HandResult.DEALER_WIN
    return HandResult.PUSH


def calculate_score(result: HandResult, points: int = DEFAULT_POINTS) -> int:
    """
    Return the score change for a result.

    Blackjacks score the same as ordinary wins; there is no bet sizing.
    """
    if result.player_won:
        return points
    if result.dealer_won:
        return -points
    return 0
