"""Dealer drawing rules."""

from trainer.hand import Hand


def should_dealer_hit(hand: Hand, hits_soft_17: bool = True) -> bool:
    """
    Decide whether the dealer draws another card.

    Checked in order: a natural stands; a hard total (Aces as 1) of 16 or
    less hits; a soft total of 17 or less hits (16 or less with
    ``hits_soft_17=False``); anything else stands.

    A soft total is only defined while the hard total is 11 or less, so
    every soft hand already hits on the hard check.

    Args:
        hand: Dealer's hand
        hits_soft_17: Whether the dealer hits soft 17

    Returns:
        True if the dealer should hit
    """
    if hand.is_blackjack:
        return False

    if hand.hard_total <= 16:
        return True

    soft = hand.soft_total
    if soft is not None and soft <= (17 if hits_soft_17 else 16):
        return True

    return False
