"""Pydantic views of a training session for presentation layers."""

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from trainer.cards import Card
from trainer.game.state import BasicStrategyStats, GamePhase
from trainer.hand import Hand

if TYPE_CHECKING:
    from trainer.game.engine import TrainingSession


class CardView(BaseModel):
    """Card representation."""

    model_config = ConfigDict(frozen=True)

    rank: str
    suit: Literal["hearts", "diamonds", "clubs", "spades"]
    label: str

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(rank=card.rank.value, suit=card.suit.value, label=str(card))


class HandView(BaseModel):
    """
    Hand representation.

    Totals are None while any card is face down.
    """

    cards: list[CardView | None]
    total: int | None = None
    is_soft: bool = False
    is_blackjack: bool = False
    is_busted: bool = False

    @classmethod
    def from_hand(cls, hand: Hand, hide_hole_card: bool = False) -> "HandView":
        cards: list[CardView | None] = [CardView.from_card(c) for c in hand.cards]
        if hide_hole_card and len(cards) > 1:
            cards[1] = None
            return cls(cards=cards)
        return cls(
            cards=cards,
            total=hand.best_total,
            is_soft=hand.is_soft,
            is_blackjack=hand.is_blackjack,
            is_busted=hand.is_busted,
        )


class StatsView(BaseModel):
    """Basic strategy statistics."""

    total_decisions: int = Field(..., ge=0)
    correct_decisions: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0.0, le=100.0)

    @classmethod
    def from_stats(cls, stats: BasicStrategyStats) -> "StatsView":
        return cls(
            total_decisions=stats.total_decisions,
            correct_decisions=stats.correct_decisions,
            accuracy=stats.accuracy,
        )


class SessionSnapshot(BaseModel):
    """Current session state, safe to show to the player."""

    phase: str
    player_hand: HandView
    dealer_hand: HandView
    dealer_upcard: CardView | None
    score: int
    hand_result: str | None
    allowed_actions: list[str]
    stats: StatsView

    @classmethod
    def from_session(cls, session: "TrainingSession") -> "SessionSnapshot":
        """Build a snapshot, hiding the hole card until the hand resolves."""
        state = session.state
        hide = state.phase != GamePhase.RESOLVE_HAND
        upcard = state.dealer_upcard
        return cls(
            phase=state.phase.value,
            player_hand=HandView.from_hand(state.player_hand),
            dealer_hand=HandView.from_hand(state.dealer_hand, hide_hole_card=hide),
            dealer_upcard=CardView.from_card(upcard) if upcard is not None else None,
            score=state.score,
            hand_result=state.hand_result.value if state.hand_result else None,
            allowed_actions=[a.value for a in session.allowed_actions],
            stats=StatsView.from_stats(state.basic_strategy_stats),
        )
