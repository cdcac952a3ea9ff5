"""Table rules for a training session."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config import TrainerConfig


@dataclass(frozen=True)
class RuleSet:
    """
    Rules that affect dealer play, scoring and strategy feedback.

    The strategy table itself is fixed; these only change how the
    session plays out and grades a hand.
    """

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Flat points won or lost per hand
    points_per_hand: int = 10

    # Fall back to a legal action when the table's choice is not allowed
    clamp_recommendations: bool = False

    def __post_init__(self) -> None:
        """Validate rule values."""
        if self.points_per_hand < 0:
            raise ValueError("points_per_hand must not be negative")

    @classmethod
    def from_config(cls, cfg: "TrainerConfig") -> "RuleSet":
        """Build rules from the environment-backed configuration."""
        return cls(
            dealer_hits_soft_17=cfg.dealer_hits_soft_17,
            points_per_hand=cfg.points_per_hand,
            clamp_recommendations=cfg.clamp_recommendations,
        )

    @classmethod
    def stand_soft_17(cls) -> "RuleSet":
        """Rules where the dealer stands on every 17."""
        return cls(dealer_hits_soft_17=False)
