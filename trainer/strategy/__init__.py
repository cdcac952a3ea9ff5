"""Basic strategy tables and recommendations."""

from trainer.actions import Action
from trainer.strategy.basic import (
    BasicStrategy,
    is_basic_strategy_correct,
    recommend_action,
    upcard_column,
)

__all__ = [
    "Action",
    "BasicStrategy",
    "is_basic_strategy_correct",
    "recommend_action",
    "upcard_column",
]
