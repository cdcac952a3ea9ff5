"""Game engine and state management."""

from trainer.game.events import EventEmitter, EventType, GameEvent
from trainer.game.state import BasicStrategyStats, GamePhase, GameState
from trainer.game.engine import DecisionFeedback, TrainingSession

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "BasicStrategyStats",
    "GamePhase",
    "GameState",
    "DecisionFeedback",
    "TrainingSession",
]
