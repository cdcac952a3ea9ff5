"""Training session events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Everything a training session reports to its listeners."""

    # Session and hand lifecycle
    SESSION_STARTED = auto()
    HAND_STARTED = auto()
    HAND_RESOLVED = auto()

    # Deck
    DECK_RESHUFFLED = auto()
    CARD_DEALT = auto()

    # Player choices
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    SPLIT_NOT_IMPLEMENTED = auto()
    DECISION_RECORDED = auto()

    # Dealer play
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Naturals and busts
    PLAYER_BLACKJACK = auto()
    DEALER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()

    # Rejected input
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    A single thing that happened during a session.

    ``data`` holds plain values only (strings, ints, bools) so listeners
    can log or serialize events without touching engine types.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Dispatches session events and keeps an ordered record of them.

    Handlers registered for a specific type run before catch-all
    handlers (registered with ``event_type=None``).
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Only deliver this type; None delivers everything
        """
        self._listeners.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        listeners = self._listeners.get(event_type, [])
        if handler in listeners:
            listeners.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._history.append(event)
        # Copy so a handler may unsubscribe itself mid-dispatch
        for key in (event.event_type, None):
            for handler in list(self._listeners.get(key, [])):
                handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    def events_of(self, event_type: EventType) -> list[GameEvent]:
        """Return recorded events of one type, oldest first."""
        return [e for e in self._history if e.event_type == event_type]

    @property
    def history(self) -> list[GameEvent]:
        """Return a copy of every recorded event, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
