"""Game events for the session event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of game events."""

    # Session flow events
    GAME_STARTED = auto()
    GAME_ENDED = auto()
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Betting events
    BET_PLACED = auto()
    BET_REJECTED = auto()

    # Deck events
    DECK_RESHUFFLED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    SPLIT_HAND_CHANGED = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_BLACKJACK = auto()
    DEALER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Error events
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events let a presentation layer follow a session without polling
    the round state after every call.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Dispatches events to handlers registered per type, or for every type.

    Only the most recent ``history_size`` events are kept.
    """

    def __init__(self, history_size: int = 200) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._recent: deque[GameEvent] = deque(maxlen=history_size)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Event type to listen for, or None for every event
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Record a new event and deliver it, type-specific handlers first."""
        event = GameEvent(event_type=event_type, data=data)
        self._recent.append(event)

        for handler in (*self._handlers.get(event_type, ()), *self._handlers.get(None, ())):
            handler(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Recent events, oldest first."""
        return list(self._recent)

    def clear_history(self) -> None:
        self._recent.clear()
