"""Observable record of what happens at the table."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

# Enough for several long rounds; older events fall off the front
DEFAULT_HISTORY_LIMIT = 256


class EventType(Enum):
    """What happened."""

    # Session
    GAME_STARTED = auto()
    GAME_ENDED = auto()

    # Round boundaries
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    BET_PLACED = auto()

    # Table
    CARD_DEALT = auto()
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Results
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Rejected requests
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()


@dataclass(frozen=True)
class GameEvent:
    """An event with its payload, e.g. ``CARD_DEALT`` with card, hand and hand_value."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Dispatches engine events to the console and to tests.

    Handlers registered for one event type run before handlers registered
    for every type. The most recent ``history_limit`` events are kept.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self._typed: dict[EventType, list[EventHandler]] = {}
        self._catch_all: list[EventHandler] = []
        self._recent: deque[GameEvent] = deque(maxlen=history_limit)

    def _bucket(self, event_type: EventType | None) -> list[EventHandler]:
        if event_type is None:
            return self._catch_all
        return self._typed.setdefault(event_type, [])

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """
        Register ``handler`` for ``event_type`` (``None`` means every event).

        Returns:
            A callable that removes the handler again
        """
        self._bucket(event_type).append(handler)
        return lambda: self.unsubscribe(handler, event_type)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._bucket(event_type)
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._recent.append(event)
        # Copies, so a handler may unsubscribe itself
        for handler in list(self._typed.get(event.event_type, ())):
            handler(event)
        for handler in list(self._catch_all):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history_limit(self) -> int:
        return self._recent.maxlen  # type: ignore[return-value]

    @property
    def history(self) -> list[GameEvent]:
        """Recent events, oldest first, as a new list."""
        return list(self._recent)

    def events_of(self, event_type: EventType) -> list[GameEvent]:
        return [e for e in self._recent if e.event_type == event_type]

    def clear_history(self) -> None:
        self._recent.clear()
