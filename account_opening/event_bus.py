"""
In-memory event bus carrying account lifecycle events.

The account opening event publisher puts AccountOpened events here; anything
interested in new accounts (welcome mail, ledger setup, audit) subscribes
without the account opening service knowing about it. In production this
would be a broker such as Kafka or SNS/SQS.

Design decisions:
- Synchronous delivery, subscribers called in registration order
- Type-based subscriptions plus a "*" wildcard for audit-style listeners
- A failing subscriber is logged and skipped; it cannot undo a publish
- Every published event is kept in an in-memory log for tests and demos
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional
from uuid import uuid4

logger = logging.getLogger("event_bus")

WILDCARD = "*"


@dataclass
class Event:
    """
    Immutable record of something that happened to an account.

    Attributes:
        event_type: Name used for routing (e.g. "AccountOpened")
        payload: Event-specific data
        source: Component that published the event
        event_id: Unique identifier for this event instance
        timestamp: When the event was created
    """
    event_type: str
    payload: dict[str, Any]
    source: str
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __str__(self) -> str:
        return f"Event({self.event_type}, id={self.event_id[:8]}, source={self.source})"


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Pub/sub hub for account events.

    Example usage:
        bus = EventBus()
        bus.subscribe("AccountOpened", lambda e: print(e.payload["account_id"]))
        bus.publish(account_opened("acct-42"))
    """

    def __init__(self):
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)
        self._event_log: list[Event] = []

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Call handler for every published event of event_type."""
        self._subscribers[event_type].append(handler)
        logger.debug(f"Subscribed handler to '{event_type}' events")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Call handler for every published event, whatever its type."""
        self._subscribers[WILDCARD].append(handler)
        logger.debug("Subscribed handler to ALL events")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        """
        Remove a handler.

        Returns:
            True if the handler was subscribed, False otherwise
        """
        try:
            self._subscribers[event_type].remove(handler)
        except ValueError:
            return False
        logger.debug(f"Unsubscribed handler from '{event_type}' events")
        return True

    def publish(self, event: Event) -> int:
        """
        Deliver an event to its subscribers.

        Returns:
            Number of handlers that were called

        Handler exceptions are logged; the remaining handlers still run and
        the publish itself succeeds.
        """
        self._event_log.append(event)
        logger.info(f"Publishing: {event}")

        handlers = self._subscribers.get(event.event_type, []) + self._subscribers.get(WILDCARD, [])
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Handler raised exception for {event}: {e}")

        if not handlers:
            logger.warning(f"No handlers for event type '{event.event_type}'")

        return len(handlers)

    def get_subscriber_count(self, event_type: str) -> int:
        """Get the number of subscribers for an event type."""
        return len(self._subscribers.get(event_type, []))

    def get_event_log(self) -> list[Event]:
        """Get a copy of every event published so far."""
        return self._event_log.copy()

    def clear_event_log(self) -> None:
        self._event_log.clear()


# Module-level singleton for the API and demo scripts
_default_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Get the default event bus singleton."""
    global _default_bus
    if _default_bus is None:
        _default_bus = EventBus()
    return _default_bus


def reset_event_bus() -> EventBus:
    """Replace the default event bus with a fresh one."""
    global _default_bus
    _default_bus = EventBus()
    return _default_bus
