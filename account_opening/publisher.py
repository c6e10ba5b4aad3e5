"""
Event publisher announcing opened accounts on the event bus.
"""

import logging
from typing import Optional

from account_opening.event_bus import EventBus, get_event_bus
from account_opening.events import account_opened
from shared.errors import NotificationError

logger = logging.getLogger("account_events")


class EventBusAccountOpeningPublisher:
    """
    Publishes an AccountOpened event for every notify() call.

    Set ``fail`` to simulate a broker outage; notify() then raises
    NotificationError and nothing is published.
    """

    def __init__(self, event_bus: Optional[EventBus] = None, fail: bool = False):
        self.event_bus = event_bus or get_event_bus()
        self.fail = fail

    def notify(self, account_id: str) -> None:
        if self.fail:
            logger.error(f"Could not publish AccountOpened for {account_id}")
            raise NotificationError(f"Event bus unavailable, {account_id} not announced")

        delivered = self.event_bus.publish(account_opened(account_id))
        logger.debug(f"AccountOpened for {account_id} delivered to {delivered} handler(s)")
