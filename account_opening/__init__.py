"""
Account opening workflow.

This package implements the account opening service and simulated versions
of the collaborators it drives:
- Background check provider deciding the applicant's risk profile
- Reference id manager issuing account ids
- Event publisher announcing opened accounts on the event bus

The account repository lives in the shared package.
"""

from account_opening.event_bus import Event, EventBus, get_event_bus, reset_event_bus
from account_opening.service import AccountOpeningService, UNACCEPTABLE_RISK_PROFILE
from account_opening.factory import create_account_opening_service

__all__ = [
    "Event",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
    "AccountOpeningService",
    "UNACCEPTABLE_RISK_PROFILE",
    "create_account_opening_service",
]
