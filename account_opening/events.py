"""
Event definitions for the account opening workflow.

Events are named in past tense and carry everything a subscriber needs.
Only the account id travels with AccountOpened: subscribers that need the
applicant's details read them back from the account repository, which is
why the account is always saved before the event is published.
"""

from account_opening.event_bus import Event


class EventTypes:
    """Constants for event type names."""
    ACCOUNT_OPENED = "AccountOpened"


def account_opened(account_id: str, source: str = "account-opening-service") -> Event:
    """
    Create an AccountOpened event.

    Published once the account has been stored.
    """
    return Event(
        event_type=EventTypes.ACCOUNT_OPENED,
        source=source,
        payload={"account_id": account_id},
    )
