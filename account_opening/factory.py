"""
Wiring for the account opening service and its simulated collaborators.
"""

from typing import Optional

from account_opening.background_check import SimulatedBackgroundCheckService
from account_opening.event_bus import EventBus
from account_opening.publisher import EventBusAccountOpeningPublisher
from account_opening.reference_ids import UuidReferenceIdsManager
from account_opening.service import AccountOpeningService
from shared.config import Settings, get_settings
from shared.data_store import AccountRepository


def create_account_opening_service(
    settings: Optional[Settings] = None,
    event_bus: Optional[EventBus] = None,
    account_repository: Optional[AccountRepository] = None,
) -> AccountOpeningService:
    """Build an AccountOpeningService backed by the simulated collaborators."""
    settings = settings or get_settings()
    if account_repository is None:
        account_repository = AccountRepository(
            data_dir=settings.data_dir,
            persist=settings.persist_accounts,
        )

    return AccountOpeningService(
        background_check_service=SimulatedBackgroundCheckService(
            watchlist=settings.background_check_watchlist,
            unknown_tax_ids=settings.background_check_unknown,
            fail_rate=settings.background_check_fail_rate,
        ),
        reference_ids_manager=UuidReferenceIdsManager(),
        account_repository=account_repository,
        event_publisher=EventBusAccountOpeningPublisher(event_bus=event_bus),
    )
