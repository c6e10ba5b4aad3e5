"""
Demonstration scripts for the account opening workflow.

Each scenario wires a fresh service against the simulated collaborators and
prints what happened: the outcome, the stored accounts and the events that
reached the bus.
"""

import logging
from datetime import date

from account_opening.background_check import SimulatedBackgroundCheckService
from account_opening.event_bus import reset_event_bus
from account_opening.events import EventTypes
from account_opening.publisher import EventBusAccountOpeningPublisher
from account_opening.reference_ids import UuidReferenceIdsManager
from account_opening.service import AccountOpeningService
from shared.data_store import AccountRepository
from shared.errors import CollaboratorError
from shared.models import AccountOpeningStatus

# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

WATCHLISTED_TAX_ID = "999BAD1"
UNKNOWN_TAX_ID = "000NONE"


def _build(publisher_fails: bool = False):
    event_bus = reset_event_bus()
    repository = AccountRepository(persist=False)
    service = AccountOpeningService(
        background_check_service=SimulatedBackgroundCheckService(
            watchlist={WATCHLISTED_TAX_ID},
            unknown_tax_ids={UNKNOWN_TAX_ID},
        ),
        reference_ids_manager=UuidReferenceIdsManager(),
        account_repository=repository,
        event_publisher=EventBusAccountOpeningPublisher(event_bus=event_bus, fail=publisher_fails),
    )

    opened_ids = []
    event_bus.subscribe(
        EventTypes.ACCOUNT_OPENED,
        lambda event: opened_ids.append(event.payload["account_id"]),
    )
    return service, repository, opened_ids


def _banner(title: str):
    print("\n" + "=" * 70)
    print(f"ACCOUNT OPENING DEMO: {title}")
    print("=" * 70 + "\n")


def _report(status, repository: AccountRepository, opened_ids: list[str]):
    print("\n" + "-" * 70)
    print(f"RESULT: {status.value if status else 'no outcome'}")
    print(f"  Accounts stored:   {len(repository.get_accounts())}")
    for account in repository.get_accounts():
        print(
            f"    {account.account_id}: {account.first_name} {account.last_name} "
            f"({account.background_check.risk_profile}, limit {account.background_check.upper_account_limit})"
        )
    print(f"  AccountOpened events: {opened_ids}")
    print("-" * 70)


def run_opened_demo() -> AccountOpeningStatus:
    """An applicant with a clean background check gets an account."""
    _banner("Account Opened")
    service, repository, opened_ids = _build()

    status = service.open_account("John", "Smith", "123XYZ9", date(1990, 1, 1))

    _report(status, repository, opened_ids)
    return status


def run_declined_demo() -> AccountOpeningStatus:
    """A watchlisted applicant is declined and nothing is stored."""
    _banner("Declined - Unacceptable Risk")
    service, repository, opened_ids = _build()

    status = service.open_account("Jane", "Doe", WATCHLISTED_TAX_ID, date(1985, 6, 15))

    _report(status, repository, opened_ids)
    return status


def run_no_record_demo() -> AccountOpeningStatus:
    """The provider has no record of the applicant, so the account is declined."""
    _banner("Declined - No Background Check Result")
    service, repository, opened_ids = _build()

    status = service.open_account("Max", "Mustermann", UNKNOWN_TAX_ID, date(1979, 3, 2))

    _report(status, repository, opened_ids)
    return status


def run_failure_demo() -> None:
    """
    The event bus is down after the account was stored.

    The error reaches the caller unchanged and nothing is rolled back: the
    account exists but was never announced.
    """
    _banner("Collaborator Failure - Event Bus Down")
    service, repository, opened_ids = _build(publisher_fails=True)

    try:
        service.open_account("Erika", "Musterfrau", "456ABC2", date(1970, 9, 30))
    except CollaboratorError as e:
        print(f"\nopen_account raised {type(e).__name__}: {e}")

    _report(None, repository, opened_ids)


def run_all_demos():
    run_opened_demo()
    run_declined_demo()
    run_no_record_demo()
    run_failure_demo()
