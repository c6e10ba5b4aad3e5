"""
Integration tests for the account opening workflow.

The service runs against the simulated collaborators:
1. Background check decides the risk profile
2. Reference id manager issues the account id
3. Repository stores the account
4. AccountOpened is published on the event bus
"""

from datetime import date

import pytest

from account_opening.events import EventTypes
from account_opening.publisher import EventBusAccountOpeningPublisher
from account_opening.service import AccountOpeningService
from shared.data_store import AccountRepository
from shared.errors import AccountStoreError, NotificationError
from shared.models import AccountOpeningStatus


@pytest.fixture
def opened_ids(event_bus):
    """Account ids announced on the bus during the test."""
    ids = []
    event_bus.subscribe(EventTypes.ACCOUNT_OPENED, lambda e: ids.append(e.payload["account_id"]))
    return ids


class TestOpenedWorkflow:
    """Tests for applicants that get an account."""

    def test_account_is_stored_and_announced(
        self, account_opening_service, account_repository, opened_ids, applicant
    ):
        status = account_opening_service.open_account(*applicant)

        assert status == AccountOpeningStatus.OPENED

        accounts = account_repository.get_accounts()
        assert len(accounts) == 1
        account = accounts[0]
        assert account.first_name == "John"
        assert account.last_name == "Smith"
        assert account.tax_id == "123XYZ9"
        assert account.date_of_birth == date(1990, 1, 1)
        assert account.background_check.risk_profile == "LOW"

        assert opened_ids == [account.account_id]

    def test_issued_id_is_the_stored_id(
        self, account_opening_service, account_repository, reference_ids_manager, applicant
    ):
        account_opening_service.open_account(*applicant)

        account = account_repository.get_accounts()[0]
        assert reference_ids_manager.get_token(account.account_id) is not None

    def test_each_call_opens_a_new_account(
        self, account_opening_service, account_repository, opened_ids, applicant
    ):
        """Test that the service keeps no state between calls."""
        account_opening_service.open_account(*applicant)
        account_opening_service.open_account(*applicant)

        assert len(account_repository.get_accounts_by_tax_id("123XYZ9")) == 2
        assert len(set(opened_ids)) == 2


class TestDeclinedWorkflow:
    """Tests for applicants that are declined."""

    @pytest.mark.parametrize("tax_id", ["999BAD1", "000NONE"])
    def test_nothing_is_stored_or_announced(
        self,
        account_opening_service,
        account_repository,
        reference_ids_manager,
        event_bus,
        tax_id,
    ):
        status = account_opening_service.open_account("Jane", "Doe", tax_id, date(1985, 6, 15))

        assert status == AccountOpeningStatus.DECLINED
        assert account_repository.get_accounts() == []
        assert reference_ids_manager.issued_count == 0
        assert event_bus.get_event_log() == []


class TestFailedWorkflow:
    """Tests for collaborator failures with real collaborators."""

    def test_publisher_failure_leaves_account_stored(
        self,
        background_check_service,
        reference_ids_manager,
        account_repository,
        event_bus,
        applicant,
    ):
        """Test that nothing is rolled back when the last step fails."""
        service = AccountOpeningService(
            background_check_service=background_check_service,
            reference_ids_manager=reference_ids_manager,
            account_repository=account_repository,
            event_publisher=EventBusAccountOpeningPublisher(event_bus=event_bus, fail=True),
        )

        with pytest.raises(NotificationError):
            service.open_account(*applicant)

        assert len(account_repository.get_accounts()) == 1
        assert event_bus.get_event_log() == []

    def test_store_failure_stops_before_notify(
        self,
        background_check_service,
        reference_ids_manager,
        event_publisher,
        event_bus,
        data_dir,
        applicant,
    ):
        # A regular file where the data directory should be makes writes fail
        data_dir.parent.mkdir(parents=True, exist_ok=True)
        data_dir.write_text("not a directory")
        service = AccountOpeningService(
            background_check_service=background_check_service,
            reference_ids_manager=reference_ids_manager,
            account_repository=AccountRepository(data_dir=data_dir / "nested", persist=True),
            event_publisher=event_publisher,
        )

        with pytest.raises(AccountStoreError):
            service.open_account(*applicant)

        assert reference_ids_manager.issued_count == 1
        assert event_bus.get_event_log() == []
