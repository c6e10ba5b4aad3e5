"""
Account opening service.

Decides whether to open or decline an account. The service sequences four
injected collaborators:

    confirm (background check) -> obtain_id -> save -> notify

and applies one business rule: an absent background check result, or a
result whose risk profile is UNACCEPTABLE_RISK_PROFILE, declines the account
before any other collaborator is called.

The service is not a failure boundary. Whatever a collaborator raises
reaches the caller unchanged, with no retry and no compensation for steps
already completed. Callers must treat an exception as an indeterminate
outcome.
"""

import logging
from datetime import date
from uuid import uuid4

from account_opening.contracts import (
    AccountOpeningEventPublisher,
    AccountStore,
    BackgroundCheckService,
    ReferenceIdsManager,
)
from shared.models import AccountOpeningStatus, RiskProfile

logger = logging.getLogger("account_opening")

UNACCEPTABLE_RISK_PROFILE = RiskProfile.HIGH.value


class AccountOpeningService:
    """
    Opens accounts for applicants who pass a background check.

    Holds no per-call state, so one instance can serve concurrent callers
    as long as its collaborators can.

    Example:
        service = AccountOpeningService(
            background_check_service=SimulatedBackgroundCheckService(),
            reference_ids_manager=UuidReferenceIdsManager(),
            account_repository=AccountRepository(),
            event_publisher=EventBusAccountOpeningPublisher(),
        )
        service.open_account("John", "Smith", "123XYZ9", date(1990, 1, 1))
    """

    def __init__(
        self,
        background_check_service: BackgroundCheckService,
        reference_ids_manager: ReferenceIdsManager,
        account_repository: AccountStore,
        event_publisher: AccountOpeningEventPublisher,
    ):
        self.background_check_service = background_check_service
        self.reference_ids_manager = reference_ids_manager
        self.account_repository = account_repository
        self.event_publisher = event_publisher

    def open_account(
        self, first_name: str, last_name: str, tax_id: str, dob: date
    ) -> AccountOpeningStatus:
        """
        Run the account opening workflow for one applicant.

        Returns:
            OPENED once the account is stored and announced, DECLINED when the
            background check gives no result or an unacceptable risk profile

        Raises:
            Whatever a collaborator raises, unchanged
        """
        background_check_results = self.background_check_service.confirm(
            first_name, last_name, tax_id, dob
        )

        if background_check_results is None:
            logger.info(f"Declined {last_name}: no background check result")
            return AccountOpeningStatus.DECLINED

        if background_check_results.risk_profile == UNACCEPTABLE_RISK_PROFILE:
            logger.info(f"Declined {last_name}: risk profile {UNACCEPTABLE_RISK_PROFILE}")
            return AccountOpeningStatus.DECLINED

        account_id = self.reference_ids_manager.obtain_id(
            first_name, uuid4().hex, last_name, tax_id, dob
        )

        saved = self.account_repository.save(
            account_id, first_name, last_name, tax_id, dob, background_check_results
        )
        if not saved:
            logger.warning(f"Account repository reported {account_id} as not saved")

        self.event_publisher.notify(account_id)

        logger.info(
            f"Opened account {account_id} "
            f"(risk={background_check_results.risk_profile}, "
            f"limit={background_check_results.upper_account_limit})"
        )
        return AccountOpeningStatus.OPENED
