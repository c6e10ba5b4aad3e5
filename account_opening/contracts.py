"""
Collaborator contracts required by the account opening service.

Any object with matching methods can be injected; the simulated
implementations in this package are one choice, test doubles are another.
"""

from datetime import date
from typing import Optional, Protocol

from shared.models import BackgroundCheckResults


class BackgroundCheckService(Protocol):
    """Risk-assesses an applicant."""

    def confirm(
        self, first_name: str, last_name: str, tax_id: str, dob: date
    ) -> Optional[BackgroundCheckResults]:
        """Return the check result, or None when the provider has no result."""
        ...


class ReferenceIdsManager(Protocol):
    """Issues unique account identifiers."""

    def obtain_id(
        self, first_name: str, token: str, last_name: str, tax_id: str, dob: date
    ) -> str:
        """Return a new account id. ``token`` is an opaque correlation value."""
        ...


class AccountStore(Protocol):
    """Persists an opened account with its background check."""

    def save(
        self,
        account_id: str,
        first_name: str,
        last_name: str,
        tax_id: str,
        dob: date,
        background_check_results: BackgroundCheckResults,
    ) -> bool:
        ...


class AccountOpeningEventPublisher(Protocol):
    """Announces a newly opened account."""

    def notify(self, account_id: str) -> None:
        ...
