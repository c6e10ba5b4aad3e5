"""
Simulated background check provider.

A real provider would call a credit bureau or a sanctions screening API.
This one applies fixed rules so demos and tests are deterministic:

- watchlisted tax ids get the HIGH risk profile and no account limit
- unknown tax ids get no result at all
- applicants under MINIMUM_LOW_RISK_AGE are MEDIUM risk with a lower limit
- everyone else is LOW risk

Provider outages can be simulated with ``fail_rate``.
"""

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

from shared.errors import BackgroundCheckError
from shared.models import BackgroundCheckResults, RiskProfile

logger = logging.getLogger("background_check")

MINIMUM_LOW_RISK_AGE = 25
LOW_RISK_LIMIT = 100_000
MEDIUM_RISK_LIMIT = 25_000


@dataclass
class BackgroundCheckRecord:
    """One confirm() call, kept for test assertions."""
    first_name: str
    last_name: str
    tax_id: str
    dob: date
    result: Optional[BackgroundCheckResults]


def age_on(dob: date, today: date) -> int:
    """Whole years between dob and today."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


class SimulatedBackgroundCheckService:
    """
    Rule-based stand-in for a background check provider.

    Example:
        checks = SimulatedBackgroundCheckService(watchlist={"999BAD1"})
        checks.confirm("John", "Smith", "123XYZ9", date(1990, 1, 1))
        # BackgroundCheckResults(risk_profile='LOW', upper_account_limit=100000)
    """

    def __init__(
        self,
        watchlist: Iterable[str] = (),
        unknown_tax_ids: Iterable[str] = (),
        fail_rate: float = 0.0,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            watchlist: Tax ids that always come back HIGH risk
            unknown_tax_ids: Tax ids the provider has no record of
            fail_rate: Probability of a provider failure (0.0 to 1.0)
            today: Clock used for the age rule
        """
        self.watchlist = frozenset(watchlist)
        self.unknown_tax_ids = frozenset(unknown_tax_ids)
        self.fail_rate = fail_rate
        self.today = today
        self.checks_performed: list[BackgroundCheckRecord] = []

    def confirm(
        self, first_name: str, last_name: str, tax_id: str, dob: date
    ) -> Optional[BackgroundCheckResults]:
        """
        Risk-assess an applicant.

        Returns:
            The check result, or None if the provider has no record

        Raises:
            BackgroundCheckError: on a simulated provider failure
        """
        if self.fail_rate > 0 and random.random() < self.fail_rate:
            logger.error(f"Background check provider unavailable for {last_name}")
            raise BackgroundCheckError("Background check provider unavailable")

        result = self._assess(tax_id, dob)
        self.checks_performed.append(
            BackgroundCheckRecord(first_name, last_name, tax_id, dob, result)
        )

        if result is None:
            logger.info(f"No background check record for {last_name}")
        else:
            logger.info(f"Background check for {last_name}: {result.risk_profile}")
        return result

    def _assess(self, tax_id: str, dob: date) -> Optional[BackgroundCheckResults]:
        if tax_id in self.unknown_tax_ids:
            return None
        if tax_id in self.watchlist:
            return BackgroundCheckResults(risk_profile=RiskProfile.HIGH.value, upper_account_limit=0)
        if age_on(dob, self.today()) < MINIMUM_LOW_RISK_AGE:
            return BackgroundCheckResults(
                risk_profile=RiskProfile.MEDIUM.value, upper_account_limit=MEDIUM_RISK_LIMIT
            )
        return BackgroundCheckResults(risk_profile=RiskProfile.LOW.value, upper_account_limit=LOW_RISK_LIMIT)
