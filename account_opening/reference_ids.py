"""
Simulated reference id manager.

Issues account ids of the form ``acct-<12 hex chars>``. The correlation token
handed in by the account opening service is recorded next to the id it
produced, but plays no part in generating it.
"""

import logging
import threading
from datetime import date
from typing import Callable, Optional
from uuid import uuid4

from account_opening.contracts import ReferenceIdsManager
from shared.errors import ReferenceIdCollisionError

logger = logging.getLogger("reference_ids")

ACCOUNT_ID_PREFIX = "acct-"


def _random_suffix() -> str:
    return uuid4().hex[:12]


class UuidReferenceIdsManager:
    """
    Hands out unique account ids.

    Issued ids are remembered, and a generated id that was already issued
    raises instead of being handed out twice. Safe to share between threads.
    """

    def __init__(self, generate: Optional[Callable[[], str]] = None):
        """
        Args:
            generate: Produces the id suffix; uuid4-based unless overridden
        """
        self._generate = generate or _random_suffix
        self._lock = threading.Lock()
        self._issued: dict[str, str] = {}  # account_id -> correlation token

    def obtain_id(
        self, first_name: str, token: str, last_name: str, tax_id: str, dob: date
    ) -> str:
        """
        Issue a new account id.

        Raises:
            ReferenceIdCollisionError: if the generated id was already issued
        """
        account_id = f"{ACCOUNT_ID_PREFIX}{self._generate()}"
        with self._lock:
            if account_id in self._issued:
                logger.error(f"Generated account id collides with an issued id: {account_id}")
                raise ReferenceIdCollisionError(f"Account id already issued: {account_id}")
            self._issued[account_id] = token

        logger.info(f"Issued account id {account_id} for {last_name}")
        return account_id

    def get_token(self, account_id: str) -> Optional[str]:
        """Correlation token recorded when account_id was issued."""
        with self._lock:
            return self._issued.get(account_id)

    @property
    def issued_count(self) -> int:
        with self._lock:
            return len(self._issued)


class RecordingReferenceIdsManager:
    """
    Wraps another reference ids manager and remembers the id it issued.

    Built once per open_account call by callers that need to know which
    account they opened, since the service itself only reports the outcome.
    """

    def __init__(self, inner: ReferenceIdsManager):
        self.inner = inner
        self.issued_id: Optional[str] = None

    def obtain_id(
        self, first_name: str, token: str, last_name: str, tax_id: str, dob: date
    ) -> str:
        self.issued_id = self.inner.obtain_id(first_name, token, last_name, tax_id, dob)
        return self.issued_id
