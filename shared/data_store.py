"""
JSON-backed account repository for the account opening demo.

This module provides the persistence collaborator of the account opening
service. Accounts live in memory and can optionally be mirrored to an
``accounts.json`` file in the data directory.

Design decisions:
- save() never overwrites an existing account; it returns False instead
- Disk problems surface as AccountStoreError, never as a False return
- Lazy loading of the JSON file, like a cache that fills on first access
- Module-level singleton for the API and demo scripts
- One lock guards loading, reading and writing; the API shares an instance
  across its worker threads
"""

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from shared.config import get_settings
from shared.errors import AccountStoreError
from shared.models import AccountRecord, BackgroundCheckResults

logger = logging.getLogger("account_repository")

ACCOUNTS_FILE = "accounts.json"


class AccountRepository:
    """
    Account storage keyed by account id.

    The account opening service only ever calls save(); the read methods
    exist for the API, the demo scripts and tests.

    Example:
        repository = AccountRepository()
        repository.save("acct-42", "John", "Smith", "123XYZ9", date(1990, 1, 1),
                        BackgroundCheckResults(risk_profile="LOW", upper_account_limit=100000))
        repository.get_account("acct-42")
    """

    def __init__(self, data_dir: Optional[Path] = None, persist: bool = False):
        """
        Initialize the repository.

        Args:
            data_dir: Directory holding accounts.json.
                     Defaults to ./data relative to project root.
            persist: When True, every save() rewrites accounts.json.
        """
        if data_dir is None:
            data_dir = Path(__file__).parent.parent / "data"

        self.data_dir = Path(data_dir)
        self.persist = persist

        self._lock = threading.Lock()

        # Loaded lazily, always under _lock
        self._accounts: Optional[dict[str, AccountRecord]] = None

    # =========================================================================
    # Data Loading (lazy)
    # =========================================================================

    @property
    def accounts_file(self) -> Path:
        return self.data_dir / ACCOUNTS_FILE

    def _ensure_accounts_loaded(self):
        """Lazy load accounts from JSON. Caller holds _lock."""
        if self._accounts is not None:
            return
        if not self.accounts_file.exists():
            self._accounts = {}
            return
        try:
            with open(self.accounts_file, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AccountStoreError(f"Cannot read {self.accounts_file}: {e}") from e
        try:
            self._accounts = {a["account_id"]: AccountRecord(**a) for a in data}
        except (KeyError, TypeError, ValidationError) as e:
            raise AccountStoreError(f"Malformed account in {self.accounts_file}: {e}") from e

    def _write_accounts(self):
        """Rewrite accounts.json. Caller holds _lock."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.accounts_file, "w") as f:
                json.dump(
                    [a.model_dump(mode="json") for a in self._accounts.values()],
                    f,
                    indent=2,
                )
        except OSError as e:
            raise AccountStoreError(f"Cannot write {self.accounts_file}: {e}") from e

    # =========================================================================
    # Account Operations
    # =========================================================================

    def save(
        self,
        account_id: str,
        first_name: str,
        last_name: str,
        tax_id: str,
        dob: date,
        background_check_results: BackgroundCheckResults,
    ) -> bool:
        """
        Store a newly opened account together with its background check.

        Returns:
            True if the account was stored, False if the id is already taken

        Raises:
            AccountStoreError: if the accounts file cannot be read or written
        """
        with self._lock:
            self._ensure_accounts_loaded()

            if account_id in self._accounts:
                logger.warning(f"Account already stored, not overwriting: {account_id}")
                return False

            self._accounts[account_id] = AccountRecord(
                account_id=account_id,
                first_name=first_name,
                last_name=last_name,
                tax_id=tax_id,
                date_of_birth=dob,
                background_check=background_check_results,
            )

            if self.persist:
                try:
                    self._write_accounts()
                except AccountStoreError:
                    del self._accounts[account_id]
                    raise

        logger.info(f"Stored account {account_id} ({background_check_results.risk_profile})")
        return True

    def get_account(self, account_id: str) -> Optional[AccountRecord]:
        """Get an account by ID."""
        with self._lock:
            self._ensure_accounts_loaded()
            return self._accounts.get(account_id)

    def get_accounts(self) -> list[AccountRecord]:
        """Get all stored accounts."""
        with self._lock:
            self._ensure_accounts_loaded()
            return list(self._accounts.values())

    def get_accounts_by_tax_id(self, tax_id: str) -> list[AccountRecord]:
        """Get every account opened for a given tax id."""
        with self._lock:
            self._ensure_accounts_loaded()
            return [a for a in self._accounts.values() if a.tax_id == tax_id]

    def reload(self):
        """
        Force reload from accounts.json.

        Unpersisted accounts are dropped.
        """
        with self._lock:
            self._accounts = None


# Module-level singleton for convenience
# In tests, create a new AccountRepository instance pointing at tmp_path
_default_repository: Optional[AccountRepository] = None


def get_account_repository() -> AccountRepository:
    """Get the default account repository singleton."""
    global _default_repository
    if _default_repository is None:
        settings = get_settings()
        _default_repository = AccountRepository(
            data_dir=settings.data_dir,
            persist=settings.persist_accounts,
        )
    return _default_repository
