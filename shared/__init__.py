"""
Shared infrastructure for the account opening workflow.

This package contains code used by the service, the API and the CLI:
- Domain models (BackgroundCheckResults, AccountRecord, AccountOpeningStatus)
- JSON-backed account repository
- Collaborator error classes
- Environment-driven settings
"""

from shared.models import (
    AccountOpeningStatus,
    AccountRecord,
    Applicant,
    BackgroundCheckResults,
    RiskProfile,
)
from shared.data_store import AccountRepository
from shared.errors import (
    AccountStoreError,
    BackgroundCheckError,
    CollaboratorError,
    NotificationError,
    ReferenceIdCollisionError,
)

__all__ = [
    "AccountOpeningStatus",
    "AccountRecord",
    "Applicant",
    "BackgroundCheckResults",
    "RiskProfile",
    "AccountRepository",
    "AccountStoreError",
    "BackgroundCheckError",
    "CollaboratorError",
    "NotificationError",
    "ReferenceIdCollisionError",
]
