"""
Shared pytest fixtures for the account opening tests.

These fixtures provide the applicant used throughout the suite and fresh
collaborators for each test.
"""

import pytest
from datetime import date
from pathlib import Path

from account_opening.background_check import SimulatedBackgroundCheckService
from account_opening.event_bus import EventBus
from account_opening.publisher import EventBusAccountOpeningPublisher
from account_opening.reference_ids import UuidReferenceIdsManager
from account_opening.service import AccountOpeningService
from shared.data_store import AccountRepository
from shared.models import BackgroundCheckResults


# =============================================================================
# Applicant Fixtures
# =============================================================================

FIRST_NAME = "John"
LAST_NAME = "Smith"
TAX_ID = "123XYZ9"
DOB = date(1990, 1, 1)

WATCHLISTED_TAX_ID = "999BAD1"
UNKNOWN_TAX_ID = "000NONE"


@pytest.fixture
def applicant() -> tuple:
    """John Smith, born 1990-01-01, as positional open_account arguments."""
    return (FIRST_NAME, LAST_NAME, TAX_ID, DOB)


@pytest.fixture
def ok_background_check() -> BackgroundCheckResults:
    """An acceptable background check result."""
    return BackgroundCheckResults(risk_profile="LOW_RISK", upper_account_limit=100000)


# =============================================================================
# Collaborator Fixtures
# =============================================================================

@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory for each test."""
    return tmp_path / "data"


@pytest.fixture
def account_repository(data_dir: Path) -> AccountRepository:
    """Fresh in-memory AccountRepository for each test."""
    return AccountRepository(data_dir=data_dir, persist=False)


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus for each test."""
    return EventBus()


@pytest.fixture
def background_check_service() -> SimulatedBackgroundCheckService:
    """Background checks with one watchlisted and one unknown tax id."""
    return SimulatedBackgroundCheckService(
        watchlist={WATCHLISTED_TAX_ID},
        unknown_tax_ids={UNKNOWN_TAX_ID},
        today=lambda: date(2026, 1, 1),
    )


@pytest.fixture
def reference_ids_manager() -> UuidReferenceIdsManager:
    return UuidReferenceIdsManager()


@pytest.fixture
def event_publisher(event_bus: EventBus) -> EventBusAccountOpeningPublisher:
    return EventBusAccountOpeningPublisher(event_bus=event_bus)


@pytest.fixture
def account_opening_service(
    background_check_service,
    reference_ids_manager,
    account_repository,
    event_publisher,
) -> AccountOpeningService:
    """Service wired to the simulated collaborators."""
    return AccountOpeningService(
        background_check_service=background_check_service,
        reference_ids_manager=reference_ids_manager,
        account_repository=account_repository,
        event_publisher=event_publisher,
    )
