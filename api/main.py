"""
FastAPI application for the account opening workflow.

Endpoints:
1. POST /accounts - run the account opening workflow for an applicant
2. GET /accounts/{account_id} - read back a stored account
3. GET /accounts - list stored accounts, optionally by tax id
4. GET /events - AccountOpened events seen on the bus

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.

The account opening service propagates collaborator failures unchanged;
this module is where they are translated into HTTP status codes.
"""

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from account_opening.event_bus import EventBus, get_event_bus
from account_opening.factory import create_account_opening_service
from account_opening.reference_ids import RecordingReferenceIdsManager
from account_opening.service import AccountOpeningService
from shared.config import get_settings
from shared.data_store import AccountRepository, get_account_repository
from shared.errors import (
    AccountStoreError,
    BackgroundCheckError,
    CollaboratorError,
    NotificationError,
    ReferenceIdCollisionError,
)
from shared.models import AccountOpeningStatus, AccountRecord

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("account_api")


# Request/response models
class OpenAccountRequest(BaseModel):
    """Applicant fields; only their types are checked."""
    first_name: str
    last_name: str
    tax_id: str
    date_of_birth: date


class OpenAccountResponse(BaseModel):
    """Outcome of the workflow, plus the new account's id when it was opened."""
    status: AccountOpeningStatus
    account_id: Optional[str] = None


class EventResponse(BaseModel):
    event_id: str
    event_type: str
    source: str
    timestamp: datetime
    payload: dict[str, Any]


# Status code per collaborator failure
ERROR_STATUS_CODES: dict[type[CollaboratorError], int] = {
    BackgroundCheckError: 503,
    ReferenceIdCollisionError: 409,
    AccountStoreError: 500,
    NotificationError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting Account Opening API")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Account Opening API",
    description="""
    Opens pension accounts for applicants who pass a background check.

    An account is opened only when the background check returns a result
    whose risk profile is acceptable. Opened accounts are stored and an
    AccountOpened event is published.

    A 5xx/409 response means the outcome is indeterminate: some steps may
    already have taken effect.
    """,
    version=get_settings().version,
    lifespan=lifespan,
)


# Module-level instances (would use proper DI in production)
_service: Optional[AccountOpeningService] = None
_repository: Optional[AccountRepository] = None
_event_bus: Optional[EventBus] = None


def get_repository() -> AccountRepository:
    global _repository
    if _repository is None:
        _repository = get_account_repository()
    return _repository


def get_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = get_event_bus()
    return _event_bus


def get_service() -> AccountOpeningService:
    global _service
    if _service is None:
        _service = create_account_opening_service(
            event_bus=get_bus(),
            account_repository=get_repository(),
        )
    return _service


def reset_api_state(
    service: Optional[AccountOpeningService] = None,
    repository: Optional[AccountRepository] = None,
    event_bus: Optional[EventBus] = None,
) -> None:
    """Reset API state (for testing)."""
    global _service, _repository, _event_bus
    _service = service
    _repository = repository
    _event_bus = event_bus


@app.exception_handler(CollaboratorError)
async def collaborator_error_handler(request: Request, exc: CollaboratorError):
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        500,
    )
    logger.error(f"{type(exc).__name__} during {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc),
            "error": type(exc).__name__,
            "outcome": "indeterminate",
        },
    )


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": get_settings().app_name}


# =============================================================================
# Accounts
# =============================================================================

@app.post("/accounts", response_model=OpenAccountResponse, tags=["Accounts"])
def open_account(
    request: OpenAccountRequest,
    service: AccountOpeningService = Depends(get_service),
) -> OpenAccountResponse:
    """
    Run the account opening workflow.

    Returns DECLINED (with HTTP 200) when the background check gives no
    result or an unacceptable risk profile.
    """
    # Same collaborators, but this request records the id it was issued
    recorder = RecordingReferenceIdsManager(service.reference_ids_manager)
    request_service = AccountOpeningService(
        background_check_service=service.background_check_service,
        reference_ids_manager=recorder,
        account_repository=service.account_repository,
        event_publisher=service.event_publisher,
    )

    status = request_service.open_account(
        request.first_name,
        request.last_name,
        request.tax_id,
        request.date_of_birth,
    )

    if status != AccountOpeningStatus.OPENED:
        return OpenAccountResponse(status=status)
    return OpenAccountResponse(status=status, account_id=recorder.issued_id)


@app.get("/accounts", response_model=list[AccountRecord], tags=["Accounts"])
def list_accounts(
    tax_id: Optional[str] = None,
    repository: AccountRepository = Depends(get_repository),
):
    """List stored accounts, optionally only those for one tax id."""
    if tax_id:
        return repository.get_accounts_by_tax_id(tax_id)
    return repository.get_accounts()


@app.get("/accounts/{account_id}", response_model=AccountRecord, tags=["Accounts"])
def get_account(
    account_id: str,
    repository: AccountRepository = Depends(get_repository),
):
    """Get a stored account by id."""
    account = repository.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")
    return account


# =============================================================================
# Events
# =============================================================================

@app.get("/events", response_model=list[EventResponse], tags=["Events"])
def list_events(event_bus: EventBus = Depends(get_bus)):
    """Events published on the bus since startup."""
    return [
        EventResponse(
            event_id=e.event_id,
            event_type=e.event_type,
            source=e.source,
            timestamp=e.timestamp,
            payload=e.payload,
        )
        for e in event_bus.get_event_log()
    ]
