"""
Domain models for the account opening workflow.

These models describe what flows between the account opening service and its
collaborators: the applicant's identifying fields, the background check
outcome, and the record the repository keeps for an opened account.

Design decisions:
- Using Pydantic for validation and serialization
- Background check results are frozen; the service hands the exact instance
  it received to the repository
- Applicant fields are passed through opaquely, no format validation
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class AccountOpeningStatus(str, Enum):
    """Outcome of a single open_account call."""
    OPENED = "OPENED"         # Background check passed, account persisted and announced
    DECLINED = "DECLINED"     # Unacceptable risk or no background check result


class RiskProfile(str, Enum):
    """
    Risk labels produced by the simulated background check service.

    The risk profile is free-form on the wire; real providers may send labels
    not listed here.
    """
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# =============================================================================
# Core Domain Models
# =============================================================================

class BackgroundCheckResults(BaseModel):
    """
    Result of risk-assessing an applicant.

    Produced once per open_account call and never persisted on its own;
    it is stored only as part of an AccountRecord.
    """
    risk_profile: str = Field(..., description="Categorical risk label")
    upper_account_limit: int = Field(..., ge=0, description="Maximum balance allowed")

    model_config = ConfigDict(frozen=True)


class Applicant(BaseModel):
    """Identifying fields supplied by whoever wants to open an account."""
    first_name: str
    last_name: str
    tax_id: str
    date_of_birth: date


class AccountRecord(BaseModel):
    """
    What the account repository keeps for an opened account.

    Bundles the applicant's fields with the background check that
    justified opening the account.
    """
    account_id: str = Field(..., description="Issued account identifier")
    first_name: str
    last_name: str
    tax_id: str
    date_of_birth: date
    background_check: BackgroundCheckResults
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def applicant(self) -> Applicant:
        return Applicant(
            first_name=self.first_name,
            last_name=self.last_name,
            tax_id=self.tax_id,
            date_of_birth=self.date_of_birth,
        )
