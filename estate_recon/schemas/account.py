"""
Pydantic schemas for money accounts.
"""

from datetime import datetime

from pydantic import Field

from estate_recon.models.enums import AccountType
from estate_recon.schemas.base import CamelModel


class AccountCreate(CamelModel):
    """Request to register a new bank or cash account."""
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType = AccountType.BANK
    currency: str = Field(default="IDR", min_length=3, max_length=3)


class AccountResponse(CamelModel):
    id: int
    name: str
    account_type: AccountType
    currency: str
    is_active: bool
    created_at: datetime
