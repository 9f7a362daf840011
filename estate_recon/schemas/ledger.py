"""
Pydantic schemas for receipts and expenditures.

These are the two kinds of internal (ledger-side) transactions
that bank lines are reconciled against.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from estate_recon.schemas.base import CamelModel


# --- Receipts ---

class ReceiptCreate(CamelModel):
    account_id: int
    receipt_date: date
    amount: Decimal = Field(gt=0, decimal_places=2)
    note: str = Field(default="", max_length=255)


class ReceiptResponse(CamelModel):
    id: int
    account_id: int
    receipt_date: date
    amount: Decimal
    note: str
    created_at: datetime


# --- Expenditures ---

class ExpenditureCreate(CamelModel):
    account_id: int
    expenditure_date: date
    amount: Decimal = Field(gt=0, decimal_places=2)
    note: str = Field(default="", max_length=255)


class ExpenditureResponse(CamelModel):
    id: int
    account_id: int
    expenditure_date: date
    amount: Decimal
    note: str
    created_at: datetime
