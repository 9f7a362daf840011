"""
Pydantic schemas for bank statement lines.
"""

from datetime import date
from decimal import Decimal

from pydantic import Field, model_validator

from estate_recon.schemas.base import CamelModel


class BankStatementCreate(CamelModel):
    """
    One imported bank line.

    Exactly one of debit_amount and credit_amount must be
    non-zero: a line is either money out or money in.
    """
    account_id: int
    currency: str = Field(default="IDR", min_length=3, max_length=3)
    post_date: date
    remarks: str = Field(default="", max_length=255)
    additional_desc: str = Field(default="", max_length=255)
    debit_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    credit_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    closing_balance: Decimal = Field(default=Decimal("0"), decimal_places=2)

    @model_validator(mode="after")
    def exactly_one_side(self) -> "BankStatementCreate":
        if (self.debit_amount > 0) == (self.credit_amount > 0):
            raise ValueError(
                "exactly one of debitAmount and creditAmount must be non-zero"
            )
        return self


class BankStatementResponse(CamelModel):
    id: int
    account_id: int
    currency: str
    post_date: date
    remarks: str
    additional_desc: str
    debit_amount: Decimal
    credit_amount: Decimal
    closing_balance: Decimal
