"""
Pydantic schemas for reconciliation.

A reconciliation row is a closed sum type discriminated on
`status`. Each variant declares the sides it carries as
required fields, so a RECONCILED row without an internal
transaction (or an unmatched row with both sides) cannot be
constructed.
"""

import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter, model_validator

from estate_recon.models.enums import InternalTransactionType, MatchType
from estate_recon.schemas.base import CamelModel


class StatementLine(CamelModel):
    """
    The bank side of a reconciliation row.

    Rows are always fetched for one account, so the line does
    not repeat its account id. Free-text fields may be null.
    """
    id: int
    currency: str = "IDR"
    post_date: datetime.date
    remarks: str | None = ""
    additional_desc: str | None = ""
    debit_amount: Decimal = Decimal("0")
    credit_amount: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")


class InternalTransaction(CamelModel):
    """A receipt or an expenditure, seen from the reconciliation page."""
    id: int
    type: InternalTransactionType
    date: datetime.date
    description: str | None = ""
    amount: Decimal = Field(gt=0)


# --- Rows ---

class ReconciledRow(CamelModel):
    status: Literal["RECONCILED"] = "RECONCILED"
    id: int
    date: datetime.date
    bank_statement: StatementLine
    internal_transaction: InternalTransaction


class UnreconciledBankRow(CamelModel):
    status: Literal["UNRECONCILED_BANK"] = "UNRECONCILED_BANK"
    date: datetime.date
    bank_statement: StatementLine


class UnreconciledInternalRow(CamelModel):
    status: Literal["UNRECONCILED_INTERNAL"] = "UNRECONCILED_INTERNAL"
    date: datetime.date
    internal_transaction: InternalTransaction


ReconciliationRow = Annotated[
    Union[ReconciledRow, UnreconciledBankRow, UnreconciledInternalRow],
    Field(discriminator="status"),
]

ReconciliationRows = TypeAdapter(list[ReconciliationRow])


def effective_date(row) -> datetime.date:
    """Bank post date when the row has a bank side, else the ledger date."""
    bank = getattr(row, "bank_statement", None)
    if bank is not None:
        return bank.post_date
    return row.internal_transaction.date


# --- Requests ---

class ManualReconcileRequest(CamelModel):
    """
    Pair one bank line with one internal transaction.

    Exactly one of receipt_id and expenditure_id is set,
    depending on the kind of the internal transaction.
    """
    bank_statement_id: int
    receipt_id: int | None = None
    expenditure_id: int | None = None

    @model_validator(mode="after")
    def exactly_one_internal_side(self) -> "ManualReconcileRequest":
        if (self.receipt_id is None) == (self.expenditure_id is None):
            raise ValueError(
                "exactly one of receiptId and expenditureId must be set"
            )
        return self

    @classmethod
    def for_pair(
        cls, bank_statement_id: int, internal: InternalTransaction
    ) -> "ManualReconcileRequest":
        """Build the request for a staged bank line and internal transaction."""
        if internal.type == InternalTransactionType.RECEIPT:
            return cls(bank_statement_id=bank_statement_id, receipt_id=internal.id)
        return cls(bank_statement_id=bank_statement_id, expenditure_id=internal.id)


# --- Responses ---

class ReconciliationLinkResponse(CamelModel):
    id: int
    bank_statement_id: int
    receipt_id: int | None
    expenditure_id: int | None
    match_type: MatchType
    created_at: datetime.datetime


class AutoReconcileResponse(CamelModel):
    matched: int
