"""
Shared enumerations for database models and API schemas.

Python enums mapped to database enums ensure that only valid
values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """Kind of money account a statement is imported for."""
    BANK = "BANK"
    CASH = "CASH"


class InternalTransactionType(str, enum.Enum):
    """
    Ledger-side movement kind.

    A RECEIPT is compared against bank credits, an
    EXPENDITURE against bank debits.
    """
    RECEIPT = "RECEIPT"
    EXPENDITURE = "EXPENDITURE"


class EntryDirection(str, enum.Enum):
    """Direction of a bank statement line."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class MatchType(str, enum.Enum):
    """How a reconciliation link was created."""
    MANUAL = "MANUAL"
    AUTO = "AUTO"


# Which bank direction each internal kind is compared against
DIRECTION_FOR_TYPE: dict[InternalTransactionType, EntryDirection] = {
    InternalTransactionType.RECEIPT: EntryDirection.CREDIT,
    InternalTransactionType.EXPENDITURE: EntryDirection.DEBIT,
}
