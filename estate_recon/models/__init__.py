"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from estate_recon.models.base import Base
from estate_recon.models.enums import (
    AccountType,
    InternalTransactionType,
    EntryDirection,
    MatchType,
)
from estate_recon.models.audit_log import AuditLog
from estate_recon.models.account import BankAccount
from estate_recon.models.bank_statement import BankStatementLine
from estate_recon.models.receipt import Receipt
from estate_recon.models.expenditure import Expenditure
from estate_recon.models.reconciliation import ReconciliationLink

__all__ = [
    "Base",
    "AccountType",
    "InternalTransactionType",
    "EntryDirection",
    "MatchType",
    "AuditLog",
    "BankAccount",
    "BankStatementLine",
    "Receipt",
    "Expenditure",
    "ReconciliationLink",
]
