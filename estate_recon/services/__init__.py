"""Business logic services."""

from estate_recon.services.account_service import AccountService
from estate_recon.services.bank_statement_service import BankStatementService
from estate_recon.services.ledger_service import LedgerService
from estate_recon.services.reconciliation_service import ReconciliationService

__all__ = [
    "AccountService",
    "BankStatementService",
    "LedgerService",
    "ReconciliationService",
]
