"""
Test doubles and row builders for the reconciliation console.

FakeGateway stands in for the back end: it returns canned
rows, records every call, and fails on demand.
"""

from datetime import date
from decimal import Decimal

from estate_recon.console.client import ReconciliationServiceError
from estate_recon.models.enums import InternalTransactionType
from estate_recon.schemas.reconciliation import (
    InternalTransaction,
    ReconciledRow,
    StatementLine,
    UnreconciledBankRow,
    UnreconciledInternalRow,
)


def bank_line(line_id, post_date, credit="0", debit="0", remarks="TRF"):
    return StatementLine(
        id=line_id,
        currency="IDR",
        post_date=post_date,
        remarks=remarks,
        additional_desc="",
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        closing_balance=Decimal("0"),
    )


def internal(txn_id, txn_date, amount, kind=InternalTransactionType.RECEIPT):
    return InternalTransaction(
        id=txn_id,
        type=kind,
        date=txn_date,
        description="",
        amount=Decimal(amount),
    )


def bank_row(line_id, post_date, credit="0", debit="0"):
    return UnreconciledBankRow(
        date=post_date,
        bank_statement=bank_line(line_id, post_date, credit=credit, debit=debit),
    )


def internal_row(txn_id, txn_date, amount, kind=InternalTransactionType.RECEIPT):
    return UnreconciledInternalRow(
        date=txn_date,
        internal_transaction=internal(txn_id, txn_date, amount, kind),
    )


def reconciled_row(link_id, post_date, amount="100"):
    return ReconciledRow(
        id=link_id,
        date=post_date,
        bank_statement=bank_line(100 + link_id, post_date, credit=amount),
        internal_transaction=internal(200 + link_id, post_date, amount),
    )


class FakeGateway:

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.accounts = []
        self.matched = 0
        self.fail: set[str] = set()
        self.fail_link_ids: set[int] = set()

        self.fetch_calls = []
        self.manual_requests = []
        self.auto_calls = []
        self.unreconcile_calls = []

    def _maybe_fail(self, operation):
        if operation in self.fail:
            raise ReconciliationServiceError(f"{operation} failed", 500)

    async def list_accounts(self):
        self._maybe_fail("list_accounts")
        return list(self.accounts)

    async def fetch_rows(self, account_id, start_date, end_date):
        self.fetch_calls.append((account_id, start_date, end_date))
        self._maybe_fail("fetch_rows")
        return list(self.rows)

    async def auto_reconcile(self, account_id, start_date, end_date):
        self.auto_calls.append((account_id, start_date, end_date))
        self._maybe_fail("auto_reconcile")
        return self.matched

    async def manual_reconcile(self, request):
        self.manual_requests.append(request)
        self._maybe_fail("manual_reconcile")

    async def unreconcile(self, link_id):
        self.unreconcile_calls.append(link_id)
        if link_id in self.fail_link_ids:
            raise ReconciliationServiceError(f"link {link_id} failed", 409)


class RecordingNotifier:

    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


MARCH_1 = date(2026, 3, 1)
MARCH_31 = date(2026, 3, 31)
