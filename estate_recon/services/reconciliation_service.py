"""
Reconciliation service — links bank lines to receipts and
expenditures.

The service enforces the pairing rules:
1. Both sides exist and belong to the same account
2. Neither side is already part of a link
3. Directions agree (credit with receipt, debit with expenditure)

Every mutation writes an audit record. The caller controls
the commit, as with every other service.
"""

import json
import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from estate_recon.config import get_settings
from estate_recon.models.audit_log import AuditLog
from estate_recon.models.bank_statement import BankStatementLine
from estate_recon.models.enums import (
    DIRECTION_FOR_TYPE,
    EntryDirection,
    MatchType,
)
from estate_recon.models.expenditure import Expenditure
from estate_recon.models.receipt import Receipt
from estate_recon.models.reconciliation import ReconciliationLink
from estate_recon.schemas.reconciliation import (
    InternalTransaction,
    ManualReconcileRequest,
    ReconciledRow,
    StatementLine,
    UnreconciledBankRow,
    UnreconciledInternalRow,
    effective_date,
)
from estate_recon.services.account_service import AccountService
from estate_recon.services.bank_statement_service import BankStatementService
from estate_recon.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def clamp_range(start_date: date, end_date: date) -> tuple[date, date]:
    """An end before the start collapses the range to the start day."""
    if end_date < start_date:
        return start_date, start_date
    return start_date, end_date


def to_internal_transaction(txn: Receipt | Expenditure) -> InternalTransaction:
    return InternalTransaction(
        id=txn.id,
        type=txn.transaction_type,
        date=txn.transaction_date,
        description=txn.note,
        amount=txn.amount,
    )


class ReconciliationService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)
        self.bank_statement_service = BankStatementService(db)
        self.ledger_service = LedgerService(db)

    # --- Queries ---

    def _link_for_bank_line(self, line_id: int) -> ReconciliationLink | None:
        return self.db.execute(
            select(ReconciliationLink).where(
                ReconciliationLink.bank_statement_id == line_id
            )
        ).scalar_one_or_none()

    def _link_for_internal(
        self, txn: Receipt | Expenditure
    ) -> ReconciliationLink | None:
        column = (
            ReconciliationLink.receipt_id
            if isinstance(txn, Receipt)
            else ReconciliationLink.expenditure_id
        )
        return self.db.execute(
            select(ReconciliationLink).where(column == txn.id)
        ).scalar_one_or_none()

    def _unlinked_lines(
        self, account_id: int, start_date: date, end_date: date
    ) -> list[BankStatementLine]:
        linked = select(ReconciliationLink.bank_statement_id)
        lines = self.db.execute(
            select(BankStatementLine)
            .where(
                BankStatementLine.account_id == account_id,
                BankStatementLine.post_date >= start_date,
                BankStatementLine.post_date <= end_date,
                BankStatementLine.id.not_in(linked),
            )
            .order_by(BankStatementLine.post_date, BankStatementLine.id)
        ).scalars().all()
        return list(lines)

    def _unlinked_receipts(
        self, account_id: int, start_date: date, end_date: date
    ) -> list[Receipt]:
        # NOT IN against a NULL would exclude every row
        linked = select(ReconciliationLink.receipt_id).where(
            ReconciliationLink.receipt_id.is_not(None)
        )
        receipts = self.db.execute(
            select(Receipt)
            .where(
                Receipt.account_id == account_id,
                Receipt.receipt_date >= start_date,
                Receipt.receipt_date <= end_date,
                Receipt.id.not_in(linked),
            )
            .order_by(Receipt.receipt_date, Receipt.id)
        ).scalars().all()
        return list(receipts)

    def _unlinked_expenditures(
        self, account_id: int, start_date: date, end_date: date
    ) -> list[Expenditure]:
        linked = select(ReconciliationLink.expenditure_id).where(
            ReconciliationLink.expenditure_id.is_not(None)
        )
        expenditures = self.db.execute(
            select(Expenditure)
            .where(
                Expenditure.account_id == account_id,
                Expenditure.expenditure_date >= start_date,
                Expenditure.expenditure_date <= end_date,
                Expenditure.id.not_in(linked),
            )
            .order_by(Expenditure.expenditure_date, Expenditure.id)
        ).scalars().all()
        return list(expenditures)

    def get_rows(self, account_id: int, start_date: date, end_date: date) -> list:
        """
        Build the reconciliation view of an account for a period.

        Linked pairs are included when their bank line falls in
        the period. Rows come back ordered by effective date;
        rows on the same date keep their query order.
        """
        self.account_service.get_account(account_id)
        start_date, end_date = clamp_range(start_date, end_date)

        links = self.db.execute(
            select(ReconciliationLink)
            .join(ReconciliationLink.bank_statement)
            .where(
                BankStatementLine.account_id == account_id,
                BankStatementLine.post_date >= start_date,
                BankStatementLine.post_date <= end_date,
            )
            .order_by(BankStatementLine.post_date, BankStatementLine.id)
        ).scalars().all()

        rows: list = [
            ReconciledRow(
                id=link.id,
                date=link.bank_statement.post_date,
                bank_statement=StatementLine.model_validate(
                    link.bank_statement
                ),
                internal_transaction=to_internal_transaction(
                    link.internal_transaction
                ),
            )
            for link in links
        ]
        rows.extend(
            UnreconciledBankRow(
                date=line.post_date,
                bank_statement=StatementLine.model_validate(line),
            )
            for line in self._unlinked_lines(account_id, start_date, end_date)
        )
        internal = (
            self._unlinked_receipts(account_id, start_date, end_date)
            + self._unlinked_expenditures(account_id, start_date, end_date)
        )
        rows.extend(
            UnreconciledInternalRow(
                date=txn.transaction_date,
                internal_transaction=to_internal_transaction(txn),
            )
            for txn in internal
        )

        return sorted(rows, key=effective_date)

    def get_link(self, link_id: int) -> ReconciliationLink:
        link = self.db.get(ReconciliationLink, link_id)
        if not link:
            raise ValueError(f"Reconciliation {link_id} not found")
        return link

    # --- Mutations ---

    def _audit(self, event_type: str, **details) -> None:
        self.db.add(AuditLog(
            event_type=event_type,
            details=json.dumps(details, default=str),
        ))

    def _create_link(
        self,
        line: BankStatementLine,
        txn: Receipt | Expenditure,
        match_type: MatchType,
    ) -> ReconciliationLink:
        link = ReconciliationLink(
            bank_statement_id=line.id,
            match_type=match_type,
        )
        if isinstance(txn, Receipt):
            link.receipt_id = txn.id
        else:
            link.expenditure_id = txn.id
        self.db.add(link)
        return link

    def manual_reconcile(self, request: ManualReconcileRequest) -> ReconciliationLink:
        """
        Link a bank line to the receipt or expenditure an
        operator picked for it.

        Amounts are not compared: the operator may pair lines
        whose amounts differ (bank charges, rounding).
        """
        line = self.bank_statement_service.get_line(request.bank_statement_id)
        if request.receipt_id is not None:
            txn = self.ledger_service.get_receipt(request.receipt_id)
        else:
            txn = self.ledger_service.get_expenditure(request.expenditure_id)

        if txn.account_id != line.account_id:
            raise ValueError(
                f"Bank statement {line.id} and {txn.transaction_type.value.lower()} "
                f"{txn.id} belong to different accounts"
            )
        if self._link_for_bank_line(line.id):
            raise ValueError(f"Bank statement {line.id} is already reconciled")
        if self._link_for_internal(txn):
            raise ValueError(
                f"{txn.transaction_type.value.capitalize()} {txn.id} "
                f"is already reconciled"
            )
        if DIRECTION_FOR_TYPE[txn.transaction_type] != line.direction:
            raise ValueError(
                f"Cannot match a bank {line.direction.value.lower()} with "
                f"a {txn.transaction_type.value.lower()}"
            )

        link = self._create_link(line, txn, MatchType.MANUAL)
        self.db.flush()
        self._audit(
            "RECONCILE_MANUAL",
            link_id=link.id,
            bank_statement_id=line.id,
            receipt_id=link.receipt_id,
            expenditure_id=link.expenditure_id,
        )
        self.db.flush()
        logger.info(
            "Manually reconciled bank statement %s with %s %s",
            line.id, txn.transaction_type.value, txn.id,
        )
        return link

    def auto_reconcile(
        self, account_id: int, start_date: date, end_date: date
    ) -> int:
        """
        Match unlinked bank lines of a period automatically.

        A candidate has the same direction, exactly the same
        amount, and a date within the configured tolerance of
        the post date. Bank lines are processed oldest first;
        the nearest date wins and ties go to the lowest id.
        Each internal transaction is used at most once.

        Returns the number of links created.
        """
        self.account_service.get_account(account_id)
        start_date, end_date = clamp_range(start_date, end_date)
        tolerance = timedelta(days=get_settings().AUTO_MATCH_DATE_TOLERANCE_DAYS)

        lines = self._unlinked_lines(account_id, start_date, end_date)
        pools: dict[EntryDirection, list] = {
            EntryDirection.CREDIT: self._unlinked_receipts(
                account_id, start_date - tolerance, end_date + tolerance
            ),
            EntryDirection.DEBIT: self._unlinked_expenditures(
                account_id, start_date - tolerance, end_date + tolerance
            ),
        }

        matched = 0
        for line in lines:
            pool = pools[line.direction]
            candidates = [
                txn for txn in pool
                if txn.amount == line.amount
                and abs(txn.transaction_date - line.post_date) <= tolerance
            ]
            if not candidates:
                continue

            best = min(
                candidates,
                key=lambda t: (abs(t.transaction_date - line.post_date), t.id),
            )
            pool.remove(best)
            self._create_link(line, best, MatchType.AUTO)
            matched += 1

        self.db.flush()
        self._audit(
            "RECONCILE_AUTO",
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            matched=matched,
        )
        self.db.flush()
        logger.info(
            "Auto reconcile for account %s (%s to %s) matched %d lines",
            account_id, start_date, end_date, matched,
        )
        return matched

    def unreconcile(self, link_id: int) -> None:
        """Delete a link, returning both sides to unmatched."""
        link = self.get_link(link_id)
        self._audit(
            "UNRECONCILE",
            link_id=link.id,
            bank_statement_id=link.bank_statement_id,
            receipt_id=link.receipt_id,
            expenditure_id=link.expenditure_id,
            match_type=link.match_type.value,
        )
        self.db.delete(link)
        self.db.flush()
        logger.info("Unreconciled link %s", link_id)
