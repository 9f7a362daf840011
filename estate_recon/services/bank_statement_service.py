"""
Bank statement service — stores imported bank lines and
lists them per account and period.

Lines are append-only. Nothing in the system edits a line
after import; reconciliation only links to it.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from estate_recon.models.bank_statement import BankStatementLine
from estate_recon.schemas.bank_statement import BankStatementCreate
from estate_recon.services.account_service import AccountService

logger = logging.getLogger(__name__)


class BankStatementService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)

    def import_lines(
        self, requests: list[BankStatementCreate]
    ) -> list[BankStatementLine]:
        """
        Store a batch of bank lines.

        Every referenced account must exist and the line currency
        must match it. If any line fails, nothing is written.
        """
        lines = []
        for request in requests:
            account = self.account_service.get_account(request.account_id)
            if account.currency != request.currency:
                raise ValueError(
                    f"Account {account.name} currency is {account.currency}, "
                    f"statement line currency is {request.currency}"
                )
            line = BankStatementLine(
                account_id=account.id,
                currency=request.currency,
                post_date=request.post_date,
                remarks=request.remarks,
                additional_desc=request.additional_desc,
                debit_amount=request.debit_amount,
                credit_amount=request.credit_amount,
                closing_balance=request.closing_balance,
            )
            self.db.add(line)
            lines.append(line)

        self.db.flush()
        logger.info("Imported %d bank statement lines", len(lines))
        return lines

    def get_line(self, line_id: int) -> BankStatementLine:
        line = self.db.get(BankStatementLine, line_id)
        if not line:
            raise ValueError(f"Bank statement {line_id} not found")
        return line

    def list_lines(
        self,
        account_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[BankStatementLine]:
        """Lines of an account, oldest first, optionally limited to a period."""
        self.account_service.get_account(account_id)

        query = select(BankStatementLine).where(
            BankStatementLine.account_id == account_id
        )
        if start_date is not None:
            query = query.where(BankStatementLine.post_date >= start_date)
        if end_date is not None:
            query = query.where(BankStatementLine.post_date <= end_date)

        lines = self.db.execute(
            query.order_by(BankStatementLine.post_date, BankStatementLine.id)
        ).scalars().all()
        return list(lines)
