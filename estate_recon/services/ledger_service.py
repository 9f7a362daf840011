"""
Ledger service — receipts and expenditures.

These are the internal side of a reconciliation: money the
back office recorded as received or paid, to be matched
against what the bank actually reports.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from estate_recon.models.receipt import Receipt
from estate_recon.models.expenditure import Expenditure
from estate_recon.schemas.ledger import ReceiptCreate, ExpenditureCreate
from estate_recon.services.account_service import AccountService

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Records and lists internal transactions.

    The caller controls the transaction boundary: methods
    flush but never commit.
    """

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)

    def create_receipts(self, requests: list[ReceiptCreate]) -> list[Receipt]:
        receipts = []
        for request in requests:
            self.account_service.get_account(request.account_id)
            receipt = Receipt(
                account_id=request.account_id,
                receipt_date=request.receipt_date,
                amount=request.amount,
                note=request.note,
            )
            self.db.add(receipt)
            receipts.append(receipt)

        self.db.flush()
        logger.info("Recorded %d receipts", len(receipts))
        return receipts

    def create_expenditures(
        self, requests: list[ExpenditureCreate]
    ) -> list[Expenditure]:
        expenditures = []
        for request in requests:
            self.account_service.get_account(request.account_id)
            expenditure = Expenditure(
                account_id=request.account_id,
                expenditure_date=request.expenditure_date,
                amount=request.amount,
                note=request.note,
            )
            self.db.add(expenditure)
            expenditures.append(expenditure)

        self.db.flush()
        logger.info("Recorded %d expenditures", len(expenditures))
        return expenditures

    def get_receipt(self, receipt_id: int) -> Receipt:
        receipt = self.db.get(Receipt, receipt_id)
        if not receipt:
            raise ValueError(f"Receipt {receipt_id} not found")
        return receipt

    def get_expenditure(self, expenditure_id: int) -> Expenditure:
        expenditure = self.db.get(Expenditure, expenditure_id)
        if not expenditure:
            raise ValueError(f"Expenditure {expenditure_id} not found")
        return expenditure

    def list_receipts(
        self,
        account_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Receipt]:
        """Receipts of an account, oldest first."""
        self.account_service.get_account(account_id)

        query = select(Receipt).where(Receipt.account_id == account_id)
        if start_date is not None:
            query = query.where(Receipt.receipt_date >= start_date)
        if end_date is not None:
            query = query.where(Receipt.receipt_date <= end_date)
        receipts = self.db.execute(
            query.order_by(Receipt.receipt_date, Receipt.id)
        ).scalars().all()
        return list(receipts)

    def list_expenditures(
        self,
        account_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Expenditure]:
        """Expenditures of an account, oldest first."""
        self.account_service.get_account(account_id)

        query = select(Expenditure).where(Expenditure.account_id == account_id)
        if start_date is not None:
            query = query.where(Expenditure.expenditure_date >= start_date)
        if end_date is not None:
            query = query.where(Expenditure.expenditure_date <= end_date)
        expenditures = self.db.execute(
            query.order_by(Expenditure.expenditure_date, Expenditure.id)
        ).scalars().all()
        return list(expenditures)
