"""
Receipt model.

Money received into an account, recorded from the receipt
entry pages. On the reconciliation page a receipt is compared
against bank credits.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estate_recon.models.base import Base
from estate_recon.models.enums import InternalTransactionType


class Receipt(Base):
    __tablename__ = "receipts"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    receipt_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    note: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    account: Mapped["BankAccount"] = relationship()

    transaction_type = InternalTransactionType.RECEIPT

    @property
    def transaction_date(self) -> date:
        return self.receipt_date

    def __repr__(self) -> str:
        return f"<Receipt {self.receipt_date} {self.amount}>"
