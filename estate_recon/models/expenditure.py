"""
Expenditure model.

Money paid out of an account. On the reconciliation page an
expenditure is compared against bank debits.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estate_recon.models.base import Base
from estate_recon.models.enums import InternalTransactionType


class Expenditure(Base):
    __tablename__ = "expenditures"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    expenditure_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    note: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    account: Mapped["BankAccount"] = relationship()

    transaction_type = InternalTransactionType.EXPENDITURE

    @property
    def transaction_date(self) -> date:
        return self.expenditure_date

    def __repr__(self) -> str:
        return f"<Expenditure {self.expenditure_date} {self.amount}>"
