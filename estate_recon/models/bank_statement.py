"""
Bank statement line model.

One imported bank transaction. Lines are immutable once
imported: reconciliation references them, never changes them.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estate_recon.models.base import Base
from estate_recon.models.enums import EntryDirection


class BankStatementLine(Base):
    """
    A single debit or credit on the bank side.

    Exactly one of debit_amount and credit_amount is non-zero.
    The BankStatementService enforces this on import.
    """

    __tablename__ = "bank_statements"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="IDR"
    )
    post_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    remarks: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    additional_desc: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    debit_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False, default=Decimal("0")
    )
    credit_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False, default=Decimal("0")
    )
    closing_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    account: Mapped["BankAccount"] = relationship()

    @property
    def direction(self) -> EntryDirection:
        return EntryDirection.DEBIT if self.debit_amount else EntryDirection.CREDIT

    @property
    def amount(self) -> Decimal:
        return self.debit_amount or self.credit_amount

    def __repr__(self) -> str:
        return (
            f"<BankStatementLine {self.post_date} "
            f"{self.direction.value} {self.amount}>"
        )
