"""
Reconciliation link model.

A link states that one bank statement line and one internal
transaction (a receipt or an expenditure) are the same
real-world movement. Unreconciling deletes the link and
returns both sides to "unmatched".
"""

from datetime import datetime

from sqlalchemy import (
    DateTime, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estate_recon.models.base import Base
from estate_recon.models.enums import MatchType


class ReconciliationLink(Base):
    """
    One bank line paired with exactly one internal transaction.

    Unique constraints keep every bank line, receipt and
    expenditure in at most one link.
    """

    __tablename__ = "reconciliations"
    __table_args__ = (
        CheckConstraint(
            "(receipt_id IS NULL) <> (expenditure_id IS NULL)",
            name="ck_reconciliation_one_internal_side",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    bank_statement_id: Mapped[int] = mapped_column(
        ForeignKey("bank_statements.id"), unique=True, nullable=False
    )
    receipt_id: Mapped[int | None] = mapped_column(
        ForeignKey("receipts.id"), unique=True, nullable=True
    )
    expenditure_id: Mapped[int | None] = mapped_column(
        ForeignKey("expenditures.id"), unique=True, nullable=True
    )
    match_type: Mapped[MatchType] = mapped_column(
        SAEnum(MatchType, name="match_type_enum", create_constraint=True),
        nullable=False,
        default=MatchType.MANUAL,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    bank_statement: Mapped["BankStatementLine"] = relationship()
    receipt: Mapped["Receipt | None"] = relationship()
    expenditure: Mapped["Expenditure | None"] = relationship()

    @property
    def internal_transaction(self):
        """The receipt or expenditure on the ledger side."""
        return self.receipt if self.receipt_id is not None else self.expenditure

    def __repr__(self) -> str:
        return (
            f"<ReconciliationLink {self.id} bank={self.bank_statement_id} "
            f"{self.match_type.value}>"
        )
