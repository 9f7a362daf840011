"""
Money account model.

A bank or cash account of the estate. Bank statement lines,
receipts and expenditures all belong to one account, and a
reconciliation is always run for a single account.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from estate_recon.models.base import Base
from estate_recon.models.enums import AccountType


class BankAccount(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum", create_constraint=True),
        nullable=False,
        default=AccountType.BANK,
    )
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="IDR"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<BankAccount {self.name} ({self.account_type.value})>"
