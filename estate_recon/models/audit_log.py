"""
Audit log model.

Records reconcile and unreconcile events so that every change
to the matched state of an account can be traced afterwards.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from estate_recon.models.base import Base


class AuditLog(Base):
    """
    Immutable record of a system event.

    Audit logs are append-only: never updated, never deleted,
    even when the link they describe is removed.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
