"""reconciliation schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "account_type",
            sa.Enum("BANK", "CASH", name="account_type_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(100), nullable=False),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "bank_statements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("post_date", sa.Date(), nullable=False),
        sa.Column("remarks", sa.String(255), nullable=False),
        sa.Column("additional_desc", sa.String(255), nullable=False),
        sa.Column("debit_amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("credit_amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("closing_balance", sa.Numeric(19, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_bank_statements_account_id", "bank_statements", ["account_id"])
    op.create_index("ix_bank_statements_post_date", "bank_statements", ["post_date"])

    for table, date_column in (
        ("receipts", "receipt_date"),
        ("expenditures", "expenditure_date"),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
            sa.Column(date_column, sa.Date(), nullable=False),
            sa.Column("amount", sa.Numeric(19, 2), nullable=False),
            sa.Column("note", sa.String(255), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
        op.create_index(f"ix_{table}_account_id", table, ["account_id"])
        op.create_index(f"ix_{table}_{date_column}", table, [date_column])

    op.create_table(
        "reconciliations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "bank_statement_id", sa.Integer(),
            sa.ForeignKey("bank_statements.id"), nullable=False, unique=True,
        ),
        sa.Column(
            "receipt_id", sa.Integer(),
            sa.ForeignKey("receipts.id"), nullable=True, unique=True,
        ),
        sa.Column(
            "expenditure_id", sa.Integer(),
            sa.ForeignKey("expenditures.id"), nullable=True, unique=True,
        ),
        sa.Column(
            "match_type",
            sa.Enum("MANUAL", "AUTO", name="match_type_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "(receipt_id IS NULL) <> (expenditure_id IS NULL)",
            name="ck_reconciliation_one_internal_side",
        ),
    )


def downgrade() -> None:
    op.drop_table("reconciliations")
    for table, date_column in (
        ("expenditures", "expenditure_date"),
        ("receipts", "receipt_date"),
    ):
        op.drop_index(f"ix_{table}_{date_column}", table_name=table)
        op.drop_index(f"ix_{table}_account_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_bank_statements_post_date", table_name="bank_statements")
    op.drop_index("ix_bank_statements_account_id", table_name="bank_statements")
    op.drop_table("bank_statements")
    op.drop_table("audit_log")
    op.drop_table("accounts")
