"""
Tests for the BankStatementService.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from estate_recon.models.enums import EntryDirection
from estate_recon.schemas.bank_statement import BankStatementCreate
from estate_recon.services.bank_statement_service import BankStatementService

from seed import bank_credit, bank_debit, create_account


class TestImport:

    def test_import_credit_line(self, db_session):
        account = create_account(db_session)
        line = bank_credit(db_session, account, date(2026, 3, 5), "100000")

        assert line.direction == EntryDirection.CREDIT
        assert line.amount == Decimal("100000")
        assert line.debit_amount == Decimal("0")

    def test_import_debit_line(self, db_session):
        account = create_account(db_session)
        line = bank_debit(db_session, account, date(2026, 3, 5), "2500")

        assert line.direction == EntryDirection.DEBIT
        assert line.amount == Decimal("2500")

    def test_line_needs_exactly_one_side(self):
        with pytest.raises(ValidationError, match="exactly one"):
            BankStatementCreate(
                account_id=1,
                post_date=date(2026, 3, 5),
                debit_amount=Decimal("10"),
                credit_amount=Decimal("10"),
            )
        with pytest.raises(ValidationError, match="exactly one"):
            BankStatementCreate(account_id=1, post_date=date(2026, 3, 5))

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            BankStatementCreate(
                account_id=1,
                post_date=date(2026, 3, 5),
                credit_amount=Decimal("-5"),
            )

    def test_currency_mismatch_rejected(self, db_session):
        account = create_account(db_session)
        service = BankStatementService(db_session)

        with pytest.raises(ValueError, match="currency"):
            service.import_lines([BankStatementCreate(
                account_id=account.id,
                currency="USD",
                post_date=date(2026, 3, 5),
                credit_amount=Decimal("10"),
            )])

    def test_unknown_account_rejected(self, db_session):
        service = BankStatementService(db_session)

        with pytest.raises(ValueError, match="not found"):
            service.import_lines([BankStatementCreate(
                account_id=404,
                post_date=date(2026, 3, 5),
                credit_amount=Decimal("10"),
            )])


class TestListLines:

    def test_lines_filtered_by_period_oldest_first(self, db_session):
        account = create_account(db_session)
        bank_credit(db_session, account, date(2026, 3, 20), "1")
        bank_credit(db_session, account, date(2026, 2, 1), "2")
        bank_debit(db_session, account, date(2026, 3, 2), "3")

        lines = BankStatementService(db_session).list_lines(
            account.id, date(2026, 3, 1), date(2026, 3, 31)
        )

        assert [line.post_date for line in lines] == [
            date(2026, 3, 2), date(2026, 3, 20),
        ]

    def test_without_period_returns_everything(self, db_session):
        account = create_account(db_session)
        bank_credit(db_session, account, date(2026, 1, 1), "1")
        bank_credit(db_session, account, date(2026, 6, 1), "2")

        assert len(BankStatementService(db_session).list_lines(account.id)) == 2
