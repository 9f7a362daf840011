"""
Account service — manages the bank and cash accounts that
statements and ledger movements are recorded against.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from estate_recon.models.account import BankAccount
from estate_recon.schemas.account import AccountCreate


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> BankAccount:
        """
        Register a new account.

        Raises ValueError if an account with the same name exists.
        """
        existing = self.db.execute(
            select(BankAccount).where(BankAccount.name == request.name)
        ).scalar_one_or_none()

        if existing:
            raise ValueError(f"Account with name '{request.name}' already exists")

        account = BankAccount(
            name=request.name,
            account_type=request.account_type,
            currency=request.currency,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_account(self, account_id: int) -> BankAccount:
        """Get an account by ID."""
        account = self.db.get(BankAccount, account_id)
        if not account:
            raise ValueError(f"Account {account_id} not found")
        return account

    def list_accounts(self) -> list[BankAccount]:
        """All accounts, ordered by name."""
        accounts = self.db.execute(
            select(BankAccount).order_by(BankAccount.name)
        ).scalars().all()
        return list(accounts)
