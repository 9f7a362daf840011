"""
Reconciliation view-model.

Turns the rows fetched for an account and period into one
ordered list and mediates the operator's actions on it:

- manual pairing: stage at most one unmatched bank line and
  one unmatched internal transaction, then link them
- unmatch: stage any number of matched rows, then unlink them
- auto reconcile: let the back end match the whole period

The two staging modes are mutually exclusive. The row list is
never patched locally: every action ends with a full reload,
since another operator may have changed the same account.
"""

import asyncio
import enum
import logging
from datetime import date
from decimal import Decimal
from typing import Protocol

from estate_recon.console.client import ReconciliationServiceError
from estate_recon.console.notifications import LoggingNotifier, Notifier
from estate_recon.models.enums import InternalTransactionType
from estate_recon.schemas.reconciliation import (
    InternalTransaction,
    ManualReconcileRequest,
    ReconciledRow,
    StatementLine,
    UnreconciledBankRow,
    UnreconciledInternalRow,
    effective_date,
)

logger = logging.getLogger(__name__)


class ReconciliationGateway(Protocol):
    """The back-end calls the view-model depends on."""

    async def list_accounts(self) -> list: ...

    async def fetch_rows(
        self, account_id: int, start_date: date, end_date: date
    ) -> list: ...

    async def auto_reconcile(
        self, account_id: int, start_date: date, end_date: date
    ) -> int | None: ...

    async def manual_reconcile(self, request: ManualReconcileRequest) -> None: ...

    async def unreconcile(self, link_id: int) -> None: ...


class DisplayState(str, enum.Enum):
    LOADING = "LOADING"
    SELECT_ACCOUNT = "SELECT_ACCOUNT"
    SELECT_PERIOD = "SELECT_PERIOD"
    NO_DATA = "NO_DATA"
    ROWS = "ROWS"


class RowStyle(str, enum.Enum):
    SELECTED_FOR_MANUAL = "SELECTED_FOR_MANUAL"
    SELECTED_FOR_UNRECONCILE = "SELECTED_FOR_UNRECONCILE"
    RECONCILED = "RECONCILED"
    UNRECONCILED_BANK = "UNRECONCILED_BANK"
    UNRECONCILED_INTERNAL = "UNRECONCILED_INTERNAL"


# --- Row presentation ---

def bank_side_type(line: StatementLine | None) -> str:
    """CR for money in, DB for money out, empty without a bank side."""
    if line is None:
        return ""
    if line.debit_amount == 0:
        return "CR"
    if line.credit_amount == 0:
        return "DB"
    return ""


def bank_amount(line: StatementLine | None) -> Decimal:
    if line is None:
        return Decimal("0")
    return line.debit_amount or line.credit_amount


def internal_side_type(txn: InternalTransaction | None) -> str:
    if txn is None:
        return ""
    if txn.type == InternalTransactionType.RECEIPT:
        return "CR"
    return "DB"


def _same_internal(a: InternalTransaction | None, b: InternalTransaction) -> bool:
    # Receipts and expenditures have separate id sequences
    return a is not None and a.type == b.type and a.id == b.id


class ReconciliationViewModel:

    def __init__(
        self,
        service: ReconciliationGateway,
        notifier: Notifier | None = None,
    ):
        self.service = service
        self.notifier = notifier or LoggingNotifier()

        self.accounts: list = []
        self.account_id: int | None = None
        self.start_date: date | None = None
        self.end_date: date | None = None

        self.rows: list = []
        self.loading = False

        self.selected_bank_item: StatementLine | None = None
        self.selected_internal_item: InternalTransaction | None = None
        self.selected_for_unreconcile: set[int] = set()

        # Bumped on every load; a response from an older load is dropped
        self._generation = 0

    # --- Filters ---

    @property
    def has_filters(self) -> bool:
        return (
            self.account_id is not None
            and self.start_date is not None
            and self.end_date is not None
        )

    async def load_accounts(self) -> None:
        try:
            self.accounts = await self.service.list_accounts()
        except ReconciliationServiceError:
            self.notifier.error("Failed to load accounts.")
            self.accounts = []

    async def set_account(self, account_id: int | None) -> None:
        self.account_id = account_id
        await self.load()

    async def set_date_range(
        self, start_date: date | None, end_date: date | None
    ) -> None:
        if start_date is not None and end_date is not None and end_date < start_date:
            end_date = start_date
        self.start_date = start_date
        self.end_date = end_date
        await self.load()

    def reset(self) -> None:
        """Forget the filters, the rows and any staged selection."""
        self._generation += 1
        self.account_id = None
        self.start_date = None
        self.end_date = None
        self.rows = []
        self.loading = False
        self.clear_selection()

    def clear_selection(self) -> None:
        self.selected_bank_item = None
        self.selected_internal_item = None
        self.selected_for_unreconcile = set()

    # --- Loading ---

    async def load(self) -> None:
        """
        Fetch the rows for the current filters.

        Without an account or a full period nothing is fetched:
        the list is emptied and the view shows a prompt instead.
        A failed fetch leaves the list empty and notifies once.
        """
        self._generation += 1
        if not self.has_filters:
            self.rows = []
            self.loading = False
            self.clear_selection()
            return

        generation = self._generation
        self.loading = True
        self.rows = []
        self.clear_selection()

        try:
            rows = await self.service.fetch_rows(
                self.account_id, self.start_date, self.end_date
            )
        except ReconciliationServiceError:
            if generation != self._generation:
                return
            self.loading = False
            self.notifier.error("Failed to load reconciliation data.")
            return

        if generation != self._generation:
            logger.debug(
                "Dropping stale reconciliation rows (load %d, current %d)",
                generation, self._generation,
            )
            return

        self.rows = sorted(rows, key=effective_date)
        self.loading = False

    @property
    def display_state(self) -> DisplayState:
        if self.loading:
            return DisplayState.LOADING
        if self.account_id is None:
            return DisplayState.SELECT_ACCOUNT
        if self.start_date is None or self.end_date is None:
            return DisplayState.SELECT_PERIOD
        if not self.rows:
            return DisplayState.NO_DATA
        return DisplayState.ROWS

    # --- Selection ---

    def click(self, row) -> None:
        """
        Toggle the row in the staging mode its variant belongs to.

        A matched row toggles its link in the unmatch set and
        drops any staged pair. An unmatched row drops the unmatch
        set and toggles its own side of the pair, leaving the
        other side as it is.
        """
        if isinstance(row, ReconciledRow):
            self.selected_for_unreconcile ^= {row.id}
            self.selected_bank_item = None
            self.selected_internal_item = None
            return

        self.selected_for_unreconcile = set()

        if isinstance(row, UnreconciledBankRow):
            current = self.selected_bank_item
            if current is not None and current.id == row.bank_statement.id:
                self.selected_bank_item = None
            else:
                self.selected_bank_item = row.bank_statement
        elif isinstance(row, UnreconciledInternalRow):
            if _same_internal(self.selected_internal_item, row.internal_transaction):
                self.selected_internal_item = None
            else:
                self.selected_internal_item = row.internal_transaction

    def row_style(self, row) -> RowStyle:
        if isinstance(row, ReconciledRow):
            if row.id in self.selected_for_unreconcile:
                return RowStyle.SELECTED_FOR_UNRECONCILE
            return RowStyle.RECONCILED
        if isinstance(row, UnreconciledBankRow):
            selected = self.selected_bank_item
            if selected is not None and selected.id == row.bank_statement.id:
                return RowStyle.SELECTED_FOR_MANUAL
            return RowStyle.UNRECONCILED_BANK
        if _same_internal(self.selected_internal_item, row.internal_transaction):
            return RowStyle.SELECTED_FOR_MANUAL
        return RowStyle.UNRECONCILED_INTERNAL

    @property
    def can_manual_reconcile(self) -> bool:
        return (
            self.selected_bank_item is not None
            and self.selected_internal_item is not None
        )

    @property
    def can_auto_reconcile(self) -> bool:
        return self.has_filters and not self.loading

    @property
    def can_unreconcile(self) -> bool:
        return bool(self.selected_for_unreconcile)

    # --- Actions ---

    async def manual_reconcile(self) -> bool:
        """
        Link the staged bank line and internal transaction.

        On failure nothing local changes, so there is nothing
        to roll back.
        """
        if not self.can_manual_reconcile:
            return False

        request = ManualReconcileRequest.for_pair(
            self.selected_bank_item.id, self.selected_internal_item
        )
        try:
            await self.service.manual_reconcile(request)
        except ReconciliationServiceError:
            self.notifier.error("Manual reconciliation failed.")
            return False

        self.notifier.success("Manual reconciliation succeeded.")
        await self.load()
        return True

    async def auto_reconcile(self) -> bool:
        """Run server-side matching for the period, then reload."""
        if not self.has_filters:
            return False

        self.loading = True
        succeeded = False
        try:
            matched = await self.service.auto_reconcile(
                self.account_id, self.start_date, self.end_date
            )
        except ReconciliationServiceError:
            self.notifier.error("Auto reconciliation failed.")
        else:
            if isinstance(matched, int):
                self.notifier.success(
                    f"Auto reconciliation matched {matched} item(s)."
                )
            else:
                self.notifier.success("Auto reconciliation completed.")
            succeeded = True
        finally:
            self.loading = False
            await self.load()
        return succeeded

    async def unreconcile_selected(self) -> bool:
        """
        Unlink every staged matched row.

        One call per link, fired independently: some may succeed
        while others fail. Any failure gives one failure notice,
        and the list is reloaded either way. An unexpected error
        is re-raised after the reload.
        """
        if not self.selected_for_unreconcile:
            return False

        link_ids = sorted(self.selected_for_unreconcile)
        results = await asyncio.gather(
            *(self.service.unreconcile(link_id) for link_id in link_ids),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        unexpected = [
            f for f in failures if not isinstance(f, ReconciliationServiceError)
        ]

        if failures:
            self.notifier.error("Failed to unreconcile the selected items.")
        else:
            self.notifier.success(f"{len(link_ids)} item(s) unreconciled.")

        self.clear_selection()
        await self.load()
        if unexpected:
            raise unexpected[0]
        return not failures
