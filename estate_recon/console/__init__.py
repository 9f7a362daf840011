"""Operator console: session, back-end client and reconciliation view-model."""

from estate_recon.console.client import (
    ReconciliationClient,
    ReconciliationServiceError,
)
from estate_recon.console.notifications import LoggingNotifier, Notifier
from estate_recon.console.session import ConsoleSession
from estate_recon.console.view_model import (
    DisplayState,
    ReconciliationViewModel,
    RowStyle,
)

__all__ = [
    "ConsoleSession",
    "DisplayState",
    "LoggingNotifier",
    "Notifier",
    "ReconciliationClient",
    "ReconciliationServiceError",
    "ReconciliationViewModel",
    "RowStyle",
]
