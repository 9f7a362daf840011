"""
Estate back office reconciliation — FastAPI application.

This is the entry point for the server. All routers are
registered here.
"""

from fastapi import FastAPI

from estate_recon.config import get_settings
from estate_recon.logging_config import setup_logging
from estate_recon.api.health import router as health_router
from estate_recon.api.accounts import router as accounts_router
from estate_recon.api.bank_statements import router as bank_statements_router
from estate_recon.api.ledger import router as ledger_router
from estate_recon.api.reconciliations import router as reconciliations_router

settings = get_settings()
setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Bank reconciliation for the estate back office",
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(bank_statements_router)
app.include_router(ledger_router)
app.include_router(reconciliations_router)
