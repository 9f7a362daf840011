"""
Bank statement API endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from estate_recon.models.base import get_db
from estate_recon.services.bank_statement_service import BankStatementService
from estate_recon.schemas.bank_statement import (
    BankStatementCreate,
    BankStatementResponse,
)

router = APIRouter(prefix="/bank-statements", tags=["Bank Statements"])


@router.get("", response_model=list[BankStatementResponse])
def list_bank_statements(
    account_id: int = Query(alias="accountId"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """Bank lines of an account, oldest first."""
    service = BankStatementService(db)
    try:
        return service.list_lines(account_id, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/bulk",
    response_model=list[BankStatementResponse],
    status_code=201,
)
def import_bank_statements(
    request: list[BankStatementCreate],
    db: Session = Depends(get_db),
):
    """
    Import a batch of bank lines.

    The batch is all-or-nothing: one invalid line rejects
    the whole import.
    """
    service = BankStatementService(db)
    try:
        lines = service.import_lines(request)
        db.commit()
        return lines
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
