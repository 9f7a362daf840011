"""
Receipt and expenditure API endpoints.

Thin HTTP layer over the LedgerService: status codes and
response shapes here, business rules in the service.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from estate_recon.models.base import get_db
from estate_recon.services.ledger_service import LedgerService
from estate_recon.schemas.ledger import (
    ReceiptCreate,
    ReceiptResponse,
    ExpenditureCreate,
    ExpenditureResponse,
)

router = APIRouter(tags=["Ledger"])


@router.get("/receipts", response_model=list[ReceiptResponse])
def list_receipts(
    account_id: int = Query(alias="accountId"),
    db: Session = Depends(get_db),
):
    try:
        return LedgerService(db).list_receipts(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/receipts/bulk",
    response_model=list[ReceiptResponse],
    status_code=201,
)
def create_receipts(
    request: list[ReceiptCreate],
    db: Session = Depends(get_db),
):
    """Record a batch of receipts."""
    service = LedgerService(db)
    try:
        receipts = service.create_receipts(request)
        db.commit()
        return receipts
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/expenditures", response_model=list[ExpenditureResponse])
def list_expenditures(
    account_id: int = Query(alias="accountId"),
    db: Session = Depends(get_db),
):
    try:
        return LedgerService(db).list_expenditures(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/expenditures/bulk",
    response_model=list[ExpenditureResponse],
    status_code=201,
)
def create_expenditures(
    request: list[ExpenditureCreate],
    db: Session = Depends(get_db),
):
    """Record a batch of expenditures."""
    service = LedgerService(db)
    try:
        expenditures = service.create_expenditures(request)
        db.commit()
        return expenditures
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
