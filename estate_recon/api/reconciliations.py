"""
Reconciliation API endpoints.

The contract consumed by the reconciliation console:
list rows for an account and period, match manually, match
automatically, and remove a match.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from estate_recon.models.base import get_db
from estate_recon.services.reconciliation_service import ReconciliationService
from estate_recon.schemas.reconciliation import (
    AutoReconcileResponse,
    ManualReconcileRequest,
    ReconciliationLinkResponse,
    ReconciliationRow,
)

router = APIRouter(prefix="/reconciliations", tags=["Reconciliations"])


@router.get("", response_model=list[ReconciliationRow])
def get_reconciliation_rows(
    account_id: int = Query(alias="accountId"),
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    Matched pairs and unmatched lines of an account, ordered
    by effective date.
    """
    service = ReconciliationService(db)
    try:
        return service.get_rows(account_id, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/manual",
    response_model=ReconciliationLinkResponse,
    status_code=201,
)
def manual_reconcile(
    request: ManualReconcileRequest,
    db: Session = Depends(get_db),
):
    """Link one bank line to one receipt or expenditure."""
    service = ReconciliationService(db)
    try:
        link = service.manual_reconcile(request)
        db.commit()
        return link
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/auto", response_model=AutoReconcileResponse)
def auto_reconcile(
    account_id: int = Query(alias="accountId"),
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    db: Session = Depends(get_db),
):
    """Run server-side matching over the period."""
    service = ReconciliationService(db)
    try:
        matched = service.auto_reconcile(account_id, start_date, end_date)
        db.commit()
        return AutoReconcileResponse(matched=matched)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{link_id}", status_code=204)
def unreconcile(
    link_id: int,
    db: Session = Depends(get_db),
):
    """Remove a match, returning both sides to unmatched."""
    service = ReconciliationService(db)
    try:
        service.unreconcile(link_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
