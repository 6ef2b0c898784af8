"""Invoice routes for tenants, plus the public share-link lookup."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.exceptions import InvoiceNumberConflict
from backend.app.core.security import get_current_user
from backend.app.crud.crud_client import client_crud
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.db.session import get_db
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.schemas.invoice import (
    InvoiceCreate,
    InvoiceListRead,
    InvoiceRead,
    InvoiceStatus,
    InvoiceStatusUpdate,
    InvoiceUpdate,
    PublicInvoiceRead,
)
from backend.app.services.invoices import create_invoice, replace_invoice

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _get_owned_invoice(db: Session, invoice_id: int, owner_id: int) -> Invoice:
    invoice = invoice_crud.get(db, invoice_id=invoice_id, owner_id=owner_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


def _check_client(db: Session, client_id: int, owner_id: int) -> None:
    if not client_crud.get(db, client_id=client_id, owner_id=owner_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client not found")


@router.get("/public/{public_id}", response_model=PublicInvoiceRead)
async def get_public_invoice(public_id: str, db: Session = Depends(get_db)):
    invoice = invoice_crud.get_by_public_id(db, public_id=public_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


@router.get("/", response_model=List[InvoiceListRead])
async def list_invoices(
    status: InvoiceStatus | None = None,
    client_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return invoice_crud.get_multi(db, owner_id=current_user.id, status=status, client_id=client_id)


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
def create_invoice_for_client(
    payload: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_client(db, payload.client_id, current_user.id)
    try:
        return create_invoice(db, current_user.id, payload)
    except InvoiceNumberConflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_invoice(db, invoice_id, current_user.id)


@router.put("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = _get_owned_invoice(db, invoice_id, current_user.id)
    _check_client(db, payload.client_id, current_user.id)
    return replace_invoice(db, invoice, payload)


@router.patch("/{invoice_id}/status", response_model=InvoiceRead)
async def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = _get_owned_invoice(db, invoice_id, current_user.id)
    return invoice_crud.update_status(db, db_obj=invoice, status=payload.status)


@router.delete("/{invoice_id}")
async def delete_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = _get_owned_invoice(db, invoice_id, current_user.id)
    invoice_crud.delete(db, db_obj=invoice)
    return {"status": "deleted", "id": invoice_id}
