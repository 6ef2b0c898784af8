"""Recurring invoice (template) endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_client import client_crud
from backend.app.crud.crud_invoice_template import invoice_template_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.invoice_template import (
    InvoiceTemplateCreate,
    InvoiceTemplateRead,
    InvoiceTemplateUpdate,
)
from backend.app.services.schedule import initial_due_date, rescheduled_due_date

router = APIRouter(prefix="/recurring-invoices", tags=["recurring_invoices"])


def _check_client(db: Session, client_id: int, owner_id: int) -> None:
    if not client_crud.get(db, client_id=client_id, owner_id=owner_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client not found")


@router.post("/", response_model=InvoiceTemplateRead, status_code=status.HTTP_201_CREATED)
async def create_recurring_invoice(
    template_in: InvoiceTemplateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_client(db, template_in.client_id, current_user.id)
    next_due_at = initial_due_date(template_in.start_at, template_in.frequency, template_in.interval)
    return invoice_template_crud.create(db, obj_in=template_in, owner_id=current_user.id, next_due_at=next_due_at)


@router.get("/", response_model=list[InvoiceTemplateRead])
async def list_recurring_invoices(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return invoice_template_crud.get_multi(db, owner_id=current_user.id)


@router.get("/{template_id}", response_model=InvoiceTemplateRead)
async def get_recurring_invoice(template_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    template = invoice_template_crud.get(db, template_id=template_id, owner_id=current_user.id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring invoice not found")
    return template


@router.put("/{template_id}", response_model=InvoiceTemplateRead)
async def update_recurring_invoice(
    template_id: int,
    template_in: InvoiceTemplateUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    template = invoice_template_crud.get(db, template_id=template_id, owner_id=current_user.id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring invoice not found")
    _check_client(db, template_in.client_id, current_user.id)
    next_due_at = rescheduled_due_date(
        template.next_due_at,
        template.start_at,
        template.frequency,
        template.interval,
        template_in.start_at,
        template_in.frequency,
        template_in.interval,
    )
    return invoice_template_crud.update(db, db_obj=template, obj_in=template_in, next_due_at=next_due_at)


@router.delete("/{template_id}")
async def delete_recurring_invoice(template_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    template = invoice_template_crud.get(db, template_id=template_id, owner_id=current_user.id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring invoice not found")
    invoice_template_crud.delete(db, db_obj=template)
    return {"status": "deleted", "id": template_id}
