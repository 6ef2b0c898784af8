"""CRUD operations for invoices.

Every query except the reminder sweep ``mark_overdue`` is scoped by ``owner_id``;
callers never receive another tenant's rows.
``create_with_items`` and ``replace_items`` only flush so the caller decides the
transaction boundary.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from backend.app.models.invoice import Invoice
from backend.app.models.invoice_item import InvoiceItem


class CRUDInvoice:
    def count_for_owner(self, db: Session, *, owner_id: int) -> int:
        return db.query(func.count(Invoice.id)).filter(Invoice.owner_id == owner_id).scalar() or 0

    def number_exists(self, db: Session, *, owner_id: int, invoice_number: str) -> bool:
        return (
            db.query(Invoice.id)
            .filter(Invoice.owner_id == owner_id, Invoice.invoice_number == invoice_number)
            .first()
            is not None
        )

    def create_with_items(self, db: Session, *, owner_id: int, fields: dict, items: Iterable[dict]) -> Invoice:
        invoice = Invoice(owner_id=owner_id, **fields)
        for position, item in enumerate(items):
            invoice.items.append(InvoiceItem(position=position, **item))
        db.add(invoice)
        db.flush()  # surfaces (owner_id, invoice_number) conflicts inside the caller's transaction
        return invoice

    def replace_items(self, db: Session, *, invoice: Invoice, items: Iterable[dict]) -> Invoice:
        invoice.items.clear()
        for position, item in enumerate(items):
            invoice.items.append(InvoiceItem(position=position, **item))
        db.flush()
        return invoice

    def get(self, db: Session, *, invoice_id: int, owner_id: int) -> Optional[Invoice]:
        return db.query(Invoice).filter(Invoice.id == invoice_id, Invoice.owner_id == owner_id).first()

    def get_by_public_id(self, db: Session, *, public_id: str) -> Optional[Invoice]:
        return db.query(Invoice).filter(Invoice.public_id == public_id).first()

    def get_multi(
        self,
        db: Session,
        *,
        owner_id: int,
        status: Optional[str] = None,
        client_id: Optional[int] = None,
    ) -> List[Invoice]:
        query = (
            db.query(Invoice)
            .options(selectinload(Invoice.items), selectinload(Invoice.client))
            .filter(Invoice.owner_id == owner_id)
        )
        if status:
            query = query.filter(Invoice.status == status)
        if client_id:
            query = query.filter(Invoice.client_id == client_id)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    def get_for_reminder(self, db: Session, *, owner_id: int, statuses: Iterable[str]) -> List[Invoice]:
        return (
            db.query(Invoice)
            .options(selectinload(Invoice.client))
            .filter(Invoice.owner_id == owner_id, Invoice.status.in_(list(statuses)))
            .order_by(Invoice.due_date.asc(), Invoice.id.asc())
            .all()
        )

    def mark_overdue(self, db: Session, *, now: datetime) -> int:
        """Flip every SENT invoice past its due date to OVERDUE, across all tenants."""
        count = (
            db.query(Invoice)
            .filter(Invoice.status == "SENT", Invoice.due_date < now)
            .update({Invoice.status: "OVERDUE"}, synchronize_session=False)
        )
        db.commit()
        return count

    def update_status(self, db: Session, *, db_obj: Invoice, status: str) -> Invoice:
        db_obj.status = status
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Invoice) -> Invoice:
        db.delete(db_obj)
        db.commit()
        return db_obj


invoice_crud = CRUDInvoice()
