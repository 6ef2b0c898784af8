"""CRUD operations for recurring invoice templates."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from backend.app.models.invoice_template import InvoiceTemplate
from backend.app.models.line_item_template import LineItemTemplate
from backend.app.schemas.invoice_template import InvoiceTemplateCreate, InvoiceTemplateUpdate
from backend.app.services.billing import build_item_rows


class CRUDInvoiceTemplate:
    def create(self, db: Session, *, obj_in: InvoiceTemplateCreate, owner_id: int, next_due_at: datetime) -> InvoiceTemplate:
        data = obj_in.model_dump(exclude={"line_items"})
        obj = InvoiceTemplate(owner_id=owner_id, next_due_at=next_due_at, **data)
        self._set_line_items(obj, obj_in.line_items)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, template_id: int, owner_id: int) -> Optional[InvoiceTemplate]:
        return (
            db.query(InvoiceTemplate)
            .filter(InvoiceTemplate.id == template_id, InvoiceTemplate.owner_id == owner_id)
            .first()
        )

    def get_multi(self, db: Session, *, owner_id: int) -> List[InvoiceTemplate]:
        return (
            db.query(InvoiceTemplate)
            .options(selectinload(InvoiceTemplate.line_items))
            .filter(InvoiceTemplate.owner_id == owner_id)
            .order_by(InvoiceTemplate.created_at.desc(), InvoiceTemplate.id.desc())
            .all()
        )

    def update(
        self, db: Session, *, db_obj: InvoiceTemplate, obj_in: InvoiceTemplateUpdate, next_due_at: datetime
    ) -> InvoiceTemplate:
        for field, value in obj_in.model_dump(exclude={"line_items"}).items():
            setattr(db_obj, field, value)
        db_obj.next_due_at = next_due_at
        db_obj.line_items.clear()
        self._set_line_items(db_obj, obj_in.line_items)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: InvoiceTemplate) -> InvoiceTemplate:
        db.delete(db_obj)
        db.commit()
        return db_obj

    # Scheduler queries span all tenants; each row still carries its owner_id.

    def count_active(self, db: Session) -> int:
        return db.query(func.count(InvoiceTemplate.id)).filter(InvoiceTemplate.is_active.is_(True)).scalar() or 0

    def get_due(self, db: Session, *, now: datetime) -> List[InvoiceTemplate]:
        return (
            db.query(InvoiceTemplate)
            .filter(InvoiceTemplate.is_active.is_(True), InvoiceTemplate.next_due_at <= now)
            .order_by(InvoiceTemplate.next_due_at.asc(), InvoiceTemplate.id.asc())
            .all()
        )

    def get_line_items(self, db: Session, *, template_id: int, owner_id: int) -> List[LineItemTemplate]:
        return (
            db.query(LineItemTemplate)
            .join(InvoiceTemplate, LineItemTemplate.template_id == InvoiceTemplate.id)
            .filter(LineItemTemplate.template_id == template_id, InvoiceTemplate.owner_id == owner_id)
            .order_by(LineItemTemplate.position.asc(), LineItemTemplate.id.asc())
            .all()
        )

    def set_next_due(self, db: Session, *, db_obj: InvoiceTemplate, next_due_at: datetime) -> InvoiceTemplate:
        db_obj.next_due_at = next_due_at
        db.flush()
        return db_obj

    @staticmethod
    def _set_line_items(template: InvoiceTemplate, items) -> None:
        for position, row in enumerate(build_item_rows(items)):
            template.line_items.append(LineItemTemplate(position=position, **row))


invoice_template_crud = CRUDInvoiceTemplate()
