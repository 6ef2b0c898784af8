"""CRUD operations for expenses."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.expense import Expense
from backend.app.schemas.expense import ExpenseCreate, ExpenseFilter, ExpenseUpdate


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CRUDExpense:
    def create(self, db: Session, *, obj_in: ExpenseCreate, owner_id: int) -> Expense:
        obj = Expense(owner_id=owner_id, **obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, expense_id: int, owner_id: int) -> Optional[Expense]:
        return db.query(Expense).filter(Expense.id == expense_id, Expense.owner_id == owner_id).first()

    def get_multi(self, db: Session, *, owner_id: int, filters: ExpenseFilter) -> List[Expense]:
        query = db.query(Expense).filter(Expense.owner_id == owner_id)
        if filters.category:
            query = query.filter(Expense.category == filters.category)
        if filters.vendor:
            query = query.filter(Expense.vendor.ilike(f"%{_escape_like(filters.vendor)}%", escape="\\"))
        if filters.start_date:
            query = query.filter(Expense.date >= filters.start_date)
        if filters.end_date:
            query = query.filter(Expense.date <= filters.end_date)
        if filters.min_amount is not None:
            query = query.filter(Expense.amount >= filters.min_amount)
        if filters.max_amount is not None:
            query = query.filter(Expense.amount <= filters.max_amount)
        return query.order_by(Expense.date.desc(), Expense.id.desc()).all()

    def update(self, db: Session, *, db_obj: Expense, obj_in: ExpenseUpdate) -> Expense:
        for field, value in obj_in.model_dump().items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Expense) -> Expense:
        db.delete(db_obj)
        db.commit()
        return db_obj


expense_crud = CRUDExpense()
