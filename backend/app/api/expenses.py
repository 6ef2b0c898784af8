"""Expense tracking endpoints."""

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_expense import expense_crud
from backend.app.db.session import get_db
from backend.app.models.expense import Expense
from backend.app.models.user import User
from backend.app.schemas.expense import (
    ExpenseCreate,
    ExpenseFilter,
    ExpenseList,
    ExpenseRead,
    ExpenseUpdate,
)
from backend.app.services.expenses import summarize_expenses

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _get_owned_expense(db: Session, expense_id: int, owner_id: int) -> Expense:
    expense = expense_crud.get(db, expense_id=expense_id, owner_id=owner_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense


@router.get("/", response_model=ExpenseList)
async def list_expenses(
    category: str | None = None,
    vendor: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    min_amount: Decimal | None = None,
    max_amount: Decimal | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        filters = ExpenseFilter(
            category=category,
            vendor=vendor,
            start_date=start_date,
            end_date=end_date,
            min_amount=min_amount,
            max_amount=max_amount,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=[error["msg"] for error in exc.errors()])
    expenses = expense_crud.get_multi(db, owner_id=current_user.id, filters=filters)
    return {"expenses": expenses, "summary": summarize_expenses(expenses)}


@router.post("/", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return expense_crud.create(db, obj_in=expense_in, owner_id=current_user.id)


@router.get("/{expense_id}", response_model=ExpenseRead)
async def get_expense(expense_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_expense(db, expense_id, current_user.id)


@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: int,
    expense_in: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    expense = _get_owned_expense(db, expense_id, current_user.id)
    return expense_crud.update(db, db_obj=expense, obj_in=expense_in)


@router.delete("/{expense_id}")
async def delete_expense(expense_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    expense = _get_owned_expense(db, expense_id, current_user.id)
    expense_crud.delete(db, db_obj=expense)
    return {"status": "deleted", "id": expense_id}
