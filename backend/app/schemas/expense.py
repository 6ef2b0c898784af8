"""Expense schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from backend.app.schemas.common import ORMRead, UTCModel

ExpenseCategory = Literal[
    "OFFICE_SUPPLIES",
    "TRAVEL",
    "MEALS",
    "SOFTWARE",
    "MARKETING",
    "PROFESSIONAL_SERVICES",
    "UTILITIES",
    "RENT",
    "EQUIPMENT",
    "OTHER",
]


class ExpenseBase(UTCModel):
    date: datetime
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    category: ExpenseCategory = "OTHER"
    vendor: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(ExpenseBase):
    pass


class ExpenseRead(ORMRead):
    id: int
    owner_id: int
    date: datetime
    amount: Decimal
    currency: str
    category: ExpenseCategory
    vendor: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    created_at: Optional[datetime] = None


class ExpenseFilter(UTCModel):
    category: Optional[ExpenseCategory] = None
    vendor: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    min_amount: Optional[Decimal] = Field(default=None, ge=0)
    max_amount: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_ranges(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        if self.min_amount is not None and self.max_amount is not None and self.min_amount > self.max_amount:
            raise ValueError("min_amount must not exceed max_amount")
        return self


class CategoryStats(BaseModel):
    count: int
    total: Decimal


class ExpenseSummary(BaseModel):
    total_amount: Decimal
    total_count: int
    category_stats: Dict[str, CategoryStats]


class ExpenseList(BaseModel):
    expenses: List[ExpenseRead]
    summary: ExpenseSummary
