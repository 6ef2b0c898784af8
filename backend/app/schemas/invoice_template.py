"""Recurring invoice template schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from backend.app.schemas.common import ORMRead, UTCModel
from backend.app.schemas.invoice_item import InvoiceItemBase

Frequency = Literal["WEEKLY", "MONTHLY"]


class LineItemTemplateCreate(InvoiceItemBase):
    pass


class LineItemTemplateRead(ORMRead, InvoiceItemBase):
    id: int
    position: int
    total: Decimal


class InvoiceTemplateBase(UTCModel):
    client_id: int
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    frequency: Frequency
    interval: int = Field(default=1, ge=1)
    start_at: datetime
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True


class InvoiceTemplateCreate(InvoiceTemplateBase):
    line_items: List[LineItemTemplateCreate] = Field(min_length=1)


class InvoiceTemplateUpdate(InvoiceTemplateCreate):
    pass


class InvoiceTemplateRead(ORMRead):
    id: int
    owner_id: int
    client_id: int
    name: str
    description: Optional[str] = None
    frequency: Frequency
    interval: int
    start_at: datetime
    next_due_at: datetime
    tax_rate: Decimal
    discount: Decimal
    is_active: bool
    line_items: List[LineItemTemplateRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
