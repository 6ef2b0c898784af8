"""Invoice schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from backend.app.schemas.client import ClientSummary
from backend.app.schemas.common import ORMRead, UTCModel
from backend.app.schemas.invoice_item import InvoiceItemCreate, InvoiceItemRead

InvoiceStatus = Literal["DRAFT", "SENT", "PAID", "OVERDUE"]


class InvoiceCreate(UTCModel):
    client_id: int
    issue_date: datetime
    due_date: datetime
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    items: List[InvoiceItemCreate] = Field(min_length=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.due_date < self.issue_date:
            raise ValueError("due_date must not be before issue_date")
        return self


class InvoiceUpdate(InvoiceCreate):
    pass


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceRead(ORMRead):
    id: int
    owner_id: int
    client_id: int
    invoice_number: str
    public_id: str

    status: InvoiceStatus
    issue_date: datetime
    due_date: datetime
    tax_rate: Decimal
    discount: Decimal
    total_amount: Decimal
    items: List[InvoiceItemRead] = []

    created_at: datetime
    updated_at: datetime


class InvoiceListRead(InvoiceRead):
    client: Optional[ClientSummary] = None


class PublicInvoiceRead(ORMRead):
    """What an anonymous holder of the share link may see."""

    invoice_number: str
    status: InvoiceStatus
    issue_date: datetime
    due_date: datetime
    tax_rate: Decimal
    discount: Decimal
    total_amount: Decimal
    items: List[InvoiceItemRead] = []
    client: Optional[ClientSummary] = None
