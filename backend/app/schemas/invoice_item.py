"""Invoice item schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class InvoiceItemBase(BaseModel):
    description: str = Field(min_length=1, max_length=255)
    quantity: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    unit_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)


class InvoiceItemCreate(InvoiceItemBase):
    pass


class InvoiceItemRead(InvoiceItemBase):
    id: int
    position: int
    total: Decimal

    model_config = ConfigDict(from_attributes=True)
