"""Client schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ClientBase(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    company_name: Optional[str] = None
    address: Optional[str] = None
    tax_id: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(ClientBase):
    pass


class ClientSummary(BaseModel):
    id: int
    name: str
    company_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ClientRead(ClientBase):
    id: int
    owner_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
