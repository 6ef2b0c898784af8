"""User preferences schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from backend.app.schemas.common import ORMRead


class UserPreferencesBase(BaseModel):
    default_tax_rate: Decimal = Decimal("10")
    default_discount: Decimal = Decimal("0")


class UserPreferencesUpdate(BaseModel):
    default_tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    default_discount: Optional[Decimal] = Field(default=None, ge=0)


class UserPreferencesRead(ORMRead, UserPreferencesBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
