"""Reminder policy schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import ORMRead, UTCModel


class ReminderPolicyBase(UTCModel):
    name: str = Field(min_length=1, max_length=255)
    reminder_days: List[int] = Field(min_length=1)
    is_active: bool = True

    @field_validator("reminder_days")
    @classmethod
    def normalize_days(cls, v: List[int]) -> List[int]:
        if any(day < 0 for day in v):
            raise ValueError("reminder days must be non-negative")
        return sorted(set(v))


class ReminderPolicyCreate(ReminderPolicyBase):
    """Schema for creating a reminder policy."""


class ReminderPolicyUpdate(ReminderPolicyBase):
    """Schema for replacing a reminder policy."""


class ReminderPolicyRead(ORMRead):
    id: int
    owner_id: int
    name: str
    reminder_days: List[int]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
