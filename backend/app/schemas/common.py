"""Shared schema helpers."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from backend.app.core.time import ensure_utc


class UTCModel(BaseModel):
    """Normalizes every datetime field to UTC; naive values (sqlite reads, bare inputs) count as UTC."""

    @field_validator("*", mode="after")
    @classmethod
    def ensure_timezone(cls, v):
        if isinstance(v, datetime):
            return ensure_utc(v)
        return v


class ORMRead(UTCModel):
    model_config = ConfigDict(from_attributes=True)
