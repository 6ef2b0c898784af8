"""Reports returned by the cron-triggered batch jobs."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

RunStatus = Literal["success", "error"]


class TemplateRunResult(BaseModel):
    template_id: int
    status: RunStatus
    invoice_id: Optional[int] = None
    invoice_number: Optional[str] = None
    error: Optional[str] = None


class RecurringRunReport(BaseModel):
    message: str
    ran_at: datetime
    examined: int
    due: int
    succeeded: int
    failed: int
    results: List[TemplateRunResult]


class ReminderResult(BaseModel):
    invoice_id: int
    invoice_number: str
    client_email: str
    reminder_day: int
    status: RunStatus
    error: Optional[str] = None


class ReminderRunReport(BaseModel):
    message: str
    ran_at: datetime
    sent: int
    failed: int
    marked_overdue: int = 0
    results: List[ReminderResult]
