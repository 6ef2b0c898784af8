"""Shape of the per-tenant data download."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from backend.app.schemas.client import ClientRead
from backend.app.schemas.expense import ExpenseRead
from backend.app.schemas.invoice import InvoiceListRead
from backend.app.schemas.invoice_template import InvoiceTemplateRead
from backend.app.schemas.reminder_policy import ReminderPolicyRead
from backend.app.schemas.user import UserRead
from backend.app.schemas.user_preferences import UserPreferencesRead

DATA_VERSION = "1.0"


class DataExport(BaseModel):
    user: UserRead
    preferences: Optional[UserPreferencesRead] = None
    clients: List[ClientRead]
    invoices: List[InvoiceListRead]
    recurring_invoices: List[InvoiceTemplateRead]
    reminder_policies: List[ReminderPolicyRead]
    expenses: List[ExpenseRead]
    export_date: datetime
    data_version: str = DATA_VERSION
