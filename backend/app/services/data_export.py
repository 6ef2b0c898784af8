"""Collects everything a tenant owns into one downloadable document."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.crud.crud_client import client_crud
from backend.app.crud.crud_expense import expense_crud
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.crud.crud_invoice_template import invoice_template_crud
from backend.app.crud.crud_reminder_policy import reminder_policy_crud
from backend.app.crud.crud_user_preferences import user_preferences_crud
from backend.app.models.user import User
from backend.app.schemas.data_export import DataExport
from backend.app.schemas.expense import ExpenseFilter

logger = logging.getLogger(__name__)


def export_user_data(db: Session, user: User, now: Optional[datetime] = None) -> DataExport:
    export = DataExport.model_validate(
        {
            "user": user,
            "preferences": user_preferences_crud.get(db, user_id=user.id),
            "clients": client_crud.get_multi(db, owner_id=user.id),
            "invoices": invoice_crud.get_multi(db, owner_id=user.id),
            "recurring_invoices": invoice_template_crud.get_multi(db, owner_id=user.id),
            "reminder_policies": reminder_policy_crud.get_multi(db, owner_id=user.id),
            "expenses": expense_crud.get_multi(db, owner_id=user.id, filters=ExpenseFilter()),
            "export_date": now or utc_now(),
        },
        from_attributes=True,
    )
    logger.info(
        "Exported data for user %s: %d clients, %d invoices", user.id, len(export.clients), len(export.invoices)
    )
    return export
