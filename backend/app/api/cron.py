"""Endpoints invoked by the external cron runner.

Both require ``Authorization: Bearer <CRON_SECRET>``. A completed run answers
200 even when individual templates or reminders failed; those failures are in
the report body. Only a failure of the run itself answers 500.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.auth import require_cron_secret
from backend.app.schemas.cron import RecurringRunReport, ReminderRunReport
from backend.app.services.email import EmailSender, get_email_sender
from backend.app.services.recurring import run_recurring_invoices
from backend.app.services.reminders import run_invoice_reminders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"], dependencies=[Depends(require_cron_secret)])


@router.post("/recurring", response_model=RecurringRunReport)
def trigger_recurring_invoices(db: Session = Depends(get_db)):
    try:
        return run_recurring_invoices(db, now=utc_now())
    except Exception:
        logger.exception("Error in recurring invoices cron job")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post("/reminders", response_model=ReminderRunReport)
def trigger_invoice_reminders(db: Session = Depends(get_db), sender: EmailSender = Depends(get_email_sender)):
    try:
        return run_invoice_reminders(db, now=utc_now(), sender=sender)
    except Exception:
        logger.exception("Error in reminders cron job")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
