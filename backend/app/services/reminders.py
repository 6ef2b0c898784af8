"""Reminder dispatch for unpaid invoices.

A run first flips every SENT invoice whose due date has passed to OVERDUE. Then,
for each owner with an active policy, the owner's offsets are merged and every
SENT or OVERDUE invoice gets the largest offset ``d`` with ``d <= days past due``.
An invoice remembers the last offset it was reminded for, so each offset fires at
most once and a missed cron day is caught up on the next run.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.core.time import ensure_utc
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.crud.crud_reminder_policy import reminder_policy_crud
from backend.app.models.invoice import Invoice
from backend.app.schemas.cron import ReminderResult, ReminderRunReport
from backend.app.services.billing import to_money
from backend.app.services.email import EmailMessage, EmailSender

logger = logging.getLogger(__name__)

REMINDABLE_STATUSES = ("SENT", "OVERDUE")


def build_reminder_message(invoice: Invoice, reminder_day: int) -> EmailMessage:
    settings = get_settings()
    overdue = reminder_day > 0
    if overdue:
        subject = f"Overdue Invoice Reminder ({reminder_day} days overdue)"
        status_text = f"{reminder_day} days overdue"
    else:
        subject = "Invoice Due Today"
        status_text = "due today"

    link = f"{settings.public_base_url.rstrip('/')}/i/{invoice.public_id}"
    body = "\n".join(
        [
            f"Hello {invoice.client.name},",
            "",
            f"This is a friendly reminder that invoice #{invoice.invoice_number} is {status_text}.",
            f"Issue date: {ensure_utc(invoice.issue_date).date().isoformat()}",
            f"Due date: {ensure_utc(invoice.due_date).date().isoformat()}",
            f"Total amount: {to_money(invoice.total_amount)}",
            "",
            f"View the invoice: {link}",
            "",
            "Thank you for your business!",
        ]
    )
    return EmailMessage(to=invoice.client.email, subject=f"{settings.app_name} - {subject}", body=body)


def reminder_offset_for(days_past_due: int, offsets, last_reminder_day: Optional[int]) -> Optional[int]:
    """Largest offset already reached that has not been sent yet."""
    reached = [offset for offset in offsets if offset <= days_past_due]
    if not reached:
        return None
    offset = max(reached)
    if last_reminder_day is not None and offset <= last_reminder_day:
        return None
    return offset


def _offsets_by_owner(db: Session) -> dict[int, set[int]]:
    offsets: dict[int, set[int]] = defaultdict(set)
    for policy in reminder_policy_crud.get_active(db):
        offsets[policy.owner_id].update(policy.reminder_days or [])
    return offsets


def run_invoice_reminders(db: Session, now: datetime, sender: EmailSender) -> ReminderRunReport:
    now = ensure_utc(now)
    today = now.date()
    results: list[ReminderResult] = []

    marked_overdue = invoice_crud.mark_overdue(db, now=now)

    for owner_id, offsets in _offsets_by_owner(db).items():
        invoices = invoice_crud.get_for_reminder(db, owner_id=owner_id, statuses=REMINDABLE_STATUSES)
        for invoice in invoices:
            days_past_due = (today - ensure_utc(invoice.due_date).date()).days
            reminder_day = reminder_offset_for(days_past_due, offsets, invoice.last_reminder_day)
            if reminder_day is None:
                continue
            try:
                sender.send(build_reminder_message(invoice, reminder_day))
                invoice.last_reminder_day = reminder_day
                invoice.last_reminder_at = now
                db.commit()
            except Exception as exc:
                db.rollback()
                logger.exception("Error sending reminder for invoice %s", invoice.id)
                results.append(
                    ReminderResult(
                        invoice_id=invoice.id,
                        invoice_number=invoice.invoice_number,
                        client_email=invoice.client.email,
                        reminder_day=reminder_day,
                        status="error",
                        error=str(exc) or exc.__class__.__name__,
                    )
                )
                continue
            results.append(
                ReminderResult(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    client_email=invoice.client.email,
                    reminder_day=reminder_day,
                    status="success",
                )
            )

    sent = sum(1 for result in results if result.status == "success")
    logger.info(
        "Reminder run finished: %d sent, %d failed, %d marked overdue", sent, len(results) - sent, marked_overdue
    )
    return ReminderRunReport(
        message=f"Processed reminders for {len(results)} invoices",
        ran_at=now,
        sent=sent,
        failed=len(results) - sent,
        marked_overdue=marked_overdue,
        results=results,
    )
