"""Recurring invoice scheduler.

Turns every active template whose ``next_due_at`` is at or before ``now`` into a
DRAFT invoice and advances the template by one period. Each template runs in
its own transaction: the invoice, its items and the new ``next_due_at`` commit
together or not at all, so a failed template stays due and is retried on the
next run while the others proceed.

Precondition: the trigger runs at most one pass at a time. Overlapping passes
could both select the same template before either commits.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import InvoiceNumberConflict
from backend.app.core.settings import get_settings
from backend.app.core.time import ensure_utc
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.crud.crud_invoice_template import invoice_template_crud
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_template import InvoiceTemplate
from backend.app.schemas.cron import RecurringRunReport, TemplateRunResult
from backend.app.services.billing import calculate_totals
from backend.app.services.numbering import allocate_invoice_number
from backend.app.services.retry import linear_backoff, retry
from backend.app.services.schedule import advance_due_date

logger = logging.getLogger(__name__)

Allocator = Callable[[Session, int], str]


def _materialize(db: Session, template: InvoiceTemplate, now: datetime, allocator: Allocator) -> Invoice:
    settings = get_settings()
    line_items = invoice_template_crud.get_line_items(db, template_id=template.id, owner_id=template.owner_id)
    if not line_items:
        raise ValueError(f"Recurring invoice {template.id} has no line items")

    totals = calculate_totals((item.total for item in line_items), template.tax_rate, template.discount)
    number = allocator(db, template.owner_id)
    invoice = invoice_crud.create_with_items(
        db,
        owner_id=template.owner_id,
        fields={
            "client_id": template.client_id,
            "invoice_number": number,
            "issue_date": now,
            "due_date": now + timedelta(days=settings.invoice_due_days),
            "status": "DRAFT",
            "tax_rate": template.tax_rate,
            "discount": template.discount,
            "total_amount": totals.total,
        },
        items=[
            {
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total": item.total,
            }
            for item in line_items
        ],
    )
    # Advance from the previous due date, not from now.
    next_due = advance_due_date(ensure_utc(template.next_due_at), template.frequency, template.interval)
    invoice_template_crud.set_next_due(db, db_obj=template, next_due_at=next_due)
    db.commit()
    return invoice


def process_template(db: Session, template: InvoiceTemplate, now: datetime, allocator: Optional[Allocator] = None) -> Invoice:
    """Generate one invoice from ``template``, retrying when the number loses a uniqueness race."""
    settings = get_settings()
    owner_id = template.owner_id
    allocate = allocator or allocate_invoice_number

    outcome = retry(
        lambda attempt: _materialize(db, template, now, allocate),
        max_attempts=settings.invoice_create_max_retries,
        retry_on=(IntegrityError,),
        backoff=linear_backoff(settings.invoice_create_retry_delay_seconds),
        on_retry=lambda attempt, exc: db.rollback(),
    )
    if outcome.ok:
        return outcome.value
    if isinstance(outcome.error, IntegrityError):
        raise InvoiceNumberConflict(owner_id, outcome.attempts) from outcome.error
    raise outcome.error


def run_recurring_invoices(db: Session, now: datetime, allocator: Optional[Allocator] = None) -> RecurringRunReport:
    """Process every due template once. Database errors while selecting templates propagate."""
    now = ensure_utc(now)
    examined = invoice_template_crud.count_active(db)
    due_templates = [(template.id, template) for template in invoice_template_crud.get_due(db, now=now)]
    logger.info("Recurring run at %s: %d active templates, %d due", now.isoformat(), examined, len(due_templates))

    results: list[TemplateRunResult] = []
    for template_id, template in due_templates:
        try:
            invoice = process_template(db, template, now, allocator)
        except Exception as exc:
            db.rollback()
            logger.exception("Error processing recurring invoice %s", template_id)
            results.append(
                TemplateRunResult(template_id=template_id, status="error", error=str(exc) or exc.__class__.__name__)
            )
            continue
        results.append(
            TemplateRunResult(
                template_id=template_id,
                status="success",
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
            )
        )

    succeeded = sum(1 for result in results if result.status == "success")
    report = RecurringRunReport(
        message=f"Processed {len(due_templates)} recurring invoices",
        ran_at=now,
        examined=examined,
        due=len(due_templates),
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=results,
    )
    logger.info("Recurring run finished: %d succeeded, %d failed", report.succeeded, report.failed)
    return report
