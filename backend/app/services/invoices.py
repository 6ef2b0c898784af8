"""Invoice creation and editing."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import InvoiceNumberConflict
from backend.app.core.settings import get_settings
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.models.invoice import Invoice
from backend.app.schemas.invoice import InvoiceCreate, InvoiceUpdate
from backend.app.services.billing import build_item_rows, calculate_totals
from backend.app.services.numbering import allocate_invoice_number
from backend.app.services.retry import linear_backoff, retry

logger = logging.getLogger(__name__)


def _invoice_fields(data: InvoiceCreate, item_rows: list[dict]) -> dict:
    totals = calculate_totals((row["total"] for row in item_rows), data.tax_rate, data.discount)
    return {
        "client_id": data.client_id,
        "issue_date": data.issue_date,
        "due_date": data.due_date,
        "tax_rate": data.tax_rate,
        "discount": data.discount,
        "total_amount": totals.total,
    }


def create_invoice(db: Session, owner_id: int, data: InvoiceCreate) -> Invoice:
    """Allocate a number and insert the invoice with its items, retrying on number conflicts."""
    settings = get_settings()
    item_rows = build_item_rows(data.items)
    fields = _invoice_fields(data, item_rows)

    def _attempt(attempt: int) -> Invoice:
        number = allocate_invoice_number(db, owner_id)
        invoice = invoice_crud.create_with_items(
            db,
            owner_id=owner_id,
            fields={**fields, "invoice_number": number, "status": "DRAFT"},
            items=[dict(row) for row in item_rows],
        )
        db.commit()
        return invoice

    def _rollback(attempt: int, exc: BaseException) -> None:
        db.rollback()

    outcome = retry(
        _attempt,
        max_attempts=settings.invoice_create_max_retries,
        retry_on=(IntegrityError,),
        backoff=linear_backoff(settings.invoice_create_retry_delay_seconds),
        on_retry=_rollback,
    )
    if not outcome.ok:
        if isinstance(outcome.error, IntegrityError):
            raise InvoiceNumberConflict(owner_id, outcome.attempts) from outcome.error
        db.rollback()
        raise outcome.error

    invoice = outcome.value
    db.refresh(invoice)
    logger.info("Created invoice %s (%s) for owner %s", invoice.id, invoice.invoice_number, owner_id)
    return invoice


def replace_invoice(db: Session, invoice: Invoice, data: InvoiceUpdate) -> Invoice:
    """Overwrite an invoice's fields and items; the number and status are kept."""
    item_rows = build_item_rows(data.items)
    for field, value in _invoice_fields(data, item_rows).items():
        setattr(invoice, field, value)
    invoice_crud.replace_items(db, invoice=invoice, items=item_rows)
    db.commit()
    db.refresh(invoice)
    return invoice
