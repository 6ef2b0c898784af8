"""Next-due arithmetic for recurring invoice templates."""

from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from backend.app.core.time import ensure_utc
from backend.app.models.invoice_template import MONTHLY, WEEKLY


def advance_due_date(current: datetime, frequency: str, interval: int) -> datetime:
    """Move ``current`` forward by ``interval`` periods.

    Monthly steps are calendar months; a day that does not exist in the target
    month is clamped to its last day (2024-01-31 + 1 month = 2024-02-29).
    """
    if interval < 1:
        raise ValueError("interval must be a positive integer")
    if frequency == WEEKLY:
        return current + timedelta(days=7 * interval)
    if frequency == MONTHLY:
        return current + relativedelta(months=interval)
    raise ValueError(f"Unsupported frequency: {frequency!r}")


def initial_due_date(start_at: datetime, frequency: str, interval: int) -> datetime:
    # The first invoice is generated one full period after the start.
    return advance_due_date(start_at, frequency, interval)


def rescheduled_due_date(
    current_next_due: datetime,
    current_start_at: datetime,
    current_frequency: str,
    current_interval: int,
    start_at: datetime,
    frequency: str,
    interval: int,
) -> datetime:
    """Next due date after a template edit.

    The date is only recomputed when the schedule itself changes, and once the
    template has generated an invoice it never moves before ``current_next_due``.
    """
    current_next_due = ensure_utc(current_next_due)
    current_start_at = ensure_utc(current_start_at)
    start_at = ensure_utc(start_at)
    if (current_start_at, current_frequency, current_interval) == (start_at, frequency, interval):
        return current_next_due

    candidate = initial_due_date(start_at, frequency, interval)
    has_fired = current_next_due > initial_due_date(current_start_at, current_frequency, current_interval)
    if has_fired:
        return max(candidate, current_next_due)
    return candidate
