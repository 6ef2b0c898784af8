"""Per-tenant invoice number allocation.

Numbers look like ``INV-0001`` and are unique per owner, not globally. The
count-and-scan below is only a starting heuristic: two concurrent callers can
pick the same candidate, and the (owner_id, invoice_number) unique constraint
decides which insert wins. Callers wrap allocation plus insert in a retry.
"""

import logging
import threading
import time
from typing import Callable, Optional

from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.crud.crud_invoice import invoice_crud

logger = logging.getLogger(__name__)

NUMBER_PREFIX = "INV"


class MonotonicMillis:
    """Wall-clock milliseconds that never repeat or go backwards within a process."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            now = int(self._clock() * 1000)
            if now <= self._last:
                now = self._last + 1
            self._last = now
            return now


_fallback_clock = MonotonicMillis()


def format_invoice_number(sequence: int) -> str:
    return f"{NUMBER_PREFIX}-{sequence:04d}"


def owner_fingerprint(owner_id) -> str:
    return str(owner_id)[-4:].upper()


def fallback_invoice_number(owner_id, clock: Optional[Callable[[], int]] = None) -> str:
    """Readable-enough number that cannot collide: owner fingerprint plus a strictly increasing timestamp."""
    millis = (clock or _fallback_clock)()
    return f"{NUMBER_PREFIX}-{owner_fingerprint(owner_id)}-{millis}"


def allocate_invoice_number(db: Session, owner_id: int, max_attempts: Optional[int] = None) -> str:
    if max_attempts is None:
        max_attempts = get_settings().invoice_number_max_attempts

    count = invoice_crud.count_for_owner(db, owner_id=owner_id)
    for attempt in range(1, max_attempts + 1):
        candidate = format_invoice_number(count + attempt)
        if not invoice_crud.number_exists(db, owner_id=owner_id, invoice_number=candidate):
            return candidate

    number = fallback_invoice_number(owner_id)
    logger.warning(
        "No free sequential invoice number for owner %s after %d attempts; using %s",
        owner_id,
        max_attempts,
        number,
    )
    return number
