"""Bounded retry combinator.

Used for the allocate-then-insert sequences, where the database uniqueness
constraint on (owner_id, invoice_number) is the final arbiter and a conflict
simply means "try again with a fresh number".
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryOutcome(Generic[T]):
    value: Optional[T]
    error: Optional[BaseException]
    attempts: int

    @property
    def ok(self) -> bool:
        return self.error is None


def linear_backoff(step: float) -> Callable[[int], float]:
    """Delay of ``step * attempt`` seconds after the given failed attempt."""

    def _delay(attempt: int) -> float:
        return step * attempt

    return _delay


def no_backoff(attempt: int) -> float:
    return 0.0


def retry(
    operation: Callable[[int], T],
    *,
    max_attempts: int,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    backoff: Callable[[int], float] = no_backoff,
    sleep: Callable[[float], None] = time.sleep,
    on_retry: Optional[Callable[[int, BaseException], None]] = None,
) -> RetryOutcome[T]:
    """Run ``operation(attempt)`` until it succeeds or ``max_attempts`` is reached.

    Only exceptions matching ``retry_on`` are retried; anything else ends the
    loop at once. The last error is returned in the outcome rather than raised.
    ``on_retry`` runs before each backoff and is where callers roll back.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        try:
            return RetryOutcome(value=operation(attempt), error=None, attempts=attempt)
        except retry_on as exc:
            error = exc
            if on_retry is not None:
                on_retry(attempt, exc)
            if attempt < max_attempts:
                logger.warning("Attempt %d/%d failed: %s; retrying", attempt, max_attempts, exc)
                delay = backoff(attempt)
                if delay > 0:
                    sleep(delay)
        except Exception as exc:
            return RetryOutcome(value=None, error=exc, attempts=attempt)
    return RetryOutcome(value=None, error=error, attempts=max_attempts)
