"""Authentication dependency for the cron-triggered batch endpoints."""

import hmac
import logging

from fastapi import Header, HTTPException, status

from backend.app.core.settings import get_settings

logger = logging.getLogger(__name__)


def require_cron_secret(authorization: str | None = Header(default=None)) -> None:
    # Expect Authorization: Bearer <CRON_SECRET>
    secret = get_settings().cron_secret
    if not secret:
        logger.warning("Cron call rejected: CRON_SECRET is not configured")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if not authorization or not hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode()):
        logger.warning("Cron call rejected: missing or invalid credential")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
