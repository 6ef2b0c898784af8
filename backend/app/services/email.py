"""Email-sending collaborator used by reminder dispatch.

Transport configuration is deployment-specific; anything implementing
``EmailSender.send`` can be plugged in. The default only logs.
"""

import logging
from dataclasses import dataclass
from typing import List, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


class EmailSender(Protocol):
    def send(self, message: EmailMessage) -> None: ...


class LoggingEmailSender:
    def send(self, message: EmailMessage) -> None:
        logger.info("Email to %s: %s", message.to, message.subject)


class OutboxEmailSender:
    """Collects messages in memory instead of delivering them."""

    def __init__(self):
        self.outbox: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.outbox.append(message)


_default_sender: EmailSender = LoggingEmailSender()


def get_email_sender() -> EmailSender:
    return _default_sender
