"""Mail dispatcher that writes messages to the log instead of sending them."""

from __future__ import annotations

import structlog

from storefront.application.ports import MailDispatcher, MailMessage

logger = structlog.get_logger(__name__)


class ConsoleMailDispatcher(MailDispatcher):

    def send(self, message: MailMessage) -> None:
        logger.info(
            "mail_outgoing",
            to=message.to,
            sender=message.sender,
            subject=message.subject,
            body=message.text,
        )
