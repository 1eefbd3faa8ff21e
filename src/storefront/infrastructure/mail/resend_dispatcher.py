"""Mail dispatcher for the Resend email API."""

from __future__ import annotations

import resend

from storefront.application.ports import MailDispatcher, MailMessage
from storefront.domain.exceptions import NotificationFailure


class ResendMailDispatcher(MailDispatcher):

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("RESEND_API_KEY is not configured")
        self._api_key = api_key

    def send(self, message: MailMessage) -> None:
        resend.api_key = self._api_key
        payload = {
            "from": message.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        try:
            resend.Emails.send(payload)
        except Exception as exc:
            raise NotificationFailure(
                f"Resend rejected message to {message.to}: {exc}"
            ) from exc
