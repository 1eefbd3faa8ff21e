"""Receipt notifications, decoupled from the checkout transaction.

The checkout handler hands a Receipt to a ReceiptNotifier after the
order has committed and returns immediately.  Delivery happens on a
worker thread; whatever goes wrong there is logged and counted, never
raised back to the caller, and never retried.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from html import escape

import structlog

from storefront.application.dto import Receipt
from storefront.application.ports import MailDispatcher, MailMessage
from storefront.domain.exceptions import NotificationFailure
from storefront.observability.metrics import storefront_receipt_failures_total

logger = structlog.get_logger(__name__)


class ReceiptNotifier(ABC):

    @abstractmethod
    def notify(self, receipt: Receipt) -> None:
        """Queue *receipt* for delivery without waiting for it."""

    def close(self) -> None:
        """Flush pending deliveries. Default: nothing pending."""


class QueuedReceiptNotifier(ReceiptNotifier):

    def __init__(self, mail: MailDispatcher, sender: str, max_workers: int = 1) -> None:
        self._mail = mail
        self._sender = sender
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="receipt"
        )

    def notify(self, receipt: Receipt) -> None:
        self._executor.submit(self._deliver, receipt)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _deliver(self, receipt: Receipt) -> None:
        log = logger.bind(order_id=receipt.order_id)
        try:
            self._mail.send(build_receipt_message(receipt, self._sender))
        except NotificationFailure as exc:
            storefront_receipt_failures_total.inc()
            log.error("receipt_delivery_failed", error_code=exc.code, reason=str(exc))
        except Exception:
            storefront_receipt_failures_total.inc()
            log.exception("receipt_delivery_failed", error_code=NotificationFailure.code)
        else:
            log.info("receipt_sent", to=receipt.customer_email)


# --- Rendering ------------------------------------------------------------


def receipt_subject(order_id: str) -> str:
    return f"Order Confirmation #{order_id[:8].upper()}"


def build_receipt_message(receipt: Receipt, sender: str) -> MailMessage:
    rows = [
        f"{line.name} x{line.quantity} @ ${line.price}" for line in receipt.items
    ]
    text = "\n".join(
        [
            f"Hi {receipt.customer_name},",
            "",
            f"Thanks for your order #{receipt.order_id[:8].upper()} "
            f"placed on {receipt.order_date}.",
            "",
            *rows,
            "",
            f"Total: ${receipt.total_amount}",
        ]
    )
    html_rows = "".join(
        f"<tr><td>{escape(line.name)}</td><td>{line.quantity}</td>"
        f"<td>${line.price}</td></tr>"
        for line in receipt.items
    )
    html = (
        f"<p>Hi {escape(receipt.customer_name)},</p>"
        f"<p>Thanks for your order placed on {receipt.order_date}.</p>"
        f"<table>{html_rows}</table>"
        f"<p><strong>Total: ${receipt.total_amount}</strong></p>"
    )
    return MailMessage(
        to=receipt.customer_email,
        sender=sender,
        subject=receipt_subject(receipt.order_id),
        text=text,
        html=html,
    )
