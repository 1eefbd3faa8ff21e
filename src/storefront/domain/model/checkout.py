"""CheckoutRequest: what the customer asked to buy.

Transient: never persisted.  Quantities and product IDs come straight
from the client's cart and are never trusted beyond their shape; stock
and prices are always re-read inside the checkout transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import InvalidRequest


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class CheckoutRequest:
    items: tuple[CheckoutLine, ...]
    customer_name: str
    customer_email: str

    def validate(self) -> None:
        """Reject malformed requests before any product is read."""
        if not self.items:
            raise InvalidRequest("No products in the cart")
        if not _filled(self.customer_name) or not _filled(self.customer_email):
            raise InvalidRequest("Name and email required")
        for line in self.items:
            if not _filled(line.product_id):
                raise InvalidRequest("Every cart line needs a product")
            if isinstance(line.quantity, bool) or not isinstance(line.quantity, int):
                raise InvalidRequest(
                    f"Quantity for product '{line.product_id}' must be a whole number"
                )
            if line.quantity <= 0:
                raise InvalidRequest(
                    f"Quantity for product '{line.product_id}' must be positive"
                )

    def product_ids(self) -> list[str]:
        """Distinct product IDs in cart order."""
        return list(dict.fromkeys(line.product_id for line in self.items))

    def requested_quantities(self) -> dict[str, int]:
        totals: dict[str, int] = {}
        for line in self.items:
            totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity
        return totals

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_payload(payload: Mapping[str, Any]) -> CheckoutRequest:
        """Build a request from the wire shape.

        ``{"items": [{"productId", "quantity"}], "customerName", "customerEmail"}``
        """
        if not isinstance(payload, Mapping):
            raise InvalidRequest("Checkout payload must be an object")
        raw_items = payload.get("items") or []
        if not isinstance(raw_items, list):
            raise InvalidRequest("Cart items must be a list")
        lines: list[CheckoutLine] = []
        for raw in raw_items:
            if not isinstance(raw, Mapping):
                raise InvalidRequest("Every cart line must be an object")
            lines.append(
                CheckoutLine(
                    product_id=str(raw.get("productId") or ""),
                    quantity=raw.get("quantity"),  # type: ignore[arg-type]
                )
            )
        return CheckoutRequest(
            items=tuple(lines),
            customer_name=payload.get("customerName") or "",
            customer_email=payload.get("customerEmail") or "",
        )


def _filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
