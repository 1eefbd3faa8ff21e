"""Order aggregate: the record of a completed purchase.

The Order is an aggregate root that owns its line items.  Orders are
written once at checkout and never re-priced or re-itemized, so both
the order and its items are frozen dataclasses.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    # Checkout is immediate fulfilment; there is no pending/refunded state.
    COMPLETED = "completed"


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at purchase time."""

    id: str
    order_id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at purchase time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it assigns
    identities and computes the total.  The ``__init__`` still checks
    that ``total_amount`` matches the items so a reconstituted order
    that violates the invariant can never exist in memory.
    """

    id: str
    user_id: str
    customer_name: str
    customer_email: str
    items: tuple[OrderItem, ...]
    total_amount: Money
    status: OrderStatus = OrderStatus.COMPLETED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.items:
            raise ValidationError("Order must contain at least one item")
        if self.total_amount != sum_line_totals(self.items):
            raise ValidationError(
                f"Order total {self.total_amount} does not match its items"
            )

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        customer_name: str,
        customer_email: str,
        lines: list[tuple[str, str, Quantity, Money]],
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order from ``(product_id, product_name, quantity, unit_price)`` lines."""
        order_id = new_id()
        items = tuple(
            OrderItem(
                id=new_id(),
                order_id=order_id,
                product_id=product_id,
                product_name=product_name,
                quantity=quantity,
                unit_price=unit_price,
            )
            for product_id, product_name, quantity, unit_price in lines
        )
        return Order(
            id=order_id,
            user_id=user_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            items=items,
            total_amount=sum_line_totals(items),
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- Computed properties --------------------------------------------------

    def quantities_by_product(self) -> dict[str, int]:
        """Total purchased quantity per product, for stock decrements."""
        totals: dict[str, int] = {}
        for item in self.items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity.value
        return totals


def sum_line_totals(items: tuple[OrderItem, ...] | list[OrderItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result
