"""Domain service: Order Assembler.

Turns a CheckoutRequest plus a snapshot of the referenced products into
an Order.  It never touches storage: the snapshot is read by the
checkout handler inside the same transaction that will decrement stock,
so there is no second read to open a race window.

Validation happens in full before anything is built, so a rejection
leaves nothing half-assembled.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from storefront.domain.exceptions import InsufficientStock, ProductNotFound
from storefront.domain.model.checkout import CheckoutRequest
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


class OrderAssembler:

    def assemble(
        self,
        user_id: str,
        request: CheckoutRequest,
        snapshot: Mapping[str, Product],
        now: datetime | None = None,
    ) -> Order:
        """Build a completed order, or raise the first violation found.

        Steps:
        1. Reject malformed requests (InvalidRequest).
        2. Resolve every product ID against the snapshot (ProductNotFound).
        3. Check each product's stock covers everything asked of it
           (InsufficientStock).
        4. Snapshot current prices onto the line items; the order total
           is the exact sum of the line extensions.
        """
        request.validate()

        for product_id in request.product_ids():
            if product_id not in snapshot:
                raise ProductNotFound(product_id)

        # Repeated lines for one product draw on the same stock.
        requested = request.requested_quantities()
        for line in request.items:
            product = snapshot[line.product_id]
            wanted = requested[line.product_id]
            if not product.covers(wanted):
                raise InsufficientStock(
                    product_id=product.id,
                    product_name=product.name,
                    requested=wanted,
                    available=product.stock,
                )

        lines: list[tuple[str, str, Quantity, Money]] = [
            (
                line.product_id,
                snapshot[line.product_id].name,
                Quantity(line.quantity),
                snapshot[line.product_id].price,  # <-- price snapshot
            )
            for line in request.items
        ]

        return Order.create(
            user_id=user_id,
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            lines=lines,
            created_at=now,
        )
