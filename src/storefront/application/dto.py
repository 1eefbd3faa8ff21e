"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import DomainException, PersistenceFailure
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class CheckoutResult:
    """Output of a checkout attempt: an order ID or one error message."""

    success: bool
    order_id: str | None = None
    error: str | None = None
    error_code: str | None = None

    @staticmethod
    def placed(order_id: str) -> CheckoutResult:
        return CheckoutResult(success=True, order_id=order_id)

    @staticmethod
    def failed(exc: DomainException) -> CheckoutResult:
        if isinstance(exc, PersistenceFailure):
            message = PersistenceFailure.public_message
        else:
            message = str(exc)
        return CheckoutResult(success=False, error=message, error_code=exc.code)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "orderId": self.order_id}
        return {"success": False, "error": self.error}


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    price: str  # unit price, e.g. "10.00"


@dataclass(frozen=True)
class Receipt:
    """Fully resolved receipt handed to the notifier after commit."""

    order_id: str
    customer_name: str
    customer_email: str
    items: tuple[ReceiptLine, ...]
    total_amount: str
    order_date: str  # M/D/YYYY

    @staticmethod
    def from_order(order: Order) -> Receipt:
        created = order.created_at
        return Receipt(
            order_id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            items=tuple(
                ReceiptLine(
                    name=item.product_name,
                    quantity=item.quantity.value,
                    price=item.unit_price.to_plain(),
                )
                for item in order.items
            ),
            total_amount=order.total_amount.to_plain(),
            order_date=f"{created.month}/{created.day}/{created.year}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "orderId": self.order_id,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "items": [
                {"name": i.name, "quantity": i.quantity, "price": i.price}
                for i in self.items
            ],
            "totalAmount": self.total_amount,
            "orderDate": self.order_date,
        }


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_name: str
    customer_email: str
    status: str
    items: list[OrderItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str
    stock: int
    category: str
    image_url: str
    featured: bool
    is_active: bool


@dataclass(frozen=True)
class StoreStatsDTO:
    total_products: int
    total_orders: int
    total_revenue: str
    low_stock_count: int


# --- Mapping --------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=str(product.price),
        stock=product.stock,
        category=product.category,
        image_url=product.image_url,
        featured=product.featured,
        is_active=product.is_active,
    )
