"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is replenished by admins and drained by checkouts,
and products are archived rather than deleted so placed orders keep
pointing at something real.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

# Largest price the products.price column (NUMERIC(10, 2)) can hold.
MAX_PRICE = Money(Decimal("99999999.99"))


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root; it is the entry point for any
    operation involving a product.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is never negative (enforced by ``Money``)
    """

    id: str
    name: str
    description: str
    price: Money
    stock: int
    category: str
    image_url: str
    is_active: bool = True
    featured: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        _check_price(self.price)
        _check_stock(self.stock)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        _check_price(new_price)
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        _check_stock(quantity)
        self.stock = quantity

    def archive(self) -> None:
        """Soft delete: hide from public listings, keep for order history."""
        self.is_active = False

    def restore(self) -> None:
        self.is_active = True

    def covers(self, quantity: int) -> bool:
        return quantity <= self.stock


def _check_price(price: Money) -> None:
    if price > MAX_PRICE:
        raise ValidationError(f"Price cannot exceed {MAX_PRICE}, got {price}")


def _check_stock(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Stock must be an integer, got {type(quantity).__name__}")
    if quantity < 0:
        raise ValidationError("Stock cannot be negative")
