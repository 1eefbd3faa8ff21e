"""Unit of work: one transaction over products, orders and stock.

Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (including via an exception)
rolls back every write made through the unit's repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_ledger import StockLedger


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    stock: StockLedger

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write in this unit durable at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes. A no-op after ``commit()``."""
