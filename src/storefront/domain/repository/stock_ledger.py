"""Stock ledger contract: the authoritative per-product stock counter.

``decrement`` is only meaningful inside the unit of work that read the
products it is decrementing.  Implementations must make the check and
the write a single step (``stock >= quantity`` evaluated against the
latest committed value) so two concurrent checkouts can never both
drain the same units.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class StockLedger(ABC):

    @abstractmethod
    def check_availability(self, product_id: str, quantity: int) -> Product:
        """Return the current product record.

        Raises ProductNotFound if the product does not exist.
        """

    @abstractmethod
    def decrement(self, product_id: str, quantity: int) -> None:
        """Take *quantity* units off the product's stock.

        Raises InsufficientStock if the stock no longer covers the
        quantity, which must abort the enclosing unit of work.
        """
