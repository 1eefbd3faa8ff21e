"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Return the products that exist among *product_ids*, keyed by ID."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, archived ones included."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def list_categories(self) -> list[str]:
        """Return the distinct categories of all products, alphabetically."""

    @abstractmethod
    def count(self) -> int:
        """Return how many products exist, archived ones included."""

    @abstractmethod
    def count_low_stock(self, threshold: int) -> int:
        """Return how many products have ``stock <= threshold``."""
