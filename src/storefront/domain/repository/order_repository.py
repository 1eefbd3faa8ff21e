"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: str | None) -> list[Order]:
        """Return orders newest first; ``None`` means every user's orders."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order with its items. Orders are never updated."""

    @abstractmethod
    def count(self) -> int:
        """Return how many orders have been placed."""

    @abstractmethod
    def total_revenue(self) -> Money:
        """Return the sum of every order total (zero when there are none)."""
