"""Application service: admin dashboard figures."""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import require_admin
from storefront.application.dto import StoreStatsDTO
from storefront.application.ports import IdentityProvider
from storefront.domain.repository.unit_of_work import UnitOfWork

# Products at or below this many units count as running low.
LOW_STOCK_THRESHOLD = 10


class ShowStoreStatsHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(self) -> StoreStatsDTO:
        require_admin(self._identity_provider)
        with self._uow_factory() as uow:
            return StoreStatsDTO(
                total_products=uow.products.count(),
                total_orders=uow.orders.count(),
                total_revenue=str(uow.orders.total_revenue()),
                low_stock_count=uow.products.count_low_stock(LOW_STOCK_THRESHOLD),
            )
