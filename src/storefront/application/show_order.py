"""Application service: order history queries.

Customers see their own orders; admins see everyone's.  An order that
belongs to someone else is reported as not found.
"""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import authenticate
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(self, order_id: str) -> OrderDTO:
        identity = authenticate(self._identity_provider)
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None or (
            order.user_id != identity.user_id and not identity.is_admin
        ):
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(self) -> list[OrderDTO]:
        identity = authenticate(self._identity_provider)
        with self._uow_factory() as uow:
            orders = uow.orders.list_for_user(
                None if identity.is_admin else identity.user_id
            )
        return [order_to_dto(order) for order in orders]
