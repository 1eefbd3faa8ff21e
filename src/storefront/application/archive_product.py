"""Application service: Archive / Restore Product use cases (admin).

Products are never deleted.  Archiving hides a product from the public
catalog while every order that references it keeps resolving.
"""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import require_admin
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import ProductNotFound
from storefront.domain.model.product import Product
from storefront.domain.repository.unit_of_work import UnitOfWork


class _ProductFlagHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> Product:
        require_admin(self._identity_provider)
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            self._apply(product)
            uow.products.save(product)
            uow.commit()
        return product

    def _apply(self, product: Product) -> None:
        raise NotImplementedError


class ArchiveProductHandler(_ProductFlagHandler):

    def _apply(self, product: Product) -> None:
        product.archive()


class RestoreProductHandler(_ProductFlagHandler):

    def _apply(self, product: Product) -> None:
        product.restore()
