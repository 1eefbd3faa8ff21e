"""Application service: catalog queries.

The public catalog only shows active products; admins may ask for
archived ones too.
"""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import is_admin, require_admin
from storefront.application.dto import ProductDTO, product_to_dto
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import ProductNotFound
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        identity_provider: IdentityProvider | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity_provider = identity_provider

    def handle(
        self,
        category: str | None = None,
        featured_only: bool = False,
        include_archived: bool = False,
        search: str | None = None,
    ) -> list[ProductDTO]:
        """Catalog listing, newest first.

        *search* matches the name or the description, ignoring case.
        """
        if include_archived:
            if self._identity_provider is None:
                raise ValueError("Listing archived products needs an identity provider")
            require_admin(self._identity_provider)

        with self._uow_factory() as uow:
            products = uow.products.list_all()

        needle = (search or "").strip().lower()
        selected = [
            p
            for p in products
            if (include_archived or p.is_active)
            and (category is None or p.category.lower() == category.lower())
            and (not featured_only or p.featured)
            and (not needle or needle in p.name.lower() or needle in p.description.lower())
        ]
        selected.sort(key=lambda p: p.created_at, reverse=True)
        return [product_to_dto(p) for p in selected]


class ShowProductHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        identity_provider: IdentityProvider | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity_provider = identity_provider

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
        if product is None or (
            not product.is_active and not is_admin(self._identity_provider)
        ):
            raise ProductNotFound(product_id)
        return product_to_dto(product)


class ListCategoriesHandler:
    """Distinct product categories, for the catalog's category filter."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[str]:
        with self._uow_factory() as uow:
            return uow.products.list_categories()
