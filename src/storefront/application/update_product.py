"""Application service: Update Product use case (admin).

Only the fields passed in change.  Price edits never reach placed
orders, which captured a price snapshot at checkout.
"""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import require_admin
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import ProductNotFound, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(
        self,
        product_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
        image_url: str | None = None,
        featured: bool | None = None,
    ) -> Product:
        require_admin(self._identity_provider)

        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFound(product_id)

            if name and name.strip() and name.strip() != product.name:
                clash = uow.products.get_by_name(name.strip())
                if clash is not None and clash.id != product.id:
                    raise ValidationError(f"Product '{name.strip()}' already exists")
                product.name = name.strip()
            if description and description.strip():
                product.description = description.strip()
            if category and category.strip():
                product.category = category.strip()
            if image_url and image_url.strip():
                product.image_url = image_url.strip()
            if price is not None:
                product.update_price(Money.of(price))
            if stock is not None:
                product.set_stock(stock)
            if featured is not None:
                product.featured = featured

            uow.products.save(product)
            uow.commit()
        return product
