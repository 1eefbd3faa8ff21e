"""Application service: Add Product use case (admin)."""

from __future__ import annotations

from collections.abc import Callable

from storefront.application.access import require_admin
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import new_id
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        description: str,
        price: str,
        stock: int,
        category: str,
        image_url: str,
        featured: bool = False,
    ) -> Product:
        """Add a new product to the catalog."""
        require_admin(self._identity_provider)

        required = {
            "name": name,
            "description": description,
            "category": category,
            "image URL": image_url,
        }
        missing = [label for label, value in required.items() if not value or not value.strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        with self._uow_factory() as uow:
            if uow.products.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product(
                id=new_id(),
                name=name.strip(),
                description=description.strip(),
                price=Money.of(price),
                stock=stock,
                category=category.strip(),
                image_url=image_url.strip(),
                featured=featured,
            )
            uow.products.save(product)
            uow.commit()
        return product
