"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.archive_product import (
    ArchiveProductHandler,
    RestoreProductHandler,
)
from storefront.application.dto import product_to_dto
from storefront.application.list_products import (
    ListCategoriesHandler,
    ListProductsHandler,
    ShowProductHandler,
)
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--featured", is_flag=True, default=False, help="Only featured products.")
@click.option("--all", "include_archived", is_flag=True, default=False, help="Include archived (admin).")
@click.option("--search", default=None, help="Match name or description, ignoring case.")
@click.pass_obj
def product_list(
    identity_provider,
    category: str | None,
    featured: bool,
    include_archived: bool,
    search: str | None,
) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(
        bootstrap.uow_factory(), identity_provider=identity_provider
    )

    try:
        products = handler.handle(
            category=category,
            featured_only=featured,
            include_archived=include_archived,
            search=search,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<30} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 98)
    for p in products:
        flags = "" if p.is_active else "  (archived)"
        click.echo(
            f"{p.id:<34} {p.name:<30} {p.category:<14} {p.price:>10} {p.stock:>6}{flags}"
        )


@click.command("categories")
def product_categories() -> None:
    """List the product categories."""
    categories = ListCategoriesHandler(bootstrap.uow_factory()).handle()
    if not categories:
        click.echo("No categories yet.")
        return
    for category in categories:
        click.echo(category)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(identity_provider, product_id: str) -> None:
    """Show one product."""
    handler = ShowProductHandler(
        bootstrap.uow_factory(), identity_provider=identity_provider
    )

    try:
        p = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{p.name}  ({p.category})")
    click.echo(p.description)
    click.echo(f"Price: {p.price}   In stock: {p.stock}")
    if p.featured:
        click.echo("Featured")
    if not p.is_active:
        click.echo("Archived")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 49.99).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", required=True, help="Category.")
@click.option("--image-url", required=True, help="Image URL.")
@click.option("--featured", is_flag=True, default=False, help="Feature on the home page.")
@click.pass_obj
def product_add(
    identity_provider,
    name: str,
    description: str,
    price: str,
    stock: int,
    category: str,
    image_url: str,
    featured: bool,
) -> None:
    """Add a new product to the catalog (admin)."""
    handler = AddProductHandler(identity_provider, bootstrap.uow_factory())

    try:
        product = handler.handle(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category=category,
            image_url=image_url,
            featured=featured,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@click.option("--image-url", default=None, help="New image URL.")
@click.option("--featured/--not-featured", default=None, help="Feature flag.")
@click.pass_obj
def product_update(
    identity_provider,
    product_id: str,
    name: str | None,
    description: str | None,
    price: str | None,
    stock: int | None,
    category: str | None,
    image_url: str | None,
    featured: bool | None,
) -> None:
    """Update a product's details (admin)."""
    handler = UpdateProductHandler(identity_provider, bootstrap.uow_factory())

    try:
        product = handler.handle(
            product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            category=category,
            image_url=image_url,
            featured=featured,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    dto = product_to_dto(product)
    click.echo(f"Product {dto.id} updated: {dto.name} {dto.price}, {dto.stock} in stock")


@click.command("archive")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_archive(identity_provider, product_id: str) -> None:
    """Archive a product (hidden from the catalog, kept for orders)."""
    handler = ArchiveProductHandler(identity_provider, bootstrap.uow_factory())

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' archived.")


@click.command("restore")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_restore(identity_provider, product_id: str) -> None:
    """Restore an archived product."""
    handler = RestoreProductHandler(identity_provider, bootstrap.uow_factory())

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' restored.")
