"""CLI commands for checkout and order history."""

from __future__ import annotations

import json

import click

from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import OrderDTO
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.checkout import CheckoutLine, CheckoutRequest
from storefront.infrastructure import bootstrap


def _parse_items(raw: str) -> tuple[CheckoutLine, ...]:
    """Parse 'id1:3,id2:5' into checkout lines."""
    lines: list[CheckoutLine] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        lines.append(CheckoutLine(product_id=product_id.strip(), quantity=qty))
    return tuple(lines)


@click.command("checkout")
@click.option("--name", "customer_name", required=True, help="Customer name.")
@click.option("--email", "customer_email", required=True, help="Customer email.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_checkout(
    identity_provider, customer_name: str, customer_email: str, items: str
) -> None:
    """Buy the given items as the acting user."""
    request = CheckoutRequest(
        items=_parse_items(items),
        customer_name=customer_name,
        customer_email=customer_email,
    )

    notifier = bootstrap.receipt_notifier()
    handler = CheckoutHandler(identity_provider, bootstrap.uow_factory(), notifier)
    try:
        result = handler.handle(request)
    finally:
        notifier.close()

    if not result.success:
        raise click.ClickException(result.error)

    click.echo(f"Order {result.order_id} placed.")


@click.command("submit")
@click.argument("payload", type=click.File("r"), default="-")
@click.pass_obj
def order_submit(identity_provider, payload) -> None:
    """Check out a JSON cart and print the JSON result.

    PAYLOAD is a file (default: stdin) holding
    {"items": [{"productId": ..., "quantity": ...}], "customerName": ..., "customerEmail": ...}.
    """
    try:
        body = json.load(payload)
    except ValueError as exc:
        raise click.BadParameter(f"Payload is not valid JSON: {exc}")

    notifier = bootstrap.receipt_notifier()
    handler = CheckoutHandler(identity_provider, bootstrap.uow_factory(), notifier)
    try:
        result = handler.handle_payload(body)
    finally:
        notifier.close()

    click.echo(json.dumps(result.to_dict()))
    if not result.success:
        raise SystemExit(1)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<30} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Order Total':<37} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(identity_provider, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(identity_provider, bootstrap.uow_factory())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(identity_provider) -> None:
    """List your orders (admins see every order)."""
    handler = ListOrdersHandler(identity_provider, bootstrap.uow_factory())

    try:
        orders = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Created':<22} {'Items':>5} {'Total':>12}")
    click.echo("-" * 76)
    for dto in orders:
        click.echo(
            f"{dto.id:<34} {dto.created_at:<22} {len(dto.items):>5} {dto.total:>12}"
        )
