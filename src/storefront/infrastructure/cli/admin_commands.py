"""CLI commands for the admin dashboard."""

from __future__ import annotations

import click

from storefront.application.store_stats import LOW_STOCK_THRESHOLD, ShowStoreStatsHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap


@click.command("stats")
@click.pass_obj
def admin_stats(identity_provider) -> None:
    """Show store totals (admin)."""
    handler = ShowStoreStatsHandler(identity_provider, bootstrap.uow_factory())

    try:
        stats = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Total products':<20} {stats.total_products:>12}")
    click.echo(f"{'Total orders':<20} {stats.total_orders:>12}")
    click.echo(f"{'Total revenue':<20} {stats.total_revenue:>12}")
    low_label = f"Low stock (<= {LOW_STOCK_THRESHOLD})"
    click.echo(f"{low_label:<20} {stats.low_stock_count:>12}")
