"""CLI commands for database setup."""

from __future__ import annotations

import click

from storefront.infrastructure import bootstrap
from storefront.infrastructure.seed import seed_catalog


@click.command("init")
@click.option("--seed", is_flag=True, default=False, help="Load the sample catalog.")
def db_init(seed: bool) -> None:
    """Create the schema (and optionally the sample catalog)."""
    bootstrap.init_database()
    click.echo("Database schema ready.")
    if seed:
        added = seed_catalog(bootstrap.uow_factory())
        click.echo(f"Seeded {added} product(s).")
