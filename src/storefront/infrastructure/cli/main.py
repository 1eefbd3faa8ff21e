import click

from storefront.domain.model.identity import Identity
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.admin_commands import admin_stats
from storefront.infrastructure.cli.db_commands import db_init
from storefront.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_show,
    order_submit,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_archive,
    product_categories,
    product_list,
    product_restore,
    product_show,
    product_update,
)
from storefront.infrastructure.identity import (
    SessionFileIdentityProvider,
    StaticIdentityProvider,
)
from storefront.observability.logs import configure_logging


@click.group()
@click.option("--user", envvar="STOREFRONT_USER", default=None, help="Acting user ID.")
@click.option(
    "--verified/--unverified",
    envvar="STOREFRONT_USER_VERIFIED",
    default=False,
    help="Whether the acting user's email is verified.",
)
@click.option(
    "--admin/--no-admin",
    envvar="STOREFRONT_USER_ADMIN",
    default=False,
    help="Whether the acting user is an administrator.",
)
@click.option(
    "--session",
    envvar="STOREFRONT_SESSION",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON session file {userId, emailVerified, isAdmin}; overrides --user.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    user: str | None,
    verified: bool,
    admin: bool,
    session: str | None,
) -> None:
    """Storefront catalog, checkout and order history."""
    settings = bootstrap.settings()
    configure_logging(settings.log_level, json=settings.log_json)
    if session:
        ctx.obj = SessionFileIdentityProvider(session)
        return
    identity = Identity(user, email_verified=verified, is_admin=admin) if user else None
    ctx.obj = StaticIdentityProvider(identity)


@cli.group()
def order() -> None:
    """Place and review orders."""


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def admin() -> None:
    """Store administration."""


@cli.group()
def db() -> None:
    """Manage the database."""


# Register subcommands
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_submit)
product.add_command(product_add)
product.add_command(product_archive)
product.add_command(product_categories)
product.add_command(product_list)
product.add_command(product_restore)
product.add_command(product_show)
product.add_command(product_update)
admin.add_command(admin_stats)
db.add_command(db_init)
