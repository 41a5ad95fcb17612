import click

from sales_orders.domain.exceptions import PersistenceError
from sales_orders.infrastructure.bootstrap import order_store
from sales_orders.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
    order_update,
)
from sales_orders.infrastructure.config import ConfigError, Settings
from sales_orders.utils.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Sales Orders: orders and their line items"""
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        raise click.UsageError(str(exc))
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def db() -> None:
    """Manage the database."""


@db.command("init")
@click.pass_obj
def db_init(settings: Settings) -> None:
    """Create the order tables if they do not exist."""
    try:
        order_store(settings)
    except PersistenceError as exc:
        raise click.ClickException(str(exc))
    click.echo("Database ready.")


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_update)
