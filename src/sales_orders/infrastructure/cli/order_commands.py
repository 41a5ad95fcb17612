"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from sales_orders.application.change_order_status import ChangeOrderStatusHandler
from sales_orders.application.create_order import CreateOrderHandler
from sales_orders.application.delete_order import DeleteOrderHandler
from sales_orders.application.dto import LineItemSpec, OrderDTO
from sales_orders.application.list_orders import ListOrdersHandler
from sales_orders.application.replace_order import ReplaceOrderHandler
from sales_orders.application.show_order import ShowOrderHandler
from sales_orders.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidStateError,
    OrderLockedError,
    PersistenceError,
    ValidationError,
)
from sales_orders.domain.model.status import OrderStatus
from sales_orders.infrastructure.bootstrap import line_item_validator, order_store
from sales_orders.infrastructure.config import Settings

EXIT_CODES: dict[type[DomainException], int] = {
    ValidationError: 2,
    EntityNotFoundError: 3,
    InvalidStateError: 4,
    OrderLockedError: 5,
    PersistenceError: 6,
}


def _fail(exc: DomainException) -> click.ClickException:
    error = click.ClickException(str(exc))
    error.exit_code = EXIT_CODES.get(type(exc), 1)
    return error


def _parse_items(raw: str) -> list[LineItemSpec]:
    """Parse '5:2:10.00:20.00,7:1:5' into LineItemSpec list.

    Each item is ``product:quantity:unit_price[:line_total]``.  Values are
    passed through as text; the domain validates them.
    """
    specs: list[LineItemSpec] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = [part.strip() for part in chunk.split(":")]
        if len(parts) not in (3, 4):
            raise click.BadParameter(
                f"Invalid item format '{chunk}'. "
                "Expected 'Product:Quantity:UnitPrice[:LineTotal]'.",
                param_hint="--items",
            )
        line_total = parts[3] if len(parts) == 4 else None
        specs.append(LineItemSpec(parts[0], parts[1], parts[2], line_total))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  {dto.order_number}  (status={dto.status})")
    click.echo(f"Date:  {dto.order_date}")
    click.echo()
    click.echo(f"  {'Product':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*40}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<12} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*40}")
    click.echo(f"  {'Items':<12} {dto.item_count:>5} {'Final':>10} {dto.final_price:>10}")


@click.command("create")
@click.option("--number", "order_number", required=True, help="Order number, e.g. ORD-1.")
@click.option("--date", "order_date", required=True, help="Order date (YYYY-MM-DD).")
@click.option("--items", required=True, help="Items as 'Product:Qty:UnitPrice[:Total],...'.")
@click.pass_obj
def order_create(settings: Settings, order_number: str, order_date: str, items: str) -> None:
    """Create a new order with its line items."""
    try:
        handler = CreateOrderHandler(order_store(settings), line_item_validator(settings))
        dto = handler.handle(order_number, order_date, _parse_items(items))
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to replace.")
@click.option("--number", "order_number", required=True, help="Order number.")
@click.option("--date", "order_date", required=True, help="Order date (YYYY-MM-DD).")
@click.option("--items", required=True, help="Items as 'Product:Qty:UnitPrice[:Total],...'.")
@click.pass_obj
def order_update(
    settings: Settings, order_id: int, order_number: str, order_date: str, items: str
) -> None:
    """Replace an order's header fields and its whole set of line items."""
    try:
        handler = ReplaceOrderHandler(order_store(settings), line_item_validator(settings))
        dto = handler.handle(order_id, order_number, order_date, _parse_items(items))
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{dto.id} updated")
    _display_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(settings: Settings, order_id: int) -> None:
    """Delete an order and its line items."""
    try:
        handler = DeleteOrderHandler(order_store(settings))
        handler.handle(order_id)
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{order_id} deleted.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    help=f"New status: {', '.join(s.value for s in OrderStatus)}.",
)
@click.pass_obj
def order_status(settings: Settings, order_id: int, new_status: str) -> None:
    """Change an order's status (allowed from any status)."""
    try:
        handler = ChangeOrderStatusHandler(order_store(settings))
        status = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{order_id} is now {status.label}.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show an order with its line items."""
    try:
        handler = ShowOrderHandler(order_store(settings))
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise _fail(exc)

    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(settings: Settings) -> None:
    """List all orders, newest first."""
    try:
        handler = ListOrdersHandler(order_store(settings))
        orders = handler.handle()
    except DomainException as exc:
        raise _fail(exc)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<14} {'Date':<10} {'Items':>5} {'Final':>10}  Status")
    click.echo("-" * 60)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_number:<14} {o.order_date:<10} "
            f"{o.item_count:>5} {o.final_price:>10}  {o.status}"
        )
