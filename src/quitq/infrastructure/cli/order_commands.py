"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click
from returns.pipeline import is_successful

from quitq.application.cancel_order import CancelOrderHandler
from quitq.application.create_order import CreateOrderHandler
from quitq.application.dto import OrderDTO
from quitq.application.list_user_orders import ListUserOrdersHandler
from quitq.application.result import report
from quitq.application.show_order import ShowOrderHandler
from quitq.application.transition_order import TransitionOrderHandler
from quitq.domain.model.order import OrderStatus
from quitq.infrastructure.bootstrap import unit_of_work


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<27} {dto.total:>28}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="User whose cart is checked out.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--payment-method", required=True, help="Payment method, e.g. UPI.")
def order_create(user_id: str, address: str, payment_method: str) -> None:
    """Place an order from the user's cart (empties the cart)."""
    result = CreateOrderHandler(unit_of_work()).handle(
        user_id=user_id,
        shipping_address=address,
        payment_method=payment_method,
    )
    if not is_successful(result):
        raise click.ClickException(result.failure().message)

    dto = result.unwrap()
    click.echo(f"Order #{dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    result = ShowOrderHandler(unit_of_work()).handle(order_id)
    if not is_successful(result):
        raise click.ClickException(result.failure().message)
    _display_order(result.unwrap())


@click.command("list")
@click.option("--user", "user_id", required=True, help="User whose orders to list.")
def order_list(user_id: str) -> None:
    """List a user's orders, oldest first."""
    orders = ListUserOrdersHandler(unit_of_work()).handle(user_id)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<10} {'Total':>16}  Created")
    click.echo("-" * 56)
    for dto in orders:
        click.echo(f"{dto.id:<6} {dto.status:<10} {dto.total:>16}  {dto.created_at}")


def _transition(order_id: int, target: OrderStatus, done: str) -> None:
    result = TransitionOrderHandler(unit_of_work()).handle(order_id, target)
    outcome = report(result, f"Order #{order_id} {done}.")
    if not outcome.succeeded:
        raise click.ClickException(outcome.message)
    click.echo(outcome.message)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a placed (unpaid) order."""
    result = CancelOrderHandler(unit_of_work()).handle(order_id)
    outcome = report(result, f"Order #{order_id} cancelled.")
    if not outcome.succeeded:
        raise click.ClickException(outcome.message)
    click.echo(outcome.message)


@click.command("ship")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to ship.")
def order_ship(order_id: int) -> None:
    """Mark a paid order as shipped."""
    _transition(order_id, OrderStatus.SHIPPED, "shipped")


@click.command("refund")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to refund.")
def order_refund(order_id: int) -> None:
    """Mark a paid order as refunded."""
    _transition(order_id, OrderStatus.REFUNDED, "refunded")
