"""CLI commands for the Cart Store."""

from __future__ import annotations

import click
from returns.pipeline import is_successful

from quitq.application.add_to_cart import AddToCartHandler
from quitq.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from quitq.application.result import report
from quitq.application.show_cart import ShowCartHandler
from quitq.application.update_cart_item import UpdateCartItemHandler
from quitq.infrastructure.bootstrap import unit_of_work

_user_option = click.option("--user", "user_id", required=True, help="User id.")


@click.command("add")
@_user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart (increments an existing line)."""
    result = AddToCartHandler(unit_of_work()).handle(user_id, product_id, quantity)
    if not is_successful(result):
        raise click.ClickException(result.failure().message)
    click.echo(f"Product {product_id} now x{result.unwrap()} in {user_id}'s cart.")


@click.command("update")
@_user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(user_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    result = UpdateCartItemHandler(unit_of_work()).handle(user_id, product_id, quantity)
    if not is_successful(result):
        raise click.ClickException(result.failure().message)
    click.echo(f"Product {product_id} now x{result.unwrap()} in {user_id}'s cart.")


@click.command("remove")
@_user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a product from the cart."""
    result = RemoveFromCartHandler(unit_of_work()).handle(user_id, product_id)
    outcome = report(result, f"Product {product_id} removed from {user_id}'s cart.")
    if not outcome.succeeded:
        raise click.ClickException(outcome.message)
    click.echo(outcome.message)


@click.command("clear")
@_user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart."""
    outcome = report(ClearCartHandler(unit_of_work()).handle(user_id), "Cart cleared.")
    click.echo(outcome.message)


@click.command("show")
@_user_option
def cart_show(user_id: str) -> None:
    """Show the cart at current catalog prices."""
    lines = ShowCartHandler(unit_of_work()).handle(user_id)

    if not lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo("-" * 63)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>14} {line.line_total:>14}"
        )
