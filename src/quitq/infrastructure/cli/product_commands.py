"""CLI commands for seeding the catalog."""

from __future__ import annotations

import click
from returns.pipeline import is_successful

from quitq.application.add_product import AddProductHandler
from quitq.application.update_product import UpdateProductHandler
from quitq.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 100.00).")
def product_add(name: str, price: str) -> None:
    """Add a new product to the catalog."""
    result = AddProductHandler(unit_of_work()).handle(name=name, price=price)
    if not is_successful(result):
        raise click.ClickException(result.failure().message)

    product = result.unwrap()
    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with unit_of_work() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>14}")
    click.echo("-" * 42)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>14}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 129.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price (existing orders keep their snapshot)."""
    result = UpdateProductHandler(unit_of_work()).handle(product_id=product_id, new_price=price)
    if not is_successful(result):
        raise click.ClickException(result.failure().message)
    click.echo(f"Product #{product_id} price updated to {result.unwrap().price}")
