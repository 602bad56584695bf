import click

from quitq.domain.exceptions import StoreUnavailableError
from quitq.infrastructure.bootstrap import log_level as default_log_level
from quitq.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from quitq.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_refund,
    order_ship,
    order_show,
)
from quitq.infrastructure.cli.payment_commands import (
    payment_list,
    payment_process,
    payment_validate,
)
from quitq.infrastructure.cli.product_commands import product_add, product_list, product_update
from quitq.infrastructure.logging_config import configure_logging

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class QuitqGroup(click.Group):
    """Top-level group that reports store outages as a clean CLI error."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except StoreUnavailableError as exc:
            raise click.ClickException(f"Store unavailable: {exc}") from exc


@click.group(cls=QuitqGroup)
@click.option(
    "--log-level",
    type=click.Choice(_LEVELS, case_sensitive=False),
    default=default_log_level,
    show_default="$QUITQ_LOG_LEVEL or WARNING",
    help="Logging verbosity.",
)
@click.option("--json-logs", is_flag=True, default=False, help="Emit logs as JSON lines.")
def cli(log_level: str, json_logs: bool) -> None:
    """quitq — cart checkout, order lifecycle and payments"""
    configure_logging(log_level.upper(), json_output=json_logs)


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def payment() -> None:
    """Process and validate payments."""


@cli.group()
def product() -> None:
    """Seed and inspect the catalog."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_refund)
order.add_command(order_ship)
order.add_command(order_show)
payment.add_command(payment_list)
payment.add_command(payment_process)
payment.add_command(payment_validate)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
