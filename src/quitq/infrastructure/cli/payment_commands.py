"""CLI commands for payments."""

from __future__ import annotations

import click
from returns.pipeline import is_successful

from quitq.application.list_order_payments import ListOrderPaymentsHandler
from quitq.application.process_payment import ProcessPaymentHandler
from quitq.application.result import report
from quitq.application.validate_payment import ValidatePaymentHandler
from quitq.infrastructure.bootstrap import unit_of_work


@click.command("process")
@click.option("--order", "order_id", required=True, type=int, help="Order ID being paid.")
@click.option("--method", "payment_method", required=True, help="Payment method, e.g. UPI.")
@click.option("--amount", required=True, help="Amount paid; must equal the order total.")
@click.option("--transaction-id", default=None, help="Gateway transaction id (generated if omitted).")
def payment_process(
    order_id: int,
    payment_method: str,
    amount: str,
    transaction_id: str | None,
) -> None:
    """Record a full payment for a placed order and mark it paid."""
    result = ProcessPaymentHandler(unit_of_work()).handle(
        order_id=order_id,
        payment_method=payment_method,
        amount=amount,
        transaction_id=transaction_id,
    )
    if not is_successful(result):
        raise click.ClickException(result.failure().message)

    dto = result.unwrap()
    click.echo(f"Payment recorded for order #{dto.order_id}.")
    click.echo(f"Transaction: {dto.transaction_id}")
    click.echo(f"Amount:      {dto.amount:.2f} {dto.currency}")


@click.command("validate")
@click.option("--transaction-id", required=True, help="Transaction id to check.")
def payment_validate(transaction_id: str) -> None:
    """Check that a transaction id is on record."""
    result = ValidatePaymentHandler(unit_of_work()).handle(transaction_id)
    outcome = report(result, "Payment is valid.")
    if not outcome.succeeded:
        raise click.ClickException(outcome.message)
    click.echo(outcome.message)


@click.command("list")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
def payment_list(order_id: int) -> None:
    """List the payments recorded against an order."""
    payments = ListOrderPaymentsHandler(unit_of_work()).handle(order_id)

    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"{'Transaction':<40} {'Method':<12} {'Amount':>12} {'Status':<10}")
    click.echo("-" * 77)
    for dto in payments:
        click.echo(
            f"{dto.transaction_id:<40} {dto.payment_method:<12} {dto.amount:>12.2f} {dto.status:<10}"
        )
