"""Add transaction command."""

import click
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.errors import DomainError
from bookkit.domain.transaction import TransactionService
from bookkit.utils.amount_parser import parse_amount
from bookkit.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Signed amount: positive income, negative expense (e.g. -50.00)"
)
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Optional type, must agree with the sign of the amount",
)
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    amount: str,
    description: str | None,
    category: str | None,
    profile: str | None,
    transaction_type: str | None,
):
    """Add a transaction manually.

    Examples:
        bookkit add --profile Consulting --date 2024-01-15 --amount 1000 --category Sales
        bookkit add --profile Consulting --date 2024-01-20 --amount -300 --category Rent
    """
    service = TransactionService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            user_id=ctx.obj["user_id"],
            date=txn_date,
            amount=txn_amount,
            description=description,
            category=category,
            business_profile_id=profile_id,
            transaction_type=transaction_type,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: ${txn_amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")
    if category:
        click.echo(f"  Category: {category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
