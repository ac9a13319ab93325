"""Debt commands."""

from datetime import datetime

import click
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.errors import DomainError
from bookkit.domain.obligations import ObligationService
from bookkit.utils.amount_parser import parse_amount
from bookkit.utils.date_parser import parse_date


@click.group()
def debt_group():
    """Manage debts."""
    pass


@debt_group.command("add")
@click.argument("name")
@click.option("--balance", required=True, help="Outstanding balance (e.g. 5000.00)")
@click.option("--type", "debt_type", help="Debt type (e.g. CREDIT_CARD, AUTO_LOAN, MORTGAGE)")
@click.option("--rate", "interest_rate", help="Interest rate in percent")
@click.option("--opened", help="Date the debt was opened (defaults to now)")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.pass_context
def add_debt(
    ctx,
    name: str,
    balance: str,
    debt_type: str | None,
    interest_rate: str | None,
    opened: str | None,
    profile: str | None,
):
    """Record a debt.

    Examples:
        bookkit debt add "Visa" --balance 1200 --type CREDIT_CARD
        bookkit debt add "Car loan" --balance 15000 --type AUTO_LOAN --opened "8 months ago"
    """
    service = ObligationService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    try:
        debt_balance = parse_amount(balance)
        rate = parse_amount(interest_rate) if interest_rate else None
        opened_date = parse_date(opened) if opened else None
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        debt_id = service.add_debt(
            user_id=ctx.obj["user_id"],
            name=name,
            balance=debt_balance,
            debt_type=debt_type,
            interest_rate=rate,
            business_profile_id=profile_id,
            created_at=(
                None if opened_date is None
                else datetime.combine(opened_date, datetime.min.time())
            ),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created debt '{name}' (ID: {debt_id})")


@debt_group.command("list")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.pass_context
def list_debts(ctx, profile: str | None):
    """List debts."""
    service = ObligationService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    debts = service.list_debts(ctx.obj["user_id"], profile_id)
    if not debts:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 70)
    for debt in debts:
        kind = debt.type or "-"
        click.echo(
            f"ID: {debt.id:3d} | {debt.name:20s} | {kind:15s} | ${debt.balance:>12,.2f} | "
            f"opened {debt.created_at.date()}"
        )


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
