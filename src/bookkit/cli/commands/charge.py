"""Recurring charge commands."""

import click
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.errors import DomainError
from bookkit.domain.obligations import ObligationService
from bookkit.utils.amount_parser import parse_amount
from bookkit.utils.date_parser import parse_date


@click.group()
def charge_group():
    """Manage recurring charges."""
    pass


@charge_group.command("add")
@click.argument("name")
@click.option("--amount", required=True, help="Charge amount (e.g. 15.99)")
@click.option("--due", required=True, help="Next due date")
@click.option(
    "--status",
    type=click.Choice(["paid", "pending", "overdue", "cancelled"], case_sensitive=False),
    default="pending",
    help="Payment status (default: pending)",
)
@click.option("--paid-on", help="Date of the last payment")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.pass_context
def add_charge(
    ctx,
    name: str,
    amount: str,
    due: str,
    status: str,
    paid_on: str | None,
    profile: str | None,
):
    """Record a recurring charge.

    Examples:
        bookkit charge add "Streaming" --amount 15.99 --due 2024-02-01
        bookkit charge add "Internet" --amount 60 --due 2024-02-10 --status paid --paid-on 2024-02-08
    """
    service = ObligationService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    try:
        charge_amount = parse_amount(amount)
        due_date = parse_date(due)
        paid_date = parse_date(paid_on) if paid_on else None
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        charge_id = service.add_recurring_charge(
            user_id=ctx.obj["user_id"],
            name=name,
            amount=charge_amount,
            next_due_date=due_date,
            status=status,
            last_paid_date=paid_date,
            business_profile_id=profile_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created recurring charge '{name}' (ID: {charge_id})")


@charge_group.command("list")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.pass_context
def list_charges(ctx, profile: str | None):
    """List recurring charges."""
    service = ObligationService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    charges = service.list_recurring_charges(ctx.obj["user_id"], profile_id)
    if not charges:
        click.echo("No recurring charges found.")
        return

    click.echo("\nRecurring charges:")
    click.echo("-" * 70)
    for charge in charges:
        paid = f" | paid {charge.last_paid_date}" if charge.last_paid_date else ""
        click.echo(
            f"ID: {charge.id:3d} | {charge.name:20s} | ${charge.amount:>9,.2f} | "
            f"{charge.status.value:9s} | due {charge.next_due_date}{paid}"
        )


def register_commands(cli):
    """Register recurring charge commands with main CLI."""
    cli.add_command(charge_group, name="charge")
