"""Credit score commands."""

import click
from sqlalchemy.exc import SQLAlchemyError
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.credit_score import CreditScoreService
from bookkit.domain.entities import CreditScoreResult
from bookkit.domain.errors import DomainError


def print_score(result: CreditScoreResult) -> None:
    """Print a score with its factor breakdown."""
    click.echo(f"\nCredit score: {result.score} ({result.rating})")
    click.echo("-" * 60)
    for name, factor in result.factors.items():
        click.echo(f"  {name:20s} {float(factor.score):5.2f} x {float(factor.weight):.2f}  {factor.details}")
    click.echo("-" * 60)
    click.echo(f"  Accounts: {result.accounts}")
    click.echo(f"  Recent inquiries: {result.inquiries}")
    click.echo(f"  Utilization: {result.credit_utilization}%")
    click.echo(f"  Total debt: ${result.total_debt:,.2f}")
    click.echo(f"  Account age: {result.avg_account_age} months")


@click.group()
def credit_group():
    """Estimate credit scores from your own records."""
    pass


@credit_group.command("show")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.option("--save", is_flag=True, help="Record the score in the history")
@click.pass_context
def show_score(ctx, profile: str | None, save: bool):
    """Calculate the current credit score.

    Examples:
        bookkit credit-score show
        bookkit credit-score show --profile Consulting --save
    """
    service = CreditScoreService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    try:
        result = service.estimate(ctx.obj["user_id"], profile_id)
        if save:
            record_id = service.save(ctx.obj["user_id"], profile_id, result)
    except (DomainError, SQLAlchemyError) as e:
        handle_domain_error(ctx, e, prefix="Failed to calculate credit score: ")
        return

    print_score(result)
    if save:
        click.echo(f"\nSaved credit score (ID: {record_id})")


@credit_group.command("update-all")
@click.pass_context
def update_all(ctx):
    """Recalculate and save scores for personal and every profile."""
    service = CreditScoreService(ctx.obj["db"])
    db = ctx.obj["db"]
    names = {p.id: p.name for p in db.list_profiles(ctx.obj["user_id"])}

    updated = service.update_all(ctx.obj["user_id"])
    click.echo(f"Updated {len(updated)} credit scores")
    for profile_id, result in updated:
        label = "Personal" if profile_id is None else names.get(profile_id, profile_id)
        click.echo(f"  {label:20s} {result.score} ({result.rating})")


@credit_group.command("history")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.pass_context
def show_history(ctx, profile: str | None):
    """List saved credit scores, newest first."""
    service = CreditScoreService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    records = service.history(ctx.obj["user_id"], profile_id)
    if not records:
        click.echo("No saved credit scores found.")
        return

    click.echo("\nCredit score history:")
    for record in records:
        click.echo(
            f"{record.score_date:%Y-%m-%d %H:%M} | {record.score:3d} | {record.rating:12s} | "
            f"{record.provider} ({record.score_type})"
        )


def register_commands(cli):
    """Register credit score commands with main CLI."""
    cli.add_command(credit_group, name="credit-score")
