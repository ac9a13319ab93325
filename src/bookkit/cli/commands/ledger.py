"""Ledger derivation and inspection commands."""

import click
from sqlalchemy.exc import SQLAlchemyError
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.balances import AccountBalanceService
from bookkit.domain.chart_of_accounts import ChartOfAccountsService
from bookkit.domain.errors import DomainError
from bookkit.domain.journal import JournalService
from bookkit.domain.ledger import LedgerService
from bookkit.domain.reconciliation import ReconciliationService


@click.group()
def ledger_group():
    """Derive and inspect the double-entry ledger."""
    pass


@ledger_group.command("derive")
@click.option(
    "--profile",
    "profiles",
    multiple=True,
    help="Profile name or ID to process (repeatable; all profiles if omitted)",
)
@click.option("--reset", is_flag=True, help="Clear the existing ledger before deriving")
@click.pass_context
def derive_ledger(ctx, profiles: tuple[str, ...], reset: bool):
    """Build accounts, journal entries and reconciliations.

    Safe to re-run: transactions that already have a journal entry are
    skipped and reconciliations are refreshed in place.

    Examples:
        bookkit ledger derive
        bookkit ledger derive --profile Consulting
        bookkit ledger derive --reset
    """
    service = LedgerService(ctx.obj["db"])
    profile_ids = [resolve_profile_or_exit(ctx, p) for p in profiles] if profiles else None

    try:
        summary = service.derive_ledger(ctx.obj["user_id"], profile_ids=profile_ids, reset=reset)
    except (DomainError, SQLAlchemyError) as e:
        handle_domain_error(ctx, e, prefix="Failed to derive ledger: ")
        return

    click.echo("\nLedger derived:")
    click.echo(f"  Profiles processed: {summary.partitions_processed}")
    if summary.partitions_skipped:
        click.echo(f"  Profiles skipped: {summary.partitions_skipped}")
    click.echo(f"  Accounts: {summary.accounts_created} created, {summary.accounts_updated} updated")
    click.echo(f"  Journal entries: {summary.entries_created} created")
    click.echo(f"  Duplicates skipped: {summary.duplicates_skipped}")
    click.echo(
        f"  Reconciliations: {summary.reconciliations_created} created, "
        f"{summary.reconciliations_updated} updated"
    )
    if summary.items_skipped:
        click.echo(f"  Items skipped (see log): {summary.items_skipped}")


@ledger_group.command("accounts")
@click.option("--profile", required=True, help="Profile name or ID")
@click.pass_context
def list_accounts(ctx, profile: str):
    """Show a profile's chart of accounts."""
    service = ChartOfAccountsService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    accounts = service.list_accounts(ctx.obj["user_id"], profile_id)
    if not accounts:
        click.echo("No accounts found. Run 'ledger derive' first.")
        return

    click.echo("\nChart of accounts:")
    click.echo("-" * 70)
    for account in accounts:
        click.echo(
            f"{account.code:10s} | {account.name:30s} | {account.type.value:9s} | "
            f"${account.balance:>12,.2f}"
        )


@ledger_group.command("entries")
@click.option("--profile", required=True, help="Profile name or ID")
@click.pass_context
def list_entries(ctx, profile: str):
    """Show a profile's journal entries with their lines."""
    db = ctx.obj["db"]
    service = JournalService(db)
    profile_id = resolve_profile_or_exit(ctx, profile)

    entries = service.list_entries(ctx.obj["user_id"], profile_id)
    if not entries:
        click.echo("No journal entries found.")
        return

    names = {a.id: a.name for a in db.list_chart_accounts(ctx.obj["user_id"], profile_id)}
    for entry in entries:
        click.echo(f"\n{entry.entry_number} | {entry.date} | {entry.description}")
        for line in entry.lines:
            account_name = names.get(line.account_id, str(line.account_id))
            click.echo(
                f"    {account_name:30s} Dr ${line.debit_amount:>10,.2f}  Cr ${line.credit_amount:>10,.2f}"
            )


@ledger_group.command("reconciliations")
@click.option("--profile", required=True, help="Profile name or ID")
@click.pass_context
def list_reconciliations(ctx, profile: str):
    """Show a profile's monthly reconciliations."""
    service = ReconciliationService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    reconciliations = service.list_reconciliations(ctx.obj["user_id"], profile_id)
    if not reconciliations:
        click.echo("No reconciliations found.")
        return

    click.echo("\nReconciliations:")
    click.echo("-" * 70)
    for rec in reconciliations:
        click.echo(
            f"{rec.year}-{rec.month:02d} | open ${rec.opening_balance:>12,.2f} | "
            f"close ${rec.closing_balance:>12,.2f} | {rec.status.value}"
        )


@ledger_group.command("balances")
@click.option("--profile", required=True, help="Profile name or ID")
@click.pass_context
def show_balances(ctx, profile: str):
    """Recompute account balances and show the trial balance."""
    service = AccountBalanceService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)
    user_id = ctx.obj["user_id"]

    report = service.refresh_balances(user_id, profile_id)
    trial = service.trial_balance(user_id, profile_id)

    click.echo("\nBalances by account type:")
    for account_type, total in report.totals_by_type.items():
        click.echo(f"  {account_type.value:10s} ${total:>12,.2f}")
    click.echo(f"\nTrial balance over {trial.entry_count} entries:")
    click.echo(f"  Debits:  ${trial.total_debit:>12,.2f}")
    click.echo(f"  Credits: ${trial.total_credit:>12,.2f}")
    click.echo("  Balanced" if trial.is_balanced else "  NOT BALANCED")


@ledger_group.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_ledger(ctx, yes: bool):
    """Delete all derived accounts, entries and reconciliations.

    Transactions, categories, debts and recurring charges are kept.
    Journal numbering restarts at JE-000001.
    """
    if not yes and not click.confirm("Are you sure you want to delete the whole ledger?"):
        click.echo("Clear cancelled.")
        return

    counts = LedgerService(ctx.obj["db"]).clear_ledger(ctx.obj["user_id"])
    click.echo("Cleared ledger:")
    for table, count in counts.items():
        click.echo(f"  {table.replace('_', ' ')}: {count}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
