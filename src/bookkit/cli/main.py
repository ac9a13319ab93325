"""Main CLI entry point."""

import logging

import click
from bookkit.database.factories import create_sqlite_database

# Import and register all commands at module level
from bookkit.cli.commands import (
    profile,
    category,
    add,
    debt,
    charge,
    ledger,
    credit,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BOOKKIT_DB_PATH environment variable)",
    envvar="BOOKKIT_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="local",
    show_default=True,
    help="User that owns the records (overrides BOOKKIT_USER environment variable)",
    envvar="BOOKKIT_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="BOOKKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, log_level: str):
    """Bookkit - Double-entry bookkeeping from your transactions.

    Derive a chart of accounts, journal entries and monthly reconciliations
    for each business profile, and estimate a credit score from your own
    records.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id


# Register all commands
profile.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
debt.register_commands(cli)
charge.register_commands(cli)
ledger.register_commands(cli)
credit.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
