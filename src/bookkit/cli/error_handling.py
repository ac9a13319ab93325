"""CLI error handling helpers."""

import click
from sqlalchemy.exc import SQLAlchemyError

from bookkit.domain.errors import DomainError


def handle_domain_error(
    ctx: click.Context, error: DomainError | ValueError | SQLAlchemyError, prefix: str = ""
) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {prefix}{error}", err=True)
    ctx.exit(1)
