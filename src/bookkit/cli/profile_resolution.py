"""CLI helpers for profile resolution."""

from __future__ import annotations

import click
from bookkit.domain.profile import ProfileService
from bookkit.utils.profile_resolver import resolve_profile


def resolve_profile_or_exit(ctx: click.Context, profile: str | None) -> str | None:
    """Resolve a --profile value, or exit with a CLI error.

    None selects the personal partition.
    """
    if profile is None:
        return None
    try:
        return resolve_profile(ProfileService(ctx.obj["db"]), ctx.obj["user_id"], profile)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
