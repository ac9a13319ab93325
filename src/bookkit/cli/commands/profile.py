"""Business profile commands."""

import click
from bookkit.cli.error_handling import handle_domain_error
from bookkit.domain.errors import DomainError
from bookkit.domain.profile import ProfileService


@click.group()
def profile_group():
    """Manage business profiles."""
    pass


@profile_group.command("create")
@click.argument("name", metavar="PROFILE_NAME")
@click.option(
    "--type",
    "profile_type",
    type=click.Choice(["business", "personal"], case_sensitive=False),
    default="business",
    help="Profile type (default: business)",
)
@click.option("--id", "profile_id", help="Explicit profile ID (generated if not provided)")
@click.pass_context
def create_profile(ctx, name: str, profile_type: str, profile_id: str | None):
    """Create a new business profile.

    Examples:
        bookkit profile create "Consulting"
        bookkit profile create "Household" --type personal
    """
    service = ProfileService(ctx.obj["db"])

    try:
        new_id = service.create_profile(
            user_id=ctx.obj["user_id"], name=name, profile_type=profile_type, profile_id=profile_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created profile '{name}' (ID: {new_id})")


@profile_group.command("list")
@click.pass_context
def list_profiles(ctx):
    """List all profiles."""
    service = ProfileService(ctx.obj["db"])

    profiles = service.list_profiles(ctx.obj["user_id"])
    if not profiles:
        click.echo("No profiles found.")
        return

    click.echo("\nProfiles:")
    click.echo("-" * 70)
    for profile in profiles:
        click.echo(f"ID: {profile.id:36s} | {profile.name:20s} | {profile.type.value}")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
