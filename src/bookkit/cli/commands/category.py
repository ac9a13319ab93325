"""Category management commands."""

import click
from bookkit.cli.error_handling import handle_domain_error
from bookkit.cli.profile_resolution import resolve_profile_or_exit
from bookkit.domain.category import CategoryService
from bookkit.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--profile", help="Profile name or ID (personal categories if omitted)")
@click.pass_context
def list_categories(ctx, profile: str | None):
    """List the categories of a profile."""
    service = CategoryService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    categories = service.list_categories(ctx.obj["user_id"], profile_id)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        linked = f" -> account {cat.chart_account_id}" if cat.chart_account_id is not None else ""
        click.echo(f"{cat.name} ({cat.type.value.lower()}, ID: {cat.id}){linked}")


@category_group.command("create")
@click.argument("name")
@click.option("--profile", help="Profile name or ID (personal if omitted)")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, profile: str | None, category_type: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, profile)

    try:
        category_id = service.create_category(
            user_id=ctx.obj["user_id"],
            name=name,
            category_type=category_type,
            business_profile_id=profile_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created category '{name}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
