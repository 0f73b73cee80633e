"""Feature editing commands."""

import click
from quotecraft.cli.error_handling import handle_domain_error
from quotecraft.cli.project_files import load_project_or_exit, save_project
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.errors import DomainError
from quotecraft.utils.amount_parser import parse_number

POSITION = click.IntRange(min=1)


def parse_amount_option(ctx, param, value):
    """Parse an hours or price option, keeping whole numbers as integers."""
    if value is None:
        return None
    try:
        return parse_number(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def format_position(section: int, category: int, feature: int | None = None) -> str:
    """Format a 1-based position for messages."""
    position = f"{section}.{category}"
    if feature is not None:
        position += f".{feature}"
    return position


@click.group()
def feature_group():
    """Manage features.

    Positions are 1-based: SECTION CATEGORY FEATURE, as listed by
    'quotecraft summary --verbose'.
    """
    pass


@feature_group.command("toggle")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("section", type=POSITION)
@click.argument("category", type=POSITION)
@click.argument("feature", type=POSITION)
@click.pass_context
def toggle_feature(ctx, project_file: str, section: int, category: int, feature: int):
    """Select or deselect a feature."""
    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        toggled = editor.toggle_feature(section - 1, category - 1, feature - 1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_project(project_file, invoice)
    state = "Selected" if toggled.selected else "Deselected"
    click.echo(f"{state} '{toggled.description}'")
    click.echo(
        f"  Selected: {invoice.totals.selected_hours}h / "
        f"{invoice.totals.selected_price:,} {invoice.metadata.currency}"
    )


@feature_group.command("add")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("section", type=POSITION)
@click.argument("category", type=POSITION)
@click.argument("description")
@click.option("--detail", default="", help="Longer explanation of the feature")
@click.option("--hours", default="0", callback=parse_amount_option, help="Estimated hours")
@click.option("--price", default="0", callback=parse_amount_option, help="Price")
@click.option("--required", is_flag=True, help="Mark the feature as required")
@click.option("--deselected", is_flag=True, help="Add the feature without selecting it")
@click.pass_context
def add_feature(
    ctx,
    project_file: str,
    section: int,
    category: int,
    description: str,
    detail: str,
    hours,
    price,
    required: bool,
    deselected: bool,
):
    """Add a custom feature to a category.

    Examples:
        quotecraft feature add shop.json 3 1 "Wishlist" --hours 12 --price 600
    """
    if required and deselected:
        click.echo("Error: A required feature cannot be added deselected", err=True)
        ctx.exit(1)

    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        added = editor.add_feature(
            section - 1,
            category - 1,
            description,
            detail=detail,
            hours=hours,
            price=price,
            required=required,
            selected=not deselected,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_project(project_file, invoice)
    position = format_position(section, category, len(editor.get_category(section - 1, category - 1).features))
    click.echo(f"Added feature '{added.description}' at {position}")


@feature_group.command("update")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("section", type=POSITION)
@click.argument("category", type=POSITION)
@click.argument("feature", type=POSITION)
@click.option("--description", help="New description")
@click.option("--detail", help="New detail text")
@click.option("--hours", callback=parse_amount_option, help="New hours")
@click.option("--price", callback=parse_amount_option, help="New price")
@click.option("--required/--optional", default=None, help="Change whether the feature is required")
@click.option("--selected/--deselected", default=None, help="Change whether the feature is selected")
@click.pass_context
def update_feature(
    ctx,
    project_file: str,
    section: int,
    category: int,
    feature: int,
    description: str | None,
    detail: str | None,
    hours,
    price,
    required: bool | None,
    selected: bool | None,
):
    """Update fields of a feature."""
    changes = {
        name: value
        for name, value in (
            ("description", description),
            ("detail", detail),
            ("hours", hours),
            ("price", price),
            ("required", required),
            ("selected", selected),
        )
        if value is not None
    }
    if not changes:
        click.echo("Error: Nothing to update. Pass at least one option.", err=True)
        ctx.exit(1)

    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        updated = editor.update_feature(section - 1, category - 1, feature - 1, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_project(project_file, invoice)
    click.echo(
        f"Updated feature {format_position(section, category, feature)} '{updated.description}'"
    )


@feature_group.command("delete")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("section", type=POSITION)
@click.argument("category", type=POSITION)
@click.argument("feature", type=POSITION)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_feature(ctx, project_file: str, section: int, category: int, feature: int, yes: bool):
    """Delete a feature."""
    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        target = editor.get_feature(section - 1, category - 1, feature - 1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes:
        if not click.confirm(f"Delete feature '{target.description}'?"):
            click.echo("Cancelled.")
            return

    editor.delete_feature(section - 1, category - 1, feature - 1)
    save_project(project_file, invoice)
    click.echo(f"Deleted feature '{target.description}'")


def register_commands(cli):
    """Register feature commands with main CLI."""
    cli.add_command(feature_group, name="feature")
