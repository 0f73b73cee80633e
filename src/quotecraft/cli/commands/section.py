"""Section editing commands."""

import click
from quotecraft.cli.error_handling import handle_domain_error
from quotecraft.cli.project_files import load_project_or_exit, save_project
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.errors import DomainError


@click.group()
def section_group():
    """Manage sections."""
    pass


@section_group.command("add")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("title")
@click.option("--category", "category_name", default="Custom Features", show_default=True, help="Name of the section's first category")
@click.pass_context
def add_section(ctx, project_file: str, title: str, category_name: str):
    """Add a section with one empty category."""
    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        section = editor.add_section(title, category_name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_project(project_file, invoice)
    click.echo(f"Added section '{section.title}' at position {len(invoice.sections)}")


@section_group.command("delete")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("section", type=click.IntRange(min=1))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_section(ctx, project_file: str, section: int, yes: bool):
    """Delete a section and every feature in it."""
    invoice = load_project_or_exit(ctx, project_file)
    editor = ProjectEditor(invoice)

    try:
        target = editor.get_section(section - 1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    feature_count = sum(len(c.features) for c in target.categories)
    if not yes:
        if not click.confirm(f"Delete section '{target.title}' with {feature_count} feature(s)?"):
            click.echo("Cancelled.")
            return

    editor.delete_section(section - 1)
    save_project(project_file, invoice)
    click.echo(f"Deleted section '{target.title}'")


def register_commands(cli):
    """Register section commands with main CLI."""
    cli.add_command(section_group, name="section")
