"""Project creation command."""

from pathlib import Path

import click
from quotecraft.cli.error_handling import handle_domain_error
from quotecraft.cli.project_files import save_project
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.entities import ProjectConfig
from quotecraft.domain.errors import DomainError
from quotecraft.domain.templates import (
    COMPLEXITY_LEVELS,
    PROJECT_DOMAINS,
    PROJECT_TYPES,
    generate_template,
)


@click.command("new")
@click.argument("project_file", type=click.Path(dir_okay=False))
@click.option("--domain", required=True, type=click.Choice(PROJECT_DOMAINS), help="Business domain")
@click.option(
    "--type", "project_type", required=True, type=click.Choice(PROJECT_TYPES), help="Project type"
)
@click.option(
    "--complexity",
    type=click.Choice(COMPLEXITY_LEVELS),
    default="Standard",
    show_default=True,
    help="Complexity level",
)
@click.option("--name", help="Project name (default: '{domain} {type} Project')")
@click.option("--client", help="Client name")
@click.option("--force", is_flag=True, help="Overwrite an existing project file")
@click.pass_context
def new_project(
    ctx,
    project_file: str,
    domain: str,
    project_type: str,
    complexity: str,
    name: str | None,
    client: str | None,
    force: bool,
):
    """Create a project file from a template.

    Examples:
        quotecraft new shop.json --domain E-commerce --type "Web App" --complexity MVP
        quotecraft new bot.json --domain AI --type "AI-Powered System" --client "Acme"
    """
    settings = ctx.obj["settings"]

    if not force and Path(project_file).exists():
        click.echo(f"Error: {project_file} already exists. Use --force to overwrite.", err=True)
        ctx.exit(1)

    try:
        invoice = generate_template(
            ProjectConfig(domain=domain, project_type=project_type, complexity=complexity),
            currency=settings.currency,
            validity_days=settings.validity_days,
        )
        if name is not None or client is not None:
            ProjectEditor(invoice).update_metadata(project_name=name, client_name=client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_project(project_file, invoice)

    totals = invoice.totals
    click.echo(f"Created '{invoice.metadata.project_name}' in {project_file}")
    click.echo(f"  Sections: {len(invoice.sections)}")
    click.echo(f"  Selected: {totals.selected_hours}h / {totals.selected_price:,} {invoice.metadata.currency}")
    click.echo(f"  Full catalog: {totals.total_hours}h / {totals.total_price:,} {invoice.metadata.currency}")


def register_commands(cli):
    """Register new command with main CLI."""
    cli.add_command(new_project)
