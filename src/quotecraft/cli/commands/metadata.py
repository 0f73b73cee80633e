"""Project metadata command."""

import click
from quotecraft.cli.error_handling import handle_domain_error
from quotecraft.cli.project_files import load_project_or_exit, save_project
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.errors import DomainError


@click.command("meta")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", "project_name", help="Project name")
@click.option("--client", "client_name", help="Client name (pass an empty string to clear)")
@click.option("--currency", help="Currency code, e.g. EUR")
@click.option("--valid-until", help="Expiry date (e.g. '2026-12-31', 'in 30 days')")
@click.pass_context
def update_metadata(
    ctx,
    project_file: str,
    project_name: str | None,
    client_name: str | None,
    currency: str | None,
    valid_until: str | None,
):
    """Show or update project metadata."""
    invoice = load_project_or_exit(ctx, project_file)

    changed = any(v is not None for v in (project_name, client_name, currency, valid_until))
    if changed:
        try:
            ProjectEditor(invoice).update_metadata(
                project_name=project_name,
                client_name=client_name,
                currency=currency,
                valid_until=valid_until,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        save_project(project_file, invoice)
        click.echo(f"Updated {project_file}")

    metadata = invoice.metadata
    click.echo(f"  Project: {metadata.project_name}")
    click.echo(f"  Client: {metadata.client_name or '-'}")
    click.echo(f"  Currency: {metadata.currency}")
    click.echo(f"  Created: {metadata.created_at}")
    click.echo(f"  Valid until: {metadata.valid_until or '-'}")
    if metadata.domain:
        click.echo(f"  Template: {metadata.domain} / {metadata.project_type} / {metadata.complexity}")


def register_commands(cli):
    """Register metadata command with main CLI."""
    cli.add_command(update_metadata)
