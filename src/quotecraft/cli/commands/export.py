"""Document export command."""

from pathlib import Path

import click
from quotecraft.cli.project_files import load_project_or_exit
from quotecraft.domain.export import EXPORT_FORMATS, invoice_to_json, render_text


@click.command("export")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "export_format",
    type=click.Choice(tuple(EXPORT_FORMATS)),
    default="quotation",
    show_default=True,
    help="Document type",
)
@click.option("--json", "as_json", is_flag=True, help="Export the JSON document instead of text")
@click.option("--exclude-optional", is_flag=True, help="Leave out unselected optional features")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.pass_context
def export_document(
    ctx,
    project_file: str,
    export_format: str,
    as_json: bool,
    exclude_optional: bool,
    output: str | None,
):
    """Export a project as a text document or JSON.

    The text document can be imported again with 'quotecraft import --as pdf'.
    """
    invoice = load_project_or_exit(ctx, project_file)

    if as_json:
        content = invoice_to_json(invoice) + "\n"
    else:
        content = render_text(
            invoice, export_format=export_format, include_optional=not exclude_optional
        )

    if output:
        Path(output).write_text(content, encoding="utf-8")
        click.echo(f"Exported {project_file} to {output}")
    else:
        click.echo(content, nl=False)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_document)
