"""Document import command."""

import click
from quotecraft.cli.error_handling import echo_parse_messages, handle_domain_error
from quotecraft.cli.project_files import save_project
from quotecraft.domain.document_import import SUPPORTED_EXTENSIONS, DocumentImportService
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.errors import DomainError
from quotecraft.domain.totals import iter_features

SOURCE_LABELS = {
    "json": "JSON (Exact)",
    "pdf-system": "System PDF",
    "pdf-external": "External PDF",
    "docx": "DOCX",
}


@click.command("import")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--as",
    "as_type",
    type=click.Choice(SUPPORTED_EXTENSIONS, case_sensitive=False),
    help="Treat the document as this file type instead of using its extension",
)
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False), help="Write the imported project to this JSON file"
)
@click.pass_context
def import_document(ctx, document: str, as_type: str | None, output: str | None):
    """Import a JSON project or text extracted from a PDF or DOCX file.

    PDF and DOCX documents must already be converted to plain text (for
    example with pdftotext); pass the text file with --as pdf or --as docx
    when its extension differs.
    """
    settings = ctx.obj["settings"]
    service = DocumentImportService(default_currency=settings.currency)

    try:
        result = service.import_file(document, as_type=as_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_parse_messages(result)
    if not result.success:
        click.echo(f"\nImport failed ({SOURCE_LABELS[result.source.value]}).", err=True)
        ctx.exit(1)

    invoice = result.invoice
    feature_count = sum(1 for _ in iter_features(invoice.sections))
    needs_review = ProjectEditor(invoice).features_needing_review()

    click.echo("\nImport complete:")
    click.echo(f"  Source: {SOURCE_LABELS[result.source.value]}")
    click.echo(f"  Project: {invoice.metadata.project_name}")
    if invoice.metadata.client_name:
        click.echo(f"  Client: {invoice.metadata.client_name}")
    click.echo(f"  Sections: {len(invoice.sections)}")
    click.echo(f"  Features: {feature_count}")
    click.echo(f"  Total Hours: {invoice.totals.total_hours}")
    click.echo(f"  Total Price: {invoice.totals.total_price:,} {invoice.metadata.currency}")
    if needs_review:
        click.echo(f"  Needs review: {len(needs_review)} feature(s)")

    if output:
        save_project(output, invoice)
        click.echo(f"\nSaved project to {output}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_document)
