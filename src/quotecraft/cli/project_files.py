"""CLI helpers for reading and writing project files."""

from __future__ import annotations

from pathlib import Path

import click
from quotecraft.cli.error_handling import echo_parse_messages
from quotecraft.domain.document_import import DocumentImportService
from quotecraft.domain.entities import Invoice
from quotecraft.domain.export import invoice_to_json


def load_project_or_exit(ctx: click.Context, project_file: str) -> Invoice:
    """Load a project JSON file through the JSON importer, or exit with a CLI error.

    Project files are validated like any uploaded JSON document so that a
    hand-edited file cannot bypass the field checks.
    """
    settings = ctx.obj["settings"]
    service = DocumentImportService(default_currency=settings.currency)
    result = service.import_file(project_file, as_type="json")
    if not result.success:
        echo_parse_messages(result)
        ctx.exit(1)
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)
    return result.invoice


def save_project(project_file: str, invoice: Invoice) -> None:
    """Write an invoice as a JSON project file."""
    Path(project_file).write_text(invoice_to_json(invoice) + "\n", encoding="utf-8")
