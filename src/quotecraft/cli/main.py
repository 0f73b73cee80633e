"""Main CLI entry point."""

import click
from quotecraft.config import configure_logging, load_settings
from quotecraft.domain.errors import ValidationError

# Import and register all commands at module level
from quotecraft.cli.commands import (
    new,
    import_cmd,
    summary,
    export,
    feature,
    section,
    metadata,
)


@click.group()
@click.option(
    "--currency",
    help="Default currency code (overrides QUOTECRAFT_CURRENCY environment variable)",
    envvar="QUOTECRAFT_CURRENCY",
)
@click.option(
    "--validity-days",
    type=int,
    help="Days a generated quotation stays valid (overrides QUOTECRAFT_VALIDITY_DAYS)",
    envvar="QUOTECRAFT_VALIDITY_DAYS",
)
@click.option(
    "--log-level",
    help="Logging level (overrides QUOTECRAFT_LOG_LEVEL environment variable)",
    envvar="QUOTECRAFT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, currency: str | None, validity_days: int | None, log_level: str | None):
    """Quotecraft - Priced project documents for freelancers and studios.

    Generate a starter project from a template, import JSON, PDF text or DOCX
    text, edit features and sections, and export quotations or invoices.
    """
    ctx.ensure_object(dict)

    try:
        settings = load_settings(
            currency=currency, validity_days=validity_days, log_level=log_level
        )
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    configure_logging(settings)
    ctx.obj["settings"] = settings


# Register all commands
new.register_commands(cli)
import_cmd.register_commands(cli)
summary.register_commands(cli)
export.register_commands(cli)
feature.register_commands(cli)
section.register_commands(cli)
metadata.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
