"""CLI error handling helpers."""

import click

from quotecraft.domain.entities import ParseResult
from quotecraft.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_parse_messages(result: ParseResult) -> None:
    """Print import errors and warnings to stderr."""
    for error in result.errors:
        click.echo(f"Error: {error}", err=True)
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)
