"""Project summary command."""

import click
from quotecraft.cli.project_files import load_project_or_exit
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.export import estimate_duration, format_hours, format_price


@click.command("summary")
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="List every feature with its position")
@click.pass_context
def show_summary(ctx, project_file: str, verbose: bool):
    """Show sections, totals and features needing review."""
    invoice = load_project_or_exit(ctx, project_file)
    metadata = invoice.metadata
    totals = invoice.totals
    currency = metadata.currency

    click.echo(f"\n{metadata.project_name}")
    if metadata.client_name:
        click.echo(f"Client: {metadata.client_name}")
    click.echo(f"Created: {metadata.created_at}")
    if metadata.valid_until:
        click.echo(f"Valid until: {metadata.valid_until}")
    click.echo("-" * 80)
    click.echo(f"{'#':<4} {'Section':<44} {'Hours':>10} {'Price':>18}")
    click.echo("-" * 80)

    for s_idx, section in enumerate(invoice.sections, start=1):
        features = [f for c in section.categories for f in c.features]
        hours = sum(f.hours for f in features if f.selected)
        price = sum(f.price for f in features if f.selected)
        click.echo(
            f"{s_idx:<4} {section.title[:44]:<44} {format_hours(hours):>10} "
            f"{format_price(price) + ' ' + currency:>18}"
        )
        if verbose:
            for c_idx, category in enumerate(section.categories, start=1):
                click.echo(f"       {category.name}")
                for f_idx, feature in enumerate(category.features, start=1):
                    mark = "x" if feature.selected else " "
                    tags = []
                    if feature.required:
                        tags.append("required")
                    if feature.flag is not None:
                        tags.append(feature.flag.value)
                    tag_str = f" [{', '.join(tags)}]" if tags else ""
                    click.echo(
                        f"       [{mark}] {s_idx}.{c_idx}.{f_idx} {feature.description}"
                        f" ({format_hours(feature.hours)}h, {format_price(feature.price)}){tag_str}"
                    )

    weeks, months = estimate_duration(totals.selected_hours)
    click.echo("-" * 80)
    click.echo(f"Selected: {totals.selected_hours}h / {format_price(totals.selected_price)} {currency}")
    click.echo(f"Full catalog: {totals.total_hours}h / {format_price(totals.total_price)} {currency}")
    click.echo(f"Estimated duration: {months} month(s), {weeks} week(s)")

    needs_review = ProjectEditor(invoice).features_needing_review()
    if needs_review:
        click.echo(f"\n{len(needs_review)} feature(s) need review:")
        for location, feature in needs_review:
            click.echo(f"  {location}: {feature.description}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(show_summary)
