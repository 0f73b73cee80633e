"""Export rendering of invoices.

Produces the JSON document and a plain-text rendering of the printable
document. The text rendering keeps the line layout the system-text importer
reads back: upper-case section headers, a glyph line per feature, its detail
line and a "{hours}h {price}" line, followed by the summary labels.
"""

import json
import math
from typing import Iterable

from quotecraft.domain.entities import Category, Feature, Invoice
from quotecraft.domain.errors import ValidationError, unknown_choice
from quotecraft.domain.mappers import invoice_to_dict
from quotecraft.domain.totals import round_half_up

EXPORT_FORMATS = {
    "invoice": "INVOICE",
    "quotation": "QUOTATION",
    "commercial-offer": "COMMERCIAL OFFER",
    "technical-scope": "TECHNICAL SCOPE OF WORK",
    "contract": "CONTRACT PROPOSAL",
    "maintenance": "MAINTENANCE & SUPPORT AGREEMENT",
}

SELECTED_GLYPH = "☑"
UNSELECTED_GLYPH = "☐"

HOURS_PER_WEEK = 40
WEEKS_PER_MONTH = 4


def invoice_to_json(invoice: Invoice) -> str:
    """Serialize an invoice as an indented JSON document."""
    return json.dumps(invoice_to_dict(invoice), indent=2, ensure_ascii=False)


def estimate_duration(hours: float) -> tuple[int, int]:
    """Estimate (weeks, months) for an amount of effort at one full-time person."""
    weeks = math.ceil(hours / HOURS_PER_WEEK)
    months = math.ceil(weeks / WEEKS_PER_MONTH)
    return weeks, months


def format_hours(hours: float) -> str:
    """Format hours without a trailing ".0"."""
    return f"{hours:.2f}".rstrip("0").rstrip(".")


def format_price(price: float) -> str:
    """Format a price as a whole number with thousands separators."""
    return f"{round_half_up(price):,}"


def _is_shown(feature: Feature, include_optional: bool) -> bool:
    return feature.selected or (include_optional and not feature.required)


def _shown_features(category: Category, include_optional: bool) -> list[Feature]:
    return [f for f in category.features if _is_shown(f, include_optional)]


def _feature_lines(feature: Feature) -> Iterable[str]:
    glyph = SELECTED_GLYPH if feature.selected else UNSELECTED_GLYPH
    yield f"{glyph} {feature.description}"
    yield f"  {feature.detail}"
    yield f"  {format_hours(feature.hours)}h {format_price(feature.price)}"


def render_text(
    invoice: Invoice, export_format: str = "quotation", include_optional: bool = True
) -> str:
    """Render an invoice as a plain-text document.

    Features are shown when selected or, with ``include_optional``, when they
    are optional add-ons.

    Args:
        invoice: Invoice to render
        export_format: One of EXPORT_FORMATS
        include_optional: Whether unselected optional features are listed

    Returns:
        Document text

    Raises:
        ValidationError: If the export format is unknown
    """
    if export_format not in EXPORT_FORMATS:
        raise ValidationError(
            unknown_choice("export format", export_format, tuple(EXPORT_FORMATS))
        )

    metadata = invoice.metadata
    totals = invoice.totals
    lines = [metadata.project_name]
    if metadata.client_name:
        lines.append(f"Client: {metadata.client_name}")

    header = [f"Document: {EXPORT_FORMATS[export_format]}", f"Date: {metadata.created_at}"]
    if metadata.valid_until:
        header.append(f"Valid Until: {metadata.valid_until}")
    header.append(f"Currency: {metadata.currency}")
    lines.append(" | ".join(header))

    selected_count = 0
    for section in invoice.sections:
        categories = [
            (category, _shown_features(category, include_optional))
            for category in section.categories
        ]
        if not any(features for _, features in categories):
            continue

        lines.extend(["", section.title])
        for category, features in categories:
            if not features:
                continue
            lines.extend(["", category.name])
            for feature in features:
                lines.extend(_feature_lines(feature))
                if feature.selected:
                    selected_count += 1

    weeks, months = estimate_duration(totals.selected_hours)
    lines.extend(
        [
            "",
            f"Selected Items: {selected_count}",
            f"Total Hours: {totals.total_hours}",
            f"Selected Hours: {totals.selected_hours}",
            f"Total Price: {format_price(totals.total_price)} {metadata.currency}",
            f"Selected Price: {format_price(totals.selected_price)} {metadata.currency}",
            f"Estimated Duration: {months} month{'s' if months != 1 else ''} ({weeks} weeks)",
        ]
    )
    return "\n".join(lines) + "\n"
