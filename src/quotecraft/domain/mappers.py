"""Mapper functions to convert domain entities into their JSON document shape.

The JSON shape is the interchange format shared with the presentation layer
and the project files on disk: camelCase metadata and totals keys, and
``desc`` for a feature's short description. Optional fields that are unset
are omitted rather than written as null. The reverse direction goes through
the JSON importer, which validates before building entities.
"""

from typing import Any

from quotecraft.domain.entities import (
    Category,
    Feature,
    Invoice,
    Metadata,
    ParseResult,
    Section,
    Totals,
)

METADATA_FIELDS = (
    ("project_name", "projectName"),
    ("client_name", "clientName"),
    ("currency", "currency"),
    ("created_at", "createdAt"),
    ("valid_until", "validUntil"),
    ("domain", "domain"),
    ("project_type", "projectType"),
    ("complexity", "complexity"),
)


def feature_to_dict(feature: Feature) -> dict[str, Any]:
    """Convert a Feature entity to its JSON shape."""
    data: dict[str, Any] = {
        "desc": feature.description,
        "detail": feature.detail,
        "hours": feature.hours,
        "price": feature.price,
        "required": feature.required,
        "selected": feature.selected,
    }
    if feature.flag is not None:
        data["flag"] = feature.flag.value
    return data


def category_to_dict(category: Category) -> dict[str, Any]:
    """Convert a Category entity to its JSON shape."""
    return {
        "name": category.name,
        "features": [feature_to_dict(feature) for feature in category.features],
    }


def section_to_dict(section: Section) -> dict[str, Any]:
    """Convert a Section entity to its JSON shape."""
    return {
        "title": section.title,
        "categories": [category_to_dict(category) for category in section.categories],
    }


def metadata_to_dict(metadata: Metadata) -> dict[str, Any]:
    """Convert Metadata to its JSON shape, omitting unset optional fields."""
    data = {}
    for attribute, key in METADATA_FIELDS:
        value = getattr(metadata, attribute)
        if value is not None:
            data[key] = value
    return data


def totals_to_dict(totals: Totals) -> dict[str, int]:
    """Convert Totals to its JSON shape."""
    return {
        "totalHours": totals.total_hours,
        "totalPrice": totals.total_price,
        "selectedHours": totals.selected_hours,
        "selectedPrice": totals.selected_price,
    }


def invoice_to_dict(invoice: Invoice) -> dict[str, Any]:
    """Convert an Invoice to the JSON document shape."""
    return {
        "metadata": metadata_to_dict(invoice.metadata),
        "sections": [section_to_dict(section) for section in invoice.sections],
        "totals": totals_to_dict(invoice.totals),
    }


def parse_result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Convert a ParseResult to a JSON-friendly dict.

    The ``invoice`` key is present only for successful imports.
    """
    data: dict[str, Any] = {
        "success": result.success,
        "source": result.source.value,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
    }
    if result.invoice is not None:
        data["invoice"] = invoice_to_dict(result.invoice)
    return data
