"""Project editing domain service."""

import logging
import math
from typing import Any, Optional

from quotecraft.domain.entities import (
    Category,
    Feature,
    FeatureFlag,
    Invoice,
    Section,
)
from quotecraft.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    feature_not_found,
    required_feature_deselect,
    section_not_found,
)
from quotecraft.domain.totals import compute_totals
from quotecraft.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

FEATURE_FIELDS = ("description", "detail", "hours", "price", "required", "selected")
METADATA_FIELDS = ("project_name", "client_name", "currency", "valid_until")


def _check_amount(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name.capitalize()} must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise ValidationError(f"{name.capitalize()} must be a finite number")
    if value < 0:
        raise ValidationError(f"{name.capitalize()} must not be negative")


class ProjectEditor:
    """Service for editing an invoice in place.

    Positions are 0-based. Every mutation recomputes the invoice totals
    before returning.
    """

    def __init__(self, invoice: Invoice):
        """Initialize project editor.

        Args:
            invoice: Invoice to edit
        """
        self.invoice = invoice

    def _refresh_totals(self) -> None:
        self.invoice.totals = compute_totals(self.invoice.sections)

    def get_section(self, section_index: int) -> Section:
        """Get a section by position.

        Raises:
            NotFoundError: If the position does not exist
        """
        if not 0 <= section_index < len(self.invoice.sections):
            raise NotFoundError(section_not_found(section_index))
        return self.invoice.sections[section_index]

    def get_category(self, section_index: int, category_index: int) -> Category:
        """Get a category by position.

        Raises:
            NotFoundError: If the position does not exist
        """
        section = self.get_section(section_index)
        if not 0 <= category_index < len(section.categories):
            raise NotFoundError(category_not_found(section_index, category_index))
        return section.categories[category_index]

    def get_feature(
        self, section_index: int, category_index: int, feature_index: int
    ) -> Feature:
        """Get a feature by position.

        Raises:
            NotFoundError: If the position does not exist
        """
        category = self.get_category(section_index, category_index)
        if not 0 <= feature_index < len(category.features):
            raise NotFoundError(
                feature_not_found(section_index, category_index, feature_index)
            )
        return category.features[feature_index]

    def toggle_feature(
        self, section_index: int, category_index: int, feature_index: int
    ) -> Feature:
        """Flip whether a feature counts toward the selected totals.

        Returns:
            The toggled feature

        Raises:
            NotFoundError: If the position does not exist
            ValidationError: If a required feature would be deselected
        """
        feature = self.get_feature(section_index, category_index, feature_index)
        if feature.required and feature.selected:
            raise ValidationError(required_feature_deselect(feature.description))

        feature.selected = not feature.selected
        self._refresh_totals()
        return feature

    def update_feature(
        self,
        section_index: int,
        category_index: int,
        feature_index: int,
        **changes: Any,
    ) -> Feature:
        """Update fields of a feature.

        Accepted fields: description, detail, hours, price, required,
        selected. An edited feature is no longer flagged for review.

        Raises:
            NotFoundError: If the position does not exist
            ValidationError: If a field is unknown or a value is invalid
        """
        feature = self.get_feature(section_index, category_index, feature_index)

        unknown = set(changes) - set(FEATURE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown feature field(s): {', '.join(sorted(unknown))}. "
                f"Must be one of: {', '.join(FEATURE_FIELDS)}"
            )
        if "description" in changes and not str(changes["description"] or "").strip():
            raise ValidationError("Feature description must not be empty")
        for name in ("hours", "price"):
            if name in changes:
                _check_amount(name, changes[name])
        required = changes.get("required", feature.required)
        selected = changes.get("selected", feature.selected)
        if ("required" in changes or "selected" in changes) and required and not selected:
            raise ValidationError(required_feature_deselect(feature.description))

        for name, value in changes.items():
            setattr(feature, name, value)
        if changes and feature.flag is FeatureFlag.NEEDS_REVIEW:
            feature.flag = None

        self._refresh_totals()
        return feature

    def add_feature(
        self,
        section_index: int,
        category_index: int,
        description: str,
        detail: str = "",
        hours: float = 0,
        price: float = 0,
        required: bool = False,
        selected: bool = True,
    ) -> Feature:
        """Append a custom feature to a category.

        Raises:
            NotFoundError: If the position does not exist
            ValidationError: If the description is empty or numbers are invalid
        """
        category = self.get_category(section_index, category_index)
        if not description or not description.strip():
            raise ValidationError("Feature description must not be empty")
        _check_amount("hours", hours)
        _check_amount("price", price)

        feature = Feature(
            description=description.strip(),
            detail=detail,
            hours=hours,
            price=price,
            required=required,
            selected=selected,
            flag=FeatureFlag.CUSTOM,
        )
        category.features.append(feature)
        self._refresh_totals()
        logger.debug("Added feature '%s' to '%s'", feature.description, category.name)
        return feature

    def delete_feature(
        self, section_index: int, category_index: int, feature_index: int
    ) -> Feature:
        """Remove a feature and return it.

        Raises:
            NotFoundError: If the position does not exist
        """
        self.get_feature(section_index, category_index, feature_index)
        feature = self.invoice.sections[section_index].categories[category_index].features.pop(
            feature_index
        )
        self._refresh_totals()
        return feature

    def add_section(self, title: str, category_name: str) -> Section:
        """Append a section holding one empty category.

        The title is stored upper-cased, as section headers are.

        Raises:
            ValidationError: If the title or category name is empty
        """
        if not title or not title.strip():
            raise ValidationError("Section title must not be empty")
        if not category_name or not category_name.strip():
            raise ValidationError("Category name must not be empty")

        section = Section(
            title=title.strip().upper(),
            categories=[Category(name=category_name.strip())],
        )
        self.invoice.sections.append(section)
        self._refresh_totals()
        return section

    def delete_section(self, section_index: int) -> Section:
        """Remove a section and return it.

        Raises:
            NotFoundError: If the position does not exist
        """
        self.get_section(section_index)
        section = self.invoice.sections.pop(section_index)
        self._refresh_totals()
        return section

    def update_metadata(
        self,
        project_name: Optional[str] = None,
        client_name: Optional[str] = None,
        currency: Optional[str] = None,
        valid_until: Optional[str] = None,
    ) -> None:
        """Update descriptive header fields; None leaves a field unchanged.

        ``valid_until`` accepts anything :func:`parse_date` understands and is
        stored as YYYY-MM-DD.

        Raises:
            ValidationError: If a value is invalid
        """
        metadata = self.invoice.metadata
        if project_name is not None:
            if not project_name.strip():
                raise ValidationError("Project name must not be empty")
            metadata.project_name = project_name.strip()
        if client_name is not None:
            metadata.client_name = client_name.strip() or None
        if currency is not None:
            if not currency.strip():
                raise ValidationError("Currency must not be empty")
            metadata.currency = currency.strip().upper()
        if valid_until is not None:
            try:
                metadata.valid_until = parse_date(valid_until).isoformat()
            except ValueError as e:
                raise ValidationError(f"Invalid valid-until date: {e}")

    def features_needing_review(self) -> list[tuple[str, Feature]]:
        """List features flagged for human review with their locations."""
        flagged = []
        for s_idx, section in enumerate(self.invoice.sections):
            for c_idx, category in enumerate(section.categories):
                for f_idx, feature in enumerate(category.features):
                    if feature.flag is FeatureFlag.NEEDS_REVIEW:
                        location = (
                            f"Section {s_idx + 1}, Category {c_idx + 1}, Feature {f_idx + 1}"
                        )
                        flagged.append((location, feature))
        return flagged
