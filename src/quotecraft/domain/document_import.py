"""Document import domain service.

Reconstructs an Invoice from one of three inputs:

- JSON produced by this tool (exact, validated field by field)
- text extracted from a PDF this tool rendered (deterministic patterns)
- text extracted from any other PDF, DOCX or plain-text file (best effort)

Every entry point returns a ParseResult; content problems never escape as
exceptions.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from quotecraft.domain.entities import (
    Category,
    DocumentSource,
    Feature,
    FeatureFlag,
    Invoice,
    Metadata,
    ParseResult,
    Section,
)
from quotecraft.domain.errors import ValidationError, unsupported_extension
from quotecraft.domain.mappers import totals_to_dict
from quotecraft.domain.text_parsing import (
    classify_lines,
    extract_client_name,
    extract_feature_blocks,
    first_content_line,
    section_titles,
)
from quotecraft.domain.totals import compute_totals
from quotecraft.utils.amount_parser import parse_number
from quotecraft.utils.date_parser import is_parseable_date, today_iso

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("json", "pdf", "txt", "docx")

INVALID_STRUCTURE = "Invalid JSON structure. Missing required fields: metadata, sections"
PDF_LIMITED_WARNING = "PDF parsing is limited. For best results, export and import JSON files."
REVIEW_WARNING = "Please review all extracted data carefully."

# Phrases and headers the export renderer is known to emit
SYSTEM_SIGNATURES = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"DÉVELOPPEMENT MOBILE",
        r"FRONTEND DEVELOPMENT",
        r"BACKEND & API DEVELOPMENT",
        r"Selected Items",
        r"Total Hours:",
    )
)
SYSTEM_SIGNATURE_THRESHOLD = 2

VALID_FLAGS = tuple(flag.value for flag in FeatureFlag)

OPTIONAL_METADATA_FIELDS = (
    ("clientName", "client_name"),
    ("validUntil", "valid_until"),
    ("domain", "domain"),
    ("projectType", "project_type"),
    ("complexity", "complexity"),
)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """A problem found at a position of a JSON document."""

    location: str
    message: str
    severity: Severity

    def render(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


def count_signatures(text: str) -> int:
    """Count how many export signatures occur in the text."""
    return sum(1 for pattern in SYSTEM_SIGNATURES if pattern.search(text))


def is_system_document(text: str) -> bool:
    """Check whether text was most likely rendered by this tool."""
    return count_signatures(text) >= SYSTEM_SIGNATURE_THRESHOLD


def _location(
    section: int, category: Optional[int] = None, feature: Optional[int] = None
) -> str:
    parts = [f"Section {section + 1}"]
    if category is not None:
        parts.append(f"Category {category + 1}")
    if feature is not None:
        parts.append(f"Feature {feature + 1}")
    return ", ".join(parts)


def _text(value: Any) -> Optional[str]:
    """Return a non-blank string value, or None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _feature_description(data: dict) -> Optional[str]:
    return _text(data.get("desc")) or _text(data.get("description"))


def _number(value: Any) -> tuple[Optional[float], Optional[str]]:
    """Coerce a JSON value to a finite number.

    Returns:
        Tuple of (number or None, problem description or None)
    """
    if value is None:
        return None, "missing"
    try:
        number = parse_number(value)
        if not math.isfinite(number):
            return None, "invalid"
    except (ValueError, ArithmeticError):
        return None, "invalid"
    return number, None


def _is_structurally_valid(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("metadata"), dict)
        and isinstance(data.get("sections"), list)
    )


class DocumentImportService:
    """Service for importing documents into invoices."""

    def __init__(self, default_currency: str = "USD", today: Optional[date] = None):
        """Initialize document import service.

        Args:
            default_currency: Currency used when a document does not name one
            today: Creation date for imported invoices (defaults to today)
        """
        self.default_currency = default_currency
        self.today = today

    # JSON

    def parse_json(self, data: Any) -> ParseResult:
        """Import an already-decoded JSON document.

        Pass one collects findings from the untouched input; pass two builds a
        fresh, fully defaulted invoice when no finding is an error.

        Args:
            data: Decoded JSON value, expected to be an invoice document

        Returns:
            ParseResult with source ``json``
        """
        try:
            if not _is_structurally_valid(data):
                return ParseResult(
                    success=False, source=DocumentSource.JSON, errors=[INVALID_STRUCTURE]
                )

            findings = self.inspect_json(data)
            errors = [f.render() for f in findings if f.severity is Severity.ERROR]
            warnings = [f.render() for f in findings if f.severity is Severity.WARNING]

            if errors:
                logger.info("JSON import rejected with %d error(s)", len(errors))
                return ParseResult(
                    success=False,
                    source=DocumentSource.JSON,
                    errors=errors,
                    warnings=warnings,
                )

            invoice = self._build_invoice(data)
            provided_totals = data.get("totals")
            if provided_totals is not None and provided_totals != totals_to_dict(invoice.totals):
                logger.debug("Replacing document totals %r with recomputed totals", provided_totals)

            logger.info(
                "Imported JSON document: %d section(s), %d warning(s)",
                len(invoice.sections),
                len(warnings),
            )
            return ParseResult(
                success=True,
                source=DocumentSource.JSON,
                invoice=invoice,
                warnings=warnings,
            )
        except Exception as e:
            logger.exception("Unexpected failure while importing JSON")
            return ParseResult(
                success=False,
                source=DocumentSource.JSON,
                errors=[f"Failed to parse JSON: {e}"],
            )

    def parse_json_text(self, text: str) -> ParseResult:
        """Decode JSON text and import it."""
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            return ParseResult(
                success=False,
                source=DocumentSource.JSON,
                errors=[f"Failed to parse JSON: {e}"],
            )
        return self.parse_json(data)

    def inspect_json(self, data: dict) -> list[Finding]:
        """Collect validation findings for a structurally valid document."""
        findings: list[Finding] = []

        def error(location: str, message: str) -> None:
            findings.append(Finding(location, message, Severity.ERROR))

        def warning(location: str, message: str) -> None:
            findings.append(Finding(location, message, Severity.WARNING))

        metadata = data["metadata"]
        if _text(metadata.get("projectName")) is None:
            error("", "Missing project name in metadata")
        if _text(metadata.get("currency")) is None:
            warning("", f"Currency not specified, defaulting to {self.default_currency}")

        for key in ("createdAt", "validUntil"):
            value = metadata.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            if not isinstance(value, str):
                if key == "createdAt":
                    warning("", f"Invalid createdAt '{value}', defaulting to today")
                continue
            if not is_parseable_date(value):
                warning("", f"Unrecognized date in {key}: '{value}'")

        for key, _ in OPTIONAL_METADATA_FIELDS:
            value = metadata.get(key)
            if value is not None and not isinstance(value, str):
                warning("", f"Ignoring non-text {key} in metadata")

        for s_idx, section in enumerate(data["sections"]):
            where = _location(s_idx)
            if not isinstance(section, dict):
                error(where, "Invalid section")
                continue
            if _text(section.get("title")) is None:
                error(where, "Missing title")
            categories = section.get("categories")
            if not isinstance(categories, list):
                error(where, "Missing or invalid categories")
                continue

            for c_idx, category in enumerate(categories):
                where = _location(s_idx, c_idx)
                if not isinstance(category, dict):
                    error(where, "Invalid category")
                    continue
                if _text(category.get("name")) is None:
                    warning(where, "Missing name")
                features = category.get("features")
                if not isinstance(features, list):
                    error(where, "Missing or invalid features")
                    continue

                for f_idx, feature in enumerate(features):
                    where = _location(s_idx, c_idx, f_idx)
                    if not isinstance(feature, dict):
                        error(where, "Invalid feature")
                        continue
                    if _feature_description(feature) is None:
                        error(where, "Missing description")

                    for key in ("hours", "price"):
                        number, problem = _number(feature.get(key))
                        if problem == "missing":
                            warning(where, f"Missing {key}, defaulting to 0")
                        elif problem == "invalid":
                            warning(where, f"Invalid {key} '{feature.get(key)}', defaulting to 0")
                        elif number < 0:
                            error(where, f"Negative {key} not allowed")

                    for key in ("required", "selected"):
                        value = feature.get(key)
                        if value is not None and not isinstance(value, bool):
                            warning(where, f"Invalid {key} value '{value}', using default")

                    flag = feature.get("flag")
                    if flag is not None and flag not in VALID_FLAGS:
                        warning(where, f"Unknown flag '{flag}' ignored")

        return findings

    def _build_invoice(self, data: dict) -> Invoice:
        raw_metadata = data["metadata"]
        metadata = Metadata(
            project_name=raw_metadata["projectName"],
            created_at=_text(raw_metadata.get("createdAt")) or today_iso(self.today),
            currency=_text(raw_metadata.get("currency")) or self.default_currency,
        )
        for key, attribute in OPTIONAL_METADATA_FIELDS:
            value = raw_metadata.get(key)
            if isinstance(value, str):
                setattr(metadata, attribute, value)

        sections = [
            Section(
                title=raw_section["title"],
                categories=[
                    Category(
                        name=_text(raw_category.get("name")) or "Untitled",
                        features=[
                            self._build_feature(raw_feature)
                            for raw_feature in raw_category["features"]
                        ],
                    )
                    for raw_category in raw_section["categories"]
                ],
            )
            for raw_section in data["sections"]
        ]

        return Invoice(metadata=metadata, sections=sections, totals=compute_totals(sections))

    def _build_feature(self, data: dict) -> Feature:
        hours, _ = _number(data.get("hours"))
        price, _ = _number(data.get("price"))
        required = data.get("required")
        selected = data.get("selected")
        flag = data.get("flag")

        return Feature(
            description=_feature_description(data),
            detail=data.get("detail") if isinstance(data.get("detail"), str) else "",
            hours=hours if hours is not None else 0,
            price=price if price is not None else 0,
            required=required if isinstance(required, bool) else False,
            selected=selected if isinstance(selected, bool) else True,
            flag=FeatureFlag(flag) if flag in VALID_FLAGS else None,
        )

    # PDF / DOCX text

    def parse_pdf_text(self, text: str) -> ParseResult:
        """Import text extracted from a PDF.

        Text carrying enough export signatures is parsed as a document this
        tool rendered; anything else falls through to the external parser.
        """
        try:
            signatures = count_signatures(text)
            if signatures >= SYSTEM_SIGNATURE_THRESHOLD:
                logger.debug("Found %d export signatures, parsing as system PDF", signatures)
                return self.parse_system_text(text)
            logger.debug("Found %d export signature(s), parsing as external PDF", signatures)
            return self.parse_external_text(text, DocumentSource.PDF_EXTERNAL)
        except Exception as e:
            logger.exception("Unexpected failure while importing PDF text")
            return ParseResult(
                success=False,
                source=DocumentSource.PDF_EXTERNAL,
                errors=[f"Failed to parse PDF: {e}"],
            )

    def parse_system_text(self, text: str) -> ParseResult:
        """Parse text of a PDF rendered by this tool.

        Extracted features are spread evenly, in document order, over the
        detected sections (ceil(features / sections) per section).
        """
        try:
            lines = classify_lines(text)
            warnings = [PDF_LIMITED_WARNING]

            first_line = first_content_line(lines)
            project_name = "Imported Project"
            if first_line:
                project_name = first_line.split("Client:")[0].strip() or first_line

            titles = section_titles(lines)
            if titles:
                sections = [
                    Section(title=title, categories=[Category(name="Imported Features")])
                    for title in titles
                ]
            else:
                sections = [
                    Section(title="IMPORTED FEATURES", categories=[Category(name="Features")])
                ]

            features = [
                Feature(
                    description=block.description,
                    detail=block.detail,
                    hours=block.hours,
                    price=block.price,
                    required=True,
                    selected=True,
                    flag=FeatureFlag.IMPORTED,
                )
                for block in extract_feature_blocks(lines)
            ]
            if features:
                per_section = math.ceil(len(features) / len(sections))
                for index, section in enumerate(sections):
                    start = index * per_section
                    section.categories[0].features = features[start:start + per_section]
            else:
                warnings.append("No priced features were found in the document")

            invoice = Invoice(
                metadata=Metadata(
                    project_name=project_name,
                    client_name=extract_client_name(lines),
                    created_at=today_iso(self.today),
                    currency=self.default_currency,
                ),
                sections=sections,
                totals=compute_totals(sections),
            )
            logger.info(
                "Imported system PDF text: %d section(s), %d feature(s)",
                len(sections),
                len(features),
            )
            return ParseResult(
                success=True,
                source=DocumentSource.PDF_SYSTEM,
                invoice=invoice,
                warnings=warnings,
            )
        except Exception as e:
            logger.exception("Unexpected failure while parsing system PDF text")
            return ParseResult(
                success=False,
                source=DocumentSource.PDF_SYSTEM,
                errors=[f"Failed to parse PDF: {e}"],
            )

    def parse_external_text(
        self, text: str, source: DocumentSource = DocumentSource.PDF_EXTERNAL
    ) -> ParseResult:
        """Best-effort import of text from a document not rendered by this tool.

        Only the project name and section headers are recovered; sections get
        an empty category. Without any header a single placeholder feature is
        created and flagged for review.
        """
        label = "DOCX" if source is DocumentSource.DOCX else "PDF"
        try:
            lines = classify_lines(text)
            warnings = [
                f"External {label} detected. Parsing is best-effort.",
                REVIEW_WARNING,
            ]

            sections = [
                Section(title=title, categories=[Category(name="Extracted Items")])
                for title in section_titles(lines)
            ]
            if not sections:
                placeholder = Feature(
                    description=f"Imported from external {label}",
                    detail="Content extracted from uploaded document. Please review and edit.",
                    hours=0,
                    price=0,
                    required=False,
                    selected=True,
                    flag=FeatureFlag.NEEDS_REVIEW,
                )
                sections = [
                    Section(
                        title="IMPORTED CONTENT",
                        categories=[Category(name="Items", features=[placeholder])],
                    )
                ]

            invoice = Invoice(
                metadata=Metadata(
                    project_name=first_content_line(lines) or "Imported External Document",
                    created_at=today_iso(self.today),
                    currency=self.default_currency,
                ),
                sections=sections,
                totals=compute_totals(sections),
            )
            logger.info("Imported external %s text: %d section(s)", label, len(sections))
            return ParseResult(success=True, source=source, invoice=invoice, warnings=warnings)
        except Exception as e:
            logger.exception("Unexpected failure while parsing external document text")
            return ParseResult(
                success=False,
                source=source,
                errors=[f"Failed to parse document: {e}"],
            )

    def parse_docx_text(self, text: str) -> ParseResult:
        """Import text extracted from a DOCX file."""
        return self.parse_external_text(text, DocumentSource.DOCX)

    # Files

    def import_file(self, file_path: str, as_type: Optional[str] = None) -> ParseResult:
        """Import a file, dispatching on its (or the given) extension.

        PDF and DOCX files are expected to hold already-extracted UTF-8 text.

        Args:
            file_path: Path to the uploaded file
            as_type: Extension to use instead of the file's own

        Returns:
            ParseResult whose source matches the effective extension

        Raises:
            ValidationError: If the extension is not supported
        """
        path = Path(file_path)
        extension = (as_type or path.suffix).lower().lstrip(".")
        if extension not in SUPPORTED_EXTENSIONS:
            raise ValidationError(unsupported_extension(extension))

        try:
            text = path.read_bytes().decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            source, label = {
                "json": (DocumentSource.JSON, "JSON"),
                "pdf": (DocumentSource.PDF_EXTERNAL, "PDF"),
                "txt": (DocumentSource.PDF_EXTERNAL, "document"),
                "docx": (DocumentSource.DOCX, "document"),
            }[extension]
            return ParseResult(success=False, source=source, errors=[f"Failed to parse {label}: {e}"])

        logger.debug("Importing %s as %s", path, extension)
        if extension == "json":
            return self.parse_json_text(text)
        if extension == "pdf":
            return self.parse_pdf_text(text)
        if extension == "docx":
            return self.parse_docx_text(text)
        return self.parse_external_text(text, DocumentSource.PDF_EXTERNAL)

