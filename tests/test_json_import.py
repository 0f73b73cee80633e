"""Tests for JSON document import."""

import json

import pytest
from quotecraft.domain.document_import import INVALID_STRUCTURE
from quotecraft.domain.entities import DocumentSource, FeatureFlag, Totals
from quotecraft.domain.errors import ValidationError
from quotecraft.domain.export import invoice_to_json


def first_feature(document):
    return document["sections"][0]["categories"][0]["features"][0]


def test_import_valid_document(import_service, sample_document):
    """Test importing a complete, valid document."""
    result = import_service.parse_json(sample_document)

    assert result.success
    assert result.source is DocumentSource.JSON
    assert result.errors == []
    assert result.warnings == []

    invoice = result.invoice
    assert invoice.metadata.project_name == "Clinic Booking App"
    assert invoice.metadata.client_name == "Northside Clinic"
    assert len(invoice.sections) == 2
    assert invoice.totals == Totals(46, 4110, 30, 2670)


def test_export_then_import_is_identity(import_service, sample_invoice):
    """Test that an exported invoice imports back unchanged."""
    result = import_service.parse_json_text(invoice_to_json(sample_invoice))

    assert result.success
    assert result.warnings == []
    assert result.invoice == sample_invoice


def test_template_round_trip(import_service, mvp_invoice):
    """Test that a generated template survives export and import."""
    result = import_service.parse_json_text(invoice_to_json(mvp_invoice))

    assert result.success
    assert result.invoice == mvp_invoice


def test_totals_are_recomputed(import_service, sample_document):
    """Test that document totals are replaced by computed ones."""
    sample_document["totals"] = {"totalHours": 999, "totalPrice": 1, "selectedHours": 0, "selectedPrice": 0}

    result = import_service.parse_json(sample_document)

    assert result.success
    assert result.invoice.totals == Totals(46, 4110, 30, 2670)


def test_missing_totals_are_computed(import_service, sample_document):
    """Test that documents without totals still import."""
    del sample_document["totals"]
    result = import_service.parse_json(sample_document)
    assert result.success
    assert result.invoice.totals.total_price == 4110


@pytest.mark.parametrize(
    "document",
    [
        [],
        "invoice",
        {},
        {"metadata": {"projectName": "X"}},
        {"sections": []},
        {"metadata": [], "sections": []},
        {"metadata": {"projectName": "X"}, "sections": {}},
    ],
)
def test_structural_rejection(import_service, document):
    """Test that documents without metadata and sections are rejected."""
    result = import_service.parse_json(document)

    assert not result.success
    assert result.invoice is None
    assert result.errors == [INVALID_STRUCTURE]


def test_invalid_json_text(import_service):
    """Test that undecodable JSON text fails with a parse message."""
    result = import_service.parse_json_text('{"metadata": ')
    assert not result.success
    assert result.errors[0].startswith("Failed to parse JSON:")


def test_missing_project_name_is_error(import_service, sample_document):
    """Test that a document without project name is rejected."""
    del sample_document["metadata"]["projectName"]
    result = import_service.parse_json(sample_document)
    assert not result.success
    assert "Missing project name in metadata" in result.errors


def test_missing_currency_defaults(import_service, sample_document):
    """Test that a missing currency falls back to the default with a warning."""
    del sample_document["metadata"]["currency"]
    result = import_service.parse_json(sample_document)
    assert result.success
    assert result.invoice.metadata.currency == "USD"
    assert "Currency not specified, defaulting to USD" in result.warnings


def test_missing_created_at_uses_today(import_service, sample_document):
    """Test that the creation date defaults to today."""
    del sample_document["metadata"]["createdAt"]
    result = import_service.parse_json(sample_document)
    assert result.invoice.metadata.created_at == "2026-01-10"


def test_unrecognized_date_warns(import_service, sample_document):
    """Test that unparseable dates are kept but reported."""
    sample_document["metadata"]["validUntil"] = "whenever"
    result = import_service.parse_json(sample_document)
    assert result.success
    assert result.invoice.metadata.valid_until == "whenever"
    assert "Unrecognized date in validUntil: 'whenever'" in result.warnings


def test_errors_are_located(import_service, sample_document):
    """Test that feature errors name their 1-based position."""
    sample_document["sections"][1]["categories"][0]["features"][0]["desc"] = ""
    sample_document["sections"][0]["categories"][0]["features"][1]["hours"] = -4

    result = import_service.parse_json(sample_document)

    assert not result.success
    assert result.invoice is None
    assert "Section 1, Category 1, Feature 2: Negative hours not allowed" in result.errors
    assert "Section 2, Category 1, Feature 1: Missing description" in result.errors


def test_section_errors(import_service, sample_document):
    """Test errors for malformed sections and categories."""
    sample_document["sections"].append("not a section")
    sample_document["sections"].append({"categories": []})
    sample_document["sections"].append({"title": "EXTRA", "categories": [{"name": "Loose"}]})

    result = import_service.parse_json(sample_document)

    assert not result.success
    assert "Section 3: Invalid section" in result.errors
    assert "Section 4: Missing title" in result.errors
    assert "Section 5, Category 1: Missing or invalid features" in result.errors


def test_numbers_are_defaulted_with_warnings(import_service, sample_document):
    """Test that missing or invalid hours and prices become 0."""
    feature = first_feature(sample_document)
    del feature["hours"]
    feature["price"] = "a lot"

    result = import_service.parse_json(sample_document)

    assert result.success
    imported = result.invoice.sections[0].categories[0].features[0]
    assert imported.hours == 0
    assert imported.price == 0
    assert "Section 1, Category 1, Feature 1: Missing hours, defaulting to 0" in result.warnings
    assert "Section 1, Category 1, Feature 1: Invalid price 'a lot', defaulting to 0" in result.warnings


def test_numeric_strings_are_accepted(import_service, sample_document):
    """Test that numbers written as strings are parsed."""
    feature = first_feature(sample_document)
    feature["hours"] = "24"
    feature["price"] = "2,160"

    result = import_service.parse_json(sample_document)

    assert result.success
    assert result.warnings == []
    assert result.invoice.totals.total_price == 4110


def test_boolean_defaults(import_service, sample_document):
    """Test that missing or invalid booleans fall back to their defaults."""
    feature = first_feature(sample_document)
    del feature["required"]
    feature["selected"] = "yes"

    result = import_service.parse_json(sample_document)

    imported = result.invoice.sections[0].categories[0].features[0]
    assert imported.required is False
    assert imported.selected is True
    assert "Section 1, Category 1, Feature 1: Invalid selected value 'yes', using default" in result.warnings


def test_description_alias_and_flags(import_service, sample_document):
    """Test the 'description' alias and flag handling."""
    feature = first_feature(sample_document)
    feature["description"] = feature.pop("desc")
    feature["flag"] = "imported"
    second = sample_document["sections"][0]["categories"][0]["features"][1]
    second["flag"] = "sparkly"

    result = import_service.parse_json(sample_document)

    features = result.invoice.sections[0].categories[0].features
    assert features[0].description == "Wireframing"
    assert features[0].flag is FeatureFlag.IMPORTED
    assert features[1].flag is None
    assert "Section 1, Category 1, Feature 2: Unknown flag 'sparkly' ignored" in result.warnings


def test_unnamed_category(import_service, sample_document):
    """Test that categories without a name are kept as 'Untitled'."""
    del sample_document["sections"][0]["categories"][0]["name"]
    result = import_service.parse_json(sample_document)
    assert result.success
    assert result.invoice.sections[0].categories[0].name == "Untitled"
    assert "Section 1, Category 1: Missing name" in result.warnings


def test_input_is_not_mutated(import_service, sample_document):
    """Test that importing leaves the input document untouched."""
    del first_feature(sample_document)["hours"]
    snapshot = json.dumps(sample_document, sort_keys=True)

    import_service.parse_json(sample_document)

    assert json.dumps(sample_document, sort_keys=True) == snapshot


def test_import_file_json(import_service, fixtures_dir):
    """Test importing a JSON project file from disk."""
    result = import_service.import_file(str(fixtures_dir / "project.json"))

    assert result.success
    invoice = result.invoice
    assert invoice.metadata.currency == "EUR"
    assert invoice.totals == Totals(171, 15293, 140, 12700)


def test_import_file_malformed_json(import_service, fixtures_dir):
    """Test that a malformed file fails instead of raising."""
    result = import_service.import_file(str(fixtures_dir / "invalid.json"))
    assert not result.success
    assert result.source is DocumentSource.JSON


def test_import_file_unsupported_extension(import_service, tmp_path):
    """Test that unsupported extensions are rejected."""
    path = tmp_path / "quote.xlsx"
    path.write_text("data")
    with pytest.raises(ValidationError, match="Unsupported file type 'xlsx'"):
        import_service.import_file(str(path))


def test_import_file_unreadable(import_service, tmp_path):
    """Test that a missing file yields a failed result."""
    result = import_service.import_file(str(tmp_path / "missing.json"))
    assert not result.success
    assert result.errors[0].startswith("Failed to parse JSON:")


def test_minimal_document_defaults(import_service):
    """Test the smallest valid document: one warning, default currency, zero totals."""
    result = import_service.parse_json({"metadata": {"projectName": "X"}, "sections": []})

    assert result.success
    assert result.errors == []
    assert result.warnings == ["Currency not specified, defaulting to USD"]
    assert result.invoice.metadata.currency == "USD"
    assert result.invoice.metadata.created_at == "2026-01-10"
    assert result.invoice.totals == Totals()


def test_deeply_nested_json_fails_cleanly(import_service):
    """Test that nesting too deep to decode yields a failed result."""
    result = import_service.parse_json_text("[" * 100000 + "]" * 100000)

    assert not result.success
    assert result.source is DocumentSource.JSON
    assert result.errors[0].startswith("Failed to parse JSON:")


@pytest.mark.parametrize("value", ["1e999", 10 ** 400, float("inf"), float("nan")])
def test_out_of_range_numbers_default_to_zero(import_service, sample_document, value):
    """Test that numbers too large or not finite are treated as invalid."""
    first_feature(sample_document)["price"] = value

    result = import_service.parse_json(sample_document)

    assert result.success
    assert result.invoice.sections[0].categories[0].features[0].price == 0
    assert any(
        w.startswith("Section 1, Category 1, Feature 1: Invalid price") for w in result.warnings
    )
    assert result.invoice.totals.total_price == 4110 - 2160


def test_huge_number_literal_in_text(import_service, sample_document):
    """Test a 400-digit integer literal in JSON text."""
    text = json.dumps(sample_document).replace('"hours": 24', '"hours": ' + "9" * 400, 1)

    result = import_service.parse_json_text(text)

    assert result.success
    assert result.invoice.sections[0].categories[0].features[0].hours == 0


def test_non_text_created_at_is_defaulted(import_service, sample_document):
    """Test that a numeric creation date is replaced by today and reported as such."""
    sample_document["metadata"]["createdAt"] = 20260101

    result = import_service.parse_json(sample_document)

    assert result.invoice.metadata.created_at == "2026-01-10"
    assert "Invalid createdAt '20260101', defaulting to today" in result.warnings
    assert not any(w.startswith("Unrecognized date") for w in result.warnings)


def test_non_text_valid_until_is_ignored(import_service, sample_document):
    """Test that a numeric expiry date is dropped with a single warning."""
    sample_document["metadata"]["validUntil"] = 20260201

    result = import_service.parse_json(sample_document)

    assert result.invoice.metadata.valid_until is None
    assert result.warnings == ["Ignoring non-text validUntil in metadata"]
