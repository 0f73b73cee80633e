"""Shared pytest fixtures for quotecraft tests."""

import copy
import json
import shutil
from datetime import date
from pathlib import Path

import pytest

from quotecraft.domain.document_import import DocumentImportService
from quotecraft.domain.entities import ProjectConfig
from quotecraft.domain.templates import generate_template

TODAY = date(2026, 1, 10)

SAMPLE_DOCUMENT = {
    "metadata": {
        "projectName": "Clinic Booking App",
        "clientName": "Northside Clinic",
        "currency": "USD",
        "createdAt": "2026-01-05",
        "validUntil": "2026-02-04",
    },
    "sections": [
        {
            "title": "UX/UI DESIGN",
            "categories": [
                {
                    "name": "User Experience Design",
                    "features": [
                        {
                            "desc": "Wireframing",
                            "detail": "Low-fidelity wireframes for all key screens",
                            "hours": 24,
                            "price": 2160,
                            "required": True,
                            "selected": True,
                        },
                        {
                            "desc": "User Research & Personas",
                            "detail": "User interviews, persona creation, journey mapping",
                            "hours": 16,
                            "price": 1440,
                            "required": False,
                            "selected": False,
                        },
                    ],
                }
            ],
        },
        {
            "title": "MAINTENANCE & SUPPORT",
            "categories": [
                {
                    "name": "Post-Launch Support (Monthly)",
                    "features": [
                        {
                            "desc": "Technical Support",
                            "detail": "Email/chat support, issue resolution",
                            "hours": 6,
                            "price": 510,
                            "required": False,
                            "selected": True,
                        }
                    ],
                }
            ],
        },
    ],
    "totals": {
        "totalHours": 46,
        "totalPrice": 4110,
        "selectedHours": 30,
        "selectedPrice": 2670,
    },
}


@pytest.fixture
def today():
    """Fixed reference date for generated and imported documents."""
    return TODAY


@pytest.fixture
def import_service():
    """Create a DocumentImportService with a fixed creation date."""
    return DocumentImportService(default_currency="USD", today=TODAY)


@pytest.fixture
def sample_document():
    """Return a fresh copy of a valid JSON invoice document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_invoice(import_service, sample_document):
    """Import the sample document into an Invoice."""
    result = import_service.parse_json(sample_document)
    assert result.success, result.errors
    return result.invoice


@pytest.fixture
def mvp_invoice():
    """Generate a SaaS web app template at MVP complexity."""
    return generate_template(
        ProjectConfig(domain="SaaS", project_type="Web App", complexity="MVP"),
        today=TODAY,
    )


@pytest.fixture
def project_file(tmp_path):
    """Write the sample document to a project file and return its path."""
    path = tmp_path / "project.json"
    path.write_text(json.dumps(SAMPLE_DOCUMENT, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_copy(tmp_path, fixtures_dir):
    """Copy a fixture file into a temporary directory and return the copy's path."""

    def _copy(name: str) -> Path:
        target = tmp_path / name
        shutil.copy(fixtures_dir / name, target)
        return target

    return _copy


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep QUOTECRAFT_* variables of the calling shell out of the tests."""
    for name in ("QUOTECRAFT_CURRENCY", "QUOTECRAFT_VALIDITY_DAYS", "QUOTECRAFT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
