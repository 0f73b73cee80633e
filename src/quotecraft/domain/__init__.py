"""Domain layer for quotecraft application."""

from quotecraft.domain.document_import import DocumentImportService
from quotecraft.domain.editor import ProjectEditor
from quotecraft.domain.templates import generate_template
from quotecraft.domain.totals import compute_totals

__all__ = [
    "DocumentImportService",
    "ProjectEditor",
    "generate_template",
    "compute_totals",
]
