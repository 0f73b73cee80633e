"""Domain model entities for quotecraft.

These are pure data classes describing a priced project: an Invoice holds
metadata, an ordered list of sections (each with categories of features) and
the totals derived from them. They carry no behaviour; totals are derived by
``quotecraft.domain.totals`` and mutations go through
``quotecraft.domain.editor``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FeatureFlag(str, Enum):
    """Provenance or quality marker carried by a feature."""

    NEEDS_REVIEW = "needs_review"
    IMPORTED = "imported"
    CUSTOM = "custom"


class DocumentSource(str, Enum):
    """Input format an invoice was reconstructed from."""

    JSON = "json"
    PDF_SYSTEM = "pdf-system"
    PDF_EXTERNAL = "pdf-external"
    DOCX = "docx"


@dataclass
class Feature:
    """Priced, selectable unit of project scope."""

    description: str
    detail: str = ""
    hours: float = 0
    price: float = 0
    required: bool = False
    selected: bool = True
    flag: Optional[FeatureFlag] = None


@dataclass
class Category:
    """Named group of features within a section."""

    name: str
    features: list[Feature] = field(default_factory=list)


@dataclass
class Section:
    """Top-level named group of categories."""

    title: str
    categories: list[Category] = field(default_factory=list)


@dataclass
class Metadata:
    """Descriptive header of an invoice."""

    project_name: str
    created_at: str
    currency: str = "USD"
    client_name: Optional[str] = None
    valid_until: Optional[str] = None
    domain: Optional[str] = None
    project_type: Optional[str] = None
    complexity: Optional[str] = None


@dataclass(frozen=True)
class Totals:
    """Aggregates derived from the sections of an invoice."""

    total_hours: int = 0
    total_price: int = 0
    selected_hours: int = 0
    selected_price: int = 0


@dataclass
class Invoice:
    """Root aggregate combining metadata, sections and derived totals."""

    metadata: Metadata
    sections: list[Section] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)


@dataclass(frozen=True)
class ProjectConfig:
    """Categorical choices a starter invoice is generated from."""

    domain: str
    project_type: str
    complexity: str


@dataclass(frozen=True)
class ParseResult:
    """Outcome of importing a document.

    ``invoice`` is only set when ``success`` is true. Warnings are surfaced
    regardless of success.
    """

    success: bool
    source: DocumentSource
    invoice: Optional[Invoice] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
