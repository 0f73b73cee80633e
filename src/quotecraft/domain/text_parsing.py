"""Line classification for plain text extracted from PDF and DOCX documents.

Each line of the text is classified once; the importers then work on the
classified lines instead of running patterns over the whole document.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from quotecraft.utils.amount_parser import parse_whole_amount

FEATURE_GLYPHS = ("☑", "☐", "✓", "○")

SECTION_HEADER_PATTERN = re.compile(r"[A-Z\s&/]+")
METRIC_PATTERN = re.compile(r"\s*(\d+(?:\.\d+)?)\s*h\s*(\d[\d\s,]*)")
CLIENT_LABEL_PATTERN = re.compile(r"client:", re.IGNORECASE)

MIN_HEADER_LENGTH = 4
MAX_HEADER_LENGTH = 49


class LineKind(Enum):
    BLANK = "blank"
    SECTION_HEADER = "section_header"
    FEATURE = "feature"
    METRIC = "metric"
    TEXT = "text"


@dataclass(frozen=True)
class Line:
    """A line of text together with its classification."""

    number: int
    text: str
    kind: LineKind

    @property
    def stripped(self) -> str:
        return self.text.strip()


@dataclass(frozen=True)
class FeatureBlock:
    """Feature extracted from a glyph line, a detail line and a metric line."""

    description: str
    detail: str
    hours: float
    price: int
    line_number: int


def is_section_header(text: str) -> bool:
    """Check whether a line looks like an upper-case section title.

    A title consists only of capital letters, whitespace, ``&`` and ``/`` and
    is 4 to 49 characters long once trimmed.
    """
    stripped = text.strip()
    if not MIN_HEADER_LENGTH <= len(stripped) <= MAX_HEADER_LENGTH:
        return False
    return stripped == stripped.upper() and SECTION_HEADER_PATTERN.fullmatch(stripped) is not None


def classify_line(text: str) -> LineKind:
    """Classify a single line of extracted text."""
    stripped = text.strip()
    if not stripped:
        return LineKind.BLANK
    if stripped.startswith(FEATURE_GLYPHS):
        return LineKind.FEATURE
    if METRIC_PATTERN.match(text):
        return LineKind.METRIC
    if is_section_header(stripped):
        return LineKind.SECTION_HEADER
    return LineKind.TEXT


def classify_lines(text: str) -> list[Line]:
    """Split text into lines and classify each of them."""
    return [
        Line(number=number, text=raw, kind=classify_line(raw))
        for number, raw in enumerate(text.splitlines(), start=1)
    ]


def first_content_line(lines: list[Line]) -> Optional[str]:
    """Return the first non-blank line, trimmed."""
    for line in lines:
        if line.kind is not LineKind.BLANK:
            return line.stripped
    return None


def section_titles(lines: list[Line]) -> list[str]:
    """Return the trimmed titles of all section header lines, in order."""
    return [line.stripped for line in lines if line.kind is LineKind.SECTION_HEADER]


def extract_client_name(lines: list[Line]) -> Optional[str]:
    """Return the value following the first "Client:" label, if any.

    A label ending its line takes the next non-blank line as the value.
    """
    for index, line in enumerate(lines):
        match = CLIENT_LABEL_PATTERN.search(line.text)
        if match:
            value = line.text[match.end():].strip()
            if not value:
                value = first_content_line(lines[index + 1:]) or ""
            return value or None
    return None


def parse_metric(text: str) -> tuple[float, int]:
    """Parse a "{hours}h {price}" line into hours and a whole price.

    Raises:
        ValueError: If the line is not a metric line
    """
    match = METRIC_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Not an hours/price line: '{text.strip()}'")
    raw_hours = match.group(1)
    hours = float(raw_hours) if "." in raw_hours else int(raw_hours)
    return hours, parse_whole_amount(match.group(2))


def _next_content_index(lines: list[Line], start: int) -> Optional[int]:
    for index in range(start, len(lines)):
        if lines[index].kind is not LineKind.BLANK:
            return index
    return None


def extract_feature_blocks(lines: list[Line]) -> list[FeatureBlock]:
    """Extract glyph / detail / metric blocks in document order.

    The detail line may be omitted when the metric line directly follows the
    glyph line. Blocks that do not end in a metric line are skipped.
    """
    blocks = []
    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1
        if line.kind is not LineKind.FEATURE:
            continue

        description = line.stripped[1:].strip()
        if not description:
            continue

        detail_index = _next_content_index(lines, index)
        if detail_index is None:
            break

        if lines[detail_index].kind is LineKind.METRIC:
            detail = ""
            metric_index = detail_index
        elif lines[detail_index].kind is LineKind.FEATURE:
            continue
        else:
            detail = lines[detail_index].stripped
            metric_index = _next_content_index(lines, detail_index + 1)
            if metric_index is None or lines[metric_index].kind is not LineKind.METRIC:
                continue

        hours, price = parse_metric(lines[metric_index].text)
        blocks.append(
            FeatureBlock(
                description=description,
                detail=detail,
                hours=hours,
                price=price,
                line_number=line.number,
            )
        )
        index = metric_index + 1

    return blocks
