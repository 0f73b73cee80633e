"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested section, category or feature does not exist."""


def section_not_found(section_index: int) -> str:
    """Return message for a missing section position."""
    return f"Section {section_index + 1} not found"


def category_not_found(section_index: int, category_index: int) -> str:
    """Return message for a missing category position."""
    return f"Section {section_index + 1}, Category {category_index + 1} not found"


def feature_not_found(section_index: int, category_index: int, feature_index: int) -> str:
    """Return message for a missing feature position."""
    return (
        f"Section {section_index + 1}, Category {category_index + 1}, "
        f"Feature {feature_index + 1} not found"
    )


def required_feature_deselect(description: str) -> str:
    """Return message when a required feature would be deselected."""
    return f"Feature '{description}' is required and cannot be deselected"


def unknown_choice(kind: str, value: str, choices: tuple[str, ...]) -> str:
    """Return message for a value outside a fixed set of choices."""
    return f"Unknown {kind} '{value}'. Must be one of: {', '.join(choices)}"


def unsupported_extension(extension: str) -> str:
    """Return message for an upload with an unsupported file extension."""
    shown = extension or "(none)"
    return f"Unsupported file type '{shown}'. Supported types: .json, .pdf, .txt, .docx"
