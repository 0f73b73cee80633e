"""Runtime settings resolved from arguments and environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from quotecraft.domain.errors import ValidationError

DEFAULT_CURRENCY = "USD"
DEFAULT_VALIDITY_DAYS = 30
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Defaults applied when generating and editing projects."""

    currency: str = DEFAULT_CURRENCY
    validity_days: int = DEFAULT_VALIDITY_DAYS
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(
    currency: Optional[str] = None,
    validity_days: Optional[int] = None,
    log_level: Optional[str] = None,
) -> Settings:
    """Resolve settings.

    Explicit arguments win; otherwise QUOTECRAFT_CURRENCY,
    QUOTECRAFT_VALIDITY_DAYS and QUOTECRAFT_LOG_LEVEL are checked, then the
    built-in defaults apply.

    Raises:
        ValidationError: If a value is malformed
    """
    if currency is None:
        currency = os.environ.get("QUOTECRAFT_CURRENCY", DEFAULT_CURRENCY)
    currency = currency.strip().upper()
    if not currency:
        raise ValidationError("Currency must not be empty")

    if validity_days is None:
        raw_days = os.environ.get("QUOTECRAFT_VALIDITY_DAYS")
        if raw_days is None:
            validity_days = DEFAULT_VALIDITY_DAYS
        else:
            try:
                validity_days = int(raw_days)
            except ValueError:
                raise ValidationError(
                    f"QUOTECRAFT_VALIDITY_DAYS must be an integer, got '{raw_days}'"
                )
    if validity_days < 0:
        raise ValidationError("Validity days must not be negative")

    if log_level is None:
        log_level = os.environ.get("QUOTECRAFT_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = log_level.strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValidationError(
            f"Invalid log level '{log_level}'. Must be one of: {', '.join(LOG_LEVELS)}"
        )

    return Settings(currency=currency, validity_days=validity_days, log_level=log_level)


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
