"""Totals computation over invoice sections."""

import math
from typing import Iterable, Iterator

from quotecraft.domain.entities import Feature, Section, Totals


def iter_features(sections: Iterable[Section]) -> Iterator[Feature]:
    """Yield every feature of every category of every section, in order."""
    for section in sections:
        for category in section.categories:
            yield from category.features


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upwards."""
    return int(math.floor(value + 0.5))


def compute_totals(sections: Iterable[Section]) -> Totals:
    """Compute the four invoice totals.

    Hours and prices are summed over all features and over the selected
    features only; each sum is rounded to a whole number after summation.
    ``math.fsum`` keeps the sums independent of feature order. Callers
    guarantee numeric hours and prices.

    Args:
        sections: Ordered sections of an invoice

    Returns:
        Totals for the given sections
    """
    features = list(iter_features(sections))
    selected = [feature for feature in features if feature.selected]

    return Totals(
        total_hours=round_half_up(math.fsum(f.hours for f in features)),
        total_price=round_half_up(math.fsum(f.price for f in features)),
        selected_hours=round_half_up(math.fsum(f.hours for f in selected)),
        selected_price=round_half_up(math.fsum(f.price for f in selected)),
    )
