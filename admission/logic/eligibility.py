"""
Eligibility Evaluator and Probability Interpolator

Per-record, stateless checks of a candidate mark against one category's
cutoff band.

The probability is a linear model over the band:
0 at or below the opening mark, 100 at or above the closing mark, and a
straight line in between.
"""

import math
from typing import Optional, Union

from .constants import Category, MIN_MARK, MAX_MARK, CHANCE_LABELS
from .contracts import CategoryCutoff, CutoffRecord
from .errors import InvalidInput, NoCutoffForCategory
from .numeric import round_half_up


def validate_mark(mark) -> float:
    """
    Coerce ``mark`` to float and check it lies within [0, 200].

    Raises:
        InvalidInput: non-numeric, non-finite or out-of-range mark
    """
    try:
        value = float(mark)
    except (TypeError, ValueError):
        raise InvalidInput(f"mark must be a number, got {mark!r}")
    if not math.isfinite(value) or value < MIN_MARK or value > MAX_MARK:
        raise InvalidInput(f"mark must be between {MIN_MARK:g} and {MAX_MARK:g}, got {mark}")
    return value


def parse_category(category: Union[str, Category]) -> Category:
    """
    Resolve a category tag case-insensitively ("oc" -> Category.OC).

    Raises:
        InvalidInput: tag outside the seven-value set
    """
    if isinstance(category, Category):
        return category
    if isinstance(category, str):
        try:
            return Category(category.strip().upper())
        except ValueError:
            pass
    allowed = ", ".join(c.value for c in Category)
    raise InvalidInput(f"unknown category {category!r}; expected one of {allowed}")


def require_cutoff(record: CutoffRecord, category: Category) -> CategoryCutoff:
    """
    Cutoff band of ``category`` on ``record``.

    Raises:
        NoCutoffForCategory: the record carries no entry for the category
    """
    cutoff = record.cutoff_for(category)
    if cutoff is None:
        raise NoCutoffForCategory(
            f"no {category.value} cutoff for {record.year} {record.round.value}"
        )
    return cutoff


def is_eligible(mark, cutoff: Optional[CategoryCutoff]) -> bool:
    """True iff opening <= mark <= closing. Missing cutoff data is ineligible."""
    value = validate_mark(mark)
    if cutoff is None:
        return False
    return cutoff.opening <= value <= cutoff.closing


def is_eligible_for(record: CutoffRecord, mark, category) -> bool:
    return is_eligible(mark, record.cutoff_for(parse_category(category)))


def admission_probability(mark, cutoff: Optional[CategoryCutoff]) -> int:
    """
    Admission likelihood 0..100 for ``mark`` against one cutoff band.

    When opening == closing the band is a single mark and the result is a
    step: 100 at or above it, 0 below.
    """
    value = validate_mark(mark)
    if cutoff is None:
        return 0

    if value >= cutoff.closing:
        return 100
    if value <= cutoff.opening:
        return 0

    # opening < value < closing here, so the range is non-zero
    position = value - cutoff.opening
    band = cutoff.closing - cutoff.opening
    return round_half_up(100 * position / band)


def probability_for(record: CutoffRecord, mark, category) -> int:
    return admission_probability(mark, record.cutoff_for(parse_category(category)))


def chance_label(probability: int) -> str:
    for threshold, label in CHANCE_LABELS:
        if probability >= threshold:
            return label
    return CHANCE_LABELS[-1][1]
