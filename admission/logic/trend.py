"""
Trend Predictor

Extrapolates next cycle's closing mark for one (college, course, category)
from its history. This is a naive heuristic, not a fitted model:

    trend      = mean(last 2 closings) - mean(older closings)
    predicted  = round(last closing + trend)
    confidence = clamp(100 - 2 * variance, 60, 95)

With fewer than 4 points the "older" mean is just the earliest closing mark,
which biases short series.
"""

import logging
from collections import OrderedDict
from typing import Iterable, List, Tuple

from .constants import (
    Category,
    TrendDirection,
    ROUND_ORDER,
    MIN_HISTORY_POINTS,
    RECENT_WINDOW,
    FULL_SPLIT_MIN_POINTS,
    CONFIDENCE_FLOOR,
    CONFIDENCE_CEILING,
    VARIANCE_PENALTY,
)
from .contracts import (
    CutoffRecord,
    HistoricalPoint,
    TrendEstimate,
    InsufficientData,
    TrendResult,
    YearlyTrendPoint,
)
from .eligibility import parse_category
from .numeric import mean, population_variance, clamp, round_half_up

logger = logging.getLogger(__name__)


def series_key(record: CutoffRecord) -> Tuple[int, int]:
    """Chronological sort key: (year, counselling round order)."""
    return record.year, ROUND_ORDER.get(record.round.value, len(ROUND_ORDER) + 1)


def historical_points(
    series: Iterable[CutoffRecord],
    category: Category
) -> List[HistoricalPoint]:
    """
    Closing marks of ``category`` in chronological order.

    Predicted records and records without a band for the category are
    skipped.
    """
    points: List[HistoricalPoint] = []
    for record in sorted(series, key=series_key):
        if record.is_predicted:
            logger.debug(f"Dropping predicted record {record.year} {record.round.value} from series")
            continue
        cutoff = record.cutoff_for(category)
        if cutoff is None:
            continue
        points.append(HistoricalPoint(
            year=record.year,
            round=record.round.value,
            closing=cutoff.closing,
        ))
    return points


def compute_trend(closings: List[float]) -> float:
    """Mean of the recent tail minus mean of the older head."""
    recent = closings[-RECENT_WINDOW:]
    if len(closings) < FULL_SPLIT_MIN_POINTS:
        older_mean = closings[0]
    else:
        older_mean = mean(closings[:-RECENT_WINDOW])
    return mean(recent) - older_mean


def compute_confidence(closings: List[float]) -> int:
    variance = population_variance(closings)
    raw = 100 - VARIANCE_PENALTY * variance
    return round_half_up(clamp(raw, CONFIDENCE_FLOOR, CONFIDENCE_CEILING))


def direction_of(trend: float) -> TrendDirection:
    if trend > 0:
        return TrendDirection.INCREASING
    if trend < 0:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def predict_next(series: Iterable[CutoffRecord], category) -> TrendResult:
    """
    Predict the next closing mark for ``category``.

    Args:
        series: Cutoff records of one (college, course)
        category: Category tag

    Returns:
        TrendEstimate, or InsufficientData when fewer than 2 usable points exist
    """
    category = parse_category(category)
    points = historical_points(series, category)

    if len(points) < MIN_HISTORY_POINTS:
        return InsufficientData(category=category, points=len(points))

    closings = [p.closing for p in points]
    trend = compute_trend(closings)

    return TrendEstimate(
        year=points[-1].year + 1,
        category=category,
        predicted_closing=round_half_up(closings[-1] + trend),
        direction=direction_of(trend),
        confidence=compute_confidence(closings),
        trend=round(trend, 2),
        historical=points,
    )


def yearly_trends(series: Iterable[CutoffRecord], category) -> List[YearlyTrendPoint]:
    """
    Per-year mean opening/closing/average of ``category`` across rounds,
    oldest year first. Predicted records are excluded.
    """
    category = parse_category(category)
    by_year: "OrderedDict[int, list]" = OrderedDict()

    for record in sorted(series, key=series_key):
        if record.is_predicted:
            continue
        cutoff = record.cutoff_for(category)
        if cutoff is None:
            continue
        by_year.setdefault(record.year, []).append((record.round.value, cutoff))

    trends = []
    for year, entries in by_year.items():
        cutoffs = [c for _, c in entries]
        trends.append(YearlyTrendPoint(
            year=year,
            opening=round(mean([c.opening for c in cutoffs]), 2),
            closing=round(mean([c.closing for c in cutoffs]), 2),
            average=round(mean([c.average for c in cutoffs]), 2),
            rounds=[r for r, _ in entries],
        ))
    return trends
