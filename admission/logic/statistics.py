"""
Statistics primitives shared by comparison and the placement endpoints.
"""

from typing import Dict, Iterable, List, Optional

from .constants import Category
from .contracts import (
    CutoffRecord,
    PlacementRecord,
    SeatMetrics,
    PlacementStatistics,
    CategoryMetric,
)
from .numeric import mean, round_half_up


def seat_metrics(record: CutoffRecord) -> SeatMetrics:
    """Filling/vacancy percentages and applications per filled seat."""
    filling = round_half_up(record.filled_seats / record.total_seats * 100)
    vacancy = round_half_up(record.vacancy_seats / record.total_seats * 100)
    if record.filled_seats == 0:
        ratio = 0
    else:
        ratio = round_half_up(record.total_applications / record.filled_seats)
    return SeatMetrics(
        filling_percentage=filling,
        vacancy_percentage=vacancy,
        competition_ratio=ratio,
    )


def category_metrics(records: Iterable[CutoffRecord]) -> List[CategoryMetric]:
    """
    Widest band per category across ``records``: lowest opening, highest
    closing and the rounded mean of averages. Categories with no data are left
    out; output follows the fixed category order.
    """
    bands: Dict[Category, list] = {}
    for record in records:
        for category, cutoff in record.cutoffs.items():
            bands.setdefault(category, []).append(cutoff)

    metrics = []
    for category in Category:
        cutoffs = bands.get(category)
        if not cutoffs:
            continue
        metrics.append(CategoryMetric(
            category=category,
            opening=min(c.opening for c in cutoffs),
            closing=max(c.closing for c in cutoffs),
            average=round_half_up(mean([c.average for c in cutoffs])),
        ))
    return metrics


def _avg(values: List[Optional[float]]) -> float:
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return round(mean(present), 2)


def summarize_placements(records: Iterable[PlacementRecord]) -> PlacementStatistics:
    """Totals and means over placement records; all zeros for no records."""
    records = list(records)
    if not records:
        return PlacementStatistics()

    return PlacementStatistics(
        total_students=sum(r.total_students for r in records),
        total_placed=sum(r.placed_students for r in records),
        average_placement_percentage=_avg([r.placement_percentage for r in records]),
        average_highest_package=_avg([r.highest_package for r in records]),
        average_package=_avg([r.average_package for r in records]),
        median_package=_avg([r.median_package for r in records]),
        total_companies=sum(r.total_companies for r in records),
        total_colleges=len({r.college_id for r in records}),
        total_courses=len({r.course_id for r in records if r.course_id is not None}),
    )
