"""
Engine Runner

Orchestrates each admission operation:
1. Validates request parameters
2. Fetches records via the adapter
3. Runs the pure engine
4. Returns engine contracts

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from admission.models import Cutoff, Placement
from . import adapter
from .contracts import (
    CandidatePreference,
    CollegeComparison,
    CourseComparison,
    CollegeSummary,
    CutoffRecord,
    PlacementStatistics,
    ProbabilityResult,
    RecommendationResult,
    TrendResult,
    YearlyTrendPoint,
)
from .comparison import validate_ids
from .eligibility import validate_mark, parse_category, is_eligible
from .engine import AdmissionEngine, normalize_ownership
from .errors import CollegeNotFound
from .statistics import summarize_placements

logger = logging.getLogger(__name__)

engine = AdmissionEngine()


def run_probability(
    db: Session,
    mark,
    college_id: int,
    course_id: int,
    category="OC"
) -> ProbabilityResult:
    """Probability against the latest historical cutoff of one (college, course)."""
    mark = validate_mark(mark)
    category = parse_category(category)

    latest = adapter.fetch_latest_cutoff(db, college_id, course_id)
    return engine.probability(mark, category, latest)


def run_cutoff_prediction(
    db: Session,
    college_id: int,
    course_id: int,
    category="OC"
) -> TrendResult:
    category = parse_category(category)
    series = adapter.fetch_historical_cutoffs(db, college_id, course_id)
    result = engine.predict(series, category)
    logger.info(f"🔮 Prediction for college={college_id} course={course_id} {category.value}: {type(result).__name__}")
    return result


def run_cutoff_trends(
    db: Session,
    college_id: int,
    course_id: int,
    category="OC"
) -> List[YearlyTrendPoint]:
    category = parse_category(category)
    series = adapter.fetch_cutoff_series(db, college_id, course_id)
    return engine.trends(series, category)


def run_within_range(
    db: Session,
    mark,
    category="OC",
    year: Optional[int] = None
) -> Tuple[Optional[int], List[CutoffRecord]]:
    """
    Cutoff records whose band for ``category`` contains ``mark``, highest
    closing mark first.
    """
    mark = validate_mark(mark)
    category = parse_category(category)

    if year is None:
        year = adapter.latest_cutoff_year(db)
        if year is None:
            return None, []

    records = [
        r for r in adapter.fetch_cutoffs_for_year(db, year)
        if is_eligible(mark, r.cutoff_for(category))
    ]
    records.sort(key=lambda r: r.cutoff_for(category).closing, reverse=True)
    return year, records


def run_recommendations(
    db: Session,
    preference: CandidatePreference
) -> Tuple[Optional[int], RecommendationResult]:
    """
    Main entry point: run the full recommendation pipeline.

    Args:
        db: Database session
        preference: Candidate mark, category and preferences

    Returns:
        (admission year used, RecommendationResult)
    """
    # Fail fast on bad input before touching the store
    validate_mark(preference.mark)
    parse_category(preference.category)
    normalize_ownership(preference.ownership_type)

    logger.info(f"🚀 Starting recommendation pipeline: mark={preference.mark} category={preference.category}")
    start_time = time.perf_counter()

    year, pool = adapter.fetch_candidate_pool(db, preference.year)
    if not pool:
        logger.warning("⚠️ No cutoff records found for recommendation")
        return year, RecommendationResult()

    result = engine.recommend(preference, pool)

    processing_time = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"✨ Recommendation pipeline complete: {result.count} eligible, "
        f"{len(result.recommendations)} returned ({processing_time:.2f}ms)"
    )
    return year, result


def run_college_comparison(db: Session, college_ids: Sequence[int]) -> List[CollegeComparison]:
    college_ids = validate_ids(college_ids, "college")

    colleges = {
        cid: college
        for cid, college in adapter.fetch_colleges(db, college_ids).items()
        if college.is_active
    }
    courses = adapter.fetch_courses_for_colleges(db, college_ids)
    cutoffs = adapter.fetch_cutoffs_by(db, Cutoff.college_id, college_ids)
    placements = adapter.fetch_placements_by(db, Placement.college_id, college_ids)

    return engine.compare_colleges(college_ids, colleges, courses, cutoffs, placements)


def run_course_comparison(db: Session, course_ids: Sequence[int]) -> List[CourseComparison]:
    course_ids = validate_ids(course_ids, "course")

    courses = {
        cid: course
        for cid, course in adapter.fetch_courses(db, course_ids).items()
        if course.is_active
    }
    colleges = adapter.fetch_colleges(db, {c.college_id for c in courses.values()})
    cutoffs = adapter.fetch_cutoffs_by(db, Cutoff.course_id, course_ids)
    placements = adapter.fetch_placements_by(db, Placement.course_id, course_ids)

    return engine.compare_courses(course_ids, courses, colleges, cutoffs, placements)


def run_comparison_suggestions(db: Session, college_id: int) -> List[CollegeSummary]:
    reference = adapter.fetch_college(db, college_id)
    if reference is None:
        raise CollegeNotFound(f"College {college_id} not found")
    return engine.suggest(reference, adapter.fetch_active_colleges(db))


def run_placement_statistics(
    db: Session,
    year: Optional[int] = None,
    district: Optional[str] = None,
    college_type: Optional[str] = None
) -> PlacementStatistics:
    college_type = normalize_ownership(college_type)
    return summarize_placements(adapter.fetch_placements(db, year, district, college_type))
