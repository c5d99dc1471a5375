"""
Data Adapter for the Admission Engine

Reads colleges, courses, cutoffs and placements from the database and
transforms rows into the engine's validated contracts.

This is a pure READ + TRANSFORM layer:
- NO scoring or prediction logic
- NO DB writes
Rows that fail validation are logged and skipped so the engine only ever sees
well-formed records.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from admission.models import College, Course, Cutoff, Placement
from .constants import Category, HISTORY_LIMIT
from .contracts import (
    CollegeSummary,
    CourseSummary,
    CutoffRecord,
    PlacementRecord,
    RecommendationCandidate,
)
from .trend import series_key

logger = logging.getLogger(__name__)


def _safe_get(data: Optional[Dict], *keys, default=None):
    """Safely traverse nested dicts."""
    if data is None:
        return default
    result = data
    for key in keys:
        if isinstance(result, dict):
            result = result.get(key)
        else:
            return default
        if result is None:
            return default
    return result


def _normalize_community_cutoffs(raw: Optional[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Upper-case category keys ("oc" -> "OC") and drop entries without an
    opening/closing pair. Unknown category keys are ignored.
    """
    known = {c.value for c in Category}
    normalized = {}
    for key, band in (raw or {}).items():
        tag = str(key).strip().upper()
        if tag not in known:
            logger.debug(f"Ignoring unknown category key {key!r}")
            continue
        opening = _safe_get(band, "opening")
        closing = _safe_get(band, "closing")
        if opening is None or closing is None:
            continue
        normalized[tag] = {
            "opening": opening,
            "closing": closing,
            "average": _safe_get(band, "average"),
        }
    return normalized


# =============================================================================
# ROW TRANSFORMS
# =============================================================================

def transform_college(college: College) -> CollegeSummary:
    return CollegeSummary(
        id=college.id,
        name=college.college_name,
        code=college.college_code,
        tnea_code=college.tnea_code,
        district=college.district or "",
        city=college.city,
        ownership_type=college.college_type,
        establishment_year=college.establishment_year,
        nba_accredited=bool(college.nba_accredited),
        naac_grade=college.naac_grade,
        nirf_overall_rank=college.nirf_overall_rank,
        nirf_engineering_rank=college.nirf_engineering_rank,
        is_active=college.is_active is not False,
    )


def transform_course(course: Course) -> CourseSummary:
    return CourseSummary(
        id=course.id,
        college_id=course.college_id,
        name=course.course_name,
        code=course.course_code,
        intake=course.intake,
        fees=course.fees,
        nba_accredited=bool(course.nba_accredited),
        is_active=course.is_active is not False,
    )


def transform_cutoff(cutoff: Cutoff) -> CutoffRecord:
    return CutoffRecord(
        id=cutoff.id,
        college_id=cutoff.college_id,
        course_id=cutoff.course_id,
        year=cutoff.year,
        round=cutoff.round,
        cutoffs=_normalize_community_cutoffs(cutoff.community_cutoffs),
        total_applications=cutoff.total_applications or 0,
        total_seats=cutoff.total_seats,
        filled_seats=cutoff.filled_seats or 0,
        vacancy_seats=cutoff.vacancy_seats,
        is_predicted=bool(cutoff.is_predicted),
        confidence=cutoff.confidence,
        source=cutoff.source or "official",
    )


def transform_placement(placement: Placement) -> PlacementRecord:
    return PlacementRecord(
        id=placement.id,
        college_id=placement.college_id,
        course_id=placement.course_id,
        year=placement.year,
        total_students=placement.total_students or 0,
        eligible_students=placement.eligible_students or 0,
        placed_students=placement.placed_students or 0,
        placement_percentage=placement.placement_percentage,
        higher_studies=placement.higher_studies or 0,
        highest_package=placement.highest_package,
        average_package=placement.average_package,
        median_package=placement.median_package,
        lowest_package=placement.lowest_package,
        total_companies=placement.total_companies or 0,
    )


def _transform_all(rows, transform, label: str) -> list:
    results = []
    for row in rows:
        try:
            results.append(transform(row))
        except ValidationError as e:
            logger.warning(f"Failed to transform {label} {row.id}: {e}")
    return results


# =============================================================================
# CUTOFF QUERIES
# =============================================================================

def fetch_cutoff_series(db: Session, college_id: int, course_id: int) -> List[CutoffRecord]:
    """All non-predicted cutoffs of one (college, course), oldest first."""
    rows = (
        db.query(Cutoff)
        .filter(
            Cutoff.college_id == college_id,
            Cutoff.course_id == course_id,
            Cutoff.is_predicted.is_(False),
        )
        .all()
    )
    return sorted(_transform_all(rows, transform_cutoff, "cutoff"), key=series_key)


def fetch_historical_cutoffs(
    db: Session,
    college_id: int,
    course_id: int,
    limit: int = HISTORY_LIMIT
) -> List[CutoffRecord]:
    """
    The ``limit`` most recent non-predicted cutoffs, returned oldest first.

    Round labels sort alphabetically in counselling order, so ordering by the
    column descending walks Supplementary -> Round 1 within a year.
    """
    rows = (
        db.query(Cutoff)
        .filter(
            Cutoff.college_id == college_id,
            Cutoff.course_id == course_id,
            Cutoff.is_predicted.is_(False),
        )
        .order_by(Cutoff.year.desc(), Cutoff.round.desc())
        .limit(limit)
        .all()
    )
    records = _transform_all(rows, transform_cutoff, "cutoff")
    logger.info(f"📊 Historical cutoffs for college={college_id} course={course_id}: {len(records)}")
    return sorted(records, key=series_key)


def fetch_latest_cutoff(db: Session, college_id: int, course_id: int) -> Optional[CutoffRecord]:
    """First round of the most recent non-predicted year, or None."""
    series = fetch_cutoff_series(db, college_id, course_id)
    if not series:
        return None
    latest_year = series[-1].year
    return next(r for r in series if r.year == latest_year)


def latest_cutoff_year(db: Session) -> Optional[int]:
    return (
        db.query(func.max(Cutoff.year))
        .filter(Cutoff.is_predicted.is_(False))
        .scalar()
    )


def fetch_cutoffs_for_year(db: Session, year: int) -> List[CutoffRecord]:
    rows = (
        db.query(Cutoff)
        .filter(Cutoff.year == year, Cutoff.is_predicted.is_(False))
        .all()
    )
    return _transform_all(rows, transform_cutoff, "cutoff")


def fetch_candidate_pool(db: Session, year: Optional[int] = None) -> Tuple[Optional[int], List[RecommendationCandidate]]:
    """
    Candidate (cutoff, college, course) triples for one admission year.

    Defaults to the latest year with actual data. Inactive colleges are left
    out. Eligibility filtering is the engine's job, not the adapter's.

    Returns:
        (year used, candidate pool)
    """
    if year is None:
        year = latest_cutoff_year(db)
        if year is None:
            logger.warning("⚠️ No historical cutoffs in store")
            return None, []

    records = fetch_cutoffs_for_year(db, year)
    logger.info(f"🔍 Cutoffs fetched for {year}: {len(records)}")

    colleges = fetch_colleges(db, {r.college_id for r in records})
    courses = fetch_courses(db, {r.course_id for r in records})

    pool = []
    for record in sorted(records, key=lambda r: (r.college_id, r.course_id, series_key(r))):
        college = colleges.get(record.college_id)
        if college is None or not college.is_active:
            continue
        pool.append(RecommendationCandidate(
            record=record,
            college=college,
            course=courses.get(record.course_id),
        ))

    logger.info(f"✅ Final candidate pool sent to scoring engine: {len(pool)}")
    return year, pool


# =============================================================================
# COLLEGE / COURSE / PLACEMENT QUERIES
# =============================================================================

def fetch_colleges(db: Session, college_ids: Sequence[int]) -> Dict[int, CollegeSummary]:
    if not college_ids:
        return {}
    rows = db.query(College).filter(College.id.in_(list(college_ids))).all()
    return {c.id: c for c in _transform_all(rows, transform_college, "college")}


def fetch_college(db: Session, college_id: int) -> Optional[CollegeSummary]:
    return fetch_colleges(db, [college_id]).get(college_id)


def fetch_active_colleges(db: Session) -> List[CollegeSummary]:
    rows = db.query(College).filter(College.is_active.is_(True)).order_by(College.id).all()
    return _transform_all(rows, transform_college, "college")


def fetch_courses(db: Session, course_ids: Sequence[int]) -> Dict[int, CourseSummary]:
    if not course_ids:
        return {}
    rows = db.query(Course).filter(Course.id.in_(list(course_ids))).all()
    return {c.id: c for c in _transform_all(rows, transform_course, "course")}


def fetch_courses_for_colleges(db: Session, college_ids: Sequence[int]) -> List[CourseSummary]:
    rows = (
        db.query(Course)
        .filter(Course.college_id.in_(list(college_ids)), Course.is_active.is_(True))
        .order_by(Course.id)
        .all()
    )
    return _transform_all(rows, transform_course, "course")


def fetch_cutoffs_by(db: Session, column, ids: Sequence[int]) -> List[CutoffRecord]:
    rows = (
        db.query(Cutoff)
        .filter(column.in_(list(ids)), Cutoff.is_predicted.is_(False))
        .all()
    )
    return _transform_all(rows, transform_cutoff, "cutoff")


def fetch_placements_by(db: Session, column, ids: Sequence[int]) -> List[PlacementRecord]:
    rows = db.query(Placement).filter(column.in_(list(ids))).all()
    return _transform_all(rows, transform_placement, "placement")


def fetch_placements(
    db: Session,
    year: Optional[int] = None,
    district: Optional[str] = None,
    college_type: Optional[str] = None
) -> List[PlacementRecord]:
    """Placements filtered by year and, through the college, district/type."""
    query = db.query(Placement)
    if year is not None:
        query = query.filter(Placement.year == year)
    if district or college_type:
        query = query.join(College, College.id == Placement.college_id)
        if district:
            query = query.filter(College.district == district)
        if college_type:
            query = query.filter(College.college_type == college_type)
    return _transform_all(query.all(), transform_placement, "placement")
