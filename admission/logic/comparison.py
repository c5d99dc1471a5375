"""
Comparison Aggregator

Builds side-by-side bundles for 2-3 colleges (or courses) from data the
caller has already loaded. A college missing one kind of data gets an empty
section, never a failed request. Output order follows the requested ids.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from .constants import MIN_COMPARE, MAX_COMPARE, MAX_SUGGESTIONS, NIRF_RANK_WINDOW
from .contracts import (
    CollegeSummary,
    CourseSummary,
    CutoffRecord,
    PlacementRecord,
    CollegeComparison,
    CourseComparison,
)
from .errors import (
    TooFewCandidates,
    TooManyCandidates,
    DuplicateCandidates,
    CollegeNotFound,
    CourseNotFound,
)
from .statistics import category_metrics, summarize_placements
from .trend import series_key

T = TypeVar("T")


def validate_ids(ids: Sequence, noun: str = "college") -> List:
    """
    Check a comparison request names 2 or 3 distinct ids.

    Raises:
        TooFewCandidates, TooManyCandidates, DuplicateCandidates
    """
    ids = list(ids or [])
    if len(ids) < MIN_COMPARE:
        raise TooFewCandidates(f"At least {MIN_COMPARE} {noun} IDs are required for comparison")
    if len(ids) > MAX_COMPARE:
        raise TooManyCandidates(f"Maximum {MAX_COMPARE} {noun}s can be compared at a time")
    if len(set(ids)) != len(ids):
        raise DuplicateCandidates(f"Duplicate {noun} IDs in comparison request")
    return ids


def _group(items: Iterable[T], attr: str) -> Dict[object, List[T]]:
    grouped: Dict[object, List[T]] = {}
    for item in items:
        grouped.setdefault(getattr(item, attr), []).append(item)
    return grouped


def latest_cutoffs(records: List[CutoffRecord]):
    """(year, records of that year) for the most recent non-predicted year."""
    actual = [r for r in records if not r.is_predicted]
    if not actual:
        return None, []
    year = max(r.year for r in actual)
    return year, sorted((r for r in actual if r.year == year), key=series_key)


def latest_placements(records: List[PlacementRecord]):
    if not records:
        return None, []
    year = max(r.year for r in records)
    return year, [r for r in records if r.year == year]


def compare_colleges(
    college_ids: Sequence[int],
    colleges: Mapping[int, CollegeSummary],
    courses: Iterable[CourseSummary] = (),
    cutoffs: Iterable[CutoffRecord] = (),
    placements: Iterable[PlacementRecord] = (),
) -> List[CollegeComparison]:
    """
    Assemble one comparison bundle per requested college.

    Args:
        college_ids: 2 or 3 distinct college ids, in display order
        colleges: Profiles keyed by id
        courses, cutoffs, placements: Rows for any of the requested colleges

    Raises:
        InvalidInput subclasses for a bad id list, CollegeNotFound for an
        id without a profile
    """
    college_ids = validate_ids(college_ids, "college")

    courses_by_college = _group(courses, "college_id")
    cutoffs_by_college = _group(cutoffs, "college_id")
    placements_by_college = _group(placements, "college_id")

    bundles = []
    for college_id in college_ids:
        college = colleges.get(college_id)
        if college is None:
            raise CollegeNotFound(f"College {college_id} not found")

        cutoff_year, cutoff_rows = latest_cutoffs(cutoffs_by_college.get(college_id, []))
        placement_year, placement_rows = latest_placements(placements_by_college.get(college_id, []))

        bundles.append(CollegeComparison(
            college=college,
            courses=courses_by_college.get(college_id, []),
            latest_cutoff_year=cutoff_year,
            latest_cutoffs=cutoff_rows,
            latest_placement_year=placement_year,
            latest_placements=placement_rows,
            category_metrics=category_metrics(cutoff_rows),
            placement_statistics=summarize_placements(placement_rows),
        ))
    return bundles


def compare_courses(
    course_ids: Sequence[int],
    courses: Mapping[int, CourseSummary],
    colleges: Optional[Mapping[int, CollegeSummary]] = None,
    cutoffs: Iterable[CutoffRecord] = (),
    placements: Iterable[PlacementRecord] = (),
) -> List[CourseComparison]:
    course_ids = validate_ids(course_ids, "course")
    colleges = colleges or {}

    cutoffs_by_course = _group(cutoffs, "course_id")
    placements_by_course = _group(placements, "course_id")

    bundles = []
    for course_id in course_ids:
        course = courses.get(course_id)
        if course is None:
            raise CourseNotFound(f"Course {course_id} not found")

        cutoff_year, cutoff_rows = latest_cutoffs(cutoffs_by_course.get(course_id, []))
        placement_year, placement_rows = latest_placements(placements_by_course.get(course_id, []))

        bundles.append(CourseComparison(
            course=course,
            college=colleges.get(course.college_id),
            latest_cutoff_year=cutoff_year,
            latest_cutoffs=cutoff_rows,
            latest_placement_year=placement_year,
            latest_placements=placement_rows,
            category_metrics=category_metrics(cutoff_rows),
        ))
    return bundles


def is_similar(reference: CollegeSummary, other: CollegeSummary) -> bool:
    """Same district, same ownership type, or NIRF rank within the window."""
    if other.district and other.district == reference.district:
        return True
    if other.ownership_type == reference.ownership_type:
        return True
    ref_rank = reference.nirf_engineering_rank
    if ref_rank and other.nirf_engineering_rank:
        low = max(1, ref_rank - NIRF_RANK_WINDOW)
        return low <= other.nirf_engineering_rank <= ref_rank + NIRF_RANK_WINDOW
    return False


def suggest_comparisons(
    reference: CollegeSummary,
    colleges: Iterable[CollegeSummary],
    limit: int = MAX_SUGGESTIONS
) -> List[CollegeSummary]:
    """Other active colleges worth comparing with ``reference``."""
    suggestions = []
    for college in colleges:
        if college.id == reference.id or not college.is_active:
            continue
        if is_similar(reference, college):
            suggestions.append(college)
        if len(suggestions) >= limit:
            break
    return suggestions
