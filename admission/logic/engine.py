"""
Admission Engine

Pure facade over the evaluator, interpolator, predictor, scorer and
comparison aggregator. Takes already-loaded records, holds no state and does
no I/O, so one instance can serve any number of concurrent requests.
"""

from typing import Iterable, List, Mapping, Optional, Sequence

from .constants import OwnershipType, MAX_RECOMMENDATIONS
from .contracts import (
    CandidatePreference,
    CollegeSummary,
    CourseSummary,
    CutoffRecord,
    PlacementRecord,
    ProbabilityResult,
    RecommendationCandidate,
    RecommendationResult,
    TrendResult,
    YearlyTrendPoint,
    CollegeComparison,
    CourseComparison,
)
from .eligibility import (
    validate_mark,
    parse_category,
    require_cutoff,
    admission_probability,
    chance_label,
)
from .errors import InvalidInput, NoCutoffForCategory
from .scorer import score_candidates
from .ranker import rank_recommendations, select_top
from .trend import predict_next, yearly_trends
from .comparison import compare_colleges, compare_courses, suggest_comparisons


def normalize_ownership(value: Optional[str]) -> Optional[str]:
    """Case-insensitive ownership type ("private" -> "Private"); None passes through."""
    if not value:
        return None
    for member in OwnershipType:
        if member.value.lower() == value.strip().lower():
            return member.value
    allowed = ", ".join(m.value for m in OwnershipType)
    raise InvalidInput(f"unknown ownership type {value!r}; expected one of {allowed}")


class AdmissionEngine:
    """
    Main admission analytics engine.

    Pipeline for recommendations:
    1. Validate mark, category and preferences
    2. Filter the pool to candidates eligible for the category
    3. Score margin and preference matches
    4. Rank by match score with probability as tie-breaker
    5. Cap at the top N
    """

    def __init__(self, max_recommendations: int = MAX_RECOMMENDATIONS):
        self.max_recommendations = max_recommendations
        self.version = "1.0.0"

    def probability(
        self,
        mark,
        category,
        record: Optional[CutoffRecord]
    ) -> ProbabilityResult:
        """
        Admission probability against one record (usually the latest).

        A missing record or category band yields probability 0 with a message.
        """
        value = validate_mark(mark)
        category = parse_category(category)

        if record is None:
            return ProbabilityResult(
                mark=value,
                category=category,
                probability=0,
                chance=chance_label(0),
                message="No cutoff data available",
            )

        try:
            cutoff = require_cutoff(record, category)
        except NoCutoffForCategory as e:
            return ProbabilityResult(
                mark=value,
                category=category,
                probability=0,
                chance=chance_label(0),
                year=record.year,
                round=record.round.value,
                message=e.message,
            )

        probability = admission_probability(value, cutoff)
        return ProbabilityResult(
            mark=value,
            category=category,
            probability=probability,
            chance=chance_label(probability),
            cutoff=cutoff,
            year=record.year,
            round=record.round.value,
        )

    def predict(self, series: Iterable[CutoffRecord], category) -> TrendResult:
        return predict_next(series, category)

    def trends(self, series: Iterable[CutoffRecord], category) -> List[YearlyTrendPoint]:
        return yearly_trends(series, category)

    def recommend(
        self,
        preference: CandidatePreference,
        pool: List[RecommendationCandidate]
    ) -> RecommendationResult:
        """
        Rank the candidate pool for one candidate.

        Args:
            preference: Mark, category and optional preferences
            pool: Candidate (record, college, course) triples

        Returns:
            RecommendationResult with at most ``max_recommendations`` entries

        Raises:
            InvalidInput: bad mark, category or ownership type
        """
        mark = validate_mark(preference.mark)
        category = parse_category(preference.category)
        preference = preference.model_copy(update={
            "mark": mark,
            "category": category.value,
            "ownership_type": normalize_ownership(preference.ownership_type),
        })

        if not pool:
            return RecommendationResult()

        scored = score_candidates(mark, category, preference, pool)
        ranked = rank_recommendations(scored)

        return RecommendationResult(
            recommendations=select_top(ranked, self.max_recommendations),
            count=len(scored),
        )

    def recommend_from_dict(
        self,
        preference_data: dict,
        pool: List[RecommendationCandidate]
    ) -> RecommendationResult:
        """Convenience wrapper accepting a plain preference dict."""
        return self.recommend(CandidatePreference(**preference_data), pool)

    def compare_colleges(
        self,
        college_ids: Sequence[int],
        colleges: Mapping[int, CollegeSummary],
        courses: Iterable[CourseSummary] = (),
        cutoffs: Iterable[CutoffRecord] = (),
        placements: Iterable[PlacementRecord] = (),
    ) -> List[CollegeComparison]:
        return compare_colleges(college_ids, colleges, courses, cutoffs, placements)

    def compare_courses(
        self,
        course_ids: Sequence[int],
        courses: Mapping[int, CourseSummary],
        colleges: Optional[Mapping[int, CollegeSummary]] = None,
        cutoffs: Iterable[CutoffRecord] = (),
        placements: Iterable[PlacementRecord] = (),
    ) -> List[CourseComparison]:
        return compare_courses(course_ids, courses, colleges, cutoffs, placements)

    def suggest(
        self,
        reference: CollegeSummary,
        colleges: Iterable[CollegeSummary]
    ) -> List[CollegeSummary]:
        return suggest_comparisons(reference, colleges)


# Convenience function for simple usage
def get_recommendations(
    preference: CandidatePreference,
    pool: List[RecommendationCandidate]
) -> RecommendationResult:
    return AdmissionEngine().recommend(preference, pool)
