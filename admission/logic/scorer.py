"""
Recommendation Scorer

Scores eligible (college, course, cutoff) candidates for one candidate mark.
Match score is additive points, not a normalized weight sum:

- margin of the mark over the closing cutoff: 50/40/30/20/10/5
- district preference match: +20
- ownership type preference match: +15
- NBA accreditation required and present: +10

clamped to [0, 100]. Admission probability is attached separately and only
acts as a tie-breaker during ranking.
"""

from typing import List, Optional

from .constants import (
    Category,
    MARGIN_POINTS,
    MARGIN_FLOOR_POINTS,
    PREFERENCE_BONUSES,
    MIN_MATCH_SCORE,
    MAX_MATCH_SCORE,
)
from .contracts import (
    CandidatePreference,
    CollegeSummary,
    CategoryCutoff,
    RecommendationCandidate,
    Recommendation,
)
from .eligibility import is_eligible, admission_probability, chance_label


def score_margin(mark: float, cutoff: Optional[CategoryCutoff]) -> int:
    """
    Points for how far ``mark`` sits above the closing cutoff.

    The margin is negative whenever the mark is inside the band, so candidates
    that passed the eligibility filter land on the 30/20/10/5 rungs.
    """
    if cutoff is None:
        return 0
    margin = mark - cutoff.closing
    for minimum, points in MARGIN_POINTS:
        if margin >= minimum:
            return points
    return MARGIN_FLOOR_POINTS


def score_preferences(college: CollegeSummary, preference: CandidatePreference) -> int:
    bonus = 0
    if preference.district and college.district == preference.district:
        bonus += PREFERENCE_BONUSES["district"]
    if preference.ownership_type and college.ownership_type == preference.ownership_type:
        bonus += PREFERENCE_BONUSES["ownership_type"]
    if preference.nba_required and college.nba_accredited:
        bonus += PREFERENCE_BONUSES["nba_accredited"]
    return bonus


def match_score(
    mark: float,
    category: Category,
    candidate: RecommendationCandidate,
    preference: CandidatePreference
) -> int:
    cutoff = candidate.record.cutoff_for(category)
    score = score_margin(mark, cutoff) + score_preferences(candidate.college, preference)
    return max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, score))


def eligible_candidates(
    mark: float,
    category: Category,
    pool: List[RecommendationCandidate]
) -> List[RecommendationCandidate]:
    """Candidates whose band for ``category`` contains ``mark``, in pool order."""
    return [
        c for c in pool
        if is_eligible(mark, c.record.cutoff_for(category))
    ]


def score_candidates(
    mark: float,
    category: Category,
    preference: CandidatePreference,
    pool: List[RecommendationCandidate]
) -> List[Recommendation]:
    """
    Score every eligible candidate in ``pool``.

    Ineligible candidates are removed here, never just down-ranked.
    """
    scored = []
    for candidate in eligible_candidates(mark, category, pool):
        probability = admission_probability(mark, candidate.record.cutoff_for(category))
        scored.append(Recommendation(
            college=candidate.college,
            course=candidate.course,
            cutoff=candidate.record,
            match_score=match_score(mark, category, candidate, preference),
            admission_probability=probability,
            chance=chance_label(probability),
        ))
    return scored
