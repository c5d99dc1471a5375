"""
Ranker

Orders scored recommendations and applies the result cap.
"""

from typing import List

from .contracts import Recommendation
from .constants import MAX_RECOMMENDATIONS


def ranking_key(rec: Recommendation) -> float:
    """Match score first; probability adds at most +1 as a tie-breaker."""
    return rec.match_score + rec.admission_probability / 100


def rank_recommendations(scored: List[Recommendation]) -> List[Recommendation]:
    """
    Sort by ranking key, descending.

    Python's sort is stable under ``reverse=True``, so equal keys keep their
    pool order.
    """
    return sorted(scored, key=ranking_key, reverse=True)


def select_top(
    ranked: List[Recommendation],
    max_total: int = MAX_RECOMMENDATIONS
) -> List[Recommendation]:
    return ranked[:max_total]
