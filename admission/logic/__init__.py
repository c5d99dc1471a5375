"""
Admission Logic Module

Provides the deterministic admission analytics engine: eligibility,
probability, cutoff trend prediction, recommendations and comparison.
"""

from .contracts import (
    CategoryCutoff,
    CutoffRecord,
    CollegeSummary,
    CourseSummary,
    PlacementRecord,
    CandidatePreference,
    RecommendationCandidate,
    Recommendation,
    RecommendationResult,
    TrendEstimate,
    InsufficientData,
    ProbabilityResult,
    CollegeComparison,
    CourseComparison,
)
from .engine import AdmissionEngine, get_recommendations
from .constants import Category, Round, OwnershipType, TrendDirection
from .errors import AdmissionError, ClientInputError, DataStateError, InvalidInput

__all__ = [
    # Main engine
    "AdmissionEngine",
    "get_recommendations",

    # Contracts
    "CategoryCutoff",
    "CutoffRecord",
    "CollegeSummary",
    "CourseSummary",
    "PlacementRecord",
    "CandidatePreference",
    "RecommendationCandidate",
    "Recommendation",
    "RecommendationResult",
    "TrendEstimate",
    "InsufficientData",
    "ProbabilityResult",
    "CollegeComparison",
    "CourseComparison",

    # Enums
    "Category",
    "Round",
    "OwnershipType",
    "TrendDirection",

    # Errors
    "AdmissionError",
    "ClientInputError",
    "DataStateError",
    "InvalidInput",
]
