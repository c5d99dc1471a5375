"""
Data Contracts for the Admission Analytics Engine

Defines Pydantic models for cutoff records, college/course projections,
candidate preferences (input) and the derived outputs. These contracts are the
boundary between the store adapter and the pure engine: documents are
validated here once, so the engine never handles partially-shaped data.
"""

from typing import List, Optional, Dict, Union
from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    Category,
    Round,
    OwnershipType,
    CutoffSource,
    TrendDirection,
    MIN_MARK,
    MAX_MARK,
    MIN_CUTOFF_YEAR,
)
from .numeric import round_half_up


# =============================================================================
# STORE RECORDS
# =============================================================================

class CategoryCutoff(BaseModel):
    """Opening/closing/average marks of one category for one round."""
    opening: float = Field(ge=MIN_MARK, le=MAX_MARK)
    closing: float = Field(ge=MIN_MARK, le=MAX_MARK)
    average: Optional[float] = Field(default=None, ge=MIN_MARK, le=MAX_MARK)

    @model_validator(mode="after")
    def _check_band(self):
        if self.opening > self.closing:
            raise ValueError(
                f"opening cutoff {self.opening} cannot be greater than closing cutoff {self.closing}"
            )
        if self.average is None:
            self.average = round_half_up((self.opening + self.closing) / 2)
        return self


class CutoffRecord(BaseModel):
    """
    One admission cycle's result for one (college, course) pair.

    Seat accounting is checked on construction; ``vacancy_seats`` is derived
    from total and filled seats when not supplied.
    """
    id: Optional[int] = None
    college_id: int
    course_id: int
    year: int = Field(ge=MIN_CUTOFF_YEAR)
    round: Round

    cutoffs: Dict[Category, CategoryCutoff] = Field(default_factory=dict)

    total_applications: int = Field(default=0, ge=0)
    total_seats: int = Field(ge=1)
    filled_seats: int = Field(default=0, ge=0)
    vacancy_seats: Optional[int] = Field(default=None, ge=0)

    is_predicted: bool = False
    confidence: Optional[float] = Field(default=None, ge=0, le=100)
    source: CutoffSource = CutoffSource.OFFICIAL

    @field_validator("round", mode="before")
    @classmethod
    def _normalize_round(cls, value):
        if isinstance(value, str):
            compact = value.replace(" ", "").lower()
            for member in Round:
                if member.value.replace(" ", "").lower() == compact:
                    return member
        return value

    @field_validator("cutoffs", mode="before")
    @classmethod
    def _normalize_category_keys(cls, value):
        if isinstance(value, dict):
            return {
                (k.upper() if isinstance(k, str) else k): v
                for k, v in value.items()
                if v is not None
            }
        return value

    @model_validator(mode="after")
    def _check_seats(self):
        if self.filled_seats > self.total_seats:
            raise ValueError("filled seats cannot exceed total seats")
        if self.vacancy_seats is None:
            self.vacancy_seats = self.total_seats - self.filled_seats
        if self.vacancy_seats > self.total_seats:
            raise ValueError("vacancy seats cannot exceed total seats")
        return self

    def cutoff_for(self, category: Category) -> Optional[CategoryCutoff]:
        """Cutoff band for ``category``, or None when the record has no entry."""
        return self.cutoffs.get(category)


class CollegeSummary(BaseModel):
    """Read-only college projection used for scoring and comparison."""
    id: int
    name: str
    code: Optional[str] = None
    tnea_code: Optional[str] = None
    district: str = ""
    city: Optional[str] = None
    ownership_type: OwnershipType
    establishment_year: Optional[int] = None

    nba_accredited: bool = False
    naac_grade: Optional[str] = None
    nirf_overall_rank: Optional[int] = None
    nirf_engineering_rank: Optional[int] = None

    is_active: bool = True

    class Config:
        use_enum_values = True
        from_attributes = True


class CourseSummary(BaseModel):
    id: int
    college_id: int
    name: str
    code: Optional[str] = None
    intake: Optional[int] = None
    fees: Optional[float] = None
    nba_accredited: bool = False
    is_active: bool = True

    class Config:
        from_attributes = True


class PlacementRecord(BaseModel):
    """Placement outcome of one course at one college for one year."""
    id: Optional[int] = None
    college_id: int
    course_id: Optional[int] = None
    year: int

    total_students: int = Field(default=0, ge=0)
    eligible_students: int = Field(default=0, ge=0)
    placed_students: int = Field(default=0, ge=0)
    placement_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    higher_studies: int = Field(default=0, ge=0)

    # Packages in LPA
    highest_package: Optional[float] = Field(default=None, ge=0)
    average_package: Optional[float] = Field(default=None, ge=0)
    median_package: Optional[float] = Field(default=None, ge=0)
    lowest_package: Optional[float] = Field(default=None, ge=0)

    total_companies: int = Field(default=0, ge=0)

    class Config:
        from_attributes = True


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class CandidatePreference(BaseModel):
    """
    Input contract for the recommendation scorer.

    ``mark`` and ``category`` are left unconstrained here and checked by the
    engine, so bad values surface as ``InvalidInput`` rather than a schema error.
    """
    mark: float
    category: str
    district: Optional[str] = None
    ownership_type: Optional[str] = None
    nba_required: bool = False
    year: Optional[int] = None


class RecommendationCandidate(BaseModel):
    """One (college, course, cutoff record) triple in a candidate pool."""
    record: CutoffRecord
    college: CollegeSummary
    course: Optional[CourseSummary] = None


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class HistoricalPoint(BaseModel):
    year: int
    round: str
    closing: float


class TrendEstimate(BaseModel):
    """Next-cycle closing mark extrapolated from a history series."""
    year: int
    category: Category
    predicted_closing: int
    direction: TrendDirection
    confidence: int = Field(ge=0, le=100)
    trend: float
    historical: List[HistoricalPoint] = Field(default_factory=list)

    class Config:
        use_enum_values = True


class InsufficientData(BaseModel):
    """Explicit "no prediction" outcome; callers must branch on it."""
    category: Category
    points: int
    message: str = "Insufficient historical data for prediction"

    class Config:
        use_enum_values = True


TrendResult = Union[TrendEstimate, InsufficientData]


class YearlyTrendPoint(BaseModel):
    year: int
    opening: float
    closing: float
    average: float
    rounds: List[str] = Field(default_factory=list)


class ProbabilityResult(BaseModel):
    mark: float
    category: Category
    probability: int = Field(ge=0, le=100)
    chance: str
    cutoff: Optional[CategoryCutoff] = None
    year: Optional[int] = None
    round: Optional[str] = None
    message: Optional[str] = None

    class Config:
        use_enum_values = True


class Recommendation(BaseModel):
    college: CollegeSummary
    course: Optional[CourseSummary] = None
    cutoff: CutoffRecord
    match_score: int = Field(ge=0, le=100)
    admission_probability: int = Field(ge=0, le=100)
    chance: str = ""


class RecommendationResult(BaseModel):
    recommendations: List[Recommendation] = Field(default_factory=list)
    # Eligible candidates before the top-N cap
    count: int = 0


class SeatMetrics(BaseModel):
    filling_percentage: int
    vacancy_percentage: int
    competition_ratio: int


class PlacementStatistics(BaseModel):
    total_students: int = 0
    total_placed: int = 0
    average_placement_percentage: float = 0.0
    average_highest_package: float = 0.0
    average_package: float = 0.0
    median_package: float = 0.0
    total_companies: int = 0
    total_colleges: int = 0
    total_courses: int = 0


class CategoryMetric(BaseModel):
    category: Category
    opening: float
    closing: float
    average: float

    class Config:
        use_enum_values = True


class CollegeComparison(BaseModel):
    college: CollegeSummary
    courses: List[CourseSummary] = Field(default_factory=list)
    latest_cutoff_year: Optional[int] = None
    latest_cutoffs: List[CutoffRecord] = Field(default_factory=list)
    latest_placement_year: Optional[int] = None
    latest_placements: List[PlacementRecord] = Field(default_factory=list)
    category_metrics: List[CategoryMetric] = Field(default_factory=list)
    placement_statistics: PlacementStatistics = Field(default_factory=PlacementStatistics)


class CourseComparison(BaseModel):
    course: CourseSummary
    college: Optional[CollegeSummary] = None
    latest_cutoff_year: Optional[int] = None
    latest_cutoffs: List[CutoffRecord] = Field(default_factory=list)
    latest_placement_year: Optional[int] = None
    latest_placements: List[PlacementRecord] = Field(default_factory=list)
    category_metrics: List[CategoryMetric] = Field(default_factory=list)
