"""
Admission API Routes

Exposes the admission engine via REST API:
- /predictions: probability, cutoff prediction, recommendations
- /cutoffs: yearly trends, colleges within a mark's range
- /comparison: college/course comparison and suggestions
- /placements: placement statistics
"""

import logging
from typing import Optional, List, Dict, Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_db
from .logic import runner
from .logic.contracts import CandidatePreference, InsufficientData
from .logic.errors import AdmissionError, CLIENT_INPUT
from .logic.statistics import seat_metrics

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admission"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class PreferenceFilters(BaseModel):
    district: Optional[str] = None
    college_type: Optional[str] = Field(default=None, description="Government, Private or Aided")
    nba_accredited: bool = False
    year: Optional[int] = None


class RecommendationRequest(BaseModel):
    """Request body for the recommendations endpoint."""
    mark: float = Field(..., description="TNEA aggregate mark out of 200", examples=[178.5])
    community: str = Field(..., description="Category: OC, BC, BCM, MBC, SC, SCA or ST", examples=["BC"])
    preferences: PreferenceFilters = Field(default_factory=PreferenceFilters)


class CollegeComparisonRequest(BaseModel):
    college_ids: List[int] = Field(default_factory=list)


class CourseComparisonRequest(BaseModel):
    course_ids: List[int] = Field(default_factory=list)


# =============================================================================
# HELPERS
# =============================================================================

def _ok(data: Any, **extra) -> Dict[str, Any]:
    return {"success": True, "data": data, **extra}


def _raise_http(error: AdmissionError):
    """Client-input errors become 400, data-state errors 404."""
    status_code = 400 if error.kind == CLIENT_INPUT else 404
    raise HTTPException(
        status_code=status_code,
        detail={"success": False, "code": error.code, "message": error.message},
    )


def _server_error(message: str) -> JSONResponse:
    logger.exception(message)
    return JSONResponse(status_code=500, content={"success": False, "message": message})


def _dump(models) -> List[Dict[str, Any]]:
    return [m.model_dump(mode="json") for m in models]


# =============================================================================
# PREDICTIONS
# =============================================================================

@router.get("/predictions/probability", summary="Admission probability for a mark")
def get_admission_probability(
    mark: float,
    college_id: int,
    course_id: int,
    community: str = "OC",
    db: Session = Depends(get_db)
):
    """
    Probability (0-100) of admission against the latest historical cutoff of
    one course. Missing cutoff data yields probability 0 with a message.
    """
    try:
        result = runner.run_probability(db, mark, college_id, course_id, community)
        return _ok(result.model_dump(mode="json"))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error calculating admission probability")


@router.get("/predictions/cutoff", summary="Predict next year's closing cutoff")
def get_cutoff_prediction(
    college_id: int,
    course_id: int,
    community: str = "OC",
    db: Session = Depends(get_db)
):
    """
    Extrapolate next cycle's closing mark. With fewer than two historical
    points ``predicted`` is null and a message explains why.
    """
    try:
        result = runner.run_cutoff_prediction(db, college_id, course_id, community)

        if isinstance(result, InsufficientData):
            return _ok({
                "predicted": None,
                "community": result.category,
                "points": result.points,
                "message": result.message,
            })

        return _ok({
            "year": result.year,
            "community": result.category,
            "predicted": result.predicted_closing,
            "trend": result.direction,
            "confidence": result.confidence,
            "historical": [
                {"year": p.year, "round": p.round, "actual": p.closing}
                for p in result.historical
            ],
        })
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error getting cutoff predictions")


@router.post("/predictions/recommendations", summary="Recommend colleges for a mark")
def get_college_recommendations(
    request: RecommendationRequest,
    db: Session = Depends(get_db)
):
    """
    Rank eligible college/course pairs for a candidate.

    **Request Body:**
    - `mark`: aggregate mark out of 200
    - `community`: reservation category
    - `preferences`: optional district, college type, NBA accreditation, year

    **Response:** top 10 recommendations; `count` is the number of eligible
    options before the cap.
    """
    preference = CandidatePreference(
        mark=request.mark,
        category=request.community,
        district=request.preferences.district,
        ownership_type=request.preferences.college_type,
        nba_required=request.preferences.nba_accredited,
        year=request.preferences.year,
    )
    try:
        year, result = runner.run_recommendations(db, preference)
        return _ok(_dump(result.recommendations), count=result.count, year=year)
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error getting college recommendations")


# =============================================================================
# CUTOFFS
# =============================================================================

@router.get("/cutoffs/trends", summary="Yearly cutoff trends for a course")
def get_cutoff_trends(
    college_id: int,
    course_id: int,
    community: str = "OC",
    db: Session = Depends(get_db)
):
    try:
        trends = runner.run_cutoff_trends(db, college_id, course_id, community)
        return _ok(_dump(trends))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error fetching cutoff trends")


@router.get("/cutoffs/within-range", summary="Courses whose cutoff band contains a mark")
def find_colleges_within_cutoff(
    mark: float,
    community: str = "OC",
    year: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """Each record carries its filling/vacancy percentages and competition ratio."""
    try:
        used_year, records = runner.run_within_range(db, mark, community, year)
        data = [
            {**r.model_dump(mode="json"), "seat_metrics": seat_metrics(r).model_dump()}
            for r in records
        ]
        return _ok(data, count=len(records), year=used_year)
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error finding colleges within cutoff range")


# =============================================================================
# COMPARISON
# =============================================================================

@router.post("/comparison/colleges", summary="Compare 2-3 colleges")
def compare_colleges(
    request: CollegeComparisonRequest,
    db: Session = Depends(get_db)
):
    try:
        bundles = runner.run_college_comparison(db, request.college_ids)
        return _ok(_dump(bundles))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error comparing colleges")


@router.post("/comparison/courses", summary="Compare 2-3 courses")
def compare_courses(
    request: CourseComparisonRequest,
    db: Session = Depends(get_db)
):
    try:
        bundles = runner.run_course_comparison(db, request.course_ids)
        return _ok(_dump(bundles))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error comparing courses")


@router.get("/comparison/suggestions/{college_id}", summary="Colleges worth comparing")
def get_comparison_suggestions(college_id: int, db: Session = Depends(get_db)):
    try:
        suggestions = runner.run_comparison_suggestions(db, college_id)
        return _ok(_dump(suggestions))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error getting comparison suggestions")


# =============================================================================
# PLACEMENTS
# =============================================================================

@router.get("/placements/statistics", summary="Aggregate placement statistics")
def get_placement_statistics(
    year: Optional[int] = None,
    district: Optional[str] = None,
    college_type: Optional[str] = Query(default=None, description="Government, Private or Aided"),
    db: Session = Depends(get_db)
):
    try:
        stats = runner.run_placement_statistics(db, year, district, college_type)
        return _ok(stats.model_dump(mode="json"))
    except AdmissionError as e:
        _raise_http(e)
    except HTTPException:
        raise
    except Exception:
        return _server_error("Error fetching placement statistics")


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Admission engine health check")
def health_check():
    """Check if the admission engine is operational."""
    return {"status": "ok", "engine": "admission", "version": runner.engine.version}
