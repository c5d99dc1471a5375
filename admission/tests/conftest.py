"""
Shared fixtures: in-memory SQLite store with a small TNEA sample and
factories for building engine contracts directly.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base
from admission.models import College, Course, Cutoff, Placement
from admission.logic.contracts import (
    CutoffRecord,
    CollegeSummary,
    CourseSummary,
    RecommendationCandidate,
)


# =============================================================================
# CONTRACT FACTORIES
# =============================================================================

@pytest.fixture
def make_record():
    def _make(
        opening=None,
        closing=None,
        category="OC",
        year=2024,
        round="Round 1",
        college_id=1,
        course_id=1,
        cutoffs=None,
        **kwargs
    ):
        if cutoffs is None:
            cutoffs = {}
            if opening is not None and closing is not None:
                cutoffs[category] = {"opening": opening, "closing": closing}
        kwargs.setdefault("total_seats", 60)
        return CutoffRecord(
            college_id=college_id,
            course_id=course_id,
            year=year,
            round=round,
            cutoffs=cutoffs,
            **kwargs
        )
    return _make


@pytest.fixture
def make_college():
    def _make(id=1, name=None, district="Chennai", ownership_type="Government", **kwargs):
        return CollegeSummary(
            id=id,
            name=name or f"College {id}",
            district=district,
            ownership_type=ownership_type,
            **kwargs
        )
    return _make


@pytest.fixture
def make_candidate(make_record, make_college):
    def _make(opening, closing, college_id=1, course_id=1, category="OC", **college_kwargs):
        return RecommendationCandidate(
            record=make_record(opening, closing, category=category, college_id=college_id, course_id=course_id),
            college=make_college(id=college_id, **college_kwargs),
            course=CourseSummary(id=course_id, college_id=college_id, name=f"Course {course_id}"),
        )
    return _make


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _band(opening, closing):
    return {"opening": opening, "closing": closing}


def seed_sample_data(session):
    """
    Colleges 1-3 are active, college 4 is inactive.
    Course 1 (college 1 CSE) carries a five-year OC history with closings
    180, 183, 185, 189, 191 plus a predicted 2025 row.
    """
    session.add_all([
        College(id=1, college_name="College of Engineering Guindy", college_code="CEG", tnea_code="1",
                district="Chennai", city="Chennai", college_type="Government",
                nba_accredited=True, nirf_engineering_rank=10, is_active=True),
        College(id=2, college_name="PSG College of Technology", college_code="PSG", tnea_code="2006",
                district="Coimbatore", city="Coimbatore", college_type="Aided",
                nba_accredited=True, nirf_engineering_rank=15, is_active=True),
        College(id=3, college_name="SSN College of Engineering", college_code="SSN", tnea_code="1315",
                district="Chennai", city="Kalavakkam", college_type="Private",
                nba_accredited=False, nirf_engineering_rank=40, is_active=True),
        College(id=4, college_name="Closed Institute of Technology", college_code="CIT", tnea_code="9999",
                district="Madurai", city="Madurai", college_type="Private",
                nba_accredited=False, is_active=False),
    ])
    session.add_all([
        Course(id=1, college_id=1, course_name="Computer Science and Engineering", course_code="CS", intake=120),
        Course(id=2, college_id=2, course_name="Computer Science and Engineering", course_code="CS", intake=60),
        Course(id=3, college_id=3, course_name="Computer Science and Engineering", course_code="CS", intake=180),
        Course(id=4, college_id=1, course_name="Electronics and Communication Engineering", course_code="EC", intake=60),
        Course(id=5, college_id=4, course_name="Computer Science and Engineering", course_code="CS", intake=60),
    ])

    history = [(2020, 180), (2021, 183), (2022, 185), (2023, 189), (2024, 191)]
    rows = []
    for year, closing in history:
        bands = {"oc": _band(closing - 10, closing)}
        if year == 2024:
            bands["bc"] = _band(170, 185)
        rows.append(Cutoff(college_id=1, course_id=1, year=year, round="Round 1",
                           community_cutoffs=bands, total_seats=120, filled_seats=118,
                           total_applications=2400))
    rows.append(Cutoff(college_id=1, course_id=1, year=2025, round="Round 1",
                       community_cutoffs={"oc": _band(190, 199)}, total_seats=120,
                       is_predicted=True, source="ml_prediction", confidence=70))

    rows += [
        Cutoff(college_id=2, course_id=2, year=2023, round="Round 1",
               community_cutoffs={"OC": _band(172, 186)}, total_seats=60, filled_seats=60),
        Cutoff(college_id=2, course_id=2, year=2024, round="Round 1",
               community_cutoffs={"OC": _band(175, 188), "BC": _band(165, 185)},
               total_seats=60, filled_seats=55),
        Cutoff(college_id=3, course_id=3, year=2024, round="Round 1",
               community_cutoffs={"OC": _band(160, 176)}, total_seats=180, filled_seats=180),
        # opening above closing: rejected at the adapter boundary
        Cutoff(college_id=3, course_id=3, year=2023, round="Round 1",
               community_cutoffs={"OC": _band(180, 170)}, total_seats=180),
        Cutoff(college_id=1, course_id=4, year=2024, round="Round 1",
               community_cutoffs={"OC": _band(178, 190)}, total_seats=60, filled_seats=60),
        Cutoff(college_id=4, course_id=5, year=2024, round="Round 1",
               community_cutoffs={"OC": _band(170, 190)}, total_seats=60, filled_seats=20),
    ]
    session.add_all(rows)

    session.add_all([
        Placement(college_id=1, course_id=1, year=2023, total_students=110, placed_students=99,
                  placement_percentage=90.0, highest_package=40.0, average_package=8.0,
                  median_package=7.0, total_companies=120),
        Placement(college_id=1, course_id=1, year=2024, total_students=115, placed_students=109,
                  placement_percentage=95.0, highest_package=45.0, average_package=9.0,
                  median_package=8.0, total_companies=130),
        Placement(college_id=1, course_id=4, year=2024, total_students=60, placed_students=51,
                  placement_percentage=85.0, highest_package=30.0, average_package=7.0,
                  median_package=6.0, total_companies=70),
        Placement(college_id=2, course_id=2, year=2024, total_students=60, placed_students=54,
                  placement_percentage=90.0, highest_package=35.0, average_package=8.5,
                  median_package=7.5, total_companies=90),
    ])
    session.commit()


@pytest.fixture
def seeded_db(db):
    seed_sample_data(db)
    return db


@pytest.fixture
def client(engine, session_factory):
    """TestClient over the admission router backed by the seeded SQLite store."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from db import get_db
    from admission.routes import router

    seed_session = session_factory()
    seed_sample_data(seed_session)
    seed_session.close()

    def _test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_db] = _test_db

    with TestClient(app) as test_client:
        yield test_client
