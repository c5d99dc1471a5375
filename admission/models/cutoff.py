from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, JSON, ForeignKey, Index

from .base import Base


class Cutoff(Base):
    __tablename__ = "cutoffs"
    __table_args__ = (
        Index("ix_cutoffs_pair_year_round", "college_id", "course_id", "year", "round"),
        Index("ix_cutoffs_predicted_year", "is_predicted", "year"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    round = Column(String, nullable=False)  # Round 1/Round 2/Round 3/Supplementary

    # {"OC": {"opening": 185, "closing": 195, "average": 190}, "BC": {...}}
    community_cutoffs = Column(JSON, nullable=False, default=dict)

    total_applications = Column(Integer, default=0)
    total_seats = Column(Integer, nullable=False)
    filled_seats = Column(Integer, default=0)
    vacancy_seats = Column(Integer)

    is_predicted = Column(Boolean, default=False, nullable=False)
    confidence = Column(Float)
    source = Column(String, default="official")

    created_at = Column(DateTime)
    updated_at = Column(DateTime)
