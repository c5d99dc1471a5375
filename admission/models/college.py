from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime
from sqlalchemy.orm import relationship

from .base import Base


class College(Base):
    __tablename__ = "colleges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    college_name = Column(String, nullable=False, index=True)
    college_code = Column(String, nullable=False, unique=True)
    tnea_code = Column(String, unique=True)

    # Address
    street = Column(String)
    city = Column(String)
    district = Column(String, nullable=False, index=True)
    pincode = Column(String)
    state = Column(String, default="Tamil Nadu")

    college_type = Column(String, nullable=False, index=True)  # Government/Private/Aided
    establishment_year = Column(Integer)

    # Accreditation
    nba_accredited = Column(Boolean, default=False)
    naac_grade = Column(String)
    naac_cgpa = Column(Float)

    # Rankings
    nirf_overall_rank = Column(Integer)
    nirf_engineering_rank = Column(Integer)
    nirf_year = Column(Integer)

    is_active = Column(Boolean, default=True, index=True)
    updated_at = Column(DateTime)

    courses = relationship("Course", back_populates="college")
