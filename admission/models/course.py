from sqlalchemy import Column, Integer, String, Boolean, Float, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)
    course_name = Column(String, nullable=False)
    course_code = Column(String)
    intake = Column(Integer)
    fees = Column(Float)  # Annual tuition in INR
    nba_accredited = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)

    college = relationship("College", back_populates="courses")
