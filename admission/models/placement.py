from sqlalchemy import Column, Integer, Float, ForeignKey

from .base import Base


class Placement(Base):
    __tablename__ = "placements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), index=True)
    year = Column(Integer, nullable=False, index=True)

    # Placement statistics
    total_students = Column(Integer, default=0)
    eligible_students = Column(Integer, default=0)
    placed_students = Column(Integer, default=0)
    placement_percentage = Column(Float)
    higher_studies = Column(Integer, default=0)

    # Salary statistics (LPA)
    highest_package = Column(Float)
    average_package = Column(Float)
    median_package = Column(Float)
    lowest_package = Column(Float)

    total_companies = Column(Integer, default=0)
