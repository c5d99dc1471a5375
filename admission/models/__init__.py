# Export all admission models for easy imports
from .base import Base
from .college import College
from .course import Course
from .cutoff import Cutoff
from .placement import Placement

__all__ = [
    "Base",
    "College",
    "Course",
    "Cutoff",
    "Placement",
]
