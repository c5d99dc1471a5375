# Admission tables share the Base from db.py, so main.create_all
# and the test fixtures see every table on one metadata
from db import Base

__all__ = ["Base"]
