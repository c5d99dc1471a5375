"""
Admission Engine Constants

Defines the enumerations, score ladders, bonuses and limits used by the
admission analytics engine. All values are deterministic.
"""

import os
from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Category(str, Enum):
    """TNEA reservation categories, each with its own cutoff band."""
    OC = "OC"
    BC = "BC"
    BCM = "BCM"
    MBC = "MBC"
    SC = "SC"
    SCA = "SCA"
    ST = "ST"


class Round(str, Enum):
    """Counselling rounds within one admission year."""
    ROUND_1 = "Round 1"
    ROUND_2 = "Round 2"
    ROUND_3 = "Round 3"
    SUPPLEMENTARY = "Supplementary"


class OwnershipType(str, Enum):
    GOVERNMENT = "Government"
    PRIVATE = "Private"
    AIDED = "Aided"


class CutoffSource(str, Enum):
    OFFICIAL = "official"
    SCRAPED = "scraped"
    MANUAL = "manual"
    ML_PREDICTION = "ml_prediction"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


# Rounds sort in counselling order, not alphabetically
ROUND_ORDER: Dict[str, int] = {
    Round.ROUND_1.value: 1,
    Round.ROUND_2.value: 2,
    Round.ROUND_3.value: 3,
    Round.SUPPLEMENTARY.value: 4,
}

# =============================================================================
# MARK BOUNDS
# =============================================================================

MIN_MARK = 0.0
MAX_MARK = 200.0
MIN_CUTOFF_YEAR = 2020

# =============================================================================
# PROBABILITY
# =============================================================================

# (minimum probability, label), checked top to bottom
CHANCE_LABELS: List[Tuple[int, str]] = [
    (80, "Very High Chance"),
    (60, "High Chance"),
    (40, "Moderate Chance"),
    (20, "Low Chance"),
    (0, "Very Low Chance"),
]

# =============================================================================
# TREND PREDICTION
# =============================================================================

MIN_HISTORY_POINTS = 2
RECENT_WINDOW = 2
# Below this many points the older mean is just the earliest closing mark
FULL_SPLIT_MIN_POINTS = 4

CONFIDENCE_FLOOR = 60
CONFIDENCE_CEILING = 95
VARIANCE_PENALTY = 2

# Number of most recent historical records fed to the predictor
HISTORY_LIMIT = int(os.getenv("ADMISSION_HISTORY_LIMIT", "5"))

# =============================================================================
# RECOMMENDATION SCORING
# =============================================================================

# (minimum margin over closing cutoff, points), checked top to bottom
MARGIN_POINTS: List[Tuple[float, int]] = [
    (10, 50),
    (5, 40),
    (0, 30),
    (-5, 20),
    (-10, 10),
]
MARGIN_FLOOR_POINTS = 5

PREFERENCE_BONUSES: Dict[str, int] = {
    "district": 20,
    "ownership_type": 15,
    "nba_accredited": 10,
}

MIN_MATCH_SCORE = 0
MAX_MATCH_SCORE = 100

MAX_RECOMMENDATIONS = 10

# =============================================================================
# COMPARISON
# =============================================================================

MIN_COMPARE = 2
MAX_COMPARE = 3

MAX_SUGGESTIONS = 5
NIRF_RANK_WINDOW = 10
