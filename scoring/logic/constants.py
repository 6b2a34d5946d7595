"""
Scoring Engine Constants

Defines all lookup matrices, point bands, weights, thresholds, and enums used
by the four scoring profiles.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List

# =============================================================================
# CATEGORICAL VALUES
# =============================================================================

class WaterAccess(str, Enum):
    """Water available on the plot."""
    NONE = "none"
    LIMITED = "limited"
    RELIABLE = "reliable"


class SalinityRisk(str, Enum):
    """Soil salinity risk observed on the plot."""
    NONE = "none"
    SOME = "some"
    STRONG = "strong"


class UserPriority(str, Enum):
    """What the farmer wants to optimize for."""
    MAX_CALORIES = "max_calories"
    MIN_WATER = "min_water"
    BALANCED = "balanced"


class Band(str, Enum):
    """Three-level band shared by water need and tolerances."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ListingStatus(str, Enum):
    ACTIVE = "active"
    RESERVED = "reserved"
    FULFILLED = "fulfilled"


class DropStatus(str, Enum):
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


# =============================================================================
# CROP PROFILE: LOOKUP MATRICES
# =============================================================================

# Water access x crop water need
WATER_FIT_MATRIX: Dict[str, Dict[str, float]] = {
    "none": {"low": 100, "medium": 40, "high": 10},
    "limited": {"low": 90, "medium": 70, "high": 40},
    "reliable": {"low": 80, "medium": 100, "high": 100},
}

# Salinity risk x crop salinity tolerance (monotone in tolerance)
SALINITY_FIT_MATRIX: Dict[str, Dict[str, float]] = {
    "none": {"low": 100, "medium": 100, "high": 100},
    "some": {"low": 50, "medium": 85, "high": 100},
    "strong": {"low": 20, "medium": 60, "high": 100},
}

# Heat tolerance during hot months
HEAT_TOLERANCE_SCORES: Dict[str, float] = {
    "low": 40,
    "medium": 70,
    "high": 100,
}

# Mediterranean hot season
HOT_MONTHS = (6, 7, 8, 9)
PREFERRED_MONTH_SCORE = 100
OFF_SEASON_HEAT_SCORE = 70

# Harvest window decay (points lost per day away from the crop's midpoint)
HARVEST_DECAY_PER_DAY = 2

# ROI normalization references
FOOD_ROI_REFERENCE = 50.0        # kcal per m2 per day
RESOURCE_ROI_REFERENCE = 0.05    # kg per liter

# ROI display bands: (low below, medium below)
FOOD_ROI_BANDS = (15, 30)
RESOURCE_ROI_BANDS = (0.03, 0.06)

# =============================================================================
# LISTING PROFILE: POINT BANDS
# =============================================================================

# Inputs each crop typically needs, for listing compatibility
CROP_INPUT_NEEDS: Dict[str, List[str]] = {
    "tomato": ["seeds", "fertilizer", "irrigation"],
    "cucumber": ["seeds", "fertilizer", "irrigation"],
    "radish": ["seeds", "tools"],
    "lettuce": ["seeds", "irrigation"],
    "pepper": ["seeds", "fertilizer", "irrigation"],
    "eggplant": ["seeds", "fertilizer", "irrigation"],
    "zucchini": ["seeds", "fertilizer", "irrigation"],
    "onion": ["seeds", "tools"],
    "carrot": ["seeds", "tools"],
    "spinach": ["seeds", "irrigation"],
    "mint": ["seeds", "irrigation"],
    "parsley": ["seeds"],
}

LISTING_CATEGORY_POINTS = 30      # category needed by the selected crop
LISTING_COMPATIBILITY_BONUS = 20  # plan compatibility on top of category
LISTING_INCOMPATIBLE_POINTS = 10  # inputs listing the crop does not need
LISTING_BASE_CATEGORY_POINTS = 15 # no crop selected, or not an inputs listing

LISTING_URGENCY_POINTS: Dict[str, float] = {"today": 20, "week": 15}
LISTING_URGENCY_DEFAULT = 10

LISTING_TRUST_POINTS: Dict[str, float] = {"verified_hub": 15, "ngo": 12}
LISTING_TRUST_DEFAULT = 8

LISTING_DISTANCE_POINTS: Dict[str, float] = {"near": 15, "medium": 10}
LISTING_DISTANCE_DEFAULT = 5

LISTING_TYPE_POINTS: Dict[str, float] = {"offer": 20}
LISTING_TYPE_DEFAULT = 10

# Bands in the order their reasons are reported
LISTING_BAND_MAX: Dict[str, float] = {
    "category": LISTING_CATEGORY_POINTS,
    "urgency": 20,
    "trust": 15,
    "distance": 15,
    "type": 20,
    "compatibility": LISTING_COMPATIBILITY_BONUS,
}

# =============================================================================
# DROP PRIORITY PROFILE: POINT BANDS
# =============================================================================

DROP_BASE_POINTS = 50

# (hours until window start below, points); first match wins
DROP_URGENCY_STEPS = ((24, 40), (48, 30), (72, 20))
DROP_URGENCY_DEFAULT = 5

DROP_SPOILAGE_POINTS: Dict[str, float] = {"high": 30, "medium": 15}
DROP_SPOILAGE_DEFAULT = 5

DROP_PREFERENCE_POINTS: Dict[str, float] = {"same_day": 20, "24h": 10}
DROP_PREFERENCE_DEFAULT = 0

DROP_ACTIVE_POINTS = 10

DROP_BAND_MAX: Dict[str, float] = {
    "baseline": DROP_BASE_POINTS,
    "urgency": 40,
    "spoilage": 30,
    "preference": 20,
    "status": DROP_ACTIVE_POINTS,
}

# =============================================================================
# BUYER MATCH PROFILE: POINT BANDS
# =============================================================================

# (minimum trust score, points, rationale); first match wins
BUYER_TRUST_STEPS = (
    (95, 35, "Highly trusted partner"),
    (90, 25, "Verified trusted hub"),
)
BUYER_TRUST_DEFAULT = 15

BUYER_DISTANCE_POINTS: Dict[str, float] = {"near": 30, "medium": 20}
BUYER_DISTANCE_DEFAULT = 5

BUYER_CAPACITY_POINTS: Dict[str, float] = {"exact": 20, "can_handle": 15}
BUYER_CAPACITY_DEFAULT = 5

BUYER_TYPE_POINTS: Dict[str, float] = {"ngo": 15, "verified_hub": 15, "aggregator": 10}
BUYER_TYPE_DEFAULT = 5

BUYER_BAND_MAX: Dict[str, float] = {
    "trust": 35,
    "distance": 30,
    "capacity": 20,
    "type": 15,
}

# =============================================================================
# SPOILAGE ESTIMATION
# =============================================================================

HIGH_SPOILAGE_CROPS = ["lettuce", "spinach", "arugula", "kale"]
MEDIUM_SPOILAGE_CROPS = ["tomato", "cucumber", "zucchini"]

# =============================================================================
# WEIGHT VECTORS
# =============================================================================

POINTS_PER_WEIGHT = 100


def point_weights(band_max: Dict[str, float]) -> Dict[str, float]:
    """
    Weights for an additive point-band profile.

    A band scoring 100 contributes its full points, so the weighted sum of
    the band scores is the plain sum of awarded points.
    """
    return {name: points / POINTS_PER_WEIGHT for name, points in band_max.items()}


# Weights for each crop factor (must sum to 1.0)
CROP_WEIGHTS: Dict[str, float] = {
    "harvest": 0.25,    # Harvest window vs target
    "water": 0.25,      # Water need vs access
    "salinity": 0.20,   # Salinity tolerance vs risk
    "heat": 0.15,       # Season and heat tolerance
    "priority": 0.15,   # ROI aligned with user priority
}

# Factors that count as hard constraints for confidence
CROP_CONSTRAINT_FACTORS = ("harvest", "water", "salinity", "heat")

# Point-band profiles add up points and clamp the total at 100
LISTING_WEIGHTS: Dict[str, float] = point_weights(LISTING_BAND_MAX)
DROP_WEIGHTS: Dict[str, float] = point_weights(DROP_BAND_MAX)
BUYER_WEIGHTS: Dict[str, float] = point_weights(BUYER_BAND_MAX)

# Expected weight sums: available points / 100
LISTING_WEIGHT_SUM = 1.2
DROP_WEIGHT_SUM = 1.5
BUYER_WEIGHT_SUM = 1.0

WEIGHT_SUM_TOLERANCE = 1e-6

# =============================================================================
# THRESHOLDS
# =============================================================================

# A factor above this counts as a satisfied constraint
CONSTRAINT_SATISFIED_THRESHOLD = 60

# Harvest fit considered a match in explanations
HARVEST_MATCH_THRESHOLD = 80

# Badge thresholds
PERFECT_TIMING_THRESHOLD = 90
WATER_EFFICIENT_THRESHOLD = 90
FAST_HARVEST_MAX_DAYS = 40
HIGH_YIELD_KG_PER_M2 = 4

# Reasons kept per point-band result
MAX_REASONS = 3

# =============================================================================
# RANKING CONFIGURATION
# =============================================================================

CROP_TOP_K = 3
CROP_ALTERNATIVES_M = 5

# Matching profiles return the full list; first entry is the best match
MATCH_TOP_K = 1
MATCH_ALTERNATIVES_M = None

# =============================================================================
# PLOT ASSESSMENT & BUNDLES
# =============================================================================

PLOT_PENALTIES: Dict[str, Dict[str, tuple]] = {
    "salinity": {
        "high": (30, "High salinity reduces farmability"),
        "medium": (15, "Medium salinity may require mitigation"),
    },
    "contamination": {
        "confirmed": (40, "Confirmed contamination requires treatment"),
        "suspected": (20, "Suspected contamination needs testing"),
    },
    "debris": {
        "heavy": (25, "Heavy debris requires significant cleanup"),
        "light": (10, "Light debris cleanup needed"),
    },
    "water_access": {
        "none": (30, "No water access limits farming potential"),
        "limited": (15, "Limited water access may need improvement"),
    },
}

FARMABLE_THRESHOLD = 70
RESTORABLE_THRESHOLD = 40

SMALL_PLOT_MAX_M2 = 50
LARGE_PLOT_MIN_M2 = 100

# Drop quantity bands by average quantity
QUANTITY_BANDS = ((10, "small"), (50, "medium"))

# =============================================================================
# BROWSING (FILTER & SORT)
# =============================================================================

LISTING_SORT_OPTIONS = ("ai_match", "newest", "closest", "quantity")
DROP_SORT_OPTIONS = ("ai_priority", "soonest", "largest")

# Unknown distance bands sort last
DISTANCE_ORDER: Dict[str, int] = {"near": 0, "medium": 1, "far": 2}

VERIFIED_TRUST = ("verified_hub", "ngo")

# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULT_BAND = "unknown"
DEFAULT_FIT_SCORE = 50
