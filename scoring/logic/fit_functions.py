"""
Fit Functions

Individual scoring functions for each profile's criteria.
Each function maps (candidate attribute, context attribute) to a FitScore
between 0 and 100 plus optional rationale strings.
All logic is deterministic and total: unknown categorical values fall back
to a conservative score instead of raising.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Tuple

from .contracts import Crop, FitScore, Listing
from .constants import (
    WATER_FIT_MATRIX,
    SALINITY_FIT_MATRIX,
    HEAT_TOLERANCE_SCORES,
    HOT_MONTHS,
    PREFERRED_MONTH_SCORE,
    OFF_SEASON_HEAT_SCORE,
    HARVEST_DECAY_PER_DAY,
    FOOD_ROI_REFERENCE,
    RESOURCE_ROI_REFERENCE,
    UserPriority,
    CROP_INPUT_NEEDS,
    LISTING_CATEGORY_POINTS,
    LISTING_COMPATIBILITY_BONUS,
    LISTING_INCOMPATIBLE_POINTS,
    LISTING_BASE_CATEGORY_POINTS,
    LISTING_URGENCY_POINTS,
    LISTING_URGENCY_DEFAULT,
    LISTING_TRUST_POINTS,
    LISTING_TRUST_DEFAULT,
    LISTING_DISTANCE_POINTS,
    LISTING_DISTANCE_DEFAULT,
    LISTING_TYPE_POINTS,
    LISTING_TYPE_DEFAULT,
    LISTING_BAND_MAX,
    DROP_BASE_POINTS,
    DROP_URGENCY_STEPS,
    DROP_URGENCY_DEFAULT,
    DROP_SPOILAGE_POINTS,
    DROP_SPOILAGE_DEFAULT,
    DROP_PREFERENCE_POINTS,
    DROP_PREFERENCE_DEFAULT,
    DROP_ACTIVE_POINTS,
    DROP_BAND_MAX,
    BUYER_TRUST_STEPS,
    BUYER_TRUST_DEFAULT,
    BUYER_DISTANCE_POINTS,
    BUYER_DISTANCE_DEFAULT,
    BUYER_CAPACITY_POINTS,
    BUYER_CAPACITY_DEFAULT,
    BUYER_TYPE_POINTS,
    BUYER_TYPE_DEFAULT,
    BUYER_BAND_MAX,
    DEFAULT_FIT_SCORE,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CROP PROFILE
# =============================================================================

def harvest_fit(crop: Crop, target_days: Optional[float]) -> FitScore:
    """
    Score how well the crop's harvest window matches the target.

    100 when the target falls inside [min, max]; otherwise decays linearly
    with the distance from the window midpoint.
    """
    if target_days is None:
        return FitScore(score=DEFAULT_FIT_SCORE)

    low, high = crop.harvest_days_min, crop.harvest_days_max
    if low <= target_days <= high:
        return FitScore(score=100)

    midpoint = (low + high) / 2
    distance = abs(target_days - midpoint)
    return FitScore(score=_clamp(100 - distance * HARVEST_DECAY_PER_DAY))


def water_fit(water_access: Optional[str], water_need: Optional[str]) -> FitScore:
    """Score crop water need against plot water access."""
    return FitScore(score=_matrix_lookup(WATER_FIT_MATRIX, water_access, water_need, "water"))


def salinity_fit(salinity_risk: Optional[str], tolerance: Optional[str]) -> FitScore:
    """Score crop salinity tolerance against plot salinity risk."""
    return FitScore(score=_matrix_lookup(SALINITY_FIT_MATRIX, salinity_risk, tolerance, "salinity"))


def heat_fit(
    heat_tolerance: Optional[str],
    preferred_months: Iterable[int],
    current_month: Optional[int]
) -> FitScore:
    """
    Score seasonal fit.

    Preferred planting month wins outright; in hot months the crop's heat
    tolerance decides; any other month gets a flat moderate score.
    """
    if current_month is None:
        return FitScore(score=DEFAULT_FIT_SCORE)

    if current_month in preferred_months:
        return FitScore(score=PREFERRED_MONTH_SCORE)

    if current_month in HOT_MONTHS:
        return FitScore(score=_band_lookup(HEAT_TOLERANCE_SCORES, heat_tolerance, "heat"))

    return FitScore(score=OFF_SEASON_HEAT_SCORE)


def compute_roi(crop: Crop) -> Tuple[float, float]:
    """
    Derive (food ROI, resource ROI) for a crop.

    Food ROI is calories per m2 per day over the mid harvest window;
    resource ROI is yield per liter of water per cycle.
    """
    mid_days = (crop.harvest_days_min + crop.harvest_days_max) / 2
    calories_per_kg = crop.calories_per_100g * 10
    food_roi = 0.0
    if mid_days > 0:
        food_roi = crop.typical_yield_kg_per_m2 * calories_per_kg / mid_days

    resource_roi = 0.0
    if crop.water_proxy_liters_per_m2_per_cycle > 0:
        resource_roi = crop.typical_yield_kg_per_m2 / crop.water_proxy_liters_per_m2_per_cycle

    return max(0.0, food_roi), max(0.0, resource_roi)


def priority_bonus(food_roi: float, resource_roi: float, priority: Optional[str]) -> FitScore:
    """
    Score ROI against the user's stated priority.

    Both ROIs are normalized against a reference value and capped at 100.
    Unknown priorities are treated as balanced.
    """
    normalized_food = _clamp(food_roi / FOOD_ROI_REFERENCE * 100)
    normalized_resource = _clamp(resource_roi / RESOURCE_ROI_REFERENCE * 100)

    key = _key(priority)
    if key == UserPriority.MAX_CALORIES.value:
        return FitScore(score=normalized_food)
    if key == UserPriority.MIN_WATER.value:
        return FitScore(score=normalized_resource)
    return FitScore(score=(normalized_food + normalized_resource) / 2)


# =============================================================================
# LISTING PROFILE
# =============================================================================

def crop_input_needs(selected_crop: Optional[str]) -> list:
    """Input categories the selected crop usually needs."""
    crop = _key(selected_crop)
    if not crop:
        return []
    if crop in CROP_INPUT_NEEDS:
        return CROP_INPUT_NEEDS[crop]
    # Variety ids such as "tomato-cherry" match their base crop
    return CROP_INPUT_NEEDS.get(crop.split("-")[0], [])


def _crop_needs_listing(listing: Listing, selected_crop: Optional[str]) -> bool:
    return (
        bool(selected_crop)
        and _key(listing.mode) == "inputs"
        and _key(listing.category) in crop_input_needs(selected_crop)
    )


def listing_category_fit(listing: Listing, selected_crop: Optional[str]) -> FitScore:
    """Category fit for input listings against the selected crop."""
    band_max = LISTING_BAND_MAX["category"]
    if selected_crop and _key(listing.mode) == "inputs":
        if _crop_needs_listing(listing, selected_crop):
            return _points(LISTING_CATEGORY_POINTS, band_max, [f"Perfect for {selected_crop}"])
        return _points(LISTING_INCOMPATIBLE_POINTS, band_max)
    return _points(LISTING_BASE_CATEGORY_POINTS, band_max)


def listing_compatibility_fit(listing: Listing, selected_crop: Optional[str]) -> FitScore:
    """Bonus when the listing supplies an input the crop plan needs."""
    band_max = LISTING_BAND_MAX["compatibility"]
    if _crop_needs_listing(listing, selected_crop):
        return _points(
            LISTING_COMPATIBILITY_BONUS, band_max, [f"Matches your {selected_crop} crop plan"]
        )
    return _points(0, band_max)


def listing_urgency_fit(urgency: Optional[str]) -> FitScore:
    reasons = {"today": "Available today", "week": "Available this week"}
    return _point_band(
        LISTING_URGENCY_POINTS, LISTING_URGENCY_DEFAULT, urgency,
        LISTING_BAND_MAX["urgency"], reasons
    )


def listing_trust_fit(trust: Optional[str]) -> FitScore:
    reasons = {"verified_hub": "Verified hub", "ngo": "NGO-backed"}
    return _point_band(
        LISTING_TRUST_POINTS, LISTING_TRUST_DEFAULT, trust,
        LISTING_BAND_MAX["trust"], reasons, default_reason="Community member"
    )


def listing_distance_fit(distance_band: Optional[str]) -> FitScore:
    return _point_band(
        LISTING_DISTANCE_POINTS, LISTING_DISTANCE_DEFAULT, distance_band,
        LISTING_BAND_MAX["distance"], {"near": "Nearby location"}
    )


def listing_type_fit(listing_type: Optional[str]) -> FitScore:
    return _point_band(
        LISTING_TYPE_POINTS, LISTING_TYPE_DEFAULT, listing_type,
        LISTING_BAND_MAX["type"], {"offer": "Available offer"}
    )


# =============================================================================
# DROP PRIORITY PROFILE
# =============================================================================

def hours_until(start: datetime, reference_time: datetime) -> float:
    """Hours from reference_time to start; naive datetimes are read as UTC."""
    return (_as_utc(start) - _as_utc(reference_time)).total_seconds() / 3600


def drop_baseline_fit() -> FitScore:
    return _points(DROP_BASE_POINTS, DROP_BAND_MAX["baseline"])


def drop_urgency_fit(window_start: datetime, reference_time: Optional[datetime]) -> FitScore:
    """Approaching pickup windows get more points."""
    band_max = DROP_BAND_MAX["urgency"]
    if reference_time is None:
        return _points(DROP_URGENCY_DEFAULT, band_max)

    hours = hours_until(window_start, reference_time)
    for limit, points in DROP_URGENCY_STEPS:
        if hours < limit:
            return _points(points, band_max, [f"Pickup window opens within {limit}h"])
    return _points(DROP_URGENCY_DEFAULT, band_max)


def drop_spoilage_fit(spoilage_risk: Optional[str]) -> FitScore:
    reasons = {"high": "High spoilage risk", "medium": "Moderate spoilage risk"}
    return _point_band(
        DROP_SPOILAGE_POINTS, DROP_SPOILAGE_DEFAULT, spoilage_risk,
        DROP_BAND_MAX["spoilage"], reasons
    )


def drop_preference_fit(pickup_preference: Optional[str]) -> FitScore:
    reasons = {"same_day": "Same-day pickup requested", "24h": "Pickup within 24h requested"}
    return _point_band(
        DROP_PREFERENCE_POINTS, DROP_PREFERENCE_DEFAULT, pickup_preference,
        DROP_BAND_MAX["preference"], reasons
    )


def drop_status_fit(status: Optional[str]) -> FitScore:
    return _point_band(
        {"active": DROP_ACTIVE_POINTS}, 0, status,
        DROP_BAND_MAX["status"], {"active": "Active drop"}
    )


# =============================================================================
# BUYER MATCH PROFILE
# =============================================================================

def buyer_trust_fit(trust_score: Optional[float]) -> FitScore:
    band_max = BUYER_BAND_MAX["trust"]
    if trust_score is None:
        return _points(BUYER_TRUST_DEFAULT, band_max)
    for minimum, points, reason in BUYER_TRUST_STEPS:
        if trust_score >= minimum:
            return _points(points, band_max, [reason])
    return _points(BUYER_TRUST_DEFAULT, band_max)


def buyer_distance_fit(distance_band: Optional[str]) -> FitScore:
    reasons = {"near": "Very close pickup", "medium": "Reasonable distance"}
    return _point_band(
        BUYER_DISTANCE_POINTS, BUYER_DISTANCE_DEFAULT, distance_band,
        BUYER_BAND_MAX["distance"], reasons
    )


def buyer_capacity_fit(capacity_fit: Optional[str]) -> FitScore:
    reasons = {"exact": "Perfect quantity match", "can_handle": "Can handle volume"}
    return _point_band(
        BUYER_CAPACITY_POINTS, BUYER_CAPACITY_DEFAULT, capacity_fit,
        BUYER_BAND_MAX["capacity"], reasons
    )


def buyer_type_fit(buyer_type: Optional[str]) -> FitScore:
    reasons = {
        "ngo": "Verified organization",
        "verified_hub": "Verified organization",
        "aggregator": "Experienced aggregator",
    }
    return _point_band(
        BUYER_TYPE_POINTS, BUYER_TYPE_DEFAULT, buyer_type,
        BUYER_BAND_MAX["type"], reasons
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _key(value: Optional[str]) -> str:
    """Normalize a categorical value for table lookups."""
    if value is None:
        return ""
    return str(value).strip().lower()


def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


def _matrix_lookup(
    matrix: Dict[str, Dict[str, float]],
    row: Optional[str],
    column: Optional[str],
    factor: str
) -> float:
    """Look up a matrix cell, falling back to the default fit score."""
    cells = matrix.get(_key(row))
    if cells is None or _key(column) not in cells:
        logger.debug("No %s fit entry for (%s, %s), using default", factor, row, column)
        return DEFAULT_FIT_SCORE
    return cells[_key(column)]


def _band_lookup(table: Dict[str, float], value: Optional[str], factor: str) -> float:
    if _key(value) not in table:
        logger.debug("No %s fit entry for %s, using default", factor, value)
        return DEFAULT_FIT_SCORE
    return table[_key(value)]


def _points(points: float, band_max: float, rationale: Optional[list] = None) -> FitScore:
    """Express awarded points as a 0-100 fit score within their band."""
    return FitScore(
        score=_clamp(points / band_max * 100),
        rationale=rationale or [],
        points=points,
    )


def _point_band(
    table: Dict[str, float],
    default_points: float,
    value: Optional[str],
    band_max: float,
    reasons: Dict[str, str],
    default_reason: Optional[str] = None
) -> FitScore:
    """Award the points for a categorical value; unknown values get the lowest band."""
    key = _key(value)
    if key in table:
        reason = reasons.get(key)
        return _points(table[key], band_max, [reason] if reason else [])
    return _points(default_points, band_max, [default_reason] if default_reason else [])


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
