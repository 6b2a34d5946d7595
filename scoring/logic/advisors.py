"""
Advisors

Small deterministic helpers used around the scoring profiles: spoilage
estimation for new drops, ROI display bands, plot farmability assessment
and aid bundle selection.
"""

from typing import Optional

from .catalog import BUNDLE_TEMPLATES, BundleTemplate
from .contracts import PlotAssessment, PlotConditions
from .constants import (
    HIGH_SPOILAGE_CROPS,
    MEDIUM_SPOILAGE_CROPS,
    FOOD_ROI_BANDS,
    RESOURCE_ROI_BANDS,
    PLOT_PENALTIES,
    FARMABLE_THRESHOLD,
    RESTORABLE_THRESHOLD,
    SMALL_PLOT_MAX_M2,
    LARGE_PLOT_MIN_M2,
    QUANTITY_BANDS,
)


def estimate_spoilage_risk(crop_type: str, window_length_hours: float, pickup_preference: str) -> str:
    """
    Estimate spoilage risk for a harvest drop.

    Leafy greens spoil fastest, soft vegetables next; long pickup windows
    and relaxed pickup preferences add risk.

    Returns:
        "low", "medium" or "high"
    """
    crop = (crop_type or "").lower()
    risk = 10
    if any(name in crop for name in HIGH_SPOILAGE_CROPS):
        risk = 40
    elif any(name in crop for name in MEDIUM_SPOILAGE_CROPS):
        risk = 25

    if window_length_hours > 48:
        risk += 30
    elif window_length_hours > 24:
        risk += 15
    elif window_length_hours > 12:
        risk += 5

    if pickup_preference == "any":
        risk += 20
    elif pickup_preference == "24h":
        risk += 10

    if risk >= 60:
        return "high"
    if risk >= 30:
        return "medium"
    return "low"


def roi_category(value: float, kind: str) -> str:
    """Band a food ('food') or resource ('resource') ROI for display."""
    low_below, medium_below = FOOD_ROI_BANDS if kind == "food" else RESOURCE_ROI_BANDS
    if value < low_below:
        return "low"
    if value < medium_below:
        return "medium"
    return "high"


def assess_plot(plot: PlotConditions) -> PlotAssessment:
    """
    Farmability assessment: start at 100 and subtract per observed problem.
    """
    score = 100
    reasons = []

    observations = {
        "salinity": plot.salinity,
        "contamination": plot.contamination,
        "debris": plot.debris,
        "water_access": plot.water_access,
    }
    for factor, value in observations.items():
        penalty = PLOT_PENALTIES[factor].get((value or "").lower())
        if penalty:
            points, reason = penalty
            score -= points
            reasons.append(reason)

    if (plot.water_access or "").lower() == "reliable":
        reasons.append("Reliable water access is positive")

    if score >= FARMABLE_THRESHOLD:
        status = "Farmable"
    elif score >= RESTORABLE_THRESHOLD:
        status = "Restorable"
    else:
        status = "Damaged"

    return PlotAssessment(status=status, score=max(0, score), reasons=reasons)


def plot_size_band(plot_size_m2: Optional[float]) -> str:
    if not plot_size_m2:
        return "medium"
    if plot_size_m2 < SMALL_PLOT_MAX_M2:
        return "small"
    if plot_size_m2 > LARGE_PLOT_MIN_M2:
        return "large"
    return "medium"


def recommend_bundle_template(plot_size_m2: Optional[float] = None) -> BundleTemplate:
    """Pick the aid bundle template sized for the plot; medium when unknown."""
    return BUNDLE_TEMPLATES.get(plot_size_band(plot_size_m2), BUNDLE_TEMPLATES["medium"])


def quantity_band(quantity_min: float, quantity_max: float) -> str:
    average = (quantity_min + quantity_max) / 2
    for below, band in QUANTITY_BANDS:
        if average < below:
            return band
    return "large"
