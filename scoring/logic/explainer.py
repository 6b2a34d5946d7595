"""
Explanation & Reasoning Trace

Turns factor scores into user-facing bullets and badges, and records the
rules that fired for auditing. Bullets and trace are independent: the trace
always lists every factor, bullets only the salient ones.
"""

from typing import Dict, Iterable, List

from .contracts import (
    Buyer,
    Crop,
    CropContext,
    FitScore,
    HarvestDrop,
    Listing,
    ReasoningTrace,
    ScoreBreakdown,
)
from .constants import (
    CONSTRAINT_SATISFIED_THRESHOLD,
    HARVEST_MATCH_THRESHOLD,
    PERFECT_TIMING_THRESHOLD,
    WATER_EFFICIENT_THRESHOLD,
    FAST_HARVEST_MAX_DAYS,
    HIGH_YIELD_KG_PER_M2,
    MAX_REASONS,
    VERIFIED_TRUST,
    UserPriority,
)


# =============================================================================
# REASONING TRACE
# =============================================================================

def rule_line(rule: str, inputs: str, score: float) -> str:
    """Format one audit line: RULE: inputs → computed/100."""
    return f"{rule}: {inputs} → {round(score)}/100"


def build_trace(
    breakdown: ScoreBreakdown,
    rules_applied: List[str],
    constraint_factors: Iterable[str]
) -> ReasoningTrace:
    """
    Build the reasoning trace for one candidate.

    A constraint is satisfied when its factor scores above the threshold.
    """
    constraint_factors = list(constraint_factors)
    satisfied = sum(
        1 for name in constraint_factors
        if breakdown.factors.get(name, 0) > CONSTRAINT_SATISFIED_THRESHOLD
    )
    return ReasoningTrace(
        breakdown=breakdown,
        rules_applied=rules_applied,
        constraints_satisfied=satisfied,
        total_constraints=len(constraint_factors),
    )


def confidence_from_trace(trace: ReasoningTrace) -> int:
    """Share of satisfied constraints, as 0-100."""
    if trace.total_constraints == 0:
        return 0
    return round(trace.constraints_satisfied / trace.total_constraints * 100)


# =============================================================================
# CROP PROFILE
# =============================================================================

def crop_rules(crop: Crop, context: CropContext, fits: Dict[str, FitScore]) -> List[str]:
    return [
        rule_line(
            "HARVEST_FIT",
            f"Target {_num(context.target_harvest_window_days)}d vs crop "
            f"{_num(crop.harvest_days_min)}-{_num(crop.harvest_days_max)}d",
            fits["harvest"].score,
        ),
        rule_line(
            "WATER_FIT",
            f"{context.water_access} water × {crop.water_need_band} need",
            fits["water"].score,
        ),
        rule_line(
            "SALINITY_FIT",
            f"{context.salinity_risk} risk × {crop.salinity_tolerance} tolerance",
            fits["salinity"].score,
        ),
        rule_line(
            "HEAT_FIT",
            f"month {_num(context.current_month)}, {crop.heat_tolerance} heat tolerance",
            fits["heat"].score,
        ),
        rule_line("PRIORITY_WEIGHT", f"{context.user_priority}", fits["priority"].score),
    ]


def crop_explanation(
    crop: Crop,
    context: CropContext,
    fits: Dict[str, FitScore],
    food_roi: float,
    resource_roi: float
) -> List[str]:
    """
    Explanation bullets for a crop: harvest timing first, then water and
    salinity when they stand out, then the priority-relevant ROI.
    """
    bullets: List[str] = []
    window = f"{_num(crop.harvest_days_min)}-{_num(crop.harvest_days_max)}"
    target = _num(context.target_harvest_window_days)

    if context.target_harvest_window_days is None:
        bullets.append(f"Harvest in {window} days (no target set)")
    elif fits["harvest"].score >= HARVEST_MATCH_THRESHOLD:
        bullets.append(f"Harvest in {window} days matches your {target}-day target")
    else:
        bullets.append(f"Harvest in {window} days (your target: {target} days)")

    water_access = (context.water_access or "").lower()
    if water_access in ("none", "limited"):
        if crop.water_need_band == "low":
            bullets.append(f"Low water requirements ideal for {water_access} water access")
        elif crop.water_need_band == "high":
            bullets.append(f"High water needs may be challenging with {water_access} water access")

    salinity_risk = (context.salinity_risk or "").lower()
    if salinity_risk in ("some", "strong"):
        if crop.salinity_tolerance == "high":
            bullets.append(f"Excellent salinity tolerance for {salinity_risk} salinity risk")
        elif crop.salinity_tolerance == "low":
            bullets.append(f"Limited salinity tolerance - may struggle with {salinity_risk} salinity")

    priority = (context.user_priority or "").lower()
    if priority != UserPriority.MIN_WATER.value:
        bullets.append(f"Produces ~{round(food_roi)} calories per m² per day")
    if priority != UserPriority.MAX_CALORIES.value:
        bullets.append(f"Water efficiency: ~{resource_roi:.2f} kg per liter")

    return bullets


def crop_flags(crop: Crop, fits: Dict[str, FitScore]) -> List[str]:
    flags: List[str] = []
    if crop.harvest_days_max <= FAST_HARVEST_MAX_DAYS:
        flags.append("Fast harvest")
    if crop.water_need_band == "low":
        flags.append("Low water")
    if crop.salinity_tolerance == "high":
        flags.append("Salinity tolerant")
    if crop.heat_tolerance == "high":
        flags.append("Heat tolerant")
    if fits["harvest"].score >= PERFECT_TIMING_THRESHOLD:
        flags.append("Perfect timing")
    if fits["water"].score >= WATER_EFFICIENT_THRESHOLD:
        flags.append("Water-efficient")
    if crop.typical_yield_kg_per_m2 >= HIGH_YIELD_KG_PER_M2:
        flags.append("High yield")
    return flags


# =============================================================================
# POINT-BAND PROFILES (LISTING, DROP, BUYER)
# =============================================================================

def point_band_rules(rule_inputs: Dict[str, str], fits: Dict[str, FitScore]) -> List[str]:
    """One audit line per factor, showing the awarded points."""
    rules = []
    for name, inputs in rule_inputs.items():
        fit = fits[name]
        points = f" (+{_num(fit.points)} pts)" if fit.points is not None else ""
        rules.append(rule_line(name.upper(), f"{inputs}{points}", fit.score))
    return rules


def point_band_explanation(fits: Dict[str, FitScore], total: int) -> List[str]:
    """
    Rationale in the order the factors were evaluated, top reasons only.
    """
    reasons: List[str] = []
    for fit in fits.values():
        for reason in fit.rationale:
            if reason not in reasons:
                reasons.append(reason)

    if not reasons:
        return [f"No standout factors (score {total}/100)"]
    return reasons[:MAX_REASONS]


def listing_flags(listing: Listing, fits: Dict[str, FitScore]) -> List[str]:
    flags: List[str] = []
    if listing.trust in VERIFIED_TRUST:
        flags.append("Verified")
    if listing.urgency == "today":
        flags.append("Urgent")
    if listing.distance_band == "near":
        flags.append("Nearby")
    if fits["compatibility"].score >= 100:
        flags.append("Crop match")
    return flags


def drop_flags(drop: HarvestDrop, fits: Dict[str, FitScore]) -> List[str]:
    flags: List[str] = []
    if fits["urgency"].score >= 100:
        flags.append("Pickup soon")
    if drop.spoilage_risk == "high":
        flags.append("Spoils fast")
    if drop.pickup_preference == "same_day":
        flags.append("Same-day")
    return flags


def buyer_flags(buyer: Buyer, fits: Dict[str, FitScore]) -> List[str]:
    flags: List[str] = []
    if fits["trust"].score >= 100:
        flags.append("Top trust")
    if buyer.distance_band == "near":
        flags.append("Close by")
    if buyer.capacity_fit == "exact":
        flags.append("Exact capacity")
    return flags


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _num(value) -> str:
    """Render numbers without a trailing .0; None as '?'."""
    if value is None:
        return "?"
    return f"{value:g}"
