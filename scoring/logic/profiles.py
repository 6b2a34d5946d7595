"""
Scoring Profiles

A profile is the configuration of one scoring pipeline: which fit functions
run, how they are weighted, how results are explained, and how the ranked
list is tiered. All profiles share the aggregation, trace and ranking steps
implemented once in ScoringProfile.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .aggregator import aggregate, validate_weights
from .contracts import (
    Buyer,
    BuyerMatchContext,
    Crop,
    CropContext,
    DropContext,
    FitScore,
    HarvestDrop,
    Listing,
    ListingContext,
    RankedResult,
    ReasoningTrace,
    ScoreBreakdown,
)
from .constants import (
    CROP_WEIGHTS,
    CROP_CONSTRAINT_FACTORS,
    LISTING_WEIGHTS,
    DROP_WEIGHTS,
    BUYER_WEIGHTS,
    LISTING_WEIGHT_SUM,
    DROP_WEIGHT_SUM,
    BUYER_WEIGHT_SUM,
    CROP_TOP_K,
    CROP_ALTERNATIVES_M,
    MATCH_TOP_K,
    MATCH_ALTERNATIVES_M,
    ListingStatus,
)
from . import explainer
from . import fit_functions as fits_

logger = logging.getLogger(__name__)


class ScoringProfile:
    """
    Base profile. Subclasses declare the factor weights and implement
    evaluate(); everything else has a sensible default.
    """

    name: str = ""
    weights: Dict[str, float] = {}
    weight_sum: float = 1.0
    constraint_factors: Tuple[str, ...] = ()
    top_k: int = MATCH_TOP_K
    alternatives_m: Optional[int] = MATCH_ALTERNATIVES_M

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        """
        Args:
            weights: Optional override of the profile's weight vector.

        Raises:
            WeightVectorError: if the weights are invalid for this profile
        """
        if weights is not None:
            self.weights = dict(weights)
        validate_weights(self.weights, type(self).weights.keys(), self.weight_sum)
        if not self.constraint_factors:
            self.constraint_factors = tuple(self.weights)

    # -- hooks ---------------------------------------------------------------

    def candidate_id(self, candidate: Any) -> str:
        return candidate.id

    def evaluate(self, candidate: Any, context: Any) -> Dict[str, FitScore]:
        raise NotImplementedError

    def is_eligible(self, candidate: Any, context: Any) -> bool:
        return True

    def ineligible_reason(self, candidate: Any) -> str:
        return "Not eligible"

    def rules(self, candidate: Any, context: Any, fits: Dict[str, FitScore]) -> List[str]:
        return [explainer.rule_line(name.upper(), "", fit.score) for name, fit in fits.items()]

    def explain(
        self, candidate: Any, context: Any, fits: Dict[str, FitScore], total: int
    ) -> List[str]:
        return explainer.point_band_explanation(fits, total)

    def flags(self, candidate: Any, fits: Dict[str, FitScore]) -> List[str]:
        return []

    def details(self, candidate: Any, context: Any) -> Dict[str, Any]:
        return {}

    def summarize(self, context: Any) -> str:
        return ""

    # -- pipeline ------------------------------------------------------------

    def score_candidate(self, candidate: Any, context: Any) -> RankedResult:
        """
        Score one candidate: fits -> breakdown -> trace -> result.
        """
        candidate_id = self.candidate_id(candidate)

        if not self.is_eligible(candidate, context):
            return self._ineligible_result(candidate_id, candidate)

        fits = self.evaluate(candidate, context)
        breakdown = aggregate(fits, self.weights)
        trace = explainer.build_trace(
            breakdown,
            self.rules(candidate, context, fits),
            self.constraint_factors,
        )

        logger.debug("%s scored %s: %s", self.name, candidate_id, breakdown.total)

        return RankedResult(
            candidate_id=candidate_id,
            candidate=candidate,
            total=breakdown.total,
            confidence=explainer.confidence_from_trace(trace),
            flags=self.flags(candidate, fits),
            explanation=self.explain(candidate, context, fits, breakdown.total),
            trace=trace,
            details=self.details(candidate, context),
        )

    def _ineligible_result(self, candidate_id: str, candidate: Any) -> RankedResult:
        reason = self.ineligible_reason(candidate)
        breakdown = ScoreBreakdown(
            factors={name: 0.0 for name in self.weights},
            weights=dict(self.weights),
            total=0,
        )
        trace = ReasoningTrace(
            breakdown=breakdown,
            rules_applied=[f"ELIGIBILITY: {reason} → excluded"],
            constraints_satisfied=0,
            total_constraints=len(self.constraint_factors),
        )
        return RankedResult(
            candidate_id=candidate_id,
            candidate=candidate,
            total=0,
            confidence=0,
            explanation=[reason],
            trace=trace,
            is_eligible=False,
        )


# =============================================================================
# CROP RECOMMENDATION
# =============================================================================

class CropProfile(ScoringProfile):
    """Recommends crops for a plot: harvest, water, salinity, heat, priority."""

    name = "crop_recommendation"
    weights = CROP_WEIGHTS
    constraint_factors = CROP_CONSTRAINT_FACTORS
    top_k = CROP_TOP_K
    alternatives_m = CROP_ALTERNATIVES_M

    def evaluate(self, crop: Crop, context: CropContext) -> Dict[str, FitScore]:
        food_roi, resource_roi = fits_.compute_roi(crop)
        return {
            "harvest": fits_.harvest_fit(crop, context.target_harvest_window_days),
            "water": fits_.water_fit(context.water_access, crop.water_need_band),
            "salinity": fits_.salinity_fit(context.salinity_risk, crop.salinity_tolerance),
            "heat": fits_.heat_fit(
                crop.heat_tolerance, crop.preferred_planting_months, context.current_month
            ),
            "priority": fits_.priority_bonus(food_roi, resource_roi, context.user_priority),
        }

    def rules(self, crop, context, fits):
        return explainer.crop_rules(crop, context, fits)

    def explain(self, crop, context, fits, total):
        food_roi, resource_roi = fits_.compute_roi(crop)
        return explainer.crop_explanation(crop, context, fits, food_roi, resource_roi)

    def flags(self, crop, fits):
        return explainer.crop_flags(crop, fits)

    def details(self, crop, context):
        food_roi, resource_roi = fits_.compute_roi(crop)
        return {
            "roi": {
                "food_roi": round(food_roi),
                "resource_roi": round(resource_roi, 2),
            }
        }

    def summarize(self, context: CropContext) -> str:
        area = f"{context.plot_area_m2:g}m² plot" if context.plot_area_m2 is not None else "unsized plot"
        target = (
            f"{context.target_harvest_window_days:g}d harvest"
            if context.target_harvest_window_days is not None else "any harvest"
        )
        return (
            f"{area}, {context.water_access} water, {context.salinity_risk} salinity, "
            f"{target}, priority: {context.user_priority}"
        )


# =============================================================================
# EXCHANGE LISTING MATCH
# =============================================================================

class ListingProfile(ScoringProfile):
    """Matches exchange listings to what the user is growing."""

    name = "listing_match"
    weights = LISTING_WEIGHTS
    weight_sum = LISTING_WEIGHT_SUM
    constraint_factors = ("category", "urgency", "trust", "distance", "type")

    def evaluate(self, listing: Listing, context: ListingContext) -> Dict[str, FitScore]:
        return {
            "category": fits_.listing_category_fit(listing, context.selected_crop),
            "urgency": fits_.listing_urgency_fit(listing.urgency),
            "trust": fits_.listing_trust_fit(listing.trust),
            "distance": fits_.listing_distance_fit(listing.distance_band),
            "type": fits_.listing_type_fit(listing.type),
            "compatibility": fits_.listing_compatibility_fit(listing, context.selected_crop),
        }

    def is_eligible(self, listing: Listing, context: ListingContext) -> bool:
        return (listing.status or "").lower() == ListingStatus.ACTIVE.value

    def ineligible_reason(self, listing: Listing) -> str:
        return "Listing not active"

    def rules(self, listing, context, fits):
        return explainer.point_band_rules(
            {
                "category": f"{listing.mode}/{listing.category} for crop {context.selected_crop or '-'}",
                "urgency": f"{listing.urgency} urgency",
                "trust": f"{listing.trust} trust",
                "distance": f"{listing.distance_band} distance",
                "type": f"{listing.type} listing",
                "compatibility": f"crop plan {context.selected_crop or '-'}",
            },
            fits,
        )

    def flags(self, listing, fits):
        return explainer.listing_flags(listing, fits)

    def summarize(self, context: ListingContext) -> str:
        return f"crop: {context.selected_crop or 'none'}, location: {context.location_label or 'unknown'}"


# =============================================================================
# HARVEST DROP PRIORITY
# =============================================================================

class DropPriorityProfile(ScoringProfile):
    """Prioritizes harvest drops for pickup coordination."""

    name = "drop_priority"
    weights = DROP_WEIGHTS
    weight_sum = DROP_WEIGHT_SUM
    constraint_factors = ("urgency", "spoilage", "preference", "status")

    def evaluate(self, drop: HarvestDrop, context: DropContext) -> Dict[str, FitScore]:
        return {
            "baseline": fits_.drop_baseline_fit(),
            "urgency": fits_.drop_urgency_fit(drop.window_start, context.reference_time),
            "spoilage": fits_.drop_spoilage_fit(drop.spoilage_risk),
            "preference": fits_.drop_preference_fit(drop.pickup_preference),
            "status": fits_.drop_status_fit(drop.status),
        }

    def rules(self, drop, context, fits):
        if context.reference_time is not None:
            hours = f"{fits_.hours_until(drop.window_start, context.reference_time):.1f}h until window"
        else:
            hours = "no reference time"
        return explainer.point_band_rules(
            {
                "baseline": "base priority",
                "urgency": hours,
                "spoilage": f"{drop.spoilage_risk} spoilage risk",
                "preference": f"{drop.pickup_preference} pickup",
                "status": f"{drop.status} status",
            },
            fits,
        )

    def flags(self, drop, fits):
        return explainer.drop_flags(drop, fits)

    def summarize(self, context: DropContext) -> str:
        if context.reference_time is None:
            return "no reference time"
        return f"as of {context.reference_time.isoformat()}"


# =============================================================================
# BUYER MATCH
# =============================================================================

class BuyerMatchProfile(ScoringProfile):
    """Ranks buyers and aggregators for a harvest drop."""

    name = "buyer_match"
    weights = BUYER_WEIGHTS
    weight_sum = BUYER_WEIGHT_SUM

    def evaluate(self, buyer: Buyer, context: BuyerMatchContext) -> Dict[str, FitScore]:
        return {
            "trust": fits_.buyer_trust_fit(buyer.trust_score),
            "distance": fits_.buyer_distance_fit(buyer.distance_band),
            "capacity": fits_.buyer_capacity_fit(buyer.capacity_fit),
            "type": fits_.buyer_type_fit(buyer.type),
        }

    def rules(self, buyer, context, fits):
        return explainer.point_band_rules(
            {
                "trust": f"trust score {buyer.trust_score:g}",
                "distance": f"{buyer.distance_band} distance",
                "capacity": f"{buyer.capacity_fit} capacity",
                "type": f"{buyer.type} buyer",
            },
            fits,
        )

    def flags(self, buyer, fits):
        return explainer.buyer_flags(buyer, fits)

    def details(self, buyer: Buyer, context: BuyerMatchContext) -> Dict[str, Any]:
        if context.drop is None:
            return {}
        # Buyers are assumed available for the whole drop window
        return {
            "available_window": {
                "start": context.drop.window_start.isoformat(),
                "end": context.drop.window_end.isoformat(),
            }
        }

    def summarize(self, context: BuyerMatchContext) -> str:
        if context.drop is None:
            return "no drop"
        return f"drop {context.drop.id} ({context.drop.crop_common_name or context.drop.crop_type})"
