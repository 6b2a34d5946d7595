"""
Scoring API Routes

Exposes the scoring engines via REST API.
One endpoint per profile under /scoring.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, List, Dict, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from db import get_db
from .logic.contracts import (
    Buyer,
    Crop,
    CropContext,
    DropContext,
    HarvestDrop,
    Listing,
    ListingContext,
    PlotConditions,
    RankedResult,
    TieredResult,
)
from .logic.engine import (
    ENGINE_VERSION,
    match_buyers,
    match_listings,
    prioritize_drops,
    recommend_crops,
)
from .logic.adapter import fetch_drops, fetch_listings
from .logic.advisors import assess_plot, recommend_bundle_template
from .logic.browse import filter_drops, filter_listings, sort_drops, sort_listings
from .logic.profiles import DropPriorityProfile, ListingProfile
from .logic.runner import DropNotFound, run_buyer_match, run_drop_priority, run_listing_match

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scoring", tags=["scoring"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CropRequest(BaseModel):
    """Request body for crop recommendations."""
    context: Dict[str, Any] = Field(..., description="Plot constraints and priority")
    crops: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Crops to score; defaults to the reference catalog"
    )


class ListingRequest(BaseModel):
    """Request body for exchange listing matches."""
    context: Dict[str, Any] = Field(default_factory=dict)
    listings: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Listings to score; defaults to stored listings"
    )
    exclude_listing_id: Optional[str] = None
    mode: Optional[str] = Field(default=None, description="inputs/labor/hubs")


class DropRequest(BaseModel):
    """Request body for harvest drop prioritization."""
    context: Dict[str, Any] = Field(default_factory=dict)
    drops: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Drops to score; defaults to stored drops"
    )


class BuyerRequest(BaseModel):
    """Request body for buyer matching against an inline drop."""
    drop: Dict[str, Any]
    buyers: Optional[List[Dict[str, Any]]] = None


class ListingBrowseRequest(BaseModel):
    """Request body for the filtered, sorted exchange view."""
    context: Dict[str, Any] = Field(default_factory=dict)
    listings: Optional[List[Dict[str, Any]]] = None
    search: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    near_only: bool = False
    verified_only: bool = False
    urgency: Optional[str] = None
    mode: Optional[str] = None
    sort_by: str = "ai_match"


class DropBrowseRequest(BaseModel):
    """Request body for the filtered, sorted harvest drop view."""
    context: Dict[str, Any] = Field(default_factory=dict)
    drops: Optional[List[Dict[str, Any]]] = None
    statuses: List[str] = Field(default_factory=list)
    pickup_preferences: List[str] = Field(default_factory=list)
    quantity_bands: List[str] = Field(default_factory=list)
    search: Optional[str] = None
    sort_by: str = "ai_priority"


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/crops", summary="Recommend crops for a plot")
def score_crops(request: CropRequest):
    """
    Rank crops for the plot's water, salinity, harvest target and priority.

    **Response:** top 3 crops, up to 5 alternatives, each with score,
    confidence, badges, explanation bullets and reasoning trace.
    """
    context_data = dict(request.context)
    context_data.setdefault("current_month", date.today().month)
    context = _parse(CropContext, context_data, "crop context")
    crops = _parse_list(Crop, request.crops, "crop")

    return _serialize_tiers(recommend_crops(context, crops))


@router.post("/listings", summary="Match exchange listings")
def score_listings(request: ListingRequest, db: Session = Depends(get_db)):
    """
    Rank active exchange listings for the user's crop plan.
    Uses inline listings when given, stored listings otherwise.
    """
    context = _parse(ListingContext, request.context, "listing context")

    if request.listings is not None:
        listings = _parse_list(Listing, request.listings, "listing")
        if request.mode:
            listings = [listing for listing in listings if listing.mode == request.mode]
        result = match_listings(context, listings, exclude_listing_id=request.exclude_listing_id)
        return _serialize_tiers(result)

    result = run_listing_match(
        db, context, exclude_listing_id=request.exclude_listing_id, mode=request.mode
    )
    return _serialize_tiers(result)


@router.post("/drops", summary="Prioritize harvest drops")
def score_drops(request: DropRequest, db: Session = Depends(get_db)):
    """
    Rank harvest drops by pickup urgency, spoilage and preference.
    Uses inline drops when given, stored drops otherwise.
    """
    context_data = dict(request.context)
    if context_data.get("reference_time") is None:
        context_data["reference_time"] = datetime.now(timezone.utc)
    context = _parse(DropContext, context_data, "drop context")

    if request.drops is not None:
        drops = _parse_list(HarvestDrop, request.drops, "drop")
        return _serialize_tiers(prioritize_drops(context, drops))

    return _serialize_tiers(run_drop_priority(db, context))


@router.post("/buyers", summary="Match buyers for a drop")
def score_buyers(request: BuyerRequest):
    """Rank buyers for an inline drop; demo buyers when none are given."""
    drop = _parse(HarvestDrop, request.drop, "drop")
    buyers = _parse_list(Buyer, request.buyers, "buyer")
    return _serialize_tiers(match_buyers(drop, buyers))


@router.post("/drops/{drop_id}/buyers", summary="Match buyers for a stored drop")
def score_buyers_for_drop(drop_id: str, db: Session = Depends(get_db)):
    try:
        result = run_buyer_match(db, drop_id)
    except DropNotFound:
        raise HTTPException(status_code=404, detail=f"Drop {drop_id} not found")
    return _serialize_tiers(result)


@router.post("/listings/browse", summary="Filter and sort exchange listings")
def browse_listings(request: ListingBrowseRequest, db: Session = Depends(get_db)):
    """
    Exchange list view: filters, then sorts by ai_match, newest, closest or
    quantity. Every listing carries its match score.
    """
    context = _parse(ListingContext, request.context, "listing context")
    if request.listings is not None:
        listings = _parse_list(Listing, request.listings, "listing")
    else:
        listings = fetch_listings(db)

    listings = filter_listings(
        listings,
        search=request.search,
        listing_type=request.type,
        category=request.category,
        near_only=request.near_only,
        verified_only=request.verified_only,
        urgency=request.urgency,
        mode=request.mode,
    )
    listings = sort_listings(listings, request.sort_by, context)

    profile = ListingProfile()
    return {
        "sort_by": request.sort_by,
        "count": len(listings),
        "items": [
            _serialize_browse_item(listing, profile.score_candidate(listing, context).total)
            for listing in listings
        ],
    }


@router.post("/drops/browse", summary="Filter and sort harvest drops")
def browse_drops(request: DropBrowseRequest, db: Session = Depends(get_db)):
    """
    Harvest drop list view: filters, then sorts by ai_priority, soonest or
    largest. Every drop carries its priority score.
    """
    context_data = dict(request.context)
    if context_data.get("reference_time") is None:
        context_data["reference_time"] = datetime.now(timezone.utc)
    context = _parse(DropContext, context_data, "drop context")
    if request.drops is not None:
        drops = _parse_list(HarvestDrop, request.drops, "drop")
    else:
        drops = fetch_drops(db)

    drops = filter_drops(
        drops,
        statuses=request.statuses,
        pickup_preferences=request.pickup_preferences,
        quantity_bands=request.quantity_bands,
        search=request.search,
    )
    drops = sort_drops(drops, request.sort_by, context.reference_time)

    profile = DropPriorityProfile()
    return {
        "sort_by": request.sort_by,
        "count": len(drops),
        "items": [
            _serialize_browse_item(drop, profile.score_candidate(drop, context).total)
            for drop in drops
        ],
    }


@router.post("/plots/assessment", summary="Assess plot farmability")
def plot_assessment(plot: Dict[str, Any]):
    conditions = _parse(PlotConditions, plot, "plot")
    assessment = assess_plot(conditions)
    bundle = recommend_bundle_template(conditions.area_m2)
    return {
        "assessment": assessment.model_dump(),
        "suggested_bundle": bundle.model_dump(),
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Scoring engine health check")
def health_check():
    """Check if scoring engine is operational."""
    return {"status": "ok", "engine": "scoring", "version": ENGINE_VERSION}


# =============================================================================
# HELPERS
# =============================================================================

def _parse(model, data: Dict[str, Any], label: str):
    try:
        return model(**data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: {e}")


def _parse_list(model, items: Optional[List[Dict[str, Any]]], label: str):
    if items is None:
        return None
    return [_parse(model, item, label) for item in items]


def _serialize_tiers(result: TieredResult) -> Dict[str, Any]:
    """Convert TieredResult to JSON-serializable dict."""
    return {
        "summary": result.metadata.model_dump(),
        "top": [_serialize_result(r) for r in result.top],
        "alternatives": [_serialize_result(r) for r in result.alternatives],
        "warnings": result.warnings,
    }


def _serialize_result(result: RankedResult) -> Dict[str, Any]:
    """Convert RankedResult to JSON-serializable dict."""
    breakdown = result.trace.breakdown
    return {
        "rank": result.rank,
        "id": result.candidate_id,
        "candidate": result.candidate.model_dump(mode="json"),
        "score": result.total,
        "confidence": result.confidence,
        "flags": result.flags,
        "explanation": result.explanation,
        "details": result.details,
        "trace": {
            "factors": {name: round(score, 2) for name, score in breakdown.factors.items()},
            "weights": {name: round(weight, 4) for name, weight in breakdown.weights.items()},
            "total": breakdown.total,
            "rules_applied": result.trace.rules_applied,
            "constraints_satisfied": result.trace.constraints_satisfied,
            "total_constraints": result.trace.total_constraints,
        },
    }


def _serialize_browse_item(candidate, score: int) -> Dict[str, Any]:
    return {"id": candidate.id, "score": score, "candidate": candidate.model_dump(mode="json")}
