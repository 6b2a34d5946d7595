"""
Scoring Logic Module

Provides the deterministic, explainable scoring engines for crop
recommendation, exchange listing matching, harvest drop prioritization and
buyer matching.
"""

from .contracts import (
    CropContext,
    ListingContext,
    DropContext,
    BuyerMatchContext,
    Crop,
    Listing,
    HarvestDrop,
    Buyer,
    FitScore,
    ScoreBreakdown,
    ReasoningTrace,
    RankedResult,
    TieredResult,
    PlotConditions,
    PlotAssessment,
)
from .aggregator import WeightVectorError
from .profiles import (
    ScoringProfile,
    CropProfile,
    ListingProfile,
    DropPriorityProfile,
    BuyerMatchProfile,
)
from .engine import (
    ScoringEngine,
    recommend_crops,
    match_listings,
    prioritize_drops,
    match_buyers,
)
from .browse import filter_listings, sort_listings, filter_drops, sort_drops
from .catalog import CROPS, DEMO_BUYERS

__all__ = [
    # Engine
    "ScoringEngine",
    "recommend_crops",
    "match_listings",
    "prioritize_drops",
    "match_buyers",

    # Browsing
    "filter_listings",
    "sort_listings",
    "filter_drops",
    "sort_drops",

    # Profiles
    "ScoringProfile",
    "CropProfile",
    "ListingProfile",
    "DropPriorityProfile",
    "BuyerMatchProfile",

    # Contracts
    "CropContext",
    "ListingContext",
    "DropContext",
    "BuyerMatchContext",
    "Crop",
    "Listing",
    "HarvestDrop",
    "Buyer",
    "FitScore",
    "ScoreBreakdown",
    "ReasoningTrace",
    "RankedResult",
    "TieredResult",
    "PlotConditions",
    "PlotAssessment",

    # Errors
    "WeightVectorError",

    # Reference data
    "CROPS",
    "DEMO_BUYERS",
]
