"""
Data Contracts for the Scoring Engines

Defines Pydantic models for the caller-supplied contexts (input), the
reference-data candidates, and the ranked results (output).
These contracts are the API boundary for the scoring engines.

Categorical attributes are plain strings so that an unexpected value is
accepted and scored with a conservative fallback instead of being rejected.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# =============================================================================
# INPUT CONTRACTS (CONTEXTS)
# =============================================================================

class CropContext(BaseModel):
    """
    Plot constraints for crop recommendation.
    """
    plot_area_m2: Optional[float] = None
    water_access: str = "unknown"  # none/limited/reliable
    salinity_risk: str = "unknown"  # none/some/strong
    target_harvest_window_days: Optional[float] = None
    shade_option: str = "none"  # none/partial/roof
    user_priority: str = "balanced"  # max_calories/min_water/balanced
    current_month: Optional[int] = None  # 1-12, for heat tolerance

    class Config:
        frozen = True
        use_enum_values = True


class ListingContext(BaseModel):
    """
    What the user is working on when browsing the exchange hub.
    """
    selected_crop: Optional[str] = None
    plot_size_m2: Optional[float] = None
    water_access: Optional[str] = None
    salinity_risk: Optional[str] = None
    location_label: Optional[str] = None
    distance_band: Optional[str] = None  # near/medium/far

    class Config:
        frozen = True


class DropContext(BaseModel):
    """
    Reference time against which harvest drop urgency is measured.
    """
    reference_time: Optional[datetime] = None

    class Config:
        frozen = True


class BuyerMatchContext(BaseModel):
    """
    The harvest drop buyers are being matched against.
    """
    drop: Optional["HarvestDrop"] = None

    class Config:
        frozen = True


# =============================================================================
# CANDIDATE CONTRACTS (REFERENCE DATA)
# =============================================================================

class Crop(BaseModel):
    """Crop reference record."""
    id: str
    common_name: str
    scientific_name: str = ""
    preferred_planting_months: List[int] = Field(default_factory=list)
    harvest_days_min: float
    harvest_days_max: float
    water_need_band: str = "unknown"  # low/medium/high
    salinity_tolerance: str = "unknown"  # low/medium/high
    heat_tolerance: str = "unknown"  # low/medium/high
    calories_per_100g: float = 0.0
    typical_yield_kg_per_m2: float = 0.0
    water_proxy_liters_per_m2_per_cycle: float = 0.0
    practices: List[str] = Field(default_factory=list)
    local_description: str = ""

    class Config:
        frozen = True


class Listing(BaseModel):
    """Exchange hub listing (inputs, labor, hubs)."""
    id: str
    type: str = "offer"  # offer/request
    mode: str = "inputs"  # inputs/labor/hubs
    category: str = ""  # seeds/tools/fertilizer/irrigation, day_labor/..., ngo_hub/...
    title: str = ""
    quantity: float = 0.0
    unit: str = ""
    location_label: str = ""
    distance_band: str = "unknown"  # near/medium/far
    urgency: str = "any"  # today/week/any
    trust: str = "peer"  # peer/verified_hub/ngo
    status: str = "active"  # active/reserved/fulfilled
    notes: Optional[str] = None
    hub_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        frozen = True


class HarvestDrop(BaseModel):
    """A published harvest window awaiting pickup."""
    id: str
    crop_type: str = ""
    crop_common_name: str = ""
    window_start: datetime
    window_end: datetime
    quantity_min: float = 0.0
    quantity_max: float = 0.0
    unit: str = "kg"
    location_label: str = ""
    pickup_preference: str = "any"  # same_day/24h/any
    spoilage_risk: str = "unknown"  # low/medium/high
    status: str = "active"  # active/scheduled/completed
    notes: Optional[str] = None

    class Config:
        frozen = True


class Buyer(BaseModel):
    """Buyer or aggregator able to collect a drop."""
    id: str
    name: str
    type: str = "buyer"  # verified_hub/ngo/buyer/aggregator
    distance_band: str = "unknown"  # near/medium/far
    capacity_fit: str = "unknown"  # exact/can_handle/limited
    trust_score: float = 0.0  # 0-100
    contact_method: Optional[str] = None

    class Config:
        frozen = True


BuyerMatchContext.model_rebuild()


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class FitScore(BaseModel):
    """Result of one fit function for one candidate."""
    score: float = Field(ge=0.0, le=100.0)
    rationale: List[str] = Field(default_factory=list)
    points: Optional[float] = None  # raw points, for point-band factors


class ScoreBreakdown(BaseModel):
    """Raw factor scores, the weights used, and the weighted total."""
    factors: Dict[str, float] = Field(default_factory=dict)
    weights: Dict[str, float] = Field(default_factory=dict)
    total: int = Field(default=0, ge=0, le=100)


class ReasoningTrace(BaseModel):
    """Audit record of how a candidate's score was produced."""
    breakdown: ScoreBreakdown
    rules_applied: List[str] = Field(default_factory=list)
    constraints_satisfied: int = 0
    total_constraints: int = 0


class RankedResult(BaseModel):
    """
    Single scored candidate with score, badges and rationale.
    """
    candidate_id: str
    candidate: Any
    total: int = Field(ge=0, le=100)
    confidence: int = Field(default=0, ge=0, le=100)
    flags: List[str] = Field(default_factory=list)
    explanation: List[str] = Field(default_factory=list)
    trace: ReasoningTrace
    is_eligible: bool = True

    # Profile specific extras (e.g. crop ROI)
    details: Dict[str, Any] = Field(default_factory=dict)

    # Ranking metadata
    rank: int = 0


class RunMetadata(BaseModel):
    """Summary of a scoring run."""
    profile: str
    total_evaluated: int = 0
    total_ranked: int = 0
    input_summary: str = ""
    engine_version: str = "1.0.0"


class TieredResult(BaseModel):
    """
    Output contract for every profile: the ranked list split into tiers.
    """
    top: List[RankedResult] = Field(default_factory=list)
    alternatives: List[RankedResult] = Field(default_factory=list)
    metadata: RunMetadata
    warnings: List[str] = Field(default_factory=list)

    def ranked(self) -> List[RankedResult]:
        """Top tier followed by alternatives, in rank order."""
        return self.top + self.alternatives

    @property
    def best(self) -> Optional[RankedResult]:
        return self.top[0] if self.top else None


# =============================================================================
# PLOT ASSESSMENT CONTRACTS
# =============================================================================

class PlotConditions(BaseModel):
    """Field observations for a logged plot."""
    area_m2: Optional[float] = None
    salinity: str = "unknown"  # low/medium/high/unknown
    contamination: str = "unknown"  # none/suspected/confirmed/unknown
    debris: str = "unknown"  # none/light/heavy/unknown
    water_access: str = "unknown"  # none/limited/reliable/unknown

    class Config:
        frozen = True


class PlotAssessment(BaseModel):
    """Farmability verdict for a plot."""
    status: str  # Farmable/Restorable/Damaged
    score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
