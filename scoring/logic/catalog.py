"""
Reference Catalog

Static, read-only reference data: the crop list tuned for Mediterranean
conditions with damaged soil, the demo buyer pool used when no buyer
catalog is injected, and aid bundle templates.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .contracts import Buyer, Crop


class BundleItem(BaseModel):
    name: str
    quantity: float
    unit: str
    why_included: str = ""


class BundleTemplate(BaseModel):
    """Aid bundle sized for a plot band."""
    id: str
    name: str
    description: str
    target_plot_size: str  # small/medium/large
    items: List[BundleItem] = Field(default_factory=list)
    estimated_cost: float = 0.0


# =============================================================================
# CROPS
# =============================================================================

CROPS: List[Crop] = [
    Crop(
        id="radish",
        common_name="Radish",
        scientific_name="Raphanus sativus",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=25,
        harvest_days_max=35,
        water_need_band="low",
        salinity_tolerance="medium",
        heat_tolerance="medium",
        calories_per_100g=16,
        typical_yield_kg_per_m2=2.5,
        water_proxy_liters_per_m2_per_cycle=35,
        practices=[
            "Plant in well-drained soil to prevent root rot",
            "Mulch to retain moisture and keep roots cool",
            "Harvest promptly when mature to prevent splitting",
        ],
        local_description="Fast-growing root vegetable ideal for quick harvests in limited water conditions.",
    ),
    Crop(
        id="lettuce",
        common_name="Lettuce",
        scientific_name="Lactuca sativa",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=45,
        harvest_days_max=60,
        water_need_band="medium",
        salinity_tolerance="low",
        heat_tolerance="low",
        calories_per_100g=15,
        typical_yield_kg_per_m2=3.0,
        water_proxy_liters_per_m2_per_cycle=80,
        practices=[
            "Use shade cloth (30-50%) during peak summer heat",
            "Harvest outer leaves first for continuous production",
        ],
        local_description="Leafy green best grown in cooler months with shade protection.",
    ),
    Crop(
        id="spinach",
        common_name="Spinach",
        scientific_name="Spinacia oleracea",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=40,
        harvest_days_max=50,
        water_need_band="medium",
        salinity_tolerance="medium",
        heat_tolerance="low",
        calories_per_100g=23,
        typical_yield_kg_per_m2=2.8,
        water_proxy_liters_per_m2_per_cycle=70,
        practices=[
            "Plant in cool season or provide afternoon shade",
            "Ensure consistent moisture to prevent early bolting",
        ],
        local_description="Nutrient-dense leafy green with moderate salinity tolerance.",
    ),
    Crop(
        id="tomato-cherry",
        common_name="Cherry Tomato",
        scientific_name="Solanum lycopersicum var. cerasiforme",
        preferred_planting_months=[3, 4, 5],
        harvest_days_min=60,
        harvest_days_max=75,
        water_need_band="medium",
        salinity_tolerance="medium",
        heat_tolerance="high",
        calories_per_100g=18,
        typical_yield_kg_per_m2=4.5,
        water_proxy_liters_per_m2_per_cycle=120,
        practices=[
            "Mulch heavily to conserve water and regulate soil temperature",
            "Use drip irrigation to deliver water directly to roots",
        ],
        local_description="Heat-tolerant, high-yielding tomato well-suited for warm summers.",
    ),
    Crop(
        id="swiss-chard",
        common_name="Swiss Chard",
        scientific_name="Beta vulgaris subsp. vulgaris",
        preferred_planting_months=[3, 4, 5, 9, 10],
        harvest_days_min=50,
        harvest_days_max=60,
        water_need_band="medium",
        salinity_tolerance="high",
        heat_tolerance="high",
        calories_per_100g=19,
        typical_yield_kg_per_m2=3.5,
        water_proxy_liters_per_m2_per_cycle=75,
        practices=[
            "Excellent choice for saline soils",
            "If salinity is high, flush soil with fresh water occasionally",
        ],
        local_description="Highly salt-tolerant leafy green ideal for challenging soil conditions.",
    ),
    Crop(
        id="cucumber",
        common_name="Cucumber",
        scientific_name="Cucumis sativus",
        preferred_planting_months=[4, 5, 6],
        harvest_days_min=50,
        harvest_days_max=65,
        water_need_band="high",
        salinity_tolerance="low",
        heat_tolerance="high",
        calories_per_100g=16,
        typical_yield_kg_per_m2=5.0,
        water_proxy_liters_per_m2_per_cycle=150,
        practices=[
            "Requires consistent moisture - ideal for plots with reliable water",
            "Train vines vertically to save space and improve air flow",
        ],
        local_description="High-yielding crop requiring reliable water access.",
    ),
    Crop(
        id="arugula",
        common_name="Arugula (Rocket)",
        scientific_name="Eruca vesicaria",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=30,
        harvest_days_max=40,
        water_need_band="low",
        salinity_tolerance="medium",
        heat_tolerance="medium",
        calories_per_100g=25,
        typical_yield_kg_per_m2=2.0,
        water_proxy_liters_per_m2_per_cycle=40,
        practices=[
            "Plant in succession every 2 weeks for continuous supply",
            "Grows well with minimal water once established",
        ],
        local_description="Fast-growing, low-water salad green perfect for succession planting.",
    ),
    Crop(
        id="turnip",
        common_name="Turnip",
        scientific_name="Brassica rapa",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=45,
        harvest_days_max=60,
        water_need_band="low",
        salinity_tolerance="medium",
        heat_tolerance="medium",
        calories_per_100g=28,
        typical_yield_kg_per_m2=3.0,
        water_proxy_liters_per_m2_per_cycle=50,
        practices=[
            "Dual-purpose crop: harvest greens early, roots later",
            "Mulch to prevent soil crusting and aid germination",
        ],
        local_description="Versatile root crop with edible greens, suitable for low-water conditions.",
    ),
    Crop(
        id="zucchini",
        common_name="Zucchini",
        scientific_name="Cucurbita pepo",
        preferred_planting_months=[4, 5, 6],
        harvest_days_min=45,
        harvest_days_max=55,
        water_need_band="medium",
        salinity_tolerance="medium",
        heat_tolerance="high",
        calories_per_100g=17,
        typical_yield_kg_per_m2=6.0,
        water_proxy_liters_per_m2_per_cycle=100,
        practices=[
            "Harvest young fruits frequently to encourage continued production",
            "Use drip irrigation at base of plants",
        ],
        local_description="Highly productive summer squash with excellent heat tolerance.",
    ),
    Crop(
        id="green-bean",
        common_name="Green Bean (Bush)",
        scientific_name="Phaseolus vulgaris",
        preferred_planting_months=[3, 4, 5, 9],
        harvest_days_min=50,
        harvest_days_max=60,
        water_need_band="medium",
        salinity_tolerance="low",
        heat_tolerance="medium",
        calories_per_100g=31,
        typical_yield_kg_per_m2=2.5,
        water_proxy_liters_per_m2_per_cycle=70,
        practices=[
            "Nitrogen-fixing legume improves soil for future crops",
            "Pick regularly to encourage continued pod production",
        ],
        local_description="Productive legume that enriches soil while providing nutritious pods.",
    ),
    Crop(
        id="carrot",
        common_name="Carrot",
        scientific_name="Daucus carota",
        preferred_planting_months=[2, 3, 4, 9, 10],
        harvest_days_min=60,
        harvest_days_max=80,
        water_need_band="medium",
        salinity_tolerance="low",
        heat_tolerance="medium",
        calories_per_100g=41,
        typical_yield_kg_per_m2=3.5,
        water_proxy_liters_per_m2_per_cycle=80,
        practices=[
            "Requires loose, well-drained soil for straight root development",
            "Keep soil consistently moist during germination (10-14 days)",
        ],
        local_description="Nutritious root crop requiring consistent moisture and loose soil.",
    ),
    Crop(
        id="kale",
        common_name="Kale",
        scientific_name="Brassica oleracea var. sabellica",
        preferred_planting_months=[2, 3, 4, 9, 10, 11],
        harvest_days_min=50,
        harvest_days_max=70,
        water_need_band="medium",
        salinity_tolerance="medium",
        heat_tolerance="medium",
        calories_per_100g=49,
        typical_yield_kg_per_m2=3.0,
        water_proxy_liters_per_m2_per_cycle=75,
        practices=[
            "Harvest outer leaves continuously for extended production",
            "Tolerates light frost and cooler temperatures",
        ],
        local_description="Nutrient-dense leafy green with an extended harvest period.",
    ),
]


def get_crop_by_id(crop_id: str, crops: Optional[List[Crop]] = None) -> Optional[Crop]:
    for crop in crops if crops is not None else CROPS:
        if crop.id == crop_id:
            return crop
    return None


def get_crops_by_ids(crop_ids: List[str], crops: Optional[List[Crop]] = None) -> List[Crop]:
    found = [get_crop_by_id(crop_id, crops) for crop_id in crop_ids]
    return [crop for crop in found if crop is not None]


# =============================================================================
# BUYERS
# =============================================================================

DEMO_BUYERS: List[Buyer] = [
    Buyer(
        id="buyer_1",
        name="Fresh Gaza Cooperative",
        type="aggregator",
        distance_band="near",
        capacity_fit="can_handle",
        trust_score=95,
        contact_method="Local coordinator",
    ),
    Buyer(
        id="buyer_2",
        name="Relief Network Hub #3",
        type="ngo",
        distance_band="near",
        capacity_fit="exact",
        trust_score=98,
        contact_method="Hub pickup service",
    ),
    Buyer(
        id="buyer_3",
        name="Community Market Pool",
        type="verified_hub",
        distance_band="medium",
        capacity_fit="can_handle",
        trust_score=92,
        contact_method="Pooled transport",
    ),
    Buyer(
        id="buyer_4",
        name="Northern District Buyer",
        type="buyer",
        distance_band="far",
        capacity_fit="limited",
        trust_score=85,
        contact_method="Direct contact",
    ),
    Buyer(
        id="buyer_5",
        name="Agricultural Solidarity Coop",
        type="aggregator",
        distance_band="medium",
        capacity_fit="can_handle",
        trust_score=90,
        contact_method="Coop coordinator",
    ),
]


# =============================================================================
# BUNDLE TEMPLATES
# =============================================================================

BUNDLE_TEMPLATES: Dict[str, BundleTemplate] = {
    "small": BundleTemplate(
        id="tpl_1",
        name="Small Plot Starter",
        description="Essential inputs for 25-50 m² plot",
        target_plot_size="small",
        items=[
            BundleItem(name="Lettuce Seeds (Fast Harvest)", quantity=50, unit="g",
                       why_included="Quick harvest, low water needs"),
            BundleItem(name="Radish Seeds (Fast Harvest)", quantity=30, unit="g",
                       why_included="25-day harvest cycle, salinity tolerant"),
            BundleItem(name="Compost (Soil Amendment)", quantity=10, unit="kg",
                       why_included="Improves damaged soil structure"),
            BundleItem(name="Basic Hand Tools Kit", quantity=1, unit="set",
                       why_included="Essential for plot preparation"),
            BundleItem(name="Drip Irrigation Basic", quantity=20, unit="m",
                       why_included="Maximizes water efficiency"),
        ],
        estimated_cost=120,
    ),
    "medium": BundleTemplate(
        id="tpl_2",
        name="Medium Plot Package",
        description="Comprehensive bundle for 50-100 m²",
        target_plot_size="medium",
        items=[
            BundleItem(name="Mixed Salad Seeds", quantity=100, unit="g",
                       why_included="Diverse harvest, 30-40 days"),
            BundleItem(name="Cherry Tomato Seeds", quantity=20, unit="g",
                       why_included="High value crop"),
            BundleItem(name="Swiss Chard Seeds", quantity=40, unit="g",
                       why_included="Heat tolerant, continuous harvest"),
            BundleItem(name="Organic Compost", quantity=25, unit="kg",
                       why_included="Restores soil health"),
            BundleItem(name="Drip Tape System", quantity=50, unit="m",
                       why_included="Water-efficient irrigation"),
            BundleItem(name="Tool Set + Storage", quantity=1, unit="kit",
                       why_included="Complete cultivation tools"),
        ],
        estimated_cost=280,
    ),
    "large": BundleTemplate(
        id="tpl_3",
        name="Large Plot Bundle",
        description="Full support for 100+ m² operations",
        target_plot_size="large",
        items=[
            BundleItem(name="Fast-Harvest Seed Mix", quantity=200, unit="g",
                       why_included="Multiple quick cycles"),
            BundleItem(name="Root Vegetable Mix", quantity=150, unit="g",
                       why_included="Storage-friendly crops"),
            BundleItem(name="Leafy Greens Variety", quantity=120, unit="g",
                       why_included="Continuous production"),
            BundleItem(name="Soil Amendment Package", quantity=50, unit="kg",
                       why_included="Large area restoration"),
            BundleItem(name="Complete Drip System", quantity=100, unit="m",
                       why_included="Full plot coverage"),
            BundleItem(name="Professional Tool Kit", quantity=1, unit="set",
                       why_included="Heavy-duty equipment"),
            BundleItem(name="Labor Support Credit", quantity=5, unit="days",
                       why_included="Assists with setup & harvest"),
        ],
        estimated_cost=550,
    ),
}
