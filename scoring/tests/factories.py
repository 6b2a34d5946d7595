"""
Candidate builders shared by the test modules.
"""

from datetime import datetime, timedelta, timezone

from scoring.logic.contracts import Buyer, Crop, HarvestDrop, Listing

REFERENCE_TIME = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def make_crop(crop_id="test-crop", **overrides):
    data = dict(
        id=crop_id,
        common_name=crop_id.title(),
        preferred_planting_months=[3, 4],
        harvest_days_min=40,
        harvest_days_max=50,
        water_need_band="medium",
        salinity_tolerance="medium",
        heat_tolerance="medium",
        calories_per_100g=20,
        typical_yield_kg_per_m2=3.0,
        water_proxy_liters_per_m2_per_cycle=60,
    )
    data.update(overrides)
    return Crop(**data)


def make_listing(listing_id="lst_1", **overrides):
    data = dict(
        id=listing_id,
        type="offer",
        mode="inputs",
        category="seeds",
        title="Tomato seeds",
        quantity=50,
        unit="g",
        location_label="Deir al-Balah",
        distance_band="near",
        urgency="today",
        trust="verified_hub",
        status="active",
    )
    data.update(overrides)
    return Listing(**data)


def make_drop(drop_id="drop_1", hours_ahead=12, window_hours=6, **overrides):
    start = REFERENCE_TIME + timedelta(hours=hours_ahead)
    data = dict(
        id=drop_id,
        crop_type="tomato",
        crop_common_name="Tomato",
        window_start=start,
        window_end=start + timedelta(hours=window_hours),
        quantity_min=10,
        quantity_max=20,
        pickup_preference="same_day",
        spoilage_risk="high",
        status="active",
    )
    data.update(overrides)
    return HarvestDrop(**data)


def make_buyer(buyer_id="buyer_x", **overrides):
    data = dict(
        id=buyer_id,
        name="Test Buyer",
        type="ngo",
        distance_band="near",
        capacity_fit="exact",
        trust_score=98,
    )
    data.update(overrides)
    return Buyer(**data)
