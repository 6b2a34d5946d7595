"""
Test the read-only catalog adapter and the database-backed runners.
"""

from datetime import datetime, timedelta, timezone

import pytest

from scoring.logic.adapter import fetch_buyers, fetch_drop, fetch_drops, fetch_listings
from scoring.logic.contracts import DropContext, ListingContext
from scoring.logic.runner import (
    DropNotFound,
    run_buyer_match,
    run_drop_priority,
    run_listing_match,
)
from scoring.models import StoredBuyer, StoredDrop, StoredListing
from scoring.tests.factories import REFERENCE_TIME


NAIVE_REFERENCE = REFERENCE_TIME.replace(tzinfo=None)


def _seed_listings(db):
    db.add_all([
        StoredListing(
            id="lst_1", type="offer", mode="inputs", category="Seeds ",
            title="Tomato Seeds", quantity=50, unit="g", location_label="Khan Younis",
            distance_band="near", urgency="today", trust="verified_hub", status="active",
        ),
        StoredListing(
            id="lst_2", type="request", mode="labor", category="day_labor",
            title="Harvest help", distance_band="far", urgency="week",
            trust="peer", status="ACTIVE",
        ),
        StoredListing(
            id="lst_3", type="offer", mode="inputs", category="tools",
            title="Hand hoe", status="fulfilled",
        ),
    ])
    db.commit()


def _seed_drops(db):
    db.add_all([
        StoredDrop(
            id="drop_1", crop_type="Tomato", crop_common_name="Tomato",
            window_start=NAIVE_REFERENCE + timedelta(hours=6),
            window_end=NAIVE_REFERENCE + timedelta(hours=12),
            quantity_min=10, quantity_max=20, pickup_preference="same_day",
            spoilage_risk="high", status="active",
        ),
        StoredDrop(
            id="drop_2", crop_type="carrot", crop_common_name="Carrot",
            window_start=NAIVE_REFERENCE + timedelta(hours=80),
            window_end=NAIVE_REFERENCE + timedelta(hours=90),
            pickup_preference="any", spoilage_risk="low", status="scheduled",
        ),
        StoredDrop(id="drop_3", crop_type="lettuce", status="active"),
    ])
    db.commit()


def test_fetch_listings_normalizes_categories(db_session):
    _seed_listings(db_session)
    listings = fetch_listings(db_session)

    assert [listing.id for listing in listings] == ["lst_1", "lst_2", "lst_3"]
    first = listings[0]
    assert first.category == "seeds"
    assert first.title == "Tomato Seeds"
    assert listings[1].status == "active"
    assert listings[2].urgency == "any"
    assert listings[2].distance_band == "unknown"


def test_fetch_listings_filters(db_session):
    _seed_listings(db_session)
    assert [l.id for l in fetch_listings(db_session, mode="labor")] == ["lst_2"]
    assert [l.id for l in fetch_listings(db_session, listing_type="offer")] == ["lst_1", "lst_3"]
    assert [l.id for l in fetch_listings(db_session, category="tools")] == ["lst_3"]
    assert len(fetch_listings(db_session, category="all")) == 3


def test_fetch_drops_skips_rows_without_window(db_session):
    _seed_drops(db_session)
    drops = fetch_drops(db_session)

    assert [drop.id for drop in drops] == ["drop_1", "drop_2"]
    assert drops[0].window_start.tzinfo is timezone.utc
    assert drops[0].crop_type == "tomato"
    assert [d.id for d in fetch_drops(db_session, statuses=["scheduled"])] == ["drop_2"]


def test_fetch_drop(db_session):
    _seed_drops(db_session)
    assert fetch_drop(db_session, "drop_1").crop_common_name == "Tomato"
    assert fetch_drop(db_session, "missing") is None


def test_fetch_buyers(db_session):
    db_session.add(StoredBuyer(
        id="b_1", name="Gaza Coop", type="Aggregator", distance_band="near",
        capacity_fit="exact", trust_score=91,
    ))
    db_session.commit()

    buyers = fetch_buyers(db_session)
    assert len(buyers) == 1
    assert buyers[0].type == "aggregator"
    assert buyers[0].name == "Gaza Coop"


def test_run_listing_match(db_session):
    _seed_listings(db_session)
    result = run_listing_match(db_session, ListingContext(selected_crop="tomato"))

    assert [r.candidate_id for r in result.ranked()] == ["lst_1", "lst_2"]
    assert result.best.total == 100
    assert result.metadata.total_evaluated == 3


def test_run_listing_match_excludes_viewed_listing(db_session):
    _seed_listings(db_session)
    result = run_listing_match(db_session, ListingContext(), exclude_listing_id="lst_1", mode="inputs")
    assert result.ranked() == []


def test_run_drop_priority(db_session):
    _seed_drops(db_session)
    result = run_drop_priority(db_session, DropContext(reference_time=REFERENCE_TIME))
    assert [r.candidate_id for r in result.ranked()] == ["drop_1", "drop_2"]
    assert result.best.total == 100


def test_run_buyer_match_falls_back_to_demo_buyers(db_session):
    _seed_drops(db_session)
    result = run_buyer_match(db_session, "drop_1")
    assert result.best.candidate_id == "buyer_2"
    assert result.metadata.total_evaluated == 5


def test_run_buyer_match_unknown_drop(db_session):
    with pytest.raises(DropNotFound):
        run_buyer_match(db_session, "missing")


def test_stored_datetime_round_trip(db_session):
    _seed_drops(db_session)
    drop = fetch_drop(db_session, "drop_1")
    assert drop.window_start == datetime(2026, 3, 1, 14, 0, tzinfo=timezone.utc)
