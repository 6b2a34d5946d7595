"""
Data Adapter for the Scoring Engines

Reads externally-owned catalog tables (listings, drops, buyers) and
transforms rows into the candidate contracts the engines score.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from scoring.models import StoredBuyer, StoredDrop, StoredListing
from .contracts import Buyer, HarvestDrop, Listing

logger = logging.getLogger(__name__)


def listing_from_row(row: StoredListing) -> Listing:
    return Listing(
        id=row.id,
        type=_band(row.type, "offer"),
        mode=_band(row.mode, "inputs"),
        category=_band(row.category, ""),
        title=_text(row.title),
        quantity=row.quantity or 0.0,
        unit=_text(row.unit),
        location_label=_text(row.location_label),
        distance_band=_band(row.distance_band, "unknown"),
        urgency=_band(row.urgency, "any"),
        trust=_band(row.trust, "peer"),
        status=_band(row.status, "active"),
        hub_name=row.hub_name,
        notes=row.notes,
        created_at=row.created_at,
    )


def drop_from_row(row: StoredDrop) -> Optional[HarvestDrop]:
    """Convert a drop row; rows without a pickup window are skipped."""
    if row.window_start is None or row.window_end is None:
        logger.warning("Skipping drop %s without a pickup window", row.id)
        return None
    return HarvestDrop(
        id=row.id,
        crop_type=_band(row.crop_type, ""),
        crop_common_name=_text(row.crop_common_name),
        window_start=_utc(row.window_start),
        window_end=_utc(row.window_end),
        quantity_min=row.quantity_min or 0.0,
        quantity_max=row.quantity_max or 0.0,
        unit=_text(row.unit, "kg"),
        location_label=_text(row.location_label),
        pickup_preference=_band(row.pickup_preference, "any"),
        spoilage_risk=_band(row.spoilage_risk, "unknown"),
        status=_band(row.status, "active"),
        notes=row.notes,
    )


def buyer_from_row(row: StoredBuyer) -> Buyer:
    return Buyer(
        id=row.id,
        name=_text(row.name),
        type=_band(row.type, "buyer"),
        distance_band=_band(row.distance_band, "unknown"),
        capacity_fit=_band(row.capacity_fit, "unknown"),
        trust_score=row.trust_score or 0.0,
        contact_method=row.contact_method,
    )


def fetch_listings(
    db: Session,
    mode: Optional[str] = None,
    listing_type: Optional[str] = None,
    category: Optional[str] = None
) -> List[Listing]:
    """
    Fetch exchange listings, optionally filtered by mode, type and category.
    """
    query = select(StoredListing)
    if mode:
        query = query.where(StoredListing.mode == mode)
    if listing_type:
        query = query.where(StoredListing.type == listing_type)
    if category and category != "all":
        query = query.where(StoredListing.category == category)

    rows = db.execute(query.order_by(StoredListing.id)).scalars().all()
    logger.info("Fetched %d listings", len(rows))
    return [listing_from_row(row) for row in rows]


def fetch_drops(db: Session, statuses: Optional[List[str]] = None) -> List[HarvestDrop]:
    query = select(StoredDrop)
    if statuses:
        query = query.where(StoredDrop.status.in_(statuses))

    rows = db.execute(query.order_by(StoredDrop.id)).scalars().all()
    drops = [drop_from_row(row) for row in rows]
    return [drop for drop in drops if drop is not None]


def fetch_drop(db: Session, drop_id: str) -> Optional[HarvestDrop]:
    row = db.get(StoredDrop, drop_id)
    if row is None:
        return None
    return drop_from_row(row)


def fetch_buyers(db: Session) -> List[Buyer]:
    rows = db.execute(select(StoredBuyer).order_by(StoredBuyer.id)).scalars().all()
    return [buyer_from_row(row) for row in rows]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _text(value: Optional[str], default: str = "") -> str:
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def _band(value: Optional[str], default: str = "unknown") -> str:
    """Categorical columns are compared lowercase."""
    return _text(value, default).lower()


def _utc(moment: datetime) -> datetime:
    """Stored datetimes are naive UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
