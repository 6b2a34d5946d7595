"""
Browsing

Filter and sort helpers behind the exchange and harvest drop list views.
Filters keep the input order; sorts are stable, so ties keep it too.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from .advisors import quantity_band
from .contracts import DropContext, HarvestDrop, Listing, ListingContext
from .constants import DISTANCE_ORDER, DROP_SORT_OPTIONS, LISTING_SORT_OPTIONS, VERIFIED_TRUST
from .profiles import DropPriorityProfile, ListingProfile

logger = logging.getLogger(__name__)


# =============================================================================
# EXCHANGE LISTINGS
# =============================================================================

def filter_listings(
    listings: Iterable[Listing],
    search: Optional[str] = None,
    listing_type: Optional[str] = None,
    category: Optional[str] = None,
    near_only: bool = False,
    verified_only: bool = False,
    urgency: Optional[str] = None,
    mode: Optional[str] = None
) -> List[Listing]:
    """
    Narrow listings down for the exchange view.

    Args:
        search: case-insensitive match on title, location or notes
        category: exact category; "all" disables the filter
        near_only: keep only listings in the near distance band
        verified_only: keep only verified hubs and NGOs
        urgency: exact urgency; "any" disables the filter
    """
    filtered = list(listings)

    if mode:
        filtered = [item for item in filtered if item.mode == mode]
    if search:
        query = search.lower()
        filtered = [
            item for item in filtered
            if _contains(query, item.title, item.location_label, item.notes)
        ]
    if listing_type:
        filtered = [item for item in filtered if item.type == listing_type]
    if category and category != "all":
        filtered = [item for item in filtered if item.category == category]
    if near_only:
        filtered = [item for item in filtered if item.distance_band == "near"]
    if verified_only:
        filtered = [item for item in filtered if item.trust in VERIFIED_TRUST]
    if urgency and urgency != "any":
        filtered = [item for item in filtered if item.urgency == urgency]

    return filtered


def sort_listings(
    listings: Iterable[Listing],
    sort_by: str,
    context: Optional[ListingContext] = None
) -> List[Listing]:
    """
    Order listings for display.

    ai_match orders by listing match score (inactive listings score 0),
    newest by creation time, closest by distance band, quantity by amount.
    Unknown sort options keep the input order.
    """
    listings = list(listings)

    if sort_by == "ai_match":
        profile = ListingProfile()
        context = context or ListingContext()
        scores = {item.id: profile.score_candidate(item, context).total for item in listings}
        return sorted(listings, key=lambda item: -scores.get(item.id, 0))
    if sort_by == "newest":
        # Listings without a timestamp go last
        dated = [item for item in listings if item.created_at is not None]
        undated = [item for item in listings if item.created_at is None]
        return sorted(dated, key=lambda item: _timestamp(item.created_at), reverse=True) + undated
    if sort_by == "closest":
        return sorted(listings, key=lambda item: DISTANCE_ORDER.get(item.distance_band, len(DISTANCE_ORDER)))
    if sort_by == "quantity":
        return sorted(listings, key=lambda item: -item.quantity)

    if sort_by not in LISTING_SORT_OPTIONS:
        logger.debug("Unknown listing sort %r, keeping input order", sort_by)
    return listings


# =============================================================================
# HARVEST DROPS
# =============================================================================

def filter_drops(
    drops: Iterable[HarvestDrop],
    statuses: Optional[List[str]] = None,
    pickup_preferences: Optional[List[str]] = None,
    quantity_bands: Optional[List[str]] = None,
    search: Optional[str] = None
) -> List[HarvestDrop]:
    """Filter drops; empty lists and blank searches match everything."""
    filtered = list(drops)

    if statuses:
        filtered = [d for d in filtered if d.status in statuses]
    if pickup_preferences:
        filtered = [d for d in filtered if d.pickup_preference in pickup_preferences]
    if quantity_bands:
        filtered = [
            d for d in filtered
            if quantity_band(d.quantity_min, d.quantity_max) in quantity_bands
        ]
    if search and search.strip():
        query = search.lower()
        filtered = [
            d for d in filtered
            if _contains(query, d.crop_common_name, d.location_label, d.notes)
        ]

    return filtered


def sort_drops(
    drops: Iterable[HarvestDrop],
    sort_by: str,
    reference_time: Optional[datetime] = None
) -> List[HarvestDrop]:
    """
    Order drops for display: ai_priority by drop priority score, soonest by
    window start, largest by total quantity.
    """
    drops = list(drops)

    if sort_by == "ai_priority":
        profile = DropPriorityProfile()
        context = DropContext(reference_time=reference_time)
        return sorted(drops, key=lambda d: -profile.score_candidate(d, context).total)
    if sort_by == "soonest":
        return sorted(drops, key=lambda d: _timestamp(d.window_start))
    if sort_by == "largest":
        return sorted(drops, key=lambda d: -(d.quantity_min + d.quantity_max))

    if sort_by not in DROP_SORT_OPTIONS:
        logger.debug("Unknown drop sort %r, keeping input order", sort_by)
    return drops


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _contains(query: str, *fields: Optional[str]) -> bool:
    return any(query in field.lower() for field in fields if field)


def _timestamp(moment: datetime) -> float:
    # Naive datetimes are read as UTC
    if moment.tzinfo is None:
        return (moment - datetime(1970, 1, 1)).total_seconds()
    return moment.timestamp()
