"""
Engine Runner

Orchestrates the database-backed scoring pipelines:
1. Fetches candidates via adapter
2. Runs the profile's engine
3. Returns tiered results

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
import time
from typing import Optional

from sqlalchemy.orm import Session

from .adapter import fetch_buyers, fetch_drop, fetch_drops, fetch_listings
from .contracts import DropContext, ListingContext, TieredResult
from .engine import match_buyers, match_listings, prioritize_drops

logger = logging.getLogger(__name__)


class DropNotFound(LookupError):
    """Requested harvest drop does not exist in the catalog."""


def run_listing_match(
    db: Session,
    context: ListingContext,
    exclude_listing_id: Optional[str] = None,
    mode: Optional[str] = None
) -> TieredResult:
    """
    Score stored listings for a user context.

    Args:
        db: Database session
        context: User context (selected crop, location)
        exclude_listing_id: Listing currently viewed
        mode: Optional inputs/labor/hubs filter
    """
    start_time = time.perf_counter()
    listings = fetch_listings(db, mode=mode)
    result = match_listings(context, listings, exclude_listing_id=exclude_listing_id)
    logger.info("Listing match complete (%.2fms)", (time.perf_counter() - start_time) * 1000)
    return result


def run_drop_priority(db: Session, context: DropContext) -> TieredResult:
    """Score stored harvest drops by pickup priority."""
    drops = fetch_drops(db)
    return prioritize_drops(context, drops)


def run_buyer_match(db: Session, drop_id: str) -> TieredResult:
    """
    Rank buyers for a stored drop.

    Uses stored buyers when the catalog has any, the demo pool otherwise.

    Raises:
        DropNotFound: if the drop id is unknown
    """
    drop = fetch_drop(db, drop_id)
    if drop is None:
        raise DropNotFound(drop_id)

    buyers = fetch_buyers(db)
    if not buyers:
        logger.info("No stored buyers, using demo buyer pool")
        return match_buyers(drop)
    return match_buyers(drop, buyers)
