"""
Scoring Engine

Main orchestrator that runs a scoring profile over a candidate set.
This is the primary entry point for every profile.
"""

import logging
from typing import Any, List, Optional, Sequence

from .contracts import (
    Buyer,
    BuyerMatchContext,
    Crop,
    CropContext,
    DropContext,
    HarvestDrop,
    Listing,
    ListingContext,
    RankedResult,
    RunMetadata,
    TieredResult,
)
from .profiles import (
    BuyerMatchProfile,
    CropProfile,
    DropPriorityProfile,
    ListingProfile,
    ScoringProfile,
)
from .ranker import rank_candidates, partition
from .catalog import CROPS, DEMO_BUYERS

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"


class ScoringEngine:
    """
    Runs one profile as a one-shot pipeline.

    Pipeline flow:
    1. Candidates - explicit list, else the injected catalog
    2. Fit evaluation - every fit function per candidate
    3. Aggregation - weighted total and reasoning trace
    4. Ranking - total descending, ties by candidate id
    5. Tiering - top K and next M
    """

    def __init__(self, profile: ScoringProfile, catalog: Optional[Sequence[Any]] = None):
        """
        Args:
            profile: Scoring profile to run
            catalog: Read-only default candidate set, used when score()
                is called without candidates
        """
        self.profile = profile
        self.catalog = list(catalog) if catalog is not None else []
        self.version = ENGINE_VERSION

    def score(self, context: Any, candidates: Optional[Sequence[Any]] = None) -> TieredResult:
        """
        Score and tier a candidate set.

        Args:
            context: Profile context
            candidates: Candidates to score; defaults to the catalog

        Returns:
            TieredResult with top and alternatives
        """
        pool = list(candidates) if candidates is not None else self.catalog
        metadata = RunMetadata(
            profile=self.profile.name,
            total_evaluated=len(pool),
            input_summary=self.profile.summarize(context),
            engine_version=self.version,
        )

        if not pool:
            logger.warning("%s: no candidates to score", self.profile.name)
            return TieredResult(
                metadata=metadata,
                warnings=["No candidates available to score."],
            )

        scored = [self.profile.score_candidate(candidate, context) for candidate in pool]
        eligible = [result for result in scored if result.is_eligible]

        ranked = rank_candidates(eligible)
        top, alternatives = partition(ranked, self.profile.top_k, self.profile.alternatives_m)

        metadata.total_ranked = len(top) + len(alternatives)
        logger.info(
            "%s: evaluated %d, eligible %d, returned %d",
            self.profile.name, len(pool), len(eligible), metadata.total_ranked,
        )

        warnings = []
        if not eligible:
            warnings.append("No eligible candidates after filtering.")

        return TieredResult(top=top, alternatives=alternatives, metadata=metadata, warnings=warnings)

    def score_single(self, context: Any, candidate: Any) -> RankedResult:
        """
        Score a single candidate without ranking.

        Useful for showing the detailed breakdown of one item.
        """
        return self.profile.score_candidate(candidate, context)


# Convenience functions for simple usage

def recommend_crops(
    context: CropContext,
    crops: Optional[Sequence[Crop]] = None
) -> TieredResult:
    """Top 3 crops plus up to 5 alternatives for a plot."""
    engine = ScoringEngine(CropProfile(), catalog=CROPS)
    return engine.score(context, crops)


def match_listings(
    context: ListingContext,
    listings: Sequence[Listing],
    exclude_listing_id: Optional[str] = None
) -> TieredResult:
    """
    Rank active listings for the user's context.

    Args:
        context: User context
        listings: Listings to consider
        exclude_listing_id: Listing being viewed, never matched with itself
    """
    if exclude_listing_id is not None:
        listings = [listing for listing in listings if listing.id != exclude_listing_id]
    return ScoringEngine(ListingProfile()).score(context, listings)


def prioritize_drops(context: DropContext, drops: Sequence[HarvestDrop]) -> TieredResult:
    """Rank harvest drops by pickup priority."""
    return ScoringEngine(DropPriorityProfile()).score(context, drops)


def match_buyers(
    drop: Optional[HarvestDrop],
    buyers: Optional[Sequence[Buyer]] = None
) -> TieredResult:
    """Rank buyers for a drop; uses the demo buyer pool when none given."""
    engine = ScoringEngine(BuyerMatchProfile(), catalog=DEMO_BUYERS)
    return engine.score(BuyerMatchContext(drop=drop), buyers)


def score_to_list(result: TieredResult) -> List[dict]:
    """Flatten a TieredResult into simple dicts for lightweight callers."""
    return [
        {
            "rank": item.rank,
            "id": item.candidate_id,
            "score": item.total,
            "confidence": item.confidence,
            "flags": item.flags,
            "reasons": item.explanation,
        }
        for item in result.ranked()
    ]
