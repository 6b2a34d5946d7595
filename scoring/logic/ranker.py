"""
Ranker

Ranks scored candidates and splits them into tiers.
"""

from typing import List, Optional, Tuple

from .contracts import RankedResult


def rank_candidates(results: List[RankedResult]) -> List[RankedResult]:
    """
    Rank results by total score (descending).

    Ties are broken by candidate id so identical input always yields the
    same order. Assigns 1-based ranks.

    Args:
        results: List of scored candidates

    Returns:
        New sorted list with ranks set
    """
    ordered = sorted(results, key=lambda r: (-r.total, r.candidate_id))
    return [
        result.model_copy(update={"rank": position})
        for position, result in enumerate(ordered, 1)
    ]


def partition(
    ranked: List[RankedResult],
    top_k: int,
    alternatives_m: Optional[int] = None
) -> Tuple[List[RankedResult], List[RankedResult]]:
    """
    Split a ranked list into (top, alternatives).

    Args:
        ranked: Output of rank_candidates
        top_k: Size of the top tier
        alternatives_m: Size of the alternatives tier; None keeps the rest

    Returns:
        Tuple of (top, alternatives)
    """
    top = ranked[:top_k]
    if alternatives_m is None:
        alternatives = ranked[top_k:]
    else:
        alternatives = ranked[top_k:top_k + alternatives_m]
    return top, alternatives
