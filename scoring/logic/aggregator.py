"""
Score Aggregator

Combines individual factor scores into a total score.
Applies weighting, rounding and bounds.
"""

import math
from typing import Dict, Iterable

from .contracts import FitScore, ScoreBreakdown
from .constants import WEIGHT_SUM_TOLERANCE


class WeightVectorError(ValueError):
    """A profile was configured with an invalid weight vector."""


def validate_weights(
    weights: Dict[str, float],
    factor_names: Iterable[str],
    expected_sum: float = 1.0
) -> None:
    """
    Check a profile's weight vector.

    Weighted profiles sum to 1.0; point-band profiles sum to their available
    points / 100.

    Raises:
        WeightVectorError: if a weight is negative, the factor names differ,
            or the weights do not sum to expected_sum within tolerance
    """
    expected = set(factor_names)
    if set(weights) != expected:
        missing = sorted(expected - set(weights))
        extra = sorted(set(weights) - expected)
        raise WeightVectorError(f"Weight vector mismatch: missing={missing}, extra={extra}")

    negative = [name for name, weight in weights.items() if weight < 0]
    if negative:
        raise WeightVectorError(f"Negative weights for: {sorted(negative)}")

    total = sum(weights.values())
    if abs(total - expected_sum) > WEIGHT_SUM_TOLERANCE:
        raise WeightVectorError(f"Weights sum to {total:.6f}, expected {expected_sum:g}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def weighted_sum(factors: Dict[str, float], weights: Dict[str, float]) -> float:
    return sum(factors[name] * weight for name, weight in weights.items())


def aggregate(
    fits: Dict[str, FitScore],
    weights: Dict[str, float]
) -> ScoreBreakdown:
    """
    Aggregate factor fit scores into a ScoreBreakdown.

    Factor scores are kept unrounded; only the final weighted sum is rounded,
    then clamped. For point-band profiles the weighted sum is the sum of
    awarded points, so the clamp caps it at 100.

    Args:
        fits: factor name -> FitScore
        weights: factor name -> weight (validated)

    Returns:
        ScoreBreakdown with raw factors, weights and integer total
    """
    factors = {name: fits[name].score for name in weights}
    total = round_half_up(weighted_sum(factors, weights))

    # Clamp to the 0-100 range
    total = max(0, min(100, total))

    return ScoreBreakdown(factors=factors, weights=dict(weights), total=total)
