"""
Test weight validation and score aggregation.
"""

import pytest

from scoring.logic.aggregator import (
    WeightVectorError,
    aggregate,
    round_half_up,
    validate_weights,
    weighted_sum,
)
from scoring.logic.constants import (
    BUYER_WEIGHTS,
    CROP_WEIGHTS,
    DROP_WEIGHTS,
    LISTING_WEIGHTS,
)
from scoring.logic.contracts import FitScore
from scoring.logic.profiles import BuyerMatchProfile, CropProfile, ListingProfile


@pytest.mark.parametrize("weights,expected", [
    (CROP_WEIGHTS, 1.0),
    (LISTING_WEIGHTS, 1.2),
    (DROP_WEIGHTS, 1.5),
    (BUYER_WEIGHTS, 1.0),
])
def test_profile_weight_sums(weights, expected):
    assert sum(weights.values()) == pytest.approx(expected)
    assert all(weight >= 0 for weight in weights.values())


def test_validate_weights_rejects_bad_sum():
    with pytest.raises(WeightVectorError):
        validate_weights({"a": 0.5, "b": 0.4}, ["a", "b"])


def test_validate_weights_expected_sum():
    validate_weights({"a": 0.5, "b": 0.7}, ["a", "b"], expected_sum=1.2)
    with pytest.raises(WeightVectorError, match="expected 1.2"):
        validate_weights({"a": 0.5, "b": 0.5}, ["a", "b"], expected_sum=1.2)


def test_validate_weights_rejects_missing_factor():
    with pytest.raises(WeightVectorError, match="missing"):
        validate_weights({"a": 1.0}, ["a", "b"])


def test_validate_weights_rejects_negative():
    with pytest.raises(WeightVectorError):
        validate_weights({"a": 1.5, "b": -0.5}, ["a", "b"])


def test_profile_construction_validates_override():
    with pytest.raises(WeightVectorError):
        CropProfile(weights={"harvest": 1.0})

    with pytest.raises(WeightVectorError):
        ListingProfile(weights={
            "category": 0.2, "urgency": 0.2, "trust": 0.2,
            "distance": 0.2, "type": 0.2, "compatibility": 0.0,
        })

    profile = BuyerMatchProfile(weights={
        "trust": 0.25, "distance": 0.25, "capacity": 0.25, "type": 0.25,
    })
    assert profile.weights["trust"] == 0.25


def test_round_half_up():
    assert round_half_up(84.5) == 85
    assert round_half_up(84.49) == 84
    assert round_half_up(0.5) == 1


def test_aggregate_keeps_raw_factors():
    fits = {"a": FitScore(score=33.3), "b": FitScore(score=66.6)}
    breakdown = aggregate(fits, {"a": 0.5, "b": 0.5})
    assert breakdown.factors == {"a": 33.3, "b": 66.6}
    assert breakdown.total == 50
    assert abs(breakdown.total - weighted_sum(breakdown.factors, breakdown.weights)) <= 1


def test_aggregate_bounds():
    high = {"a": FitScore(score=100), "b": FitScore(score=100)}
    low = {"a": FitScore(score=0), "b": FitScore(score=0)}
    assert aggregate(high, {"a": 0.5, "b": 0.5}).total == 100
    assert aggregate(low, {"a": 0.5, "b": 0.5}).total == 0


def test_aggregate_clamps_point_sums():
    fits = {"a": FitScore(score=100), "b": FitScore(score=100)}
    breakdown = aggregate(fits, {"a": 0.8, "b": 0.7})
    assert weighted_sum(breakdown.factors, breakdown.weights) == pytest.approx(150)
    assert breakdown.total == 100
