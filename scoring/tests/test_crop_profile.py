"""
Test the crop recommendation profile against the reference catalog.
"""

import pytest

from scoring.logic import (
    CropContext,
    CropProfile,
    ScoringEngine,
    recommend_crops,
)
from scoring.logic.aggregator import weighted_sum
from scoring.logic.catalog import CROPS, get_crop_by_id
from scoring.logic.engine import score_to_list
from scoring.tests.factories import make_crop


def _context(**overrides):
    data = dict(
        plot_area_m2=40,
        water_access="none",
        salinity_risk="none",
        target_harvest_window_days=45,
        user_priority="balanced",
        current_month=4,
    )
    data.update(overrides)
    return CropContext(**data)


def test_no_water_plot_prefers_low_water_crops():
    """Every crop is in season in April, so water and harvest decide."""
    result = recommend_crops(_context())

    assert result.best.candidate_id == "turnip"
    assert result.best.total == 95
    assert {r.candidate_id for r in result.top} == {"turnip", "arugula", "radish"}
    assert all(r.candidate.water_need_band == "low" for r in result.top)


def test_strong_salinity_prefers_tolerant_crop():
    result = recommend_crops(_context(
        water_access="reliable", salinity_risk="strong", target_harvest_window_days=60,
    ))
    assert result.best.candidate_id == "swiss-chard"
    assert "Salinity tolerant" in result.best.flags


def test_tier_sizes():
    result = recommend_crops(_context())
    assert len(result.top) == 3
    assert len(result.alternatives) == 5
    assert result.metadata.total_evaluated == len(CROPS)
    assert result.metadata.total_ranked == 8


def test_ranking_is_deterministic():
    first = score_to_list(recommend_crops(_context()))
    second = score_to_list(recommend_crops(_context(), list(reversed(CROPS))))
    assert first == second


@pytest.mark.parametrize("water", ["none", "limited", "reliable", "unknown"])
@pytest.mark.parametrize("salinity", ["none", "some", "strong"])
@pytest.mark.parametrize("month", [1, 7, None])
def test_scores_bounded_and_consistent(water, salinity, month):
    result = recommend_crops(_context(
        water_access=water, salinity_risk=salinity, current_month=month,
    ))
    ranked = result.ranked()

    totals = [r.total for r in ranked]
    assert totals == sorted(totals, reverse=True)
    for item in ranked:
        breakdown = item.trace.breakdown
        assert 0 <= item.total <= 100
        assert all(0 <= score <= 100 for score in breakdown.factors.values())
        assert abs(item.total - weighted_sum(breakdown.factors, breakdown.weights)) <= 1


def test_priority_only_moves_priority_factor():
    radish = get_crop_by_id("radish")
    profile = CropProfile()
    calories = profile.score_candidate(radish, _context(user_priority="max_calories"))
    water = profile.score_candidate(radish, _context(user_priority="min_water"))

    calories_factors = dict(calories.trace.breakdown.factors)
    water_factors = dict(water.trace.breakdown.factors)
    assert calories_factors.pop("priority") != water_factors.pop("priority")
    assert calories_factors == water_factors


def test_explanation_and_trace():
    result = recommend_crops(_context())
    for item in result.ranked():
        assert len(item.explanation) >= 2
        assert len(item.trace.rules_applied) == 5
        assert item.trace.total_constraints == 4

    best = result.best
    assert best.explanation[0].startswith("Harvest in 45-60 days matches")
    assert any(rule.startswith("WATER_FIT: none water × low need") for rule in best.trace.rules_applied)
    assert best.confidence == 100


def test_explanation_without_harvest_target():
    best = recommend_crops(_context(target_harvest_window_days=None)).best
    assert best.explanation[0].endswith("days (no target set)")
    assert "?" not in best.explanation[0]


def test_priority_selects_roi_bullets():
    calories = recommend_crops(_context(user_priority="max_calories")).best
    water = recommend_crops(_context(user_priority="min_water")).best

    assert any("calories per m²" in line for line in calories.explanation)
    assert not any("kg per liter" in line for line in calories.explanation)
    assert any("kg per liter" in line for line in water.explanation)
    assert not any("calories per m²" in line for line in water.explanation)


def test_roi_details():
    result = recommend_crops(_context())
    roi = result.best.details["roi"]
    assert roi == {"food_roi": 16, "resource_roi": 0.06}


def test_crop_flags():
    radish = get_crop_by_id("radish")
    item = CropProfile().score_candidate(radish, _context(target_harvest_window_days=30))
    assert "Fast harvest" in item.flags
    assert "Low water" in item.flags
    assert "Perfect timing" in item.flags
    assert "High yield" not in item.flags


def test_identical_crops_tie_by_id():
    crops = [make_crop("b-crop"), make_crop("a-crop"), make_crop("c-crop")]
    result = ScoringEngine(CropProfile()).score(_context(), crops)
    assert [r.candidate_id for r in result.top] == ["a-crop", "b-crop", "c-crop"]
    assert len({r.total for r in result.top}) == 1


def test_injected_catalog():
    crops = [make_crop("only-crop")]
    engine = ScoringEngine(CropProfile(), catalog=crops)
    result = engine.score(_context())
    assert [r.candidate_id for r in result.top] == ["only-crop"]
    assert result.alternatives == []


def test_empty_candidate_set():
    result = recommend_crops(_context(), [])
    assert result.top == []
    assert result.alternatives == []
    assert result.warnings
    assert result.metadata.total_evaluated == 0


def test_unknown_context_values_still_score():
    context = CropContext(water_access="swamp", salinity_risk="volcanic", user_priority="fame")
    result = recommend_crops(context)
    assert len(result.top) == 3
    for item in result.ranked():
        assert item.trace.breakdown.factors["water"] == 50
        assert item.trace.breakdown.factors["salinity"] == 50


def test_input_summary():
    result = recommend_crops(_context())
    assert result.metadata.input_summary == (
        "40m² plot, none water, none salinity, 45d harvest, priority: balanced"
    )
    assert result.metadata.profile == "crop_recommendation"
