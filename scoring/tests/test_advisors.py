"""
Test the auxiliary advisors: spoilage, ROI bands, plot assessment, bundles.
"""

import pytest

from scoring.logic.advisors import (
    assess_plot,
    estimate_spoilage_risk,
    quantity_band,
    recommend_bundle_template,
    roi_category,
)
from scoring.logic.contracts import PlotConditions


@pytest.mark.parametrize("crop,hours,preference,expected", [
    ("lettuce", 6, "same_day", "medium"),
    ("lettuce", 30, "any", "high"),
    ("carrot", 6, "same_day", "low"),
    ("tomato", 13, "24h", "medium"),
    ("Baby Spinach", 60, "same_day", "high"),
])
def test_estimate_spoilage_risk(crop, hours, preference, expected):
    assert estimate_spoilage_risk(crop, hours, preference) == expected


def test_roi_category():
    assert roi_category(10, "food") == "low"
    assert roi_category(16, "food") == "medium"
    assert roi_category(35, "food") == "high"
    assert roi_category(0.02, "resource") == "low"
    assert roi_category(0.05, "resource") == "medium"
    assert roi_category(0.07, "resource") == "high"


def test_assess_clean_plot():
    assessment = assess_plot(PlotConditions())
    assert assessment.status == "Farmable"
    assert assessment.score == 100
    assert assessment.reasons == []


def test_assess_plot_with_reliable_water():
    assessment = assess_plot(PlotConditions(salinity="medium", water_access="reliable"))
    assert assessment.score == 85
    assert assessment.status == "Farmable"
    assert assessment.reasons == [
        "Medium salinity may require mitigation",
        "Reliable water access is positive",
    ]


def test_assess_restorable_plot():
    assessment = assess_plot(PlotConditions(salinity="high", debris="light"))
    assert assessment.score == 60
    assert assessment.status == "Restorable"


def test_assess_damaged_plot_floors_at_zero():
    assessment = assess_plot(PlotConditions(
        salinity="high", contamination="confirmed", debris="heavy", water_access="none",
    ))
    assert assessment.score == 0
    assert assessment.status == "Damaged"
    assert len(assessment.reasons) == 4


@pytest.mark.parametrize("area,template_id", [
    (30, "tpl_1"),
    (50, "tpl_2"),
    (75, "tpl_2"),
    (100, "tpl_2"),
    (150, "tpl_3"),
    (None, "tpl_2"),
])
def test_recommend_bundle_template(area, template_id):
    assert recommend_bundle_template(area).id == template_id


def test_quantity_band():
    assert quantity_band(2, 6) == "small"
    assert quantity_band(10, 30) == "medium"
    assert quantity_band(50, 80) == "large"
