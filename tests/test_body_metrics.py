from datetime import datetime, timezone

import pytest

from healthtracker.utils import clock
from healthtracker.utils.body_metrics import (
    bmi_summary,
    bmi_category,
    analyze_profile,
    initial_prediction,
    compliance_prediction,
)


def test_bmi_for_170cm_70kg_is_normal():
    assert bmi_summary(70, 170) == {"bmi": 24.2, "category": "Normal"}


@pytest.mark.parametrize("bmi, category", [
    (18.4, "Underweight"),
    (18.5, "Normal"),
    (24.9, "Normal"),
    (25.0, "Overweight"),
    (29.9, "Overweight"),
    (30.0, "Obese"),
])
def test_bmi_category_thresholds(bmi, category):
    assert bmi_category(bmi) == category


def test_bmi_summary_requires_height_and_weight():
    assert bmi_summary(None, 170) is None
    assert bmi_summary(70, None) is None


def test_analysis_for_overweight_profile_targets_weight_loss():
    analysis = analyze_profile(95, 170, "General Fitness")
    assert analysis["current_bmi"] == 32.9
    assert analysis["weight_goal"] == "lose"
    assert analysis["plan_type"] == "weight_loss"
    assert analysis["target_weight"] == round(24.9 * 1.7 * 1.7 - 2, 1)
    assert analysis["urgency"] == "moderate"
    assert analysis["recommended_duration"] == 6


def test_analysis_for_underweight_profile_targets_weight_gain():
    analysis = analyze_profile(50, 175, None)
    assert analysis["weight_goal"] == "gain"
    assert analysis["plan_type"] == "weight_gain"
    assert analysis["recommended_duration"] == 6


def test_analysis_for_severe_obesity_is_high_urgency():
    analysis = analyze_profile(120, 170, None)
    assert analysis["urgency"] == "high"
    assert analysis["recommended_duration"] == 12


def test_analysis_for_normal_bmi_follows_fitness_goal():
    assert analyze_profile(70, 170, "Muscle Building")["plan_type"] == "muscle_building"
    assert analyze_profile(70, 170, "Muscle Building")["target_weight"] == 75
    assert analyze_profile(70, 170, "Fat Burning")["weight_goal"] == "lose"
    maintain = analyze_profile(70, 170, "General Fitness")
    assert maintain["plan_type"] == "maintenance"
    assert maintain["weight_difference"] == 0
    assert maintain["recommended_duration"] == 3


def test_predictions_reuse_third_month_text_after_month_three():
    assert initial_prediction(7, "weight_loss") == initial_prediction(3, "weight_loss")


def test_compliance_prediction_mentions_end_of_plan_in_last_month():
    text = compliance_prediction(3, 3, 90, 90, "weight_loss", "lose")
    assert text.startswith("Excellent progress!")
    assert "approaching the end of your plan" in text

    low = compliance_prediction(1, 3, 20, 90, "maintenance", "maintain")
    assert low.startswith("Progress is slower than expected.")
    assert low.endswith(initial_prediction(2, "maintenance"))


def test_add_months_clamps_to_end_of_month():
    start = datetime(2024, 1, 31, tzinfo=timezone.utc)
    assert clock.add_months(start, 1) == datetime(2024, 2, 29, tzinfo=timezone.utc)
    assert clock.add_months(start, 12) == datetime(2025, 1, 31, tzinfo=timezone.utc)
    assert clock.calendar_months_between(start, datetime(2024, 4, 1, tzinfo=timezone.utc)) == 3
