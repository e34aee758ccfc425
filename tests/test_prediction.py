"""Tests for next-meal-time prediction."""

from datetime import UTC, datetime, time, timedelta

from hunger_tracker.domain.meals import MealMacros
from hunger_tracker.services.prediction import (
    SleepWindow,
    hunger_delay_hours,
    predict_next_meal_time,
)


def test_baseline_medium_meal_without_fullness() -> None:
    macros = MealMacros(calories=300)
    assert hunger_delay_hours(macros, "medium") == 4.0


def test_heavy_meal_is_clamped_to_eight_hours() -> None:
    macros = MealMacros(calories=900, protein=50, fiber=20, fat=40)
    assert hunger_delay_hours(macros, "large", fullness=5) == 8.0


def test_light_meal_is_clamped_to_one_hour() -> None:
    macros = MealMacros(calories=50, carbs=60)
    assert hunger_delay_hours(macros, "small", fullness=1) == 1.0


def test_simple_carbs_penalty() -> None:
    sugary = MealMacros(calories=300, carbs=70, protein=2, fat=1)
    balanced = MealMacros(calories=300, carbs=70, protein=12, fat=1)
    assert hunger_delay_hours(balanced, "medium") - hunger_delay_hours(
        sugary, "medium"
    ) == 0.5


def test_adjustments_add_up() -> None:
    macros = MealMacros(calories=450, protein=20, fiber=6, fat=12)
    # 3.5 + 1.0 + 0.5 + 0.25 + 0.5 - 0.5 (small) + 0.5 (fullness 4)
    assert hunger_delay_hours(macros, "small", fullness=4) == 5.75


def test_prediction_outside_sleep_window_is_unchanged() -> None:
    eaten_at = datetime(2025, 6, 18, 12, 0, tzinfo=UTC)
    predicted = predict_next_meal_time(MealMacros(calories=300), "medium", 3, eaten_at)
    assert predicted == eaten_at + timedelta(hours=4)


def test_late_prediction_moves_to_next_morning() -> None:
    eaten_at = datetime(2025, 6, 18, 19, 30, tzinfo=UTC)
    predicted = predict_next_meal_time(MealMacros(calories=300), "medium", 3, eaten_at)
    assert predicted == datetime(2025, 6, 19, 7, 30, tzinfo=UTC)


def test_early_morning_prediction_moves_to_same_morning() -> None:
    eaten_at = datetime(2025, 6, 18, 2, 0, tzinfo=UTC)
    predicted = predict_next_meal_time(MealMacros(calories=300), "medium", 3, eaten_at)
    assert predicted == datetime(2025, 6, 18, 7, 30, tzinfo=UTC)


def test_custom_sleep_window() -> None:
    window = SleepWindow(start=time(23, 0), end=time(6, 0))
    eaten_at = datetime(2025, 6, 18, 19, 30, tzinfo=UTC)
    predicted = predict_next_meal_time(
        MealMacros(calories=300), "medium", 3, eaten_at, window
    )
    assert predicted == datetime(2025, 6, 19, 6, 30, tzinfo=UTC)


def test_sleep_window_membership() -> None:
    window = SleepWindow()
    assert window.overnight
    assert window.contains(23)
    assert window.contains(6)
    assert not window.contains(7)
    assert not window.contains(21)

    daytime = SleepWindow(start=time(13, 0), end=time(15, 0))
    assert not daytime.overnight
    assert daytime.contains(14)
    assert not daytime.contains(15)
