"""Tests for learned predictions and recommendations."""

from datetime import UTC, timedelta

import pytest

from hunger_tracker.domain.recipes import Ingredient, Recipe, RecipePreferences
from hunger_tracker.services.advanced import (
    analyze_habits,
    analyze_nutrition_gaps,
    optimize_food_budget,
    predict_meal_timing,
    recommend_recipes,
)
from tests.conftest import make_meal


def test_meal_timing_default_without_history(now) -> None:
    prediction = predict_meal_timing([], now)

    assert prediction.predicted_time == now + timedelta(hours=4)
    assert prediction.confidence == 0.3
    assert prediction.hunger_level == 5
    assert prediction.reason == "Default prediction (no data)"


def test_meal_timing_from_regular_rhythm(now) -> None:
    records = [make_meal(now - timedelta(hours=hours)) for hours in (12, 8, 4)]

    prediction = predict_meal_timing(records, now)

    assert prediction.predicted_time == now
    assert prediction.confidence == 0.95
    assert prediction.hunger_level == 10
    assert prediction.reason == (
        "Based on your 2 recent meals (avg 4.0h gap) + meal composition"
    )


def test_meal_timing_stretched_by_satiety(now) -> None:
    records = [
        make_meal(now - timedelta(hours=5)),
        make_meal(now - timedelta(hours=1), protein=30, fiber=10),
    ]

    prediction = predict_meal_timing(records, now)

    assert prediction.predicted_time == now + timedelta(hours=5)
    assert prediction.confidence == 0.3
    assert prediction.hunger_level == 2


def test_meal_timing_ignores_implausible_gaps(now) -> None:
    records = [
        make_meal(now - timedelta(hours=20)),
        make_meal(now - timedelta(hours=2)),
    ]

    prediction = predict_meal_timing(records, now)

    assert prediction.predicted_time == now + timedelta(hours=2)
    assert "0 recent meals" in prediction.reason


def _recipes() -> list[Recipe]:
    return [
        Recipe(
            id="1",
            name="Beef Stew",
            category="Beef",
            ingredients=(Ingredient("beef"), Ingredient("onion")),
            estimated_cost=20,
            estimated_time=120,
        ),
        Recipe(
            id="2",
            name="Chicken Curry",
            category="Chicken",
            ingredients=(Ingredient("chicken"), Ingredient("rice")),
            estimated_cost=8,
            estimated_time=40,
        ),
    ]


def test_recommend_recipes_scores_history_and_preferences(now) -> None:
    records = [
        make_meal(now - timedelta(days=1), what="Chicken", tags={"Chicken"}),
        make_meal(now, what="chicken", tags={"Chicken"}),
    ]
    prefs = RecipePreferences(max_cost=10, max_time=60)

    ranked = recommend_recipes(_recipes(), records, prefs)

    curry, stew = ranked
    assert curry.recipe.name == "Chicken Curry"
    assert curry.score == 89
    assert curry.reasons == [
        "Within budget",
        "Quick to prepare",
        "You often eat Chicken",
        "Uses ingredients you like",
    ]
    assert stew.score == 40
    assert stew.matches_budget is False
    assert stew.matches_time is False
    assert stew.reasons == ["Adds variety"]


def test_recommend_recipes_penalizes_avoided_categories() -> None:
    prefs = RecipePreferences(avoid_categories=frozenset({"Beef"}), target_protein=30)

    ranked = {item.recipe.id: item for item in recommend_recipes(_recipes(), [], prefs)}

    # 50 + 15 + 15 + 10 protein + 10 variety
    assert ranked["2"].score == 100
    assert ranked["1"].score == 70
    assert ranked["1"].matches_budget is True
    assert ranked["1"].matches_macros is True


def test_optimize_food_budget_ranks_by_efficiency(now) -> None:
    records = [
        make_meal(now, what="Burger", cost=10, calories=800, protein=40),
        make_meal(now, what="Lentils", cost=2, calories=600, protein=30),
        make_meal(now, what="Water", cost=1),
        make_meal(now, what="Picnic", calories=400),
    ]

    result = optimize_food_budget(records, weekly_budget=140)

    assert [food.food for food in result.recommended] == ["Lentils", "Burger"]
    assert result.recommended[0].efficiency == pytest.approx(450)
    assert result.daily_target == 20
    assert result.projected_spending == pytest.approx(126)
    assert result.savings == pytest.approx(14)


def test_optimize_food_budget_without_costs() -> None:
    result = optimize_food_budget([], weekly_budget=70)
    assert result.recommended == []
    assert result.projected_spending == 0
    assert result.savings == 70


def test_analyze_habits_streaks_and_consistency(now) -> None:
    records = [
        make_meal(now, protein=25, tags={"Home-cooked"}),
        make_meal(now - timedelta(days=1), protein=10, tags={"Home-cooked"}),
        make_meal(now - timedelta(days=2), protein=30, tags={"Takeout"}),
        make_meal(now - timedelta(days=3), protein=25, tags={"Home-cooked"}),
    ]

    home, protein, timing = analyze_habits(records, UTC)

    assert (home.current_streak, home.longest_streak) == (2, 2)
    assert home.consistency == 75
    assert home.trend == "improving"
    assert home.suggestion == "Try meal prepping to make home cooking easier"
    assert (protein.current_streak, protein.longest_streak) == (1, 2)
    assert protein.trend == "stable"
    assert timing.consistency == 100
    assert timing.trend == "stable"


def test_analyze_habits_without_history() -> None:
    home, _, timing = analyze_habits([])

    assert home.current_streak == 0
    assert home.trend == "stable"
    assert timing.consistency == 50
    assert timing.trend == "declining"


def test_nutrition_gaps_use_trailing_week(now) -> None:
    records = [
        make_meal(now - timedelta(hours=1), protein=60, fiber=20),
        make_meal(now - timedelta(days=1), protein=40, fiber=8),
        make_meal(now - timedelta(days=8), protein=500, fiber=100),
    ]

    protein, fiber = analyze_nutrition_gaps(records, now=now)

    assert protein.nutrient == "Protein"
    assert protein.current == 50
    assert protein.gap == 100
    assert protein.severity == "high"
    assert fiber.current == 14
    assert fiber.gap == 11
    assert fiber.severity == "medium"
    assert len(fiber.suggestions) == 4


def test_no_gaps_when_targets_met(now) -> None:
    records = [make_meal(now, protein=148, fiber=24)]
    assert analyze_nutrition_gaps(records, now=now) == []


def test_nutrition_gaps_average_per_meal(now) -> None:
    records = [make_meal(now - timedelta(hours=hours), protein=50) for hours in (1, 4, 8)]

    gaps = {gap.nutrient: gap for gap in analyze_nutrition_gaps(records, now=now)}

    assert gaps["Protein"].current == 50
    assert gaps["Protein"].gap == 100


def test_nutrition_gaps_include_meals_after_now(now) -> None:
    records = [
        make_meal(now - timedelta(days=1), protein=100, fiber=20),
        make_meal(now + timedelta(hours=2), protein=200, fiber=30),
    ]

    assert analyze_nutrition_gaps(records, now=now) == []


def test_zero_limits_count_as_unset() -> None:
    prefs = RecipePreferences(max_cost=0, max_time=0)

    ranked = recommend_recipes(_recipes(), [], prefs)

    assert all(item.matches_budget for item in ranked)
    assert all(item.matches_time for item in ranked)
