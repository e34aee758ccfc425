"""Tests for the insights facade."""

from datetime import UTC, datetime, timedelta

import pytest

from hunger_tracker.domain.recipes import Ingredient, Recipe
from hunger_tracker.services.insights import InsightsService
from hunger_tracker.services.progress import GameProgressService
from hunger_tracker.services.targets import NutritionTargetsService
from tests.conftest import make_meal


@pytest.fixture
def insights(meal_source, progress_repository, targets_repository):
    return InsightsService(
        meal_source=meal_source,
        targets_service=NutritionTargetsService(targets_repository),
        progress_service=GameProgressService(progress_repository),
        timezone_name="America/New_York",
    )


def test_now_is_converted_to_user_zone(insights, now) -> None:
    local = insights.now(now)

    assert local == now
    assert local.hour == 8
    assert str(local.tzinfo) == "America/New_York"


def test_score_card_uses_local_calendar_day(insights, meal_source, now) -> None:
    # 23:00 on June 17 in New York
    meal_source.meals.append(
        make_meal(datetime(2025, 6, 18, 3, 0, tzinfo=UTC), calories=2000)
    )
    meal_source.meals.append(make_meal(now - timedelta(hours=1), calories=500))

    card = insights.score_card(now)

    assert card.date == datetime(2025, 6, 18).date()
    assert card.scores[0].current == 500
    assert card.scores[0].trend == "down"


def test_each_call_reads_meals_once(insights, meal_source, now) -> None:
    insights.budget_status(now)
    insights.challenge_stats(now)

    assert meal_source.calls == 2


def test_challenge_stats_use_stored_progress(insights, now) -> None:
    insights.progress_service.complete_challenge("protein-power", 400, now)

    stats = insights.challenge_stats(now)

    assert stats.total_completed == 1
    assert stats.total_xp_earned == 400


def test_targets_flow_into_analyses(insights, meal_source, now) -> None:
    insights.targets_service.update_targets(protein=40, fiber=5)
    meal_source.meals.append(make_meal(now, protein=45, fiber=6))

    assert insights.nutrition_gaps(now) == []
    protein = next(
        item
        for item in insights.active_challenges(now)
        if item.challenge.id == "protein-power"
    )
    assert protein.progress.current == 1


def test_recipe_recommendations_fill_estimates(insights) -> None:
    recipe = Recipe(
        id="1",
        name="Omelette",
        category="Breakfast",
        ingredients=(Ingredient("Eggs", "3"), Ingredient("Cheese", "50g")),
    )

    (recommendation,) = insights.recipe_recommendations([recipe])

    assert recommendation.recipe.estimated_cost == pytest.approx(4.30)
    assert recommendation.recipe.estimated_time == 19
    assert recommendation.recipe.servings == 2
