"""Tests for recipe cost, time and serving estimates."""

import pytest

from hunger_tracker.domain.recipes import Ingredient, Recipe
from hunger_tracker.services.recipe_costs import (
    calculate_cost_per_serving,
    classify_recipe_cost,
    estimate_ingredient_cost,
    estimate_prep_time,
    estimate_recipe_cost,
    estimate_servings,
    generate_recipe_cost_insight,
    with_estimates,
)


@pytest.mark.parametrize(
    ("ingredient", "price"),
    [
        ("Chicken Breast", 3.50),
        ("Ground beef", 6.00),
        ("Eggs", 0.30),
        ("Fresh herbs", 0.50),
        ("Cumin spice", 0.25),
        ("Curry sauce", 1.50),
        ("Saffron", 1.00),
    ],
)
def test_estimate_ingredient_cost(ingredient, price) -> None:
    assert estimate_ingredient_cost(ingredient, "1 cup") == price


def test_estimate_recipe_cost_sums_ingredients() -> None:
    ingredients = [Ingredient("Eggs"), Ingredient("Milk"), Ingredient("Flour")]
    assert estimate_recipe_cost(ingredients) == pytest.approx(0.65)


def test_estimate_prep_time_adds_techniques() -> None:
    ingredients = [Ingredient("a"), Ingredient("b"), Ingredient("c")]
    assert estimate_prep_time(ingredients, "Bake for 20 minutes, then simmer.") == 66


def test_estimate_prep_time_is_capped() -> None:
    ingredients = [Ingredient(str(index)) for index in range(20)]
    instructions = "Marinate overnight, roast, then slow cook and bake."
    assert estimate_prep_time(ingredients, instructions) == 180


@pytest.mark.parametrize(
    ("ingredients", "servings"),
    [
        ([Ingredient("Chicken thighs", "2 lbs")], 4),
        ([Ingredient("Basmati rice", "1.5 cups")], 3),
        ([Ingredient("Chicken", "0.5 lb")], 2),
        ([Ingredient("Pasta", "some cups")], 2),
        ([Ingredient(str(index)) for index in range(3)], 2),
        ([Ingredient(str(index)) for index in range(6)], 4),
        ([Ingredient(str(index)) for index in range(10)], 6),
    ],
)
def test_estimate_servings(ingredients, servings) -> None:
    assert estimate_servings(ingredients) == servings


def test_cost_per_serving_guards_zero_servings() -> None:
    assert calculate_cost_per_serving(10, 4) == 2.5
    assert calculate_cost_per_serving(10, 0) == 10


@pytest.mark.parametrize(
    ("total", "category"),
    [(9.99, "$"), (10, "$$"), (19.99, "$$"), (20, "$$$"), (35, "$$$$")],
)
def test_classify_recipe_cost(total, category) -> None:
    assert classify_recipe_cost(total) == category


def test_cost_insight_for_cheap_quick_recipe() -> None:
    insight = generate_recipe_cost_insight(8, 4, 20)

    assert insight.cost_per_serving == 2
    assert insight.value_score == 7
    assert insight.cost_category == "$"
    assert insight.insight == "Good value for the quality. Very economical per serving!"


def test_cost_insight_for_premium_recipe() -> None:
    insight = generate_recipe_cost_insight(40, 4, 90)

    assert insight.value_score == 1
    assert insight.cost_category == "$$$$"
    assert insight.insight == (
        "Premium ingredients, plan ahead for budget. "
        "High-end meal, perfect for entertaining."
    )


def test_with_estimates_fills_missing_values() -> None:
    recipe = Recipe(
        id="52772",
        name="Pancakes",
        category="Dessert",
        ingredients=(Ingredient("Eggs"), Ingredient("Milk"), Ingredient("Flour")),
        instructions="Bake until golden.",
    )

    estimated = with_estimates(recipe)

    assert estimated.estimated_cost == pytest.approx(0.65)
    assert estimated.estimated_time == 46
    assert estimated.servings == 2


def test_with_estimates_keeps_known_values() -> None:
    recipe = Recipe(
        id="1",
        name="Toast",
        category="Breakfast",
        estimated_cost=3,
        estimated_time=5,
        servings=1,
    )

    assert with_estimates(recipe) == recipe
