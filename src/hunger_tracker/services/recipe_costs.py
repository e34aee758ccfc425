"""Cost, time and serving estimates for recipes."""

import re
from collections.abc import Sequence
from dataclasses import replace

from hunger_tracker.domain.meals import CostCategory
from hunger_tracker.domain.recipes import Ingredient, Recipe, RecipeCostInsight
from hunger_tracker.services.dates import round_half_up

# Rough USD prices per typical recipe quantity. Matched by substring in
# order, so the first listed key contained in an ingredient name wins.
INGREDIENT_PRICES: tuple[tuple[str, float], ...] = (
    ("chicken", 3.50),
    ("chicken breast", 4.00),
    ("chicken thigh", 3.00),
    ("beef", 6.00),
    ("ground beef", 5.00),
    ("pork", 4.50),
    ("bacon", 6.00),
    ("salmon", 12.00),
    ("tuna", 8.00),
    ("shrimp", 10.00),
    ("eggs", 0.30),
    ("tofu", 2.50),
    ("milk", 0.15),
    ("butter", 0.50),
    ("cheese", 4.00),
    ("cream", 0.30),
    ("yogurt", 0.60),
    ("cream cheese", 3.00),
    ("rice", 0.30),
    ("pasta", 0.40),
    ("bread", 0.30),
    ("flour", 0.20),
    ("oats", 0.25),
    ("quinoa", 1.00),
    ("onion", 0.50),
    ("garlic", 0.20),
    ("tomato", 0.75),
    ("bell pepper", 1.50),
    ("carrot", 0.30),
    ("celery", 0.40),
    ("potato", 0.40),
    ("broccoli", 1.50),
    ("spinach", 2.00),
    ("lettuce", 2.00),
    ("mushroom", 2.50),
    ("zucchini", 1.00),
    ("cucumber", 0.75),
    ("apple", 0.75),
    ("banana", 0.25),
    ("lemon", 0.50),
    ("lime", 0.40),
    ("orange", 0.60),
    ("strawberry", 0.30),
    ("blueberry", 0.50),
    ("olive oil", 0.30),
    ("vegetable oil", 0.15),
    ("sugar", 0.10),
    ("salt", 0.05),
    ("pepper", 0.10),
    ("soy sauce", 0.20),
    ("vinegar", 0.15),
    ("honey", 0.40),
    ("vanilla", 0.50),
    ("beans", 1.00),
    ("chickpeas", 1.00),
    ("coconut milk", 2.00),
    ("tomato sauce", 1.50),
    ("broth", 2.00),
    ("stock", 2.00),
)

# Fallbacks for unlisted ingredients, checked in order.
_CATEGORY_PRICES: tuple[tuple[tuple[str, ...], float], ...] = (
    (("spice", "seasoning"), 0.25),
    (("herb",), 0.50),
    (("sauce",), 1.50),
)
DEFAULT_INGREDIENT_PRICE = 1.00

BASE_PREP_MINUTES = 15
MINUTES_PER_INGREDIENT = 2
MAX_PREP_MINUTES = 180
_TECHNIQUE_MINUTES = (
    ("marinate", 30),
    ("refrigerate", 30),
    ("bake", 25),
    ("roast", 30),
    ("slow cook", 120),
    ("simmer", 20),
    ("boil", 15),
    ("fry", 10),
    ("sauté", 10),
)

MIN_SERVINGS = 2
SERVINGS_PER_UNIT = 2
_MEAT_WORDS = ("chicken", "beef", "pork")
_POUND_WORDS = ("lb", "pound")
_STARCH_WORDS = ("pasta", "rice")
_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)")

# (exclusive upper bound, category)
_COST_CATEGORIES: tuple[tuple[float, CostCategory], ...] = (
    (10, "$"),
    (20, "$$"),
    (35, "$$$"),
)


def estimate_ingredient_cost(ingredient: str, measure: str = "") -> float:
    """Estimate the price of one recipe ingredient.

    The measure is accepted for callers that have it, but prices are per
    typical recipe quantity and do not scale with it.
    """
    name = ingredient.lower()
    for key, price in INGREDIENT_PRICES:
        if key in name:
            return price
    for words, price in _CATEGORY_PRICES:
        if any(word in name for word in words):
            return price
    return DEFAULT_INGREDIENT_PRICE


def estimate_recipe_cost(ingredients: Sequence[Ingredient]) -> float:
    """Return the total estimated cost rounded to cents."""
    total = sum(
        estimate_ingredient_cost(item.ingredient, item.measure) for item in ingredients
    )
    return round(total, 2)


def estimate_prep_time(ingredients: Sequence[Ingredient], instructions: str) -> int:
    """Estimate preparation minutes from ingredient count and techniques."""
    minutes = BASE_PREP_MINUTES + len(ingredients) * MINUTES_PER_INGREDIENT
    text = instructions.lower()
    for technique, extra in _TECHNIQUE_MINUTES:
        if technique in text:
            minutes += extra
    return min(minutes, MAX_PREP_MINUTES)


def estimate_servings(ingredients: Sequence[Ingredient]) -> int:
    """Estimate servings from meat or starch quantities, else ingredient count."""
    for item in ingredients:
        name = item.ingredient.lower()
        measure = item.measure.lower()
        if any(word in name for word in _MEAT_WORDS) and any(
            word in measure for word in _POUND_WORDS
        ):
            return max(MIN_SERVINGS, round_half_up(_leading_number(measure) * 2))
        if any(word in name for word in _STARCH_WORDS) and "cup" in measure:
            return max(MIN_SERVINGS, round_half_up(_leading_number(measure) * 2))

    if len(ingredients) < 5:
        return 2
    if len(ingredients) < 10:
        return 4
    return 6


def calculate_cost_per_serving(total_cost: float, servings: int) -> float:
    """Return the cost of one serving rounded to cents."""
    return round(total_cost / max(1, servings), 2)


def classify_recipe_cost(total_cost: float) -> CostCategory:
    """Map a recipe's total cost to a price category."""
    for bound, category in _COST_CATEGORIES:
        if total_cost < bound:
            return category
    return "$$$$"


def generate_recipe_cost_insight(
    total_cost: float, servings: int, estimated_time: float
) -> RecipeCostInsight:
    """Rate a recipe's value from its cost per serving and prep time."""
    cost_per_serving = calculate_cost_per_serving(total_cost, servings)
    cost_score = max(0.0, 10 - cost_per_serving * 2)
    time_score = max(0.0, 10 - estimated_time / 10)
    value_score = round_half_up((cost_score + time_score) / 2)

    if value_score >= 8:
        insight = "Excellent value! Budget-friendly and quick to make."
    elif value_score >= 6:
        insight = "Good value for the quality."
    elif value_score >= 4:
        insight = "Moderate cost, worth it for special occasions."
    else:
        insight = "Premium ingredients, plan ahead for budget."

    if cost_per_serving < 3:
        insight += " Very economical per serving!"
    elif cost_per_serving > 8:
        insight += " High-end meal, perfect for entertaining."

    return RecipeCostInsight(
        cost_per_serving=cost_per_serving,
        cost_category=classify_recipe_cost(total_cost),
        value_score=value_score,
        insight=insight,
    )


def with_estimates(recipe: Recipe) -> Recipe:
    """Fill in missing cost, time and servings estimates."""
    return replace(
        recipe,
        estimated_cost=(
            recipe.estimated_cost
            if recipe.estimated_cost is not None
            else estimate_recipe_cost(recipe.ingredients)
        ),
        estimated_time=(
            recipe.estimated_time
            if recipe.estimated_time is not None
            else estimate_prep_time(recipe.ingredients, recipe.instructions)
        ),
        servings=(
            recipe.servings
            if recipe.servings is not None
            else estimate_servings(recipe.ingredients)
        ),
    )


def _leading_number(measure: str) -> float:
    match = _LEADING_NUMBER.match(measure)
    if match is None:
        return 1.0
    return float(match.group(1)) or 1.0
