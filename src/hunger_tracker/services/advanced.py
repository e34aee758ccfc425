"""Predictions and recommendations learned from meal history."""

import math
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta, tzinfo

from hunger_tracker.domain.advanced import (
    BudgetOptimization,
    EfficientFood,
    HabitPattern,
    HabitTrend,
    MealTimePrediction,
    NutritionGap,
    RecipeRecommendation,
    Severity,
)
from hunger_tracker.domain.meals import HOME_COOKED, MealRecord
from hunger_tracker.domain.progress import NutritionTargets
from hunger_tracker.domain.recipes import Recipe, RecipePreferences
from hunger_tracker.services.dates import (
    hours_between,
    resolve_now,
    round_half_up,
    to_local,
)

DEFAULT_GAP_HOURS = 4.0
MIN_GAP_HOURS = 0.5
MAX_GAP_HOURS = 12.0
MAX_TIMING_MEALS = 20
NO_DATA_VARIANCE = 10.0
MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 0.95

BASE_RECIPE_SCORE = 50
RECENT_MEALS_FOR_NOVELTY = 10
MEALS_PER_DAY = 3
MAX_EFFICIENT_FOODS = 10
TOP_EFFICIENT_FOODS = 3

HIGH_PROTEIN_MEAL = 20
HOME_COOKING_STREAK_GOAL = 5
IMPROVING_RATIO = 0.7
CONSISTENT_TIMING = 70
NO_TIMING_VARIANCE = 50.0
MEAL_SLOTS = ("Breakfast", "Lunch", "Dinner")

GAP_WINDOW_DAYS = 7
PROTEIN_GAP_MIN = 5
FIBER_GAP_MIN = 3

PROTEIN_SUGGESTIONS = [
    "Add chicken breast (+30g protein)",
    "Greek yogurt breakfast (+15g)",
    "Protein shake (+25g)",
    "Eggs for lunch (+12g per 2 eggs)",
]
FIBER_SUGGESTIONS = [
    "Add berries to breakfast (+4g)",
    "Switch to whole grain bread (+3g)",
    "Add beans to meals (+8g)",
    "Snack on vegetables (+5g)",
]


def predict_meal_timing(
    records: Sequence[MealRecord], now: datetime | None = None
) -> MealTimePrediction:
    """Predict the next meal from the user's own meal rhythm.

    The average gap between recent meals is stretched by the satiety of
    the last meal. Confidence drops as the gaps vary more.
    """
    current = resolve_now(now)
    if not records:
        return MealTimePrediction(
            predicted_time=current + timedelta(hours=DEFAULT_GAP_HOURS),
            confidence=MIN_CONFIDENCE,
            reason="Default prediction (no data)",
            hunger_level=5,
        )

    newest_first = sorted(records, key=lambda record: record.time, reverse=True)
    last_meal = newest_first[0]

    window = newest_first[: MAX_TIMING_MEALS + 1]
    gaps = []
    for later, earlier in zip(window, window[1:], strict=False):
        gap = hours_between(earlier.time, later.time)
        if MIN_GAP_HOURS < gap < MAX_GAP_HOURS:
            gaps.append(gap)

    avg_gap = sum(gaps) / len(gaps) if gaps else DEFAULT_GAP_HOURS
    protein_factor = min((last_meal.protein or 0.0) / 30, 1.0)
    fiber_factor = min((last_meal.fiber or 0.0) / 10, 1.0)
    predicted_gap = avg_gap * (1 + protein_factor * 0.3 + fiber_factor * 0.2)

    variance = (
        sum((gap - avg_gap) ** 2 for gap in gaps) / len(gaps)
        if len(gaps) > 1
        else NO_DATA_VARIANCE
    )
    confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, 1 - variance / 10))

    hours_since = hours_between(last_meal.time, current)
    hunger_level = min(10, max(1, round_half_up(hours_since / predicted_gap * 10)))

    return MealTimePrediction(
        predicted_time=last_meal.time + timedelta(hours=predicted_gap),
        confidence=confidence,
        reason=(
            f"Based on your {len(gaps)} recent meals "
            f"(avg {avg_gap:.1f}h gap) + meal composition"
        ),
        hunger_level=hunger_level,
    )


def recommend_recipes(
    recipes: Sequence[Recipe],
    records: Sequence[MealRecord],
    preferences: RecipePreferences | None = None,
) -> list[RecipeRecommendation]:
    """Score recipes against budget, time and eating history."""
    prefs = preferences or RecipePreferences()
    favorite_foods = Counter(record.what.lower() for record in records if record.what)
    tag_counts = Counter(tag for record in records for tag in record.tags)
    newest_first = sorted(records, key=lambda record: record.time, reverse=True)
    recent_foods = [
        record.what.lower()
        for record in newest_first[:RECENT_MEALS_FOR_NOVELTY]
        if record.what
    ]

    recommendations = []
    for recipe in recipes:
        score = BASE_RECIPE_SCORE
        reasons = []

        matches_budget = (
            not prefs.max_cost or (recipe.estimated_cost or 0) <= prefs.max_cost
        )
        if matches_budget:
            score += 15
            reasons.append("Within budget")
        else:
            score -= 20

        matches_time = (
            not prefs.max_time or (recipe.estimated_time or 0) <= prefs.max_time
        )
        if matches_time:
            score += 15
            reasons.append("Quick to prepare")

        # Recipes carry no macros, so any protein target counts as a match.
        matches_macros = True
        if prefs.target_protein:
            score += 10
            reasons.append("Good protein source")

        category_count = tag_counts.get(recipe.category, 0)
        if category_count > 0:
            score += min(20, category_count * 3)
            reasons.append(f"You often eat {recipe.category}")

        familiar = sum(
            1
            for item in recipe.ingredients
            if _overlaps(item.ingredient.lower(), favorite_foods)
        )
        if familiar > 0:
            score += min(15, familiar * 3)
            reasons.append("Uses ingredients you like")

        if not _overlaps(recipe.name.lower(), recent_foods):
            score += 10
            reasons.append("Adds variety")

        if recipe.category in prefs.avoid_categories:
            score -= 30

        recommendations.append(
            RecipeRecommendation(
                recipe=recipe,
                score=max(0, min(100, score)),
                reasons=reasons,
                matches_budget=matches_budget,
                matches_time=matches_time,
                matches_macros=matches_macros,
            )
        )

    return sorted(recommendations, key=lambda item: item.score, reverse=True)


def optimize_food_budget(
    records: Sequence[MealRecord],
    weekly_budget: float,
    calorie_goal: float = 2000,
) -> BudgetOptimization:
    """Rank logged foods by nutrition per dollar and project a weekly spend.

    ``calorie_goal`` is accepted for callers that track it; the ranking
    itself does not depend on it.
    """
    ranked = sorted(
        (
            EfficientFood(
                food=record.what,
                cost=record.cost,
                calories=record.calories,
                protein=record.protein or 0.0,
                efficiency=(record.calories + (record.protein or 0.0) * 10)
                / record.cost,
            )
            for record in records
            if record.cost and record.cost > 0 and record.calories
        ),
        key=lambda food: food.efficiency,
        reverse=True,
    )[:MAX_EFFICIENT_FOODS]

    top = ranked[:TOP_EFFICIENT_FOODS]
    avg_cost = sum(food.cost for food in top) / max(1, len(top))
    projected = avg_cost * MEALS_PER_DAY * 7
    return BudgetOptimization(
        daily_target=weekly_budget / 7,
        recommended=ranked,
        projected_spending=projected,
        savings=weekly_budget - projected,
    )


def analyze_habits(
    records: Sequence[MealRecord], tz: tzinfo | None = None
) -> list[HabitPattern]:
    """Report streaks and consistency for the tracked habits."""
    newest_first = sorted(records, key=lambda record: record.time, reverse=True)

    def is_home_cooked(record: MealRecord) -> bool:
        return record.has_tag(HOME_COOKED)

    def is_high_protein(record: MealRecord) -> bool:
        return (record.protein or 0.0) >= HIGH_PROTEIN_MEAL

    home_current, home_longest = _streaks(newest_first, is_home_cooked)
    protein_current, protein_longest = _streaks(newest_first, is_high_protein)
    timing = max(0.0, 100 - _meal_timing_variance(newest_first, tz))

    return [
        HabitPattern(
            habit="Home Cooking",
            current_streak=home_current,
            longest_streak=home_longest,
            consistency=_consistency(newest_first, is_home_cooked),
            trend=_streak_trend(home_current, home_longest),
            suggestion=(
                "Amazing! Keep the streak going!"
                if home_current >= HOME_COOKING_STREAK_GOAL
                else "Try meal prepping to make home cooking easier"
            ),
        ),
        HabitPattern(
            habit="High Protein Meals",
            current_streak=protein_current,
            longest_streak=protein_longest,
            consistency=_consistency(newest_first, is_high_protein),
            trend=_streak_trend(protein_current, protein_longest),
            suggestion="Aim for 20g+ protein per meal for better satiety",
        ),
        HabitPattern(
            habit="Consistent Meal Times",
            current_streak=0,
            longest_streak=0,
            consistency=timing,
            trend="stable" if timing > CONSISTENT_TIMING else "declining",
            suggestion=(
                "Great rhythm! Your body loves consistency"
                if timing > CONSISTENT_TIMING
                else "Try eating at similar times daily for better hunger regulation"
            ),
        ),
    ]


def analyze_nutrition_gaps(
    records: Sequence[MealRecord],
    targets: NutritionTargets | None = None,
    now: datetime | None = None,
) -> list[NutritionGap]:
    """Compare recent protein and fiber with the daily targets.

    Intake is averaged per meal over records from the last seven days,
    including any logged after ``now``.
    """
    current = resolve_now(now)
    goals = targets or NutritionTargets()
    cutoff = current - timedelta(days=GAP_WINDOW_DAYS)
    recent = [record for record in records if record.time >= cutoff]
    meal_count = max(1, len(recent))

    avg_protein = sum(r.protein or 0.0 for r in recent) / meal_count
    avg_fiber = sum(r.fiber or 0.0 for r in recent) / meal_count

    gaps = []
    protein_gap = goals.protein - avg_protein
    if protein_gap > PROTEIN_GAP_MIN:
        gaps.append(
            NutritionGap(
                nutrient="Protein",
                current=round_half_up(avg_protein),
                target=goals.protein,
                gap=round_half_up(protein_gap),
                severity=_severity(protein_gap, high=30, medium=15),
                suggestions=list(PROTEIN_SUGGESTIONS),
            )
        )

    fiber_gap = goals.fiber - avg_fiber
    if fiber_gap > FIBER_GAP_MIN:
        gaps.append(
            NutritionGap(
                nutrient="Fiber",
                current=round_half_up(avg_fiber),
                target=goals.fiber,
                gap=round_half_up(fiber_gap),
                severity=_severity(fiber_gap, high=15, medium=8),
                suggestions=list(FIBER_SUGGESTIONS),
            )
        )

    return gaps


def _overlaps(text: str, candidates: Iterable[str]) -> bool:
    if not text:
        return False
    return any(food in text or text in food for food in candidates if food)


def _streaks(
    newest_first: Sequence[MealRecord], condition: Callable[[MealRecord], bool]
) -> tuple[int, int]:
    current = 0
    longest = 0
    run = 0
    leading = True
    for record in newest_first:
        if condition(record):
            run += 1
            longest = max(longest, run)
            if leading:
                current = run
        else:
            run = 0
            leading = False
    return current, longest


def _consistency(
    records: Sequence[MealRecord], condition: Callable[[MealRecord], bool]
) -> float:
    matching = sum(1 for record in records if condition(record))
    return round_half_up(matching / max(1, len(records)) * 100)


def _streak_trend(current: int, longest: int) -> HabitTrend:
    return "improving" if current > longest * IMPROVING_RATIO else "stable"


def _meal_timing_variance(
    records: Sequence[MealRecord], tz: tzinfo | None
) -> float:
    """Average per-slot standard deviation of meal hours."""
    hours_by_slot: dict[str, list[int]] = {}
    for record in records:
        slot = next((name for name in MEAL_SLOTS if record.has_tag(name)), "Other")
        hours_by_slot.setdefault(slot, []).append(to_local(record.time, tz).hour)

    deviations = []
    for hours in hours_by_slot.values():
        if len(hours) < 2:
            continue
        mean = sum(hours) / len(hours)
        variance = sum((hour - mean) ** 2 for hour in hours) / len(hours)
        deviations.append(math.sqrt(variance))

    if not deviations:
        return NO_TIMING_VARIANCE
    return sum(deviations) / len(deviations)


def _severity(gap: float, high: float, medium: float) -> Severity:
    if gap > high:
        return "high"
    if gap > medium:
        return "medium"
    return "low"
