"""Hunger pattern analysis over meal history."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, tzinfo

from hunger_tracker.domain.hunger import (
    FoodEffectiveness,
    HungerPattern,
    HungerScore,
    Insight,
)
from hunger_tracker.domain.meals import MealRecord
from hunger_tracker.services.dates import (
    day_of_week,
    hours_between,
    resolve_now,
    to_local,
)

NEUTRAL_FULLNESS = 3
MIN_RECORDS_FOR_INSIGHTS = 3
MIN_TIMES_EATEN = 3
LOW_SATIETY_HOURS = 2.5
LATE_PREDICTION_HOURS = 0.5
MIN_PATTERN_FREQUENCY = 2
DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass
class _FoodStats:
    total_hours: float = 0.0
    gaps: int = 0
    total_fullness: float = 0.0
    rated_gaps: int = 0


def sort_by_time(records: Sequence[MealRecord]) -> list[MealRecord]:
    """Return records ordered from oldest to newest."""
    return sorted(records, key=lambda record: record.time)


def most_recent(records: Sequence[MealRecord]) -> MealRecord | None:
    """Return the newest record, if any."""
    if not records:
        return None
    return max(records, key=lambda record: record.time)


def calculate_current_hunger_score(
    records: Sequence[MealRecord], now: datetime | None = None
) -> HungerScore:
    """Estimate current hunger from the latest meal."""
    last_meal = most_recent(records)
    if last_meal is None:
        return HungerScore(5, "getting-hungry", "No meals logged yet")

    current = resolve_now(now)
    if last_meal.next_eat_at is not None:
        hours_until_next = hours_between(current, last_meal.next_eat_at)
        if hours_until_next > 2:
            return HungerScore(2, "satisfied", "You should be feeling satisfied")
        if hours_until_next > 0:
            return HungerScore(
                5, "getting-hungry", "You might start feeling hungry soon"
            )
        if hours_until_next > -1:
            return HungerScore(7, "hungry", "Time to eat soon!")
        return HungerScore(9, "very-hungry", "You're probably quite hungry now")

    hours_since = hours_between(last_meal.time, current)
    if hours_since < 2:
        return HungerScore(2, "satisfied", "Recently ate")
    if hours_since < 4:
        return HungerScore(5, "getting-hungry", "Normal interval")
    if hours_since < 6:
        return HungerScore(7, "hungry", "Getting hungry")
    return HungerScore(9, "very-hungry", "Very hungry")


def calculate_meal_effectiveness(
    meal: MealRecord, next_meal: MealRecord | None = None
) -> float:
    """Score how long a meal kept hunger away, weighted by satiety factors."""
    if next_meal is None:
        return 0.0
    hours = hours_between(meal.time, next_meal.time)
    fullness_bonus = (meal.fullness or NEUTRAL_FULLNESS) / 5
    protein_bonus = min((meal.protein or 0.0) / 30, 1.0)
    fiber_bonus = min((meal.fiber or 0.0) / 10, 1.0)
    return hours * (1 + fullness_bonus + protein_bonus + fiber_bonus)


def analyze_food_effectiveness(
    records: Sequence[MealRecord],
) -> list[FoodEffectiveness]:
    """Rank foods by how long they kept the user satisfied.

    Each gap between consecutive meals is attributed to the earlier meal.
    Meals without a fullness rating still count towards the gap average but
    not towards the fullness average, which falls back to the neutral 3.
    """
    ordered = sort_by_time(records)
    stats: dict[str, _FoodStats] = {}
    for meal, next_meal in zip(ordered, ordered[1:], strict=False):
        entry = stats.setdefault(meal.what.lower(), _FoodStats())
        entry.total_hours += hours_between(meal.time, next_meal.time)
        entry.gaps += 1
        if meal.fullness is not None:
            entry.total_fullness += meal.fullness
            entry.rated_gaps += 1

    results = []
    for food_name, entry in stats.items():
        avg_hours = entry.total_hours / max(1, entry.gaps)
        avg_fullness = (
            entry.total_fullness / entry.rated_gaps
            if entry.rated_gaps
            else float(NEUTRAL_FULLNESS)
        )
        results.append(
            FoodEffectiveness(
                food_name=food_name,
                avg_time_between_meals=avg_hours,
                avg_fullness=avg_fullness,
                times_eaten=entry.gaps,
                effectiveness=avg_hours * (avg_fullness / NEUTRAL_FULLNESS),
            )
        )
    return sorted(results, key=lambda item: item.effectiveness, reverse=True)


def find_hunger_patterns(
    records: Sequence[MealRecord], tz: tzinfo | None = None
) -> list[HungerPattern]:
    """Find weekday/hour slots where the user is repeatedly hungry."""
    buckets: dict[tuple[int, int], list[int]] = {}
    for record in records:
        if record.hunger_before is None:
            continue
        moment = to_local(record.time, tz)
        key = (day_of_week(moment), moment.hour)
        buckets.setdefault(key, []).append(record.hunger_before)

    patterns = [
        HungerPattern(
            time_of_day=f"{hour:02d}:00",
            day_of_week=day,
            avg_hunger=sum(values) / len(values),
            frequency=len(values),
        )
        for (day, hour), values in buckets.items()
        if len(values) >= MIN_PATTERN_FREQUENCY
    ]
    return sorted(patterns, key=lambda pattern: pattern.avg_hunger, reverse=True)


def generate_hunger_insights(
    records: Sequence[MealRecord], now: datetime | None = None
) -> list[Insight]:
    """Build user-facing insights from hunger and satiety data."""
    if len(records) < MIN_RECORDS_FOR_INSIGHTS:
        return [
            Insight(
                type="suggestion",
                title="Start tracking hunger",
                message="Log a few more meals to unlock pattern insights!",
                emoji="📊",
            )
        ]

    current = resolve_now(now)
    insights: list[Insight] = []

    effectiveness = analyze_food_effectiveness(records)
    if len(effectiveness) >= 2:
        best = effectiveness[0]
        worst = effectiveness[-1]
        if best.times_eaten >= MIN_TIMES_EATEN:
            insights.append(
                Insight(
                    type="achievement",
                    title="Champion Food Discovered",
                    message=(
                        f"{best.food_name} keeps you satisfied for "
                        f"{best.avg_time_between_meals:.1f} hours on average!"
                    ),
                    emoji="🏆",
                    data=best,
                )
            )
        if (
            worst.times_eaten >= MIN_TIMES_EATEN
            and worst.avg_time_between_meals < LOW_SATIETY_HOURS
        ):
            insights.append(
                Insight(
                    type="warning",
                    title="Low Satiety Alert",
                    message=(
                        f"{worst.food_name} only keeps you full for "
                        f"{worst.avg_time_between_meals:.1f} hours. "
                        "Consider adding protein or fiber."
                    ),
                    emoji="⚠️",
                    data=worst,
                )
            )

    patterns = find_hunger_patterns(records, current.tzinfo)
    if patterns:
        top = patterns[0]
        insights.append(
            Insight(
                type="pattern",
                title="Recurring Hunger Pattern",
                message=(
                    f"You're often hungry around {top.time_of_day} "
                    f"on {DAY_NAMES[top.day_of_week]}s"
                ),
                emoji="🔍",
                data=top,
            )
        )

    last_meal = most_recent(records)
    if last_meal is not None and last_meal.next_eat_at is not None:
        hours_late = hours_between(last_meal.next_eat_at, current)
        if hours_late > LATE_PREDICTION_HOURS:
            insights.append(
                Insight(
                    type="warning",
                    title="Time to Eat?",
                    message="Based on your last meal, you might be getting hungry soon!",
                    emoji="⏰",
                )
            )

    return insights


def generate_hunger_heatmap(
    records: Sequence[MealRecord], tz: tzinfo | None = None
) -> list[list[float]]:
    """Return average hunger per weekday (rows, Sunday first) and hour."""
    totals = [[0.0] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
    counts = [[0] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
    for record in records:
        if record.hunger_before is None:
            continue
        moment = to_local(record.time, tz)
        day = day_of_week(moment)
        totals[day][moment.hour] += record.hunger_before
        counts[day][moment.hour] += 1

    return [
        [
            totals[day][hour] / counts[day][hour] if counts[day][hour] else 0.0
            for hour in range(HOURS_PER_DAY)
        ]
        for day in range(DAYS_PER_WEEK)
    ]
