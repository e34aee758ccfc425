"""Spending analysis over meal history."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from hunger_tracker.domain.costs import (
    BudgetStatus,
    CostInsight,
    CostPerCalorie,
    MonthlyCostBreakdown,
)
from hunger_tracker.domain.meals import HOME_COOKED, TAKEOUT, CostCategory, MealRecord
from hunger_tracker.services.dates import (
    day_of_week,
    days_in_month,
    local_day,
    resolve_now,
    start_of_month,
    start_of_week,
    to_local,
)

CATEGORY_ESTIMATES: dict[str, float] = {
    "$": 5,
    "$$": 12,
    "$$$": 25,
    "$$$$": 50,
}

ON_TRACK_BUFFER = 1.1
MIN_COST_RECORDS = 5
MIN_REPEATS = 3
EXPENSIVE_RATIO = 3
STREAK_WINDOW_DAYS = 7
MIN_HOME_COOKED_DAYS = 5
TAKEOUT_SAVINGS_SHARE = 0.5
SPENDING_INCREASE_RATIO = 1.2
DAYS_PER_PROJECTED_MONTH = 30


@dataclass
class _CostStats:
    total_cost: float = 0.0
    total_calories: float = 0.0
    count: int = 0


def estimate_cost_from_category(category: CostCategory) -> float:
    """Return a typical meal price for a cost category."""
    return CATEGORY_ESTIMATES[category]


def calculate_total_spent(
    records: Sequence[MealRecord], days: int = 30, now: datetime | None = None
) -> float:
    """Sum meal costs within the trailing number of days."""
    cutoff = resolve_now(now) - timedelta(days=days)
    return sum(record.cost or 0.0 for record in records if record.time > cutoff)


def get_monthly_breakdown(
    records: Sequence[MealRecord], now: datetime | None = None
) -> MonthlyCostBreakdown:
    """Break down spending since the first day of the current month.

    ``avg_per_day`` divides by the number of days in the month rather than
    the days elapsed so far, so it reads low early in the month.
    """
    current = resolve_now(now)
    month_start = start_of_month(current)
    month_records = [record for record in records if record.time >= month_start]

    total = 0.0
    by_category = {category: 0.0 for category in CATEGORY_ESTIMATES}
    by_tag: dict[str, float] = {}
    home_cooked = 0.0
    takeout = 0.0
    for record in month_records:
        cost = record.cost or 0.0
        total += cost
        if record.cost_category:
            by_category[record.cost_category] += cost
        for tag in sorted(record.tags):
            by_tag[tag] = by_tag.get(tag, 0.0) + cost
        if record.has_tag(HOME_COOKED):
            home_cooked += cost
        if record.has_tag(TAKEOUT):
            takeout += cost

    return MonthlyCostBreakdown(
        total=total,
        by_category=by_category,
        by_tag=by_tag,
        avg_per_meal=total / len(month_records) if month_records else 0.0,
        avg_per_day=total / days_in_month(current),
        home_cooked=home_cooked,
        takeout=takeout,
    )


def calculate_cost_per_calorie(
    records: Sequence[MealRecord],
) -> list[CostPerCalorie]:
    """Rank foods by cost per calorie, cheapest first."""
    stats: dict[str, _CostStats] = {}
    for record in records:
        if not record.cost or not record.calories:
            continue
        entry = stats.setdefault(record.what.lower(), _CostStats())
        entry.total_cost += record.cost
        entry.total_calories += record.calories
        entry.count += 1

    results = [
        CostPerCalorie(
            food=food,
            cost_per_calorie=entry.total_cost / entry.total_calories,
            total_spent=entry.total_cost,
            total_calories=entry.total_calories,
            times_eaten=entry.count,
        )
        for food, entry in stats.items()
    ]
    return sorted(results, key=lambda item: item.cost_per_calorie)


def calculate_budget_status(
    records: Sequence[MealRecord],
    weekly_budget: float,
    now: datetime | None = None,
) -> BudgetStatus:
    """Compare spending since Sunday with a weekly budget."""
    current = resolve_now(now)
    week_start = start_of_week(current)
    spent = sum(record.cost or 0.0 for record in records if record.time >= week_start)

    elapsed_days = day_of_week(current) + 1
    expected = weekly_budget / 7 * elapsed_days
    return BudgetStatus(
        spent=spent,
        remaining=weekly_budget - spent,
        percent_used=spent / weekly_budget * 100 if weekly_budget > 0 else 0.0,
        on_track=spent <= expected * ON_TRACK_BUFFER,
        projected_total=spent / elapsed_days * 7,
    )


def generate_cost_insights(
    records: Sequence[MealRecord], now: datetime | None = None
) -> list[CostInsight]:
    """Build spending insights and savings opportunities."""
    if sum(1 for record in records if record.cost) < MIN_COST_RECORDS:
        return [
            CostInsight(
                type="spending",
                title="Start tracking costs",
                message="Add costs to your meals to unlock spending insights!",
                amount=0.0,
                emoji="💰",
            )
        ]

    current = resolve_now(now)
    breakdown = get_monthly_breakdown(records, current)
    weekly_total = calculate_total_spent(records, 7, current)
    monthly_total = breakdown.total

    insights = [
        CostInsight(
            type="spending",
            title="Monthly Food Budget",
            message=f"You've spent ${monthly_total:.2f} on food this month",
            amount=monthly_total,
            emoji="📊",
        )
    ]

    if 0 < breakdown.home_cooked < breakdown.takeout:
        insights.append(
            CostInsight(
                type="comparison",
                title="Home Cooking Saves Money",
                message=(
                    "Takeout costs you "
                    f"{breakdown.takeout / breakdown.home_cooked:.1f}x "
                    "more than home cooking"
                ),
                amount=breakdown.takeout - breakdown.home_cooked,
                emoji="🏠",
            )
        )

    insights.extend(_efficiency_insights(calculate_cost_per_calorie(records)))

    streak_insight = _home_cooking_streak_insight(records, breakdown, current)
    if streak_insight is not None:
        insights.append(streak_insight)

    weekly_projection = weekly_total / 7 * DAYS_PER_PROJECTED_MONTH
    if weekly_projection > monthly_total * SPENDING_INCREASE_RATIO:
        increase = (
            (weekly_projection / monthly_total - 1) * 100 if monthly_total > 0 else 100
        )
        insights.append(
            CostInsight(
                type="spending",
                title="Spending Increase",
                message=(
                    f"Your current pace projects ${weekly_projection:.2f}/month - "
                    f"{increase:.0f}% higher than usual"
                ),
                amount=weekly_projection - monthly_total,
                emoji="📈",
            )
        )

    return insights


def _efficiency_insights(ranking: list[CostPerCalorie]) -> list[CostInsight]:
    if len(ranking) < 2:
        return []
    best = ranking[0]
    worst = ranking[-1]
    insights = []
    if best.times_eaten >= MIN_REPEATS:
        insights.append(
            CostInsight(
                type="achievement",
                title="Best Value Meal",
                message=(
                    f"{best.food} is your most cost-effective choice at "
                    f"${best.cost_per_calorie * 100:.3f} per 100 calories"
                ),
                amount=best.total_spent,
                emoji="🏆",
            )
        )
    if (
        worst.times_eaten >= MIN_REPEATS
        and worst.cost_per_calorie >= best.cost_per_calorie * EXPENSIVE_RATIO
    ):
        insights.append(
            CostInsight(
                type="spending",
                title="Expensive Choice",
                message=(
                    f"{worst.food} costs "
                    f"{worst.cost_per_calorie / best.cost_per_calorie:.1f}x more "
                    f"per calorie than {best.food}"
                ),
                amount=worst.total_spent,
                emoji="💸",
            )
        )
    return insights


def _home_cooking_streak_insight(
    records: Sequence[MealRecord],
    breakdown: MonthlyCostBreakdown,
    now: datetime,
) -> CostInsight | None:
    tz = now.tzinfo
    window_days = {
        (to_local(now, tz) - timedelta(days=offset)).date()
        for offset in range(STREAK_WINDOW_DAYS)
    }
    home_days = {
        local_day(record.time, tz)
        for record in records
        if record.has_tag(HOME_COOKED)
    } & window_days
    if len(home_days) < MIN_HOME_COOKED_DAYS:
        return None

    month_start = start_of_month(now)
    takeout_meals = sum(
        1
        for record in records
        if record.has_tag(TAKEOUT) and record.time >= month_start
    )
    avg_takeout_cost = breakdown.takeout / max(1, takeout_meals)
    savings = len(home_days) * avg_takeout_cost * TAKEOUT_SAVINGS_SHARE
    return CostInsight(
        type="savings",
        title=f"{len(home_days)}-Day Home Cooking Streak!",
        message=(
            f"You've saved approximately ${savings:.2f} this week by cooking at home"
        ),
        amount=savings,
        emoji="🔥",
    )
