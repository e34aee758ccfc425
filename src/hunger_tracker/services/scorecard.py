"""Daily nutrition score card, weekly summary and XP levels."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from hunger_tracker.domain.meals import HOME_COOKED, MealRecord
from hunger_tracker.domain.progress import LevelInfo, NutritionTargets
from hunger_tracker.domain.scorecard import (
    BestDay,
    DailyScoreCard,
    Grade,
    NutritionScore,
    Streak,
    Trend,
    WeeklySummary,
)
from hunger_tracker.services.dates import local_day, resolve_now, round_half_up

XP_PER_LEVEL = 500
MAX_HOME_COOKING_STREAK = 30
MAX_LOGGING_STREAK = 365
TREND_THRESHOLD = 5
ALL_A_BONUS_XP = 100
PROTEIN_CHAMPION_RATIO = 1.2
BUDGET_MASTER_RATIO = 0.8
SUMMARY_DAYS = 7
RECENT_SUMMARY_DAYS = 3

GRADE_COLORS: dict[str, str] = {
    "A+": "#4CAF50",
    "A": "#8BC34A",
    "B": "#FFC107",
    "C": "#FF9800",
    "D": "#FF5722",
    "F": "#F44336",
}
DEFAULT_GRADE_COLOR = "#9E9E9E"

# (minimum percentage, grade), highest first
_GRADE_TIERS: tuple[tuple[float, Grade], ...] = (
    (95, "A+"),
    (85, "A"),
    (75, "B"),
    (65, "C"),
    (55, "D"),
)
_XP_TIERS = ((95, 50), (85, 35), (75, 20), (65, 10))

LEVEL_TITLES = (
    "Beginner",
    "Novice Chef",
    "Home Cook",
    "Meal Planner",
    "Nutrition Aware",
    "Balanced Eater",
    "Health Conscious",
    "Meal Master",
    "Nutrition Pro",
    "Wellness Expert",
    "Food Scientist",
    "Culinary Artist",
    "Master Chef",
    "Nutrition Guru",
    "Legendary Cook",
)


@dataclass(frozen=True)
class _DayTotals:
    calories: float = 0.0
    protein: float = 0.0
    fiber: float = 0.0
    cost: float = 0.0


def calculate_grade(percentage: float) -> Grade:
    """Map a percentage to a letter grade."""
    for minimum, grade in _GRADE_TIERS:
        if percentage >= minimum:
            return grade
    return "F"


def grade_color(grade: str) -> str:
    """Return the display color for a grade."""
    return GRADE_COLORS.get(grade, DEFAULT_GRADE_COLOR)


def calculate_trend(current: float, previous: float) -> Trend:
    """Compare a value with the previous day's value."""
    diff = current - previous
    if diff > TREND_THRESHOLD:
        return "up"
    if diff < -TREND_THRESHOLD:
        return "down"
    return "stable"


def generate_daily_score_card(
    records: Sequence[MealRecord],
    targets: NutritionTargets | None = None,
    now: datetime | None = None,
) -> DailyScoreCard:
    """Grade today's intake against the nutrition targets.

    Days are calendar days in the time zone of ``now``. Percentages are kept
    unrounded and the grades and XP are derived from them.
    """
    current = resolve_now(now)
    goals = targets or NutritionTargets()
    tz = current.tzinfo
    today = local_day(current, tz)
    yesterday = today - timedelta(days=1)

    today_records = [r for r in records if local_day(r.time, tz) == today]
    totals = _sum_day(today_records)
    previous = _sum_day([r for r in records if local_day(r.time, tz) == yesterday])

    scores = [
        _calorie_score(totals, previous, goals),
        _protein_score(totals, previous, goals),
        _fiber_score(totals, previous, goals),
    ]
    if goals.budget > 0:
        scores.append(_budget_score(totals, goals))

    overall_score = sum(score.percentage for score in scores) / len(scores)

    xp_earned = sum(_score_xp(score.percentage) for score in scores)
    if all(score.grade in ("A", "A+") for score in scores):
        xp_earned += ALL_A_BONUS_XP

    achievements = []
    if all(score.grade == "A+" for score in scores):
        achievements.append("Perfect Day")
    if totals.protein >= goals.protein * PROTEIN_CHAMPION_RATIO:
        achievements.append("Protein Champion")
    if goals.budget > 0 and totals.cost < goals.budget * BUDGET_MASTER_RATIO:
        achievements.append("Budget Master")
    if today_records and all(r.has_tag(HOME_COOKED) for r in today_records):
        achievements.append("Home Chef")

    return DailyScoreCard(
        date=today,
        scores=scores,
        overall_grade=calculate_grade(overall_score),
        overall_score=overall_score,
        xp_earned=xp_earned,
        streaks=calculate_streaks(records, current),
        achievements=achievements,
    )


def calculate_streaks(
    records: Sequence[MealRecord], now: datetime | None = None
) -> list[Streak]:
    """Return the active home-cooking and daily-logging streaks."""
    current = resolve_now(now)
    tz = current.tzinfo
    streaks = []

    home_cooking = home_cooking_streak(records, tz)
    if home_cooking > 0:
        streaks.append(Streak("Home Cooking", home_cooking, "🏠"))

    logging_days = logging_streak(records, current)
    if logging_days > 0:
        streaks.append(Streak("Daily Logging", logging_days, "📝"))

    return streaks


def home_cooking_streak(
    records: Sequence[MealRecord], tz: tzinfo | None = None
) -> int:
    """Count the most recent logged days on which every meal was home-cooked.

    Days without records are skipped rather than breaking the streak.
    """
    by_day: dict[date, list[MealRecord]] = {}
    for record in records:
        by_day.setdefault(local_day(record.time, tz), []).append(record)

    streak = 0
    for day in sorted(by_day, reverse=True):
        if not all(r.has_tag(HOME_COOKED) for r in by_day[day]):
            break
        streak += 1
        if streak >= MAX_HOME_COOKING_STREAK:
            break
    return streak


def logging_streak(records: Sequence[MealRecord], now: datetime | None = None) -> int:
    """Count consecutive days up to today with at least one record."""
    current = resolve_now(now)
    tz = current.tzinfo
    logged_days = {local_day(record.time, tz) for record in records}
    today = local_day(current, tz)

    streak = 0
    for offset in range(MAX_LOGGING_STREAK):
        if today - timedelta(days=offset) not in logged_days:
            break
        streak += 1
    return streak


def get_weekly_score_summary(
    records: Sequence[MealRecord],
    targets: NutritionTargets | None = None,
    now: datetime | None = None,
) -> WeeklySummary:
    """Summarize the score cards of the trailing seven days.

    Each day's card is built from every record up to that moment, so early
    days of a short history reflect cumulative rather than per-day data.
    ``improvement`` is the average of the older cards minus the average of the
    three most recent ones, so a negative value means recent days scored higher.
    """
    current = resolve_now(now)
    tz = current.tzinfo
    logged_days = {local_day(record.time, tz) for record in records}

    cards = []
    for offset in range(SUMMARY_DAYS):
        moment = current - timedelta(days=offset)
        if local_day(moment, tz) not in logged_days:
            continue
        history = [record for record in records if record.time <= moment]
        cards.append(generate_daily_score_card(history, targets, moment))

    week_average = sum(card.overall_score for card in cards) / max(1, len(cards))

    best_day = BestDay(date=None, score=0.0)
    for card in cards:
        if card.overall_score > best_day.score:
            best_day = BestDay(date=card.date, score=card.overall_score)

    recent = cards[:RECENT_SUMMARY_DAYS]
    older = cards[RECENT_SUMMARY_DAYS:]
    recent_avg = sum(card.overall_score for card in recent) / max(1, len(recent))
    older_avg = sum(card.overall_score for card in older) / max(1, len(older))

    return WeeklySummary(
        week_average=week_average,
        best_day=best_day,
        improvement=older_avg - recent_avg,
        total_xp=sum(card.xp_earned for card in cards),
    )


def calculate_level(total_xp: int) -> LevelInfo:
    """Derive the level from cumulative XP; level N costs N * 500 XP."""
    level = 1
    xp_required = XP_PER_LEVEL
    total_required = 0
    while total_xp >= total_required + xp_required:
        total_required += xp_required
        level += 1
        xp_required = level * XP_PER_LEVEL

    current_xp = total_xp - total_required
    return LevelInfo(
        level=level,
        current_xp=current_xp,
        xp_to_next_level=xp_required,
        progress=round_half_up(current_xp / xp_required * 100),
        title=LEVEL_TITLES[min(level - 1, len(LEVEL_TITLES) - 1)],
    )


def _sum_day(records: Sequence[MealRecord]) -> _DayTotals:
    return _DayTotals(
        calories=sum(r.calories or 0.0 for r in records),
        protein=sum(r.protein or 0.0 for r in records),
        fiber=sum(r.fiber or 0.0 for r in records),
        cost=sum(r.cost or 0.0 for r in records),
    )


def _percentage(current: float, target: float) -> float:
    if target <= 0:
        return 100.0
    return min(100.0, current / target * 100)


def _score_xp(percentage: float) -> int:
    for minimum, xp in _XP_TIERS:
        if percentage >= minimum:
            return xp
    return 0


def _build_score(
    category: str,
    emoji: str,
    current: float,
    target: float,
    percentage: float,
    trend: Trend,
    message: str,
) -> NutritionScore:
    grade = calculate_grade(percentage)
    return NutritionScore(
        category=category,
        current=current,
        target=target,
        percentage=percentage,
        grade=grade,
        emoji=emoji,
        color=grade_color(grade),
        trend=trend,
        message=message,
    )


def _calorie_score(
    totals: _DayTotals, previous: _DayTotals, goals: NutritionTargets
) -> NutritionScore:
    percentage = _percentage(totals.calories, goals.calories)
    if percentage >= 95:
        message = "Perfect energy balance!"
    elif percentage >= 80:
        message = "Good energy intake"
    elif percentage < 70:
        message = "Eat more to hit your goal"
    else:
        message = "Almost there!"
    return _build_score(
        "Calories",
        "🔥",
        totals.calories,
        goals.calories,
        percentage,
        calculate_trend(totals.calories, previous.calories),
        message,
    )


def _protein_score(
    totals: _DayTotals, previous: _DayTotals, goals: NutritionTargets
) -> NutritionScore:
    percentage = _percentage(totals.protein, goals.protein)
    if percentage >= 90:
        message = "Crushing your protein goals!"
    elif percentage >= 75:
        message = "Good protein intake"
    else:
        message = f"Need {round_half_up(goals.protein - totals.protein)}g more"
    return _build_score(
        "Protein",
        "💪",
        totals.protein,
        goals.protein,
        percentage,
        calculate_trend(totals.protein, previous.protein),
        message,
    )


def _fiber_score(
    totals: _DayTotals, previous: _DayTotals, goals: NutritionTargets
) -> NutritionScore:
    percentage = _percentage(totals.fiber, goals.fiber)
    if percentage >= 90:
        message = "Excellent fiber intake!"
    elif percentage >= 75:
        message = "Good digestive health"
    else:
        message = "Add more veggies and whole grains"
    return _build_score(
        "Fiber",
        "🥗",
        totals.fiber,
        goals.fiber,
        percentage,
        calculate_trend(totals.fiber, previous.fiber),
        message,
    )


def _budget_score(totals: _DayTotals, goals: NutritionTargets) -> NutritionScore:
    percentage = max(0.0, 100 - totals.cost / goals.budget * 100)
    savings = goals.budget - totals.cost
    if savings > 0:
        message = f"Saved ${savings:.2f} today!"
    elif savings < 0:
        message = f"Over budget by ${-savings:.2f}"
    else:
        message = "On track!"
    return _build_score(
        "Budget",
        "💰",
        round(totals.cost, 2),
        goals.budget,
        percentage,
        # Spending has no day-over-day trend.
        "stable",
        message,
    )
