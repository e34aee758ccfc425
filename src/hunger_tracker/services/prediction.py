"""Next-meal-time prediction from a single meal."""

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from hunger_tracker.domain.meals import Amount, MealMacros

BASELINE_HOURS = 3.5
MIN_HOURS = 1.0
MAX_HOURS = 8.0
NEUTRAL_FULLNESS = 3
FULLNESS_STEP_HOURS = 0.5
WAKE_UP_BUFFER = timedelta(minutes=30)

LIGHT_MEAL_CALORIES = 100
LIGHT_MEAL_PENALTY_HOURS = 1.0
SIMPLE_CARBS_MIN_CARBS = 50
SIMPLE_CARBS_MAX_PROTEIN = 10
SIMPLE_CARBS_MAX_FAT = 5
SIMPLE_CARBS_PENALTY_HOURS = 0.5

# (exclusive lower bound, hours added), highest tier first
_CALORIE_TIERS = ((600, 1.5), (400, 1.0), (200, 0.5))
_PROTEIN_TIERS = ((25, 1.0), (15, 0.5))
_FIBER_TIERS = ((10, 0.5), (5, 0.25))
_FAT_TIERS = ((20, 1.0), (10, 0.5))
_PORTION_HOURS = {"small": -0.5, "medium": 0.0, "large": 0.5}


@dataclass(frozen=True)
class SleepWindow:
    """Hours during which no meal should be predicted."""

    start: time = time(22, 0)
    end: time = time(7, 0)

    @property
    def overnight(self) -> bool:
        """Return True when the window wraps past midnight."""
        return self.start.hour > self.end.hour

    def contains(self, hour: int) -> bool:
        """Return True when the hour falls inside the window."""
        if self.overnight:
            return hour >= self.start.hour or hour < self.end.hour
        return self.start.hour <= hour < self.end.hour


def hunger_delay_hours(
    macros: MealMacros, amount: Amount, fullness: int | None = None
) -> float:
    """Return the clamped number of hours until hunger returns."""
    hours = BASELINE_HOURS

    calorie_bonus = _tier_bonus(macros.calories, _CALORIE_TIERS)
    if calorie_bonus:
        hours += calorie_bonus
    elif macros.calories < LIGHT_MEAL_CALORIES:
        hours -= LIGHT_MEAL_PENALTY_HOURS

    hours += _tier_bonus(macros.protein, _PROTEIN_TIERS)
    hours += _tier_bonus(macros.fiber, _FIBER_TIERS)
    hours += _tier_bonus(macros.fat, _FAT_TIERS)

    if (
        macros.carbs > SIMPLE_CARBS_MIN_CARBS
        and macros.protein < SIMPLE_CARBS_MAX_PROTEIN
        and macros.fat < SIMPLE_CARBS_MAX_FAT
    ):
        hours -= SIMPLE_CARBS_PENALTY_HOURS

    hours += _PORTION_HOURS.get(amount, 0.0)

    resolved_fullness = NEUTRAL_FULLNESS if fullness is None else fullness
    hours += (resolved_fullness - NEUTRAL_FULLNESS) * FULLNESS_STEP_HOURS

    return max(MIN_HOURS, min(MAX_HOURS, hours))


def predict_next_meal_time(
    macros: MealMacros,
    amount: Amount,
    fullness: int | None,
    time_of_day: datetime,
    sleep_window: SleepWindow | None = None,
) -> datetime:
    """Predict when hunger returns, moved out of the sleep window.

    The local hour is read in ``time_of_day``'s own time zone. A candidate
    inside the window is moved to the window end plus thirty minutes, on the
    next day when it landed before midnight.
    """
    window = sleep_window or SleepWindow()
    candidate = time_of_day + timedelta(
        hours=hunger_delay_hours(macros, amount, fullness)
    )
    if not window.contains(candidate.hour):
        return candidate

    wake_day = candidate
    if window.overnight and candidate.hour >= window.start.hour:
        wake_day = candidate + timedelta(days=1)
    wake_up = wake_day.replace(
        hour=window.end.hour, minute=window.end.minute, second=0, microsecond=0
    )
    return wake_up + WAKE_UP_BUFFER


def _tier_bonus(value: float, tiers: tuple[tuple[float, float], ...]) -> float:
    for bound, bonus in tiers:
        if value > bound:
            return bonus
    return 0.0
