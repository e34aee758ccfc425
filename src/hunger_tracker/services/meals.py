"""Meal record construction."""

from datetime import datetime
from uuid import uuid4

from hunger_tracker.domain.meals import Amount, CostCategory, MealMacros, MealRecord
from hunger_tracker.services.prediction import SleepWindow, predict_next_meal_time


def build_meal_record(
    what: str,
    amount: Amount,
    time: datetime,
    reference_macros: MealMacros | None = None,
    *,
    fullness: int | None = None,
    tags: frozenset[str] | set[str] = frozenset(),
    sleep_window: SleepWindow | None = None,
    mood: str | None = None,
    rating: int | None = None,
    hunger_before: int | None = None,
    cost: float | None = None,
    cost_category: CostCategory | None = None,
    notes: str | None = None,
    record_id: str | None = None,
) -> MealRecord:
    """Create a meal record with portion-scaled macros and a hunger prediction.

    ``reference_macros`` describe a medium portion (per 100 g for packaged
    foods); they are scaled by ``amount`` before being stored.
    """
    macros = (reference_macros or MealMacros()).scaled(amount)
    next_eat_at = predict_next_meal_time(macros, amount, fullness, time, sleep_window)
    return MealRecord(
        id=record_id or str(uuid4()),
        what=what,
        amount=amount,
        time=time,
        fullness=fullness,
        next_eat_at=next_eat_at,
        calories=macros.calories,
        protein=macros.protein,
        carbs=macros.carbs,
        fat=macros.fat,
        fiber=macros.fiber,
        tags=frozenset(tags),
        mood=mood,
        rating=rating,
        hunger_before=hunger_before,
        cost=cost,
        cost_category=cost_category,
        notes=notes,
    )
