"""Domain models for hunger analysis."""

from dataclasses import dataclass
from typing import Literal

HungerStatus = Literal["satisfied", "getting-hungry", "hungry", "very-hungry"]
InsightType = Literal["pattern", "warning", "suggestion", "achievement"]


@dataclass(frozen=True)
class HungerScore:
    """Current hunger estimate on a 0-10 scale."""

    score: int
    status: HungerStatus
    message: str


@dataclass(frozen=True)
class FoodEffectiveness:
    """How long a food kept the user satisfied."""

    food_name: str
    avg_time_between_meals: float
    avg_fullness: float
    times_eaten: int
    effectiveness: float


@dataclass(frozen=True)
class HungerPattern:
    """Recurring hunger level for a weekday and hour."""

    time_of_day: str
    day_of_week: int
    avg_hunger: float
    frequency: int


@dataclass(frozen=True)
class Insight:
    """Textual insight shown to the user."""

    type: InsightType
    title: str
    message: str
    emoji: str
    data: object | None = None
