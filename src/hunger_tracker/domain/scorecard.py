"""Domain models for the nutrition score card."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

Grade = Literal["A+", "A", "B", "C", "D", "F"]
Trend = Literal["up", "down", "stable"]


@dataclass(frozen=True)
class NutritionScore:
    """Score for a single nutrition category."""

    category: str
    current: float
    target: float
    percentage: float
    grade: Grade
    emoji: str
    color: str
    trend: Trend
    message: str


@dataclass(frozen=True)
class Streak:
    """Active streak shown on the score card."""

    name: str
    count: int
    emoji: str


@dataclass(frozen=True)
class DailyScoreCard:
    """Grading of one day against the nutrition targets."""

    date: date
    scores: list[NutritionScore]
    overall_grade: Grade
    overall_score: float
    xp_earned: int
    streaks: list[Streak]
    achievements: list[str]


@dataclass(frozen=True)
class BestDay:
    """Highest scoring day of a week."""

    date: date | None
    score: float


@dataclass(frozen=True)
class WeeklySummary:
    """Summary of the trailing seven score cards."""

    week_average: float
    best_day: BestDay
    improvement: float
    total_xp: int
