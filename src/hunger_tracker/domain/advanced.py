"""Domain models for predictions and recommendations."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from hunger_tracker.domain.recipes import Recipe

HabitTrend = Literal["improving", "stable", "declining"]
Severity = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class MealTimePrediction:
    """Learned prediction of the next meal time."""

    predicted_time: datetime
    confidence: float
    reason: str
    hunger_level: int


@dataclass(frozen=True)
class RecipeRecommendation:
    """Scored recipe with the reasons behind the score."""

    recipe: Recipe
    score: float
    reasons: list[str]
    matches_budget: bool
    matches_time: bool
    matches_macros: bool


@dataclass(frozen=True)
class EfficientFood:
    """Logged meal ranked by nutrition per unit of cost."""

    food: str
    cost: float
    calories: float
    protein: float
    efficiency: float


@dataclass(frozen=True)
class BudgetOptimization:
    """Cheapest nutritious foods and the spend they imply."""

    daily_target: float
    recommended: list[EfficientFood]
    projected_spending: float
    savings: float


@dataclass(frozen=True)
class HabitPattern:
    """Streak and consistency of a habit."""

    habit: str
    current_streak: int
    longest_streak: int
    consistency: float
    trend: HabitTrend
    suggestion: str


@dataclass(frozen=True)
class NutritionGap:
    """Shortfall of a nutrient against its daily target."""

    nutrient: str
    current: float
    target: float
    gap: float
    severity: Severity
    suggestions: list[str]
