"""Domain models for cost analysis."""

from dataclasses import dataclass
from typing import Literal

CostInsightType = Literal["spending", "savings", "comparison", "achievement"]


@dataclass(frozen=True)
class MonthlyCostBreakdown:
    """Spending for the current calendar month."""

    total: float
    by_category: dict[str, float]
    by_tag: dict[str, float]
    avg_per_meal: float
    avg_per_day: float
    home_cooked: float
    takeout: float


@dataclass(frozen=True)
class CostPerCalorie:
    """Cost efficiency of a food across its logged meals."""

    food: str
    cost_per_calorie: float
    total_spent: float
    total_calories: float
    times_eaten: int


@dataclass(frozen=True)
class BudgetStatus:
    """Spending against a weekly budget."""

    spent: float
    remaining: float
    percent_used: float
    on_track: bool
    projected_total: float


@dataclass(frozen=True)
class CostInsight:
    """Spending insight with the amount it refers to."""

    type: CostInsightType
    title: str
    message: str
    amount: float
    emoji: str
