"""Insights facade evaluating every analysis in the user's time zone."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from hunger_tracker.domain.advanced import (
    BudgetOptimization,
    HabitPattern,
    MealTimePrediction,
    NutritionGap,
    RecipeRecommendation,
)
from hunger_tracker.domain.challenges import (
    ChallengeDefinition,
    ChallengeWithProgress,
    UserChallengeStats,
)
from hunger_tracker.domain.costs import BudgetStatus, CostInsight, MonthlyCostBreakdown
from hunger_tracker.domain.hunger import FoodEffectiveness, HungerScore, Insight
from hunger_tracker.domain.meals import MealRecord
from hunger_tracker.domain.recipes import Recipe, RecipePreferences
from hunger_tracker.domain.scorecard import DailyScoreCard, WeeklySummary
from hunger_tracker.services import advanced, challenges, costs, hunger, scorecard
from hunger_tracker.services.progress import GameProgressService
from hunger_tracker.services.recipe_costs import with_estimates
from hunger_tracker.services.targets import NutritionTargetsService

_logger = logging.getLogger(__name__)


class MealSource(Protocol):
    """Read interface for logged meals."""

    def list_meals(self) -> list[MealRecord]:
        """Return all logged meals in any order."""


@dataclass
class InsightsService:
    """Reads meals once per call and runs the requested analysis."""

    meal_source: MealSource
    targets_service: NutritionTargetsService
    progress_service: GameProgressService
    timezone_name: str = "UTC"
    weekly_budget: float = 140.0
    debug: bool = False

    def now(self, now: datetime | None = None) -> datetime:
        """Return the given moment, or the current time, in the user's zone."""
        tz = ZoneInfo(self.timezone_name)
        if now is None:
            return datetime.now(tz=tz)
        return now.astimezone(tz)

    def hunger_score(self, now: datetime | None = None) -> HungerScore:
        """Return the current hunger estimate."""
        return hunger.calculate_current_hunger_score(self._meals(), self.now(now))

    def hunger_insights(self, now: datetime | None = None) -> list[Insight]:
        """Return hunger and satiety insights."""
        return hunger.generate_hunger_insights(self._meals(), self.now(now))

    def hunger_heatmap(self) -> list[list[float]]:
        """Return the weekday by hour hunger heatmap."""
        return hunger.generate_hunger_heatmap(
            self._meals(), ZoneInfo(self.timezone_name)
        )

    def food_effectiveness(self) -> list[FoodEffectiveness]:
        """Return foods ranked by how long they keep hunger away."""
        return hunger.analyze_food_effectiveness(self._meals())

    def cost_insights(self, now: datetime | None = None) -> list[CostInsight]:
        """Return spending insights."""
        return costs.generate_cost_insights(self._meals(), self.now(now))

    def monthly_breakdown(self, now: datetime | None = None) -> MonthlyCostBreakdown:
        """Return this month's spending breakdown."""
        return costs.get_monthly_breakdown(self._meals(), self.now(now))

    def budget_status(self, now: datetime | None = None) -> BudgetStatus:
        """Return spending against the weekly budget."""
        return costs.calculate_budget_status(
            self._meals(), self.weekly_budget, self.now(now)
        )

    def score_card(self, now: datetime | None = None) -> DailyScoreCard:
        """Return today's score card."""
        return scorecard.generate_daily_score_card(
            self._meals(), self.targets_service.get_targets(), self.now(now)
        )

    def weekly_summary(self, now: datetime | None = None) -> WeeklySummary:
        """Return the trailing week's score summary."""
        return scorecard.get_weekly_score_summary(
            self._meals(), self.targets_service.get_targets(), self.now(now)
        )

    def active_challenges(
        self, now: datetime | None = None
    ) -> list[ChallengeWithProgress]:
        """Return active challenges with progress."""
        return challenges.get_challenges_with_progress(
            self._meals(), self.now(now), self.targets_service.get_targets()
        )

    def challenge_stats(self, now: datetime | None = None) -> UserChallengeStats:
        """Return challenge statistics backed by the stored game progress."""
        progress = self.progress_service.get_progress()
        return challenges.get_user_challenge_stats(
            self._meals(),
            progress.completed_challenges,
            total_xp=progress.total_xp,
            now=self.now(now),
            targets=self.targets_service.get_targets(),
        )

    def recommended_challenges(
        self, now: datetime | None = None
    ) -> list[ChallengeDefinition]:
        """Return challenges worth focusing on."""
        return challenges.get_recommended_challenges(
            self._meals(), self.now(now), self.targets_service.get_targets()
        )

    def meal_timing(self, now: datetime | None = None) -> MealTimePrediction:
        """Return the learned next-meal prediction."""
        return advanced.predict_meal_timing(self._meals(), self.now(now))

    def nutrition_gaps(self, now: datetime | None = None) -> list[NutritionGap]:
        """Return protein and fiber shortfalls."""
        return advanced.analyze_nutrition_gaps(
            self._meals(), self.targets_service.get_targets(), self.now(now)
        )

    def habits(self) -> list[HabitPattern]:
        """Return habit streaks and consistency."""
        return advanced.analyze_habits(self._meals(), ZoneInfo(self.timezone_name))

    def budget_optimization(self) -> BudgetOptimization:
        """Return the most cost-efficient foods."""
        return advanced.optimize_food_budget(
            self._meals(),
            self.weekly_budget,
            self.targets_service.get_targets().calories,
        )

    def recipe_recommendations(
        self,
        recipes: Sequence[Recipe],
        preferences: RecipePreferences | None = None,
    ) -> list[RecipeRecommendation]:
        """Rank recipes, estimating cost and time where they are missing."""
        return advanced.recommend_recipes(
            [with_estimates(recipe) for recipe in recipes], self._meals(), preferences
        )

    def _meals(self) -> list[MealRecord]:
        meals = self.meal_source.list_meals()
        if self.debug:
            _logger.debug("Loaded meals: count=%s", len(meals))
        return meals
