"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Amount = Literal["small", "medium", "large"]
CostCategory = Literal["$", "$$", "$$$", "$$$$"]

PORTION_MULTIPLIERS: dict[str, float] = {
    "small": 0.7,
    "medium": 1.0,
    "large": 1.3,
}

HOME_COOKED = "Home-cooked"
TAKEOUT = "Takeout"


@dataclass(frozen=True)
class MealMacros:
    """Macronutrients for a meal or a reference portion."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0

    def scaled(self, amount: Amount) -> "MealMacros":
        """Return macros scaled by the portion multiplier."""
        factor = PORTION_MULTIPLIERS.get(amount, 1.0)
        return MealMacros(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            fiber=self.fiber * factor,
        )


@dataclass(frozen=True)
class MealRecord:
    """A logged meal as handed over by the storage layer."""

    id: str
    what: str
    amount: Amount
    time: datetime
    fullness: int | None = None
    next_eat_at: datetime | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    mood: str | None = None
    rating: int | None = None
    hunger_before: int | None = None
    cost: float | None = None
    cost_category: CostCategory | None = None
    notes: str | None = None

    def has_tag(self, tag: str) -> bool:
        """Return True when the meal carries the tag."""
        return tag in self.tags

    @property
    def macros(self) -> MealMacros:
        """Return the as-eaten macros with missing values as zero."""
        return MealMacros(
            calories=self.calories or 0.0,
            protein=self.protein or 0.0,
            carbs=self.carbs or 0.0,
            fat=self.fat or 0.0,
            fiber=self.fiber or 0.0,
        )
