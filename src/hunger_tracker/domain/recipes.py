"""Domain models for recipes handed in by lookup collaborators."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ingredient:
    """Recipe ingredient with its free-text measure."""

    ingredient: str
    measure: str = ""


@dataclass(frozen=True)
class Recipe:
    """Recipe summary used by the recommender."""

    id: str
    name: str
    category: str
    ingredients: tuple[Ingredient, ...] = ()
    area: str = ""
    instructions: str = ""
    estimated_cost: float | None = None
    estimated_time: float | None = None
    servings: int | None = None


@dataclass(frozen=True)
class RecipePreferences:
    """Constraints applied when ranking recipes."""

    max_cost: float | None = None
    max_time: float | None = None
    target_protein: float | None = None
    avoid_categories: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class RecipeCostInsight:
    """Value assessment of a recipe."""

    cost_per_serving: float
    cost_category: str
    value_score: int
    insight: str
