"""Pydantic models for persisted meal, target and progress payloads."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hunger_tracker.domain.meals import MealRecord
from hunger_tracker.domain.progress import GameProgress, NutritionTargets


def _ensure_aware(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class MealRecordPayload(BaseModel):
    """Stored meal record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    what: str
    amount: Literal["small", "medium", "large"] = "medium"
    time: datetime
    fullness: int | None = Field(default=None, ge=1, le=5)
    next_eat_at: datetime | None = Field(default=None, alias="nextEatAt")
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)
    mood: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    hunger_before: int | None = Field(default=None, ge=1, le=5, alias="hungerBefore")
    cost: float | None = Field(default=None, ge=0)
    cost_category: Literal["$", "$$", "$$$", "$$$$"] | None = Field(
        default=None, alias="costCategory"
    )
    notes: str | None = None

    @field_validator("time", "next_eat_at")
    @classmethod
    def _naive_as_utc(cls, value: datetime | None) -> datetime | None:
        return _ensure_aware(value)

    def to_record(self) -> MealRecord:
        """Convert to the domain record."""
        return MealRecord(
            id=self.id,
            what=self.what,
            amount=self.amount,
            time=self.time,
            fullness=self.fullness,
            next_eat_at=self.next_eat_at,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            tags=frozenset(self.tags),
            mood=self.mood,
            rating=self.rating,
            hunger_before=self.hunger_before,
            cost=self.cost,
            cost_category=self.cost_category,
            notes=self.notes,
        )

    @classmethod
    def from_record(cls, record: MealRecord) -> "MealRecordPayload":
        """Build a payload from a domain record."""
        return cls(
            id=record.id,
            what=record.what,
            amount=record.amount,
            time=record.time,
            fullness=record.fullness,
            next_eat_at=record.next_eat_at,
            calories=record.calories,
            protein=record.protein,
            carbs=record.carbs,
            fat=record.fat,
            fiber=record.fiber,
            tags=sorted(record.tags),
            mood=record.mood,
            rating=record.rating,
            hunger_before=record.hunger_before,
            cost=record.cost,
            cost_category=record.cost_category,
            notes=record.notes,
        )


class NutritionTargetsPayload(BaseModel):
    """Stored nutrition targets."""

    calories: float = Field(default=2000, ge=0)
    protein: float = Field(default=150, ge=0)
    fiber: float = Field(default=25, ge=0)
    budget: float = Field(default=20, ge=0)

    def to_domain(self) -> NutritionTargets:
        """Convert to domain targets."""
        return NutritionTargets(
            calories=self.calories,
            protein=self.protein,
            fiber=self.fiber,
            budget=self.budget,
        )

    @classmethod
    def from_domain(cls, targets: NutritionTargets) -> "NutritionTargetsPayload":
        """Build a payload from domain targets."""
        return cls(
            calories=targets.calories,
            protein=targets.protein,
            fiber=targets.fiber,
            budget=targets.budget,
        )


class GameProgressPayload(BaseModel):
    """Stored game progress."""

    model_config = ConfigDict(populate_by_name=True)

    total_xp: int = Field(default=0, ge=0, alias="totalXP")
    completed_challenges: list[str] = Field(
        default_factory=list, alias="completedChallenges"
    )
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC), alias="lastUpdated"
    )

    @field_validator("last_updated")
    @classmethod
    def _naive_as_utc(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    def to_domain(self) -> GameProgress:
        """Convert to domain progress."""
        return GameProgress(
            total_xp=self.total_xp,
            completed_challenges=frozenset(self.completed_challenges),
            last_updated=self.last_updated,
        )

    @classmethod
    def from_domain(cls, progress: GameProgress) -> "GameProgressPayload":
        """Build a payload from domain progress."""
        return cls(
            total_xp=progress.total_xp,
            completed_challenges=sorted(progress.completed_challenges),
            last_updated=progress.last_updated,
        )
