"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count

import pytest

from hunger_tracker.config import Settings
from hunger_tracker.domain.meals import MealRecord
from hunger_tracker.domain.progress import GameProgress, NutritionTargets
from hunger_tracker.services.insights import MealSource
from hunger_tracker.services.progress import GameProgressRepository
from hunger_tracker.services.reminders import NotificationSink
from hunger_tracker.services.targets import NutritionTargetsRepository

# Wednesday; its week starts on Sunday 2025-06-15.
FIXED_NOW = datetime(2025, 6, 18, 12, 0, tzinfo=UTC)

_ids = count(1)


def make_meal(time: datetime, what: str = "oatmeal", **fields: object) -> MealRecord:
    """Build a medium meal record with sequential ids."""
    fields.setdefault("amount", "medium")
    if "tags" in fields:
        fields["tags"] = frozenset(fields["tags"])
    return MealRecord(id=f"meal-{next(_ids)}", what=what, time=time, **fields)


@dataclass
class InMemoryMealSource(MealSource):
    """In-memory meal source for tests."""

    meals: list[MealRecord] = field(default_factory=list)
    calls: int = 0

    def list_meals(self) -> list[MealRecord]:
        self.calls += 1
        return list(self.meals)


@dataclass
class InMemoryGameProgressRepository(GameProgressRepository):
    """In-memory game progress repository for tests."""

    progress: GameProgress | None = None
    saves: int = 0

    def load(self) -> GameProgress | None:
        return self.progress

    def save(self, progress: GameProgress) -> None:
        self.progress = progress
        self.saves += 1


@dataclass
class InMemoryTargetsRepository(NutritionTargetsRepository):
    """In-memory nutrition targets repository for tests."""

    targets: NutritionTargets | None = None

    def load(self) -> NutritionTargets | None:
        return self.targets

    def save(self, targets: NutritionTargets) -> None:
        self.targets = targets


@dataclass
class RecordingNotificationSink(NotificationSink):
    """Notification sink that records scheduled notifications."""

    scheduled: list[tuple[datetime, str, str]] = field(default_factory=list)

    def schedule(self, when: datetime, title: str, body: str) -> None:
        self.scheduled.append((when, title, body))


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        timezone="UTC",
        weekly_budget=140,
        quiet_hours_start="23:00",
        quiet_hours_end="06:00",
    )


@pytest.fixture
def meal_source() -> InMemoryMealSource:
    return InMemoryMealSource()


@pytest.fixture
def progress_repository() -> InMemoryGameProgressRepository:
    return InMemoryGameProgressRepository()


@pytest.fixture
def targets_repository() -> InMemoryTargetsRepository:
    return InMemoryTargetsRepository()


@pytest.fixture
def notification_sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    """Yield the application logger and restore it afterwards."""
    logger = logging.getLogger("hunger_tracker")
    logger.handlers.clear()
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
