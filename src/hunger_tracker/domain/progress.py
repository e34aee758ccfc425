"""Domain models for targets and game progress."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class NutritionTargets:
    """User-editable daily targets."""

    calories: float = 2000
    protein: float = 150
    fiber: float = 25
    budget: float = 20


@dataclass(frozen=True)
class GameProgress:
    """Authoritative XP and challenge-completion state."""

    total_xp: int = 0
    completed_challenges: frozenset[str] = field(default_factory=frozenset)
    last_updated: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True)
class LevelInfo:
    """Level derived from cumulative XP."""

    level: int
    current_xp: int
    xp_to_next_level: int
    progress: int
    title: str
