"""Domain models for challenges."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Literal

ChallengeType = Literal["daily", "weekly", "monthly"]
Difficulty = Literal["easy", "medium", "hard"]


class RuleKind(StrEnum):
    """Counting strategy used to measure challenge progress."""

    DISTINCT_DAYS_WITH_TAG = "distinct_days_with_tag"
    DISTINCT_DAYS_ABOVE_DAILY_THRESHOLD = "distinct_days_above_daily_threshold"
    DISTINCT_DAYS_WITHIN_DAILY_LIMIT = "distinct_days_within_daily_limit"
    DISTINCT_TAG_VALUES = "distinct_tag_values"
    COUNT_MATCHING_RECORDS = "count_matching_records"
    UNTRACKED = "untracked"


@dataclass(frozen=True)
class ProgressRule:
    """Parameters for a counting strategy.

    ``tags`` is the tag set a record must intersect, ``nutrient`` names the
    numeric record field summed per day and ``threshold`` is the daily bound.
    """

    kind: RuleKind
    tags: frozenset[str] = field(default_factory=frozenset)
    nutrient: str | None = None
    threshold: float = 0.0


@dataclass(frozen=True)
class ChallengeGoal:
    """Target for a challenge."""

    target: int
    unit: str
    description: str


@dataclass(frozen=True)
class ChallengeDefinition:
    """A time-boxed challenge."""

    id: str
    title: str
    description: str
    emoji: str
    type: ChallengeType
    difficulty: Difficulty
    xp_reward: int
    start: datetime
    end: datetime
    goal: ChallengeGoal
    rule: ProgressRule
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ChallengeProgress:
    """Progress towards a challenge goal."""

    challenge_id: str
    current: int
    target: int
    percentage: float
    completed: bool


@dataclass(frozen=True)
class ChallengeWithProgress:
    """Challenge definition merged with its current progress."""

    challenge: ChallengeDefinition
    progress: ChallengeProgress


@dataclass(frozen=True)
class UserChallengeStats:
    """Aggregate challenge statistics for a user."""

    total_completed: int
    current_streak: int
    longest_streak: int
    total_xp_earned: int
    achievements: list[str]
