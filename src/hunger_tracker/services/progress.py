"""Game progress: the single owner of XP and completed challenges."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol

from hunger_tracker.domain.progress import GameProgress, LevelInfo
from hunger_tracker.services.dates import resolve_now
from hunger_tracker.services.scorecard import calculate_level

XP_REWARDS: dict[str, int] = {
    "log_meal": 10,
    "complete_quest": 25,
    "daily_streak": 50,
    "week_streak": 100,
    "month_streak": 500,
    "hit_all_goals": 75,
    "first_meal": 20,
    "water_goal": 15,
    "protein_goal": 30,
}

_logger = logging.getLogger(__name__)


class GameProgressRepository(Protocol):
    """Persistence interface for game progress."""

    def load(self) -> GameProgress | None:
        """Return stored progress, if any."""

    def save(self, progress: GameProgress) -> None:
        """Persist progress."""


def xp_for_action(action: str) -> int:
    """Return the XP reward for an action, 0 when unknown."""
    return XP_REWARDS.get(action, 0)


def add_xp(
    progress: GameProgress, amount: int, now: datetime | None = None
) -> GameProgress:
    """Return progress with XP added; negative amounts are ignored."""
    if amount < 0:
        _logger.warning("Ignoring negative XP award: amount=%s", amount)
        return progress
    return replace(
        progress, total_xp=progress.total_xp + amount, last_updated=resolve_now(now)
    )


def complete_challenge(
    progress: GameProgress,
    challenge_id: str,
    xp_reward: int,
    now: datetime | None = None,
) -> GameProgress:
    """Mark a challenge completed and award its XP at most once."""
    if challenge_id in progress.completed_challenges:
        return progress
    if xp_reward < 0:
        _logger.warning(
            "Ignoring negative challenge reward: challenge=%s reward=%s",
            challenge_id,
            xp_reward,
        )
        xp_reward = 0
    return GameProgress(
        total_xp=progress.total_xp + xp_reward,
        completed_challenges=progress.completed_challenges | {challenge_id},
        last_updated=resolve_now(now),
    )


def award_action(
    progress: GameProgress, action: str, now: datetime | None = None
) -> GameProgress:
    """Add the XP reward for a named action."""
    return add_xp(progress, xp_for_action(action), now)


def reset_progress(now: datetime | None = None) -> GameProgress:
    """Return fresh progress with no XP and no completions."""
    return GameProgress(last_updated=resolve_now(now))


@dataclass
class GameProgressService:
    """Service that applies progress changes and persists them."""

    repository: GameProgressRepository

    def get_progress(self) -> GameProgress:
        """Return stored progress or a fresh one."""
        return self.repository.load() or GameProgress()

    def get_level(self) -> LevelInfo:
        """Return the level for the stored XP."""
        return calculate_level(self.get_progress().total_xp)

    def add_xp(self, amount: int, now: datetime | None = None) -> GameProgress:
        """Add XP and persist the result."""
        current = self.get_progress()
        updated = add_xp(current, amount, now)
        if updated is not current:
            self.repository.save(updated)
            _logger.info("XP awarded: amount=%s total=%s", amount, updated.total_xp)
        return updated

    def award_action(self, action: str, now: datetime | None = None) -> GameProgress:
        """Award XP for an action and persist the result."""
        return self.add_xp(xp_for_action(action), now)

    def complete_challenge(
        self, challenge_id: str, xp_reward: int, now: datetime | None = None
    ) -> GameProgress:
        """Complete a challenge once and persist the result."""
        current = self.get_progress()
        updated = complete_challenge(current, challenge_id, xp_reward, now)
        if updated is not current:
            self.repository.save(updated)
            _logger.info(
                "Challenge completed: challenge=%s total=%s",
                challenge_id,
                updated.total_xp,
            )
        return updated

    def reset(self, now: datetime | None = None) -> GameProgress:
        """Clear all progress."""
        progress = reset_progress(now)
        self.repository.save(progress)
        _logger.info("Game progress reset")
        return progress
