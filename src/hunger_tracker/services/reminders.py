"""Reminder planning on top of an injected notification sink."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Protocol

from hunger_tracker.domain.meals import MealRecord
from hunger_tracker.services.dates import local_day, resolve_now

STREAK_REMINDER_TIME = time(20, 0)

_logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Delivery interface for scheduled notifications."""

    def schedule(self, when: datetime, title: str, body: str) -> None:
        """Schedule a notification for the given moment."""


@dataclass(frozen=True)
class ReminderSettings:
    """User preferences for reminders."""

    enabled: bool = True
    meal_reminders: bool = True
    streak_reminders: bool = True
    challenge_reminders: bool = True
    quiet_hours_start: time = field(default_factory=lambda: time(22, 0))
    quiet_hours_end: time = field(default_factory=lambda: time(8, 0))


def is_quiet_hours(moment: datetime, start: time, end: time) -> bool:
    """Return True when the moment's local time falls in the quiet window."""
    current = moment.hour * 60 + moment.minute
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    if start_minutes > end_minutes:
        return current >= start_minutes or current < end_minutes
    return start_minutes <= current < end_minutes


@dataclass
class ReminderService:
    """Decides which reminders to send and hands them to the sink."""

    sink: NotificationSink
    settings: ReminderSettings = field(default_factory=ReminderSettings)

    def schedule_meal_reminder(self, when: datetime, now: datetime | None = None) -> bool:
        """Schedule the "time to eat" reminder at the predicted moment."""
        current = resolve_now(now)
        if not (self.settings.enabled and self.settings.meal_reminders):
            return False
        if self._quiet(current):
            _logger.info("Skipping meal reminder during quiet hours")
            return False
        if when <= current:
            _logger.info("Skipping meal reminder in the past: when=%s", when)
            return False
        self.sink.schedule(
            when,
            "🍽️ Time to eat?",
            "You might be hungry again! Check in and see how you feel.",
        )
        return True

    def schedule_streak_reminder(
        self, records: Sequence[MealRecord], now: datetime | None = None
    ) -> bool:
        """Remind in the evening when nothing has been logged today."""
        current = resolve_now(now)
        if not (self.settings.enabled and self.settings.streak_reminders):
            return False
        today = local_day(current, current.tzinfo)
        if any(local_day(r.time, current.tzinfo) == today for r in records):
            return False
        reminder_at = current.replace(
            hour=STREAK_REMINDER_TIME.hour,
            minute=STREAK_REMINDER_TIME.minute,
            second=0,
            microsecond=0,
        )
        if reminder_at <= current:
            return False
        if self._quiet(current):
            _logger.info("Skipping streak reminder during quiet hours")
            return False
        self.sink.schedule(
            reminder_at,
            "🔥 Keep Your Streak!",
            "Don't forget to log your meals today to maintain your streak!",
        )
        return True

    def notify_challenge_complete(
        self, challenge_title: str, xp_earned: int, now: datetime | None = None
    ) -> bool:
        """Send an immediate notice for a completed challenge."""
        current = resolve_now(now)
        if not (self.settings.enabled and self.settings.challenge_reminders):
            return False
        if self._quiet(current):
            _logger.info("Skipping challenge notice during quiet hours")
            return False
        self.sink.schedule(
            current,
            "🎉 Challenge Complete!",
            f'You completed "{challenge_title}" and earned {xp_earned} XP!',
        )
        return True

    def _quiet(self, moment: datetime) -> bool:
        return is_quiet_hours(
            moment, self.settings.quiet_hours_start, self.settings.quiet_hours_end
        )
