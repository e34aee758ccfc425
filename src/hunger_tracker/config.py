"""Application configuration."""

import os
from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict

from hunger_tracker.domain.progress import NutritionTargets
from hunger_tracker.services.prediction import SleepWindow
from hunger_tracker.services.reminders import ReminderSettings

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    timezone: str = "UTC"
    sleep_start: str = "22:00"
    sleep_end: str = "07:00"
    calorie_target: float = 2000
    protein_target: float = 150
    fiber_target: float = 25
    daily_budget: float = 20
    weekly_budget: float = 140
    notifications_enabled: bool = True
    meal_reminders: bool = True
    streak_reminders: bool = True
    challenge_reminders: bool = True
    quiet_hours_start: str = "22:00"
    quiet_hours_end: str = "08:00"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def targets(self) -> NutritionTargets:
        """Return the default nutrition targets."""
        return NutritionTargets(
            calories=self.calorie_target,
            protein=self.protein_target,
            fiber=self.fiber_target,
            budget=self.daily_budget,
        )

    def sleep_window(self) -> SleepWindow:
        """Return the configured sleep window."""
        return SleepWindow(
            start=parse_clock_time(self.sleep_start, time(22, 0)),
            end=parse_clock_time(self.sleep_end, time(7, 0)),
        )

    def reminder_settings(self) -> ReminderSettings:
        """Return the configured reminder preferences."""
        return ReminderSettings(
            enabled=self.notifications_enabled,
            meal_reminders=self.meal_reminders,
            streak_reminders=self.streak_reminders,
            challenge_reminders=self.challenge_reminders,
            quiet_hours_start=parse_clock_time(self.quiet_hours_start, time(22, 0)),
            quiet_hours_end=parse_clock_time(self.quiet_hours_end, time(8, 0)),
        )


def parse_clock_time(raw: str | None, default: time) -> time:
    """Parse an "HH:MM" string, falling back to the default."""
    if raw is None:
        return default
    cleaned = raw.strip()
    if not cleaned:
        return default
    hour_text, _, minute_text = cleaned.partition(":")
    if not hour_text.isdigit() or (minute_text and not minute_text.isdigit()):
        return default
    hour = int(hour_text)
    minute = int(minute_text) if minute_text else 0
    if hour > 23 or minute > 59:
        return default
    return time(hour, minute)
