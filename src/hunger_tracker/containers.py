"""Dependency container wiring for the application."""

from dataclasses import dataclass

from hunger_tracker.app_logging import configure_logging
from hunger_tracker.config import Settings
from hunger_tracker.services.insights import InsightsService, MealSource
from hunger_tracker.services.progress import (
    GameProgressRepository,
    GameProgressService,
)
from hunger_tracker.services.reminders import NotificationSink, ReminderService
from hunger_tracker.services.targets import (
    NutritionTargetsRepository,
    NutritionTargetsService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    targets_service: NutritionTargetsService
    progress_service: GameProgressService
    reminder_service: ReminderService
    insights_service: InsightsService


def build_container(
    settings: Settings | None = None,
    *,
    meal_source: MealSource,
    progress_repository: GameProgressRepository,
    targets_repository: NutritionTargetsRepository,
    notification_sink: NotificationSink,
) -> AppContainer:
    """Create the dependency container around caller-provided storage."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.debug)
    targets_service = NutritionTargetsService(
        repository=targets_repository,
        defaults=resolved_settings.targets(),
    )
    progress_service = GameProgressService(progress_repository)
    reminder_service = ReminderService(
        sink=notification_sink,
        settings=resolved_settings.reminder_settings(),
    )
    insights_service = InsightsService(
        meal_source=meal_source,
        targets_service=targets_service,
        progress_service=progress_service,
        timezone_name=resolved_settings.timezone,
        weekly_budget=resolved_settings.weekly_budget,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        targets_service=targets_service,
        progress_service=progress_service,
        reminder_service=reminder_service,
        insights_service=insights_service,
    )
