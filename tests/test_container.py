"""Tests for container wiring."""

from hunger_tracker.containers import build_container
from tests.conftest import make_meal


def test_build_container_creates_services(
    settings,
    meal_source,
    progress_repository,
    targets_repository,
    notification_sink,
    app_logger,
) -> None:
    container = build_container(
        settings,
        meal_source=meal_source,
        progress_repository=progress_repository,
        targets_repository=targets_repository,
        notification_sink=notification_sink,
    )

    assert container.settings is settings
    assert container.targets_service.get_targets() == settings.targets()
    assert container.reminder_service.settings == settings.reminder_settings()
    assert container.insights_service.weekly_budget == 140


def test_container_services_share_storage(
    settings,
    meal_source,
    progress_repository,
    targets_repository,
    notification_sink,
    app_logger,
    now,
) -> None:
    container = build_container(
        settings,
        meal_source=meal_source,
        progress_repository=progress_repository,
        targets_repository=targets_repository,
        notification_sink=notification_sink,
    )
    meal_source.meals.append(make_meal(now, calories=2000, protein=150, fiber=25))

    container.progress_service.add_xp(600, now)
    container.targets_service.update_targets(budget=0)

    card = container.insights_service.score_card(now)
    assert [score.category for score in card.scores] == ["Calories", "Protein", "Fiber"]
    assert container.insights_service.challenge_stats(now).total_xp_earned == 600
