"""Tests for persisted payload models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from hunger_tracker.domain.progress import GameProgress, NutritionTargets
from hunger_tracker.schemas import (
    GameProgressPayload,
    MealRecordPayload,
    NutritionTargetsPayload,
)
from tests.conftest import make_meal


def test_meal_payload_accepts_stored_aliases() -> None:
    payload = MealRecordPayload.model_validate(
        {
            "id": "m1",
            "what": "Burrito",
            "amount": "large",
            "time": "2025-06-18T12:00:00Z",
            "nextEatAt": "2025-06-18T17:30:00Z",
            "hungerBefore": 4,
            "costCategory": "$$",
            "cost": 11.5,
            "tags": ["Takeout", "Lunch"],
        }
    )

    record = payload.to_record()

    assert record.next_eat_at == datetime(2025, 6, 18, 17, 30, tzinfo=UTC)
    assert record.hunger_before == 4
    assert record.cost_category == "$$"
    assert record.tags == frozenset({"Takeout", "Lunch"})


def test_meal_payload_treats_naive_times_as_utc() -> None:
    payload = MealRecordPayload(id="m1", what="Toast", time=datetime(2025, 6, 18, 8, 0))
    assert payload.time == datetime(2025, 6, 18, 8, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "field",
    [{"fullness": 6}, {"rating": 0}, {"cost": -1}, {"amount": "huge"}],
)
def test_meal_payload_rejects_out_of_range_values(field) -> None:
    with pytest.raises(ValidationError):
        MealRecordPayload(id="m1", what="Toast", time="2025-06-18T08:00:00Z", **field)


def test_meal_payload_dumps_by_alias(now) -> None:
    record = make_meal(now, what="Soup", hunger_before=3, tags={"Dinner", "Home-cooked"})

    dumped = MealRecordPayload.from_record(record).model_dump(by_alias=True)

    assert dumped["hungerBefore"] == 3
    assert dumped["tags"] == ["Dinner", "Home-cooked"]
    assert dumped["time"] == now


def test_targets_payload_validates_and_converts() -> None:
    targets = NutritionTargetsPayload(protein=110).to_domain()
    assert targets == NutritionTargets(calories=2000, protein=110, fiber=25, budget=20)

    with pytest.raises(ValidationError):
        NutritionTargetsPayload(budget=-5)


def test_progress_payload_round_trip_keeps_completions(now) -> None:
    progress = GameProgress(
        total_xp=750,
        completed_challenges=frozenset({"protein-power", "home-chef-week"}),
        last_updated=now,
    )

    dumped = GameProgressPayload.from_domain(progress).model_dump(by_alias=True)

    assert dumped["totalXP"] == 750
    assert dumped["completedChallenges"] == ["home-chef-week", "protein-power"]
    assert GameProgressPayload.model_validate(dumped).to_domain() == progress


def test_progress_payload_rejects_negative_xp() -> None:
    with pytest.raises(ValidationError):
        GameProgressPayload.model_validate({"totalXP": -10})
