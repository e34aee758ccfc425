"""Nutrition targets service."""

from dataclasses import dataclass, replace
from typing import Protocol

from hunger_tracker.domain.progress import NutritionTargets


class NutritionTargetsRepository(Protocol):
    """Persistence interface for nutrition targets."""

    def load(self) -> NutritionTargets | None:
        """Return stored targets, if any."""

    def save(self, targets: NutritionTargets) -> None:
        """Persist targets."""


@dataclass
class NutritionTargetsService:
    """Service for reading and editing daily targets."""

    repository: NutritionTargetsRepository
    defaults: NutritionTargets = NutritionTargets()

    def get_targets(self) -> NutritionTargets:
        """Return stored targets or the defaults when unset."""
        return self.repository.load() or self.defaults

    def update_targets(
        self,
        *,
        calories: float | None = None,
        protein: float | None = None,
        fiber: float | None = None,
        budget: float | None = None,
    ) -> NutritionTargets:
        """Update the given targets, keeping the rest."""
        changes = {
            name: value
            for name, value in (
                ("calories", calories),
                ("protein", protein),
                ("fiber", fiber),
                ("budget", budget),
            )
            if value is not None
        }
        for name, value in changes.items():
            if value < 0:
                raise ValueError(f"Target {name} must not be negative")
        updated = replace(self.get_targets(), **changes)
        self.repository.save(updated)
        return updated

    def reset_targets(self) -> NutritionTargets:
        """Restore the default targets."""
        self.repository.save(self.defaults)
        return self.defaults

    def is_customized(self) -> bool:
        """Return True when targets have been stored."""
        return self.repository.load() is not None
