from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule


class ScheduleSourcePort(ABC):
    @abstractmethod
    def get_weekly_rules(self) -> list[WeeklyRule]:
        """Fetch the weekly opening rules. Raises ScheduleFetchError on failure."""
        raise NotImplementedError

    @abstractmethod
    def get_overrides(self) -> list[Override]:
        """Fetch the date-specific overrides. Raises ScheduleFetchError on failure."""
        raise NotImplementedError
