from __future__ import annotations

import logging

from app.application.ports.schedule_source import ScheduleSourcePort
from app.domain.entities.schedule import Schedule


class ScheduleService:
    """Keeps the last fetched schedule; each refresh replaces it wholesale."""

    def __init__(self, source: ScheduleSourcePort) -> None:
        self._source = source
        self._schedule: Schedule | None = None
        self._logger = logging.getLogger(__name__)

    def refresh(self) -> Schedule:
        schedule = Schedule(
            rules=tuple(self._source.get_weekly_rules()),
            overrides=tuple(self._source.get_overrides()),
        )
        self._schedule = schedule
        self._logger.info(
            "Schedule loaded",
            extra={"rule_count": len(schedule.rules), "override_count": len(schedule.overrides)},
        )
        return schedule

    def current(self) -> Schedule:
        if self._schedule is None:
            return self.refresh()
        return self._schedule
