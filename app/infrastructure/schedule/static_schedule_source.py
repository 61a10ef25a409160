from __future__ import annotations

from app.application.ports.schedule_source import ScheduleSourcePort
from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule

# Mon-Fri 09:00-18:00, Saturday 10:00-16:00, closed Sunday; closed on Christmas and New Year.
DEFAULT_WEEKLY_RULES: tuple[WeeklyRule, ...] = (
    WeeklyRule(day_of_week=0, is_open=False, start_time="00:00", end_time="00:00"),
    *(WeeklyRule(day_of_week=d, is_open=True, start_time="09:00", end_time="18:00") for d in range(1, 6)),
    WeeklyRule(day_of_week=6, is_open=True, start_time="10:00", end_time="16:00"),
)

DEFAULT_OVERRIDES: tuple[Override, ...] = (
    Override(day=25, month=12, is_open=False, start_time="00:00", end_time="00:00"),
    Override(day=1, month=1, is_open=False, start_time="00:00", end_time="00:00"),
    Override(day=31, month=12, is_open=True, start_time="09:00", end_time="14:00"),
)


class StaticScheduleSource(ScheduleSourcePort):
    def __init__(
        self,
        rules: list[WeeklyRule] | tuple[WeeklyRule, ...] | None = None,
        overrides: list[Override] | tuple[Override, ...] | None = None,
    ) -> None:
        self._rules = list(DEFAULT_WEEKLY_RULES if rules is None else rules)
        self._overrides = list(DEFAULT_OVERRIDES if overrides is None else overrides)

    def get_weekly_rules(self) -> list[WeeklyRule]:
        return list(self._rules)

    def get_overrides(self) -> list[Override]:
        return list(self._overrides)
