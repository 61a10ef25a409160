from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from app.application.exceptions import InvalidScheduleError
from app.application.utils.time_range import validate_overrides, validate_rules
from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule


class WeeklyRuleDTO(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    is_open: bool
    start_time: str | None = None
    end_time: str | None = None

    def to_entity(self) -> WeeklyRule:
        return WeeklyRule(
            day_of_week=self.day_of_week,
            is_open=self.is_open,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class OverrideDTO(BaseModel):
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=1, le=12)
    is_open: bool
    start_time: str | None = None
    end_time: str | None = None

    def to_entity(self) -> Override:
        return Override(
            day=self.day,
            month=self.month,
            is_open=self.is_open,
            start_time=self.start_time,
            end_time=self.end_time,
        )


def parse_weekly_rules(payload: Any) -> list[WeeklyRule]:
    """Upstream store-times records (snake_case fields, extras like `id` ignored)."""
    if not isinstance(payload, list):
        raise InvalidScheduleError("Weekly rules payload must be a list")
    try:
        rules = [WeeklyRuleDTO.model_validate(item).to_entity() for item in payload]
    except ValidationError as e:
        raise InvalidScheduleError(f"Invalid weekly rule: {e}") from e
    validate_rules(rules)
    return rules


def parse_overrides(payload: Any) -> list[Override]:
    if not isinstance(payload, list):
        raise InvalidScheduleError("Overrides payload must be a list")
    try:
        overrides = [OverrideDTO.model_validate(item).to_entity() for item in payload]
    except ValidationError as e:
        raise InvalidScheduleError(f"Invalid override: {e}") from e
    validate_overrides(overrides)
    return overrides
