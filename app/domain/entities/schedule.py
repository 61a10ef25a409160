from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule


@dataclass(frozen=True)
class Schedule:
    """Weekly rules plus date overrides, replaced wholesale on every refetch."""

    rules: tuple[WeeklyRule, ...] = field(default_factory=tuple)
    overrides: tuple[Override, ...] = field(default_factory=tuple)
