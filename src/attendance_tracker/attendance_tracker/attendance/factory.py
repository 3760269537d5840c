from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from ..core.constants import DEFAULT_CHECKIN_CUTOFF, DEFAULT_HALF_DAY_HOURS
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Check-in at exactly the cut-off is still on time; one second later is late.
    Check-out with fewer than `half_day_hours` worked is a half-day.
    """

    checkin_cutoff: time = field(default=DEFAULT_CHECKIN_CUTOFF)
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        if now.time() <= self.checkin_cutoff:
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, worked_hours: float) -> AttendanceStrategy:
        if worked_hours < self.half_day_hours:
            return HalfDayStrategy()
        return NormalStrategy()
