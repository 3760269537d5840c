from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Short day on checkout. Overrides LATE as well as PRESENT."""

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        raise ValueError("Half-day is only decided at check-out")

    def decide_checkout(self, *, worked_hours: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
