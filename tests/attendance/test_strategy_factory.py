from datetime import datetime, time

from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory
from src.attendance_tracker.attendance_tracker.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.normal_strategy import NormalStrategy
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus


def test_factory_checkin_exactly_at_cutoff_is_on_time():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2026, 2, 4, 9, 15, 0))

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=datetime(2026, 2, 4, 9, 15, 0)).status == AttendanceStatus.PRESENT


def test_factory_checkin_one_second_after_cutoff_is_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2026, 2, 4, 9, 15, 1))

    assert isinstance(strategy, LateStrategy)


def test_factory_respects_custom_cutoff():
    factory = AttendanceStrategyFactory(checkin_cutoff=time(8, 0))

    assert isinstance(factory.for_checkin(now=datetime(2026, 2, 4, 8, 30)), LateStrategy)


def test_factory_checkout_below_threshold_is_half_day():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(worked_hours=3.99)

    assert isinstance(strategy, HalfDayStrategy)
    assert strategy.decide_checkout(worked_hours=3.99, current=AttendanceStatus.LATE).status == AttendanceStatus.HALF_DAY


def test_factory_checkout_at_threshold_keeps_status():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(worked_hours=4.0)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(worked_hours=4.0, current=AttendanceStatus.LATE).status == AttendanceStatus.LATE
