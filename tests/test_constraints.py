from datetime import date

from availability.constraints import ConflictKind, ScheduleResolver
from helpers import TUESDAY, blocked, week_hours
from models import Break, DayHours, Location, StaffMember, Weekday


def _staff(**kwargs):
    kwargs.setdefault("id", "staff_anna")
    kwargs.setdefault("services", ["all"])
    return StaffMember(**kwargs)


def test_window_is_intersection_of_location_and_staff_hours(location):
    early_bird = _staff(working_hours=week_hours("08:00", "12:00"))
    resolver = ScheduleResolver(location, [])

    assert resolver.effective_window(early_bird, TUESDAY) == (540, 720)


def test_no_slot_outside_the_intersection_is_bookable(location):
    early_bird = _staff(working_hours=week_hours("08:00", "12:00"))
    resolver = ScheduleResolver(location, [])

    assert resolver.check(early_bird, TUESDAY, 480, 60).constraint_type == ConflictKind.HOURS
    assert resolver.is_bookable(early_bird, TUESDAY, 540, 60)
    assert resolver.is_bookable(early_bird, TUESDAY, 660, 60)
    assert not resolver.is_bookable(early_bird, TUESDAY, 675, 60)


def test_staff_without_hours_for_the_day_falls_back_to_location(location):
    member = _staff(working_hours={Weekday.MONDAY: DayHours(open="10:00", close="12:00")})
    resolver = ScheduleResolver(location, [])

    assert resolver.effective_window(member, TUESDAY) == (540, 1020)


def test_staff_day_off_closes_the_window(location):
    member = _staff(working_hours=week_hours(closed_days=(Weekday.TUESDAY,)))
    resolver = ScheduleResolver(location, [])

    assert resolver.effective_window(member, TUESDAY) is None
    violation = resolver.check(member, TUESDAY, 600, 60)
    assert violation.constraint_type == ConflictKind.HOURS
    assert "not working" in violation.reason


def test_closed_location_closes_every_window():
    shut = Location(id="loc_main", hours=week_hours(closed_days=(Weekday.TUESDAY,)))
    resolver = ScheduleResolver(shut, [])

    assert resolver.effective_window(None, TUESDAY) is None
    assert resolver.effective_window(_staff(working_hours=week_hours()), TUESDAY) is None


def test_location_window_without_staff(location):
    assert ScheduleResolver(location, []).effective_window(None, TUESDAY) == (540, 1020)


def test_span_including_buffer_must_fit_before_close(location):
    member = _staff(working_hours=week_hours())
    resolver = ScheduleResolver(location, [])

    assert resolver.is_bookable(member, TUESDAY, 960, 60)
    assert not resolver.is_bookable(member, TUESDAY, 960, 75)


def test_break_overlap_rejects_slot(location):
    member = _staff(
        working_hours=week_hours(),
        breaks=[Break(day=Weekday.TUESDAY, start="12:00", end="12:30")],
    )
    resolver = ScheduleResolver(location, [])

    violation = resolver.check(member, TUESDAY, 690, 60)
    assert violation.constraint_type == ConflictKind.BREAK
    assert resolver.is_bookable(member, TUESDAY, 750, 60)
    # Ends exactly when the break starts
    assert resolver.is_bookable(member, TUESDAY, 660, 60)


def test_break_on_another_weekday_is_ignored(location):
    member = _staff(
        working_hours=week_hours(),
        breaks=[Break(day=Weekday.MONDAY, start="12:00", end="13:00")],
    )
    assert ScheduleResolver(location, []).is_bookable(member, TUESDAY, 720, 60)


def test_blocked_range_for_all_staff(location):
    member = _staff(working_hours=week_hours())
    resolver = ScheduleResolver(location, [blocked("all", "12:00", "13:00", reason="Team training")])

    violation = resolver.check(member, TUESDAY, 700, 60)
    assert violation.constraint_type == ConflictKind.BLOCKED
    assert "Team training" in violation.reason
    assert resolver.is_bookable(member, TUESDAY, 780, 60)


def test_blocked_range_for_another_staff_member_does_not_apply(location):
    member = _staff(working_hours=week_hours())
    resolver = ScheduleResolver(location, [blocked("staff_ben", "12:00", "13:00")])

    assert resolver.is_bookable(member, TUESDAY, 720, 60)


def test_blocked_range_covers_inclusive_day_span(location):
    member = _staff(working_hours=week_hours())
    block = blocked("staff_anna", 0, 1440, start_date=date(2024, 1, 1), end_date=date(2024, 1, 2))
    resolver = ScheduleResolver(location, [block])

    assert not resolver.is_bookable(member, date(2024, 1, 1), 600, 60)
    assert not resolver.is_bookable(member, date(2024, 1, 2), 600, 60)
    assert resolver.is_bookable(member, date(2024, 1, 3), 600, 60)
