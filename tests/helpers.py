from datetime import date, datetime

from models import Appointment, BlockedTimeRange, DayHours, Weekday

# 2024-01-01 is a Monday, 2024-01-02 a Tuesday
TUESDAY = date(2024, 1, 2)
MONDAY_MORNING = datetime(2024, 1, 1, 8, 0)


def week_hours(open_="09:00", close="17:00", closed_days=()):
    return {
        day: DayHours(open=open_, close=close, closed=day in closed_days)
        for day in Weekday
    }


def appointment(staff_id, time, day=TUESDAY, **kwargs):
    kwargs.setdefault("id", f"apt_{staff_id}_{time}")
    return Appointment(staff_id=staff_id, date=day, time=time, **kwargs)


def blocked(staff_id, start, end, start_date=TUESDAY, end_date=TUESDAY, **kwargs):
    return BlockedTimeRange(
        staff_id=staff_id,
        start_date=start_date,
        end_date=end_date,
        start_time=start,
        end_time=end,
        **kwargs
    )
