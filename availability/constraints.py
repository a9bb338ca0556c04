"""
Static schedule validation.

This module answers the binary question: "Can staff member X start at
minute Y on day Z, given only their hours, breaks and blocked time?"
Existing appointments are the ConflictDetector's job (see conflicts.py).
"""

from datetime import date as date_type
from enum import Enum
from typing import List, Optional, Tuple
from dataclasses import dataclass

from models import BlockedTimeRange, Location, StaffMember

from .timeutils import day_of_week_key, format_12h, format_24h, overlaps


class ConflictKind(str, Enum):
    HOURS = "hours"
    BREAK = "break"
    BLOCKED = "blocked"
    APPOINTMENT = "appointment"
    CAPABILITY = "capability"


@dataclass
class ConstraintViolation:
    """Detailed reason for rejection."""
    constraint_type: ConflictKind
    reason: str
    staff_id: Optional[str]
    date: date_type
    start_minute: int
    conflicting_id: Optional[str] = None  # appointment or blocked range id


class ScheduleResolver:
    """
    Validates a slot against working hours, breaks and blocked-time ranges.
    """

    def __init__(self, location: Optional[Location], blocked_times: List[BlockedTimeRange]):
        self.location = location
        self.blocked_times = blocked_times

    def check(
        self,
        staff: StaffMember,
        day: date_type,
        slot_start: int,
        span: int
    ) -> Optional[ConstraintViolation]:
        """
        Master validation function. Returns None if Valid, Violation object if Invalid.
        """
        violation = self._check_hours(staff, day, slot_start, span)
        if violation: return violation

        violation = self._check_breaks(staff, day, slot_start, span)
        if violation: return violation

        return self._check_blocked(staff, day, slot_start, span)

    def is_bookable(self, staff: StaffMember, day: date_type, slot_start: int, span: int) -> bool:
        return self.check(staff, day, slot_start, span) is None

    def effective_window(self, staff: Optional[StaffMember], day: date_type) -> Optional[Tuple[int, int]]:
        """
        (open, close) for the day, or None when closed.

        Staff hours fall back to the location's for days the staff has none,
        and are always intersected with the location's hours: nobody is
        bookable while the doors are shut.
        """
        weekday = day_of_week_key(day)

        location_hours = self.location.hours_for(weekday) if self.location else None
        if self.location and (location_hours is None or location_hours.closed):
            return None

        staff_hours = staff.hours_for(weekday) if staff else None
        if staff_hours is None:
            if location_hours is None:
                return None
            return location_hours.open, location_hours.close

        if staff_hours.closed:
            return None
        if location_hours is None:
            return staff_hours.open, staff_hours.close

        open_ = max(location_hours.open, staff_hours.open)
        close = min(location_hours.close, staff_hours.close)
        if close <= open_:
            return None
        return open_, close

    def _check_hours(self, staff: StaffMember, day: date_type, start: int, span: int) -> Optional[ConstraintViolation]:
        """Slot (buffer included) must fit ENTIRELY within the effective window."""
        name = staff.name or staff.id
        window = self.effective_window(staff, day)
        if window is None:
            return ConstraintViolation(
                ConflictKind.HOURS, f"{name} is not working on this day", staff.id, day, start
            )

        open_, close = window
        if start < open_ or start + span > close:
            return ConstraintViolation(
                ConflictKind.HOURS,
                f"{name} works {format_24h(open_)}-{format_24h(close)}; "
                f"a {span} min booking at {format_12h(start)} does not fit",
                staff.id, day, start
            )
        return None

    def _check_breaks(self, staff: StaffMember, day: date_type, start: int, span: int) -> Optional[ConstraintViolation]:
        for brk in staff.breaks_for(day_of_week_key(day)):
            if overlaps(start, start + span, brk.start, brk.end):
                return ConstraintViolation(
                    ConflictKind.BREAK,
                    f"{staff.name or staff.id} is on a break {format_12h(brk.start)}-{format_12h(brk.end)}",
                    staff.id, day, start
                )
        return None

    def _check_blocked(self, staff: StaffMember, day: date_type, start: int, span: int) -> Optional[ConstraintViolation]:
        for block in self.blocked_times:
            if not block.applies_to(staff.id) or not block.covers(day):
                continue
            if overlaps(start, start + span, block.start_time, block.end_time):
                label = block.reason or "Blocked time"
                return ConstraintViolation(
                    ConflictKind.BLOCKED,
                    f"{label} {format_12h(block.start_time)}-{format_12h(block.end_time)}",
                    staff.id, day, start,
                    conflicting_id=block.id or None
                )
        return None
