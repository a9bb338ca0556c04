"""
Commit-time staff assignment and re-validation.

Slot generation works on a snapshot. Between showing a slot and writing
the booking another client can take it, so the persistence layer calls
revalidate_booking inside its own transaction (or conditional write)
right before committing.
"""

import logging
from datetime import date as date_type
from typing import List

from models import Appointment, SlotDecision, StaffMember

from .conflicts import ConflictDetector
from .errors import SlotNoLongerAvailable
from .timeutils import format_12h

logger = logging.getLogger(__name__)


class StaffAssigner:
    """
    Picks the staff member for a 'no preference' booking.

    First eligible member in snapshot order wins. There is deliberately no
    round-robin or least-recently-booked balancing.
    """

    def assign(self, slot: SlotDecision) -> StaffMember:
        if not slot.available or not slot.eligible_staff:
            raise SlotNoLongerAvailable(
                f"The {slot.time} slot is no longer available, please pick another time",
                minute=slot.minute,
            )

        member = slot.eligible_staff[0]
        if len(slot.eligible_staff) > 1:
            logger.info(
                f"Assigning {member.id} for {slot.time} "
                f"(first of {len(slot.eligible_staff)} eligible)"
            )
        else:
            logger.info(f"Auto-assigning only eligible staff {member.id} for {slot.time}")
        return member

    def assign_from(self, eligible_staff: List[StaffMember], slot_label: str = "") -> StaffMember:
        """Same policy for callers holding only the eligible list."""
        if not eligible_staff:
            raise SlotNoLongerAvailable(
                f"The {slot_label or 'selected'} slot is no longer available, please pick another time"
            )
        return eligible_staff[0]


def revalidate_booking(
    latest_appointments: List[Appointment],
    staff_id: str,
    day: date_type,
    minute: int,
    span: int,
    default_buffer: int = 0,
    exclude_appointment_id: str = None
) -> None:
    """
    Re-run the conflict predicate against freshly read appointments.
    Raises SlotNoLongerAvailable if another booking now overlaps.
    """
    detector = ConflictDetector(latest_appointments, default_buffer)
    violation = detector.find_conflict(staff_id, day, minute, span, exclude_appointment_id)
    if violation:
        logger.warning(
            f"Stale slot at commit: {staff_id} {day} {format_12h(minute)} -> {violation.reason}"
        )
        raise SlotNoLongerAvailable(
            f"The {format_12h(minute)} slot was just taken, please pick another time",
            staff_id=staff_id,
            date=day,
            minute=minute,
        )
